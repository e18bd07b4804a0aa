"""
Answer generation prompt.

System instruction confining the model to the retrieved context, and the
chat template the LangChain backend renders it with.

Dependencies: langchain_core.prompts
System role: Prompt template for grounded document answers
"""

from langchain_core.prompts import ChatPromptTemplate

NO_INFORMATION_ANSWER = "I don't have enough information to answer this question."

SYSTEM_PROMPT = (
    "You are a helpful assistant that answers questions based on the provided "
    "document content. Only use information from the provided context. Do not "
    "make up facts or draw on outside knowledge. If you don't know the answer "
    f'based on the context, say "{NO_INFORMATION_ANSWER}" Be concise and accurate.'
)

HUMAN_TEMPLATE = """Context:
{context}

Question: {question}

Answer the question based only on the provided context. Include specific details from the context."""

ANSWER_PROMPT = ChatPromptTemplate.from_messages([
    ("system", "{system_prompt}"),
    ("human", HUMAN_TEMPLATE),
])


def build_context(contents: list[str]) -> str:
    """Join chunk contents with blank lines."""
    return "\n\n".join(contents)
