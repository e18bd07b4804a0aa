"""
Chat completion backend.

The answer synthesizer depends only on the ChatBackend protocol.
LangChainChatBackend runs a ``prompt | model | StrOutputParser`` chain
with a hard timeout; build_chat_model picks the LangChain chat model for
the configured provider.

Dependencies: langchain_core, langchain_ollama, langchain_google_genai
System role: LLM access for answer generation
"""

import asyncio
import logging
from typing import Protocol, runtime_checkable

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate

from docqa.configs.llm import LLMSettings

logger = logging.getLogger(__name__)


@runtime_checkable
class ChatBackend(Protocol):
    """Consumed interface: produce an answer string or raise."""

    async def generate(self, system_prompt: str, context: str, question: str) -> str: ...


def build_chat_model(settings: LLMSettings) -> BaseChatModel:
    """
    Create the LangChain chat model for the configured provider.

    Provider packages are imported on demand so only the selected one has
    to be importable at runtime.

    Args:
        settings: LLM settings

    Returns:
        BaseChatModel: ChatOllama or ChatGoogleGenerativeAI

    Raises:
        ValueError: Unknown provider
    """
    if settings.provider == "ollama":
        from langchain_ollama import ChatOllama

        return ChatOllama(
            model=settings.model,
            base_url=settings.base_url,
            temperature=settings.temperature,
        )

    if settings.provider == "google":
        from langchain_google_genai import ChatGoogleGenerativeAI

        return ChatGoogleGenerativeAI(
            model=settings.model,
            temperature=settings.temperature,
        )

    raise ValueError(f"Unsupported LLM provider: {settings.provider}")


class LangChainChatBackend:
    """ChatBackend implemented as a LangChain runnable chain."""

    def __init__(
        self,
        model: BaseChatModel,
        prompt: ChatPromptTemplate,
        timeout_seconds: float = 60.0,
    ) -> None:
        """
        Initialize backend.

        Args:
            model: LangChain chat model
            prompt: Template with system_prompt, context and question variables
            timeout_seconds: Upper bound for one generation
        """
        self._chain = prompt | model | StrOutputParser()
        self._timeout = timeout_seconds

    async def generate(self, system_prompt: str, context: str, question: str) -> str:
        """
        Generate an answer.

        Raises:
            asyncio.TimeoutError: Generation exceeded the timeout
            Exception: Any model or transport error, propagated as-is
        """
        logger.debug(f"{__name__}:generate - Invoking chain ({len(context)} context chars)")
        return await asyncio.wait_for(
            self._chain.ainvoke({
                "system_prompt": system_prompt,
                "context": context,
                "question": question,
            }),
            timeout=self._timeout,
        )
