"""
LLM boundary module.
"""

from docqa.boundary.llm.chat_backend import ChatBackend, LangChainChatBackend, build_chat_model
from docqa.boundary.llm.ollama_probe import ModelBackendStatus, OllamaProbe

__all__ = [
    "ChatBackend",
    "LangChainChatBackend",
    "ModelBackendStatus",
    "OllamaProbe",
    "build_chat_model",
]
