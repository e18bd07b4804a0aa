"""
Embedding strategies against an Ollama-compatible model backend.

Four network strategies, tried in this order by the provider:
dedicated embeddings endpoint, alternate embed endpoint, chat completion
asked to emit a float array, and raw generation asked for the same.
Each returns the backend's native-length vector or raises.

Dependencies: httpx, tenacity
System role: Network access for the embedding cascade
"""

import logging
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from docqa.configs.embedding import EmbeddingSettings
from docqa.core.embeddings.response_parser import (
    EmbeddingResponseParser,
    extract_vector_from_text,
)
from docqa.core.exceptions import EmbeddingError, EmbeddingParseError

logger = logging.getLogger(__name__)


def vector_instruction(length: int) -> str:
    """System instruction asking a chat model for a raw float array."""
    return (
        "You are an embedding generator. Generate a JSON array of "
        f"{length} floating point numbers between -1 and 1 that represents "
        "the semantic meaning of the input text. Respond with ONLY the JSON "
        "array, no explanation."
    )


class OllamaEmbeddingStrategies:
    """
    Network embedding strategies sharing one HTTP client.

    Transport errors (connection refused, timeouts) are retried with
    exponential jitter up to ``max_attempts``; HTTP status and parse
    errors fail the strategy immediately.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: EmbeddingSettings,
        parser: EmbeddingResponseParser | None = None,
    ) -> None:
        self._client = client
        self._model = settings.model
        self._max_attempts = settings.max_attempts
        self._vector_length = settings.llm_vector_length
        self._parser = parser or EmbeddingResponseParser()

    async def _post_json(self, path: str, payload: dict[str, Any]) -> Any:
        """
        POST a JSON payload with retry on transport errors.

        Raises:
            httpx.HTTPStatusError: Non-2xx response
            httpx.TransportError: After max attempts exhausted
            EmbeddingParseError: Body is not JSON
        """
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(httpx.TransportError),
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential_jitter(initial=0.5, max=5, jitter=1),
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:_post_json - Retry {retry_state.attempt_number}/"
                f"{self._max_attempts} for {path}"
            ),
            reraise=True,
        ):
            with attempt:
                response = await self._client.post(path, json=payload)
                response.raise_for_status()

        try:
            return response.json()
        except ValueError as e:
            raise EmbeddingParseError(
                f"Response from {path} is not JSON",
                {"body_preview": response.text[:100]},
            ) from e

    async def embeddings_endpoint(self, text: str) -> list[float]:
        """Dedicated endpoint: POST /api/embeddings {model, prompt}."""
        payload = await self._post_json(
            "/api/embeddings", {"model": self._model, "prompt": text}
        )
        return self._parser.parse(payload)

    async def embed_endpoint(self, text: str) -> list[float]:
        """Alternate endpoint: POST /api/embed {model, input}."""
        payload = await self._post_json(
            "/api/embed", {"model": self._model, "input": text}
        )
        return self._parser.parse(payload)

    async def chat_endpoint(self, text: str) -> list[float]:
        """Chat completion asked to emit a float array."""
        payload = await self._post_json(
            "/api/chat",
            {
                "model": self._model,
                "messages": [
                    {"role": "system", "content": vector_instruction(self._vector_length)},
                    {"role": "user", "content": text},
                ],
                "stream": False,
                "options": {"temperature": 0},
            },
        )
        try:
            content = payload["message"]["content"]
        except (KeyError, TypeError) as e:
            raise EmbeddingError("Chat response has no message content") from e
        return extract_vector_from_text(content)

    async def generate_endpoint(self, text: str) -> list[float]:
        """Raw generation asked to emit a float array."""
        prompt = f"{vector_instruction(self._vector_length)}\n\nText: {text}\n\nArray:"
        payload = await self._post_json(
            "/api/generate",
            {
                "model": self._model,
                "prompt": prompt,
                "stream": False,
                "options": {"temperature": 0},
            },
        )
        try:
            content = payload["response"]
        except (KeyError, TypeError) as e:
            raise EmbeddingError("Generate response has no 'response' field") from e
        return extract_vector_from_text(content)
