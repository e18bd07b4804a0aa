"""
Local model backend capability probe.

Discovers what an Ollama-compatible server supports by trial calls:
reachability, installed models and which embeddings endpoint answers.
Probing never raises; failures are reported in the result.

Dependencies: httpx, pydantic
System role: Setup diagnostics for the model backend
"""

import logging

import httpx
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

EMBEDDING_PROBE_PATHS = (
    ("/api/embeddings", "prompt"),
    ("/api/embed", "input"),
)


class ModelBackendStatus(BaseModel):
    """Probe result for the local model backend."""

    reachable: bool = False
    models: list[str] = Field(default_factory=list)
    model_available: bool = False
    chat_model_available: bool | None = None
    embeddings_endpoint: str | None = None
    error: str | None = None

    @property
    def ready(self) -> bool:
        # None means answers come from a non-local provider
        return (
            self.reachable
            and self.model_available
            and self.chat_model_available is not False
            and self.error is None
        )


class OllamaProbe:
    """
    Trial-call prober; shares the embedding provider's HTTP client settings.

    chat_model is checked against the installed tags only when answers are
    generated by the same backend.
    """

    def __init__(self, client: httpx.AsyncClient, model: str, chat_model: str | None = None) -> None:
        self._client = client
        self._model = model
        self._chat_model = chat_model

    async def probe(self) -> ModelBackendStatus:
        """
        Run all trial calls in order.

        Returns:
            ModelBackendStatus: What the backend supports; never raises
        """
        status = ModelBackendStatus()

        try:
            response = await self._client.get("/")
            status.reachable = response.status_code < 500
        except httpx.HTTPError as e:
            status.error = f"Model backend unreachable: {type(e).__name__}: {e}"
            logger.warning(f"{__name__}:probe - {status.error}")
            return status

        try:
            response = await self._client.get("/api/tags")
            response.raise_for_status()
            status.models = [m.get("name", "") for m in response.json().get("models", [])]
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            logger.warning(f"{__name__}:probe - Could not list models: {e}")

        status.model_available = _installed(self._model, status.models)
        if self._chat_model is not None:
            status.chat_model_available = _installed(self._chat_model, status.models)

        for path, field in EMBEDDING_PROBE_PATHS:
            try:
                response = await self._client.post(path, json={"model": self._model, field: "test"})
            except httpx.HTTPError as e:
                logger.warning(f"{__name__}:probe - {path} failed: {e}")
                continue
            if response.is_success:
                status.embeddings_endpoint = path
                break
            logger.info(f"{__name__}:probe - {path} returned {response.status_code}")

        logger.info(
            f"{__name__}:probe - reachable={status.reachable}, models={len(status.models)}, "
            f"model_available={status.model_available}, "
            f"chat_model_available={status.chat_model_available}, embeddings={status.embeddings_endpoint}"
        )
        return status


def _installed(model: str, tags: list[str]) -> bool:
    # Tags are reported as "llama2:latest"; an untagged name matches any tag
    return any(name == model or name.split(":")[0] == model for name in tags)
