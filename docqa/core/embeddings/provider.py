"""
Embedding provider.

Runs the embedding cascade and guarantees a vector of the store dimension
for every input: network strategies are resized to D, the hashing
fallback produces D natively, and total failure yields the null vector.
Callers never see an exception.

Dependencies: httpx, docqa.core.fallback
System role: Text-to-vector conversion for ingestion and retrieval
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

import httpx

from docqa.configs.embedding import EmbeddingSettings
from docqa.core.embeddings.hashing import pseudo_embedding
from docqa.core.embeddings.resize import resize_embedding
from docqa.core.embeddings.strategies import OllamaEmbeddingStrategies
from docqa.core.fallback import FallbackExhaustedError, NamedStrategy, first_success

logger = logging.getLogger(__name__)

HASHING_STRATEGY = "hashing"


class EmbeddingProvider:
    """
    Cascade-backed embedding provider.

    Owns one httpx.AsyncClient for the model backend unless a client is
    injected; call aclose() on shutdown.
    """

    def __init__(
        self,
        settings: EmbeddingSettings,
        dimension: int,
        client: httpx.AsyncClient | None = None,
        strategies: Sequence[NamedStrategy[str, list[float]]] | None = None,
    ) -> None:
        """
        Initialize provider.

        Args:
            settings: Embedding backend settings
            dimension: Store-wide embedding dimension D
            client: Optional HTTP client (tests pass one with MockTransport)
            strategies: Optional full cascade override, used as given
        """
        self._settings = settings
        self._dimension = dimension
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=settings.base_url,
            timeout=settings.timeout_seconds,
        )

        if strategies is not None:
            self._strategies = list(strategies)
        else:
            self._strategies = self._default_strategies()

        logger.info(
            f"{__name__}:__init__ - Embedding cascade ready: "
            f"{[s.name for s in self._strategies]} (dimension={dimension})"
        )

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def strategy_names(self) -> list[str]:
        return [s.name for s in self._strategies]

    def _resized(
        self, func: Callable[[str], Awaitable[list[float]]]
    ) -> Callable[[str], Awaitable[list[float]]]:
        async def wrapper(text: str) -> list[float]:
            return resize_embedding(await func(text), self._dimension)

        return wrapper

    async def _hash(self, text: str) -> list[float]:
        return pseudo_embedding(
            text,
            self._dimension,
            top_words=self._settings.hash_top_words,
            positions_per_word=self._settings.hash_positions_per_word,
        )

    def _default_strategies(self) -> list[NamedStrategy[str, list[float]]]:
        network = OllamaEmbeddingStrategies(self._client, self._settings)
        return [
            NamedStrategy("embeddings_endpoint", self._resized(network.embeddings_endpoint)),
            NamedStrategy("embed_endpoint", self._resized(network.embed_endpoint)),
            NamedStrategy("chat_endpoint", self._resized(network.chat_endpoint)),
            NamedStrategy("generate_endpoint", self._resized(network.generate_endpoint)),
            NamedStrategy(HASHING_STRATEGY, self._hash),
        ]

    async def embed_one(self, text: str) -> list[float]:
        """
        Embed a single text.

        Args:
            text: Text to embed (may be empty)

        Returns:
            list[float]: Exactly D floats; all zeros when every strategy failed
        """
        try:
            result = await first_success(self._strategies, text)
        except FallbackExhaustedError as e:
            logger.error(
                f"{__name__}:embed_one - All embedding strategies failed, "
                f"returning null vector: {e}"
            )
            return [0.0] * self._dimension

        if result.strategy == HASHING_STRATEGY and result.failures:
            logger.warning(
                f"{__name__}:embed_one - Using hashing fallback after "
                f"{len(result.failures)} backend failures"
            )
        else:
            logger.debug(f"{__name__}:embed_one - Embedded via {result.strategy}")

        vector = result.value
        if len(vector) != self._dimension:
            vector = resize_embedding(vector, self._dimension) if vector else [0.0] * self._dimension
        return vector

    async def embed_many(
        self,
        texts: Sequence[str],
        concurrency: int = 1,
    ) -> list[list[float]]:
        """
        Embed texts one request each, preserving input order.

        Args:
            texts: Texts to embed
            concurrency: Maximum embeddings in flight

        Returns:
            list[list[float]]: One D-length vector per text
        """
        if concurrency <= 1:
            return [await self.embed_one(text) for text in texts]

        semaphore = asyncio.Semaphore(concurrency)

        async def bounded(text: str) -> list[float]:
            async with semaphore:
                return await self.embed_one(text)

        return list(await asyncio.gather(*(bounded(text) for text in texts)))

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_client:
            await self._client.aclose()
