"""Local sentence-transformers embedding provider.

This is the default embedding provider, using sentence-transformers
models running locally. No API calls required.
"""

import asyncio
import logging

from sentence_transformers import SentenceTransformer

from nano_llm_cache.config import settings
from nano_llm_cache.embeddings import LazyModel
from nano_llm_cache.errors import EmbeddingError
from nano_llm_cache.similarity import to_list

logger = logging.getLogger(__name__)


class LocalEmbeddingProvider:
    """Local sentence-transformers implementation of EmbeddingProvider.

    This class satisfies the EmbeddingProvider protocol through structural
    typing - no explicit inheritance needed.

    Embeddings are mean-pooled and L2-normalized.
    Default model: sentence-transformers/all-MiniLM-L6-v2 (384 dimensions)

    Model loading and inference run in a worker thread so they do not block
    the event loop.
    """

    def __init__(self, model_name: str | None = None, debug: bool = False) -> None:
        """Initialize the local embedding provider.

        Args:
            model_name: Name of the sentence-transformers model.
                       Defaults to settings.embedding_model.
            debug: Log model loading and embedding sizes.
        """
        self._model_name = model_name or settings.embedding_model
        self._debug = debug
        self._model = LazyModel(self._model_name, self._load_model, debug=debug)

    @classmethod
    def create(cls, model_name: str | None = None, debug: bool = False) -> "LocalEmbeddingProvider":
        """Factory method to create LocalEmbeddingProvider with defaults.

        Args:
            model_name: Model name. If None, uses settings.
            debug: Enable debug logging.

        Returns:
            Configured LocalEmbeddingProvider
        """
        return cls(model_name=model_name, debug=debug)

    async def _load_model(self) -> SentenceTransformer:
        return await asyncio.to_thread(SentenceTransformer, self._model_name)

    @property
    def model_name(self) -> str:
        """Get the model name/identifier."""
        return self._model_name

    async def generate(self, text: str) -> list[float]:
        """Generate embedding vector for a single text.

        Args:
            text: The text to encode

        Returns:
            The embedding vector as a list of floats

        Raises:
            EmbeddingError: If the model cannot be loaded or encoding fails
        """
        model = await self._model.get()
        try:
            embedding = await asyncio.to_thread(
                model.encode,
                text,
                show_progress_bar=False,
                normalize_embeddings=True,
            )
        except Exception as e:
            raise EmbeddingError(f"Failed to generate embedding: {e}") from e

        vector = to_list(embedding)
        if self._debug:
            logger.info("Generated embedding of length %d", len(vector))
        return vector

    async def generate_batch(self, texts: list[str], batch_size: int = 32) -> list[list[float]]:
        """Generate embeddings for multiple texts efficiently.

        Args:
            texts: List of texts to encode
            batch_size: Batch size for encoding

        Returns:
            List of embedding vectors
        """
        model = await self._model.get()
        try:
            embeddings = await asyncio.to_thread(
                model.encode,
                texts,
                batch_size=batch_size,
                show_progress_bar=False,
                normalize_embeddings=True,
            )
        except Exception as e:
            raise EmbeddingError(f"Failed to generate embeddings: {e}") from e
        return [to_list(row) for row in embeddings]

    async def unload(self) -> None:
        """Drop the loaded model so its memory can be reclaimed."""
        self._model.unload()

    def is_loaded(self) -> bool:
        return self._model.is_loaded()
