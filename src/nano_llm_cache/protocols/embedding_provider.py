"""Embedding provider protocol.

Defines the interface for any embedding generation service that can
convert text to vector embeddings.

Implementations can include:
- sentence-transformers (local, default)
- Ollama embeddings (local HTTP API)
- Any other service returning fixed-length float vectors
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class EmbeddingProvider(Protocol):
    """Protocol for embedding generation services.

    Initialization is lazy and idempotent: the first ``generate`` call loads
    the model, and concurrent callers during that load share the same
    in-flight initialization. ``unload`` releases the model and the next
    ``generate`` loads it again.
    """

    @property
    def model_name(self) -> str:
        """Return the name/identifier of the model."""
        ...

    async def generate(self, text: str) -> list[float]:
        """Generate the embedding vector for a single text.

        Args:
            text: The text to encode

        Returns:
            The embedding vector as a list of floats (fixed length per model)

        Raises:
            EmbeddingError: If the model cannot be loaded or inference fails
        """
        ...

    async def unload(self) -> None:
        """Release the model so the next call re-initializes it."""
        ...

    def is_loaded(self) -> bool:
        """Return True if the model is currently initialized."""
        ...
