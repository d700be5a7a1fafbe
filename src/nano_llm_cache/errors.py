"""Exception taxonomy for the semantic cache.

- InvalidInputError: contract violation by the caller (e.g. vectors of
  different lengths, out-of-range configuration). Never masked.
- EmbeddingError: the embedding provider failed to load or infer.
- StorageError: the entry store failed to read, write or delete.
"""


class NanoCacheError(Exception):
    """Base class for all cache errors."""


class InvalidInputError(NanoCacheError, ValueError):
    """Raised when a caller violates an input contract."""


class EmbeddingError(NanoCacheError):
    """Raised when an embedding cannot be produced."""


class StorageError(NanoCacheError):
    """Raised when the entry store is unavailable or rejects an operation."""
