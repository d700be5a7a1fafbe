"""Vector similarity helpers.

Cosine similarity here is clamped to [0, 1]. True cosine similarity ranges
over [-1, 1], but the cache never reports negative similarity: anticorrelated
prompts are treated the same as unrelated ones (0.0). The upper clamp absorbs
floating-point overshoot for near-identical vectors.
"""

from collections.abc import Iterable, Sequence

import numpy as np

from nano_llm_cache.errors import InvalidInputError


def calculate_similarity(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    """Calculate the cosine similarity between two vectors.

    Args:
        vec_a: First vector
        vec_b: Second vector, same length as ``vec_a``

    Returns:
        Similarity in [0, 1]. 0.0 for empty or zero-magnitude input.

    Raises:
        InvalidInputError: If the vectors have different lengths
    """
    a = np.asarray(vec_a, dtype=np.float64)
    b = np.asarray(vec_b, dtype=np.float64)

    if a.shape != b.shape:
        raise InvalidInputError(
            f"Vectors must have the same length, got {a.size} and {b.size}"
        )

    if a.size == 0:
        return 0.0

    dot_product = float(np.dot(a, b))
    magnitude_a = float(np.sqrt(np.dot(a, a)))
    magnitude_b = float(np.sqrt(np.dot(b, b)))

    if magnitude_a == 0 or magnitude_b == 0:
        return 0.0

    similarity = dot_product / (magnitude_a * magnitude_b)
    return max(0.0, min(1.0, similarity))


def normalize_vector(vec: Sequence[float]) -> list[float]:
    """Scale a vector to unit length.

    A zero vector is returned unchanged.
    """
    arr = np.asarray(vec, dtype=np.float64)
    magnitude = float(np.sqrt(np.dot(arr, arr)))

    if magnitude == 0:
        return list(vec)

    return (arr / magnitude).tolist()


def to_list(values: Iterable[float] | np.ndarray) -> list[float]:
    """Convert an array-like (numpy array, tensor output, tuple) to a list of floats."""
    if isinstance(values, np.ndarray):
        return values.astype(np.float64).ravel().tolist()
    return [float(v) for v in values]
