"""
Tests for cosine similarity and vector normalization.
"""

import math

import numpy as np
import pytest

from nano_llm_cache.errors import InvalidInputError
from nano_llm_cache.similarity import calculate_similarity, normalize_vector, to_list


def test_identical_vectors():
    """A non-zero vector is perfectly similar to itself."""
    v = [1.0, 2.0, 3.0, 4.0]
    assert calculate_similarity(v, v) == pytest.approx(1.0)


def test_scaled_vectors_are_identical_in_direction():
    assert calculate_similarity([1.0, 2.0], [10.0, 20.0]) == pytest.approx(1.0)


def test_orthogonal_vectors():
    assert calculate_similarity([1.0, 0.0, 0.0, 0.0], [0.0, 1.0, 0.0, 0.0]) == 0.0


def test_reversed_vectors_partial_similarity():
    """[1,2,3,4] vs [4,3,2,1] has cosine 20/30."""
    assert calculate_similarity([1, 2, 3, 4], [4, 3, 2, 1]) == pytest.approx(20 / 30)


def test_zero_vector_returns_zero():
    assert calculate_similarity([0.0, 0.0, 0.0], [1.0, 2.0, 3.0]) == 0.0
    assert calculate_similarity([1.0, 2.0, 3.0], [0.0, 0.0, 0.0]) == 0.0


def test_empty_vectors_return_zero():
    assert calculate_similarity([], []) == 0.0


def test_mismatched_lengths_raise():
    with pytest.raises(InvalidInputError):
        calculate_similarity([1.0, 2.0], [1.0, 2.0, 3.0])


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError):
        calculate_similarity([1.0], [])


def test_negative_correlation_clamped_to_zero():
    """Opposite vectors would have cosine -1; the cache reports 0."""
    assert calculate_similarity([1.0, 1.0], [-1.0, -1.0]) == 0.0


def test_symmetric():
    a = [0.12, -0.44, 0.88, 0.23]
    b = [0.13, -0.43, 0.89, 0.24]
    assert calculate_similarity(a, b) == calculate_similarity(b, a)


def test_result_within_unit_interval():
    rng = np.random.default_rng(42)
    for _ in range(50):
        a = rng.normal(size=16).tolist()
        b = rng.normal(size=16).tolist()
        result = calculate_similarity(a, b)
        assert 0.0 <= result <= 1.0


def test_engineered_similarity():
    """Unit vectors at a known angle produce that cosine."""
    target = 0.98
    a = [1.0, 0.0]
    b = [target, math.sqrt(1 - target**2)]
    assert calculate_similarity(a, b) == pytest.approx(target)


def test_accepts_numpy_arrays():
    assert calculate_similarity(np.array([1.0, 0.0]), np.array([3.0, 4.0])) == pytest.approx(0.6)


def test_normalize_vector_unit_length():
    result = normalize_vector([3.0, 4.0])
    assert result == pytest.approx([0.6, 0.8])
    assert math.sqrt(sum(x * x for x in result)) == pytest.approx(1.0)


def test_normalize_zero_vector_unchanged():
    assert normalize_vector([0.0, 0.0, 0.0]) == [0.0, 0.0, 0.0]


def test_to_list_converts_array_likes():
    assert to_list(np.array([1, 2, 3], dtype=np.float32)) == [1.0, 2.0, 3.0]
    assert to_list((1, 2)) == [1.0, 2.0]
