"""
Tests for cache configuration.
"""

import pytest

from nano_llm_cache.config import DEFAULT_MODEL_NAME, DEFAULT_STORAGE_PREFIX, CacheConfig, Settings
from nano_llm_cache.errors import InvalidInputError


def test_defaults():
    config = CacheConfig()
    assert config.similarity_threshold == 0.95
    assert config.max_age == 0
    assert config.model_name == DEFAULT_MODEL_NAME
    assert config.debug is False
    assert config.storage_prefix == DEFAULT_STORAGE_PREFIX
    assert config.expires is False


@pytest.mark.parametrize("threshold", [-0.1, 1.01])
def test_threshold_out_of_range(threshold):
    with pytest.raises(InvalidInputError):
        CacheConfig(similarity_threshold=threshold)


def test_negative_max_age():
    with pytest.raises(InvalidInputError):
        CacheConfig(max_age=-1)


def test_empty_prefix():
    with pytest.raises(InvalidInputError):
        CacheConfig(storage_prefix="")


def test_create_honors_explicit_falsy_values():
    config = CacheConfig.create(similarity_threshold=0.0, max_age=0, debug=False)
    assert config.similarity_threshold == 0.0
    assert config.max_age == 0
    assert config.debug is False


def test_create_overrides():
    config = CacheConfig.create(similarity_threshold=0.8, max_age=60_000, storage_prefix="docs")
    assert config.similarity_threshold == 0.8
    assert config.expires is True
    assert config.storage_prefix == "docs"


def test_config_is_immutable():
    config = CacheConfig()
    with pytest.raises(AttributeError):
        config.similarity_threshold = 0.5


def test_settings_validation():
    with pytest.raises(ValueError):
        Settings(similarity_threshold=2.0)
    with pytest.raises(ValueError):
        Settings(max_age=-5)
