"""Utility modules for the semantic cache."""

from .hashing import hash_prompt

__all__ = ["hash_prompt"]
