"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (Chat)  -> (Business) -> (Data Access)

Usage:
    ```python
    from nano_llm_cache.services import CacheService

    # Using factory method (recommended)
    cache = CacheService.create()
    cache = CacheService.create(similarity_threshold=0.9, max_age=3_600_000)

    # Or manual creation
    cache = CacheService(store=store, embedding_provider=provider)
    ```
"""

from .cache_service import CacheService

__all__ = [
    "CacheService",
]
