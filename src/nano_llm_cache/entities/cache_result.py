"""Cache query result domain entity."""

from dataclasses import dataclass

from .cache_entry import CacheEntryEntity


@dataclass(frozen=True)
class CacheQueryResult:
    """Outcome of a cache lookup.

    ``similarity`` is None only when no candidate was scored (empty store or
    a failed lookup). A miss against a non-empty store still carries the best
    similarity observed, so callers can diagnose near misses.

    Attributes:
        hit: Whether a stored entry met the similarity threshold
        response: The cached response on a hit
        similarity: Best cosine similarity observed, if any candidate existed
        entry: The matched entry on a hit
    """

    hit: bool
    response: str | None = None
    similarity: float | None = None
    entry: CacheEntryEntity | None = None

    @classmethod
    def miss(cls, similarity: float | None = None) -> "CacheQueryResult":
        return cls(hit=False, similarity=similarity)

    @classmethod
    def from_match(cls, entry: CacheEntryEntity, similarity: float) -> "CacheQueryResult":
        return cls(hit=True, response=entry.response, similarity=similarity, entry=entry)
