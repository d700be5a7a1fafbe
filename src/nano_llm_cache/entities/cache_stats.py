"""Cache statistics domain entity."""

from collections.abc import Iterable
from dataclasses import dataclass

from .cache_entry import CacheEntryEntity


@dataclass(frozen=True)
class CacheStatsEntity:
    """Aggregate view over the entries in one namespace.

    Attributes:
        total_entries: Number of stored entries
        oldest_entry: Smallest entry timestamp (epoch ms), None when empty
        newest_entry: Largest entry timestamp (epoch ms), None when empty
    """

    total_entries: int
    oldest_entry: int | None = None
    newest_entry: int | None = None

    @classmethod
    def from_entries(cls, entries: Iterable[CacheEntryEntity]) -> "CacheStatsEntity":
        timestamps = [entry.timestamp for entry in entries]
        if not timestamps:
            return cls(total_entries=0)
        return cls(
            total_entries=len(timestamps),
            oldest_entry=min(timestamps),
            newest_entry=max(timestamps),
        )

    def to_dict(self) -> dict[str, int | None]:
        """Convert stats to dictionary."""
        return {
            "total_entries": self.total_entries,
            "oldest_entry": self.oldest_entry,
            "newest_entry": self.newest_entry,
        }
