"""Cache entry domain entity."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for a cached prompt-response pair.

    Entries are never updated in place: saving the same prompt again writes
    a replacement entry under the same key.

    Attributes:
        prompt: The original user prompt
        embedding: The embedding vector for the prompt
        response: The cached LLM response
        timestamp: Creation time in epoch milliseconds
        metadata: Optional passthrough data (e.g., model used), never interpreted
    """

    prompt: str
    embedding: tuple[float, ...]
    response: str
    timestamp: int
    metadata: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        # Accept any sequence but store an immutable tuple
        if not isinstance(self.embedding, tuple):
            object.__setattr__(self, "embedding", tuple(float(v) for v in self.embedding))

    def age(self, now: int) -> int:
        """Age of the entry in milliseconds at ``now``."""
        return now - self.timestamp

    def is_expired(self, now: int, max_age: int) -> bool:
        """Whether the entry has reached ``max_age`` ms (0 = never expires)."""
        return max_age > 0 and self.age(now) >= max_age
