"""Cache entry domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for a cached mentor response.

    Entries are replaced, never updated in place.

    Attributes:
        key: Idempotency key derived from the request
        value: The mentor text returned by the model
        inserted_at: Clock reading when the entry was stored (seconds)
    """

    key: str
    value: str
    inserted_at: float

    def age(self, now: float) -> float:
        return now - self.inserted_at

    def is_fresh(self, now: float, ttl: float) -> bool:
        """True while the entry is strictly younger than ttl."""
        return self.age(now) < ttl
