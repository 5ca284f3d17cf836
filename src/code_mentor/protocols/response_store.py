"""Response store protocol.

Defines the interface for any key-value store that keeps mentor responses
for a bounded time.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ResponseStore(Protocol):
    """Protocol for TTL-bounded response storage.

    Implementations must be safe under concurrent access. No atomicity is
    required across a get-then-set pair.
    """

    def get(self, key: str) -> str | None:
        """Return the stored value if it is still fresh.

        Args:
            key: The idempotency key

        Returns:
            The cached value, or None when absent or expired
        """
        ...

    def set(self, key: str, value: str) -> None:
        """Store or overwrite a value with a fresh insertion time.

        Args:
            key: The idempotency key
            value: The mentor text to keep
        """
        ...

    def purge_expired(self) -> int:
        """Remove every expired entry.

        Returns:
            Number of entries removed
        """
        ...
