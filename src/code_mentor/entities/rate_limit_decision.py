"""Rate limit admission result."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of one admission check for a client.

    Attributes:
        allowed: Whether the request may proceed
        limit: Admissions allowed per window
        remaining: Admissions left in the current window
        reset_after: Seconds until the oldest in-window admission expires
    """

    allowed: bool
    limit: int
    remaining: int
    reset_after: float

    @property
    def retry_after(self) -> float:
        """Seconds a denied client should wait; 0 when admitted."""
        return 0.0 if self.allowed else self.reset_after
