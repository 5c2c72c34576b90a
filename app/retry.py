import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from app.config.settings import Settings
from app.logging.logger import Log

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Attempts and exponential backoff applied to provider transport calls.

    max_attempts=1 means a single call with no retry.
    """

    max_attempts: int = 1
    backoff_seconds: float = 1.0
    backoff_multiplier: float = 2.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.backoff_seconds < 0:
            raise ValueError("backoff_seconds must not be negative")

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        return cls(
            max_attempts=settings.provider_max_attempts,
            backoff_seconds=settings.provider_backoff_seconds,
            backoff_multiplier=settings.provider_backoff_multiplier,
        )

    def delay_for(self, attempt: int) -> float:
        """Delay before the retry that follows `attempt` (1-indexed)."""
        return self.backoff_seconds * self.backoff_multiplier ** max(attempt - 1, 0)

    def call(
        self,
        fn: Callable[[], T],
        *,
        retry_on: tuple[type[BaseException], ...],
        description: str = "provider call",
    ) -> T:
        """Run `fn`, retrying on the given exception types until attempts run out."""
        attempt = 1
        while True:
            try:
                return fn()
            except retry_on as exc:
                if attempt >= self.max_attempts:
                    raise
                delay = self.delay_for(attempt)
                Log.warning(
                    f"{description} failed (attempt {attempt}/{self.max_attempts}), "
                    f"retrying in {delay:.1f}s: {exc}"
                )
                time.sleep(delay)
                attempt += 1
