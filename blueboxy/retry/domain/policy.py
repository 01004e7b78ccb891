"""RetryPolicy value object and the named presets callers pick from."""

import math
import random

from pydantic import BaseModel, Field, field_validator

from blueboxy.remote.domain.error_kind import ErrorKind
from blueboxy.remote.domain.errors import RemoteCallError


class RetryPolicy(BaseModel, frozen=True):
    """Decides whether a failed attempt is retried and how long to wait first.

    Pure: no I/O, no shared state. The only randomness is the optional jitter,
    sampled once per ``delay_before_next_attempt`` call.
    """

    max_attempts: int = Field(ge=1)
    base_delay_seconds: float = Field(ge=0.0)
    backoff_multiplier: float = Field(gt=1.0)
    max_delay_seconds: float = Field(ge=0.0)
    retryable_kinds: frozenset[ErrorKind] = frozenset()
    jitter_fraction: float = Field(default=0.0, ge=0.0, lt=1.0)

    @field_validator("retryable_kinds")
    @classmethod
    def _only_inherently_retryable(
        cls, kinds: frozenset[ErrorKind]
    ) -> frozenset[ErrorKind]:
        never = sorted(kind.value for kind in kinds if not kind.inherently_retryable)
        if never:
            raise ValueError(f"error kinds can never be retried: {', '.join(never)}")
        return kinds

    def should_retry(self, error: RemoteCallError, attempt_number: int) -> bool:
        """True iff attempts remain and the error's kind is retryable here."""
        if attempt_number >= self.max_attempts:
            return False
        return error.kind in self.retryable_kinds

    def delay_before_next_attempt(self, attempt_number: int) -> float:
        """Exponential backoff delay in seconds after ``attempt_number`` failed."""
        if attempt_number < 1:
            return 0.0
        computed = self._capped_backoff(exponent=attempt_number - 1)
        if self.jitter_fraction > 0.0:
            computed *= random.uniform(1.0 - self.jitter_fraction, 1.0 + self.jitter_fraction)
        return computed

    def _capped_backoff(self, exponent: int) -> float:
        # Compared in log space so the power is only evaluated below the cap.
        base = self.base_delay_seconds
        cap = self.max_delay_seconds
        if base >= cap:
            return cap
        if base == 0.0:
            return 0.0
        if exponent * math.log(self.backoff_multiplier) >= math.log(cap / base):
            return cap
        return min(base * self.backoff_multiplier**exponent, cap)

    def delay_for(self, error: RemoteCallError, attempt_number: int) -> float:
        """The delay to await before retrying after ``error``.

        A server-suggested Retry-After on a rate-limited response takes
        precedence over the computed backoff.
        """
        if error.kind is ErrorKind.RATE_LIMITED and error.retry_after_seconds is not None:
            return max(0.0, error.retry_after_seconds)
        return self.delay_before_next_attempt(attempt_number)

    def schedule(self) -> list[float]:
        """Un-jittered delays between consecutive attempts, for display."""
        plain = self.model_copy(update={"jitter_fraction": 0.0})
        return [
            plain.delay_before_next_attempt(n) for n in range(1, self.max_attempts)
        ]


_TRANSIENT = frozenset(
    {
        ErrorKind.CONNECTIVITY,
        ErrorKind.SERVER_ERROR,
        ErrorKind.RATE_LIMITED,
        ErrorKind.UNKNOWN,
    }
)

DEFAULT_POLICY = RetryPolicy(
    max_attempts=3,
    base_delay_seconds=0.4,
    backoff_multiplier=2.0,
    max_delay_seconds=5.0,
    retryable_kinds=_TRANSIENT,
)

# More attempts, shorter first delay, tighter cap.
AGGRESSIVE_POLICY = RetryPolicy(
    max_attempts=5,
    base_delay_seconds=0.2,
    backoff_multiplier=2.0,
    max_delay_seconds=2.0,
    retryable_kinds=_TRANSIENT,
)

CONSERVATIVE_POLICY = RetryPolicy(
    max_attempts=2,
    base_delay_seconds=0.2,
    backoff_multiplier=2.0,
    max_delay_seconds=2.0,
    retryable_kinds=frozenset({ErrorKind.CONNECTIVITY, ErrorKind.SERVER_ERROR}),
)

FAIL_FAST_POLICY = RetryPolicy(
    max_attempts=1,
    base_delay_seconds=0.0,
    backoff_multiplier=2.0,
    max_delay_seconds=0.0,
)

PRESETS: dict[str, RetryPolicy] = {
    "default": DEFAULT_POLICY,
    "aggressive": AGGRESSIVE_POLICY,
    "conservative": CONSERVATIVE_POLICY,
    "fail_fast": FAIL_FAST_POLICY,
}
