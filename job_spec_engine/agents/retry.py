"""
Bounded retry with exponential backoff, as an explicit state machine.

attempt 1 -> fail -> sleep(base) -> attempt 2 -> fail -> sleep(base * 2) -> ...
until max_attempts is reached, then SearchSpecGenerationError carrying the
last failure. The sleep function is injected so tests can record delays.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional, TypeVar

from job_spec_engine.errors import SearchSpecGenerationError
from job_spec_engine.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

SleepFn = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    base_delay_seconds: float = 1.0
    sleep: SleepFn = asyncio.sleep

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay_seconds < 0:
            raise ValueError("base_delay_seconds must be non-negative")

    @classmethod
    def from_max_retries(cls, max_retries: int, base_delay_seconds: float = 1.0, sleep: SleepFn = asyncio.sleep) -> "RetryPolicy":
        return cls(max_attempts=max_retries + 1, base_delay_seconds=base_delay_seconds, sleep=sleep)

    def delay_for(self, attempt: int) -> float:
        """Delay after failed attempt number `attempt` (1-based)."""
        return self.base_delay_seconds * (2 ** (attempt - 1))


@dataclass
class RetryState:
    """Inspectable progress of one retry run."""

    attempt: int = 0
    last_error: Optional[BaseException] = None
    delays: List[float] = field(default_factory=list)
    succeeded: bool = False


async def run_with_retry(
    operation: Callable[[int], Awaitable[T]],
    policy: RetryPolicy,
    label: str = "operation",
    state: Optional[RetryState] = None,
) -> T:
    """
    Call `operation(attempt)` until it returns or attempts run out.
    Any exception counts as a failed attempt.
    """
    state = state if state is not None else RetryState()
    while state.attempt < policy.max_attempts:
        state.attempt += 1
        try:
            result = await operation(state.attempt)
        except Exception as e:
            state.last_error = e
            logger.warning(
                "%s attempt %s/%s failed: %s",
                label,
                state.attempt,
                policy.max_attempts,
                e,
            )
            if state.attempt >= policy.max_attempts:
                break
            delay = policy.delay_for(state.attempt)
            state.delays.append(delay)
            logger.info("Retrying %s in %.1fs", label, delay)
            await policy.sleep(delay)
            continue
        state.succeeded = True
        return result

    logger.error("%s failed after %s attempts: %s", label, state.attempt, state.last_error)
    raise SearchSpecGenerationError(state.attempt, state.last_error) from state.last_error
