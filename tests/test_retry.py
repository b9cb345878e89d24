import pytest

from conftest import RecordedSleep
from job_spec_engine.agents.retry import RetryPolicy, RetryState, run_with_retry
from job_spec_engine.errors import SearchSpecGenerationError


class Flaky:
    """Fails the first `failures` calls, then returns the attempt number."""

    def __init__(self, failures: int) -> None:
        self.failures = failures
        self.attempts = []

    async def __call__(self, attempt: int) -> int:
        self.attempts.append(attempt)
        if len(self.attempts) <= self.failures:
            raise RuntimeError(f"boom {attempt}")
        return attempt


def test_delays_double_each_attempt():
    policy = RetryPolicy(max_attempts=4, base_delay_seconds=1.0)
    assert [policy.delay_for(n) for n in (1, 2, 3)] == [1.0, 2.0, 4.0]


def test_from_max_retries_counts_the_first_attempt():
    assert RetryPolicy.from_max_retries(2).max_attempts == 3
    assert RetryPolicy.from_max_retries(0).max_attempts == 1


@pytest.mark.parametrize("kwargs", [{"max_attempts": 0}, {"base_delay_seconds": -1}])
def test_invalid_policy_rejected(kwargs):
    with pytest.raises(ValueError):
        RetryPolicy(**kwargs)


@pytest.mark.asyncio
async def test_success_on_first_attempt_never_sleeps():
    sleep = RecordedSleep()
    state = RetryState()
    result = await run_with_retry(Flaky(0), RetryPolicy(sleep=sleep), state=state)
    assert result == 1
    assert sleep.delays == []
    assert state.succeeded is True
    assert state.attempt == 1


@pytest.mark.asyncio
async def test_recovers_after_failures():
    sleep = RecordedSleep()
    operation = Flaky(2)
    state = RetryState()
    result = await run_with_retry(operation, RetryPolicy(max_attempts=3, sleep=sleep), state=state)
    assert result == 3
    assert operation.attempts == [1, 2, 3]
    assert sleep.delays == [1.0, 2.0]
    assert state.delays == [1.0, 2.0]
    assert isinstance(state.last_error, RuntimeError)


@pytest.mark.asyncio
async def test_exhaustion_raises_with_last_error():
    sleep = RecordedSleep()
    operation = Flaky(10)
    with pytest.raises(SearchSpecGenerationError) as exc_info:
        await run_with_retry(operation, RetryPolicy(max_attempts=3, base_delay_seconds=0.5, sleep=sleep))
    err = exc_info.value
    assert err.attempts == 3
    assert str(err.last_error) == "boom 3"
    assert "failed after 3 attempts" in str(err)
    assert isinstance(err.__cause__, RuntimeError)
    # no sleep after the final attempt
    assert sleep.delays == [0.5, 1.0]


@pytest.mark.asyncio
async def test_single_attempt_policy():
    sleep = RecordedSleep()
    with pytest.raises(SearchSpecGenerationError) as exc_info:
        await run_with_retry(Flaky(1), RetryPolicy(max_attempts=1, sleep=sleep))
    assert exc_info.value.attempts == 1
    assert sleep.delays == []
