from careers.core.result import Failure, Success, collect_results, failure, success
from careers.domain.errors import InvalidRange, StoreUnavailable


def test_success_unwraps():
    result = success(2)
    assert isinstance(result, Success)
    assert result.is_success() and not result.is_failure()
    assert result.unwrap() == 2


def test_failure_unwrap_raises_runtime_error_for_payloads():
    result = failure(StoreUnavailable("Availability.save", "disk full"))
    assert isinstance(result, Failure)
    assert result.is_failure() and not result.is_success()
    try:
        result.unwrap()
    except RuntimeError as exc:
        assert "disk full" in str(exc)
    else:  # pragma: no cover
        raise AssertionError("unwrap() on Failure must raise")


def test_collect_results_returns_first_failure():
    first = InvalidRange(1, "startTime must be before endTime")
    second = InvalidRange(2, "timezone is required")
    collected = collect_results([success("a"), failure(first), failure(second)])
    assert collected.is_failure()
    assert collected.error is first


def test_collect_results_keeps_order():
    assert collect_results([success(1), success(2), success(3)]).unwrap() == [1, 2, 3]


def test_failure_codes_and_retryability():
    assert StoreUnavailable("op", "boom").retryable is True
    assert InvalidRange(0, "bad").retryable is False
    assert InvalidRange(0, "bad").code == "InvalidRange"
