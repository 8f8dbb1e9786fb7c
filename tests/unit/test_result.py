"""
Unit tests for the Result type used for best-effort collection.

Covers construction, failure peeks, exception capture and the default track.
"""

from __future__ import annotations

import pytest

from trust_bundle.result import ErrorCode, Failure, FailureDescription, Result, Success


class TestConstruction:
    def test_success_wraps_value(self) -> None:
        result = Result.success([b"cert"])
        assert result.is_success()
        assert result.value() == [b"cert"]

    def test_success_rejects_none(self) -> None:
        with pytest.raises(TypeError):
            Success(None)

    def test_failure_carries_code_and_message(self) -> None:
        result = Result.failure(ErrorCode.FILESYSTEM_ERROR, "denied")
        assert result.is_failure()
        assert result.error().code is ErrorCode.FILESYSTEM_ERROR
        assert result.error().message == "denied"

    def test_value_on_failure_raises(self) -> None:
        with pytest.raises(ValueError, match="denied"):
            Result.failure(ErrorCode.FILESYSTEM_ERROR, "denied").value()

    def test_error_on_success_raises(self) -> None:
        with pytest.raises(ValueError):
            Result.success(1).error()

    def test_bool_reflects_track(self) -> None:
        assert Result.success(0)
        assert not Result.failure(ErrorCode.UNKNOWN_ERROR, "x")

    def test_equality_ignores_exception_and_timestamp(self) -> None:
        a = Result.failure(ErrorCode.TRUST_STORE_ERROR, "boom", RuntimeError("a"))
        b = Result.failure(ErrorCode.TRUST_STORE_ERROR, "boom", OSError("b"))
        assert a == b
        assert Success([1]) == Success([1])


class TestSideEffects:
    def test_peek_failure_runs_on_failure_track_only(self) -> None:
        seen: list[object] = []
        Result.success("ok").peek_failure(seen.append)
        failure = Result.failure(ErrorCode.UNKNOWN_ERROR, "x")
        returned = failure.peek_failure(lambda err: seen.append(err.code))
        assert seen == [ErrorCode.UNKNOWN_ERROR]
        assert returned is failure


class TestRecovery:
    def test_get_or_else(self) -> None:
        assert Result.success([1]).get_or_else([]) == [1]
        assert Result.failure(ErrorCode.UNKNOWN_ERROR, "x").get_or_else([]) == []


class TestFromComputation:
    def test_captures_return_value(self) -> None:
        result = Result.from_computation(lambda: 42, ErrorCode.UNKNOWN_ERROR, "never")
        assert result == Success(42)

    def test_captures_exception(self) -> None:
        def boom() -> int:
            raise PermissionError("denied")

        result = Result.from_computation(boom, ErrorCode.FILESYSTEM_ERROR, "stat failed")

        assert isinstance(result, Failure)
        error = result.error()
        assert error.code is ErrorCode.FILESYSTEM_ERROR
        assert isinstance(error.exception, PermissionError)
        assert error.message == "stat failed"


class TestFailureDescription:
    def test_defaults_without_exception(self) -> None:
        desc = FailureDescription(ErrorCode.CONFIGURATION_ERROR, "bad path")
        assert desc.exception is None
        assert desc.timestamp.tzinfo is not None
        assert "exception" not in repr(desc)
