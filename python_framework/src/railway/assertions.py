"""
Test assertions for Result values.

Expressive assert helpers that produce clear failure messages when a
decode unexpectedly succeeds, fails, or fails in the wrong place.

Usage in tests:
    from railway import ResultAssertions

    def test_decode_root():
        info = ResultAssertions.assert_success(decoder.decode(der))
        assert info.version == 3

    def test_truncated():
        ResultAssertions.assert_failure(decoder.decode(der[:10]), ErrorCode.UNEXPECTED_EOF)
"""

from __future__ import annotations

from typing import Any, TypeVar

from railway.failure import ErrorCode, FailureDescription
from railway.result import Result

T = TypeVar("T")


class ResultAssertions:
    """Expressive test assertions for Result values."""

    @staticmethod
    def assert_success(result: Result[T], message: str = "") -> T:
        """
        Assert the Result is a Success and return the value.

            info = ResultAssertions.assert_success(result)
        """
        context = f" — {message}" if message else ""
        assert result.is_success(), (
            f"Expected Success but got Failure("
            f"{result.error().code.value}: {result.error().message!r}){context}"
        )
        return result.value()

    @staticmethod
    def assert_failure(
        result: Result[T],
        expected_code: ErrorCode | None = None,
        message: str = "",
    ) -> FailureDescription:
        """
        Assert the Result is a Failure, optionally checking the error code.

            error = ResultAssertions.assert_failure(result, ErrorCode.UNEXPECTED_TAG)
        """
        context = f" — {message}" if message else ""
        assert result.is_failure(), (
            f"Expected Failure but got Success({result.value()!r}){context}"
        )
        error = result.error()
        if expected_code is not None:
            assert error.code == expected_code, (
                f"Expected error code {expected_code.value} "
                f"but got {error.code.value}: {error.message!r}{context}"
            )
        return error

    @staticmethod
    def assert_failure_at(
        result: Result[T],
        expected_code: ErrorCode,
        offset: int,
        stage: str | None = None,
    ) -> FailureDescription:
        """Assert a Failure with the given code at the given byte offset (and stage)."""
        error = ResultAssertions.assert_failure(result, expected_code)
        assert error.offset == offset, (
            f"Expected {expected_code.value} at offset {offset} but got offset {error.offset}"
        )
        if stage is not None:
            assert error.stage == stage, (
                f"Expected failure in stage {stage!r} but got {error.stage!r}"
            )
        return error

    @staticmethod
    def assert_failure_message_contains(result: Result[T], substring: str) -> None:
        """Assert that the failure message contains the given substring."""
        assert result.is_failure(), (
            f"Expected Failure but got Success({result.value()!r})"
        )
        error = result.error()
        assert substring.lower() in error.message.lower(), (
            f"Expected failure message to contain {substring!r} "
            f"but message was: {error.message!r}"
        )

    @staticmethod
    def assert_success_value(result: Result[T], expected_value: Any) -> None:
        """Assert the Result is a Success with the specific value."""
        value = ResultAssertions.assert_success(result)
        assert value == expected_value, (
            f"Expected success value {expected_value!r} but got {value!r}"
        )
