"""
Convenience factory methods for common Result failures.

Eliminates boilerplate for the decode errors raised at many call sites,
and keeps their messages and structured details uniform.

Usage:
    from railway.result_failures import ResultFailures

    # Instead of:
    Result.failure_from(FailureDescription.create(
        ErrorCode.UNEXPECTED_TAG, "Expected tag 0x30, found 0x31",
        offset=4, expected=0x30, actual=0x31,
    ))

    # Write:
    ResultFailures.unexpected_tag(expected=0x30, actual=0x31, offset=4)
"""

from __future__ import annotations

from railway.failure import ErrorCode, FailureDescription
from railway.result import Result


class ResultFailures:
    """Factory methods for the decoder's failure types."""

    @staticmethod
    def missing_pem_markers(marker: str) -> Result:
        """PEM armor line not found in the input text."""
        return Result.failure_from(
            FailureDescription.create(
                ErrorCode.MISSING_PEM_MARKERS,
                f"Missing PEM marker: {marker}",
                marker=marker,
            )
        )

    @staticmethod
    def base64_error(message: str, exception: BaseException | None = None) -> Result:
        """Armored body is not valid base64."""
        return Result.failure(ErrorCode.BASE64_DECODE_ERROR, message, exception)

    @staticmethod
    def unexpected_eof(offset: int, needed: int, available: int) -> Result:
        """A read of `needed` bytes at `offset` would run past the end."""
        return Result.failure_from(
            FailureDescription.create(
                ErrorCode.UNEXPECTED_EOF,
                f"Need {needed} byte(s) but only {available} remain",
                offset=offset,
                needed=needed,
                available=available,
            )
        )

    @staticmethod
    def length_too_long(offset: int, octets: int, limit: int) -> Result:
        """Long-form length uses more octets than the decoder supports."""
        return Result.failure_from(
            FailureDescription.create(
                ErrorCode.LENGTH_TOO_LONG,
                f"Length field uses {octets} octets, at most {limit} supported",
                offset=offset,
                octets=octets,
                limit=limit,
            )
        )

    @staticmethod
    def indefinite_length(offset: int) -> Result:
        """BER indefinite length, never valid in DER."""
        return Result.failure_from(
            FailureDescription.create(
                ErrorCode.INDEFINITE_LENGTH,
                "Indefinite-length encoding is not allowed in DER",
                offset=offset,
            )
        )

    @staticmethod
    def truncated_oid(offset: int | None, length: int) -> Result:
        """OBJECT IDENTIFIER content ends inside an arc (or is empty)."""
        return Result.failure_from(
            FailureDescription.create(
                ErrorCode.TRUNCATED_OID,
                f"Object identifier of {length} byte(s) ends mid-arc",
                offset=offset,
                length=length,
            )
        )

    @staticmethod
    def unsupported_time_format(tag: int, length: int, reason: str = "") -> Result:
        """Time TLV does not have a UTCTime/GeneralizedTime shape."""
        suffix = f": {reason}" if reason else ""
        return Result.failure_from(
            FailureDescription.create(
                ErrorCode.UNSUPPORTED_TIME_FORMAT,
                f"Unsupported time format: tag=0x{tag:02x}, length={length}{suffix}",
                tag=tag,
                length=length,
            )
        )

    @staticmethod
    def unexpected_tag(expected: int, actual: int, offset: int) -> Result:
        """Grammar required `expected` at `offset` but found `actual`."""
        return Result.failure_from(
            FailureDescription.create(
                ErrorCode.UNEXPECTED_TAG,
                f"Expected tag 0x{expected:02x}, found 0x{actual:02x}",
                offset=offset,
                expected=expected,
                actual=actual,
            )
        )

    @staticmethod
    def input_too_large(size: int, limit: int) -> Result:
        """Submitted document is larger than the configured limit."""
        return Result.failure_from(
            FailureDescription.create(
                ErrorCode.INPUT_TOO_LARGE,
                f"Input of {size} bytes exceeds the {limit} byte limit",
                size=size,
                limit=limit,
            )
        )

    @staticmethod
    def from_exception(message: str, exception: BaseException) -> Result:
        """Wrap an unexpected exception caught at an execution boundary."""
        return Result.failure(ErrorCode.UNKNOWN_ERROR, message, exception)
