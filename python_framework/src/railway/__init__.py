"""
Railway-Oriented Programming (ROP) Framework for Python.

Explicit, composable, functional error handling — no exceptions in decoding logic.

    from railway import Result, ErrorCode

    def require_sequence(tag: int) -> Result[int]:
        if tag != 0x30:
            return Result.failure(ErrorCode.UNEXPECTED_TAG, "Expected SEQUENCE")
        return Result.success(tag)

    result = (
        Result.success(b"\\x30\\x03\\x02\\x01\\x05")
        .flat_map(lambda der: require_sequence(der[0]))
        .map(lambda tag: f"constructed tag 0x{tag:02x}")
    )
"""

from railway.result import Result, Success, Failure
from railway.failure import ErrorCode, FailureDescription
from railway.execution import (
    ExecutionContext,
    NoOpExecutionContext,
    LoggingExecutionContext,
)
from railway.result_failures import ResultFailures
from railway.assertions import ResultAssertions

__all__ = [
    "Result",
    "Success",
    "Failure",
    "ErrorCode",
    "FailureDescription",
    "ExecutionContext",
    "NoOpExecutionContext",
    "LoggingExecutionContext",
    "ResultFailures",
    "ResultAssertions",
]

__version__ = "1.1.0"
