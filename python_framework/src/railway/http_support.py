"""
HTTP integration — ErrorCode→HTTP status mapping and response builders.

Framework-agnostic core plus a FastAPI adapter.

Usage (standalone):
    status = HttpStatusMapper.map_error_code(ErrorCode.UNEXPECTED_TAG)  # → 422

Usage (FastAPI):
    from railway.http_support import build_fastapi_response
    return build_fastapi_response(result.map(CertificateInfo.as_dict))
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Optional, TypeVar

from fastapi.responses import JSONResponse

from railway.failure import ErrorCode, FailureDescription
from railway.result import Result

T = TypeVar("T")


# ──────────────────────── Error Code → HTTP Status Mapping ────────────────────────


class HttpStatusMapper:
    """Maps ErrorCode enum values to HTTP status codes."""

    _CODE_TO_STATUS: dict[ErrorCode, int] = {
        # Unreadable armor (400)
        ErrorCode.MISSING_PEM_MARKERS: 400,
        ErrorCode.BASE64_DECODE_ERROR: 400,
        # Well-formed request, malformed certificate (422)
        ErrorCode.UNEXPECTED_EOF: 422,
        ErrorCode.LENGTH_TOO_LONG: 422,
        ErrorCode.INDEFINITE_LENGTH: 422,
        ErrorCode.TRUNCATED_OID: 422,
        ErrorCode.UNSUPPORTED_TIME_FORMAT: 422,
        ErrorCode.UNEXPECTED_TAG: 422,
        # Hosting
        ErrorCode.INPUT_TOO_LARGE: 413,
        ErrorCode.UNKNOWN_ERROR: 500,
    }

    @classmethod
    def map_error_code(cls, code: ErrorCode) -> int:
        """Map an ErrorCode to an HTTP status code."""
        return cls._CODE_TO_STATUS.get(code, 500)

    @classmethod
    def map_failure(cls, failure: FailureDescription) -> int:
        """Map a FailureDescription to an HTTP status code."""
        return cls.map_error_code(failure.code)


# ──────────────────────── Error Response DTO ────────────────────────


@dataclass(frozen=True, slots=True)
class ErrorResponse:
    """
    Standardized error response body.

        {
            "error_code": "UNEXPECTED_TAG",
            "message": "Expected tag 0x02, found 0x30",
            "offset": 15,
            "stage": "serial_number"
        }
    """

    error_code: str
    message: str
    offset: Optional[int]
    stage: Optional[str]

    @staticmethod
    def from_failure(failure: FailureDescription) -> ErrorResponse:
        return ErrorResponse(
            error_code=failure.code.value,
            message=failure.message,
            offset=failure.offset,
            stage=failure.stage,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# ──────────────────────── Generic Response Builder ────────────────────────


def build_response(
    result: Result[T],
    success_status: int = 200,
) -> tuple[Any, int]:
    """
    Build a (body, status_code) tuple from a Result.

        body, status = build_response(result.map(CertificateInfo.as_dict))
    """
    return result.either(
        on_success=lambda value: (value, success_status),
        on_failure=lambda error: (
            ErrorResponse.from_failure(error).to_dict(),
            HttpStatusMapper.map_failure(error),
        ),
    )


# ──────────────────────── FastAPI Adapter ────────────────────────


def build_fastapi_response(
    result: Result[T],
    success_status: int = 200,
) -> JSONResponse:
    """
    Build a FastAPI JSONResponse from a Result.

        @app.post("/decode")
        def decode(request: DecodeRequest) -> JSONResponse:
            return build_fastapi_response(decode_pem(request.pem).map(CertificateInfo.as_dict))
    """
    body, status = build_response(result, success_status)
    return JSONResponse(content=body, status_code=status)
