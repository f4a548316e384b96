"""
Failure description — structured error information for the failure track.

An ErrorCode enum names WHAT went wrong; FailureDescription adds WHERE
(byte offset, decode stage) and the structured details a caller needs
to render a precise message for malformed input.

Enum + frozen dataclass gives us __eq__, __repr__ for free, and Enum
members are singleton-comparable with `is`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, unique
from typing import Any, Mapping, Optional


@unique
class ErrorCode(Enum):
    """
    Structured error codes for the failure track.

    Organized by the layer that detects them:
    - Armor: MISSING_PEM_MARKERS, BASE64_DECODE_ERROR
    - DER structure: UNEXPECTED_EOF, LENGTH_TOO_LONG, INDEFINITE_LENGTH,
      TRUNCATED_OID, UNSUPPORTED_TIME_FORMAT, UNEXPECTED_TAG
    - Hosting: INPUT_TOO_LARGE, UNKNOWN_ERROR
    """

    # --- PEM armor ---
    MISSING_PEM_MARKERS = "MISSING_PEM_MARKERS"
    """Input lacks the BEGIN/END CERTIFICATE lines."""

    BASE64_DECODE_ERROR = "BASE64_DECODE_ERROR"
    """Text between the markers is not valid base64."""

    # --- DER structure ---
    UNEXPECTED_EOF = "UNEXPECTED_EOF"
    """A TLV header or value read would run past the end of the buffer."""

    LENGTH_TOO_LONG = "LENGTH_TOO_LONG"
    """Long-form length field uses more octets than supported."""

    INDEFINITE_LENGTH = "INDEFINITE_LENGTH"
    """BER indefinite-length encoding (0x80), forbidden in DER."""

    TRUNCATED_OID = "TRUNCATED_OID"
    """OBJECT IDENTIFIER value ends in the middle of an arc."""

    UNSUPPORTED_TIME_FORMAT = "UNSUPPORTED_TIME_FORMAT"
    """Time TLV is neither a UTCTime nor a GeneralizedTime of known shape."""

    UNEXPECTED_TAG = "UNEXPECTED_TAG"
    """Tag at a fixed grammar position is not the one the grammar requires."""

    # --- Hosting ---
    INPUT_TOO_LARGE = "INPUT_TOO_LARGE"
    """Submitted document exceeds the configured size limit."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    """Unexpected/unclassified failures caught at an execution boundary."""


@dataclass(frozen=True, slots=True)
class FailureDescription:
    """
    Immutable failure descriptor: code, message, location and details.

    >>> desc = FailureDescription(ErrorCode.UNEXPECTED_EOF, "Need 2 bytes", offset=7)
    >>> desc.code
    <ErrorCode.UNEXPECTED_EOF: 'UNEXPECTED_EOF'>
    >>> desc.offset
    7
    """

    code: ErrorCode
    message: str
    offset: Optional[int] = None
    stage: Optional[str] = None
    details: Mapping[str, Any] = field(default_factory=dict, hash=False)
    exception: Optional[BaseException] = field(default=None, repr=False, compare=False)

    @staticmethod
    def create(
        code: ErrorCode,
        message: str,
        offset: Optional[int] = None,
        **details: Any,
    ) -> FailureDescription:
        """Factory taking structured details as keyword arguments."""
        return FailureDescription(code=code, message=message, offset=offset, details=details)

    def in_stage(self, stage: str) -> FailureDescription:
        """
        Tag the failure with the stage that produced it.

        The innermost stage wins: an already-tagged failure is returned unchanged.
        """
        if self.stage is not None:
            return self
        return replace(self, stage=stage)

    def at_offset(self, offset: int) -> FailureDescription:
        """Attach a byte offset unless the failure already carries one."""
        if self.offset is not None:
            return self
        return replace(self, offset=offset)

    def describe(self) -> str:
        """One-line human-readable summary, e.g. for logs and error bodies."""
        where = f" at offset {self.offset}" if self.offset is not None else ""
        stage = f" while reading {self.stage}" if self.stage else ""
        return f"{self.code.value}{where}{stage}: {self.message}"
