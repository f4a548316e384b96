"""
DER cursor — bounded, forward-only reader of Tag-Length-Value elements.

A DerCursor walks an immutable buffer between a start offset and an end
bound. Every read is checked against the bound and returns a Result, so a
malformed or truncated certificate can never raise IndexError or loop:

    cursor = DerCursor(der)
    cursor.expect(Tag.SEQUENCE)          # → Success(TlvHeader(tag=0x30, ...))
          .map(cursor.enter)             # → Success(child cursor over the value)

`enter()` hands the value span of a header to a child cursor and moves the
parent past the whole element, so unread trailing fields inside a SEQUENCE
are skipped without extra bookkeeping. Child cursors share the parent's
buffer, so every offset reported in a failure is absolute.

Only single-octet tags are supported (every tag X.509 uses fits in one);
the tag octet is compared as a whole, class and constructed bit included.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum
from typing import TypeVar

from railway.result import Result
from railway.result_failures import ResultFailures

from cert_decoder.domain.models import TlvHeader

T = TypeVar("T")

MAX_LENGTH_OCTETS = 4
"""Long-form lengths wider than this fail with LENGTH_TOO_LONG."""


class Tag(IntEnum):
    """Identifier octets the certificate grammar refers to."""

    BOOLEAN = 0x01
    INTEGER = 0x02
    BIT_STRING = 0x03
    OCTET_STRING = 0x04
    OBJECT_IDENTIFIER = 0x06
    UTC_TIME = 0x17
    GENERALIZED_TIME = 0x18
    SEQUENCE = 0x30
    SET = 0x31
    CONTEXT_0 = 0xA0
    CONTEXT_3 = 0xA3


class DerCursor:
    """Reader over `data[offset:end]`; see the module docstring."""

    __slots__ = ("_data", "_offset", "_end")

    def __init__(self, data: bytes | memoryview, offset: int = 0, end: int | None = None) -> None:
        self._data = memoryview(data)
        self._offset = offset
        self._end = len(self._data) if end is None else end

    def __repr__(self) -> str:
        return f"DerCursor(offset={self._offset}, end={self._end})"

    # ──────────────────────── Position ────────────────────────

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def end(self) -> int:
        return self._end

    @property
    def remaining(self) -> int:
        return self._end - self._offset

    @property
    def at_end(self) -> bool:
        return self._offset >= self._end

    def peek_byte(self) -> int | None:
        """The next octet without consuming it, or None at the end bound."""
        if self.at_end:
            return None
        return self._data[self._offset]

    # ──────────────────────── Headers ────────────────────────

    def read_tlv(self) -> Result[TlvHeader]:
        """
        Read the identifier and length octets at the current offset.

        On success the cursor sits on the first value octet and the declared
        value is known to fit inside the end bound. On failure the cursor
        does not move.
        """
        start = self._offset
        if start >= self._end:
            return ResultFailures.unexpected_eof(start, needed=1, available=0)
        tag = self._data[start]
        return self._decode_length(start + 1).flat_map(
            lambda decoded: self._admit(tag, start, *decoded)
        )

    def expect(self, tag: int) -> Result[TlvHeader]:
        """Read a header, failing with UNEXPECTED_TAG unless it carries `tag`."""
        actual = self.peek_byte()
        if actual is None:
            return ResultFailures.unexpected_eof(self._offset, needed=1, available=0)
        if actual != tag:
            return ResultFailures.unexpected_tag(expected=tag, actual=actual, offset=self._offset)
        return self.read_tlv()

    def _decode_length(self, position: int) -> Result[tuple[int, int]]:
        """Decode the length octets at `position` into (length, value_start)."""
        if position >= self._end:
            return ResultFailures.unexpected_eof(position, needed=1, available=0)
        first = self._data[position]
        if first < 0x80:
            return Result.success((first, position + 1))

        count = first & 0x7F
        if count == 0:
            return ResultFailures.indefinite_length(position)
        if count > MAX_LENGTH_OCTETS:
            return ResultFailures.length_too_long(position, octets=count, limit=MAX_LENGTH_OCTETS)

        octets_start = position + 1
        available = self._end - octets_start
        if count > available:
            return ResultFailures.unexpected_eof(octets_start, needed=count, available=available)
        octets = self._data[octets_start : octets_start + count]
        return Result.success((int.from_bytes(octets, "big"), octets_start + count))

    def _admit(self, tag: int, start: int, length: int, value_start: int) -> Result[TlvHeader]:
        available = self._end - value_start
        if length > available:
            return ResultFailures.unexpected_eof(value_start, needed=length, available=available)
        self._offset = value_start
        return Result.success(
            TlvHeader(tag=tag, length=length, value_start=value_start, header_start=start)
        )

    # ──────────────────────── Values ────────────────────────

    def read_raw(self, count: int) -> Result[memoryview]:
        """Consume exactly `count` octets."""
        available = self.remaining
        if count < 0 or count > available:
            return ResultFailures.unexpected_eof(self._offset, needed=count, available=available)
        start = self._offset
        self._offset += count
        return Result.success(self._data[start : start + count])

    def read_value(self, header: TlvHeader) -> Result[memoryview]:
        """Consume the value octets of a header just read by this cursor."""
        return self.read_raw(header.length)

    def skip(self, count: int) -> Result[int]:
        """Advance `count` octets; returns the new offset."""
        return self.read_raw(count).map(lambda _: self._offset)

    def read_element(self) -> Result[tuple[TlvHeader, memoryview]]:
        """Read one whole element of any tag as (header, value)."""
        return self.read_tlv().flat_map(
            lambda header: self.read_value(header).map(lambda value: (header, value))
        )

    def expect_element(self, tag: int) -> Result[tuple[TlvHeader, memoryview]]:
        """Read one whole element that must carry `tag`."""
        return self.expect(tag).flat_map(
            lambda header: self.read_value(header).map(lambda value: (header, value))
        )

    # ──────────────────────── Nesting ────────────────────────

    def enter(self, header: TlvHeader) -> DerCursor:
        """
        Return a cursor bounded to the header's value and step over the element.

        `header` must be the one this cursor just read, so its value span is
        known to lie inside this cursor's bound.
        """
        self._offset = header.value_end
        return DerCursor(self._data, header.value_start, header.value_end)

    def read_all(self, reader: Callable[[DerCursor], Result[T]]) -> Result[list[T]]:
        """
        Apply `reader` repeatedly until the span is exhausted.

        Each successful read must consume at least one element. The first
        failure short-circuits the loop and is returned as is.
        """
        items: list[T] = []
        while not self.at_end:
            outcome = reader(self)
            if outcome.is_failure():
                return Result.failure_from(outcome.error())
            items.append(outcome.value())
        return Result.success(items)
