"""
UTCTime / GeneralizedTime parsing for the Validity SEQUENCE.

UTCTime is accepted at 13 octets (YYMMDDHHMMSSZ) and at 15 octets
(YYMMDDHHMM+hhmm). The 15-octet form is read as if it were UTC; the
offset is never applied. Two-digit years 50-99 belong to the 1900s,
00-49 to the 2000s. GeneralizedTime needs at least YYYYMMDDHHMMSS plus one more octet;
fractional seconds and zone designators after the first 14 digits are
ignored.
"""

from __future__ import annotations

from datetime import UTC, datetime

from railway.result import Result
from railway.result_failures import ResultFailures

from cert_decoder.asn1.cursor import DerCursor, Tag

UTC_TIME_LENGTHS = (13, 15)
GENERALIZED_TIME_MIN_LENGTH = 15
TWO_DIGIT_YEAR_PIVOT = 50

_DIGITS = frozenset("0123456789")


def parse_time(tag: int, content: bytes | memoryview) -> Result[datetime]:
    """
    Parse the content octets of a time element into an aware UTC datetime.

        parse_time(0x17, b"250101000000Z")  # → Success(datetime(2025, 1, 1, tzinfo=UTC))

    Any other tag/length combination, and any non-numeric or out-of-range
    field, fails with UNSUPPORTED_TIME_FORMAT.
    """
    text = bytes(content).decode("ascii", errors="replace")
    length = len(text)

    if tag == Tag.UTC_TIME and length in UTC_TIME_LENGTHS:
        year_digits, fields = text[:2], text[2:12]
        if text[10] in "+-":
            # YYMMDDHHMM+hhmm: no seconds field
            fields = text[2:10] + "00"
    elif tag == Tag.GENERALIZED_TIME and length >= GENERALIZED_TIME_MIN_LENGTH:
        year_digits, fields = text[:4], text[4:14]
    else:
        return ResultFailures.unsupported_time_format(tag, length)

    if not set(year_digits + fields) <= _DIGITS:
        return ResultFailures.unsupported_time_format(tag, length, "non-numeric field")

    year = int(year_digits)
    if tag == Tag.UTC_TIME:
        year += 1900 if year >= TWO_DIGIT_YEAR_PIVOT else 2000

    month, day, hour, minute, second = (int(fields[i : i + 2]) for i in range(0, 10, 2))
    try:
        return Result.success(datetime(year, month, day, hour, minute, second, tzinfo=UTC))
    except ValueError as e:
        return ResultFailures.unsupported_time_format(tag, length, str(e))


def read_time(cursor: DerCursor) -> Result[datetime]:
    """Read one time element of any tag and parse it; failures carry its offset."""
    return cursor.read_element().flat_map(
        lambda element: parse_time(element[0].tag, element[1]).map_failure(
            lambda failure: failure.at_offset(element[0].header_start)
        )
    )
