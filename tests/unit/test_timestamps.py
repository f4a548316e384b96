"""
Unit tests for UTCTime / GeneralizedTime parsing.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from railway import ErrorCode, ResultAssertions

from cert_decoder.asn1.cursor import DerCursor, Tag
from cert_decoder.asn1.timestamps import parse_time, read_time
from tests.conftest import tlv


class TestUtcTime:
    """Two-digit-year UTCTime."""

    def test_thirteen_octet_form(self) -> None:
        """
        GIVEN 250101000000Z
        WHEN parse_time is called with the UTCTime tag
        THEN the instant is 2025-01-01T00:00:00Z.
        """
        result = parse_time(Tag.UTC_TIME, b"250101000000Z")

        ResultAssertions.assert_success_value(result, datetime(2025, 1, 1, tzinfo=UTC))

    @pytest.mark.parametrize(
        ("text", "year"),
        [(b"491231235959Z", 2049), (b"500101000000Z", 1950), (b"990101000000Z", 1999), (b"000101000000Z", 2000)],
    )
    def test_two_digit_year_pivot(self, text: bytes, year: int) -> None:
        instant = ResultAssertions.assert_success(parse_time(Tag.UTC_TIME, text))

        assert instant.year == year

    def test_offset_form_is_read_as_utc(self) -> None:
        """
        GIVEN the 15-octet form 2501011200+0200
        WHEN parse_time is called
        THEN the digits are taken as UTC with zero seconds; the offset is not applied.
        """
        result = parse_time(Tag.UTC_TIME, b"2501011200+0200")

        ResultAssertions.assert_success_value(result, datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC))

    def test_result_is_timezone_aware(self) -> None:
        instant = ResultAssertions.assert_success(parse_time(Tag.UTC_TIME, b"980901120000Z"))

        assert instant.tzinfo is UTC


class TestGeneralizedTime:
    """Four-digit-year GeneralizedTime."""

    def test_fifteen_octet_form(self) -> None:
        result = parse_time(Tag.GENERALIZED_TIME, b"21260925130603Z")

        ResultAssertions.assert_success_value(result, datetime(2126, 9, 25, 13, 6, 3, tzinfo=UTC))

    def test_fractional_seconds_are_ignored(self) -> None:
        result = parse_time(Tag.GENERALIZED_TIME, b"20500101101010.123Z")

        ResultAssertions.assert_success_value(result, datetime(2050, 1, 1, 10, 10, 10, tzinfo=UTC))


class TestUnsupportedFormats:
    """Every other shape fails with UNSUPPORTED_TIME_FORMAT."""

    @pytest.mark.parametrize(
        ("tag", "text"),
        [
            (Tag.UTC_TIME, b"2501010000Z"),
            (Tag.UTC_TIME, b"25010100000Z"),
            (Tag.UTC_TIME, b"20250101000000Z"),
            (Tag.GENERALIZED_TIME, b"20250101000000"),
            (Tag.GENERALIZED_TIME, b"250101000000Z"),
            (0x0C, b"250101000000Z"),
        ],
    )
    def test_wrong_tag_or_length(self, tag: int, text: bytes) -> None:
        error = ResultAssertions.assert_failure(parse_time(tag, text), ErrorCode.UNSUPPORTED_TIME_FORMAT)

        assert error.details == {"tag": tag, "length": len(text)}

    def test_non_numeric_field(self) -> None:
        ResultAssertions.assert_failure(parse_time(Tag.UTC_TIME, b"25A101000000Z"), ErrorCode.UNSUPPORTED_TIME_FORMAT)

    @pytest.mark.parametrize("text", [b"251301000000Z", b"250230000000Z", b"250101250000Z", b"250101006100Z"])
    def test_out_of_range_calendar_field(self, text: bytes) -> None:
        """
        GIVEN a UTCTime with month 13, Feb 30, hour 25 or minute 61
        WHEN parse_time is called
        THEN UNSUPPORTED_TIME_FORMAT is reported instead of an exception.
        """
        ResultAssertions.assert_failure(parse_time(Tag.UTC_TIME, text), ErrorCode.UNSUPPORTED_TIME_FORMAT)


class TestReadTime:
    """Reading a time element through a cursor."""

    def test_reads_and_advances(self) -> None:
        der = tlv(0x17, b"250101000000Z") + tlv(0x18, b"20500101000000Z")
        cursor = DerCursor(der)

        first = ResultAssertions.assert_success(read_time(cursor))
        second = ResultAssertions.assert_success(read_time(cursor))

        assert (first.year, second.year) == (2025, 2050)
        assert cursor.at_end

    def test_failure_carries_element_offset(self) -> None:
        """
        GIVEN a valid time followed by an INTEGER
        WHEN read_time reads the second element
        THEN UNSUPPORTED_TIME_FORMAT is reported at the INTEGER's header offset.
        """
        cursor = DerCursor(tlv(0x17, b"250101000000Z") + tlv(0x02, b"\x01"))
        read_time(cursor)

        ResultAssertions.assert_failure_at(read_time(cursor), ErrorCode.UNSUPPORTED_TIME_FORMAT, offset=15)
