"""Tests for ErrorCode and FailureDescription."""

import dataclasses

import pytest

from railway import ErrorCode, FailureDescription


class TestErrorCode:
    def test_values_equal_names(self):
        for code in ErrorCode:
            assert code.value == code.name

    def test_lookup_by_value(self):
        assert ErrorCode("UNEXPECTED_TAG") is ErrorCode.UNEXPECTED_TAG


class TestFailureDescription:
    def test_defaults(self):
        desc = FailureDescription(ErrorCode.UNEXPECTED_EOF, "short")
        assert desc.offset is None
        assert desc.stage is None
        assert desc.details == {}
        assert desc.exception is None

    def test_create_collects_details(self):
        desc = FailureDescription.create(ErrorCode.UNEXPECTED_TAG, "wrong", offset=4, expected=0x30, actual=0x31)
        assert desc.offset == 4
        assert desc.details == {"expected": 0x30, "actual": 0x31}

    def test_is_frozen(self):
        desc = FailureDescription(ErrorCode.UNEXPECTED_EOF, "short")
        with pytest.raises(dataclasses.FrozenInstanceError):
            desc.offset = 1

    def test_exception_excluded_from_equality(self):
        a = FailureDescription(ErrorCode.BASE64_DECODE_ERROR, "bad", exception=ValueError("a"))
        b = FailureDescription(ErrorCode.BASE64_DECODE_ERROR, "bad", exception=ValueError("b"))
        assert a == b


class TestLocation:
    def test_in_stage_sets_stage(self):
        desc = FailureDescription(ErrorCode.UNEXPECTED_TAG, "wrong").in_stage("issuer")
        assert desc.stage == "issuer"

    def test_innermost_stage_wins(self):
        desc = FailureDescription(ErrorCode.UNEXPECTED_TAG, "wrong").in_stage("issuer").in_stage("certificate")
        assert desc.stage == "issuer"

    def test_at_offset_only_fills_missing_offset(self):
        assert FailureDescription(ErrorCode.UNEXPECTED_EOF, "x").at_offset(9).offset == 9
        assert FailureDescription(ErrorCode.UNEXPECTED_EOF, "x", offset=2).at_offset(9).offset == 2


class TestDescribe:
    def test_full_description(self):
        desc = FailureDescription(ErrorCode.UNEXPECTED_EOF, "Need 4 byte(s)", offset=12, stage="validity")
        assert desc.describe() == "UNEXPECTED_EOF at offset 12 while reading validity: Need 4 byte(s)"

    def test_without_location(self):
        desc = FailureDescription(ErrorCode.MISSING_PEM_MARKERS, "no armor")
        assert desc.describe() == "MISSING_PEM_MARKERS: no armor"
