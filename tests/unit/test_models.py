"""
Unit tests for domain models — immutability, mapping behavior, rendering.
"""

from __future__ import annotations

import dataclasses
from datetime import UTC, datetime

import pytest

from cert_decoder.domain.models import (
    CertificateExtensions,
    CertificateInfo,
    DistinguishedName,
    TlvHeader,
    ValidityPeriod,
)


def _info(**overrides: object) -> CertificateInfo:
    fields: dict[str, object] = {
        "version": 3,
        "serial_number": "0102",
        "signature_algorithm": "SHA256-RSA",
        "issuer": DistinguishedName([("C", "US"), ("CN", "Issuer")]),
        "validity": ValidityPeriod(
            datetime(2024, 1, 1, tzinfo=UTC),
            datetime(2025, 1, 1, 12, 30, tzinfo=UTC),
        ),
        "subject": DistinguishedName([("CN", "Subject")]),
        "public_key_algorithm": "EC",
    }
    fields.update(overrides)
    return CertificateInfo(**fields)  # type: ignore[arg-type]


class TestTlvHeader:
    def test_value_end(self) -> None:
        assert TlvHeader(tag=0x30, length=300, value_start=4, header_start=0).value_end == 304


class TestDistinguishedName:
    """Ordered, immutable attribute mapping."""

    def test_preserves_encounter_order(self) -> None:
        dn = DistinguishedName([("C", "BE"), ("O", "GlobalSign nv-sa"), ("CN", "Root")])

        assert list(dn) == ["C", "O", "CN"]

    def test_repeated_key_keeps_position_takes_last_value(self) -> None:
        """
        GIVEN OU=Engineering, CN=x, OU=Platform
        WHEN a DistinguishedName is built
        THEN OU stays first and holds Platform.
        """
        dn = DistinguishedName([("OU", "Engineering"), ("CN", "x"), ("OU", "Platform")])

        assert list(dn.items()) == [("OU", "Platform"), ("CN", "x")]

    def test_equal_to_plain_dict_and_hashable(self) -> None:
        first = DistinguishedName([("CN", "a")])
        second = DistinguishedName([("CN", "a")])

        assert first == second == {"CN": "a"}
        assert hash(first) == hash(second)

    def test_has_no_mutation_api(self) -> None:
        dn = DistinguishedName([("CN", "a")])

        with pytest.raises(TypeError):
            dn["CN"] = "b"  # type: ignore[index]

    def test_rfc4514_string_is_most_specific_first(self) -> None:
        dn = DistinguishedName([("C", "US"), ("O", "Acme Corp"), ("CN", "api.acme.test")])

        assert dn.rfc4514_string() == "CN=api.acme.test,O=Acme Corp,C=US"


class TestCertificateInfo:
    """The decode output."""

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            _info().version = 1  # type: ignore[misc]

    def test_extensions_default_to_empty(self) -> None:
        assert _info().extensions == CertificateExtensions()

    def test_as_dict(self) -> None:
        """
        GIVEN a CertificateInfo with one SAN entry
        WHEN as_dict is called
        THEN names become dicts, instants ISO-8601 strings and tuples lists.
        """
        info = _info(extensions=CertificateExtensions(subject_alternative_names=("a.test",)))

        assert info.as_dict() == {
            "version": 3,
            "serial_number": "0102",
            "signature_algorithm": "SHA256-RSA",
            "issuer": {"C": "US", "CN": "Issuer"},
            "subject": {"CN": "Subject"},
            "validity": {
                "not_before": "2024-01-01T00:00:00+00:00",
                "not_after": "2025-01-01T12:30:00+00:00",
            },
            "public_key_algorithm": "EC",
            "extensions": {
                "subject_alternative_names": ["a.test"],
                "key_usage": [],
                "extended_key_usage": [],
            },
        }
