"""
Domain models — immutable data structures produced by the certificate decoder.

These are pure value objects with no behavior beyond rendering.
TlvHeader is the transient unit of the DER walk; everything else is
part of the CertificateInfo that escapes a successful decode.

All models are frozen dataclasses (immutable) following functional principles.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class TlvHeader:
    """
    One DER Tag-Length-Value header.

    `header_start` is the offset of the identifier octet, `value_start` the
    offset of the first content octet. The cursor guarantees
    `value_end <= len(buffer)`.
    """

    tag: int
    length: int
    value_start: int
    header_start: int

    @property
    def value_end(self) -> int:
        return self.value_start + self.length


class DistinguishedName(Mapping[str, str]):
    """
    Ordered, immutable mapping from short attribute key (CN, O, ...) to value.

    Keys follow encounter order in the DER stream. A repeated key keeps
    its first position but takes the last value seen.
    """

    __slots__ = ("_attributes",)

    def __init__(self, attributes: Iterable[tuple[str, str]] = ()) -> None:
        collected: dict[str, str] = {}
        for key, value in attributes:
            collected[key] = value
        self._attributes = collected

    def __getitem__(self, key: str) -> str:
        return self._attributes[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def __hash__(self) -> int:
        return hash(tuple(self._attributes.items()))

    def __repr__(self) -> str:
        return f"DistinguishedName({self._attributes!r})"

    @property
    def common_name(self) -> str | None:
        return self._attributes.get("CN")

    def rfc4514_string(self) -> str:
        """Render as a comma-separated KEY=value string, most specific first."""
        return ",".join(f"{key}={value}" for key, value in reversed(self._attributes.items()))


@dataclass(frozen=True, slots=True)
class ValidityPeriod:
    """
    The certificate's validity window, both instants timezone-aware UTC.

    No ordering is enforced: a certificate whose not_before is after its
    not_after still decodes.
    """

    not_before: datetime
    not_after: datetime


@dataclass(frozen=True, slots=True)
class CertificateExtensions:
    """The v3 extensions the decoder renders; empty tuples when absent."""

    subject_alternative_names: tuple[str, ...] = ()
    key_usage: tuple[str, ...] = ()
    extended_key_usage: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class CertificateInfo:
    """
    Structured, human-readable view of one X.509 certificate.

    Created exactly once per successful decode and never mutated.
    `serial_number` is uppercase hex of the raw INTEGER content octets;
    algorithm fields hold a fixed label or the dotted OID when unrecognized.
    """

    version: int
    serial_number: str
    signature_algorithm: str
    issuer: DistinguishedName
    validity: ValidityPeriod
    subject: DistinguishedName
    public_key_algorithm: str
    extensions: CertificateExtensions = field(default_factory=CertificateExtensions)

    def as_dict(self) -> dict[str, Any]:
        """JSON-ready rendering with ISO-8601 instants."""
        return {
            "version": self.version,
            "serial_number": self.serial_number,
            "signature_algorithm": self.signature_algorithm,
            "issuer": dict(self.issuer),
            "subject": dict(self.subject),
            "validity": {
                "not_before": self.validity.not_before.isoformat(),
                "not_after": self.validity.not_after.isoformat(),
            },
            "public_key_algorithm": self.public_key_algorithm,
            "extensions": {
                "subject_alternative_names": list(self.extensions.subject_alternative_names),
                "key_usage": list(self.extensions.key_usage),
                "extended_key_usage": list(self.extensions.extended_key_usage),
            },
        }
