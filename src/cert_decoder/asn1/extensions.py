"""
v3 extensions: subjectAltName, keyUsage and extKeyUsage.

    [3] EXPLICIT Extensions
    Extensions ::= SEQUENCE OF Extension
    Extension  ::= SEQUENCE {
        extnID     OBJECT IDENTIFIER,
        critical   BOOLEAN DEFAULT FALSE,
        extnValue  OCTET STRING    -- DER of the extension-specific value
    }

Framing errors come back as a Failure; the certificate decoder logs them
and keeps the certificate with no extensions. Inside a recognized extnValue
decoding is best-effort: a malformed value is logged and that extension
stays empty.
Unrecognized extensions are stepped over.
"""

from __future__ import annotations

import ipaddress
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

import structlog
from railway.result import Failure, Result, Success

from cert_decoder.asn1.cursor import DerCursor, Tag
from cert_decoder.asn1.names import decode_text
from cert_decoder.asn1.oid import (
    EXTENDED_KEY_USAGE,
    KEY_PURPOSES,
    KEY_USAGE,
    SUBJECT_ALT_NAME,
    label_for,
    read_oid,
)
from cert_decoder.domain.models import CertificateExtensions, TlvHeader

log = structlog.get_logger()

# GeneralName alternatives, IMPLICIT context-specific primitive tags.
RFC822_NAME = 0x81
DNS_NAME = 0x82
IP_ADDRESS = 0x87

KEY_USAGE_BITS = (
    "digitalSignature",
    "nonRepudiation",
    "keyEncipherment",
    "dataEncipherment",
    "keyAgreement",
    "keyCertSign",
    "cRLSign",
    "encipherOnly",
    "decipherOnly",
)


@dataclass(frozen=True, slots=True)
class _Extension:
    oid: str
    critical: bool
    value: DerCursor


# ─────────────────────── Framing ───────────────────────


def parse_extensions(cursor: DerCursor) -> Result[CertificateExtensions]:
    """Parse the `[3]` trailer of a TBSCertificate."""
    return (
        cursor.expect(Tag.CONTEXT_3)
        .map(cursor.enter)
        .flat_map(lambda explicit: explicit.expect(Tag.SEQUENCE).map(explicit.enter))
        .flat_map(lambda extensions: extensions.read_all(_read_extension))
        .map(_render)
    )


def _read_extension(extensions: DerCursor) -> Result[_Extension]:
    return extensions.expect(Tag.SEQUENCE).map(extensions.enter).flat_map(_read_extension_fields)


def _read_extension_fields(extension: DerCursor) -> Result[_Extension]:
    match read_oid(extension):
        case Failure(error):
            return Failure(error)
        case Success(oid):
            pass

    critical = False
    if extension.peek_byte() == Tag.BOOLEAN:
        match extension.expect_element(Tag.BOOLEAN):
            case Failure(error):
                return Failure(error)
            case Success((_, flag)):
                critical = any(flag)

    return extension.expect(Tag.OCTET_STRING).map(
        lambda header: _Extension(oid, critical, extension.enter(header))
    )


def _render(extensions: list[_Extension]) -> CertificateExtensions:
    fields: dict[str, tuple[str, ...]] = {}
    for extension in extensions:
        decoder = _VALUE_DECODERS.get(extension.oid)
        if decoder is None:
            continue
        field_name, decode = decoder
        match decode(extension.value):
            case Success(values):
                fields[field_name] = values
            case Failure(error):
                log.warning(
                    "extension.value_skipped",
                    oid=extension.oid,
                    critical=extension.critical,
                    error=error.describe(),
                )
    return CertificateExtensions(**fields)


# ─────────────────────── Values ───────────────────────


def _subject_alt_names(value: DerCursor) -> Result[tuple[str, ...]]:
    return (
        value.expect(Tag.SEQUENCE)
        .map(value.enter)
        .flat_map(lambda names: names.read_all(DerCursor.read_element))
        .map(lambda elements: tuple(_general_names(elements)))
    )


def _general_names(elements: list[tuple[TlvHeader, memoryview]]) -> Iterator[str]:
    for header, content in elements:
        if header.tag in (DNS_NAME, RFC822_NAME):
            yield decode_text(content)
        elif header.tag == IP_ADDRESS and len(content) in (4, 16):
            yield str(ipaddress.ip_address(bytes(content)))


def _key_usage(value: DerCursor) -> Result[tuple[str, ...]]:
    return value.expect_element(Tag.BIT_STRING).map(lambda element: _set_bits(element[1]))


def _set_bits(content: memoryview) -> tuple[str, ...]:
    # First content octet counts unused trailing bits; bit 0 is the MSB of the next.
    bits = bytes(content[1:])
    return tuple(
        name
        for index, name in enumerate(KEY_USAGE_BITS)
        if index // 8 < len(bits) and bits[index // 8] & (0x80 >> (index % 8))
    )


def _extended_key_usage(value: DerCursor) -> Result[tuple[str, ...]]:
    return (
        value.expect(Tag.SEQUENCE)
        .map(value.enter)
        .flat_map(lambda purposes: purposes.read_all(read_oid))
        .map(lambda oids: tuple(label_for(KEY_PURPOSES, oid) for oid in oids))
    )


_VALUE_DECODERS: Mapping[str, tuple[str, Callable[[DerCursor], Result[tuple[str, ...]]]]] = (
    MappingProxyType(
        {
            SUBJECT_ALT_NAME: ("subject_alternative_names", _subject_alt_names),
            KEY_USAGE: ("key_usage", _key_usage),
            EXTENDED_KEY_USAGE: ("extended_key_usage", _extended_key_usage),
        }
    )
)
