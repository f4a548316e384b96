"""
Shared test fixtures and helpers for the cert-decoder test suite.

Provides path resolution for the certificate fixtures (.pem, .der) and a
tiny DER builder for hand-made malformed inputs.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def fixture_path(filename: str) -> Path:
    """
    Resolve the absolute path to a test fixture file.

    Raises FileNotFoundError if the fixture does not exist.
    """
    path = FIXTURES_DIR / filename
    if not path.exists():
        raise FileNotFoundError(f"Test fixture not found: {path}")
    return path


def read_pem(filename: str) -> str:
    return fixture_path(filename).read_text(encoding="ascii")


def tlv(tag: int, *parts: bytes) -> bytes:
    """Encode one DER element, choosing short or long form length."""
    body = b"".join(parts)
    length = len(body)
    if length < 0x80:
        return bytes([tag, length]) + body
    octets = length.to_bytes((length.bit_length() + 7) // 8, "big")
    return bytes([tag, 0x80 | len(octets)]) + octets + body


def oid(dotted: str) -> bytes:
    """Encode an OBJECT IDENTIFIER element from its dotted form."""
    first, second, *rest = (int(arc) for arc in dotted.split("."))
    content = bytearray()
    for arc in [first * 40 + second, *rest]:
        chunk = [arc & 0x7F]
        arc >>= 7
        while arc:
            chunk.append(0x80 | (arc & 0x7F))
            arc >>= 7
        content.extend(reversed(chunk))
    return tlv(0x06, bytes(content))


def attribute(dotted: str, value: str, string_tag: int = 0x0C) -> bytes:
    """One single-valued RDN: SET { SEQUENCE { OID, string } }."""
    return tlv(0x31, tlv(0x30, oid(dotted), tlv(string_tag, value.encode("utf-8"))))


def name(*rdns: bytes) -> bytes:
    return tlv(0x30, *rdns)


def utc_time(text: str) -> bytes:
    return tlv(0x17, text.encode("ascii"))


def minimal_tbs(
    *,
    version: bytes = tlv(0xA0, tlv(0x02, b"\x02")),
    serial: bytes = tlv(0x02, b"\x01\x02"),
    signature: bytes = tlv(0x30, oid("1.2.840.113549.1.1.11"), tlv(0x05, b"")),
    issuer: bytes = name(attribute("2.5.4.3", "Test Issuer")),
    validity: bytes = tlv(0x30, utc_time("240101000000Z"), utc_time("250101000000Z")),
    subject: bytes = name(attribute("2.5.4.3", "Test Subject")),
    spki: bytes = tlv(
        0x30,
        tlv(0x30, oid("1.2.840.10045.2.1"), oid("1.2.840.10045.3.1.7")),
        tlv(0x03, b"\x00\x04" + b"\x11" * 64),
    ),
    trailers: bytes = b"",
) -> bytes:
    """A TBSCertificate built from overridable fields."""
    return tlv(0x30, version, serial, signature, issuer, validity, subject, spki, trailers)


def certificate(tbs: bytes | None = None) -> bytes:
    """Wrap a TBSCertificate with a dummy signature algorithm and value."""
    return tlv(
        0x30,
        minimal_tbs() if tbs is None else tbs,
        tlv(0x30, oid("1.2.840.113549.1.1.11"), tlv(0x05, b"")),
        tlv(0x03, b"\x00" + b"\x5a" * 16),
    )


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo any structlog.configure() a test performed."""
    yield
    structlog.reset_defaults()
