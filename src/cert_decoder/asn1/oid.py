"""
OBJECT IDENTIFIER decoding.

The content octets are a run of base-128 subidentifiers, high bit set on
every octet but the last of each. The first subidentifier packs the first
two arcs as `first * 40 + second`, where `first` is 0, 1 or 2 and only arc
2 may carry a second arc of 40 or more.

That first subidentifier is base-128 decoded like the rest, so `88 37`
is `2.999`. Reading only its first octet (`2.56.55`) is a common shortcut
that is wrong for any second arc above 47 under arc 2; it is not followed.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from railway.result import Result
from railway.result_failures import ResultFailures

from cert_decoder.asn1.cursor import DerCursor, Tag

# ─────────────────────── Label tables ───────────────────────
# Unknown OIDs are rendered as their dotted string by every caller.

ATTRIBUTE_KEYS: Mapping[str, str] = MappingProxyType(
    {
        "2.5.4.3": "CN",
        "2.5.4.6": "C",
        "2.5.4.7": "L",
        "2.5.4.8": "ST",
        "2.5.4.10": "O",
        "2.5.4.11": "OU",
        "2.5.4.5": "SN",
    }
)

SIGNATURE_ALGORITHMS: Mapping[str, str] = MappingProxyType(
    {
        "1.2.840.113549.1.1.5": "SHA1-RSA",
        "1.2.840.113549.1.1.11": "SHA256-RSA",
        "1.2.840.113549.1.1.12": "SHA384-RSA",
        "1.2.840.113549.1.1.13": "SHA512-RSA",
        "1.2.840.10045.4.3.2": "ECDSA-SHA256",
        "1.2.840.10045.4.3.3": "ECDSA-SHA384",
        "1.2.840.10045.4.3.4": "ECDSA-SHA512",
    }
)

PUBLIC_KEY_ALGORITHMS: Mapping[str, str] = MappingProxyType(
    {
        "1.2.840.113549.1.1.1": "RSA",
        "1.2.840.10045.2.1": "EC",
        "1.2.840.10040.4.1": "DSA",
        "1.3.101.110": "X25519",
        "1.3.101.112": "Ed25519",
    }
)

SUBJECT_ALT_NAME = "2.5.29.17"
KEY_USAGE = "2.5.29.15"
EXTENDED_KEY_USAGE = "2.5.29.37"

KEY_PURPOSES: Mapping[str, str] = MappingProxyType(
    {
        "1.3.6.1.5.5.7.3.1": "serverAuth",
        "1.3.6.1.5.5.7.3.2": "clientAuth",
        "1.3.6.1.5.5.7.3.3": "codeSigning",
        "1.3.6.1.5.5.7.3.4": "emailProtection",
        "1.3.6.1.5.5.7.3.5": "ipsecEndSystem",
        "1.3.6.1.5.5.7.3.6": "ipsecTunnel",
        "1.3.6.1.5.5.7.3.7": "ipsecUser",
        "1.3.6.1.5.5.7.3.8": "timeStamping",
        "1.3.6.1.5.5.7.3.9": "ocspSigning",
        "1.3.6.1.4.1.311.2.1.21": "msCodeInd",
        "1.3.6.1.4.1.311.2.1.22": "msCodeCom",
        "1.3.6.1.4.1.311.10.3.1": "msCTLSign",
        "1.3.6.1.4.1.311.10.3.3": "msSGC",
        "1.3.6.1.4.1.311.10.3.4": "msEFS",
    }
)


def label_for(table: Mapping[str, str], oid: str) -> str:
    """Fixed label for `oid`, or the dotted OID itself when unmapped."""
    return table.get(oid, oid)


# ─────────────────────── Decoding ───────────────────────


def decode_oid(content: bytes | memoryview, offset: int | None = None) -> Result[str]:
    """
    Render OID content octets in dotted-decimal form.

        decode_oid(bytes.fromhex("2a864886f70d01010b"))  # → Success('1.2.840.113549.1.1.11')

    Empty content, or content whose last octet still has the continuation
    bit set, fails with TRUNCATED_OID at `offset`.
    """
    subidentifiers: list[int] = []
    accumulator = 0
    continued = False
    for octet in bytes(content):
        accumulator = (accumulator << 7) | (octet & 0x7F)
        continued = bool(octet & 0x80)
        if not continued:
            subidentifiers.append(accumulator)
            accumulator = 0

    if continued or not subidentifiers:
        return ResultFailures.truncated_oid(offset, len(content))

    packed, *rest = subidentifiers
    first = min(packed // 40, 2)
    arcs = [first, packed - first * 40, *rest]
    return Result.success(".".join(map(str, arcs)))


def read_oid(cursor: DerCursor) -> Result[str]:
    """Read an OBJECT IDENTIFIER element and decode it."""
    return cursor.expect_element(Tag.OBJECT_IDENTIFIER).flat_map(
        lambda element: decode_oid(element[1], element[0].value_start)
    )
