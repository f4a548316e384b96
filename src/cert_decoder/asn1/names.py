"""
Distinguished name parsing.

    Name ::= SEQUENCE OF RelativeDistinguishedName
    RelativeDistinguishedName ::= SET OF AttributeTypeAndValue
    AttributeTypeAndValue ::= SEQUENCE { type OBJECT IDENTIFIER, value ANY }

The Name header itself must be well formed. Inside it the parser is lenient:
the first RDN that fails to decode ends the loop, and the attributes read
before it are kept. The caller's cursor always ends up past the whole Name.
"""

from __future__ import annotations

import structlog
from railway.result import Result

from cert_decoder.asn1.cursor import DerCursor, Tag
from cert_decoder.asn1.oid import ATTRIBUTE_KEYS, label_for, read_oid
from cert_decoder.domain.models import DistinguishedName

log = structlog.get_logger()

type Attribute = tuple[str, str]


def decode_text(content: bytes | memoryview) -> str:
    """Permissive string decoding: UTF-8 with replacement, NULs dropped."""
    return bytes(content).decode("utf-8", errors="replace").replace("\x00", "")


def parse_name(cursor: DerCursor) -> Result[DistinguishedName]:
    """Read a Name SEQUENCE into an ordered DistinguishedName."""
    return cursor.expect(Tag.SEQUENCE).map(
        lambda header: _collect_attributes(cursor.enter(header))
    )


def _collect_attributes(name: DerCursor) -> DistinguishedName:
    attributes: list[Attribute] = []
    while not name.at_end:
        rdn = _read_rdn(name)
        if rdn.is_failure():
            failure = rdn.error()
            log.debug(
                "name.rdn_skipped",
                code=failure.code.value,
                offset=failure.offset,
                kept=len(attributes),
            )
            break
        attributes.extend(rdn.value())
    return DistinguishedName(attributes)


def _read_rdn(name: DerCursor) -> Result[list[Attribute]]:
    # A multi-valued RDN contributes all of its attributes or none.
    return name.expect(Tag.SET).flat_map(
        lambda header: name.enter(header).read_all(_read_attribute)
    )


def _read_attribute(rdn: DerCursor) -> Result[Attribute]:
    return rdn.expect(Tag.SEQUENCE).map(rdn.enter).flat_map(_read_type_and_value)


def _read_type_and_value(pair: DerCursor) -> Result[Attribute]:
    return read_oid(pair).flat_map(
        lambda oid: pair.read_element().map(
            lambda element: (label_for(ATTRIBUTE_KEYS, oid), decode_text(element[1]))
        )
    )
