"""
X.509 decoder adapter — hand-written DER walk of one certificate.

Adapter layer — implements the CertificateDecoder port on top of the
cert_decoder.asn1 readers; no ASN.1 library is involved.

  Certificate ::= SEQUENCE {
      tbsCertificate       TBSCertificate,
      signatureAlgorithm   AlgorithmIdentifier,   -- not read
      signatureValue       BIT STRING }           -- not read

  TBSCertificate ::= SEQUENCE {
      version         [0] EXPLICIT INTEGER DEFAULT v1,
      serialNumber    INTEGER,
      signature       AlgorithmIdentifier,
      issuer          Name,
      validity        SEQUENCE { notBefore Time, notAfter Time },
      subject         Name,
      subjectPublicKeyInfo SEQUENCE { algorithm AlgorithmIdentifier, BIT STRING },
      issuerUniqueID  [1] IMPLICIT OPTIONAL,   -- skipped
      subjectUniqueID [2] IMPLICIT OPTIONAL,   -- skipped
      extensions      [3] EXPLICIT OPTIONAL }

The TBS fields are read by a fixed table of stages. Each stage returns a
Result; the first failure is tagged with its stage name and returned, so a
caller always learns what went wrong, at which byte, and in which field.
The trailers after the SPKI are optional: if they cannot be walked the
certificate still decodes, with empty extensions. The signature is never
verified.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any

import structlog
from railway.result import Failure, Result

from cert_decoder.asn1.cursor import DerCursor, Tag
from cert_decoder.asn1.extensions import parse_extensions
from cert_decoder.asn1.names import parse_name
from cert_decoder.asn1.oid import (
    PUBLIC_KEY_ALGORITHMS,
    SIGNATURE_ALGORITHMS,
    label_for,
    read_oid,
)
from cert_decoder.asn1.timestamps import read_time
from cert_decoder.domain.models import CertificateExtensions, CertificateInfo, ValidityPeriod

log = structlog.get_logger()

type StageReader = Callable[[DerCursor], Result[Any]]


# ─────────────────────── Field readers ───────────────────────


def _read_version(tbs: DerCursor) -> Result[int]:
    if tbs.peek_byte() != Tag.CONTEXT_0:
        return Result.success(1)
    return (
        tbs.expect(Tag.CONTEXT_0)
        .map(tbs.enter)
        .flat_map(lambda explicit: explicit.expect_element(Tag.INTEGER))
        .map(lambda element: int.from_bytes(element[1], "big") + 1)
    )


def _read_serial_number(tbs: DerCursor) -> Result[str]:
    return tbs.expect_element(Tag.INTEGER).map(lambda element: element[1].hex().upper())


def _read_algorithm(cursor: DerCursor) -> Result[str]:
    """AlgorithmIdentifier → dotted OID; parameters are stepped over."""
    return cursor.expect(Tag.SEQUENCE).map(cursor.enter).flat_map(read_oid)


def _read_signature_algorithm(tbs: DerCursor) -> Result[str]:
    return _read_algorithm(tbs).map(lambda oid: label_for(SIGNATURE_ALGORITHMS, oid))


def _read_validity(tbs: DerCursor) -> Result[ValidityPeriod]:
    return tbs.expect(Tag.SEQUENCE).map(tbs.enter).flat_map(_read_validity_window)


def _read_validity_window(window: DerCursor) -> Result[ValidityPeriod]:
    def with_not_after(not_before: datetime) -> Result[ValidityPeriod]:
        return read_time(window).map(lambda not_after: ValidityPeriod(not_before, not_after))

    return read_time(window).flat_map(with_not_after)


def _read_public_key_algorithm(tbs: DerCursor) -> Result[str]:
    return (
        tbs.expect(Tag.SEQUENCE)
        .map(tbs.enter)
        .flat_map(_read_algorithm)
        .map(lambda oid: label_for(PUBLIC_KEY_ALGORITHMS, oid))
    )


# ─────────────────────── Decoder ───────────────────────


class DerCertificateDecoder:
    """
    Decode DER bytes into a CertificateInfo.

    Implements the CertificateDecoder port. Holds no per-call state, so a
    single instance may be shared between threads.

    Args:
        parse_extensions: read the `[3]` extensions trailer. When False the
            trailers are not inspected and CertificateInfo carries empty
            extensions.
    """

    def __init__(self, parse_extensions: bool = True) -> None:
        self._parse_extensions = parse_extensions
        self._stages: tuple[tuple[str, str, StageReader], ...] = (
            ("version", "version", _read_version),
            ("serial_number", "serial_number", _read_serial_number),
            ("signature_algorithm", "signature_algorithm", _read_signature_algorithm),
            ("issuer", "issuer", parse_name),
            ("validity", "validity", _read_validity),
            ("subject", "subject", parse_name),
            ("public_key_algorithm", "subject_public_key_info", _read_public_key_algorithm),
            ("extensions", "extensions", self._read_trailers),
        )

    def decode(self, der: bytes) -> Result[CertificateInfo]:
        """
        Walk the certificate and assemble its CertificateInfo.

        Never raises for malformed input: every structural problem comes back
        as a Failure carrying the ErrorCode, the byte offset and the stage.
        """
        cursor = DerCursor(der)
        return (
            cursor.expect(Tag.SEQUENCE)
            .map(cursor.enter)
            .map_failure(lambda failure: failure.in_stage("certificate"))
            .flat_map(
                lambda certificate: certificate.expect(Tag.SEQUENCE)
                .map(certificate.enter)
                .map_failure(lambda failure: failure.in_stage("tbs_certificate"))
            )
            .flat_map(self._read_tbs_certificate)
            .peek(
                lambda info: log.debug(
                    "decoder.complete",
                    version=info.version,
                    serial=info.serial_number,
                    subject=info.subject.rfc4514_string(),
                )
            )
            .peek_failure(
                lambda failure: log.info(
                    "decoder.failed",
                    code=failure.code.value,
                    offset=failure.offset,
                    stage=failure.stage,
                    size_bytes=len(der),
                )
            )
        )

    def _read_tbs_certificate(self, tbs: DerCursor) -> Result[CertificateInfo]:
        fields: dict[str, Any] = {}
        for field_name, stage, reader in self._stages:
            outcome = reader(tbs)
            if outcome.is_failure():
                return Result.failure_from(outcome.error().in_stage(stage))
            fields[field_name] = outcome.value()
        return Result.success(CertificateInfo(**fields))

    def _read_trailers(self, tbs: DerCursor) -> Result[CertificateExtensions]:
        """Extensions of the certificate; a malformed trailer yields none."""
        if not self._parse_extensions:
            return Result.success(CertificateExtensions())
        match _walk_trailers(tbs):
            case Failure(error):
                log.warning(
                    "extension.skipped",
                    code=error.code.value,
                    offset=error.offset,
                    error=error.describe(),
                )
                return Result.success(CertificateExtensions())
            case parsed:
                return parsed


def _walk_trailers(tbs: DerCursor) -> Result[CertificateExtensions]:
    """Step over `[1]`/`[2]` unique identifiers and parse `[3]` if present."""
    while not tbs.at_end:
        if tbs.peek_byte() == Tag.CONTEXT_3:
            return parse_extensions(tbs)
        skipped = tbs.read_tlv().flat_map(lambda header: tbs.skip(header.length))
        if skipped.is_failure():
            return Result.failure_from(skipped.error())
    return Result.success(CertificateExtensions())


def decode_der(der: bytes) -> Result[CertificateInfo]:
    """Decode with default settings."""
    return DerCertificateDecoder().decode(der)
