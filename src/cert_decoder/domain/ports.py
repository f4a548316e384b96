"""
Ports — Protocol-based interfaces for the two decoding stages.

These define WHAT the pipeline needs (contracts) without specifying
HOW it's done (implementation). Following hexagonal architecture:

  Domain ← Ports (protocols) ← Adapters (implementations)

Each port is a Protocol (structural typing) so adapters satisfy
the contract simply by implementing the methods — no inheritance.

Decoding flow:
  1. PemExtractor       → armored text to raw DER bytes
  2. CertificateDecoder → DER bytes to CertificateInfo
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from railway.result import Result

from cert_decoder.domain.models import CertificateInfo


@runtime_checkable
class PemExtractor(Protocol):
    """
    Port: locate the CERTIFICATE armor in free text and base64-decode its body.

    Only the first BEGIN/END pair is considered. Returns Result[bytes]
    holding the DER encoding; the bytes are not validated as DER here.
    """

    def extract(self, pem_text: str) -> Result[bytes]: ...


@runtime_checkable
class CertificateDecoder(Protocol):
    """
    Port: decode one DER-encoded X.509 certificate.

    The implementation is a pure function of its input: the same bytes
    always give an equal Result, and no error escapes as an exception.
    """

    def decode(self, der: bytes) -> Result[CertificateInfo]: ...
