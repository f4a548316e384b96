"""
Pipeline — PEM text in, CertificateInfo out.

Domain layer — this is PURE LOGIC. No side effects, no I/O.
Both stages are injected via ports (Protocol interfaces).

The pipeline connects stages via flat_map, forming a railway:

  guard size (optional)
    → extractor.extract(pem_text)
      → decoder.decode(der)

Each stage returns Result[T]. Failures short-circuit automatically
through the ROP railway — no try/except needed.
"""

from __future__ import annotations

from railway.result import Result
from railway.result_failures import ResultFailures

from cert_decoder.domain.models import CertificateInfo
from cert_decoder.domain.ports import CertificateDecoder, PemExtractor


def _within_limit(pem_text: str, max_pem_bytes: int | None) -> Result[str]:
    if max_pem_bytes is None:
        return Result.success(pem_text)
    size = len(pem_text.encode("utf-8"))
    if size > max_pem_bytes:
        return ResultFailures.input_too_large(size, max_pem_bytes)
    return Result.success(pem_text)


def decode_pem_certificate(
    pem_text: str,
    extractor: PemExtractor,
    decoder: CertificateDecoder,
    max_pem_bytes: int | None = None,
) -> Result[CertificateInfo]:
    """
    Decode the first PEM certificate found in `pem_text`.

    Flow:
      1. Reject text larger than `max_pem_bytes` UTF-8 bytes (when given)
      2. Extract DER bytes from the CERTIFICATE armor
      3. Walk the DER structure into a CertificateInfo

    Returns Result[CertificateInfo] on success, or Result.failure with
    the error from the first failing stage.
    """
    return (
        _within_limit(pem_text, max_pem_bytes)
        .flat_map(extractor.extract)
        .flat_map(decoder.decode)
    )
