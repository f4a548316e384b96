"""
PEM extractor adapter — CERTIFICATE armor to DER bytes.

Adapter layer — implements the PemExtractor port using the standard
base64 codec in strict mode.

  free text
    → first "-----BEGIN CERTIFICATE-----" and the next "-----END CERTIFICATE-----"
    → body with all whitespace removed
    → base64.b64decode(validate=True)
    → DER bytes (not validated as DER here)

Anything before BEGIN or after END is ignored, so the text may carry
comments, a private key block or a whole chain; only the first
certificate is used.
"""

from __future__ import annotations

import base64

import structlog
from railway import ErrorCode
from railway.result import Result
from railway.result_failures import ResultFailures

log = structlog.get_logger()

BEGIN_MARKER = "-----BEGIN CERTIFICATE-----"
END_MARKER = "-----END CERTIFICATE-----"


class Base64PemExtractor:
    """
    Unwrap the first PEM CERTIFICATE block of a text.

    Implements the PemExtractor port. Stateless and re-entrant.
    """

    def extract(self, pem_text: str) -> Result[bytes]:
        """
        Return the DER bytes armored in `pem_text`.

        Failures:
          - MISSING_PEM_MARKERS when either marker line is absent
          - BASE64_DECODE_ERROR when the body is not strict base64
            (the binascii error is attached to the failure)
        """
        begin = pem_text.find(BEGIN_MARKER)
        if begin < 0:
            return ResultFailures.missing_pem_markers(BEGIN_MARKER)

        body_start = begin + len(BEGIN_MARKER)
        end = pem_text.find(END_MARKER, body_start)
        if end < 0:
            return ResultFailures.missing_pem_markers(END_MARKER)

        body = "".join(pem_text[body_start:end].split())
        return Result.from_computation(
            lambda: base64.b64decode(body, validate=True),
            ErrorCode.BASE64_DECODE_ERROR,
            "Certificate body is not valid base64",
        ).peek(lambda der: log.debug("pem.extracted", der_bytes=len(der)))
