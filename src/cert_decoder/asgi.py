"""
FastAPI + Uvicorn ASGI application.

Exposes the decode pipeline over HTTP. Uvicorn serves this app with
graceful shutdown (SIGTERM → drain + exit).

Endpoints:
  - POST /decode  {"pem": "..."} → CertificateInfo as JSON, or an error body
  - GET  /health  liveness: 200 once the pipeline is wired, 503 otherwise
  - GET  /info    name, version and active limits

Entry point for production: cert-decoder (or uvicorn cert_decoder.asgi:app)
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from functools import partial
from typing import Any

import structlog
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from railway.execution import LoggingExecutionContext
from railway.http_support import build_fastapi_response
from railway.result import Result

from cert_decoder import __version__
from cert_decoder.config import AppSettings
from cert_decoder.domain.models import CertificateInfo
from cert_decoder.main import _create_adapters, configure_structlog
from cert_decoder.pipeline import decode_pem_certificate

# ─────────────────────── Global State ───────────────────────
# Set during app startup and read by the request handlers.

_decode_fn: Callable[[str], Result[CertificateInfo]] | None = None
_settings: AppSettings | None = None
_error_message: str | None = None
_execution = LoggingExecutionContext(operation="certificate.decode")
log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    FastAPI lifespan context manager — runs on startup and shutdown.

    Startup: load settings, configure logging and wire the pipeline.
    """
    global _decode_fn, _settings, _error_message

    log.info("asgi.startup")

    try:
        settings = AppSettings()
    except Exception as e:
        error_msg = f"Configuration error: {e}"
        _error_message = error_msg
        log.error("asgi.startup_error", error=error_msg)
        raise

    configure_structlog(settings.log_level)

    log.info(
        "asgi.startup_config",
        version=__version__,
        log_level=settings.log_level,
        max_pem_bytes=settings.decoder.max_pem_bytes,
        parse_extensions=settings.decoder.parse_extensions,
    )

    extractor, decoder = _create_adapters(settings)
    _decode_fn = partial(
        decode_pem_certificate,
        extractor=extractor,
        decoder=decoder,
        max_pem_bytes=settings.decoder.max_pem_bytes,
    )
    _settings = settings

    log.info("asgi.startup_complete")

    yield  # ← App is running here; Uvicorn handles requests

    log.info("asgi.shutdown", reason="SIGTERM or server stop")


# ─────────────────────── FastAPI Application ───────────────────────

app = FastAPI(
    title="cert-decoder",
    description="X.509 certificate decoder — PEM in, structured fields out",
    version=__version__,
    lifespan=lifespan,
)


class DecodeRequest(BaseModel):
    """Body of POST /decode."""

    pem: str = Field(description="Text containing a PEM CERTIFICATE block")


@app.post("/decode")
def decode(request: DecodeRequest) -> JSONResponse:
    """
    Decode the first certificate in the submitted text.

    Returns 200 with the decoded fields, 400 for unreadable armor, 413 for
    oversized input, 422 for a malformed certificate and 503 if the pipeline
    is not initialized yet.
    """
    decode_fn = _decode_fn
    if decode_fn is None:
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "reason": "Decoder not initialized"},
        )

    result = _execution.execute(lambda: decode_fn(request.pem)).peek_failure(
        lambda failure: log.info("decode.rejected", error=failure.describe())
    )
    return build_fastapi_response(result.map(CertificateInfo.as_dict))


@app.get("/health")
async def health() -> JSONResponse:
    """
    Liveness probe.

    Returns 503 if configuration failed or the pipeline is not wired yet.
    """
    if _error_message:
        log.warning("health.check_failed", error=_error_message)
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "error": _error_message},
        )

    if _decode_fn is None:
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "reason": "decoder not initialized"},
        )

    return JSONResponse(status_code=200, content={"status": "healthy"})


@app.get("/info")
async def info() -> dict[str, Any]:
    """Application metadata and the limits in force."""
    return {
        "name": "cert-decoder",
        "version": __version__,
        "max_pem_bytes": _settings.decoder.max_pem_bytes if _settings else None,
        "parse_extensions": _settings.decoder.parse_extensions if _settings else None,
        "has_error": _error_message is not None,
    }
