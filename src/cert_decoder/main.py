"""
Application entry point — wires dependencies and starts the HTTP server.

Composition root: creates the concrete adapters that the ASGI app injects
into the decode pipeline, and launches Uvicorn.

This is the ONLY place where concrete classes are instantiated.
Everything else depends on Protocol interfaces.

Responsibilities:
  1. Configure structlog
  2. Load and validate configuration from environment
  3. Create concrete adapter instances (PEM extractor + DER decoder)
  4. Serve cert_decoder.asgi:app with Uvicorn
"""

from __future__ import annotations

import logging
import sys

import structlog
import uvicorn

from cert_decoder import __version__
from cert_decoder.adapters.pem_extractor import Base64PemExtractor
from cert_decoder.adapters.x509_decoder import DerCertificateDecoder
from cert_decoder.config import AppSettings


def configure_structlog(log_level: str = "INFO") -> None:
    """
    Configure structlog for structured logging.

    Colored, human-readable console output; events below `log_level`
    are dropped before any processor runs.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


type _Adapters = tuple[Base64PemExtractor, DerCertificateDecoder]


def _create_adapters(settings: AppSettings) -> _Adapters:
    """Instantiate the PEM extractor and the DER decoder from settings."""
    extractor = Base64PemExtractor()
    decoder = DerCertificateDecoder(parse_extensions=settings.decoder.parse_extensions)
    return extractor, decoder


def main() -> None:
    """Load settings and serve the decoder over HTTP."""
    try:
        settings = AppSettings()
    except Exception as e:
        print(f"FATAL: Configuration error — {e}", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    configure_structlog(settings.log_level)
    log = structlog.get_logger()

    log.info(
        "app.starting",
        version=__version__,
        log_level=settings.log_level,
        host=settings.api.host,
        port=settings.api.port,
        max_pem_bytes=settings.decoder.max_pem_bytes,
    )

    uvicorn.run(
        "cert_decoder.asgi:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
