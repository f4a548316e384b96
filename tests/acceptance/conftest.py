"""
Acceptance test fixtures — real certificates and a reference parser.

Each PEM fixture is decoded twice: once through the full cert-decoder
pipeline and once with `cryptography`, whose view is the expected value.
"""

from __future__ import annotations

import pytest
from cryptography import x509

from tests.conftest import read_pem

PEM_FIXTURES = (
    "globalsign_root_ca.pem",
    "rsa_v1.pem",
    "ec_p384.pem",
    "ed25519_long_lived.pem",
)


@pytest.fixture(params=PEM_FIXTURES)
def pem_name(request: pytest.FixtureRequest) -> str:
    return request.param


@pytest.fixture()
def pem_text(pem_name: str) -> str:
    return read_pem(pem_name)


@pytest.fixture()
def reference(pem_text: str) -> x509.Certificate:
    """The fixture as parsed by the `cryptography` package."""
    return x509.load_pem_x509_certificate(pem_text.encode("ascii"))
