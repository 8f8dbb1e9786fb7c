"""
Shared test fixtures for the trust-bundle test suite.

Every test starts with an empty system-certificate cache and an untouched
GLOBAL_TRUST default, since both are process-wide state.
"""

from __future__ import annotations

import datetime
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from trust_bundle.adapters.http_client import GLOBAL_TRUST
from trust_bundle.adapters.trust_store import reset_system_certificates


@pytest.fixture(autouse=True)
def _reset_process_state() -> Iterator[None]:
    """Clear the memoized system certificates and the shared default trust."""
    reset_system_certificates()
    previous = GLOBAL_TRUST.ca
    GLOBAL_TRUST.ca = None
    yield
    GLOBAL_TRUST.ca = previous
    reset_system_certificates()


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Drop any structlog configuration a test installed (e.g. via main())."""
    yield
    structlog.reset_defaults()


def make_self_signed_certificate(common_name: str = "trust-bundle test CA") -> x509.Certificate:
    """Generate a throwaway self-signed CA certificate."""
    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.datetime.now(datetime.UTC)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=30))
        .add_extension(x509.BasicConstraints(ca=True, path_length=None), critical=True)
        .sign(key, hashes.SHA256())
    )


@pytest.fixture(scope="session")
def ca_certificate() -> x509.Certificate:
    return make_self_signed_certificate()


@pytest.fixture()
def ca_pem(ca_certificate: x509.Certificate) -> str:
    """PEM text of a self-signed CA certificate."""
    return ca_certificate.public_bytes(serialization.Encoding.PEM).decode("ascii")


@pytest.fixture()
def ca_der(ca_certificate: x509.Certificate) -> bytes:
    """DER bytes of a self-signed CA certificate."""
    return ca_certificate.public_bytes(serialization.Encoding.DER)


@pytest.fixture()
def certificate_tree(tmp_path: Path) -> Path:
    """
    Directory with two files and a nested directory:

        certs/a.pem
        certs/b.pem
        certs/sub/c.pem
    """
    root = tmp_path / "certs"
    (root / "sub").mkdir(parents=True)
    for relative in ("a.pem", "b.pem", "sub/c.pem"):
        (root / relative).write_text(f"placeholder for {relative}\n")
    return root
