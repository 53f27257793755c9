"""Shared fixtures for connector tests."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

from briefbutler_connector.models.spool import SpoolSubmissionData


def write_certificate_pair(
    directory: Path,
    not_before: datetime | None = None,
    not_after: datetime | None = None,
) -> tuple[Path, Path]:
    """Write a self-signed PEM certificate and its private key, return their paths."""
    now = datetime.now(timezone.utc)
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "briefbutler-client")])
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(not_before or now - timedelta(days=1))
        .not_valid_after(not_after or now + timedelta(days=30))
        .sign(key, hashes.SHA256())
    )

    cert_path = directory / "cert.crt"
    key_path = directory / "key.key"
    cert_path.write_bytes(cert.public_bytes(serialization.Encoding.PEM))
    key_path.write_bytes(
        key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        )
    )
    return cert_path, key_path


@pytest.fixture
def cert_pair(tmp_path):
    """Valid client certificate and key on disk."""
    return write_certificate_pair(tmp_path)


@pytest.fixture
def pdf_file(tmp_path):
    """Small PDF document on disk."""
    path = tmp_path / "letter.pdf"
    path.write_bytes(b"%PDF-1.4\n%test document\n%%EOF\n")
    return path


@pytest.fixture
def submission_data(pdf_file):
    """Well-formed spool submission pointing at the test PDF."""
    return SpoolSubmissionData(
        pdf_path=str(pdf_file),
        recipient_name="Max Mustermann",
        recipient_address="Hauptstrasse 1",
        recipient_city="Wien",
        recipient_zip="1010",
        recipient_country="Austria",
        recipient_email="max@example.com",
        sender_name="Erika Musterfrau",
        sender_address="Ringstrasse 5",
        sender_city="Graz",
        sender_zip="8010",
        sender_country="Austria",
        reference="INV-2024-001",
    )


@pytest.fixture
def make_cert_pair():
    """Factory writing certificate pairs with a custom validity window."""
    return write_certificate_pair
