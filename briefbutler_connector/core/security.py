"""Client certificate loading and TLS context setup for mutual TLS."""

import ssl
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.types import PrivateKeyTypes

from briefbutler_connector.utils.logger import logger


class CertificateError(Exception):
    """Raised when client certificate operations fail."""

    pass


def load_certificate(cert_path: Path) -> x509.Certificate:
    """Load PEM X.509 certificate from file."""
    if not cert_path.exists():
        raise CertificateError(f"Certificate file not found at {cert_path}")
    try:
        cert = x509.load_pem_x509_certificate(cert_path.read_bytes())
        logger.debug(f"Loaded certificate from {cert_path}")
        return cert
    except Exception as e:
        raise CertificateError(f"Failed to load certificate from {cert_path}: {e}") from e


def load_private_key(key_path: Path, password: Optional[str] = None) -> PrivateKeyTypes:
    """Load PEM private key from file."""
    if not key_path.exists():
        raise CertificateError(f"Key file not found at {key_path}")
    try:
        key = serialization.load_pem_private_key(
            key_path.read_bytes(),
            password=password.encode() if password else None,
        )
        logger.debug(f"Loaded private key from {key_path}")
        return key
    except Exception as e:
        raise CertificateError(f"Failed to load private key from {key_path}: {e}") from e


def check_certificate_validity(cert: x509.Certificate) -> bool:
    """Check the certificate is inside its validity window (basic checks)."""
    now = datetime.now(timezone.utc)
    if cert.not_valid_after_utc < now:
        logger.warning(f"Client certificate expired on {cert.not_valid_after_utc.isoformat()}")
        return False
    if cert.not_valid_before_utc > now:
        logger.warning(
            f"Client certificate is not valid before {cert.not_valid_before_utc.isoformat()}"
        )
        return False
    return True


def create_ssl_context(verify: bool = True) -> ssl.SSLContext:
    """Create a client TLS context, optionally without server certificate verification."""
    context = ssl.create_default_context()
    if not verify:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def build_mtls_context(
    cert_path: Path,
    key_path: Path,
    key_password: Optional[str] = None,
    verify: bool = True,
) -> ssl.SSLContext:
    """Build a TLS context presenting the client certificate and key.

    Raises CertificateError if either file is missing, unparsable or the
    pair does not match.
    """
    cert = load_certificate(cert_path)
    load_private_key(key_path, key_password)
    check_certificate_validity(cert)

    context = create_ssl_context(verify=verify)
    try:
        context.load_cert_chain(
            certfile=str(cert_path),
            keyfile=str(key_path),
            password=key_password,
        )
    except (ssl.SSLError, OSError) as e:
        raise CertificateError(f"Certificate and key could not be used together: {e}") from e
    return context
