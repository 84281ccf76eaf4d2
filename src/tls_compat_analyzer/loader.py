from __future__ import annotations

import logging

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization

from .keyusage import from_extension
from .models import CertificateSubject, InvalidCertificate, KeyUsage
from .signature import signature_algorithm_name
from .utils import sha256_hex

logger = logging.getLogger(__name__)


def _name_to_str(name: x509.Name) -> str:
    # RFC4514
    try:
        return name.rfc4514_string()
    except ValueError:
        return str(name)


def _key_usage(cert: x509.Certificate) -> KeyUsage | None:
    try:
        ku = cert.extensions.get_extension_for_class(x509.KeyUsage).value
    except x509.ExtensionNotFound:
        return None
    return from_extension(ku)


def _validity(cert: x509.Certificate):
    # *_utc accessors appeared in cryptography 42
    if hasattr(cert, "not_valid_before_utc"):
        return cert.not_valid_before_utc, cert.not_valid_after_utc
    return cert.not_valid_before, cert.not_valid_after


def _public_key(cert: x509.Certificate):
    try:
        return cert.public_key()
    except (UnsupportedAlgorithm, ValueError) as e:
        # left empty; the evaluator reports the entry as invalid
        logger.warning(f"unreadable public key: {e}")
        return None


def subject_from_x509(alias: str, cert: x509.Certificate) -> CertificateSubject:
    """
    Read the attributes the policies need from a parsed certificate.

    Extensions and signature parameters are decoded lazily by cryptography;
    a malformed certificate surfaces here as InvalidCertificate.
    """
    try:
        not_before, not_after = _validity(cert)
        der = cert.public_bytes(serialization.Encoding.DER)
        subject = CertificateSubject(
            alias=alias,
            subject=_name_to_str(cert.subject),
            issuer=_name_to_str(cert.issuer),
            not_before=not_before,
            not_after=not_after,
            signature_algorithm=signature_algorithm_name(cert),
            public_key=_public_key(cert),
            key_usage=_key_usage(cert),
            sha256=sha256_hex(der),
        )
    except (UnsupportedAlgorithm, ValueError) as e:
        raise InvalidCertificate(f"cannot read certificate: {e}", alias) from e
    logger.debug(f"loaded {alias}: {subject.subject} ({subject.signature_algorithm})")
    return subject
