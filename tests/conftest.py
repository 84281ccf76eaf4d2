"""
Shared keys, certificates and subject factories for the test suite
"""

import datetime

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed25519, rsa
from cryptography.x509.oid import NameOID

from tls_compat_analyzer.models import CertificateSubject

UTC = datetime.timezone.utc
NOW = datetime.datetime(2026, 6, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture(scope="session")
def rsa2048():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa1024():
    return rsa.generate_private_key(public_exponent=65537, key_size=1024)


@pytest.fixture(scope="session")
def ec256():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def ec224():
    return ec.generate_private_key(ec.SECP224R1())


@pytest.fixture(scope="session")
def ec384():
    return ec.generate_private_key(ec.SECP384R1())


@pytest.fixture(scope="session")
def dsa2048():
    return dsa.generate_private_key(key_size=2048)


@pytest.fixture(scope="session")
def ed_key():
    return ed25519.Ed25519PrivateKey.generate()


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_subject(rsa2048):
    """Build a CertificateSubject that passes every check unless overridden"""

    def _make(**overrides):
        values = {
            "alias": "server",
            "subject": "CN=server.example.com",
            "issuer": "CN=Example CA",
            "not_before": NOW - datetime.timedelta(days=30),
            "not_after": NOW + datetime.timedelta(days=335),
            "signature_algorithm": "SHA256withRSA",
            "public_key": rsa2048.public_key(),
            "key_usage": None,
        }
        values.update(overrides)
        return CertificateSubject(**values)

    return _make


def key_usage_vector(*bits):
    """Nine-flag vector with only the given positions set"""
    return tuple(i in bits for i in range(9))


def key_usage_extension(**flags):
    values = {
        "digital_signature": False,
        "content_commitment": False,
        "key_encipherment": False,
        "data_encipherment": False,
        "key_agreement": False,
        "key_cert_sign": False,
        "crl_sign": False,
        "encipher_only": False,
        "decipher_only": False,
    }
    values.update(flags)
    return x509.KeyUsage(**values)


def build_certificate(
    key,
    signer=None,
    *,
    common_name="server.example.com",
    digest=None,
    key_usage=None,
    not_before=None,
    not_after=None,
    **sign_kwargs,
):
    """Self-signed (or signer-signed) certificate for ``key``"""
    signer = signer or key
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    builder = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "Test CA")]))
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(not_before or NOW - datetime.timedelta(days=30))
        .not_valid_after(not_after or NOW + datetime.timedelta(days=335))
    )
    if key_usage is not None:
        builder = builder.add_extension(key_usage, critical=True)
    if isinstance(signer, ed25519.Ed25519PrivateKey):
        return builder.sign(signer, None)
    return builder.sign(signer, digest or hashes.SHA256(), **sign_kwargs)
