from __future__ import annotations

import logging

from cryptography import x509
from cryptography.x509.oid import SignatureAlgorithmOID

from .models import CheckName, CheckResult, FailureReason, TlsVersion

logger = logging.getLogger(__name__)


WEAK_SIGNATURE_ALGORITHMS = frozenset({
    "MD5withRSA",
    "SHA1withRSA",
    "MD2withRSA",
    "MD5withDSA",
    "SHA1withDSA",
})

TLS13_SIGNATURE_ALGORITHMS = frozenset(
    f"{digest}with{scheme}"
    for digest in ("SHA256", "SHA384", "SHA512")
    for scheme in ("RSA", "ECDSA", "RSAPSS")
)

_MD2_WITH_RSA = x509.ObjectIdentifier("1.2.840.113549.1.1.2")

_OID_NAMES: dict[x509.ObjectIdentifier, str] = {
    _MD2_WITH_RSA: "MD2withRSA",
    SignatureAlgorithmOID.RSA_WITH_MD5: "MD5withRSA",
    SignatureAlgorithmOID.RSA_WITH_SHA1: "SHA1withRSA",
    SignatureAlgorithmOID.RSA_WITH_SHA224: "SHA224withRSA",
    SignatureAlgorithmOID.RSA_WITH_SHA256: "SHA256withRSA",
    SignatureAlgorithmOID.RSA_WITH_SHA384: "SHA384withRSA",
    SignatureAlgorithmOID.RSA_WITH_SHA512: "SHA512withRSA",
    SignatureAlgorithmOID.ECDSA_WITH_SHA1: "SHA1withECDSA",
    SignatureAlgorithmOID.ECDSA_WITH_SHA224: "SHA224withECDSA",
    SignatureAlgorithmOID.ECDSA_WITH_SHA256: "SHA256withECDSA",
    SignatureAlgorithmOID.ECDSA_WITH_SHA384: "SHA384withECDSA",
    SignatureAlgorithmOID.ECDSA_WITH_SHA512: "SHA512withECDSA",
    SignatureAlgorithmOID.DSA_WITH_SHA1: "SHA1withDSA",
    SignatureAlgorithmOID.DSA_WITH_SHA224: "SHA224withDSA",
    SignatureAlgorithmOID.DSA_WITH_SHA256: "SHA256withDSA",
    SignatureAlgorithmOID.ED25519: "Ed25519",
    SignatureAlgorithmOID.ED448: "Ed448",
}


def signature_algorithm_name(cert: x509.Certificate) -> str:
    """
    Canonical "<HASH>with<SCHEME>" identifier of the certificate signature.
    Unrecognised algorithms are returned as their dotted OID.
    """
    oid = cert.signature_algorithm_oid
    if oid == SignatureAlgorithmOID.RSASSA_PSS:
        digest = cert.signature_hash_algorithm
        if digest is None:
            return "RSAPSS"
        return f"{digest.name.upper().replace('-', '')}withRSAPSS"
    return _OID_NAMES.get(oid, oid.dotted_string)


def is_acceptable(signature_algorithm: str, tls_version: TlsVersion) -> bool:
    # TLS 1.3 only permits an explicit set of schemes
    if tls_version is TlsVersion.TLS1_3:
        return signature_algorithm in TLS13_SIGNATURE_ALGORITHMS
    return signature_algorithm not in WEAK_SIGNATURE_ALGORITHMS


def check_signature_algorithm(signature_algorithm: str, tls_version: TlsVersion) -> CheckResult:
    if is_acceptable(signature_algorithm, tls_version):
        return CheckResult.ok(CheckName.SIGNATURE_ALGORITHM, algorithm=signature_algorithm)

    logger.debug(f"signature algorithm {signature_algorithm} rejected for {tls_version}")
    return CheckResult.fail(
        CheckName.SIGNATURE_ALGORITHM,
        FailureReason.WEAK_SIGNATURE_ALGORITHM,
        algorithm=signature_algorithm,
        weak=signature_algorithm in WEAK_SIGNATURE_ALGORITHMS,
        allowlist=tls_version is TlsVersion.TLS1_3,
    )
