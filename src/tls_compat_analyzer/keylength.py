from __future__ import annotations

import logging
from typing import Any

from cryptography.hazmat.primitives.asymmetric import dsa, ec, rsa

from .models import CheckName, CheckResult, FailureReason, KeyAlgorithm, TlsVersion

logger = logging.getLogger(__name__)


RSA_MIN_KEY_SIZE_TLS13 = 2048
RSA_MIN_KEY_SIZE_TLS12 = 1024
ECDSA_MIN_KEY_SIZE_TLS13 = 256
ECDSA_MIN_KEY_SIZE_TLS12 = 224
DSA_MIN_KEY_SIZE = 1024

# (TLS 1.2 and earlier, TLS 1.3); None means the algorithm is not accepted at all
_MINIMUMS: dict[KeyAlgorithm, tuple[int, int | None]] = {
    KeyAlgorithm.RSA: (RSA_MIN_KEY_SIZE_TLS12, RSA_MIN_KEY_SIZE_TLS13),
    KeyAlgorithm.EC: (ECDSA_MIN_KEY_SIZE_TLS12, ECDSA_MIN_KEY_SIZE_TLS13),
    KeyAlgorithm.DSA: (DSA_MIN_KEY_SIZE, None),
}

# curve.key_size is the field size; these binary curves have a shorter group
# order (SEC 2). Prime and brainpool curves have order bits == field bits.
_EC_ORDER_BITS = {
    "sect233k1": 232,
    "sect283k1": 281,
    "sect283r1": 282,
    "sect409k1": 407,
    "sect571k1": 570,
    "sect571r1": 570,
}


def key_algorithm(public_key: Any) -> KeyAlgorithm:
    if isinstance(public_key, rsa.RSAPublicKey):
        return KeyAlgorithm.RSA
    if isinstance(public_key, ec.EllipticCurvePublicKey):
        return KeyAlgorithm.EC
    if isinstance(public_key, dsa.DSAPublicKey):
        return KeyAlgorithm.DSA
    return KeyAlgorithm.UNKNOWN


def effective_key_size(public_key: Any) -> int:
    """
    RSA: modulus bits. EC: bits of the curve order. DSA: bits of the prime p.
    Anything else is 0 (size could not be determined).
    """
    if isinstance(public_key, rsa.RSAPublicKey):
        return public_key.public_numbers().n.bit_length()
    if isinstance(public_key, ec.EllipticCurvePublicKey):
        curve = public_key.curve
        return _EC_ORDER_BITS.get(curve.name, curve.key_size)
    if isinstance(public_key, dsa.DSAPublicKey):
        return public_key.parameters().parameter_numbers().p.bit_length()
    return 0


def minimum_key_size(family: KeyAlgorithm, tls_version: TlsVersion) -> int | None:
    """
    Minimum key size for the family, or None when no size is acceptable
    (DSA under TLS 1.3) or the family has no threshold (Unknown).
    """
    row = _MINIMUMS.get(family)
    if row is None:
        return None
    tls12, tls13 = row
    return tls13 if tls_version is TlsVersion.TLS1_3 else tls12


def is_rejected(family: KeyAlgorithm, tls_version: TlsVersion) -> bool:
    return family in _MINIMUMS and minimum_key_size(family, tls_version) is None


def is_sufficient(public_key: Any, family: KeyAlgorithm, tls_version: TlsVersion) -> bool:
    if family is KeyAlgorithm.UNKNOWN:
        # no threshold known for this algorithm, accepted
        return True
    if is_rejected(family, tls_version):
        return False
    minimum = minimum_key_size(family, tls_version)
    return effective_key_size(public_key) >= minimum


def check_key_length(public_key: Any, tls_version: TlsVersion) -> CheckResult:
    family = key_algorithm(public_key)
    size = effective_key_size(public_key)
    minimum = minimum_key_size(family, tls_version)
    detail = {"algorithm": family.value, "key_size": size, "minimum_key_size": minimum}

    if is_sufficient(public_key, family, tls_version):
        return CheckResult.ok(CheckName.KEY_LENGTH, **detail)

    if is_rejected(family, tls_version):
        logger.debug(f"{family.value} keys are not accepted for {tls_version}")
        detail["rejected_algorithm"] = True
    else:
        logger.debug(f"{family.value} key of {size} bits is below {minimum} for {tls_version}")
    return CheckResult.fail(CheckName.KEY_LENGTH, FailureReason.INSUFFICIENT_KEY_LENGTH, **detail)
