"""
X.509 key usage bits and the TLS server key-usage policy.

A key usage vector is a tuple of nine booleans indexed by the bit positions
of RFC 5280 section 4.2.1.3. ``None`` stands for a certificate without the
extension, which places no restriction on the key.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence

from cryptography import x509

from .models import CheckName, CheckResult, FailureReason, KeyUsage, TlsVersion

logger = logging.getLogger(__name__)


DIGITAL_SIGNATURE_BIT = 0
NON_REPUDIATION_BIT = 1
KEY_ENCIPHERMENT_BIT = 2
DATA_ENCIPHERMENT_BIT = 3
KEY_AGREEMENT_BIT = 4
KEY_CERT_SIGN_BIT = 5
CRL_SIGN_BIT = 6
ENCIPHER_ONLY_BIT = 7
DECIPHER_ONLY_BIT = 8

KEY_USAGE_COUNT = 9

KEY_USAGE_NAMES = (
    "Digital Signature",
    "Non Repudiation",
    "Key Encipherment",
    "Data Encipherment",
    "Key Agreement",
    "Key Cert Sign",
    "CRL Sign",
    "Encipher Only",
    "Decipher Only",
)


def bit_name(position: int) -> str:
    if 0 <= position < KEY_USAGE_COUNT:
        return KEY_USAGE_NAMES[position]
    return "Unknown"


def is_bit_set(vector: Sequence[bool] | None, position: int) -> bool:
    if vector is None or position < 0 or position >= len(vector):
        return False
    return bool(vector[position])


def set_bits(vector: Sequence[bool] | None) -> list[str]:
    if vector is None:
        return []
    return [bit_name(i) for i in range(min(len(vector), KEY_USAGE_COUNT)) if vector[i]]


def _required_bits(tls_version: TlsVersion) -> tuple[int, ...]:
    # no static RSA key exchange in TLS 1.3, so keyEncipherment does not count
    if tls_version is TlsVersion.TLS1_3:
        return (DIGITAL_SIGNATURE_BIT, KEY_AGREEMENT_BIT)
    return (DIGITAL_SIGNATURE_BIT, KEY_ENCIPHERMENT_BIT, KEY_AGREEMENT_BIT)


def is_compatible(vector: Sequence[bool] | None, tls_version: TlsVersion) -> bool:
    if vector is None:
        return True
    return any(is_bit_set(vector, bit) for bit in _required_bits(tls_version))


def from_extension(ku: x509.KeyUsage) -> KeyUsage:
    # encipher_only/decipher_only raise unless key_agreement is set
    agreement = ku.key_agreement
    return (
        ku.digital_signature,
        ku.content_commitment,
        ku.key_encipherment,
        ku.data_encipherment,
        agreement,
        ku.key_cert_sign,
        ku.crl_sign,
        ku.encipher_only if agreement else False,
        ku.decipher_only if agreement else False,
    )


def check_key_usage(vector: Sequence[bool] | None, tls_version: TlsVersion) -> CheckResult:
    present = vector is not None
    detail = {
        "present": present,
        "set": set_bits(vector),
        "accepted": [bit_name(b) for b in _required_bits(tls_version)],
    }
    if is_compatible(vector, tls_version):
        return CheckResult.ok(CheckName.KEY_USAGE, **detail)

    logger.debug(f"key usage {detail['set']} has none of {detail['accepted']} for {tls_version}")
    return CheckResult.fail(CheckName.KEY_USAGE, FailureReason.INCOMPATIBLE_KEY_USAGE, **detail)
