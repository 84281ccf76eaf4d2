"""
Tests for the signature-algorithm policy
"""

import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding

from conftest import build_certificate
from tls_compat_analyzer import signature
from tls_compat_analyzer.models import CheckName, FailureReason, TlsVersion

WEAK = ["MD5withRSA", "SHA1withRSA", "MD2withRSA", "MD5withDSA", "SHA1withDSA"]
TLS13 = [
    "SHA256withRSA", "SHA384withRSA", "SHA512withRSA",
    "SHA256withECDSA", "SHA384withECDSA", "SHA512withECDSA",
    "SHA256withRSAPSS", "SHA384withRSAPSS", "SHA512withRSAPSS",
]


class TestSignaturePolicy:

    def test_sets(self):
        assert signature.WEAK_SIGNATURE_ALGORITHMS == frozenset(WEAK)
        assert signature.TLS13_SIGNATURE_ALGORITHMS == frozenset(TLS13)

    @pytest.mark.parametrize("alg", WEAK)
    @pytest.mark.parametrize("version", list(TlsVersion))
    def test_weak_rejected_everywhere(self, alg, version):
        assert not signature.is_acceptable(alg, version)

    @pytest.mark.parametrize("alg", TLS13)
    def test_tls13_allowlist(self, alg):
        assert signature.is_acceptable(alg, TlsVersion.TLS1_3)
        assert signature.is_acceptable(alg, TlsVersion.TLS1_2)

    @pytest.mark.parametrize("alg", ["SHA224withRSA", "SHA256withDSA", "SHA1withECDSA", "Ed25519"])
    def test_tls13_rejects_anything_not_listed(self, alg):
        assert not signature.is_acceptable(alg, TlsVersion.TLS1_3)
        assert signature.is_acceptable(alg, TlsVersion.TLS1_2)

    def test_match_is_case_sensitive(self):
        assert not signature.is_acceptable("sha256withrsa", TlsVersion.TLS1_3)
        # not the canonical token, so not on the blocklist either
        assert signature.is_acceptable("sha1withrsa", TlsVersion.TLS1_2)

    def test_check_result_for_blocklist_hit(self):
        result = signature.check_signature_algorithm("SHA1withRSA", TlsVersion.TLS1_2)
        assert result.check is CheckName.SIGNATURE_ALGORITHM
        assert result.reason is FailureReason.WEAK_SIGNATURE_ALGORITHM
        assert result.detail == {"algorithm": "SHA1withRSA", "weak": True, "allowlist": False}

    def test_check_result_for_allowlist_miss(self):
        result = signature.check_signature_algorithm("SHA224withRSA", TlsVersion.TLS1_3)
        assert not result.passed
        assert result.detail["weak"] is False
        assert result.detail["allowlist"] is True


class TestSignatureAlgorithmName:

    def test_rsa_sha256(self, rsa2048):
        cert = build_certificate(rsa2048)
        assert signature.signature_algorithm_name(cert) == "SHA256withRSA"

    def test_ecdsa_sha384(self, ec256):
        cert = build_certificate(ec256, digest=hashes.SHA384())
        assert signature.signature_algorithm_name(cert) == "SHA384withECDSA"

    def test_dsa_sha256(self, dsa2048):
        cert = build_certificate(dsa2048)
        assert signature.signature_algorithm_name(cert) == "SHA256withDSA"

    def test_rsa_pss(self, rsa2048):
        cert = build_certificate(
            rsa2048,
            rsa_padding=padding.PSS(mgf=padding.MGF1(hashes.SHA256()), salt_length=32),
        )
        assert signature.signature_algorithm_name(cert) == "SHA256withRSAPSS"

    def test_ed25519(self, ed_key):
        cert = build_certificate(ed_key)
        assert signature.signature_algorithm_name(cert) == "Ed25519"
