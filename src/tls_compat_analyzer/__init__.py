"""
Audit X.509 certificates against the requirements of a TLS protocol version.
"""
from __future__ import annotations

__version__ = "0.1.0"

from .evaluator import InvalidCertificate, evaluate, evaluate_many
from .models import (
    CertificateSubject,
    CheckName,
    CheckResult,
    FailureReason,
    KeyAlgorithm,
    TlsVersion,
    Verdict,
)

__all__ = [
    "__version__",
    "CertificateSubject",
    "CheckName",
    "CheckResult",
    "FailureReason",
    "InvalidCertificate",
    "KeyAlgorithm",
    "TlsVersion",
    "Verdict",
    "evaluate",
    "evaluate_many",
]
