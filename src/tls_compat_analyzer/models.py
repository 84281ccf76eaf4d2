from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


# Nine flags at the X.509 bit positions; None means the extension is absent.
KeyUsage = tuple[bool, ...]


class InvalidCertificate(ValueError):
    """
    The certificate object is malformed; no verdict can be given for it.
    """

    def __init__(self, message: str, alias: str | None = None) -> None:
        super().__init__(message)
        self.alias = alias


class TlsVersion(str, Enum):
    TLS1_0 = "TLSv1"
    TLS1_1 = "TLSv1.1"
    TLS1_2 = "TLSv1.2"
    TLS1_3 = "TLSv1.3"

    @classmethod
    def parse(cls, token: str | TlsVersion) -> TlsVersion:
        """
        Accepts the ssl module tokens ("TLSv1.3") and the short forms
        "1.3", "TLS1.3" and "TLS 1.3", case-insensitively.

        Any other non-empty token ("TLS", "SSLv3", ...) is an unspecified
        version and gets the TLS 1.2 rules.
        """
        if isinstance(token, cls):
            return token
        if not isinstance(token, str) or not token.strip():
            raise ValueError(f"unsupported TLS version: {token!r}")
        norm = token.strip().upper().replace(" ", "").replace("V", "")
        if norm.startswith("TLS"):
            norm = norm[3:]
        if norm == "1.0":
            norm = "1"
        for member in cls:
            if member.value.upper().replace("V", "")[3:] == norm:
                return member
        logger.debug(f"unrecognised TLS version {token!r}, using {cls.TLS1_2.value} rules")
        return cls.TLS1_2

    def __str__(self) -> str:
        return self.value


class KeyAlgorithm(str, Enum):
    RSA = "RSA"
    EC = "EC"
    DSA = "DSA"
    UNKNOWN = "Unknown"


class CheckName(str, Enum):
    VALIDITY = "validity"
    SIGNATURE_ALGORITHM = "signature_algorithm"
    KEY_LENGTH = "key_length"
    KEY_USAGE = "key_usage"


class FailureReason(str, Enum):
    EXPIRED = "expired"
    NOT_YET_VALID = "not_yet_valid"
    WEAK_SIGNATURE_ALGORITHM = "weak_signature_algorithm"
    INSUFFICIENT_KEY_LENGTH = "insufficient_key_length"
    INCOMPATIBLE_KEY_USAGE = "incompatible_key_usage"


def _freeze(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


class Detail(Mapping):
    """
    Read-only, hashable mapping of check diagnostics. Sequences are stored
    as tuples.
    """

    __slots__ = ("_items",)

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._items = {k: _freeze(v) for k, v in (values or {}).items()}

    def __getitem__(self, key: str) -> Any:
        return self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __hash__(self) -> int:
        return hash(tuple(sorted(self._items.items())))

    def __repr__(self) -> str:
        return f"Detail({self._items!r})"


@dataclass(frozen=True)
class CertificateSubject:
    """
    Read-only view of the certificate attributes the policies look at.
    """
    alias: str
    subject: str
    issuer: str
    not_before: datetime
    not_after: datetime
    signature_algorithm: str
    public_key: Any  # cryptography public key object
    key_usage: KeyUsage | None = None
    sha256: str | None = None


@dataclass(frozen=True)
class CheckResult:
    check: CheckName
    passed: bool
    reason: FailureReason | None = None
    detail: Detail = field(default_factory=Detail)

    def __post_init__(self) -> None:
        if not isinstance(self.detail, Detail):
            object.__setattr__(self, "detail", Detail(self.detail))

    @classmethod
    def ok(cls, check: CheckName, **detail: Any) -> CheckResult:
        return cls(check=check, passed=True, detail=Detail(detail))

    @classmethod
    def fail(cls, check: CheckName, reason: FailureReason, **detail: Any) -> CheckResult:
        return cls(check=check, passed=False, reason=reason, detail=Detail(detail))

    def to_dict(self) -> dict[str, Any]:
        return {
            "check": self.check.value,
            "passed": self.passed,
            "reason": self.reason.value if self.reason else None,
            "detail": {k: list(v) if isinstance(v, tuple) else v for k, v in self.detail.items()},
        }


@dataclass(frozen=True)
class Verdict:
    """
    Outcome of one certificate against one TLS version.
    """
    alias: str
    tls_version: TlsVersion
    validity: CheckResult
    signature_algorithm: CheckResult
    key_length: CheckResult
    key_usage: CheckResult

    @property
    def checks(self) -> tuple[CheckResult, ...]:
        return (self.validity, self.signature_algorithm, self.key_length, self.key_usage)

    @property
    def compatible(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failures(self) -> list[CheckResult]:
        return [c for c in self.checks if not c.passed]

    @property
    def reasons(self) -> list[FailureReason]:
        return [c.reason for c in self.failures if c.reason is not None]

    def to_dict(self) -> dict[str, Any]:
        return {
            "alias": self.alias,
            "tls_version": self.tls_version.value,
            "compatible": self.compatible,
            "reasons": [r.value for r in self.reasons],
            "checks": [c.to_dict() for c in self.checks],
        }
