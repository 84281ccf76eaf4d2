from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from .evaluator import evaluate
from .models import InvalidCertificate, TlsVersion, Verdict
from .store import CredentialStore
from .utils import utc_now

logger = logging.getLogger(__name__)


class Reporter(Protocol):
    def report(self, name: str, verdict: Verdict) -> None: ...

    def missing(self, name: str) -> None: ...

    def invalid(self, name: str, error: InvalidCertificate) -> None: ...


@dataclass
class WalkSummary:
    total: int = 0
    compatible: int = 0
    incompatible: int = 0
    missing: int = 0
    invalid: int = 0

    @property
    def all_compatible(self) -> bool:
        return self.compatible == self.total

    def to_dict(self) -> dict[str, int | bool]:
        return {
            "total": self.total,
            "compatible": self.compatible,
            "incompatible": self.incompatible,
            "missing": self.missing,
            "invalid": self.invalid,
            "all_compatible": self.all_compatible,
        }


def walk(
    store: CredentialStore,
    tls_version: TlsVersion | str,
    reporter: Reporter,
    *,
    now: datetime | None = None,
) -> WalkSummary:
    """
    Evaluate every entry of the store and hand each outcome to the reporter.
    A failing, missing or malformed entry never stops the walk.
    """
    version = TlsVersion.parse(tls_version)
    at = now or utc_now()
    summary = WalkSummary()

    for name in store.names():
        summary.total += 1
        try:
            cert = store.get(name)
            if cert is None:
                logger.warning(f"entry '{name}' is not present in the store")
                summary.missing += 1
                reporter.missing(name)
                continue
            verdict = evaluate(cert, version, now=at)
        except InvalidCertificate as e:
            logger.warning(f"entry '{name}' is not a usable certificate: {e}")
            summary.invalid += 1
            reporter.invalid(name, e)
            continue

        if verdict.compatible:
            summary.compatible += 1
        else:
            summary.incompatible += 1
        reporter.report(name, verdict)

    return summary
