from __future__ import annotations

import logging
from typing import Any

from .models import InvalidCertificate, Verdict

_default_logger = logging.getLogger(__name__)


class LoggingReporter:
    """
    Writes one block of log records per certificate.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or _default_logger

    def report(self, name: str, verdict: Verdict) -> None:
        log = self.logger
        log.info(f"Alias: {name}")
        log.info(f"  Compatible with {verdict.tls_version}: {verdict.compatible}")
        for check in verdict.checks:
            log.info(f"  {check.check.value}: {'ok' if check.passed else check.reason.value}")
        log.debug(f"  Valid from: {verdict.validity.detail.get('not_before')}")
        log.debug(f"  Valid to: {verdict.validity.detail.get('not_after')}")
        for failure in verdict.failures:
            log.warning(f"Certificate '{name}' failed {failure.check.value}: {failure.detail}")

    def missing(self, name: str) -> None:
        self.logger.warning(f"Certificate '{name}' not found")

    def invalid(self, name: str, error: InvalidCertificate) -> None:
        self.logger.error(f"Certificate '{name}' is invalid: {error}")


class CollectingReporter:
    """
    Keeps JSON-ready results for every entry in walk order.
    """

    def __init__(self) -> None:
        self.results: list[dict[str, Any]] = []

    def report(self, name: str, verdict: Verdict) -> None:
        self.results.append({"name": name, "status": "evaluated", "verdict": verdict.to_dict()})

    def missing(self, name: str) -> None:
        self.results.append({"name": name, "status": "missing", "verdict": None})

    def invalid(self, name: str, error: InvalidCertificate) -> None:
        self.results.append({"name": name, "status": "invalid", "error": str(error), "verdict": None})


class MultiReporter:
    def __init__(self, *reporters: Any) -> None:
        self.reporters = reporters

    def report(self, name: str, verdict: Verdict) -> None:
        for r in self.reporters:
            r.report(name, verdict)

    def missing(self, name: str) -> None:
        for r in self.reporters:
            r.missing(name)

    def invalid(self, name: str, error: InvalidCertificate) -> None:
        for r in self.reporters:
            r.invalid(name, error)
