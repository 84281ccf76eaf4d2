from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Any, Iterable, Iterator

from .keylength import check_key_length
from .keyusage import check_key_usage
from .models import CertificateSubject, InvalidCertificate, TlsVersion, Verdict
from .signature import check_signature_algorithm
from .utils import utc_now
from .validity import check_validity

logger = logging.getLogger(__name__)


def _require(cert: Any, name: str, kind: type | tuple[type, ...]) -> Any:
    if not hasattr(cert, name):
        raise InvalidCertificate(f"missing field: {name}", getattr(cert, "alias", None))
    value = getattr(cert, name)
    if not isinstance(value, kind):
        raise InvalidCertificate(
            f"field {name} has type {type(value).__name__}",
            getattr(cert, "alias", None),
        )
    return value


def _validate(cert: Any) -> None:
    if cert is None:
        raise InvalidCertificate("no certificate")
    _require(cert, "alias", str)
    _require(cert, "not_before", datetime)
    _require(cert, "not_after", datetime)
    sig = _require(cert, "signature_algorithm", str)
    if not sig:
        raise InvalidCertificate("empty signature algorithm", cert.alias)
    if getattr(cert, "public_key", None) is None:
        raise InvalidCertificate("missing field: public_key", cert.alias)
    usage = getattr(cert, "key_usage", None)
    if usage is not None and (
        not isinstance(usage, Sequence)
        or isinstance(usage, (str, bytes))
        or not all(isinstance(b, bool) for b in usage)
    ):
        raise InvalidCertificate("key_usage must be a sequence of booleans", cert.alias)


def evaluate(
    cert: CertificateSubject,
    tls_version: TlsVersion | str,
    *,
    now: datetime | None = None,
) -> Verdict:
    """
    Run every policy check against one certificate for one TLS version.

    All four checks are always evaluated so the verdict lists every reason
    the certificate is incompatible, not only the first one found.

    Raises InvalidCertificate when required attributes are missing or
    unreadable, and ValueError for an unknown TLS version token.
    """
    version = TlsVersion.parse(tls_version)
    _validate(cert)
    at = now or utc_now()

    verdict = Verdict(
        alias=cert.alias,
        tls_version=version,
        validity=check_validity(cert.not_before, cert.not_after, at),
        signature_algorithm=check_signature_algorithm(cert.signature_algorithm, version),
        key_length=check_key_length(cert.public_key, version),
        key_usage=check_key_usage(cert.key_usage, version),
    )
    logger.debug(
        f"{cert.alias}: compatible with {version}={verdict.compatible} "
        f"reasons={[r.value for r in verdict.reasons]}"
    )
    return verdict


def evaluate_many(
    certs: Iterable[CertificateSubject],
    tls_version: TlsVersion | str,
    *,
    now: datetime | None = None,
) -> Iterator[Verdict]:
    # one instant for the whole batch
    at = now or utc_now()
    version = TlsVersion.parse(tls_version)
    for cert in certs:
        yield evaluate(cert, version, now=at)
