from __future__ import annotations

from datetime import datetime

from .models import CheckName, CheckResult, FailureReason
from .utils import as_utc, dt_to_utc_iso


def check_validity(not_before: datetime, not_after: datetime, now: datetime) -> CheckResult:
    """
    Both bounds are inclusive. Naive datetimes are read as UTC.
    """
    start, end, at = as_utc(not_before), as_utc(not_after), as_utc(now)
    detail = {"not_before": dt_to_utc_iso(start), "not_after": dt_to_utc_iso(end)}

    if at < start:
        return CheckResult.fail(CheckName.VALIDITY, FailureReason.NOT_YET_VALID, **detail)
    if at > end:
        return CheckResult.fail(CheckName.VALIDITY, FailureReason.EXPIRED, **detail)
    return CheckResult.ok(CheckName.VALIDITY, **detail)
