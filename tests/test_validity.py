"""
Tests for the temporal validity check
"""

import datetime

from conftest import NOW
from tls_compat_analyzer.models import CheckName, FailureReason
from tls_compat_analyzer.validity import check_validity

ONE_US = datetime.timedelta(microseconds=1)
START = NOW - datetime.timedelta(days=10)
END = NOW + datetime.timedelta(days=10)


class TestCheckValidity:

    def test_inside_window(self):
        result = check_validity(START, END, NOW)
        assert result.passed
        assert result.check is CheckName.VALIDITY

    def test_boundaries_are_inclusive(self):
        assert check_validity(START, END, START).passed
        assert check_validity(START, END, END).passed

    def test_expired_one_microsecond_after(self):
        result = check_validity(START, END, END + ONE_US)
        assert not result.passed
        assert result.reason is FailureReason.EXPIRED

    def test_not_yet_valid(self):
        result = check_validity(START, END, START - ONE_US)
        assert result.reason is FailureReason.NOT_YET_VALID

    def test_naive_datetimes_are_utc(self):
        naive_end = END.replace(tzinfo=None)
        assert check_validity(START, naive_end, END).passed
        assert check_validity(START, naive_end, END + ONE_US).reason is FailureReason.EXPIRED

    def test_detail_has_window(self):
        result = check_validity(START, END, NOW)
        assert result.detail == {
            "not_before": "2026-05-22T12:00:00Z",
            "not_after": "2026-06-11T12:00:00Z",
        }
