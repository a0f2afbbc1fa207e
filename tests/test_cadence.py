"""Tests for rent cadence normalization."""
import pytest

from utils.cadence import BIWEEKLY, MONTHLY, WEEKLY, normalize_cadence


@pytest.mark.parametrize("raw", ["weekly", "WEEKLY", "  Weekly  ", "week", "every week", "every_week"])
def test_weekly_spellings(raw):
    assert normalize_cadence(raw) == WEEKLY


@pytest.mark.parametrize("raw", ["biweekly", "bi-weekly", "Bi_Weekly", "bi weekly", "every 2 weeks", "every-2-weeks", "fortnightly"])
def test_biweekly_spellings(raw):
    assert normalize_cadence(raw) == BIWEEKLY


@pytest.mark.parametrize("raw", ["monthly", "Month", "mo", "mth", "every month", "per month"])
def test_monthly_spellings(raw):
    assert normalize_cadence(raw) == MONTHLY


@pytest.mark.parametrize("raw", [None, "", "   ", "xyz", "daily", "yearly"])
def test_unrecognized_is_none(raw):
    assert normalize_cadence(raw) is None


def test_weekly_checked_before_biweekly():
    # "weekly" must not be swallowed by the biweekly pattern and vice versa
    assert normalize_cadence("weekly") == WEEKLY
    assert normalize_cadence("biweekly") == BIWEEKLY


def test_never_raises_on_non_strings():
    assert normalize_cadence(12) is None
