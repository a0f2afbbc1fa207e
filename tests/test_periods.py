"""Tests for Friday columns and rent period generation."""
from datetime import date
from decimal import Decimal

import pytest

from models import Lease
from services.period_service import (
    default_grid_range,
    friday_columns,
    period_window,
    periods_for_lease,
)

JULY_AUGUST_2025 = [
    date(2025, 7, 4), date(2025, 7, 11), date(2025, 7, 18),
    date(2025, 7, 25), date(2025, 8, 1), date(2025, 8, 8),
]


def _lease(start, end=None, cadence="Weekly", rent="200", due_day=None, lease_id=1):
    return Lease(
        id=lease_id,
        property_id=1,
        tenant_id=1,
        rent=Decimal(rent),
        rent_cadence=cadence,
        lease_start_date=start,
        lease_end_date=end,
        rent_due_day=due_day,
        status="active",
    )


def _fridays(*days):
    return [date.fromisoformat(d) for d in days]


def _active(periods):
    return [p.friday for p in periods if p.is_active]


def test_friday_columns_for_summer_window():
    assert friday_columns(date(2025, 7, 1), date(2025, 8, 15)) == JULY_AUGUST_2025


def test_friday_columns_single_and_friday_start():
    assert friday_columns(date(2025, 7, 4), date(2025, 7, 4)) == [date(2025, 7, 4)]
    assert friday_columns(date(2025, 7, 4), date(2025, 7, 11)) == [date(2025, 7, 4), date(2025, 7, 11)]
    assert friday_columns(date(2025, 7, 5), date(2025, 7, 10)) == []


@pytest.mark.parametrize("friday,cadence,expected", [
    (date(2025, 7, 4), "weekly", (date(2025, 6, 28), date(2025, 7, 4))),
    (date(2025, 7, 11), "biweekly", (date(2025, 7, 5), date(2025, 7, 11))),
    (date(2025, 7, 4), "monthly", (date(2025, 7, 1), date(2025, 7, 31))),
])
def test_period_window(friday, cadence, expected):
    assert period_window(friday, cadence) == expected


def test_weekly_all_fridays_active():
    periods = periods_for_lease(_lease(date(2025, 7, 1), date(2025, 8, 31)), JULY_AUGUST_2025)
    assert len(periods) == 6
    assert all(p.is_active for p in periods)
    assert all(p.cadence == "weekly" for p in periods)
    assert all(p.expected_amount == Decimal("200") for p in periods)
    assert periods[0].window_start == date(2025, 6, 28)
    assert periods[0].due_date == date(2025, 7, 4)
    assert periods[0].month_key == "2025-07"


def test_biweekly_from_friday_start():
    lease = _lease(date(2025, 7, 4), date(2025, 8, 31), cadence="Bi-Weekly", rent="400")
    periods = periods_for_lease(lease, JULY_AUGUST_2025)
    assert [p.is_active for p in periods] == [True, False, True, False, True, False]


def test_biweekly_anchor_is_first_friday_after_start():
    lease = _lease(date(2024, 7, 17), date(2024, 9, 17), cadence="biweekly", rent="1000")
    fridays = _fridays("2024-07-19", "2024-07-26", "2024-08-02", "2024-08-09", "2024-08-16", "2024-08-23")
    periods = periods_for_lease(lease, fridays)
    assert [p.is_active for p in periods] == [True, False, True, False, True, False]


def test_biweekly_anchor_ignores_header_position():
    lease = _lease(date(2024, 7, 19), date(2024, 8, 19), cadence="biweekly")
    periods = periods_for_lease(lease, _fridays("2024-07-19", "2024-08-02", "2024-08-16"))
    assert all(p.is_active for p in periods)


def test_monthly_first_friday_when_no_due_day():
    lease = _lease(date(2025, 7, 1), date(2025, 8, 31), cadence="Monthly", rent="490")
    periods = periods_for_lease(lease, JULY_AUGUST_2025)
    assert _active(periods) == [date(2025, 7, 4), date(2025, 8, 1)]
    assert all(p.cadence == "monthly" for p in periods)
    assert periods[1].window_start == date(2025, 7, 1)
    assert periods[1].window_end == date(2025, 7, 31)


def test_monthly_prefers_friday_on_or_before_due_day():
    lease = _lease(date(2024, 7, 1), date(2024, 10, 31), cadence="monthly", rent="2000", due_day=15)
    fridays = _fridays(
        "2024-07-05", "2024-07-12", "2024-07-19", "2024-07-26",
        "2024-08-02", "2024-08-09", "2024-08-16", "2024-08-23", "2024-08-30",
        "2024-09-06", "2024-09-13", "2024-09-20", "2024-09-27",
    )
    assert _active(periods_for_lease(lease, fridays)) == _fridays("2024-07-12", "2024-08-09", "2024-09-13")


def test_monthly_due_day_one():
    lease = _lease(date(2024, 8, 1), date(2024, 9, 30), cadence="monthly", due_day=1)
    fridays = _fridays("2024-08-02", "2024-08-09", "2024-09-06", "2024-09-13")
    assert [p.is_active for p in periods_for_lease(lease, fridays)] == [True, False, True, False]


def test_monthly_due_day_31_takes_last_friday():
    lease = _lease(date(2024, 7, 1), date(2024, 8, 31), cadence="monthly", due_day=31)
    fridays = _fridays("2024-07-26", "2024-08-02", "2024-08-09", "2024-08-16", "2024-08-23", "2024-08-30")
    assert [p.is_active for p in periods_for_lease(lease, fridays)] == [True, False, False, False, False, True]


def test_monthly_due_day_31_in_february():
    lease = _lease(date(2024, 1, 1), cadence="monthly", due_day=31)
    fridays = friday_columns(date(2024, 2, 1), date(2024, 2, 29))
    assert _active(periods_for_lease(lease, fridays)) == [date(2024, 2, 23)]


def test_monthly_never_leaves_a_month_without_a_friday():
    lease = _lease(date(2024, 7, 1), date(2024, 8, 31), cadence="monthly", due_day=15)
    periods = periods_for_lease(lease, _fridays("2024-07-19", "2024-08-16"))
    assert all(p.is_active for p in periods)


def test_monthly_open_ended_lease():
    lease = _lease(date(2024, 7, 1), cadence="monthly", due_day=15)
    periods = periods_for_lease(lease, _fridays("2024-07-19", "2024-08-16", "2024-09-13"))
    assert all(p.is_active for p in periods)


def test_month_outside_lease_has_no_active_friday():
    lease = _lease(date(2024, 8, 1), date(2024, 8, 31), cadence="monthly")
    periods = periods_for_lease(lease, _fridays("2024-07-05", "2024-08-02", "2024-09-06"))
    assert _active(periods) == [date(2024, 8, 2)]


def test_raw_cadence_mentioning_month_is_monthly():
    lease = _lease(date(2025, 7, 1), cadence="twice a month")
    periods = periods_for_lease(lease, JULY_AUGUST_2025)
    assert _active(periods) == [date(2025, 7, 4), date(2025, 8, 1)]


def test_unknown_cadence_has_no_active_periods():
    periods = periods_for_lease(_lease(date(2025, 7, 1), cadence="quarterly"), JULY_AUGUST_2025)
    assert len(periods) == 6
    assert not any(p.is_active for p in periods)


def test_weekly_lease_after_range_is_inactive():
    lease = _lease(date(2025, 9, 1), date(2025, 10, 31))
    assert not any(p.is_active for p in periods_for_lease(lease, JULY_AUGUST_2025))


def test_weekly_open_ended_lease():
    assert all(p.is_active for p in periods_for_lease(_lease(date(2025, 7, 1)), JULY_AUGUST_2025))


def test_weekly_fridays_outside_lease_bounds():
    lease = _lease(date(2024, 7, 15), date(2024, 8, 15))
    periods = periods_for_lease(lease, _fridays("2024-07-12", "2024-07-19", "2024-08-16"))
    assert [p.is_active for p in periods] == [False, True, False]


def test_in_term_is_inclusive_and_ignores_status():
    lease = _lease(date(2025, 7, 1), date(2025, 7, 31))
    lease.status = "terminated"
    assert lease.in_term(date(2025, 7, 1))
    assert lease.in_term(date(2025, 7, 31))
    assert not lease.in_term(date(2025, 6, 30))
    assert not lease.in_term(date(2025, 8, 1))


def test_in_term_open_end():
    lease = _lease(date(2025, 7, 1))
    assert lease.in_term(date(2030, 1, 1))
    assert not lease.in_term(date(2025, 9, 1), open_end=date(2025, 8, 31))


def test_default_grid_range_centres_on_coming_friday():
    # Wednesday 2025-08-13 -> Friday 2025-08-15
    assert default_grid_range(date(2025, 8, 13)) == (date(2025, 7, 18), date(2025, 9, 12))
    assert default_grid_range(date(2025, 8, 15), week_offset=-1) == (date(2025, 6, 20), date(2025, 8, 15))
