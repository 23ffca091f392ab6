"""
Tests for the recurring contribution schedule.
"""

from datetime import date

import pytest

from app.models.contributions import (
    WEEKS_PER_MONTH,
    WeeklyCadence,
    count_weekly_deposits,
    scheduled_contribution,
)
from app.models.profile import Frequency, PortfolioParameters
from app.models.time_grid import add_months


def portfolio(amount, frequency, start=date(2024, 1, 1), end=None):
    return PortfolioParameters(
        expected_return=0,
        std_dev=0,
        recurring_amount=amount,
        recurring_frequency=frequency,
        recurring_start_date=start,
        recurring_end_date=end,
    )


class TestScheduledContribution:
    """Test the default frequency mapping."""

    def test_monthly(self):
        """Test that monthly contributions apply every active month."""
        schedule = portfolio(1500, Frequency.MONTHLY)

        assert scheduled_contribution(schedule, date(2024, 1, 1), 0) == 1500
        assert scheduled_contribution(schedule, date(2024, 2, 1), 1) == 1500

    def test_quarterly_follows_month_index(self):
        """Test that quarterly contributions land on every third month index."""
        schedule = portfolio(3000, Frequency.QUARTERLY)
        amounts = [
            scheduled_contribution(schedule, date(2024, 1 + i, 1), i) for i in range(7)
        ]

        assert amounts == [3000, 0, 0, 3000, 0, 0, 3000]

    def test_yearly_follows_month_index(self):
        """Test that yearly contributions land on month index 0, 12, 24..."""
        schedule = portfolio(10000, Frequency.YEARLY, start=date(2023, 1, 1))

        assert scheduled_contribution(schedule, date(2024, 1, 1), 0) == 10000
        assert scheduled_contribution(schedule, date(2024, 6, 1), 5) == 0
        assert scheduled_contribution(schedule, date(2025, 1, 1), 12) == 10000

    def test_quarterly_gate_ignores_start_date(self):
        """Test that a schedule starting mid-quarter waits for the next index gate."""
        schedule = portfolio(3000, Frequency.QUARTERLY, start=date(2024, 2, 1))

        assert scheduled_contribution(schedule, date(2024, 1, 1), 0) == 0
        assert scheduled_contribution(schedule, date(2024, 2, 1), 1) == 0
        assert scheduled_contribution(schedule, date(2024, 4, 1), 3) == 3000

    def test_weekly_approximation(self):
        """Test that weekly contributions use 4.33 weeks per month."""
        schedule = portfolio(100, Frequency.WEEKLY)

        assert scheduled_contribution(schedule, date(2024, 3, 1), 2) == pytest.approx(
            100 * WEEKS_PER_MONTH
        )

    def test_outside_range(self):
        """Test that nothing is contributed outside the schedule range."""
        schedule = portfolio(
            1500, Frequency.MONTHLY, start=date(2024, 3, 1), end=date(2024, 5, 1)
        )

        assert scheduled_contribution(schedule, date(2024, 2, 1), 1) == 0
        assert scheduled_contribution(schedule, date(2024, 5, 1), 4) == 1500
        assert scheduled_contribution(schedule, date(2024, 6, 1), 5) == 0

    def test_zero_amount(self):
        """Test a schedule with no amount."""
        assert scheduled_contribution(portfolio(0, Frequency.MONTHLY), date(2024, 1, 1), 0) == 0


class TestCalendarWeeklyCadence:
    """Test weekly contributions counted from actual deposit dates."""

    def test_count_deposits_in_month(self):
        """Test counting Mondays from a Monday anchor."""
        anchor = date(2024, 1, 1)

        assert count_weekly_deposits(date(2024, 1, 1), date(2024, 2, 1), anchor) == 5
        assert count_weekly_deposits(date(2024, 2, 1), date(2024, 3, 1), anchor) == 4

    def test_count_respects_end_date(self):
        """Test that deposits stop after the end date."""
        assert (
            count_weekly_deposits(
                date(2024, 1, 1), date(2024, 2, 1), date(2024, 1, 1), date(2024, 1, 15)
            )
            == 3
        )

    def test_month_before_anchor(self):
        """Test that no deposits fall before the anchor."""
        assert (
            count_weekly_deposits(date(2023, 11, 1), date(2023, 12, 1), date(2024, 1, 1))
            == 0
        )

    def test_window_is_half_open(self):
        """Test that a deposit on the window end belongs to the next month."""
        anchor = date(2024, 1, 1)

        assert count_weekly_deposits(date(2023, 12, 25), date(2024, 1, 1), anchor) == 0
        assert count_weekly_deposits(date(2024, 1, 1), date(2024, 1, 8), anchor) == 1

    def test_calendar_contribution(self):
        """Test the calendar cadence multiplies by the deposit count."""
        schedule = portfolio(100, Frequency.WEEKLY)

        assert (
            scheduled_contribution(
                schedule, date(2024, 1, 1), 0, weekly_cadence=WeeklyCadence.CALENDAR
            )
            == 500
        )
        assert (
            scheduled_contribution(
                schedule, date(2024, 2, 1), 1, weekly_cadence=WeeklyCadence.CALENDAR
            )
            == 400
        )

    def test_calendar_cadence_only_affects_weekly(self):
        """Test that other frequencies ignore the cadence option."""
        schedule = portfolio(1500, Frequency.MONTHLY)

        assert (
            scheduled_contribution(
                schedule, date(2024, 1, 1), 0, weekly_cadence=WeeklyCadence.CALENDAR
            )
            == 1500
        )

    def test_month_end_start_counts_every_deposit(self):
        """Test that months stepped from the 31st neither drop nor double deposits."""
        start = date(2024, 1, 31)
        schedule = portfolio(1, Frequency.WEEKLY, start=start)

        total = sum(
            scheduled_contribution(
                schedule,
                add_months(start, i),
                i,
                weekly_cadence=WeeklyCadence.CALENDAR,
                simulation_start=start,
            )
            for i in range(24)
        )

        # 2024-01-31 to 2026-01-31 is 731 days
        assert total == 105

    def test_windows_follow_simulation_start(self):
        """Test that the window runs from the stepped start, not the clamped date."""
        start = date(2024, 1, 31)
        schedule = portfolio(100, Frequency.WEEKLY, start=date(2024, 3, 30))

        # second window is 2024-02-29 to 2024-03-31, not 2024-02-29 to 2024-03-29
        assert (
            scheduled_contribution(
                schedule,
                add_months(start, 1),
                1,
                weekly_cadence=WeeklyCadence.CALENDAR,
                simulation_start=start,
            )
            == 100
        )
