"""
Recurring portfolio contribution schedule.

The projection steps one calendar month at a time, so every contribution
frequency is mapped onto a monthly amount:

- MONTHLY: the full amount every active month
- QUARTERLY: the full amount when ``month_index % 3 == 0``
- YEARLY: the full amount when ``month_index % 12 == 0``
- WEEKLY: the amount times 4.33 every active month

The quarterly and yearly gates follow the simulation's month index rather
than the contribution start date, and the weekly factor is an average. The
``CALENDAR`` weekly cadence counts the deposit dates that actually fall in
each month instead; it has to be requested explicitly.
"""

from datetime import date, timedelta
from enum import Enum
from typing import Optional

from .cash_flow import is_within_range
from .profile import Frequency, PortfolioParameters
from .time_grid import add_months

WEEKS_PER_MONTH = 4.33


class WeeklyCadence(str, Enum):
    """How weekly contributions are converted to a monthly amount."""

    APPROXIMATE = "approximate"
    CALENDAR = "calendar"


def count_weekly_deposits(
    window_start: date,
    window_end: date,
    anchor: date,
    end: Optional[date] = None,
) -> int:
    """
    Count weekly deposit dates inside one simulated month.

    Deposits fall every seven days from ``anchor`` and stop after ``end``.
    The window is half-open, ``[window_start, window_end)``, so consecutive
    simulated months never share or skip a day.

    Args:
        window_start: Simulated date that opens the month
        window_end: Simulated date that opens the next month
        anchor: First deposit date
        end: Last date a deposit may fall on (None = unbounded)

    Returns:
        Number of deposits in the month
    """
    last_day = window_end - timedelta(days=1)
    if end is not None and end < last_day:
        last_day = end

    first = max(window_start, anchor)
    offset = (first - anchor).days % 7
    if offset:
        first += timedelta(days=7 - offset)

    if first > last_day:
        return 0
    return (last_day - first).days // 7 + 1


def scheduled_contribution(
    portfolio: PortfolioParameters,
    current_date: date,
    month_index: int,
    weekly_cadence: WeeklyCadence = WeeklyCadence.APPROXIMATE,
    simulation_start: Optional[date] = None,
) -> float:
    """
    Get the recurring contribution due in a simulated month.

    Args:
        portfolio: Portfolio settings holding the recurring schedule
        current_date: Simulated month
        month_index: Zero-based month index in the projection
        weekly_cadence: Conversion used for weekly contributions
        simulation_start: First simulated month; calendar weekly windows are
            stepped from it so consecutive months tile the timeline (without
            it the window is one month from ``current_date``)

    Returns:
        Contribution for the month (0.0 outside the active range)
    """
    amount = portfolio.recurring_amount
    frequency = portfolio.recurring_frequency

    if frequency == Frequency.WEEKLY and weekly_cadence == WeeklyCadence.CALENDAR:
        if simulation_start is None:
            window_start = current_date
            window_end = add_months(current_date, 1)
        else:
            window_start = add_months(simulation_start, month_index)
            window_end = add_months(simulation_start, month_index + 1)
        deposits = count_weekly_deposits(
            window_start,
            window_end,
            portfolio.recurring_start_date,
            portfolio.recurring_end_date,
        )
        return amount * deposits

    if not is_within_range(
        current_date, portfolio.recurring_start_date, portfolio.recurring_end_date
    ):
        return 0.0

    if frequency == Frequency.MONTHLY:
        return amount
    elif frequency == Frequency.YEARLY:
        return amount if month_index % 12 == 0 else 0.0
    elif frequency == Frequency.QUARTERLY:
        return amount if month_index % 3 == 0 else 0.0
    else:
        return amount * WEEKS_PER_MONTH
