"""
Cash-flow activation for monthly projections.

Determines which incomes and expenses are active in a simulated month and
how much each contributes once growth or inflation has been applied.
"""

from datetime import date
from typing import Iterable, Optional

from .profile import CashFlowItem
from .time_grid import elapsed_months


def is_within_range(current: date, start: date, end: Optional[date] = None) -> bool:
    """Check ``start <= current <= end``; a missing end is unbounded."""
    if current < start:
        return False
    if end is not None and current > end:
        return False
    return True


def cash_flow_contribution(
    item: CashFlowItem,
    current_date: date,
    simulation_start: date,
    monthly_growth_rate: float,
) -> float:
    """
    Get an item's grown monthly amount, or 0.0 when it is inactive.

    Growth compounds from the simulation start date rather than the item's
    own start date, so every active item uses the same elapsed time.

    Args:
        item: Income or expense entry
        current_date: Simulated month
        simulation_start: First simulated month
        monthly_growth_rate: Monthly growth (incomes) or inflation (expenses)

    Returns:
        Contribution for the month
    """
    if not is_within_range(current_date, item.start_date, item.end_date):
        return 0.0

    months = elapsed_months(simulation_start, current_date)
    return item.monthly_amount * (1 + monthly_growth_rate) ** months


def total_active_cash_flow(
    items: Iterable[CashFlowItem],
    current_date: date,
    simulation_start: date,
    monthly_growth_rate: float,
) -> float:
    """Sum the contributions of every item active in ``current_date``'s month."""
    total = 0.0
    for item in items:
        if is_within_range(current_date, item.start_date, item.end_date):
            total += cash_flow_contribution(
                item, current_date, simulation_start, monthly_growth_rate
            )
    return total
