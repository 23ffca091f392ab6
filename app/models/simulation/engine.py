"""
Deterministic net worth projection engine.

This module walks the monthly timeline for one scenario: it derives the
scenario's rates, seeds wealth from the balance sheet, totals the active
incomes, expenses, and scheduled contribution each month, advances the wealth
state, and summarizes the finished trajectory.

Runs share no state, so the same profile and scenario always produce the same
result and scenarios may be run in any order.
"""

import logging
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.cash_flow import total_active_cash_flow
from app.models.contributions import WeeklyCadence, scheduled_contribution
from app.models.metrics import summarize_metrics
from app.models.profile import FinancialProfile
from app.models.scenario import ScenarioType, derive_scenario_rates
from app.models.time_grid import (
    MonthlyTimeline,
    age_in_years,
    month_label,
    round_half_up,
)
from app.models.wealth_evolution import WealthEvolver

from .result import SimulationPoint, SimulationResult

logger = logging.getLogger(__name__)

DEFAULT_RETIREMENT_INCOME_THRESHOLD = 1000.0


class ProjectionOptions(BaseModel):
    """Knobs that change engine behaviour away from the defaults."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True, extra="forbid"
    )

    weekly_cadence: WeeklyCadence = Field(
        default=WeeklyCadence.APPROXIMATE,
        description="How weekly contributions map onto months",
    )
    retirement_income_threshold: float = Field(
        default=DEFAULT_RETIREMENT_INCOME_THRESHOLD,
        ge=0,
        description="Monthly income below which a point is marked retired",
    )


def run_simulation(
    profile: FinancialProfile,
    scenario: ScenarioType,
    options: Optional[ProjectionOptions] = None,
) -> SimulationResult:
    """
    Project net worth month by month under one scenario.

    Args:
        profile: Validated financial profile
        scenario: Scenario to apply
        options: Engine options (defaults preserve the standard behaviour)

    Returns:
        SimulationResult with one point per simulated month
    """
    options = options or ProjectionOptions()
    personal = profile.personal

    rates = derive_scenario_rates(profile, scenario)
    evolver = WealthEvolver(rates)
    starting_net_worth = profile.net_worth
    state = evolver.initial_state(starting_net_worth)

    timeline = MonthlyTimeline(
        start_date=personal.simulation_start_date,
        end_date=personal.horizon_end_date,
    )

    logger.debug(
        f"Running {scenario.value} scenario from {timeline.start_date} to "
        f"{timeline.end_date} (monthly return {rates.monthly_return:.6f})"
    )

    points: List[SimulationPoint] = []
    for month_index, current_date in timeline.iter_months():
        income = total_active_cash_flow(
            profile.incomes,
            current_date,
            personal.simulation_start_date,
            rates.monthly_income_growth,
        )
        expense = total_active_cash_flow(
            profile.expenses,
            current_date,
            personal.simulation_start_date,
            rates.monthly_inflation,
        )
        contribution = scheduled_contribution(
            profile.portfolio,
            current_date,
            month_index,
            options.weekly_cadence,
            simulation_start=personal.simulation_start_date,
        )

        state, step = evolver.advance(state, income, expense, contribution)

        points.append(
            SimulationPoint(
                date=month_label(current_date),
                age=age_in_years(personal.birthday, current_date),
                month_index=month_index,
                net_worth=round_half_up(state.wealth),
                real_net_worth=round_half_up(state.real_wealth),
                cash_flow=round_half_up(step.net_cash_flow),
                is_retired=income < options.retirement_income_threshold,
            )
        )

    metrics = summarize_metrics(
        points, state.wealth, state.ruined, state.ruin_month_index
    )

    logger.debug(
        f"{scenario.value} scenario finished after {len(points)} months: "
        f"ending {metrics.ending_net_worth}, lowest {metrics.lowest_point}"
    )

    return SimulationResult(
        scenario=scenario,
        starting_net_worth=starting_net_worth,
        data=points,
        metrics=metrics,
    )


def run_all_scenarios(
    profile: FinancialProfile,
    options: Optional[ProjectionOptions] = None,
    scenarios: Iterable[ScenarioType] = tuple(ScenarioType),
) -> Dict[ScenarioType, SimulationResult]:
    """
    Run several scenarios against the same profile.

    Args:
        profile: Validated financial profile
        options: Engine options shared by every run
        scenarios: Scenarios to run (default: BASE, WORST, BEST)

    Returns:
        Results keyed by scenario, in the order requested
    """
    return {
        scenario: run_simulation(profile, scenario, options) for scenario in scenarios
    }
