"""Data models and projection engine for net worth stress tests."""

from .profile import (
    BalanceItem,
    CashFlowItem,
    FinancialProfile,
    Frequency,
    PersonalParameters,
    PortfolioParameters,
    calculate_net_worth,
    create_sample_profile,
)
from .scenario import ScenarioRates, ScenarioType, derive_scenario_rates, to_monthly_rate
from .cash_flow import cash_flow_contribution, is_within_range, total_active_cash_flow
from .contributions import WeeklyCadence, scheduled_contribution
from .wealth_evolution import WealthEvolver, WealthState
from .simulation.result import ProjectionMetrics, SimulationPoint, SimulationResult
from .metrics import summarize_metrics
from .simulation.engine import ProjectionOptions, run_all_scenarios, run_simulation
from .profile_editor import ProfileListKind, add_item, remove_item, update_item

__all__ = [
    "BalanceItem",
    "CashFlowItem",
    "FinancialProfile",
    "Frequency",
    "PersonalParameters",
    "PortfolioParameters",
    "calculate_net_worth",
    "create_sample_profile",
    "ScenarioRates",
    "ScenarioType",
    "derive_scenario_rates",
    "to_monthly_rate",
    "cash_flow_contribution",
    "is_within_range",
    "total_active_cash_flow",
    "WeeklyCadence",
    "scheduled_contribution",
    "WealthEvolver",
    "WealthState",
    "ProjectionMetrics",
    "SimulationPoint",
    "SimulationResult",
    "summarize_metrics",
    "ProjectionOptions",
    "run_all_scenarios",
    "run_simulation",
    "ProfileListKind",
    "add_item",
    "remove_item",
    "update_item",
]
