"""
Macro scenarios and their rate adjustments.

Each scenario shifts the profile's return, inflation, and income-growth
assumptions, and the shifted annual rates are converted to monthly
compounding equivalents for the month-by-month projection.
"""

from enum import Enum
from typing import Dict, NamedTuple

from pydantic import BaseModel, ConfigDict, Field

from .profile import FinancialProfile


class ScenarioType(str, Enum):
    """Named macro-assumption sets."""

    BASE = "BASE"
    WORST = "WORST"
    BEST = "BEST"

    @classmethod
    def parse(cls, value: str) -> "ScenarioType":
        """Look up a scenario by tag, ignoring case."""
        try:
            return cls(value.upper())
        except (AttributeError, ValueError):
            raise ValueError(
                f"Unknown scenario {value!r}; expected one of "
                f"{[s.value for s in cls]}"
            ) from None

    @property
    def label(self) -> str:
        """Title-cased name used for display and chart series."""
        return self.value.capitalize()


class ScenarioShift(NamedTuple):
    """How a scenario moves the base assumptions (percentage points)."""

    std_dev_multiplier: float
    inflation_shift: float
    income_growth_shift: float


SCENARIO_SHIFTS: Dict[ScenarioType, ScenarioShift] = {
    ScenarioType.BASE: ScenarioShift(0.0, 0.0, 0.0),
    ScenarioType.WORST: ScenarioShift(-1.5, 1.5, -1.0),
    ScenarioType.BEST: ScenarioShift(1.0, -0.5, 0.5),
}


def to_monthly_rate(annual_rate: float) -> float:
    """Convert an annual rate (decimal) to its monthly compounding equivalent."""
    return (1 + annual_rate) ** (1 / 12) - 1


class ScenarioRates(BaseModel):
    """Scenario-adjusted annual rates and their monthly equivalents."""

    model_config = ConfigDict(frozen=True)

    scenario: ScenarioType = Field(..., description="Scenario these rates belong to")
    annual_return: float = Field(..., description="Annual portfolio return (decimal)")
    annual_inflation: float = Field(..., description="Annual expense inflation (decimal)")
    annual_income_growth: float = Field(
        ..., description="Annual income growth (decimal)"
    )

    @property
    def monthly_return(self) -> float:
        """Monthly compounding equivalent of the annual return."""
        return to_monthly_rate(self.annual_return)

    @property
    def monthly_inflation(self) -> float:
        """Monthly compounding equivalent of the annual inflation rate."""
        return to_monthly_rate(self.annual_inflation)

    @property
    def monthly_income_growth(self) -> float:
        """Monthly compounding equivalent of the annual income growth."""
        return to_monthly_rate(self.annual_income_growth)


def adjust_rates(
    expected_return: float,
    std_dev: float,
    expense_inflation: float,
    income_growth: float,
    scenario: ScenarioType,
) -> ScenarioRates:
    """
    Apply a scenario's shifts to base assumptions given in percent.

    Args:
        expected_return: Expected annual return (%)
        std_dev: Annual standard deviation of returns (%)
        expense_inflation: Annual expense inflation (%)
        income_growth: Annual income growth (%)
        scenario: Scenario to apply

    Returns:
        ScenarioRates with decimal annual rates
    """
    shift = SCENARIO_SHIFTS[scenario]
    return ScenarioRates(
        scenario=scenario,
        annual_return=(expected_return + shift.std_dev_multiplier * std_dev) / 100,
        annual_inflation=expense_inflation / 100 + shift.inflation_shift / 100,
        annual_income_growth=income_growth / 100 + shift.income_growth_shift / 100,
    )


def derive_scenario_rates(
    profile: FinancialProfile, scenario: ScenarioType
) -> ScenarioRates:
    """Get the scenario-adjusted rates for a profile."""
    return adjust_rates(
        expected_return=profile.portfolio.expected_return,
        std_dev=profile.portfolio.std_dev,
        expense_inflation=profile.personal.expense_inflation,
        income_growth=profile.personal.income_growth,
        scenario=scenario,
    )
