"""
Month-by-month wealth evolution.

The evolver is a small state machine: each step applies the month's
investment return to the prior balance, adds the net cash flow, deflates the
result by cumulative inflation, and records whether the balance has ever
gone negative.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .scenario import ScenarioRates


class WealthState(BaseModel):
    """Wealth after a given number of simulated months."""

    model_config = ConfigDict(frozen=True)

    wealth: float = Field(..., description="Nominal net worth")
    real_wealth: float = Field(..., description="Net worth in start-date dollars")
    cumulative_inflation: float = Field(
        default=1.0, description="Price level relative to the start date"
    )
    month_index: int = Field(default=0, ge=0, description="Months already applied")
    ruined: bool = Field(
        default=False, description="Nominal wealth has been negative at some point"
    )
    ruin_month_index: Optional[int] = Field(
        default=None, description="Index of the first month that ended negative"
    )


class MonthlyStep(BaseModel):
    """Cash flows applied during one month."""

    model_config = ConfigDict(frozen=True)

    income: float = Field(default=0.0, description="Total active income")
    expense: float = Field(default=0.0, description="Total active expenses")
    contribution: float = Field(default=0.0, description="Scheduled contribution")
    investment_return: float = Field(
        default=0.0, description="Return earned on the prior balance"
    )

    @property
    def net_cash_flow(self) -> float:
        return self.income - self.expense + self.contribution


class WealthEvolver:
    """Advances wealth one month at a time under fixed scenario rates."""

    def __init__(self, rates: ScenarioRates):
        """Initialize the evolver.

        Args:
            rates: Scenario rates supplying the monthly return and inflation
        """
        self.rates = rates
        self.monthly_return = rates.monthly_return
        self.monthly_inflation = rates.monthly_inflation

    @staticmethod
    def initial_state(starting_net_worth: float) -> WealthState:
        """Create the state at month zero."""
        return WealthState(
            wealth=starting_net_worth,
            real_wealth=starting_net_worth,
            cumulative_inflation=1.0,
            month_index=0,
            ruined=False,
        )

    def advance(
        self,
        state: WealthState,
        income: float,
        expense: float,
        contribution: float,
    ) -> Tuple[WealthState, MonthlyStep]:
        """
        Apply one month of returns and cash flows.

        Returns compound on whatever the balance is, including a negative one,
        and the ruined flag never clears once set. The month that first goes
        negative is recorded so the ruin age matches the flag.

        Args:
            state: State before the month
            income: Total active income for the month
            expense: Total active expenses for the month
            contribution: Scheduled portfolio contribution for the month

        Returns:
            Tuple of (new state, the step that produced it)
        """
        investment_return = state.wealth * self.monthly_return
        step = MonthlyStep(
            income=income,
            expense=expense,
            contribution=contribution,
            investment_return=investment_return,
        )

        wealth = state.wealth + investment_return + step.net_cash_flow
        cumulative_inflation = state.cumulative_inflation * (1 + self.monthly_inflation)
        ruin_month_index = state.ruin_month_index
        if ruin_month_index is None and wealth < 0:
            ruin_month_index = state.month_index

        new_state = WealthState(
            wealth=wealth,
            real_wealth=wealth / cumulative_inflation,
            cumulative_inflation=cumulative_inflation,
            month_index=state.month_index + 1,
            ruined=state.ruined or wealth < 0,
            ruin_month_index=ruin_month_index,
        )
        return new_state, step
