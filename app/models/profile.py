"""
Pydantic models for the financial profile a projection runs against.

This module defines the complete input structure for net worth projections
(personal parameters, balance sheet, cash flows, and portfolio settings) using
Pydantic for validation, serialization, and type safety. JSON payloads use
camelCase field names; snake_case names are accepted as well.
"""

from datetime import date
from enum import Enum
from typing import List, Optional, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from .time_grid import horizon_end_date


class ProfileModel(BaseModel):
    """Base model for profile entries, serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )


class Frequency(str, Enum):
    """Cadence of the recurring portfolio contribution."""

    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    YEARLY = "YEARLY"


class PersonalParameters(ProfileModel):
    """Demographics and economic assumptions for the individual."""

    birthday: date = Field(..., description="Date of birth")
    simulation_start_date: date = Field(..., description="First simulated month")
    life_expectancy: int = Field(
        ..., gt=0, le=150, description="Life expectancy in years"
    )
    expense_inflation: float = Field(
        ..., description="Annual expense inflation rate (%)"
    )
    income_growth: float = Field(..., description="Annual income growth rate (%)")

    @property
    def horizon_end_date(self) -> date:
        """Last date covered by the projection."""
        return horizon_end_date(self.birthday, self.life_expectancy)


class BalanceItem(ProfileModel):
    """A single asset or liability on the starting balance sheet."""

    id: str = Field(..., description="Item identifier")
    description: str = Field(default="", description="Display label")
    amount: float = Field(..., description="Current value")


class CashFlowItem(ProfileModel):
    """A recurring monthly income or expense with an active date range."""

    id: str = Field(..., description="Item identifier")
    description: str = Field(default="", description="Display label")
    monthly_amount: float = Field(..., description="Monthly amount in today's dollars")
    start_date: date = Field(..., description="First active date (inclusive)")
    end_date: Optional[date] = Field(
        default=None, description="Last active date (inclusive, None = horizon)"
    )

    @field_validator("end_date", mode="before")
    @classmethod
    def blank_end_date_is_open(cls, v):
        if v == "":
            return None
        return v

    @field_validator("end_date")
    @classmethod
    def validate_end_date(
        cls, v: Optional[date], info: ValidationInfo
    ) -> Optional[date]:
        if v is not None and "start_date" in info.data and v < info.data["start_date"]:
            raise ValueError("End date must be >= start date")
        return v


class PortfolioParameters(ProfileModel):
    """Market assumptions and the recurring contribution schedule."""

    expected_return: float = Field(..., description="Expected annual return (%)")
    std_dev: float = Field(
        ..., ge=0, description="Annual standard deviation of returns (%)"
    )
    initial_value: float = Field(
        default=0,
        description="Accepted for compatibility; starting wealth comes from the balance sheet",
    )
    recurring_amount: float = Field(default=0, description="Recurring contribution")
    recurring_frequency: Frequency = Field(
        default=Frequency.MONTHLY, description="Contribution cadence"
    )
    recurring_start_date: date = Field(
        ..., description="First date contributions are made (inclusive)"
    )
    recurring_end_date: Optional[date] = Field(
        default=None, description="Last contribution date (inclusive, None = horizon)"
    )

    @field_validator("recurring_end_date", mode="before")
    @classmethod
    def blank_end_date_is_open(cls, v):
        if v == "":
            return None
        return v

    @field_validator("recurring_end_date")
    @classmethod
    def validate_recurring_end_date(
        cls, v: Optional[date], info: ValidationInfo
    ) -> Optional[date]:
        start = info.data.get("recurring_start_date")
        if v is not None and start is not None and v < start:
            raise ValueError("Recurring end date must be >= recurring start date")
        return v


def calculate_net_worth(
    assets: Sequence[BalanceItem], liabilities: Sequence[BalanceItem]
) -> float:
    """
    Sum a balance sheet into a single net worth figure.

    Args:
        assets: Asset entries (added)
        liabilities: Liability entries (subtracted)

    Returns:
        Total assets minus total liabilities
    """
    total_assets = sum(item.amount for item in assets)
    total_liabilities = sum(item.amount for item in liabilities)
    return total_assets - total_liabilities


class FinancialProfile(ProfileModel):
    """Complete input for a net worth projection."""

    personal: PersonalParameters = Field(..., description="Personal parameters")
    assets: List[BalanceItem] = Field(default_factory=list, description="Assets")
    liabilities: List[BalanceItem] = Field(
        default_factory=list, description="Liabilities"
    )
    incomes: List[CashFlowItem] = Field(
        default_factory=list, description="Monthly income sources"
    )
    expenses: List[CashFlowItem] = Field(
        default_factory=list, description="Monthly expenses"
    )
    portfolio: PortfolioParameters = Field(..., description="Portfolio settings")

    @model_validator(mode="after")
    def validate_horizon(self):
        horizon = self.personal.horizon_end_date
        if horizon < self.personal.simulation_start_date:
            raise ValueError(
                f"Projection horizon {horizon.isoformat()} is before the "
                f"simulation start date {self.personal.simulation_start_date.isoformat()}"
            )
        return self

    @property
    def net_worth(self) -> float:
        """Current net worth from the balance sheet."""
        return calculate_net_worth(self.assets, self.liabilities)


def create_sample_profile(today: Optional[date] = None) -> FinancialProfile:
    """
    Create a sample profile for demos and first-run screens.

    Args:
        today: Simulation start date (defaults to the current date)

    Returns:
        FinancialProfile for a mid-career saver
    """
    start = today or date.today()
    return FinancialProfile(
        personal=PersonalParameters(
            birthday=date(1985, 6, 15),
            simulation_start_date=start,
            life_expectancy=90,
            expense_inflation=3.0,
            income_growth=2.0,
        ),
        assets=[
            BalanceItem(id="1", description="401k / IRA", amount=450000),
            BalanceItem(id="2", description="Brokerage Account", amount=120000),
            BalanceItem(id="3", description="Home Equity", amount=300000),
        ],
        liabilities=[BalanceItem(id="1", description="Mortgage", amount=250000)],
        incomes=[
            CashFlowItem(
                id="1",
                description="Salary",
                monthly_amount=12000,
                start_date=date(2023, 1, 1),
                end_date=date(2045, 6, 1),
            )
        ],
        expenses=[
            CashFlowItem(
                id="1",
                description="Living Expenses",
                monthly_amount=8500,
                start_date=date(2023, 1, 1),
            )
        ],
        portfolio=PortfolioParameters(
            expected_return=7.0,
            std_dev=12.0,
            recurring_amount=1500,
            recurring_frequency=Frequency.MONTHLY,
            recurring_start_date=date(2023, 1, 1),
            recurring_end_date=date(2045, 6, 1),
        ),
    )
