"""
Monthly time grid for net worth projections.

This module provides the calendar arithmetic the projection engine walks on:
month stepping, horizon dates, elapsed-time measures, month labels, and the
currency formatting used when results are turned into prose.
"""

import math
from datetime import date
from typing import Iterator, List, Optional, Tuple

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, Field, ValidationInfo, field_validator

# Average month and year lengths used for growth exponents and ages
DAYS_PER_MONTH = 30.44
DAYS_PER_YEAR = 365.25


def add_months(start: date, months: int) -> date:
    """
    Step a date forward by whole calendar months.

    Days past the end of the target month are clamped to its last day, so
    2024-01-31 plus one month is 2024-02-29.
    """
    return start + relativedelta(months=months)


def horizon_end_date(birthday: date, life_expectancy: int) -> date:
    """Get the last date covered by a projection (birthday + life expectancy)."""
    return birthday + relativedelta(years=life_expectancy)


def elapsed_months(start: date, current: date) -> float:
    """
    Get the fractional number of months between two dates.

    Measured as elapsed days over an average month length and floored at
    zero, so dates before ``start`` count as no elapsed time.
    """
    return max(0.0, (current - start).days / DAYS_PER_MONTH)


def age_in_years(birthday: date, current: date) -> float:
    """Get the age on ``current`` in fractional years, to one decimal place."""
    return round((current - birthday).days / DAYS_PER_YEAR, 1)


def month_label(current: date) -> str:
    """Format a date as a ``YYYY-MM`` month label."""
    return current.strftime("%Y-%m")


def round_half_up(value: float) -> int:
    """Round to the nearest whole unit, with halves going toward +infinity."""
    return int(math.floor(value + 0.5))


class MonthlyTimeline(BaseModel):
    """Calendar months from a start date through an inclusive end date."""

    start_date: date = Field(..., description="First simulated month")
    end_date: date = Field(..., description="Last date still inside the projection")

    @field_validator("end_date")
    @classmethod
    def validate_end_date(cls, v: date, info: ValidationInfo) -> date:
        if "start_date" in info.data and v < info.data["start_date"]:
            raise ValueError("End date must be >= start date")
        return v

    def iter_months(self) -> Iterator[Tuple[int, date]]:
        """Yield ``(month_index, date)`` pairs in chronological order."""
        month_index = 0
        current = self.start_date
        while current <= self.end_date:
            yield month_index, current
            month_index += 1
            current = add_months(self.start_date, month_index)

    def get_dates(self) -> List[date]:
        """Get every simulated date in the timeline."""
        return [current for _, current in self.iter_months()]

    def get_month_index(self, current: date) -> int:
        """Get the zero-based index of the month containing ``current``."""
        if not self.start_date <= current <= self.end_date:
            raise ValueError(f"Date {current.isoformat()} is outside the timeline")
        index = (current.year - self.start_date.year) * 12 + (
            current.month - self.start_date.month
        )
        if add_months(self.start_date, index) > current:
            index -= 1
        return index

    def __len__(self) -> int:
        """Get the number of months in the timeline."""
        return sum(1 for _ in self.iter_months())


class CurrencyFormatter(BaseModel):
    """Formats currency and percentage values for display."""

    currency_symbol: str = Field(default="$", description="Currency symbol")
    decimal_places: int = Field(
        default=0, ge=0, le=10, description="Number of decimal places"
    )
    show_currency_symbol: bool = Field(
        default=True, description="Whether to show currency symbol"
    )

    def format_currency(self, amount: float, show_symbol: Optional[bool] = None) -> str:
        """
        Format a currency amount for display.

        Negative amounts carry the sign ahead of the symbol (``-$1,250``).

        Args:
            amount: The amount to format
            show_symbol: Override the default symbol display setting

        Returns:
            Formatted currency string
        """
        show_symbol = (
            show_symbol if show_symbol is not None else self.show_currency_symbol
        )

        sign = "-" if amount < 0 else ""

        if self.decimal_places > 0:
            formatted = f"{round(abs(amount), self.decimal_places):,.{self.decimal_places}f}"
        else:
            formatted = f"{round_half_up(abs(amount)):,}"

        if formatted.strip("0,.") == "":
            sign = ""

        symbol = self.currency_symbol if show_symbol else ""
        return f"{sign}{symbol}{formatted}"

    def format_percentage(self, rate: float, decimal_places: int = 2) -> str:
        """
        Format a percentage for display.

        Args:
            rate: The rate as a decimal (0.05 = 5%)
            decimal_places: Number of decimal places to show

        Returns:
            Formatted percentage string
        """
        percentage = rate * 100
        return f"{percentage:.{decimal_places}f}%"
