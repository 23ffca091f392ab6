"""
Pytest configuration and shared fixtures for the net worth stress test tests.
"""

import os
from datetime import date
from unittest.mock import patch

import pytest

from app import create_app
from app.config import reset_global_settings
from app.models.profile import (
    FinancialProfile,
    Frequency,
    PersonalParameters,
    PortfolioParameters,
    create_sample_profile,
)


def _make_profile(
    assets=None,
    liabilities=None,
    incomes=None,
    expenses=None,
    birthday=date(2000, 1, 1),
    start=date(2024, 1, 1),
    life_expectancy=25,
    expense_inflation=0.0,
    income_growth=0.0,
    expected_return=0.0,
    std_dev=0.0,
    recurring_amount=0.0,
    recurring_frequency=Frequency.MONTHLY,
    recurring_start=date(2024, 1, 1),
    recurring_end=None,
) -> FinancialProfile:
    """Build a profile with neutral defaults (13 months, no flows, 0% rates)."""
    return FinancialProfile(
        personal=PersonalParameters(
            birthday=birthday,
            simulation_start_date=start,
            life_expectancy=life_expectancy,
            expense_inflation=expense_inflation,
            income_growth=income_growth,
        ),
        assets=assets if assets is not None else [],
        liabilities=liabilities if liabilities is not None else [],
        incomes=incomes if incomes is not None else [],
        expenses=expenses if expenses is not None else [],
        portfolio=PortfolioParameters(
            expected_return=expected_return,
            std_dev=std_dev,
            recurring_amount=recurring_amount,
            recurring_frequency=recurring_frequency,
            recurring_start_date=recurring_start,
            recurring_end_date=recurring_end,
        ),
    )


@pytest.fixture
def make_profile():
    """Factory for profiles with neutral defaults."""
    return _make_profile


@pytest.fixture
def sample_profile() -> FinancialProfile:
    """The sample profile with a fixed simulation start date."""
    return create_sample_profile(today=date(2025, 1, 1))


@pytest.fixture
def sample_profile_payload(sample_profile) -> dict:
    """The sample profile as a camelCase JSON payload."""
    return sample_profile.model_dump(mode="json", by_alias=True)


@pytest.fixture
def app_env():
    """Environment with a valid SECRET_KEY and no API key."""
    reset_global_settings()
    with patch.dict(
        os.environ,
        {"SECRET_KEY": "test-secret-key-123", "APP_ENV": "testing"},
        clear=True,
    ):
        yield
    reset_global_settings()


@pytest.fixture
def client(app_env):
    """Flask test client."""
    app = create_app()
    return app.test_client()
