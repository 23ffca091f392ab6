"""
Tests for side-by-side scenario comparison.
"""

import pytest

from app.models.scenario import ScenarioType
from app.models.simulation.comparison import comparison_frame, comparison_records
from app.models.simulation.engine import run_all_scenarios, run_simulation


class TestComparisonFrame:
    """Test comparison_frame."""

    def test_columns_in_display_order(self, sample_profile):
        """Test that columns follow Base, Worst, Best."""
        results = run_all_scenarios(sample_profile)
        frame = comparison_frame(reversed(list(results.values())))

        assert list(frame.columns) == ["date", "age", "Base", "Worst", "Best"]
        assert len(frame) == 606

    def test_values_match_results(self, sample_profile):
        """Test that each column holds that scenario's net worth."""
        results = run_all_scenarios(sample_profile)
        frame = comparison_frame(results.values())

        last = frame.iloc[-1]
        assert last["date"] == "2075-06"
        assert last["Worst"] == results[ScenarioType.WORST].data[-1].net_worth
        assert last["Best"] == results[ScenarioType.BEST].data[-1].net_worth

    def test_real_values(self, make_profile):
        """Test charting real instead of nominal net worth."""
        profile = make_profile(expense_inflation=3.0)
        result = run_simulation(profile, ScenarioType.BASE)

        frame = comparison_frame([result], value="real_net_worth")

        assert list(frame["Base"]) == [p.real_net_worth for p in result.data]

    def test_unsupported_value(self, make_profile):
        """Test that only net worth columns can be charted."""
        result = run_simulation(make_profile(), ScenarioType.BASE)

        with pytest.raises(ValueError, match="Unsupported comparison value"):
            comparison_frame([result], value="cash_flow")

    def test_empty(self):
        """Test that no results give an empty frame."""
        frame = comparison_frame([])

        assert frame.empty
        assert list(frame.columns) == ["date", "age"]


class TestComparisonRecords:
    """Test comparison_records."""

    def test_records_are_plain_dicts(self, make_profile):
        """Test the JSON-ready record shape."""
        results = run_all_scenarios(make_profile())

        records = comparison_records(results.values())

        assert len(records) == 13
        assert records[0] == {
            "date": "2024-01",
            "age": 24.0,
            "Base": 0,
            "Worst": 0,
            "Best": 0,
        }

    def test_missing_scenarios_are_absent_columns(self, make_profile):
        """Test that only the scenarios supplied become columns."""
        result = run_simulation(make_profile(), ScenarioType.WORST)

        records = comparison_records([result])

        assert set(records[0]) == {"date", "age", "Worst"}
