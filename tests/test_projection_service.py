"""
Tests for the projection service.

This module tests payload validation, option merging, and the packaged
projection response.
"""

import json

import pytest
from pydantic import ValidationError

from app.models.contributions import WeeklyCadence
from app.models.scenario import ScenarioType
from app.models.simulation.engine import ProjectionOptions
from app.services.projection_service import ProjectionService


class TestProjectionService:
    """Test the ProjectionService class."""

    def test_initialization(self):
        """Test service initialization."""
        service = ProjectionService()

        assert service.logger is not None
        assert service.default_options == ProjectionOptions()

    def test_parse_profile(self, sample_profile_payload, sample_profile):
        """Test that camelCase payloads parse to the same profile."""
        service = ProjectionService()
        assert service.parse_profile(sample_profile_payload) == sample_profile

    def test_parse_invalid_profile(self):
        """Test that invalid payloads raise ValidationError."""
        with pytest.raises(ValidationError):
            ProjectionService().parse_profile({"personal": {}})

    def test_parse_options_defaults(self):
        """Test that missing options fall back to the service defaults."""
        defaults = ProjectionOptions(retirement_income_threshold=2000)
        service = ProjectionService(defaults)

        assert service.parse_options(None) is defaults
        assert service.parse_options({}) is defaults

    def test_parse_options_merges_over_defaults(self):
        """Test that request options only override what they set."""
        service = ProjectionService(
            ProjectionOptions(retirement_income_threshold=2000)
        )

        options = service.parse_options({"weeklyCadence": "calendar"})

        assert options.weekly_cadence == WeeklyCadence.CALENDAR
        assert options.retirement_income_threshold == 2000

    def test_parse_invalid_options(self):
        """Test that unknown options are rejected."""
        with pytest.raises(ValidationError):
            ProjectionService().parse_options({"paths": 500})

    def test_run_projection(self, sample_profile):
        """Test that all three scenarios run by default."""
        results = ProjectionService().run_projection(sample_profile)

        assert list(results) == [ScenarioType.BASE, ScenarioType.WORST, ScenarioType.BEST]
        assert all(result.months == 606 for result in results.values())

    def test_run_scenario(self, sample_profile):
        """Test running one scenario."""
        result = ProjectionService().run_scenario(sample_profile, ScenarioType.BEST)
        assert result.scenario == ScenarioType.BEST

    def test_build_response(self, sample_profile):
        """Test the packaged JSON response."""
        service = ProjectionService()
        results = service.run_projection(sample_profile)

        response = service.build_response(sample_profile, results)

        assert response["netWorth"] == 620000
        assert [r["scenario"] for r in response["results"]] == ["BASE", "WORST", "BEST"]
        assert len(response["comparison"]) == 606
        assert set(response["comparison"][0]) == {"date", "age", "Base", "Worst", "Best"}
        json.dumps(response)
