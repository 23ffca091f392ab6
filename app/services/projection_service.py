"""
Projection service for coordinating scenario runs.

This service validates incoming profile payloads, runs the projection engine
for the requested scenarios, and packages the results (plus the chart-ready
comparison) into JSON-serializable dictionaries.
"""

import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from app.models.profile import FinancialProfile
from app.models.scenario import ScenarioType
from app.models.simulation.comparison import comparison_records
from app.models.simulation.engine import (
    ProjectionOptions,
    run_all_scenarios,
    run_simulation,
)
from app.models.simulation.result import SimulationResult

logger = logging.getLogger(__name__)


class ProjectionService:
    """Service for running net worth projections from raw payloads."""

    def __init__(self, default_options: Optional[ProjectionOptions] = None) -> None:
        """Initialize the projection service.

        Args:
            default_options: Options applied when a request supplies none
        """
        self.logger = logging.getLogger(__name__)
        self.default_options = default_options or ProjectionOptions()

    def parse_profile(self, profile_data: Mapping[str, Any]) -> FinancialProfile:
        """Validate a profile payload.

        Raises:
            pydantic.ValidationError: If the payload is not a valid profile
        """
        return FinancialProfile.model_validate(profile_data)

    def parse_options(
        self, options_data: Optional[Mapping[str, Any]] = None
    ) -> ProjectionOptions:
        """Merge request options over the service defaults.

        Raises:
            pydantic.ValidationError: If an option is unknown or invalid
        """
        if not options_data:
            return self.default_options
        merged = self.default_options.model_dump()
        merged.update(
            ProjectionOptions.model_validate(options_data).model_dump(
                exclude_unset=True
            )
        )
        return ProjectionOptions.model_validate(merged)

    def run_scenario(
        self,
        profile: FinancialProfile,
        scenario: ScenarioType,
        options: Optional[ProjectionOptions] = None,
    ) -> SimulationResult:
        """Run a single scenario."""
        options = options or self.default_options
        self.logger.info(f"Starting {scenario.value} projection")
        result = run_simulation(profile, scenario, options)
        self.logger.info(
            f"Completed {scenario.value} projection over {result.months} months"
        )
        return result

    def run_projection(
        self,
        profile: FinancialProfile,
        options: Optional[ProjectionOptions] = None,
        scenarios: Iterable[ScenarioType] = tuple(ScenarioType),
    ) -> Dict[ScenarioType, SimulationResult]:
        """Run several scenarios against one profile.

        Args:
            profile: Validated profile
            options: Engine options (service defaults when omitted)
            scenarios: Scenarios to run

        Returns:
            Results keyed by scenario
        """
        options = options or self.default_options
        scenarios = tuple(scenarios)
        self.logger.info(
            f"Starting projection for {', '.join(s.value for s in scenarios)}"
        )
        results = run_all_scenarios(profile, options, scenarios)

        for scenario, result in results.items():
            if result.metrics.ruined:
                self.logger.info(
                    f"{scenario.value} projection runs out of money at age "
                    f"{result.metrics.ruin_age}"
                )

        self.logger.info(f"Completed projection for {len(results)} scenarios")
        return results

    def build_response(
        self, profile: FinancialProfile, results: Dict[ScenarioType, SimulationResult]
    ) -> Dict[str, Any]:
        """Package results for a JSON response.

        Returns:
            Dictionary with the starting net worth, per-scenario results, and
            the month-by-month comparison
        """
        return {
            "netWorth": profile.net_worth,
            "results": [result.to_dict() for result in results.values()],
            "comparison": comparison_records(results.values()),
        }
