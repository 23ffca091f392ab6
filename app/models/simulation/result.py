"""
Simulation result model.

This module provides the result models produced by a projection run: one
snapshot per simulated month plus the summary metrics derived from the whole
trajectory. Results serialize with camelCase keys so chart and report layers
can consume them directly.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.scenario import ScenarioType


class ResultModel(BaseModel):
    """Base model for immutable, camelCase-serialized results."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class SimulationPoint(ResultModel):
    """Snapshot of one simulated month."""

    date: str = Field(..., description="Month label (YYYY-MM)")
    age: float = Field(..., description="Age in years, one decimal place")
    month_index: int = Field(..., ge=0, description="Zero-based month index")
    net_worth: int = Field(..., description="Nominal net worth")
    real_net_worth: int = Field(
        ..., description="Net worth deflated to start-date dollars"
    )
    cash_flow: int = Field(..., description="Net cash flow for the month")
    is_retired: bool = Field(
        ..., description="Active income fell below the retirement threshold"
    )


class ProjectionMetrics(ResultModel):
    """
    Summary metrics for one deterministic trajectory.

    ``ruin_probability`` is a 0/100 flag rather than a probability: a single
    path either goes negative or it does not. ``median_outcome`` likewise
    equals the ending value.
    """

    ending_net_worth: int = Field(..., description="Nominal net worth at the horizon")
    median_outcome: int = Field(..., description="Same as the ending net worth")
    ruin_probability: int = Field(
        ..., ge=0, le=100, description="100 if net worth ever went negative, else 0"
    )
    lowest_point: int = Field(..., description="Lowest nominal net worth observed")
    ruin_age: Optional[float] = Field(
        default=None, description="Age at the first negative month, if any"
    )

    @property
    def ruined(self) -> bool:
        return self.ruin_probability > 0


class SimulationResult(ResultModel):
    """
    Output of one scenario run.

    Example:
        ```python
        result = run_simulation(profile, ScenarioType.WORST)
        if result.metrics.ruined:
            print(result.metrics.ruin_age)
        ```
    """

    scenario: ScenarioType = Field(..., description="Scenario that was run")
    starting_net_worth: float = Field(
        ..., description="Net worth before the first simulated month"
    )
    data: List[SimulationPoint] = Field(
        ..., description="Monthly points in chronological order"
    )
    metrics: ProjectionMetrics = Field(..., description="Summary metrics")

    @property
    def months(self) -> int:
        """Get the number of simulated months."""
        return len(self.data)

    def get_net_worth_series(self) -> Dict[str, int]:
        """Get nominal net worth keyed by month label."""
        return {point.date: point.net_worth for point in self.data}

    def get_point(self, label: str) -> SimulationPoint:
        """Get the point for a ``YYYY-MM`` month label."""
        for point in self.data:
            if point.date == label:
                return point
        raise KeyError(f"No simulated month {label}")

    def to_dict(self) -> Dict:
        """Serialize with camelCase keys for JSON responses."""
        return self.model_dump(mode="json", by_alias=True)
