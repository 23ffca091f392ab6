"""
Projection run module.

This module holds the deterministic projection engine and the models it
produces.

Key Components:
- result: SimulationPoint, ProjectionMetrics and SimulationResult models
- engine: run_simulation / run_all_scenarios and ProjectionOptions
- comparison: joins scenario results on month labels for charting
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .comparison import comparison_frame, comparison_records
    from .engine import ProjectionOptions, run_all_scenarios, run_simulation
    from .result import ProjectionMetrics, SimulationPoint, SimulationResult

__all__ = [
    "ProjectionMetrics",
    "SimulationPoint",
    "SimulationResult",
    "ProjectionOptions",
    "run_simulation",
    "run_all_scenarios",
    "comparison_frame",
    "comparison_records",
]
