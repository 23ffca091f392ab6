"""
Summary metrics for projection trajectories.

Reduces a completed point sequence to ending wealth, lowest point, and the
ruin indicator.
"""

from typing import Optional, Sequence

import numpy as np

from .simulation.result import ProjectionMetrics, SimulationPoint
from .time_grid import round_half_up


def find_ruin_point(points: Sequence[SimulationPoint]) -> Optional[SimulationPoint]:
    """Get the first point with negative nominal net worth, if any."""
    for point in points:
        if point.net_worth < 0:
            return point
    return None


def summarize_metrics(
    points: Sequence[SimulationPoint],
    final_wealth: float,
    ruined: bool,
    ruin_month_index: Optional[int] = None,
) -> ProjectionMetrics:
    """
    Derive end-of-horizon metrics from a trajectory.

    Args:
        points: Monthly points in chronological order
        final_wealth: Unrounded nominal wealth after the last month
        ruined: Whether unrounded wealth went negative in any month
        ruin_month_index: Index of the first month whose unrounded wealth was
            negative; when omitted the first negative rounded point is used

    Returns:
        ProjectionMetrics for the trajectory

    Raises:
        ValueError: If ``points`` is empty
    """
    if not points:
        raise ValueError("Cannot summarize an empty trajectory")

    net_worths = np.array([point.net_worth for point in points], dtype=np.int64)
    ending = round_half_up(final_wealth)

    if ruin_month_index is not None:
        ruin_point = points[ruin_month_index]
    else:
        ruin_point = find_ruin_point(points)

    return ProjectionMetrics(
        ending_net_worth=ending,
        median_outcome=ending,
        ruin_probability=100 if ruined else 0,
        lowest_point=int(np.min(net_worths)),
        ruin_age=ruin_point.age if ruin_point is not None else None,
    )
