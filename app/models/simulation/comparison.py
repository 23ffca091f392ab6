"""
Side-by-side scenario comparison for charting.

Joins the per-scenario point sequences on their month labels so a chart can
plot every scenario against the same axis.
"""

from typing import Any, Dict, Iterable, List

import pandas as pd

from app.models.scenario import ScenarioType

from .result import SimulationResult

COMPARISON_ORDER = (ScenarioType.BASE, ScenarioType.WORST, ScenarioType.BEST)


def comparison_frame(
    results: Iterable[SimulationResult], value: str = "net_worth"
) -> pd.DataFrame:
    """
    Build a frame with one row per month and one column per scenario.

    Months follow the BASE run when it is present. Scenarios missing a month
    get NaN in that row.

    Args:
        results: Scenario results to combine
        value: SimulationPoint field to chart (``net_worth`` or ``real_net_worth``)

    Returns:
        DataFrame with ``date``, ``age`` and one title-cased column per scenario
    """
    if value not in ("net_worth", "real_net_worth"):
        raise ValueError(f"Unsupported comparison value: {value}")

    by_scenario = {result.scenario: result for result in results}
    ordered = [by_scenario[s] for s in COMPARISON_ORDER if s in by_scenario]
    if not ordered:
        return pd.DataFrame(columns=["date", "age"])

    axis = ordered[0]
    frame = pd.DataFrame(
        {
            "date": [point.date for point in axis.data],
            "age": [point.age for point in axis.data],
        }
    )

    for result in ordered:
        series = pd.DataFrame(
            {
                "date": [point.date for point in result.data],
                result.scenario.label: [getattr(point, value) for point in result.data],
            }
        )
        frame = frame.merge(series, on="date", how="left")

    return frame


def comparison_records(
    results: Iterable[SimulationResult], value: str = "net_worth"
) -> List[Dict[str, Any]]:
    """Get the comparison frame as JSON-ready records (NaN becomes None)."""
    frame = comparison_frame(results, value)
    frame = frame.astype(object).where(frame.notna(), None)
    return frame.to_dict(orient="records")
