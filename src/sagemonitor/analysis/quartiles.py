"""
Order statistics for box-plot summaries.

Percentiles are read by floor index from the sorted series, without
interpolation: ``sorted_values[floor(len * p)]``.
"""

import logging
import math
from typing import Iterable, List, Optional, Sequence

from ..models.records import MonitoringRecord
from ..models.results import BoxSummary, QuartileSummary
from ..validation import EmptySeriesError
from .grouping import field_values, group_by_model

logger = logging.getLogger(__name__)


def floor_percentile(sorted_values: Sequence[float], percentile: float) -> float:
    """
    Value at ``floor(len * percentile)`` of an ascending series.

    The index is clamped to the last element so that ``percentile=1.0`` reads
    the maximum.
    """
    if not sorted_values:
        raise EmptySeriesError()
    index = min(int(math.floor(len(sorted_values) * percentile)), len(sorted_values) - 1)
    return sorted_values[index]


def quartile_summary(values: Iterable[float], series_name: Optional[str] = None) -> QuartileSummary:
    """
    Five-number summary of ``values``.

    Args:
        values: Numeric series in any order
        series_name: Name reported in the error for an empty series

    Returns:
        QuartileSummary with min <= q1 <= median <= q3 <= max

    Raises:
        EmptySeriesError: If ``values`` is empty
    """
    ordered: List[float] = sorted(float(v) for v in values)
    if not ordered:
        name = f" '{series_name}'" if series_name else ""
        raise EmptySeriesError(f"cannot summarize empty series{name}", series_name=series_name)

    return QuartileSummary(
        min=ordered[0],
        q1=floor_percentile(ordered, 0.25),
        median=floor_percentile(ordered, 0.5),
        q3=floor_percentile(ordered, 0.75),
        max=ordered[-1],
    )


def quartiles_by_model(records: Sequence[MonitoringRecord], field: str) -> List[BoxSummary]:
    """
    Box summary of ``field`` for every model, in first-occurrence order.

    Groups are never empty, so no model raises EmptySeriesError.
    """
    boxes = []
    for model, group in group_by_model(records).items():
        summary = quartile_summary(field_values(group, field), series_name=f"{model}.{field}")
        boxes.append(
            BoxSummary(
                model=model,
                min=summary.min,
                q1=summary.q1,
                median=summary.median,
                q3=summary.q3,
                max=summary.max,
                count=len(group),
            )
        )
    logger.debug(f"Computed {len(boxes)} box summaries for '{field}'")
    return boxes
