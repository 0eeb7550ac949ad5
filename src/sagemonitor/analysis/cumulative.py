"""
Running-sum series over an ordered record collection.
"""

import logging
from typing import List, Sequence

from ..models.options import OrderKey
from ..models.records import BatchRecord, MonitoringRecord
from ..models.results import CumulativePoint
from ..validation import ValidationError
from .grouping import field_values

logger = logging.getLogger(__name__)


def order_records(records: Sequence[MonitoringRecord], order: OrderKey) -> List[MonitoringRecord]:
    """
    Stable copy of ``records`` sorted by timestamp or sequence id.

    Unreadable timestamps sort as the epoch.

    Raises:
        ValidationError: If ``order`` is ID and a record has no sequence id
    """
    order = OrderKey(order)
    if order is OrderKey.ID:
        for record in records:
            if not isinstance(record, BatchRecord):
                raise ValidationError(
                    f"{type(record).__name__} has no sequence id to order by",
                    field_name="order",
                    value=order.value,
                )
        return sorted(records, key=lambda record: record.id)
    return sorted(records, key=lambda record: record.epoch_ms)


def cumulative_series(
    records: Sequence[MonitoringRecord],
    field: str,
    order: OrderKey = OrderKey.TIMESTAMP,
) -> List[CumulativePoint]:
    """
    Running sum of ``field`` in ``order``.

    Args:
        records: Records to accumulate; the input sequence is not reordered
        field: Numeric record attribute to sum
        order: Key the series is sorted by before summing

    Returns:
        One point per record. For non-negative fields ``cumulative_value``
        never decreases.
    """
    by_id = OrderKey(order) is OrderKey.ID
    ordered = order_records(records, order)
    values = field_values(ordered, field)

    points = []
    running = 0.0
    for position, (record, value) in enumerate(zip(ordered, values), start=1):
        running += value
        key = record.id if by_id else record.timestamp
        points.append(
            CumulativePoint(
                index=position,
                key=key,
                value=value,
                cumulative_value=running,
                model=record.model,
            )
        )
    logger.debug(f"Cumulative '{field}' over {len(points)} records, total {running}")
    return points
