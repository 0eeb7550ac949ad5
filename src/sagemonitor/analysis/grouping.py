"""
Partitioning of record collections by a categorical key.
"""

import logging
from typing import Any, Callable, Dict, List, Sequence, TypeVar, Union

from ..models.records import MonitoringRecord
from ..models.results import FrequencyEntry
from ..validation import ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def field_values(records: Sequence[Any], field: str) -> List[float]:
    """
    Numeric values of attribute ``field`` across ``records``.

    Raises:
        ValidationError: If a record has no such attribute
    """
    try:
        return [float(getattr(record, field)) for record in records]
    except AttributeError:
        record_name = type(records[0]).__name__ if records else "record"
        raise ValidationError(
            f"{record_name} has no numeric field '{field}'",
            field_name=field,
        )


def group_by(records: Sequence[T], key: Union[str, Callable[[T], Any]]) -> Dict[Any, List[T]]:
    """
    Partition ``records`` by ``key``.

    Args:
        records: Records to partition
        key: Attribute name, or a function returning the group key

    Returns:
        Dict of key to the records sharing it. Keys appear in order of first
        occurrence and each group keeps the input order of its records.
    """
    key_of = key if callable(key) else (lambda record: getattr(record, key))
    groups: Dict[Any, List[T]] = {}
    for record in records:
        groups.setdefault(key_of(record), []).append(record)
    return groups


def group_by_model(records: Sequence[MonitoringRecord]) -> Dict[str, List[MonitoringRecord]]:
    """Group records by model name (case-sensitive)."""
    return group_by(records, lambda record: record.model)


def model_frequency(records: Sequence[MonitoringRecord]) -> List[FrequencyEntry]:
    """
    Record count per model, most frequent first.

    Ties keep first-occurrence order. Percentages are shares of the whole
    collection on a 0-100 scale.
    """
    total = len(records)
    if not total:
        return []

    counts = [(model, len(group)) for model, group in group_by_model(records).items()]
    counts.sort(key=lambda item: item[1], reverse=True)
    return [
        FrequencyEntry(model=model, count=count, percentage=count / total * 100.0)
        for model, count in counts
    ]
