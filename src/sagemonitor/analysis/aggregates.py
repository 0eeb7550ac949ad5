"""
Whole-dataset summary statistics for overview panels.
"""

import logging
from typing import Dict, Iterable, List, Sequence

from ..models.records import BatchRecord, LLMRecord, MonitoringRecord, RecordSchema, VisionRecord, record_type
from ..models.results import BatchSummary, DatasetSummary, LLMSummary, VisionSummary
from ..validation import ValidationError
from .grouping import field_values, group_by_model

logger = logging.getLogger(__name__)


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean; 0 for an empty series."""
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)


def count_models(records: Sequence[MonitoringRecord]) -> int:
    """Number of distinct model names (case-sensitive)."""
    return len({record.model for record in records})


def summarize(records: Sequence[MonitoringRecord], schema: RecordSchema) -> DatasetSummary:
    """
    Fixed-shape summary of a record collection.

    Every aggregate of an empty collection is 0.

    Raises:
        ValidationError: If a record does not belong to ``schema``
    """
    schema = RecordSchema(schema)
    expected = record_type(schema)
    for record in records:
        if not isinstance(record, expected):
            raise ValidationError(
                f"Cannot summarize {type(record).__name__} as {schema.value} data",
                field_name="schema",
                value=schema.value,
            )

    if schema is RecordSchema.VISION:
        return _summarize_vision(records)
    if schema is RecordSchema.BATCH:
        return _summarize_batch(records)
    return _summarize_llm(records)


def _summarize_batch(records: Sequence[BatchRecord]) -> BatchSummary:
    energy = field_values(records, "energy_usage")
    return BatchSummary(
        total_models=count_models(records),
        total_data_points=len(records),
        total_energy_usage=sum(energy),
        avg_energy_usage=mean(energy),
        avg_confidence=mean(field_values(records, "mean_confidence")),
        avg_inference_time=mean(field_values(records, "mean_inference")),
    )


def _summarize_vision(records: Sequence[VisionRecord]) -> VisionSummary:
    if not records:
        return VisionSummary()

    confidence = field_values(records, "instantaneous_confidence")
    # Time-ordered view; the caller's ordering is left untouched.
    chronological = sorted(records, key=lambda record: record.epoch_ms)

    return VisionSummary(
        total_data_points=len(records),
        total_models=count_models(records),
        total_cpu_usage=sum(field_values(records, "cpu_usage")),
        total_battery_consumption=chronological[0].battery_level - chronological[-1].battery_level,
        avg_instantaneous_confidence=mean(confidence),
        max_instantaneous_confidence=max(confidence),
        avg_battery_level=mean(field_values(records, "battery_level")),
        avg_inference_time=mean(field_values(records, "inference_time")),
        total_predictions=max(record.current_total_predictions for record in records),
    )


def _summarize_llm(records: Sequence[LLMRecord]) -> LLMSummary:
    energy = field_values(records, "energy_usage")
    return LLMSummary(
        total_models=count_models(records),
        total_data_points=len(records),
        avg_energy_usage=mean(energy),
        avg_ewma_score=mean(field_values(records, "ewma_score")),
        avg_input_token_size=mean(field_values(records, "input_token_size")),
        avg_output_token_size=mean(field_values(records, "output_token_size")),
        avg_temperature=mean(field_values(records, "temperature")),
        total_energy_consumption=sum(energy),
    )


def model_means(records: Sequence[MonitoringRecord], fields: List[str]) -> Dict[str, Dict[str, float]]:
    """
    Mean of each field per model, for comparison tables.

    Returns:
        ``{model: {field: mean, ..., "count": n}}`` in first-occurrence order
    """
    table: Dict[str, Dict[str, float]] = {}
    for model, group in group_by_model(records).items():
        row = {field: mean(field_values(group, field)) for field in fields}
        row["count"] = len(group)
        table[model] = row
    return table
