"""
Confidence-per-cost efficiency metrics.

Efficiency is confidence divided by a cost measure (CPU, battery or energy).
A zero or negative cost yields an efficiency of 0 instead of an infinite or
negative ratio.

Confidence is read from the field that carries it in each record shape:

=========  ============================
schema     confidence field
=========  ============================
vision     instantaneous_confidence
batch      mean_confidence
llm        ewma_score
=========  ============================
"""

import logging
from typing import Dict, List, Sequence, Tuple

from ..models.options import EfficiencyAggregate, EfficiencyType, OrderKey
from ..models.records import BatchRecord, MonitoringRecord, RecordSchema
from ..models.results import EfficiencyPoint, EnergyPerConfidencePoint, GroupEfficiency
from ..validation import ValidationError
from .aggregates import mean
from .cumulative import order_records
from .grouping import group_by_model

logger = logging.getLogger(__name__)

CONFIDENCE_FIELDS: Dict[RecordSchema, str] = {
    RecordSchema.VISION: "instantaneous_confidence",
    RecordSchema.BATCH: "mean_confidence",
    RecordSchema.LLM: "ewma_score",
}

DENOMINATOR_FIELDS: Dict[Tuple[RecordSchema, EfficiencyType], str] = {
    (RecordSchema.VISION, EfficiencyType.CPU): "cpu_usage",
    (RecordSchema.VISION, EfficiencyType.BATTERY): "battery_consumption",
    (RecordSchema.BATCH, EfficiencyType.ENERGY): "energy_usage",
    (RecordSchema.LLM, EfficiencyType.CPU): "cpu_usage",
    (RecordSchema.LLM, EfficiencyType.BATTERY): "battery_consumption",
    (RecordSchema.LLM, EfficiencyType.ENERGY): "energy_usage",
}


def efficiency(confidence: float, denominator: float) -> float:
    """``confidence / denominator``, or 0 when the denominator is not positive."""
    if denominator <= 0:
        return 0.0
    return confidence / denominator


def supported_kinds(schema: RecordSchema) -> List[EfficiencyType]:
    """Efficiency kinds defined for ``schema``."""
    return [kind for (s, kind) in DENOMINATOR_FIELDS if s is RecordSchema(schema)]


def _fields_for(record: MonitoringRecord, kind: EfficiencyType) -> Tuple[str, str]:
    schema = record.SCHEMA
    kind = EfficiencyType(kind)
    denominator_field = DENOMINATOR_FIELDS.get((schema, kind))
    if denominator_field is None:
        raise ValidationError(
            f"{kind.value} efficiency is not defined for {schema.value} records",
            field_name="kind",
            value=kind.value,
        )
    return CONFIDENCE_FIELDS[schema], denominator_field


def _confidence_and_cost(record: MonitoringRecord, kind: EfficiencyType) -> Tuple[float, float]:
    confidence_field, denominator_field = _fields_for(record, kind)
    return float(getattr(record, confidence_field)), float(getattr(record, denominator_field))


def record_efficiency(record: MonitoringRecord, kind: EfficiencyType) -> float:
    """
    Efficiency of a single record.

    Raises:
        ValidationError: If ``kind`` is not defined for the record's schema
    """
    confidence, cost = _confidence_and_cost(record, kind)
    return efficiency(confidence, cost)


def efficiency_series(records: Sequence[MonitoringRecord], kind: EfficiencyType) -> List[EfficiencyPoint]:
    """
    Per-record efficiency in time order.

    Batch records are ordered by sequence id, the others by timestamp.
    """
    if not records:
        return []
    order = OrderKey.ID if isinstance(records[0], BatchRecord) else OrderKey.TIMESTAMP

    points = []
    for position, record in enumerate(order_records(records, order), start=1):
        confidence, cost = _confidence_and_cost(record, kind)
        points.append(
            EfficiencyPoint(
                index=position,
                timestamp=record.timestamp,
                model=record.model,
                efficiency=efficiency(confidence, cost),
                confidence=confidence,
                denominator=cost,
            )
        )
    return points


def group_efficiency(
    records: Sequence[MonitoringRecord],
    kind: EfficiencyType,
    aggregate: EfficiencyAggregate = EfficiencyAggregate.RATIO_OF_MEANS,
) -> List[GroupEfficiency]:
    """
    Per-model efficiency table.

    Args:
        records: Records of one schema
        kind: Cost measure in the denominator
        aggregate: RATIO_OF_MEANS divides mean confidence by mean cost;
            MEAN_OF_RATIOS averages the per-record efficiencies

    Returns:
        One entry per model in first-occurrence order
    """
    aggregate = EfficiencyAggregate(aggregate)
    table = []
    for model, group in group_by_model(records).items():
        pairs = [_confidence_and_cost(record, kind) for record in group]
        confidences = [confidence for confidence, _ in pairs]
        costs = [cost for _, cost in pairs]

        avg_confidence = mean(confidences)
        avg_cost = mean(costs)
        if aggregate is EfficiencyAggregate.RATIO_OF_MEANS:
            value = efficiency(avg_confidence, avg_cost)
        else:
            value = mean(efficiency(confidence, cost) for confidence, cost in pairs)

        table.append(
            GroupEfficiency(
                model=model,
                count=len(group),
                avg_confidence=avg_confidence,
                avg_denominator=avg_cost,
                total_denominator=sum(costs),
                efficiency=value,
            )
        )
    logger.debug(f"Computed {EfficiencyType(kind).value} efficiency for {len(table)} models ({aggregate.value})")
    return table


def energy_per_confidence_series(records: Sequence[BatchRecord]) -> List[EnergyPerConfidencePoint]:
    """
    Energy per unit of confidence for batch records, ordered by id.

    Raises:
        ValidationError: If a record is not a batch record
    """
    return [
        EnergyPerConfidencePoint(
            id=record.id,
            model=record.model_name,
            energy_usage=record.energy_usage,
            mean_confidence=record.mean_confidence,
            energy_per_confidence=record.energy_per_confidence,
        )
        for record in order_records(records, OrderKey.ID)
    ]
