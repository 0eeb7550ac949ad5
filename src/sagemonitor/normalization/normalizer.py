"""
Row normalization into typed monitoring records.

The normalizer is the entry point of the analysis pipeline. It takes the
loosely typed rows produced by CSV parsing (every cell a string, or None when
empty) and turns them into immutable records of one schema:

- Header names are trimmed; unknown columns are ignored.
- The first row must carry every required column of the schema, otherwise a
  ValidationError names the missing columns and nothing is returned.
- Numeric cells are read from their leading numeric prefix. Unreadable cells
  become 0 and are noted as ParseWarning entries; they never raise.
- Vision records receive a derived inference time: the number of seconds
  since the previous sample in timestamp order.
- Batch records without an energy-per-confidence value get one computed from
  energy and an epsilon-floored confidence.

Typed records are also accepted as input, so normalizing a normalized
collection returns an identical collection.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ..coercion import coerce_str, parse_number, parse_timestamp, utc_now_iso
from ..models.config import DEFAULT_CONFIDENCE_EPSILON
from ..models.options import InferenceOrdering
from ..models.records import (
    BatchRecord,
    LLMRecord,
    MonitoringRecord,
    RecordSchema,
    VisionRecord,
    record_to_row,
    record_type,
)
from ..validation import ValidationError, validate_required_fields

logger = logging.getLogger(__name__)

REQUIRED_FIELDS: Dict[RecordSchema, Tuple[str, ...]] = {
    RecordSchema.VISION: (
        "Timestamp",
        "BatteryLevel",
        "CPUUsage",
        "BatteryConsumption",
        "SelectedModel",
        "InstantaneousConfidence",
    ),
    RecordSchema.BATCH: (
        "ID",
        "ModelName",
        "EnergyUsage",
        "MeanConfidence",
        "MeanInference",
    ),
    RecordSchema.LLM: (
        "ModelId",
        "ModelName",
        "BatteryLevel",
        "CPUUsage",
        "EnergyUsage",
        "EWMAScore",
    ),
}

RawRow = Mapping[str, Any]


@dataclass(frozen=True)
class ParseWarning:
    """A numeric cell that could not be read and was replaced by 0."""

    row_index: int
    column: str
    raw_value: Any


def energy_per_confidence(
    energy_usage: float, mean_confidence: float, epsilon: float = DEFAULT_CONFIDENCE_EPSILON
) -> float:
    """Energy divided by confidence, with confidence floored at ``epsilon``."""
    return energy_usage / max(mean_confidence, epsilon)


class RecordNormalizer:
    """
    Converts raw rows into typed records of one schema.

    Warnings from the most recent ``normalize`` call are available in
    ``parse_warnings``.
    """

    def __init__(
        self,
        schema: RecordSchema,
        ordering: InferenceOrdering = InferenceOrdering.SORTED,
        confidence_epsilon: float = DEFAULT_CONFIDENCE_EPSILON,
    ):
        self.schema = RecordSchema(schema)
        self.ordering = InferenceOrdering(ordering)
        self.confidence_epsilon = confidence_epsilon
        self.parse_warnings: List[ParseWarning] = []

    def normalize(self, rows: Iterable[Union[RawRow, MonitoringRecord]]) -> List[MonitoringRecord]:
        """
        Normalize ``rows`` into records.

        Args:
            rows: CSV rows keyed by column name, or records of this schema

        Returns:
            Records of this schema; the same length as ``rows``

        Raises:
            ValidationError: If the first row lacks a required column, or a
                record of another schema is passed in
        """
        self.parse_warnings = []
        prepared = [self._prepare_row(row) for row in rows]
        if not prepared:
            logger.debug(f"No {self.schema.value} rows to normalize")
            return []

        validate_required_fields(
            prepared[0], REQUIRED_FIELDS[self.schema], context=f"{self.schema.value} data"
        )

        if self.schema is RecordSchema.VISION:
            records = self._build_vision(prepared)
        elif self.schema is RecordSchema.BATCH:
            records = [self._build_batch(i, row) for i, row in enumerate(prepared)]
        else:
            records = [self._build_llm(i, row) for i, row in enumerate(prepared)]

        self._log_warnings()
        logger.info(f"Normalized {len(records)} {self.schema.value} records")
        return records

    # --- Row preparation ---

    def _prepare_row(self, row: Union[RawRow, MonitoringRecord]) -> Dict[str, Any]:
        if isinstance(row, (VisionRecord, BatchRecord, LLMRecord)):
            if not isinstance(row, record_type(self.schema)):
                raise ValidationError(
                    f"Cannot normalize {type(row).__name__} as {self.schema.value} data",
                    field_name="schema",
                    value=type(row).__name__,
                )
            return record_to_row(row)
        if not isinstance(row, Mapping):
            raise ValidationError(
                f"Expected a mapping row, got {type(row).__name__}",
                value=row,
            )
        return {str(key).strip(): value for key, value in row.items() if key is not None}

    def _number(self, index: int, row: Dict[str, Any], column: str) -> float:
        raw = row.get(column)
        number = parse_number(raw)
        if number is None:
            self.parse_warnings.append(ParseWarning(index, column, raw))
            return 0.0
        return number

    def _integer(self, index: int, row: Dict[str, Any], column: str) -> int:
        return int(self._number(index, row, column))

    def _log_warnings(self) -> None:
        if not self.parse_warnings:
            return
        by_column = Counter(warning.column for warning in self.parse_warnings)
        for column, count in by_column.items():
            logger.debug(f"{count} unreadable value(s) in column '{column}' replaced by 0")
        logger.info(
            f"{len(self.parse_warnings)} numeric value(s) in {self.schema.value} data "
            f"could not be parsed and were set to 0"
        )

    # --- Schema builders ---

    def _build_vision(self, rows: Sequence[Dict[str, Any]]) -> List[VisionRecord]:
        fallback_timestamp = utc_now_iso()
        timestamps = [coerce_str(row.get("Timestamp"), fallback_timestamp) for row in rows]
        epochs = [parse_timestamp(ts) for ts in timestamps]

        # Stable sort: samples with equal timestamps keep their input order.
        time_order = sorted(
            range(len(rows)), key=lambda i: epochs[i] if epochs[i] is not None else 0.0
        )
        inference_times = derive_inference_times(epochs, time_order)

        records = [
            VisionRecord(
                timestamp=timestamps[i],
                battery_level=self._number(i, row, "BatteryLevel"),
                cpu_usage=self._number(i, row, "CPUUsage"),
                battery_consumption=self._number(i, row, "BatteryConsumption"),
                selected_model=coerce_str(row.get("SelectedModel")),
                instantaneous_confidence=self._number(i, row, "InstantaneousConfidence"),
                average_confidence=self._number(i, row, "AverageConfidence"),
                current_total_predictions=self._integer(i, row, "CurrentTotalPredictions"),
                inference_time=inference_times[i],
            )
            for i, row in enumerate(rows)
        ]

        if self.ordering is InferenceOrdering.SORTED:
            return [records[i] for i in time_order]
        return records

    def _build_batch(self, index: int, row: Dict[str, Any]) -> BatchRecord:
        energy = self._number(index, row, "EnergyUsage")
        confidence = self._number(index, row, "MeanConfidence")

        # A zero or unreadable value counts as absent and is recomputed.
        epc = parse_number(row.get("EnergyPerConfidence"))
        if not epc:
            epc = energy_per_confidence(energy, confidence, self.confidence_epsilon)

        raw_timestamp = row.get("Timestamp")
        timestamp = None if raw_timestamp in (None, "") else str(raw_timestamp)

        return BatchRecord(
            id=self._integer(index, row, "ID"),
            model_name=coerce_str(row.get("ModelName")),
            energy_usage=energy,
            mean_confidence=confidence,
            mean_inference=self._number(index, row, "MeanInference"),
            energy_per_confidence=epc,
            timestamp=timestamp,
        )

    def _build_llm(self, index: int, row: Dict[str, Any]) -> LLMRecord:
        return LLMRecord(
            model_id=coerce_str(row.get("ModelId")),
            model_name=coerce_str(row.get("ModelName")),
            battery_level=self._number(index, row, "BatteryLevel"),
            cpu_usage=self._number(index, row, "CPUUsage"),
            temperature=self._number(index, row, "Temperature"),
            battery_consumption=self._number(index, row, "BatteryConsumption"),
            user_feedback=self._number(index, row, "UserFeedback"),
            energy_usage=self._number(index, row, "EnergyUsage"),
            input_token_size=self._number(index, row, "InputTokenSize"),
            output_token_size=self._number(index, row, "OutputTokenSize"),
            timestamp=coerce_str(row.get("Timestamp"), utc_now_iso()),
            ewma_score=self._number(index, row, "EWMAScore"),
        )


def derive_inference_times(
    epochs: Sequence[Optional[float]], time_order: Sequence[int]
) -> List[float]:
    """
    Seconds between each sample and its predecessor in time order.

    Args:
        epochs: Epoch milliseconds per input row (None if unreadable)
        time_order: Input indices sorted by time

    Returns:
        Inference time per input row, in input order. The earliest sample, and
        any sample whose own or preceding timestamp is unreadable, gets 0.
    """
    inference_times = [0.0] * len(epochs)
    for position in range(1, len(time_order)):
        current = epochs[time_order[position]]
        previous = epochs[time_order[position - 1]]
        if current is None or previous is None:
            continue
        inference_times[time_order[position]] = (current - previous) / 1000.0
    return inference_times


def normalize_rows(
    rows: Iterable[Union[RawRow, MonitoringRecord]],
    schema: RecordSchema,
    ordering: InferenceOrdering = InferenceOrdering.SORTED,
    confidence_epsilon: float = DEFAULT_CONFIDENCE_EPSILON,
) -> List[MonitoringRecord]:
    """Normalize ``rows`` into records of ``schema``. See RecordNormalizer."""
    return RecordNormalizer(schema, ordering, confidence_epsilon).normalize(rows)
