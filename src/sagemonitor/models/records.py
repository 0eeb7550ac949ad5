"""
Typed monitoring records.

This module defines the three record shapes produced by the normalizer:

- VisionRecord: one sampled on-device model-selection event
- BatchRecord: one completed inference batch with precomputed aggregates
- LLMRecord: one language-model inference event

Records are frozen dataclasses. Each shape knows the CSV column that feeds
every attribute (``COLUMNS``), so a record can be written back out as a row
and read in again without loss.
"""

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Type, Union

from ..coercion import timestamp_or_zero


class RecordSchema(Enum):
    """Record shape selected for a dataset."""
    VISION = "vision"
    BATCH = "batch"
    LLM = "llm"


@dataclass(frozen=True)
class VisionRecord:
    """
    One sampled observation of an on-device model-selection event.
    """

    timestamp: str
    battery_level: float
    cpu_usage: float
    battery_consumption: float
    selected_model: str
    instantaneous_confidence: float
    average_confidence: float
    current_total_predictions: int
    # Seconds since the previous sample in time order; 0 for the first sample.
    inference_time: float = 0.0

    SCHEMA: ClassVar[RecordSchema] = RecordSchema.VISION
    COLUMNS: ClassVar[Dict[str, str]] = {
        "Timestamp": "timestamp",
        "BatteryLevel": "battery_level",
        "CPUUsage": "cpu_usage",
        "BatteryConsumption": "battery_consumption",
        "SelectedModel": "selected_model",
        "InstantaneousConfidence": "instantaneous_confidence",
        "AverageConfidence": "average_confidence",
        "CurrentTotalPredictions": "current_total_predictions",
        "InferenceTime": "inference_time",
    }

    @property
    def model(self) -> str:
        return self.selected_model

    @property
    def epoch_ms(self) -> float:
        return timestamp_or_zero(self.timestamp)


@dataclass(frozen=True)
class BatchRecord:
    """
    One completed inference batch with precomputed aggregate metrics.
    """

    id: int
    model_name: str
    energy_usage: float
    mean_confidence: float
    # Milliseconds.
    mean_inference: float
    energy_per_confidence: float
    timestamp: Optional[str] = None

    SCHEMA: ClassVar[RecordSchema] = RecordSchema.BATCH
    COLUMNS: ClassVar[Dict[str, str]] = {
        "ID": "id",
        "ModelName": "model_name",
        "EnergyUsage": "energy_usage",
        "MeanConfidence": "mean_confidence",
        "MeanInference": "mean_inference",
        "EnergyPerConfidence": "energy_per_confidence",
        "Timestamp": "timestamp",
    }

    @property
    def model(self) -> str:
        return self.model_name

    @property
    def epoch_ms(self) -> float:
        return timestamp_or_zero(self.timestamp)


@dataclass(frozen=True)
class LLMRecord:
    """
    One language-model inference event.
    """

    model_id: str
    model_name: str
    battery_level: float
    cpu_usage: float
    temperature: float
    battery_consumption: float
    user_feedback: float
    energy_usage: float
    input_token_size: float
    output_token_size: float
    timestamp: str
    ewma_score: float

    SCHEMA: ClassVar[RecordSchema] = RecordSchema.LLM
    COLUMNS: ClassVar[Dict[str, str]] = {
        "ModelId": "model_id",
        "ModelName": "model_name",
        "BatteryLevel": "battery_level",
        "CPUUsage": "cpu_usage",
        "Temperature": "temperature",
        "BatteryConsumption": "battery_consumption",
        "UserFeedback": "user_feedback",
        "EnergyUsage": "energy_usage",
        "InputTokenSize": "input_token_size",
        "OutputTokenSize": "output_token_size",
        "Timestamp": "timestamp",
        "EWMAScore": "ewma_score",
    }

    @property
    def model(self) -> str:
        return self.model_name

    @property
    def epoch_ms(self) -> float:
        return timestamp_or_zero(self.timestamp)


MonitoringRecord = Union[VisionRecord, BatchRecord, LLMRecord]

RECORD_TYPES: Dict[RecordSchema, Type[Any]] = {
    RecordSchema.VISION: VisionRecord,
    RecordSchema.BATCH: BatchRecord,
    RecordSchema.LLM: LLMRecord,
}


def record_type(schema: RecordSchema) -> Type[Any]:
    """Record class for ``schema``."""
    return RECORD_TYPES[schema]


def record_to_row(record: MonitoringRecord) -> Dict[str, Any]:
    """Render a record with its CSV column names."""
    return {
        column: getattr(record, attribute)
        for column, attribute in record.COLUMNS.items()
    }


def record_to_dict(record: MonitoringRecord) -> Dict[str, Any]:
    """Render a record with its attribute names, for persistence."""
    return dataclasses.asdict(record)


def record_from_dict(schema: RecordSchema, data: Dict[str, Any]) -> MonitoringRecord:
    """
    Rebuild a record from ``record_to_dict`` output.

    Values are taken verbatim; no coercion or validation is applied. Keys the
    record does not define are ignored.
    """
    cls = record_type(schema)
    names = {f.name for f in dataclasses.fields(cls)}
    return cls(**{key: value for key, value in data.items() if key in names})
