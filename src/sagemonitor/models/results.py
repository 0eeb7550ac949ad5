"""
Chart-ready result structures.

These dataclasses are the hand-off to the presentation layer. They are
computed from scratch for every dataset and are never mutated afterwards;
``to_dict`` renders them as plain JSON-compatible dictionaries.
"""

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


class _Serializable:
    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class BatchSummary(_Serializable):
    """Overview panel for batch (aggregate) datasets."""

    total_models: int = 0
    total_data_points: int = 0
    total_energy_usage: float = 0.0
    avg_energy_usage: float = 0.0
    avg_confidence: float = 0.0
    avg_inference_time: float = 0.0


@dataclass(frozen=True)
class VisionSummary(_Serializable):
    """Overview panel for vision monitoring datasets."""

    total_data_points: int = 0
    total_models: int = 0
    total_cpu_usage: float = 0.0
    # Battery level of the first sample minus that of the last, in time order.
    total_battery_consumption: float = 0.0
    avg_instantaneous_confidence: float = 0.0
    max_instantaneous_confidence: float = 0.0
    avg_battery_level: float = 0.0
    avg_inference_time: float = 0.0
    total_predictions: int = 0


@dataclass(frozen=True)
class LLMSummary(_Serializable):
    """Overview panel for LLM monitoring datasets."""

    total_models: int = 0
    total_data_points: int = 0
    avg_energy_usage: float = 0.0
    avg_ewma_score: float = 0.0
    avg_input_token_size: float = 0.0
    avg_output_token_size: float = 0.0
    avg_temperature: float = 0.0
    total_energy_consumption: float = 0.0


DatasetSummary = Union[BatchSummary, VisionSummary, LLMSummary]


@dataclass(frozen=True)
class FrequencyEntry(_Serializable):
    model: str
    count: int
    # Share of all records, 0-100.
    percentage: float


@dataclass(frozen=True)
class QuartileSummary(_Serializable):
    min: float
    q1: float
    median: float
    q3: float
    max: float


@dataclass(frozen=True)
class BoxSummary(_Serializable):
    """Quartile summary of one numeric field for one model."""

    model: str
    min: float
    q1: float
    median: float
    q3: float
    max: float
    count: int


@dataclass(frozen=True)
class CorrelationResult(_Serializable):
    """
    Distribution of bootstrap correlation estimates.

    ``sample_correlations`` is sorted ascending. A degenerate result (too few
    samples) holds a single 0 and zero statistics.
    """

    median: float
    q1: float
    q3: float
    min: float
    max: float
    sample_correlations: List[float] = field(default_factory=list)

    @property
    def is_degenerate(self) -> bool:
        return self.sample_correlations == [0.0] and self.max == 0.0 and self.min == 0.0


@dataclass(frozen=True)
class ModelCorrelation(_Serializable):
    model: str
    sample_count: int
    result: CorrelationResult

    def to_dict(self) -> Dict[str, Any]:
        data = self.result.to_dict()
        data["model"] = self.model
        data["sample_count"] = self.sample_count
        return data


@dataclass(frozen=True)
class ScatterPoint(_Serializable):
    x: float
    y: float
    model: str
    id: int


@dataclass(frozen=True)
class CumulativePoint(_Serializable):
    # 1-based position in the ordered series.
    index: int
    key: Union[int, str, None]
    value: float
    cumulative_value: float
    model: str


@dataclass(frozen=True)
class EfficiencyPoint(_Serializable):
    index: int
    timestamp: Optional[str]
    model: str
    efficiency: float
    confidence: float
    denominator: float


@dataclass(frozen=True)
class GroupEfficiency(_Serializable):
    """Per-model efficiency under one aggregation rule."""

    model: str
    count: int
    avg_confidence: float
    avg_denominator: float
    total_denominator: float
    efficiency: float


@dataclass(frozen=True)
class EnergyPerConfidencePoint(_Serializable):
    id: int
    model: str
    energy_usage: float
    mean_confidence: float
    energy_per_confidence: float


@dataclass
class DashboardData(_Serializable):
    """
    Everything a dashboard page renders for one dataset.

    Series and tables are keyed by chart name so that a caller can render
    whichever subset it needs.
    """

    schema: str
    summary: DatasetSummary
    model_frequency: List[FrequencyEntry] = field(default_factory=list)
    cumulative: Dict[str, List[CumulativePoint]] = field(default_factory=dict)
    correlations: Dict[str, List[ModelCorrelation]] = field(default_factory=dict)
    scatter: Dict[str, List[ScatterPoint]] = field(default_factory=dict)
    box_summaries: Dict[str, List[BoxSummary]] = field(default_factory=dict)
    efficiency_series: Dict[str, List[EfficiencyPoint]] = field(default_factory=dict)
    group_efficiency: Dict[str, List[GroupEfficiency]] = field(default_factory=dict)
    energy_per_confidence: List[EnergyPerConfidencePoint] = field(default_factory=list)
    model_means: Dict[str, Dict[str, float]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema": self.schema,
            "summary": self.summary.to_dict(),
            "model_frequency": [entry.to_dict() for entry in self.model_frequency],
            "cumulative": _dict_of_lists(self.cumulative),
            "correlations": _dict_of_lists(self.correlations),
            "scatter": _dict_of_lists(self.scatter),
            "box_summaries": _dict_of_lists(self.box_summaries),
            "efficiency_series": _dict_of_lists(self.efficiency_series),
            "group_efficiency": _dict_of_lists(self.group_efficiency),
            "energy_per_confidence": [p.to_dict() for p in self.energy_per_confidence],
            "model_means": {model: dict(means) for model, means in self.model_means.items()},
        }


def _dict_of_lists(data: Dict[str, List[Any]]) -> Dict[str, List[Dict[str, Any]]]:
    return {name: [item.to_dict() for item in items] for name, items in data.items()}
