"""
Data models and structures for the analysis pipeline.

Record Models:
- Vision, batch and LLM monitoring records
- Record schema selection and row conversion helpers

Option Models:
- Ordering, efficiency and aggregation strategy enums

Result Models:
- Dataset summaries, frequency tables and box summaries
- Correlation, cumulative and efficiency series

Configuration Models:
- Analysis settings and the root application configuration
"""

from .config import AnalysisConfig, AppConfig
from .options import EfficiencyAggregate, EfficiencyType, InferenceOrdering, OrderKey
from .records import (
    BatchRecord,
    LLMRecord,
    MonitoringRecord,
    RecordSchema,
    VisionRecord,
    record_from_dict,
    record_to_dict,
    record_to_row,
    record_type,
)
from .results import (
    BatchSummary,
    BoxSummary,
    CorrelationResult,
    CumulativePoint,
    DashboardData,
    DatasetSummary,
    EfficiencyPoint,
    EnergyPerConfidencePoint,
    FrequencyEntry,
    GroupEfficiency,
    LLMSummary,
    ModelCorrelation,
    QuartileSummary,
    ScatterPoint,
    VisionSummary,
)

__all__ = [
    # Configuration
    "AnalysisConfig",
    "AppConfig",
    # Options
    "EfficiencyAggregate",
    "EfficiencyType",
    "InferenceOrdering",
    "OrderKey",
    # Records
    "BatchRecord",
    "LLMRecord",
    "MonitoringRecord",
    "RecordSchema",
    "VisionRecord",
    "record_from_dict",
    "record_to_dict",
    "record_to_row",
    "record_type",
    # Results
    "BatchSummary",
    "BoxSummary",
    "CorrelationResult",
    "CumulativePoint",
    "DashboardData",
    "DatasetSummary",
    "EfficiencyPoint",
    "EnergyPerConfidencePoint",
    "FrequencyEntry",
    "GroupEfficiency",
    "LLMSummary",
    "ModelCorrelation",
    "QuartileSummary",
    "ScatterPoint",
    "VisionSummary",
]
