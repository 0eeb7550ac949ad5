"""
Statistics engines for monitoring datasets.

- aggregates: whole-dataset summaries and per-model means
- grouping: partitioning by model and frequency tables
- correlation: Pearson and bootstrap correlation, scatter series
- quartiles: floor-index five-number summaries
- cumulative: running-sum series
- efficiency: confidence-per-cost metrics
"""

from .aggregates import count_models, mean, model_means, summarize
from .correlation import (
    BATCH_BOOTSTRAP_PAIRS,
    LLM_SCATTER_PAIRS,
    VISION_BOOTSTRAP_PAIRS,
    CorrelationPair,
    bootstrap_by_model,
    bootstrap_correlation,
    degenerate_correlation,
    pearson,
    scatter_for_pair,
    scatter_points,
)
from .cumulative import cumulative_series, order_records
from .efficiency import (
    efficiency,
    efficiency_series,
    energy_per_confidence_series,
    group_efficiency,
    record_efficiency,
    supported_kinds,
)
from .grouping import field_values, group_by, group_by_model, model_frequency
from .quartiles import floor_percentile, quartile_summary, quartiles_by_model

__all__ = [
    "BATCH_BOOTSTRAP_PAIRS",
    "LLM_SCATTER_PAIRS",
    "VISION_BOOTSTRAP_PAIRS",
    "CorrelationPair",
    "bootstrap_by_model",
    "bootstrap_correlation",
    "count_models",
    "cumulative_series",
    "degenerate_correlation",
    "efficiency",
    "efficiency_series",
    "energy_per_confidence_series",
    "field_values",
    "floor_percentile",
    "group_by",
    "group_by_model",
    "group_efficiency",
    "mean",
    "model_frequency",
    "model_means",
    "order_records",
    "pearson",
    "quartile_summary",
    "quartiles_by_model",
    "record_efficiency",
    "scatter_for_pair",
    "scatter_points",
    "summarize",
    "supported_kinds",
]
