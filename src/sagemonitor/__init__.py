"""
sagemonitor: statistics for model-monitoring dashboards.

This package turns CSV telemetry from on-device model-selection runs, batch
inference runs and LLM inference runs into the summaries, correlations,
box-plot quartiles, running sums and efficiency series that a monitoring
dashboard renders.

The package is organized into specialized modules:
- config: Configuration management and validation
- models: Record, option, result and configuration data structures
- validation: Input validation and error handling
- normalization: Raw CSV rows to typed records
- analysis: Statistics engines
- storage: Dataset stores and file backends
- pipeline: Dashboard assembly
- cli: Command-line interface

Usage:
    From command line:
        sagemonitor analyze data.csv --schema batch

    Programmatically:
        from sagemonitor import analyze_rows, read_csv_rows, RecordSchema
        records, dashboard = analyze_rows(read_csv_rows("data.csv"), RecordSchema.BATCH)
"""

# Main interfaces
from .config import clear_config_cache, get_config, set_config_path
from .ingest import read_csv_rows
from .normalization import ParseWarning, RecordNormalizer, normalize_rows
from .pipeline import analyze_rows, build_dashboard
from .cli import main_cli

# Model classes for external use
from .models import (
    AnalysisConfig,
    AppConfig,
    BatchRecord,
    CorrelationResult,
    DashboardData,
    EfficiencyAggregate,
    EfficiencyType,
    InferenceOrdering,
    LLMRecord,
    OrderKey,
    RecordSchema,
    VisionRecord,
)

# Storage
from .storage import DatasetStore, FileDatasetStore, InMemoryDatasetStore

# Validation
from .validation import EmptySeriesError, ValidationError

__version__ = "0.1.0"

__all__ = [
    # Main interfaces
    "analyze_rows",
    "build_dashboard",
    "normalize_rows",
    "read_csv_rows",
    "RecordNormalizer",
    "ParseWarning",
    "get_config",
    "set_config_path",
    "clear_config_cache",
    "main_cli",
    # Models
    "AnalysisConfig",
    "AppConfig",
    "BatchRecord",
    "CorrelationResult",
    "DashboardData",
    "EfficiencyAggregate",
    "EfficiencyType",
    "InferenceOrdering",
    "LLMRecord",
    "OrderKey",
    "RecordSchema",
    "VisionRecord",
    # Storage
    "DatasetStore",
    "FileDatasetStore",
    "InMemoryDatasetStore",
    # Validation
    "EmptySeriesError",
    "ValidationError",
]
