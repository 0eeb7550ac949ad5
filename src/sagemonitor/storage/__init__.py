"""
Storage for normalized datasets and exported dashboards.

- DataStorage: backend interface (DataFrames and JSON dictionaries)
- ParquetStorage: polars-backed Parquet/JSON backend
- DatasetStore: per-schema dataset slots, in memory or on disk
"""

from .base import DataStorage
from .dataset_store import (
    DATASET_KEYS,
    DatasetStore,
    FileDatasetStore,
    InMemoryDatasetStore,
    records_to_frame,
)
from .factory import create_storage
from .parquet_storage import ParquetStorage

__all__ = [
    "DATASET_KEYS",
    "DataStorage",
    "DatasetStore",
    "FileDatasetStore",
    "InMemoryDatasetStore",
    "ParquetStorage",
    "create_storage",
    "records_to_frame",
]
