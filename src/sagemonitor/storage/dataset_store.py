"""
Persistence of normalized datasets between runs.

A dataset store keeps one record collection per schema under a fixed key,
mirroring the slots the web dashboard used in browser storage. Saving a
dataset replaces the previous one for that schema. Loaded records are
rebuilt verbatim: they are trusted to have been normalized before they were
saved and are not validated again.
"""

import dataclasses
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import polars as pl

from ..models.records import (
    MonitoringRecord,
    RecordSchema,
    record_from_dict,
    record_to_dict,
    record_type,
)
from .base import DataStorage
from .factory import create_storage

logger = logging.getLogger(__name__)

DATASET_KEYS: Dict[RecordSchema, str] = {
    RecordSchema.VISION: "dashboardData",
    RecordSchema.BATCH: "batchDashboardData",
    RecordSchema.LLM: "llmDashboardData",
}

_POLARS_TYPES = {
    str: pl.Utf8,
    float: pl.Float64,
    int: pl.Int64,
}


class DatasetStore(ABC):
    """Load/save interface for normalized record collections."""

    @abstractmethod
    def save(self, schema: RecordSchema, records: Sequence[MonitoringRecord]) -> None:
        """Replace the stored dataset for ``schema``."""

    @abstractmethod
    def load(self, schema: RecordSchema) -> Optional[List[MonitoringRecord]]:
        """Stored dataset for ``schema``, or None if nothing was saved."""

    def has_dataset(self, schema: RecordSchema) -> bool:
        return self.load(schema) is not None


class InMemoryDatasetStore(DatasetStore):
    """Dataset store that lives for the duration of the process."""

    def __init__(self):
        self._datasets: Dict[str, List[Dict[str, Any]]] = {}

    def save(self, schema: RecordSchema, records: Sequence[MonitoringRecord]) -> None:
        key = DATASET_KEYS[RecordSchema(schema)]
        # Store serialized copies so later changes by the caller are not seen.
        self._datasets[key] = [record_to_dict(record) for record in records]
        logger.debug(f"Stored {len(records)} records under '{key}'")

    def load(self, schema: RecordSchema) -> Optional[List[MonitoringRecord]]:
        schema = RecordSchema(schema)
        rows = self._datasets.get(DATASET_KEYS[schema])
        if rows is None:
            return None
        return [record_from_dict(schema, row) for row in rows]


class FileDatasetStore(DatasetStore):
    """
    Dataset store backed by files in one directory.

    Each schema is written to ``<key>.parquet`` (or ``<key>.json`` in JSON
    mode). With ``generate_legacy_formats`` a ``<key>.csv`` copy is written
    too, using the upload column names so it can be analyzed again.
    """

    def __init__(
        self,
        directory: Path,
        storage: Optional[DataStorage] = None,
        storage_format: str = "parquet",
        generate_legacy_formats: bool = False,
    ):
        self.directory = Path(directory)
        self.storage_format = storage_format
        self.storage = storage or create_storage(storage_format)
        self.generate_legacy_formats = generate_legacy_formats
        logger.debug(f"Initialized FileDatasetStore in {self.directory} ({storage_format})")

    def path_for(self, schema: RecordSchema) -> Path:
        extension = "parquet" if self.storage_format == "parquet" else "json"
        return self.directory / f"{DATASET_KEYS[RecordSchema(schema)]}.{extension}"

    def save(self, schema: RecordSchema, records: Sequence[MonitoringRecord]) -> None:
        schema = RecordSchema(schema)
        path = self.path_for(schema)

        if self.storage_format == "parquet":
            self.storage.save_dataframe(records_to_frame(schema, records), str(path))
        else:
            self.storage.save_dict(
                {"schema": schema.value, "records": [record_to_dict(r) for r in records]},
                str(path),
            )

        if self.generate_legacy_formats:
            csv_path = path.with_suffix(".csv")
            columns = {attribute: column for column, attribute in record_type(schema).COLUMNS.items()}
            records_to_frame(schema, records).rename(columns).write_csv(csv_path)
            logger.debug(f"Wrote CSV copy to {csv_path}")

        size = self.storage.get_file_size(str(path))
        logger.info(f"Saved {len(records)} {schema.value} records to {path} ({size} bytes)")

    def load(self, schema: RecordSchema) -> Optional[List[MonitoringRecord]]:
        schema = RecordSchema(schema)
        path = self.path_for(schema)
        if not self.storage.file_exists(str(path)):
            logger.debug(f"No stored {schema.value} dataset at {path}")
            return None

        if self.storage_format == "parquet":
            rows = self.storage.load_dataframe(str(path)).to_dicts()
        else:
            rows = self.storage.load_dict(str(path)).get("records", [])

        records = [record_from_dict(schema, row) for row in rows]
        logger.info(f"Loaded {len(records)} {schema.value} records from {path}")
        return records


def records_to_frame(schema: RecordSchema, records: Sequence[MonitoringRecord]) -> pl.DataFrame:
    """
    Columnar frame of ``records`` with one typed column per record field.

    The column types come from the record class, so an empty dataset still
    produces a frame with the full schema.
    """
    columns: Dict[str, List[Any]] = {}
    dtypes = {}
    for field in dataclasses.fields(record_type(schema)):
        python_type = field.type if field.type in _POLARS_TYPES else str
        dtypes[field.name] = _POLARS_TYPES[python_type]
        columns[field.name] = [
            _cast(getattr(record, field.name), python_type) for record in records
        ]
    return pl.DataFrame(columns, schema=dtypes)


def _cast(value: Any, python_type: type) -> Any:
    if value is None:
        return None
    return python_type(value)
