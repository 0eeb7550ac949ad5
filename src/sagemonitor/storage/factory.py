"""
Factory for creating storage instances.
"""

import logging

from ..config.storage_config import SUPPORTED_COMPRESSIONS, SUPPORTED_FORMATS
from .base import DataStorage
from .parquet_storage import ParquetStorage

logger = logging.getLogger(__name__)


def create_storage(format_type: str = "parquet", compression: str = "snappy") -> DataStorage:
    """
    Create a storage backend.

    Both formats share ParquetStorage: in "json" mode the dataset store
    writes its records through ``save_dict`` instead of ``save_dataframe``.

    Raises:
        ValueError: If the format or compression is unsupported
    """
    if format_type not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported storage format: {format_type}")
    if format_type == "parquet" and compression not in SUPPORTED_COMPRESSIONS:
        raise ValueError(f"Unsupported compression: {compression}")

    logger.debug(f"Creating ParquetStorage for {format_type} mode (compression: {compression})")
    return ParquetStorage(compression=compression)
