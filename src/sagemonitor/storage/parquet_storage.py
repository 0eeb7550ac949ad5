"""
Parquet storage backend built on polars.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Literal

import polars as pl

from .base import DataStorage

logger = logging.getLogger(__name__)

Compression = Literal["snappy", "gzip", "brotli", "lz4", "zstd"]


class ParquetStorage(DataStorage):
    """
    Columnar storage for record collections.

    DataFrames are written as compressed Parquet; dictionaries as indented
    UTF-8 JSON, which keeps exported dashboards human readable.
    """

    def __init__(self, compression: Compression = "snappy"):
        self.compression = compression
        logger.debug(f"Initialized ParquetStorage with compression: {compression}")

    def save_dataframe(self, df: pl.DataFrame, path: str) -> None:
        try:
            Path(path).parent.mkdir(parents=True, exist_ok=True)
            df.write_parquet(path, compression=self.compression)
            logger.debug(f"Saved DataFrame with {len(df)} rows to {path}")
        except Exception as e:
            logger.error(f"Failed to save DataFrame to {path}: {e}")
            raise

    def load_dataframe(self, path: str) -> pl.DataFrame:
        try:
            df = pl.read_parquet(path)
            logger.debug(f"Loaded DataFrame with {len(df)} rows from {path}")
            return df
        except Exception as e:
            logger.error(f"Failed to load DataFrame from {path}: {e}")
            raise

    def save_dict(self, data: Dict[str, Any], path: str) -> None:
        try:
            Path(path).parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            logger.debug(f"Saved dictionary data to {path}")
        except Exception as e:
            logger.error(f"Failed to save dictionary to {path}: {e}")
            raise

    def load_dict(self, path: str) -> Dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            logger.debug(f"Loaded dictionary data from {path}")
            return data
        except Exception as e:
            logger.error(f"Failed to load dictionary from {path}: {e}")
            raise

    def file_exists(self, path: str) -> bool:
        return Path(path).exists()

    def get_file_size(self, path: str) -> int:
        try:
            return Path(path).stat().st_size
        except FileNotFoundError:
            return 0
