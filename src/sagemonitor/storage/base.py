"""
Abstract base class for storage backends.

A backend persists two kinds of payload: tabular record collections as
polars DataFrames, and small JSON-compatible dictionaries (exported
dashboards, dataset snapshots in JSON mode). Dataset stores and the CLI only
talk to this interface, so the on-disk format can change without touching
them.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

import polars as pl


class DataStorage(ABC):
    """Abstract base class for data storage implementations."""

    @abstractmethod
    def save_dataframe(self, df: pl.DataFrame, path: str) -> None:
        """Write ``df`` to ``path``, creating parent directories."""

    @abstractmethod
    def load_dataframe(self, path: str) -> pl.DataFrame:
        """Read a DataFrame written by ``save_dataframe``."""

    @abstractmethod
    def save_dict(self, data: Dict[str, Any], path: str) -> None:
        """Write JSON-compatible ``data`` to ``path``."""

    @abstractmethod
    def load_dict(self, path: str) -> Dict[str, Any]:
        """Read a dictionary written by ``save_dict``."""

    @abstractmethod
    def file_exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def get_file_size(self, path: str) -> int:
        """Size of ``path`` in bytes; 0 when it does not exist."""
