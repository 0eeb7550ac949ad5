"""
Storage configuration model and validation.

This module defines the StorageConfig dataclass which selects how normalized
datasets are persisted between sessions: the file format, its compression and
whether a CSV copy is written alongside for spreadsheet users.
"""

from typing import Literal, Dict, Any
from dataclasses import dataclass

SUPPORTED_FORMATS = ("parquet", "json")
SUPPORTED_COMPRESSIONS = ("snappy", "gzip", "brotli", "lz4", "zstd")


@dataclass
class StorageConfig:
    """
    Configuration model for dataset persistence.

    Attributes:
        format: Storage format for saved datasets
            - 'parquet': Columnar format with compression (default)
            - 'json': Human-readable list of records
        compression: Compression algorithm for Parquet format
        generate_legacy_formats: Also write the dataset as CSV next to the
            primary file

    Note:
        Compression setting only applies to Parquet format.
    """

    format: Literal["parquet", "json"] = "parquet"
    compression: Literal["snappy", "gzip", "brotli", "lz4", "zstd"] = "snappy"
    generate_legacy_formats: bool = False

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "StorageConfig":
        """
        Create a StorageConfig instance from a dictionary.

        Raises:
            ValueError: If invalid configuration values are provided
        """
        format_type = config_dict.get("format", "parquet")
        compression = config_dict.get("compression", "snappy")
        generate_legacy = config_dict.get("generate_legacy_formats", False)

        if format_type not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported storage format: {format_type}")

        if format_type == "parquet" and compression not in SUPPORTED_COMPRESSIONS:
            raise ValueError(f"Unsupported compression algorithm: {compression}")

        return cls(
            format=format_type,
            compression=compression,
            generate_legacy_formats=bool(generate_legacy),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "format": self.format,
            "compression": self.compression,
            "generate_legacy_formats": self.generate_legacy_formats,
        }
