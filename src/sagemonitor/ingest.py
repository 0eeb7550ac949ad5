"""
CSV ingestion.

Files are read with polars as all-string columns; typing is the normalizer's
job. Empty cells come back as None.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import polars as pl

from .validation import ErrorSeverity, ValidationError, handle_file_error

logger = logging.getLogger(__name__)


def read_csv_frame(path: Union[str, Path]) -> pl.DataFrame:
    """
    Read ``path`` into a DataFrame of string columns with trimmed headers.

    Raises:
        FileNotFoundError: If ``path`` does not exist
        ValidationError: If two headers are equal once trimmed
        polars.exceptions.PolarsError: If the file cannot be parsed
    """
    try:
        df = pl.read_csv(path, infer_schema_length=0)
    except FileNotFoundError as e:
        handle_file_error(e, f"reading {path}", severity=ErrorSeverity.ERROR, logger=logger)
        raise
    except pl.exceptions.NoDataError:
        logger.warning(f"CSV file is empty: {path}")
        return pl.DataFrame()

    trimmed = [name.strip() for name in df.columns]
    duplicates = sorted({name for name in trimmed if trimmed.count(name) > 1})
    if duplicates:
        raise ValidationError(
            f"Duplicate column(s) in {path}: {', '.join(duplicates)}",
            field_name="header",
            value=duplicates,
        )
    return df.rename(dict(zip(df.columns, trimmed)))


def read_csv_rows(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Rows of the CSV at ``path`` as dictionaries keyed by trimmed header."""
    rows = read_csv_frame(path).to_dicts()
    logger.info(f"Read {len(rows)} rows from {path}")
    return rows
