"""
Normalization of raw CSV rows into typed monitoring records.
"""

from .normalizer import (
    REQUIRED_FIELDS,
    ParseWarning,
    RecordNormalizer,
    derive_inference_times,
    energy_per_confidence,
    normalize_rows,
)

__all__ = [
    "REQUIRED_FIELDS",
    "ParseWarning",
    "RecordNormalizer",
    "derive_inference_times",
    "energy_per_confidence",
    "normalize_rows",
]
