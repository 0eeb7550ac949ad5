"""
Configuration validation utilities.

This module turns raw TOML tables into validated configuration dataclasses.
"""

import logging
from typing import Any, Dict

from ..models.config import (
    DEFAULT_BOOTSTRAP_ITERATIONS,
    DEFAULT_CONFIDENCE_EPSILON,
    DEFAULT_MIN_BOOTSTRAP_SAMPLES,
    AnalysisConfig,
    AppConfig,
)
from ..models.options import EfficiencyAggregate, InferenceOrdering
from ..validation import (
    ValidationError,
    validate_enum_choice,
    validate_positive_float,
    validate_positive_integer,
)
from .storage_config import StorageConfig

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def validate_analysis_config(analysis_data: Dict[str, Any]) -> AnalysisConfig:
    """
    Validate and create an AnalysisConfig from the ``[analysis]`` table.

    Args:
        analysis_data: Raw analysis configuration from TOML

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ValidationError: If validation fails
    """
    try:
        bootstrap_iterations = validate_positive_integer(
            analysis_data.get("bootstrap_iterations", DEFAULT_BOOTSTRAP_ITERATIONS),
            min_value=1,
            max_value=100000,
            field_name="analysis.bootstrap_iterations",
        )

        min_bootstrap_samples = validate_positive_integer(
            analysis_data.get("min_bootstrap_samples", DEFAULT_MIN_BOOTSTRAP_SAMPLES),
            min_value=2,  # Pearson needs at least two points
            field_name="analysis.min_bootstrap_samples",
        )

        bootstrap_seed = analysis_data.get("bootstrap_seed")
        if bootstrap_seed is not None:
            bootstrap_seed = validate_positive_integer(
                bootstrap_seed,
                min_value=0,
                field_name="analysis.bootstrap_seed",
            )

        confidence_epsilon = validate_positive_float(
            analysis_data.get("confidence_epsilon", DEFAULT_CONFIDENCE_EPSILON),
            min_value=1e-12,
            max_value=1.0,
            field_name="analysis.confidence_epsilon",
        )

        inference_ordering = validate_enum_choice(
            analysis_data.get("inference_ordering", InferenceOrdering.SORTED.value),
            valid_choices=[option.value for option in InferenceOrdering],
            field_name="analysis.inference_ordering",
        )

        efficiency_aggregate = validate_enum_choice(
            analysis_data.get(
                "efficiency_aggregate", EfficiencyAggregate.RATIO_OF_MEANS.value
            ),
            valid_choices=[option.value for option in EfficiencyAggregate],
            field_name="analysis.efficiency_aggregate",
        )

        return AnalysisConfig(
            bootstrap_iterations=bootstrap_iterations,
            min_bootstrap_samples=min_bootstrap_samples,
            bootstrap_seed=bootstrap_seed,
            confidence_epsilon=confidence_epsilon,
            inference_ordering=InferenceOrdering(inference_ordering),
            efficiency_aggregate=EfficiencyAggregate(efficiency_aggregate),
        )

    except ValidationError as e:
        logger.error(f"Analysis configuration validation failed: {e}")
        raise


def validate_storage_config(storage_data: Dict[str, Any]) -> StorageConfig:
    """
    Validate the ``[storage]`` table.

    Raises:
        ValidationError: If the format or compression is unsupported
    """
    try:
        return StorageConfig.from_dict(storage_data)
    except ValueError as e:
        raise ValidationError(f"storage: {e}", field_name="storage", value=storage_data)


def validate_app_config(config_data: Dict[str, Any]) -> AppConfig:
    """
    Validate the whole configuration document.

    Missing tables fall back to their defaults.
    """
    general_settings = config_data.get("general", {})

    log_level = str(general_settings.get("log_level", "INFO")).upper()
    validate_enum_choice(log_level, VALID_LOG_LEVELS, field_name="general.log_level")

    return AppConfig(
        analysis=validate_analysis_config(config_data.get("analysis", {})),
        storage=validate_storage_config(config_data.get("storage", {})),
        log_level=log_level,
    )
