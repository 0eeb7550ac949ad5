"""
Configuration data models.

This module contains the configuration structures for the analysis pipeline
and the root application configuration loaded from ``config.toml``.
"""

import random
from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING

from .options import EfficiencyAggregate, InferenceOrdering

if TYPE_CHECKING:
    from ..config.storage_config import StorageConfig


# Floor applied to confidence before dividing energy by it.
DEFAULT_CONFIDENCE_EPSILON = 0.001
DEFAULT_BOOTSTRAP_ITERATIONS = 100
DEFAULT_MIN_BOOTSTRAP_SAMPLES = 10


@dataclass
class AnalysisConfig:
    """
    Settings for the statistical pipeline, loaded from ``[analysis]``.
    """

    # Number of bootstrap resamples per model.
    bootstrap_iterations: int = DEFAULT_BOOTSTRAP_ITERATIONS
    # Models with fewer records report a zero correlation instead of resampling.
    min_bootstrap_samples: int = DEFAULT_MIN_BOOTSTRAP_SAMPLES
    # Seed for the bootstrap random source; None draws from system entropy.
    bootstrap_seed: Optional[int] = None
    confidence_epsilon: float = DEFAULT_CONFIDENCE_EPSILON
    inference_ordering: InferenceOrdering = InferenceOrdering.SORTED
    efficiency_aggregate: EfficiencyAggregate = EfficiencyAggregate.RATIO_OF_MEANS

    def make_rng(self) -> random.Random:
        """Fresh random source for one pipeline run."""
        return random.Random(self.bootstrap_seed)


@dataclass
class AppConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    storage: Optional["StorageConfig"] = None
    log_level: str = "INFO"

    def __post_init__(self):
        if self.storage is None:
            from ..config.storage_config import StorageConfig

            self.storage = StorageConfig()
