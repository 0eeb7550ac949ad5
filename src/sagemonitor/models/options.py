"""
Analysis strategy options.

Each enum names one of the variants that older dashboard builds implemented as
separate components. Callers choose a variant explicitly.
"""

from enum import Enum


class InferenceOrdering(Enum):
    """Order in which normalized vision records are returned."""

    # Records come back sorted by timestamp (ascending, stable).
    SORTED = "sorted"
    # Records keep their input order; inference time is still the delta to
    # the previous sample in time order.
    INPUT = "input"


class OrderKey(Enum):
    """Ordering key for running sums and time series."""
    TIMESTAMP = "timestamp"
    ID = "id"


class EfficiencyType(Enum):
    """Cost measure used as the efficiency denominator."""
    CPU = "cpu"
    BATTERY = "battery"
    ENERGY = "energy"


class EfficiencyAggregate(Enum):
    """How per-model efficiency is aggregated."""

    # mean(confidence) / mean(cost)
    RATIO_OF_MEANS = "ratio_of_means"
    # mean(confidence_i / cost_i)
    MEAN_OF_RATIOS = "mean_of_ratios"
