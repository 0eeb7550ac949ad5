"""
Pearson correlation and its bootstrap distribution.

The bootstrap draws ``n_bootstrap`` resamples of the paired series (uniform,
with replacement, each as long as the input) and summarizes the resulting
correlations with floor-index quartiles. Groups smaller than ``min_samples``
skip resampling and report a neutral zero correlation.

The random source is injectable. Pass a seeded ``random.Random`` for
reproducible output.
"""

import logging
import math
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..models.config import DEFAULT_BOOTSTRAP_ITERATIONS, DEFAULT_MIN_BOOTSTRAP_SAMPLES
from ..models.records import MonitoringRecord
from ..models.results import CorrelationResult, ModelCorrelation, ScatterPoint
from ..validation import validate_positive_integer
from .grouping import field_values, group_by_model
from .quartiles import floor_percentile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CorrelationPair:
    """
    Two record fields compared in one correlation chart.

    Scales are applied to the raw values before plotting (for example 100 to
    show fractions as percentages).
    """

    name: str
    x_field: str
    y_field: str
    x_scale: float = 1.0
    y_scale: float = 1.0


LLM_SCATTER_PAIRS: Tuple[CorrelationPair, ...] = (
    CorrelationPair("energy_vs_ewma", "energy_usage", "ewma_score", 100.0, 100.0),
    CorrelationPair("output_tokens_vs_energy", "output_token_size", "energy_usage", 1.0, 100.0),
    CorrelationPair("output_tokens_vs_ewma", "output_token_size", "ewma_score", 1.0, 100.0),
    CorrelationPair("cpu_vs_energy", "cpu_usage", "energy_usage", 100.0, 100.0),
)

BATCH_BOOTSTRAP_PAIRS: Tuple[CorrelationPair, ...] = (
    CorrelationPair("energy_vs_confidence", "energy_usage", "mean_confidence"),
    CorrelationPair("energy_vs_inference", "energy_usage", "mean_inference"),
)

VISION_BOOTSTRAP_PAIRS: Tuple[CorrelationPair, ...] = (
    CorrelationPair("cpu_vs_confidence", "cpu_usage", "instantaneous_confidence"),
    CorrelationPair("battery_vs_confidence", "battery_consumption", "instantaneous_confidence"),
)


def pearson(xs: Sequence[float], ys: Sequence[float]) -> float:
    """
    Pearson correlation coefficient of two paired series.

    Returns 0 when the series differ in length, hold fewer than two points,
    either has zero variance, or the coefficient is not finite.
    """
    n = len(xs)
    if n != len(ys) or n < 2:
        return 0.0

    # Scale both series into [-1, 1] so squared deviations cannot overflow.
    xs = _rescaled(xs)
    ys = _rescaled(ys)
    if xs is None or ys is None:
        return 0.0

    mean_x = sum(xs) / n
    mean_y = sum(ys) / n

    numerator = 0.0
    sum_sq_x = 0.0
    sum_sq_y = 0.0
    for x, y in zip(xs, ys):
        dx = x - mean_x
        dy = y - mean_y
        numerator += dx * dy
        sum_sq_x += dx * dx
        sum_sq_y += dy * dy

    if sum_sq_x == 0 or sum_sq_y == 0:
        return 0.0
    r = numerator / (math.sqrt(sum_sq_x) * math.sqrt(sum_sq_y))
    return r if math.isfinite(r) else 0.0


def _rescaled(values: Sequence[float]) -> Optional[List[float]]:
    """``values`` divided by their largest magnitude; None if all zero or not finite."""
    scale = max(abs(v) for v in values)
    if scale == 0 or not math.isfinite(scale):
        return None
    return [v / scale for v in values]


def degenerate_correlation() -> CorrelationResult:
    """Result reported for groups too small to resample."""
    return CorrelationResult(median=0.0, q1=0.0, q3=0.0, min=0.0, max=0.0, sample_correlations=[0.0])


def bootstrap_correlation(
    xs: Sequence[float],
    ys: Sequence[float],
    n_bootstrap: int = DEFAULT_BOOTSTRAP_ITERATIONS,
    min_samples: int = DEFAULT_MIN_BOOTSTRAP_SAMPLES,
    rng: Optional[random.Random] = None,
) -> CorrelationResult:
    """
    Bootstrap distribution of the correlation between ``xs`` and ``ys``.

    Args:
        xs: First series
        ys: Second series, paired with ``xs`` by position
        n_bootstrap: Number of resamples
        min_samples: Smallest series length that is resampled
        rng: Random source; a fresh unseeded one when None

    Returns:
        CorrelationResult with ascending ``sample_correlations``. Series
        shorter than ``min_samples`` (or of unequal length) give the
        degenerate all-zero result.

    Raises:
        ValidationError: If ``n_bootstrap`` is not a positive integer
    """
    n_bootstrap = validate_positive_integer(n_bootstrap, min_value=1, field_name="n_bootstrap")
    n = len(xs)
    if n < min_samples:
        logger.debug(f"Skipping bootstrap: {n} samples < {min_samples}")
        return degenerate_correlation()
    if n != len(ys):
        logger.warning(f"Skipping bootstrap: series lengths differ ({n} != {len(ys)})")
        return degenerate_correlation()

    rng = rng or random.Random()
    correlations: List[float] = []
    for _ in range(n_bootstrap):
        indices = [rng.randrange(n) for _ in range(n)]
        correlations.append(pearson([xs[i] for i in indices], [ys[i] for i in indices]))
    correlations.sort()

    return CorrelationResult(
        median=floor_percentile(correlations, 0.5),
        q1=floor_percentile(correlations, 0.25),
        q3=floor_percentile(correlations, 0.75),
        min=correlations[0],
        max=correlations[-1],
        sample_correlations=correlations,
    )


def bootstrap_by_model(
    records: Sequence[MonitoringRecord],
    x_field: str,
    y_field: str,
    n_bootstrap: int = DEFAULT_BOOTSTRAP_ITERATIONS,
    min_samples: int = DEFAULT_MIN_BOOTSTRAP_SAMPLES,
    rng: Optional[random.Random] = None,
) -> List[ModelCorrelation]:
    """
    Bootstrap correlation of two fields for every model.

    Models are visited in first-occurrence order and share one random source,
    so a seeded ``rng`` makes the whole table reproducible.
    """
    rng = rng or random.Random()
    results = []
    for model, group in group_by_model(records).items():
        result = bootstrap_correlation(
            field_values(group, x_field),
            field_values(group, y_field),
            n_bootstrap=n_bootstrap,
            min_samples=min_samples,
            rng=rng,
        )
        results.append(ModelCorrelation(model=model, sample_count=len(group), result=result))
    logger.debug(f"Bootstrapped {x_field} vs {y_field} for {len(results)} models")
    return results


def scatter_points(
    records: Sequence[MonitoringRecord],
    x_field: str,
    y_field: str,
    x_scale: float = 1.0,
    y_scale: float = 1.0,
) -> List[ScatterPoint]:
    """Scaled (x, y) points, one per record, identified by record position."""
    xs = field_values(records, x_field)
    ys = field_values(records, y_field)
    return [
        ScatterPoint(x=x * x_scale, y=y * y_scale, model=record.model, id=index)
        for index, (record, x, y) in enumerate(zip(records, xs, ys))
    ]


def scatter_for_pair(records: Sequence[MonitoringRecord], pair: CorrelationPair) -> List[ScatterPoint]:
    return scatter_points(records, pair.x_field, pair.y_field, pair.x_scale, pair.y_scale)
