"""
Dashboard assembly.

``build_dashboard`` runs every statistics engine that a dashboard page of the
given schema needs and collects the results in one DashboardData object. It
is a pure function of the records, the analysis settings and the random
source used by the bootstrap.
"""

import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .analysis import (
    BATCH_BOOTSTRAP_PAIRS,
    LLM_SCATTER_PAIRS,
    VISION_BOOTSTRAP_PAIRS,
    CorrelationPair,
    bootstrap_by_model,
    cumulative_series,
    efficiency_series,
    energy_per_confidence_series,
    group_efficiency,
    model_frequency,
    model_means,
    quartiles_by_model,
    scatter_for_pair,
    summarize,
)
from .models.config import AnalysisConfig
from .models.options import EfficiencyType, OrderKey
from .models.records import MonitoringRecord, RecordSchema
from .models.results import DashboardData
from .normalization import normalize_rows

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardLayout:
    """Charts and tables computed for one schema."""

    cumulative_fields: Tuple[str, ...]
    cumulative_order: OrderKey
    bootstrap_pairs: Tuple[CorrelationPair, ...] = ()
    scatter_pairs: Tuple[CorrelationPair, ...] = ()
    box_fields: Tuple[str, ...] = ()
    efficiency_kinds: Tuple[EfficiencyType, ...] = ()
    mean_fields: Tuple[str, ...] = ()


LAYOUTS: Dict[RecordSchema, DashboardLayout] = {
    RecordSchema.VISION: DashboardLayout(
        cumulative_fields=("cpu_usage", "battery_consumption"),
        cumulative_order=OrderKey.TIMESTAMP,
        bootstrap_pairs=VISION_BOOTSTRAP_PAIRS,
        box_fields=("instantaneous_confidence", "cpu_usage"),
        efficiency_kinds=(EfficiencyType.CPU, EfficiencyType.BATTERY),
        mean_fields=("instantaneous_confidence", "cpu_usage", "battery_consumption", "inference_time"),
    ),
    RecordSchema.BATCH: DashboardLayout(
        cumulative_fields=("energy_usage",),
        cumulative_order=OrderKey.ID,
        bootstrap_pairs=BATCH_BOOTSTRAP_PAIRS,
        box_fields=("energy_usage", "mean_confidence", "mean_inference"),
        efficiency_kinds=(EfficiencyType.ENERGY,),
        mean_fields=("energy_usage", "mean_confidence", "mean_inference"),
    ),
    RecordSchema.LLM: DashboardLayout(
        cumulative_fields=("energy_usage",),
        cumulative_order=OrderKey.TIMESTAMP,
        scatter_pairs=LLM_SCATTER_PAIRS,
        box_fields=("energy_usage", "ewma_score"),
        efficiency_kinds=(EfficiencyType.CPU, EfficiencyType.BATTERY, EfficiencyType.ENERGY),
        mean_fields=("energy_usage", "ewma_score", "cpu_usage", "temperature", "output_token_size"),
    ),
}


def build_dashboard(
    records: List[MonitoringRecord],
    schema: RecordSchema,
    config: Optional[AnalysisConfig] = None,
    rng: Optional[random.Random] = None,
) -> DashboardData:
    """
    Compute every dashboard output for ``records``.

    Args:
        records: Normalized records of ``schema``
        schema: Record shape of the dataset
        config: Analysis settings; defaults when None
        rng: Random source for the bootstrap; built from the configured seed
            when None

    Returns:
        DashboardData for the presentation layer
    """
    schema = RecordSchema(schema)
    config = config or AnalysisConfig()
    rng = rng or config.make_rng()
    layout = LAYOUTS[schema]

    logger.info(f"Building {schema.value} dashboard for {len(records)} records")

    dashboard = DashboardData(
        schema=schema.value,
        summary=summarize(records, schema),
        model_frequency=model_frequency(records),
    )

    for name in layout.cumulative_fields:
        dashboard.cumulative[name] = cumulative_series(records, name, layout.cumulative_order)

    for pair in layout.bootstrap_pairs:
        dashboard.correlations[pair.name] = bootstrap_by_model(
            records,
            pair.x_field,
            pair.y_field,
            n_bootstrap=config.bootstrap_iterations,
            min_samples=config.min_bootstrap_samples,
            rng=rng,
        )

    for pair in layout.scatter_pairs:
        dashboard.scatter[pair.name] = scatter_for_pair(records, pair)

    for name in layout.box_fields:
        dashboard.box_summaries[name] = quartiles_by_model(records, name)

    for kind in layout.efficiency_kinds:
        dashboard.efficiency_series[kind.value] = efficiency_series(records, kind)
        dashboard.group_efficiency[kind.value] = group_efficiency(
            records, kind, config.efficiency_aggregate
        )

    if schema is RecordSchema.BATCH:
        dashboard.energy_per_confidence = energy_per_confidence_series(records)

    dashboard.model_means = model_means(records, list(layout.mean_fields))

    logger.debug(
        f"Dashboard ready: {len(dashboard.model_frequency)} models, "
        f"{sum(len(v) for v in dashboard.correlations.values())} correlation groups"
    )
    return dashboard


def analyze_rows(
    rows: Iterable[Dict[str, Any]],
    schema: RecordSchema,
    config: Optional[AnalysisConfig] = None,
    rng: Optional[random.Random] = None,
) -> Tuple[List[MonitoringRecord], DashboardData]:
    """
    Normalize raw rows and build their dashboard.

    Raises:
        ValidationError: If the rows lack a required column
    """
    config = config or AnalysisConfig()
    records = normalize_rows(
        rows,
        schema,
        ordering=config.inference_ordering,
        confidence_epsilon=config.confidence_epsilon,
    )
    return records, build_dashboard(records, schema, config, rng)
