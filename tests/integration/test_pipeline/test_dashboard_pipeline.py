"""
Integration tests for dashboard assembly.

Runs raw rows through normalization and every statistics engine for each
schema and checks the chart-ready output as a whole.
"""

import json
import random

import pytest

from sagemonitor.models import AnalysisConfig, EfficiencyAggregate, RecordSchema
from sagemonitor.pipeline import analyze_rows, build_dashboard
from sagemonitor.storage import InMemoryDatasetStore


@pytest.mark.integration
class TestBatchDashboard:
    """Test cases for batch datasets."""

    def test_outputs(self, many_batch_rows):
        """Test every batch chart input."""
        config = AnalysisConfig(bootstrap_iterations=20, bootstrap_seed=3)

        records, dashboard = analyze_rows(many_batch_rows, RecordSchema.BATCH, config)

        assert dashboard.schema == "batch"
        assert dashboard.summary.total_data_points == 15
        assert set(dashboard.correlations) == {"energy_vs_confidence", "energy_vs_inference"}
        model_a = dashboard.correlations["energy_vs_confidence"][0]
        assert model_a.model == "A"
        assert len(model_a.result.sample_correlations) == 20
        assert dashboard.correlations["energy_vs_inference"][1].result.is_degenerate
        assert [p.key for p in dashboard.cumulative["energy_usage"]] == list(range(1, 16))
        assert len(dashboard.energy_per_confidence) == 15
        assert set(dashboard.group_efficiency) == {"energy"}
        assert dashboard.scatter == {}

    def test_seeded_runs_match(self, many_batch_rows):
        """Test that a configured seed reproduces the whole dashboard."""
        config = AnalysisConfig(bootstrap_seed=99)

        _, first = analyze_rows(many_batch_rows, RecordSchema.BATCH, config)
        _, second = analyze_rows(many_batch_rows, RecordSchema.BATCH, config)

        assert first.to_dict() == second.to_dict()

    def test_json_serializable(self, many_batch_rows):
        """Test that the dashboard renders to JSON."""
        _, dashboard = analyze_rows(many_batch_rows, RecordSchema.BATCH, rng=random.Random(0))

        data = json.loads(json.dumps(dashboard.to_dict()))

        assert data["summary"]["total_models"] == 2
        assert data["model_frequency"][0] == {"model": "A", "count": 12, "percentage": 80.0}


@pytest.mark.integration
class TestVisionDashboard:
    """Test cases for vision datasets."""

    def test_outputs(self, vision_rows):
        """Test cumulative CPU and battery series and efficiency tables."""
        _, dashboard = analyze_rows(vision_rows, RecordSchema.VISION)

        cpu = dashboard.cumulative["cpu_usage"]
        assert [p.cumulative_value for p in cpu] == pytest.approx([20.0, 20.0, 50.0, 100.0])
        assert dashboard.cumulative["battery_consumption"][-1].cumulative_value == pytest.approx(1.7)
        assert set(dashboard.efficiency_series) == {"cpu", "battery"}
        # Four samples are too few to resample.
        assert all(row.result.is_degenerate for row in dashboard.correlations["cpu_vs_confidence"])

    def test_mean_of_ratios_option(self, vision_rows):
        """Test that the aggregate option reaches the efficiency tables."""
        config = AnalysisConfig(efficiency_aggregate=EfficiencyAggregate.MEAN_OF_RATIOS)

        _, ratio_of_means = analyze_rows(vision_rows, RecordSchema.VISION)
        _, mean_of_ratios = analyze_rows(vision_rows, RecordSchema.VISION, config)

        first = ratio_of_means.group_efficiency["cpu"][0].efficiency
        second = mean_of_ratios.group_efficiency["cpu"][0].efficiency
        assert first != pytest.approx(second)


@pytest.mark.integration
class TestLLMDashboard:
    """Test cases for LLM datasets."""

    def test_outputs(self, llm_rows):
        """Test scatter pairs and the cumulative energy series."""
        _, dashboard = analyze_rows(llm_rows, RecordSchema.LLM)

        assert set(dashboard.scatter) == {
            "energy_vs_ewma",
            "output_tokens_vs_energy",
            "output_tokens_vs_ewma",
            "cpu_vs_energy",
        }
        assert all(len(points) == 3 for points in dashboard.scatter.values())
        assert dashboard.cumulative["energy_usage"][-1].cumulative_value == pytest.approx(0.7)
        assert dashboard.correlations == {}
        assert list(dashboard.model_means) == ["llama", "phi"]


@pytest.mark.integration
@pytest.mark.parametrize("schema", list(RecordSchema))
def test_empty_dataset(schema):
    """Test that an empty dataset produces an empty but complete dashboard."""
    dashboard = build_dashboard([], schema)

    assert dashboard.summary.total_data_points == 0
    assert dashboard.model_frequency == []
    assert all(series == [] for series in dashboard.cumulative.values())


@pytest.mark.integration
def test_stored_dataset_rebuilds_same_dashboard(llm_rows):
    """Test that a dataset reloaded from a store yields the same dashboard."""
    records, dashboard = analyze_rows(llm_rows, RecordSchema.LLM)
    store = InMemoryDatasetStore()
    store.save(RecordSchema.LLM, records)

    reloaded = build_dashboard(store.load(RecordSchema.LLM), RecordSchema.LLM)

    assert reloaded.to_dict() == dashboard.to_dict()
