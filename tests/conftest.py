"""
Pytest configuration and shared fixtures for the sagemonitor test suite.

This module provides common fixtures, sample telemetry rows and configuration
files for all test modules.
"""

import shutil
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict, List

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


# ============================================================================
# Telemetry Fixtures
# ============================================================================


@pytest.fixture
def batch_rows() -> List[Dict[str, Any]]:
    """Two batch rows for one model, as read from CSV."""
    return [
        {"ID": "1", "ModelName": "A", "EnergyUsage": "2.0", "MeanConfidence": "0.5", "MeanInference": "10"},
        {"ID": "2", "ModelName": "A", "EnergyUsage": "4.0", "MeanConfidence": "0.5", "MeanInference": "20"},
    ]


@pytest.fixture
def vision_rows() -> List[Dict[str, Any]]:
    """Vision rows uploaded out of time order."""
    return [
        {
            "Timestamp": "2024-05-01T10:00:02.000Z",
            "BatteryLevel": "97",
            "CPUUsage": "30",
            "BatteryConsumption": "0.5",
            "SelectedModel": "mobilenet",
            "InstantaneousConfidence": "0.9",
            "AverageConfidence": "0.85",
            "CurrentTotalPredictions": "3",
        },
        {
            "Timestamp": "2024-05-01T10:00:00.000Z",
            "BatteryLevel": "100",
            "CPUUsage": "20",
            "BatteryConsumption": "0.2",
            "SelectedModel": "mobilenet",
            "InstantaneousConfidence": "0.8",
            "AverageConfidence": "0.8",
            "CurrentTotalPredictions": "1",
        },
        {
            "Timestamp": "2024-05-01T10:00:05.500Z",
            "BatteryLevel": "95",
            "CPUUsage": "50",
            "BatteryConsumption": "1.0",
            "SelectedModel": "efficientnet",
            "InstantaneousConfidence": "0.6",
            "AverageConfidence": "0.77",
            "CurrentTotalPredictions": "4",
        },
        {
            "Timestamp": "2024-05-01T10:00:01.000Z",
            "BatteryLevel": "99",
            "CPUUsage": "0",
            "BatteryConsumption": "0",
            "SelectedModel": "mobilenet",
            "InstantaneousConfidence": "0.7",
            "AverageConfidence": "0.75",
            "CurrentTotalPredictions": "2",
        },
    ]


@pytest.fixture
def llm_rows() -> List[Dict[str, Any]]:
    """LLM rows with epoch-millisecond timestamps."""
    return [
        {
            "ModelId": "m1",
            "ModelName": "llama",
            "BatteryLevel": "90",
            "CPUUsage": "0.4",
            "Temperature": "35",
            "BatteryConsumption": "0.3",
            "UserFeedback": "1",
            "EnergyUsage": "0.2",
            "InputTokenSize": "100",
            "OutputTokenSize": "50",
            "Timestamp": "1714557600000",
            "EWMAScore": "0.7",
        },
        {
            "ModelId": "m2",
            "ModelName": "phi",
            "BatteryLevel": "89",
            "CPUUsage": "0.2",
            "Temperature": "36",
            "BatteryConsumption": "0.1",
            "UserFeedback": "0",
            "EnergyUsage": "0.1",
            "InputTokenSize": "80",
            "OutputTokenSize": "20",
            "Timestamp": "1714557500000",
            "EWMAScore": "0.5",
        },
        {
            "ModelId": "m1",
            "ModelName": "llama",
            "BatteryLevel": "88",
            "CPUUsage": "0.6",
            "Temperature": "37",
            "BatteryConsumption": "0.4",
            "UserFeedback": "1",
            "EnergyUsage": "0.4",
            "InputTokenSize": "120",
            "OutputTokenSize": "90",
            "Timestamp": "1714557700000",
            "EWMAScore": "0.9",
        },
    ]


@pytest.fixture
def many_batch_rows() -> List[Dict[str, Any]]:
    """Twelve rows for model A (enough to bootstrap) and three for model B."""
    rows = []
    for i in range(12):
        energy = 1.0 + i
        rows.append(
            {
                "ID": str(i + 1),
                "ModelName": "A",
                "EnergyUsage": str(energy),
                "MeanConfidence": str(0.2 + 0.05 * i),
                "MeanInference": str(10 + 3 * i + (i % 3)),
            }
        )
    for i in range(3):
        rows.append(
            {
                "ID": str(13 + i),
                "ModelName": "B",
                "EnergyUsage": str(5.0 - i),
                "MeanConfidence": "0.9",
                "MeanInference": "12",
            }
        )
    return rows


@pytest.fixture
def write_csv():
    """Write dict rows to a CSV file with polars."""
    import polars as pl

    def _write(path: Path, rows: List[Dict[str, Any]]) -> Path:
        pl.DataFrame(rows).write_csv(path)
        return path

    return _write


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def sample_config_data() -> Dict[str, Any]:
    """Sample configuration data for testing."""
    return {
        "general": {"log_level": "INFO"},
        "analysis": {
            "bootstrap_iterations": 50,
            "min_bootstrap_samples": 10,
            "bootstrap_seed": 7,
            "confidence_epsilon": 0.001,
            "inference_ordering": "sorted",
            "efficiency_aggregate": "ratio_of_means",
        },
        "storage": {
            "format": "parquet",
            "compression": "snappy",
            "generate_legacy_formats": False,
        },
    }


@pytest.fixture
def config_files(temp_dir, sample_config_data):
    """Create a temporary configuration file for testing."""
    import toml

    config_file = temp_dir / "config.toml"
    with open(config_file, "w") as f:
        toml.dump(sample_config_data, f)

    return {"config": config_file, "dir": temp_dir}


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically clear configuration cache after each test."""
    original_config_path = Path(__file__).parent.parent / "conf" / "config.toml"

    yield  # Run the test

    from sagemonitor.config import clear_config_cache, set_config_path

    clear_config_cache()
    set_config_path(original_config_path)
