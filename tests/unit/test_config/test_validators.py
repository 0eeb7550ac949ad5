"""
Unit tests for configuration validation and loading.

Tests the validation of the analysis and storage tables, the root
configuration document and the cached configuration singleton.
"""

import pytest

from sagemonitor.config import (
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    set_config_path,
    validate_analysis_config,
    validate_app_config,
    validate_storage_config,
)
from sagemonitor.models import EfficiencyAggregate, InferenceOrdering
from sagemonitor.validation import ValidationError


@pytest.mark.unit
class TestAnalysisConfigValidation:
    """Test cases for the [analysis] table."""

    def test_valid_table(self, sample_config_data):
        """Test successful validation of a complete table."""
        config = validate_analysis_config(sample_config_data["analysis"])

        assert config.bootstrap_iterations == 50
        assert config.min_bootstrap_samples == 10
        assert config.bootstrap_seed == 7
        assert config.inference_ordering is InferenceOrdering.SORTED
        assert config.efficiency_aggregate is EfficiencyAggregate.RATIO_OF_MEANS

    def test_defaults(self):
        """Test that an empty table yields the defaults."""
        config = validate_analysis_config({})

        assert config.bootstrap_iterations == 100
        assert config.min_bootstrap_samples == 10
        assert config.bootstrap_seed is None
        assert config.confidence_epsilon == pytest.approx(0.001)

    @pytest.mark.parametrize(
        "key, value",
        [
            ("bootstrap_iterations", 0),
            ("bootstrap_iterations", "many"),
            ("min_bootstrap_samples", 1),
            ("bootstrap_seed", -1),
            ("confidence_epsilon", 0.0),
            ("inference_ordering", "random"),
            ("efficiency_aggregate", "median"),
        ],
    )
    def test_invalid_values(self, sample_config_data, key, value):
        """Test validation failure for out-of-range or unknown values."""
        sample_config_data["analysis"][key] = value

        with pytest.raises(ValidationError) as exc_info:
            validate_analysis_config(sample_config_data["analysis"])

        assert key in str(exc_info.value)

    def test_seeded_rng_is_reproducible(self, sample_config_data):
        """Test that the configured seed drives the random source."""
        config = validate_analysis_config(sample_config_data["analysis"])

        assert config.make_rng().random() == config.make_rng().random()


@pytest.mark.unit
class TestAppConfigValidation:
    """Test cases for the whole document."""

    def test_storage_table(self, sample_config_data):
        """Test the [storage] table."""
        config = validate_storage_config(sample_config_data["storage"])
        assert config.format == "parquet"

    def test_invalid_storage(self):
        """Test that storage errors surface as validation errors."""
        with pytest.raises(ValidationError):
            validate_storage_config({"format": "xml"})

    def test_log_level(self, sample_config_data):
        """Test log level normalization and validation."""
        sample_config_data["general"]["log_level"] = "debug"
        assert validate_app_config(sample_config_data).log_level == "DEBUG"

        sample_config_data["general"]["log_level"] = "loud"
        with pytest.raises(ValidationError):
            validate_app_config(sample_config_data)

    def test_missing_tables(self):
        """Test that an empty document is valid."""
        config = validate_app_config({})
        assert config.storage.format == "parquet"
        assert config.analysis.bootstrap_iterations == 100


@pytest.mark.unit
class TestConfigManager:
    """Test cases for the cached configuration singleton."""

    def test_load_from_custom_path(self, config_files):
        """Test loading a configuration file written with toml."""
        set_config_path(config_files["config"])

        config = get_config()

        assert config.analysis.bootstrap_seed == 7
        assert is_config_loaded()
        assert get_config() is config
        assert get_config_info()["config_path"] == str(config_files["config"])

    def test_clear_cache(self, config_files):
        """Test that clearing forces a reload."""
        set_config_path(config_files["config"])
        first = get_config()

        clear_config_cache()

        assert not is_config_loaded()
        assert get_config() is not first

    def test_missing_file(self, temp_dir):
        """Test that a missing configuration file is reported."""
        set_config_path(temp_dir / "absent.toml")

        with pytest.raises(FileNotFoundError):
            get_config()

    def test_repository_config_loads(self):
        """Test that the shipped conf/config.toml is valid."""
        config = get_config()
        assert config.analysis.bootstrap_iterations == 100
