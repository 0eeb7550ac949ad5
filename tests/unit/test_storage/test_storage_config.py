"""
Unit tests for storage configuration.
"""

import pytest

from sagemonitor.config import StorageConfig


@pytest.mark.unit
class TestStorageConfig:
    """Test cases for StorageConfig class."""

    def test_defaults(self):
        """Test default values."""
        config = StorageConfig()
        assert (config.format, config.compression, config.generate_legacy_formats) == (
            "parquet",
            "snappy",
            False,
        )

    def test_from_dict(self):
        """Test creating from a complete table."""
        config = StorageConfig.from_dict(
            {"format": "json", "compression": "gzip", "generate_legacy_formats": True}
        )
        assert config.format == "json"
        assert config.generate_legacy_formats is True

    def test_from_dict_partial(self):
        """Test that missing keys take defaults."""
        assert StorageConfig.from_dict({"compression": "lz4"}).format == "parquet"

    @pytest.mark.parametrize(
        "table, message",
        [
            ({"format": "yaml"}, "Unsupported storage format"),
            ({"format": "parquet", "compression": "rar"}, "Unsupported compression algorithm"),
        ],
    )
    def test_invalid(self, table, message):
        """Test rejection of unsupported values."""
        with pytest.raises(ValueError, match=message):
            StorageConfig.from_dict(table)

    def test_json_ignores_compression(self):
        """Test that compression is not checked in JSON mode."""
        assert StorageConfig.from_dict({"format": "json", "compression": "rar"}).format == "json"

    def test_to_dict_round_trip(self):
        """Test that to_dict feeds back into from_dict."""
        config = StorageConfig(format="parquet", compression="brotli", generate_legacy_formats=True)
        assert StorageConfig.from_dict(config.to_dict()) == config
