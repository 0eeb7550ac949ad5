"""
Unit tests for the storage factory.
"""

import pytest

from sagemonitor.storage import ParquetStorage, create_storage


@pytest.mark.unit
class TestStorageFactory:
    """Test cases for create_storage()."""

    @pytest.mark.parametrize("format_type", ["parquet", "json"])
    def test_supported_formats(self, format_type):
        """Test that both formats use the Parquet backend."""
        assert isinstance(create_storage(format_type), ParquetStorage)

    def test_compression_is_passed(self):
        """Test that compression reaches the backend."""
        assert create_storage("parquet", "gzip").compression == "gzip"

    def test_unsupported_format(self):
        """Test rejection of an unknown format."""
        with pytest.raises(ValueError, match="Unsupported storage format"):
            create_storage("xml")

    def test_unsupported_compression(self):
        """Test rejection of an unknown Parquet compression."""
        with pytest.raises(ValueError, match="Unsupported compression"):
            create_storage("parquet", "rar")
