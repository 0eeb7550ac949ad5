"""
Integration tests for the command-line interface.
"""

import json

import pytest

from sagemonitor.cli.main import build_parser, main_cli
from sagemonitor.storage import DATASET_KEYS
from sagemonitor.models import RecordSchema


@pytest.mark.integration
class TestAnalyzeCommand:
    """Test cases for 'sagemonitor analyze'."""

    def test_writes_dataset_and_dashboard(self, temp_dir, config_files, write_csv, many_batch_rows):
        """Test a full run on a batch CSV."""
        csv_path = write_csv(temp_dir / "batch.csv", many_batch_rows)
        output_dir = temp_dir / "out"

        main_cli([
            "--config", str(config_files["config"]),
            "analyze", str(csv_path),
            "--schema", "batch",
            "--output", str(output_dir),
        ])

        dashboard = json.loads((output_dir / "dashboard.json").read_text())
        assert dashboard["schema"] == "batch"
        assert dashboard["summary"]["total_data_points"] == 15
        # Iterations come from the config file.
        assert len(dashboard["correlations"]["energy_vs_confidence"][0]["sample_correlations"]) == 50
        assert (output_dir / f"{DATASET_KEYS[RecordSchema.BATCH]}.parquet").exists()

    def test_seed_override_is_reproducible(self, temp_dir, config_files, write_csv, many_batch_rows):
        """Test that equal --seed values give equal dashboards."""
        csv_path = write_csv(temp_dir / "batch.csv", many_batch_rows)
        outputs = []
        for name in ("first", "second"):
            main_cli([
                "--config", str(config_files["config"]),
                "analyze", str(csv_path),
                "--schema", "batch",
                "--seed", "123",
                "-o", str(temp_dir / name),
            ])
            outputs.append((temp_dir / name / "dashboard.json").read_text())

        assert outputs[0] == outputs[1]

    def test_missing_columns_exit(self, temp_dir, config_files, write_csv):
        """Test that a CSV without required columns exits with status 1."""
        csv_path = write_csv(temp_dir / "bad.csv", [{"ID": "1", "ModelName": "A"}])

        with pytest.raises(SystemExit) as exc_info:
            main_cli([
                "--config", str(config_files["config"]),
                "analyze", str(csv_path),
                "--schema", "batch",
                "-o", str(temp_dir / "out"),
            ])

        assert exc_info.value.code == 1
        assert not (temp_dir / "out" / "dashboard.json").exists()

    def test_duplicate_headers_exit(self, temp_dir, config_files):
        """Test that headers colliding once trimmed exit with status 1."""
        csv_path = temp_dir / "dup.csv"
        csv_path.write_text(
            "ID, ID,ModelName,EnergyUsage,MeanConfidence,MeanInference\n1,1,A,2.0,0.5,10\n"
        )

        with pytest.raises(SystemExit) as exc_info:
            main_cli([
                "--config", str(config_files["config"]),
                "analyze", str(csv_path),
                "--schema", "batch",
                "-o", str(temp_dir / "out"),
            ])

        assert exc_info.value.code == 1
        assert not (temp_dir / "out" / "dashboard.json").exists()

    def test_missing_config_exit(self, temp_dir, write_csv, batch_rows):
        """Test that an explicit but absent config file exits with status 1."""
        csv_path = write_csv(temp_dir / "batch.csv", batch_rows)

        with pytest.raises(SystemExit) as exc_info:
            main_cli([
                "--config", str(temp_dir / "absent.toml"),
                "analyze", str(csv_path),
                "--schema", "batch",
            ])

        assert exc_info.value.code == 1

    def test_ordering_choice_is_validated(self):
        """Test that argparse rejects unknown orderings."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["analyze", "x.csv", "--schema", "vision", "--ordering", "random"])


@pytest.mark.integration
class TestShowCommand:
    """Test cases for 'sagemonitor show'."""

    def test_rebuilds_from_store(self, temp_dir, config_files, write_csv, vision_rows):
        """Test that show reproduces the dashboard of a stored dataset."""
        csv_path = write_csv(temp_dir / "vision.csv", vision_rows)
        output_dir = temp_dir / "out"
        common = ["--config", str(config_files["config"])]

        main_cli(common + ["analyze", str(csv_path), "--schema", "vision", "-o", str(output_dir)])
        analyzed = json.loads((output_dir / "dashboard.json").read_text())
        (output_dir / "dashboard.json").unlink()

        main_cli(common + ["show", "--schema", "vision", "-o", str(output_dir)])
        shown = json.loads((output_dir / "dashboard.json").read_text())

        assert shown == analyzed

    def test_nothing_stored(self, temp_dir, config_files):
        """Test that show without a stored dataset exits with status 1."""
        with pytest.raises(SystemExit) as exc_info:
            main_cli(["--config", str(config_files["config"]), "show", "--schema", "llm", "-o", str(temp_dir)])

        assert exc_info.value.code == 1
