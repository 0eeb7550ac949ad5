"""
Command-line interface for sagemonitor.

Two commands are provided:

- ``analyze``: read a monitoring CSV, normalize it, store the dataset and
  write the computed dashboard to ``dashboard.json``
- ``show``: rebuild the dashboard from a previously stored dataset
"""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional

import polars as pl

from ..config import get_config, get_config_info, set_config_path
from ..ingest import read_csv_rows
from ..models.config import AppConfig
from ..models.options import InferenceOrdering
from ..models.records import RecordSchema
from ..normalization import normalize_rows
from ..pipeline import build_dashboard
from ..storage import FileDatasetStore, create_storage
from ..validation import ValidationError, handle_cli_error

# --- Logging Setup ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)

DASHBOARD_FILENAME = "dashboard.json"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sagemonitor",
        description="Compute dashboard statistics from model-monitoring telemetry.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a config.toml file. Defaults to conf/config.toml.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Analyze a monitoring CSV file.")
    analyze.add_argument("csv", type=Path, help="CSV file with a header row.")
    _add_common_arguments(analyze)
    analyze.add_argument(
        "--ordering",
        choices=[option.value for option in InferenceOrdering],
        help="Order of normalized vision records. Overrides the config file.",
    )

    show = subparsers.add_parser("show", help="Rebuild the dashboard of a stored dataset.")
    _add_common_arguments(show)

    return parser


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--schema",
        required=True,
        choices=[schema.value for schema in RecordSchema],
        help="Record shape of the dataset.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Bootstrap seed for reproducible correlations. Overrides the config file.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("sagemonitor_output"),
        help="Directory for the stored dataset and dashboard.json.",
    )


def load_app_config(config_path: Optional[Path]) -> AppConfig:
    """
    Load the configuration file.

    An explicit ``--config`` path must exist. Without one, built-in defaults
    are used when the default file is absent.
    """
    if config_path is not None:
        set_config_path(config_path)
    elif not Path(get_config_info()["config_path"]).exists():
        logger.warning("No configuration file found, using built-in defaults")
        return AppConfig()
    return get_config()


def apply_overrides(app_config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Apply command-line overrides to the analysis settings."""
    changes = {}
    if getattr(args, "ordering", None):
        changes["inference_ordering"] = InferenceOrdering(args.ordering)
    if args.seed is not None:
        if args.seed < 0:
            raise ValidationError(
                f"--seed must be >= 0, got {args.seed}", field_name="--seed", value=args.seed
            )
        changes["bootstrap_seed"] = args.seed
    if not changes:
        return app_config
    return dataclasses.replace(
        app_config, analysis=dataclasses.replace(app_config.analysis, **changes)
    )


def _dataset_store(app_config: AppConfig, output_dir: Path) -> FileDatasetStore:
    storage_config = app_config.storage
    return FileDatasetStore(
        output_dir,
        storage=create_storage(storage_config.format, storage_config.compression),
        storage_format=storage_config.format,
        generate_legacy_formats=storage_config.generate_legacy_formats,
    )


def run_analyze(args: argparse.Namespace, app_config: AppConfig) -> Path:
    """Normalize, store and analyze a CSV file. Returns the dashboard path."""
    schema = RecordSchema(args.schema)
    analysis = app_config.analysis

    rows = read_csv_rows(args.csv)
    records = normalize_rows(
        rows,
        schema,
        ordering=analysis.inference_ordering,
        confidence_epsilon=analysis.confidence_epsilon,
    )

    store = _dataset_store(app_config, args.output)
    store.save(schema, records)
    return _write_dashboard(store, records, schema, app_config, args.output)


def run_show(args: argparse.Namespace, app_config: AppConfig) -> Path:
    """Rebuild the dashboard from the stored dataset. Returns the dashboard path."""
    schema = RecordSchema(args.schema)
    store = _dataset_store(app_config, args.output)
    records = store.load(schema)
    if records is None:
        raise FileNotFoundError(
            f"No stored {schema.value} dataset in {args.output}; run 'analyze' first"
        )
    return _write_dashboard(store, records, schema, app_config, args.output)


def _write_dashboard(store, records, schema, app_config, output_dir: Path) -> Path:
    dashboard = build_dashboard(records, schema, app_config.analysis)
    dashboard_path = Path(output_dir) / DASHBOARD_FILENAME
    store.storage.save_dict(dashboard.to_dict(), str(dashboard_path))
    logger.info(f"Dashboard for {len(records)} {schema.value} records written to: {dashboard_path}")
    return dashboard_path


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line entry point.

    Raises:
        SystemExit: On configuration errors, invalid input data or I/O failures.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        app_config = load_app_config(args.config)
        logging.getLogger().setLevel(app_config.log_level)
        app_config = apply_overrides(app_config, args)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        handle_cli_error(error=e, context="configuration loading", exit_code=1, logger=logger)

    handlers = {"analyze": run_analyze, "show": run_show}
    try:
        handlers[args.command](args, app_config)
    except ValidationError as e:
        handle_cli_error(error=e, context=f"{args.command} input validation", exit_code=1, logger=logger)
    except FileNotFoundError as e:
        handle_cli_error(error=e, context=f"{args.command}", exit_code=1, logger=logger)
    except pl.exceptions.PolarsError as e:
        handle_cli_error(error=e, context=f"{args.command} reading data", exit_code=1, logger=logger)


if __name__ == "__main__":
    main_cli()
