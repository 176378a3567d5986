"""
Command-line interface for the voyage enrichment job.

Usage:
    python -m src.cli.enrich_cli run [--force] [--batch-size N] [--config PATH] [--dry-run]
"""

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from psycopg import OperationalError

from src.batch.pipeline import run_enrichment
from src.core.reference import ReferenceTableUnavailable
from src.core.rules import ConfigurationError, EnrichmentSettings, load_settings
from src.observability.logger import get_logger
from src.observability.metrics import start_metrics_server
from src.warehouse.connection import DatabaseConnectionPool
from src.warehouse.cost_centers import CostCenterRepository
from src.warehouse.memory_store import InMemoryVoyageEventStore
from src.warehouse.voyage_events import VoyageEventStore

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = "config/enrichment.yaml"


def resolve_settings(args) -> EnrichmentSettings:
    """
    Build settings from --config (or ENRICH_CONFIG, or the default file when
    present) and apply --batch-size.
    """
    config_path = args.config or os.getenv("ENRICH_CONFIG")
    if config_path is None and Path(DEFAULT_CONFIG_PATH).exists():
        config_path = DEFAULT_CONFIG_PATH

    settings = load_settings(config_path)
    if args.batch_size is not None:
        settings = settings.model_copy(update={"batch_size": args.batch_size})
    return settings


def run_command(args) -> int:
    """
    Execute an enrichment run.

    Args:
        args: Command-line arguments

    Returns:
        Process exit code
    """
    try:
        settings = resolve_settings(args)
    except (ConfigurationError, FileNotFoundError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    if args.metrics_port:
        start_metrics_server(args.metrics_port)

    try:
        pool = DatabaseConnectionPool(
            host=args.db_host,
            port=args.db_port,
            database=args.db_name,
            user=args.db_user,
            password=args.db_password,
        )
        pool.open()
    except (ValueError, OperationalError) as e:
        logger.error(f"Cannot connect to database: {e}")
        return 1

    try:
        events = VoyageEventStore(pool)
        if args.dry_run:
            logger.info("DRY RUN MODE: enriched rows are kept in memory and not written")
            store = InMemoryVoyageEventStore()
        else:
            store = events

        summary = run_enrichment(
            cost_centers=CostCenterRepository(pool),
            source=events,
            store=store,
            settings=settings,
            force=args.force,
        )
    except ReferenceTableUnavailable as e:
        logger.error(f"Enrichment aborted: {e}")
        return 1
    finally:
        pool.close()

    print(summary.model_dump_json(indent=2))

    return 0 if summary.batches_failed == 0 else 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Voyage event enrichment and cost allocation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Enrich every record not yet processed
  python -m src.cli.enrich_cli run

  # Reprocess everything with a custom configuration
  python -m src.cli.enrich_cli run --force --config config/enrichment.yaml

  # Preview a run without writing
  python -m src.cli.enrich_cli run --dry-run --batch-size 200
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Run the enrichment job")
    run_parser.add_argument(
        "--force",
        action="store_true",
        help="Reprocess records that were already enriched"
    )
    run_parser.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help="Maximum records per transaction (default: from configuration, 1000)"
    )
    run_parser.add_argument(
        "--config",
        default=None,
        help=f"Path to enrichment YAML configuration (default: {DEFAULT_CONFIG_PATH} if present)"
    )
    run_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Enrich and summarize without writing to the database"
    )
    run_parser.add_argument(
        "--metrics-port",
        type=int,
        default=None,
        help="Expose Prometheus metrics on this port during the run"
    )

    # Database connection arguments (fall back to ENRICH_DB_* variables)
    run_parser.add_argument("--db-host", default=None, help="Database host")
    run_parser.add_argument("--db-port", type=int, default=None, help="Database port")
    run_parser.add_argument("--db-name", default=None, help="Database name")
    run_parser.add_argument("--db-user", default=None, help="Database user")
    run_parser.add_argument("--db-password", default=None, help="Database password")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "run":
        if args.batch_size is not None and args.batch_size < 1:
            parser.error("--batch-size must be at least 1")
        sys.exit(run_command(args))


if __name__ == "__main__":
    main()
