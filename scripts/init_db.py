#!/usr/bin/env python
"""
Create the Q&A forum database.

Creates the schema (tables, sequences, indexes) and optionally loads the
sample questions.

Usage:
    python scripts/init_db.py [options]

Options:
    --db PATH       Custom database path
    --sample        Load sample questions
    --reset         Drop all tables first
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import duckdb

from config import config
from config.logging_config import setup_logging, get_logger
from src.database import get_connection, initialize_database, get_table_counts, drop_all_tables
from src.database.schema import get_schema_version
from src.ingestion import load_sample_data


def main():
    """Main entry point for database initialization."""
    parser = argparse.ArgumentParser(
        description="Create the Q&A forum DuckDB database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=config.database.path,
        help="Custom database path",
    )
    parser.add_argument(
        "--sample",
        action="store_true",
        help="Load sample questions",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop all tables before creating the schema",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level",
    )

    args = parser.parse_args()

    setup_logging(log_level=args.log_level)
    logger = get_logger("init_db")
    logger.info(f"Database path: {args.db}")

    try:
        with get_connection(args.db) as conn:
            if args.reset:
                logger.warning("Dropping all tables")
                drop_all_tables(conn)

            initialize_database(conn)
            logger.info(f"Schema version: {get_schema_version(conn)}")

            if args.sample:
                load_sample_data(conn)

            for table, count in get_table_counts(conn).items():
                logger.info(f"  {table}: {count:,}")
    except duckdb.Error as e:
        logger.error(f"Database initialization failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
