#!/usr/bin/env python
"""
Import questions from CSV files.

Each CSV needs a title column; content, created_at, is_resolved and tags
(comma-separated names) are optional. Unknown tags are created.

Usage:
    python scripts/import_questions.py questions.csv [more.csv ...] [--db PATH]
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
from src.database import get_connection, initialize_database
from src.ingestion import QuestionLoader


def main():
    """Main entry point for CSV import."""
    parser = argparse.ArgumentParser(
        description="Import questions from CSV into the Q&A forum database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "files",
        nargs="+",
        type=Path,
        help="CSV files to import",
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=config.database.path,
        help="Custom database path",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level",
    )

    args = parser.parse_args()

    setup_logging(log_level=args.log_level)
    logger = get_logger("import_questions")

    missing = [f for f in args.files if not f.exists()]
    if missing:
        for f in missing:
            logger.error(f"File not found: {f}")
        return 1

    total_loaded = 0
    total_skipped = 0

    try:
        with get_connection(args.db) as conn:
            initialize_database(conn)
            loader = QuestionLoader(conn)

            for filepath in args.files:
                try:
                    result = loader.load_csv(filepath)
                except ValueError as e:
                    logger.error(str(e))
                    return 1

                total_loaded += result.records_loaded
                total_skipped += result.records_skipped
                for message in result.error_messages:
                    logger.warning(f"{filepath.name}: {message}")
    except duckdb.Error as e:
        logger.error(f"Import failed: {e}")
        return 1

    logger.info(f"Imported {total_loaded:,} questions ({total_skipped:,} skipped)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
