"""
Create Database Tables Using SQLAlchemy

Creates the propiedades and consultas tables in the configured database
with metadata.create_all(). Existing tables are kept unless --drop is
given, which recreates them empty.
"""
import sys
import argparse
from pathlib import Path

# Add parent directory to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import inspect

from config.settings import settings
from src.corretaje.db.session import build_engine, create_all_tables, close_connections, drop_all_tables
from src.corretaje.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def main() -> int:
    """Create all database tables."""
    parser = argparse.ArgumentParser(description="Create the listing and inquiry tables")
    parser.add_argument(
        '--drop',
        action='store_true',
        help='Drop existing tables first (deletes all data)'
    )
    args = parser.parse_args()

    setup_logging(settings)
    engine = build_engine(settings)
    if engine is None:
        logger.error("database_url_missing", hint="Set DATABASE_URL in .env")
        return 1

    try:
        if args.drop:
            drop_all_tables(engine)
        create_all_tables(engine)
        tables = inspect(engine).get_table_names()
        logger.info("tables_verified", tables=tables)
    finally:
        close_connections(engine)
    return 0


if __name__ == "__main__":
    sys.exit(main())
