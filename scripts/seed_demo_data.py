"""
Seed Demo Listings

Loads the demo properties into the configured database. Skips seeding
when listings already exist unless --force is given.
"""
import sys
import argparse
from pathlib import Path

# Add parent directory to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import settings
from src.corretaje.db.errors import StorageError
from src.corretaje.db.seed import seed_demo_properties
from src.corretaje.db.session import build_engine
from src.corretaje.db.store import SqlStore
from src.corretaje.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def main() -> int:
    """Main entry point for the seed script."""
    parser = argparse.ArgumentParser(
        description="Load demo property listings into the database"
    )
    parser.add_argument(
        '--force',
        action='store_true',
        help='Insert the demo listings even if properties already exist'
    )
    parser.add_argument(
        '--create-tables',
        action='store_true',
        help='Create missing tables before seeding'
    )
    args = parser.parse_args()

    setup_logging(settings)
    store = SqlStore(build_engine(settings))

    try:
        if args.create_tables:
            store.create_tables()
        created = seed_demo_properties(store.propiedades, force=args.force)
    except StorageError as e:
        logger.error("demo_seed_failed", operation=e.operation, error=e.detail)
        return 1
    finally:
        store.close()

    logger.info("demo_seed_finished", created=created)
    return 0


if __name__ == "__main__":
    sys.exit(main())
