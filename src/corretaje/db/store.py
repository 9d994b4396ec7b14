"""
Storage Backends

Both stores expose ``propiedades`` and ``consultas`` repositories with the
same methods, so the API does not care which one it is given.
"""
from typing import Optional, Union

from sqlalchemy.engine import Engine

from config.settings import Settings
from src.corretaje.db.memory import InMemoryStore
from src.corretaje.db.repository import InquiryRepository, PropertyRepository
from src.corretaje.db.session import (
    build_engine,
    build_session_factory,
    close_connections,
    create_all_tables,
    health_check,
)
from src.corretaje.utils.logger import get_logger

logger = get_logger(__name__)


class SqlStore:
    """Relational backend accessed through SQLAlchemy."""

    def __init__(self, engine: Optional[Engine]):
        self.engine = engine
        session_factory = build_session_factory(engine)
        self.propiedades = PropertyRepository(session_factory)
        self.consultas = InquiryRepository(session_factory)

    @property
    def backend(self) -> str:
        return self.engine.dialect.name if self.engine is not None else "sin configurar"

    def health(self) -> str:
        return health_check(self.engine)

    def create_tables(self) -> None:
        if self.engine is not None:
            create_all_tables(self.engine)

    def close(self) -> None:
        close_connections(self.engine)


Store = Union[InMemoryStore, SqlStore]


def build_store(settings: Settings) -> Store:
    """
    Create the store selected by settings.storage_backend.

    Missing database credentials do not raise here: the SqlStore is built
    without an engine and each request fails with a storage error instead.
    """
    if settings.storage_backend == "database":
        store = SqlStore(build_engine(settings))
        logger.info("storage_backend_selected", backend=store.backend)
        return store

    store = InMemoryStore()
    logger.info("storage_backend_selected", backend=store.backend)
    if settings.seed_demo_data:
        from src.corretaje.db.seed import seed_demo_properties

        seed_demo_properties(store.propiedades)
    return store
