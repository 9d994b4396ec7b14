"""
Database Package

Storage backends, ORM models and repositories.
"""
from src.corretaje.db.base import Base
from src.corretaje.db.errors import StorageError, StorageUnavailableError
from src.corretaje.db.memory import InMemoryRepository, InMemoryStore
from src.corretaje.db.models import ConsultaRecord, PropiedadRecord
from src.corretaje.db.repository import (
    BaseRepository,
    InquiryRepository,
    PropertyRepository,
)
from src.corretaje.db.session import (
    build_engine,
    build_session_factory,
    session_scope,
    health_check,
    close_connections,
    create_all_tables,
    drop_all_tables,
)
from src.corretaje.db.store import SqlStore, Store, build_store

__all__ = [
    # Base
    "Base",
    # Errors
    "StorageError",
    "StorageUnavailableError",
    # Session management
    "build_engine",
    "build_session_factory",
    "session_scope",
    "health_check",
    "close_connections",
    "create_all_tables",
    "drop_all_tables",
    # Models
    "PropiedadRecord",
    "ConsultaRecord",
    # Repositories
    "BaseRepository",
    "PropertyRepository",
    "InquiryRepository",
    "InMemoryRepository",
    # Stores
    "InMemoryStore",
    "SqlStore",
    "Store",
    "build_store",
]
