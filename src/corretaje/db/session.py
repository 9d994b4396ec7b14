"""
Database Session Management

Provides engine construction, connection pooling and session scoping.
"""
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, event, exc, pool, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.engine import Engine

from config.settings import Settings
from src.corretaje.db.errors import StorageError, StorageUnavailableError
from src.corretaje.utils.logger import get_logger

logger = get_logger(__name__)


def build_engine(settings: Settings) -> Optional[Engine]:
    """
    Create the database engine for the configured backend.

    No connection is opened here, so a wrong URL only shows up on the
    first request.

    Args:
        settings: Application settings

    Returns:
        Engine, or None when no database_url is configured
    """
    if not settings.database_url:
        logger.warning("database_url_missing")
        return None

    if settings.database_url.startswith("sqlite"):
        engine = create_engine(
            settings.database_url,
            connect_args={"check_same_thread": False},
            poolclass=pool.StaticPool,
            echo=settings.database_echo,
        )
    else:
        engine = create_engine(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_timeout=settings.database_pool_timeout,
            pool_recycle=settings.database_pool_recycle,
            pool_pre_ping=True,  # Verify connections before using
            echo=settings.database_echo,  # Log SQL queries if enabled
        )

    _register_listeners(engine)
    logger.info("database_engine_created", dialect=engine.dialect.name)
    return engine


def _register_listeners(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def receive_connect(dbapi_conn, connection_record):
        logger.debug("database_connection_established")

    @event.listens_for(engine, "invalidate")
    def receive_invalidate(dbapi_conn, connection_record, exception):
        logger.warning(
            "database_connection_invalidated",
            exception=str(exception) if exception else None
        )


def build_session_factory(engine: Optional[Engine]) -> Optional[sessionmaker]:
    """Session factory bound to engine, or None without an engine."""
    if engine is None:
        return None
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False
    )


@contextmanager
def session_scope(session_factory: Optional[sessionmaker], operation: str) -> Generator[Session, None, None]:
    """
    Run one storage operation in its own session.

    Usage:
        with session_scope(factory, "obtener propiedades") as session:
            rows = session.execute(select(PropiedadRecord)).scalars().all()

    Commits on success and rolls back on failure. SQLAlchemy errors are
    re-raised as StorageError carrying the operation name; nothing is
    retried.

    Raises:
        StorageUnavailableError: If no backend is configured
        StorageError: If the backend rejects the operation
    """
    if session_factory is None:
        raise StorageUnavailableError(operation)

    session = session_factory()
    try:
        yield session
        session.commit()
    except exc.SQLAlchemyError as e:
        session.rollback()
        logger.error(
            "database_session_rollback",
            operation=operation,
            error=str(e),
            error_type=type(e).__name__
        )
        raise StorageError(operation, str(e)) from e
    except Exception as e:
        session.rollback()
        logger.error(
            "database_session_error",
            operation=operation,
            error=str(e),
            error_type=type(e).__name__
        )
        raise
    finally:
        session.close()


def health_check(engine: Optional[Engine]) -> str:
    """
    Check database connection health.

    Returns:
        "connected", "not_configured" or "error: <reason>"
    """
    if engine is None:
        return "not_configured"
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return "connected"
    except exc.SQLAlchemyError as e:
        logger.error(
            "database_health_check_failed",
            error=str(e),
            error_type=type(e).__name__
        )
        return f"error: {e}"


def create_all_tables(engine: Engine) -> None:
    """
    Create all database tables defined in models.

    Existing tables are left untouched.
    """
    from src.corretaje.db.base import Base, import_all_models

    logger.info("creating_database_tables")
    import_all_models()
    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.info("database_tables_created")


def drop_all_tables(engine: Engine) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data! Only use in development/testing.
    """
    from src.corretaje.db.base import Base, import_all_models

    logger.warning("dropping_all_database_tables")
    import_all_models()
    Base.metadata.drop_all(bind=engine)
    logger.warning("all_database_tables_dropped")


def close_connections(engine: Optional[Engine]) -> None:
    """
    Dispose of the engine's pooled connections.

    Should be called on application shutdown.
    """
    if engine is None:
        return
    logger.info("closing_database_connections")
    engine.dispose()
    logger.info("database_connections_closed")
