"""
Logging Configuration

structlog setup shared by the API and the scripts. Every entry carries the
environment and storage backend; entries emitted while a request is being
served also carry its request id, method and path.
"""
import logging
import sys
import uuid
from typing import Any, Dict, List, Optional

import structlog
from structlog.types import EventDict, Processor

from config.settings import Settings, settings as default_settings

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS: Dict[str, int] = {
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "httpx": logging.WARNING,
}


def app_context_processor(app_settings: Settings) -> Processor:
    """Processor tagging entries with the deployment they come from."""
    environment = app_settings.environment
    storage_backend = app_settings.storage_backend

    def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", "corretaje-api")
        event_dict["environment"] = environment
        event_dict["storage_backend"] = storage_backend
        return event_dict

    return add_app_context


def _build_processors(app_settings: Settings) -> List[Processor]:
    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        app_context_processor(app_settings),
    ]

    if app_settings.debug:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            )
        )

    if app_settings.log_format == "json":
        processors.append(structlog.processors.format_exc_info)
        # Listing data is Spanish; keep accents readable
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def setup_logging(app_settings: Optional[Settings] = None) -> structlog.BoundLogger:
    """
    Configure structured logging for the application.

    Safe to call more than once (each app instance calls it); the last
    call wins.

    Args:
        app_settings: Settings providing level, format and context
            (defaults to the environment)

    Returns:
        Configured structlog logger instance
    """
    app_settings = app_settings or default_settings
    level = getattr(logging, app_settings.log_level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger().setLevel(level)
    for name, quiet_level in QUIET_LOGGERS.items():
        if name == "sqlalchemy.engine" and app_settings.database_echo:
            continue
        logging.getLogger(name).setLevel(max(level, quiet_level))

    structlog.configure(
        processors=_build_processors(app_settings),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger()


def bind_request_context(method: str, path: str, request_id: Optional[str] = None) -> str:
    """
    Attach request details to every entry logged while serving it.

    Returns:
        The request id (generated when the client sent none)
    """
    request_id = request_id or uuid.uuid4().hex[:12]
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, method=method, path=path)
    return request_id


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Logger name (typically __name__)
    """
    if name:
        return structlog.get_logger(name)
    return structlog.get_logger()
