"""
FastAPI Dependencies

Provides dependency injection for the storage backend and settings. Both
live on app.state, so every application instance (and every test) owns
its own store.
"""
from datetime import datetime
from typing import Optional

from fastapi import Request

from config.settings import Settings
from src.corretaje.api.errors import BadRequestError
from src.corretaje.db.store import Store
from src.corretaje.services.filters import parse_date_bound


def get_store(request: Request) -> Store:
    """
    Storage dependency.

    Returns:
        Store configured for this application
    """
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    """
    Settings dependency.

    Returns:
        Application settings
    """
    return request.app.state.settings


def date_filter(value: Optional[str], name: str, upper: bool = False) -> Optional[datetime]:
    """
    Parse a fechaDesde/fechaHasta query parameter.

    Raises:
        BadRequestError: If the value is not an ISO-8601 date
    """
    try:
        return parse_date_bound(value, upper=upper)
    except ValueError:
        raise BadRequestError(
            "Filtro de fecha inválido",
            details=f"{name} debe ser una fecha ISO-8601 (AAAA-MM-DD)",
        )


def text_filter(value: Optional[str]) -> Optional[str]:
    """Blank text filters impose no constraint."""
    if value is None or value.strip() == "":
        return None
    return value


def parse_record_id(raw: str, error: str) -> int:
    """
    Convert a path identifier to int.

    Only plain ASCII digits are accepted; int() alone would also take
    "1_0", surrounding whitespace and non-ASCII digits.

    Raises:
        BadRequestError: If raw is not a plain decimal number
    """
    if not (raw.isascii() and raw.isdigit()):
        raise BadRequestError(error, details=f"'{raw}' no es un identificador numérico")
    return int(raw)
