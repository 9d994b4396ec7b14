"""
Listing Filters

Conjunctive filtering and recency ordering for property and inquiry
listings held in memory. The relational repositories express the same
criteria as WHERE clauses (see src.corretaje.db.repository).
"""
from datetime import date, datetime, time, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence, TypeVar

from pydantic import Field

from src.corretaje.models.base import CamelModel, as_utc
from src.corretaje.models.inquiry import Inquiry
from src.corretaje.models.property import Property

T = TypeVar("T", Property, Inquiry)


class PropertyFilters(CamelModel):
    """Recognized property listing filters. None means no constraint."""

    estado: Optional[str] = None
    tipo: Optional[str] = None
    comuna: Optional[str] = None
    precio_min: Optional[float] = None
    precio_max: Optional[float] = None
    dormitorios: Optional[int] = Field(None, ge=0)
    banos: Optional[int] = Field(None, ge=0)
    fecha_desde: Optional[datetime] = None
    fecha_hasta: Optional[datetime] = None

    def applied(self) -> Dict[str, Any]:
        """Supplied filters keyed by their query parameter names."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class InquiryFilters(CamelModel):
    """Recognized inquiry listing filters."""

    estado: Optional[str] = None
    tipo_servicio: Optional[str] = None
    prioridad: Optional[str] = None
    fecha_desde: Optional[datetime] = None
    fecha_hasta: Optional[datetime] = None

    def applied(self) -> Dict[str, Any]:
        """Supplied filters keyed by their query parameter names."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def parse_date_bound(value: Optional[str], upper: bool = False) -> Optional[datetime]:
    """
    Parse a creation-date filter bound.

    Accepts a calendar date ("2024-12-01") or an ISO-8601 datetime. A bare
    date used as an upper bound covers that whole day. Naive values are
    read as UTC.

    Args:
        value: Raw query parameter value
        upper: True for fechaHasta

    Returns:
        Aware datetime, or None when value is empty

    Raises:
        ValueError: If value is not a recognizable date
    """
    if value is None or value.strip() == "":
        return None

    raw = value.strip()
    if len(raw) == 10:
        day = date.fromisoformat(raw)
        return datetime.combine(day, time.max if upper else time.min, tzinfo=timezone.utc)

    # "Z" suffix is not accepted by fromisoformat on older interpreters
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    return as_utc(datetime.fromisoformat(raw))


def _at_least(actual: Optional[float], bound: Optional[float]) -> bool:
    if bound is None:
        return True
    return actual is not None and actual >= bound


def _at_most(actual: Optional[float], bound: Optional[float]) -> bool:
    if bound is None:
        return True
    return actual is not None and actual <= bound


def _within_dates(created: datetime, desde: Optional[datetime], hasta: Optional[datetime]) -> bool:
    created = as_utc(created)
    if desde is not None and created < as_utc(desde):
        return False
    if hasta is not None and created > as_utc(hasta):
        return False
    return True


def matches_property(record: Property, filters: PropertyFilters) -> bool:
    """
    Check a property against every supplied filter.

    Categorical fields match exactly (case-sensitive); comuna is a
    case-insensitive substring match; numeric bounds are inclusive.
    """
    if filters.estado is not None and record.estado != filters.estado:
        return False
    if filters.tipo is not None and record.tipo != filters.tipo:
        return False
    if filters.comuna is not None:
        comuna = record.ubicacion.comuna
        if comuna is None or filters.comuna.lower() not in comuna.lower():
            return False
    if not _at_least(record.precio, filters.precio_min):
        return False
    if not _at_most(record.precio, filters.precio_max):
        return False
    if not _at_least(record.caracteristicas.dormitorios, filters.dormitorios):
        return False
    if not _at_least(record.caracteristicas.banos, filters.banos):
        return False
    return _within_dates(record.fecha_creacion, filters.fecha_desde, filters.fecha_hasta)


def matches_inquiry(record: Inquiry, filters: InquiryFilters) -> bool:
    """Check an inquiry against every supplied filter."""
    if filters.estado is not None and record.estado != filters.estado:
        return False
    if filters.tipo_servicio is not None and record.tipo_servicio != filters.tipo_servicio:
        return False
    if filters.prioridad is not None and record.prioridad != filters.prioridad:
        return False
    return _within_dates(record.fecha_creacion, filters.fecha_desde, filters.fecha_hasta)


def sort_by_recency(records: Iterable[T]) -> List[T]:
    """
    Order records newest first.

    sorted() is stable, so records sharing a creation timestamp keep
    their original relative order.
    """
    return sorted(records, key=lambda record: as_utc(record.fecha_creacion), reverse=True)


def filter_properties(records: Sequence[Property], filters: PropertyFilters) -> List[Property]:
    """Return the matching subset of properties, newest first."""
    return sort_by_recency(record for record in records if matches_property(record, filters))


def filter_inquiries(records: Sequence[Inquiry], filters: InquiryFilters) -> List[Inquiry]:
    """Return the matching subset of inquiries, newest first."""
    return sort_by_recency(record for record in records if matches_inquiry(record, filters))
