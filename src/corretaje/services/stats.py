"""
Listing and Inquiry Statistics

Aggregates computed over full record sets. Averages of empty groups are 0.
"""
from collections import Counter
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional

from pydantic import Field

from src.corretaje.models.base import CamelModel, as_utc, utc_now
from src.corretaje.models.inquiry import INQUIRY_STATES, PRIORITIES, Inquiry
from src.corretaje.models.property import Property

RECENT_WINDOW = timedelta(days=7)


class AveragePrices(CamelModel):
    """Average asking price per offering type."""
    venta: int = 0
    arriendo: int = 0


class PropertyStats(CamelModel):
    """Listing statistics."""
    total: int
    en_venta: int
    en_arriendo: int
    por_tipo: Dict[str, int] = Field(default_factory=dict)
    precio_promedio: AveragePrices = Field(default_factory=AveragePrices)


class InquiryStats(CamelModel):
    """Inquiry statistics."""
    total: int
    por_estado: Dict[str, int] = Field(default_factory=dict)
    por_tipo_servicio: Dict[str, int] = Field(default_factory=dict)
    por_prioridad: Dict[str, int] = Field(default_factory=dict)
    recientes: int = Field(0, description="Inquiries created in the last 7 days")


def _average(values: List[float]) -> int:
    if not values:
        return 0
    return round(sum(values) / len(values))


def property_stats(records: Iterable[Property]) -> PropertyStats:
    """
    Count listings by offering type and category and average their prices.

    Args:
        records: Every stored property

    Returns:
        PropertyStats with integer-rounded averages
    """
    records = list(records)
    venta = [record.precio for record in records if record.estado == "venta"]
    arriendo = [record.precio for record in records if record.estado == "arriendo"]

    return PropertyStats(
        total=len(records),
        en_venta=len(venta),
        en_arriendo=len(arriendo),
        por_tipo=dict(Counter(record.tipo for record in records)),
        precio_promedio=AveragePrices(venta=_average(venta), arriendo=_average(arriendo)),
    )


def inquiry_stats(records: Iterable[Inquiry], now: Optional[datetime] = None) -> InquiryStats:
    """
    Break inquiries down by state, service type and priority.

    Known states and priorities always appear (with 0 when unused) so
    dashboards can rely on the keys.
    """
    records = list(records)
    cutoff = as_utc(now or utc_now()) - RECENT_WINDOW

    por_estado = {state: 0 for state in INQUIRY_STATES}
    por_estado.update(Counter(record.estado for record in records))

    por_prioridad = {priority: 0 for priority in PRIORITIES}
    por_prioridad.update(Counter(record.prioridad for record in records if record.prioridad))

    return InquiryStats(
        total=len(records),
        por_estado=por_estado,
        por_tipo_servicio=dict(Counter(record.tipo_servicio for record in records)),
        por_prioridad=por_prioridad,
        recientes=sum(1 for record in records if as_utc(record.fecha_creacion) >= cutoff),
    )
