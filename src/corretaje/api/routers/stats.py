"""
Statistics Router

Aggregate counts and average prices for the dashboard.
"""
from fastapi import APIRouter, Depends

from src.corretaje.api.dependencies import get_store
from src.corretaje.api.schemas import GeneralStats, GeneralStatsResponse, TimestampMeta
from src.corretaje.db.store import Store
from src.corretaje.models.base import utc_now
from src.corretaje.services.stats import inquiry_stats, property_stats

router = APIRouter(prefix="/api/stats", tags=["statistics"])


@router.get("", response_model=GeneralStatsResponse)
def get_general_stats(store: Store = Depends(get_store)):
    """
    Get listing and inquiry statistics.

    Average prices are 0 for an offering type with no listings.

    Returns:
        Property and inquiry statistics with the computation timestamp
    """
    now = utc_now()
    stats = GeneralStats(
        propiedades=property_stats(store.propiedades.all()),
        consultas=inquiry_stats(store.consultas.all(), now=now),
    )
    return GeneralStatsResponse(data=stats, meta=TimestampMeta(timestamp=now))
