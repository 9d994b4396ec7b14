"""
Pydantic Schemas for API Request/Response Models

Response envelopes: success bodies carry ``data`` plus optional ``meta``
and ``message``; errors are built in src.corretaje.api.errors.
"""
from typing import Any, Dict, List
from datetime import datetime
from pydantic import BaseModel, Field

from src.corretaje.models.inquiry import Inquiry
from src.corretaje.models.property import Property
from src.corretaje.services.stats import InquiryStats, PropertyStats


class ListMeta(BaseModel):
    """Listing metadata."""
    total: int
    filtros: Dict[str, Any] = Field(default_factory=dict)


class TimestampMeta(BaseModel):
    """Metadata for computed responses."""
    timestamp: datetime


class PropertyResponse(BaseModel):
    """Single property."""
    data: Property


class PropertyMutationResponse(BaseModel):
    """Property after create or update."""
    data: Property
    message: str


class PropertyListResponse(BaseModel):
    """Filtered property listing."""
    data: List[Property]
    meta: ListMeta


class InquiryResponse(BaseModel):
    """Single inquiry."""
    data: Inquiry


class InquiryMutationResponse(BaseModel):
    """Inquiry after create or update."""
    data: Inquiry
    message: str


class InquiryListResponse(BaseModel):
    """Filtered inquiry listing."""
    data: List[Inquiry]
    meta: ListMeta


class MessageResponse(BaseModel):
    """Confirmation without a record."""
    message: str


class GeneralStats(BaseModel):
    """Combined listing and inquiry statistics."""
    propiedades: PropertyStats
    consultas: InquiryStats


class GeneralStatsResponse(BaseModel):
    data: GeneralStats
    meta: TimestampMeta


class InquiryStatsResponse(BaseModel):
    data: InquiryStats
    meta: TimestampMeta


class HealthCheck(BaseModel):
    """Health check response."""
    status: str = "OK"
    version: str
    database: str
    storage: str
    timestamp: datetime
