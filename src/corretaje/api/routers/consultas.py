"""
Inquiries Router

Endpoints for contact inquiries submitted from the public site and
managed by agents.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query

from src.corretaje.api.dependencies import date_filter, get_store, parse_record_id, text_filter
from src.corretaje.api.errors import NotFoundError
from src.corretaje.api.schemas import (
    InquiryListResponse,
    InquiryMutationResponse,
    InquiryResponse,
    InquiryStatsResponse,
    ListMeta,
    MessageResponse,
    TimestampMeta,
)
from src.corretaje.api.validation import validate_inquiry_create, validate_inquiry_update
from src.corretaje.db.store import Store
from src.corretaje.models.base import utc_now
from src.corretaje.services.filters import InquiryFilters
from src.corretaje.services.stats import inquiry_stats
from src.corretaje.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/consultas", tags=["consultas"])

INVALID_ID = "ID de consulta inválido"
NOT_FOUND = "Consulta no encontrada"


@router.post("", response_model=InquiryMutationResponse, status_code=201)
def create_inquiry(payload: Dict[str, Any] = Body(...), store: Store = Depends(get_store)):
    """
    Submit a contact inquiry.

    nombre, apellido, email, telefono and tipoServicio are required and
    the email must look like an address. New inquiries start as "nueva".
    """
    data = validate_inquiry_create(payload)
    record = store.consultas.create(data)
    logger.info(
        "consulta_creada",
        consulta_id=record.id,
        tipo_servicio=record.tipo_servicio,
        prioridad=record.prioridad,
    )

    return InquiryMutationResponse(
        data=record,
        message="Consulta enviada exitosamente. Te contactaremos pronto.",
    )


@router.get("", response_model=InquiryListResponse)
def list_inquiries(
    estado: Optional[str] = Query(None, description="Workflow state"),
    tipo_servicio: Optional[str] = Query(None, alias="tipoServicio", description="Requested service"),
    prioridad: Optional[str] = Query(None, description="alta, media or baja"),
    fecha_desde: Optional[str] = Query(None, alias="fechaDesde", description="Created on or after"),
    fecha_hasta: Optional[str] = Query(None, alias="fechaHasta", description="Created on or before"),
    store: Store = Depends(get_store),
):
    """List inquiries matching every supplied filter, newest first."""
    filters = InquiryFilters(
        estado=text_filter(estado),
        tipo_servicio=text_filter(tipo_servicio),
        prioridad=text_filter(prioridad),
        fecha_desde=date_filter(fecha_desde, "fechaDesde"),
        fecha_hasta=date_filter(fecha_hasta, "fechaHasta", upper=True),
    )
    records = store.consultas.list(filters)

    return InquiryListResponse(
        data=records,
        meta=ListMeta(total=len(records), filtros=filters.applied()),
    )


@router.get("/stats", response_model=InquiryStatsResponse)
def get_inquiry_stats(store: Store = Depends(get_store)):
    """Inquiry counts by state, service type and priority."""
    now = utc_now()
    stats = inquiry_stats(store.consultas.all(), now=now)
    return InquiryStatsResponse(data=stats, meta=TimestampMeta(timestamp=now))


@router.get("/{consulta_id}", response_model=InquiryResponse)
def get_inquiry(consulta_id: str, store: Store = Depends(get_store)):
    """
    Get a single inquiry.

    Raises:
        NotFoundError: 404 if no inquiry has that id
    """
    record = store.consultas.get(parse_record_id(consulta_id, INVALID_ID))
    if record is None:
        raise NotFoundError(NOT_FOUND)
    return InquiryResponse(data=record)


@router.put("/{consulta_id}", response_model=InquiryMutationResponse)
def update_inquiry(
    consulta_id: str,
    payload: Dict[str, Any] = Body(...),
    store: Store = Depends(get_store),
):
    """Partially update an inquiry, typically its estado or prioridad."""
    record_id = parse_record_id(consulta_id, INVALID_ID)
    patch = validate_inquiry_update(payload)

    record = store.consultas.update(record_id, patch)
    if record is None:
        raise NotFoundError(NOT_FOUND)

    logger.info("consulta_actualizada", consulta_id=record_id, estado=record.estado)
    return InquiryMutationResponse(data=record, message="Consulta actualizada exitosamente")


@router.delete("/{consulta_id}", response_model=MessageResponse)
def delete_inquiry(consulta_id: str, store: Store = Depends(get_store)):
    """Delete an inquiry."""
    record_id = parse_record_id(consulta_id, INVALID_ID)
    if not store.consultas.delete(record_id):
        raise NotFoundError(NOT_FOUND)

    logger.info("consulta_eliminada", consulta_id=record_id)
    return MessageResponse(message="Consulta eliminada exitosamente")
