"""
Properties Router

Endpoints for listing, reading, creating, updating and deleting property
listings.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query

from src.corretaje.api.dependencies import date_filter, get_store, parse_record_id, text_filter
from src.corretaje.api.errors import NotFoundError
from src.corretaje.api.schemas import (
    ListMeta,
    MessageResponse,
    PropertyListResponse,
    PropertyMutationResponse,
    PropertyResponse,
)
from src.corretaje.api.validation import validate_property_create, validate_property_update
from src.corretaje.db.store import Store
from src.corretaje.services.filters import PropertyFilters
from src.corretaje.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/propiedades", tags=["propiedades"])

INVALID_ID = "ID de propiedad inválido"
NOT_FOUND = "Propiedad no encontrada"


@router.get("", response_model=PropertyListResponse)
def list_properties(
    estado: Optional[str] = Query(None, description="Offering type (venta, arriendo)"),
    tipo: Optional[str] = Query(None, description="Category (casa, departamento, ...)"),
    comuna: Optional[str] = Query(None, description="District, case-insensitive substring"),
    precio_min: Optional[float] = Query(None, alias="precioMin", description="Minimum price"),
    precio_max: Optional[float] = Query(None, alias="precioMax", description="Maximum price"),
    dormitorios: Optional[int] = Query(None, ge=0, description="Minimum bedrooms"),
    banos: Optional[int] = Query(None, ge=0, description="Minimum bathrooms"),
    fecha_desde: Optional[str] = Query(None, alias="fechaDesde", description="Created on or after"),
    fecha_hasta: Optional[str] = Query(None, alias="fechaHasta", description="Created on or before"),
    store: Store = Depends(get_store),
):
    """
    List properties matching every supplied filter, newest first.

    Returns:
        Matching properties with total count and the filters applied
    """
    filters = PropertyFilters(
        estado=text_filter(estado),
        tipo=text_filter(tipo),
        comuna=text_filter(comuna),
        precio_min=precio_min,
        precio_max=precio_max,
        dormitorios=dormitorios,
        banos=banos,
        fecha_desde=date_filter(fecha_desde, "fechaDesde"),
        fecha_hasta=date_filter(fecha_hasta, "fechaHasta", upper=True),
    )
    records = store.propiedades.list(filters)

    return PropertyListResponse(
        data=records,
        meta=ListMeta(total=len(records), filtros=filters.applied()),
    )


@router.get("/{propiedad_id}", response_model=PropertyResponse)
def get_property(propiedad_id: str, store: Store = Depends(get_store)):
    """
    Get a single property.

    Raises:
        BadRequestError: 400 if the id is not numeric
        NotFoundError: 404 if no property has that id
    """
    record = store.propiedades.get(parse_record_id(propiedad_id, INVALID_ID))
    if record is None:
        raise NotFoundError(NOT_FOUND)
    return PropertyResponse(data=record)


@router.post("", response_model=PropertyMutationResponse, status_code=201)
def create_property(payload: Dict[str, Any] = Body(...), store: Store = Depends(get_store)):
    """
    Create a property.

    titulo, precio, tipo and estado are required; estado must be venta or
    arriendo. The id and both timestamps are assigned by the server.
    """
    data = validate_property_create(payload)
    record = store.propiedades.create(data)
    logger.info("propiedad_creada", propiedad_id=record.id, estado=record.estado, tipo=record.tipo)

    return PropertyMutationResponse(data=record, message="Propiedad creada exitosamente")


@router.put("/{propiedad_id}", response_model=PropertyMutationResponse)
def update_property(
    propiedad_id: str,
    payload: Dict[str, Any] = Body(...),
    store: Store = Depends(get_store),
):
    """
    Partially update a property.

    Only the fields present in the body change. An id in the body is
    ignored; fechaActualizacion is refreshed.
    """
    record_id = parse_record_id(propiedad_id, INVALID_ID)
    patch = validate_property_update(payload)

    record = store.propiedades.update(record_id, patch)
    if record is None:
        raise NotFoundError(NOT_FOUND)

    logger.info("propiedad_actualizada", propiedad_id=record_id, campos=sorted(patch.model_fields_set))
    return PropertyMutationResponse(data=record, message="Propiedad actualizada exitosamente")


@router.delete("/{propiedad_id}", response_model=MessageResponse)
def delete_property(propiedad_id: str, store: Store = Depends(get_store)):
    """
    Delete a property.

    Raises:
        NotFoundError: 404 if no property has that id
    """
    record_id = parse_record_id(propiedad_id, INVALID_ID)
    if not store.propiedades.delete(record_id):
        raise NotFoundError(NOT_FOUND)

    logger.info("propiedad_eliminada", propiedad_id=record_id)
    return MessageResponse(message="Propiedad eliminada exitosamente")
