"""
Record Construction and Partial Merge

Builds new records from create payloads and applies partial updates
field by field for the in-memory store.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from src.corretaje.models.base import CamelModel, utc_now
from src.corretaje.models.inquiry import (
    DEFAULT_INQUIRY_STATE,
    DEFAULT_PRIORITY,
    Inquiry,
    InquiryCreate,
    InquiryUpdate,
)
from src.corretaje.models.property import (
    Agente,
    Caracteristicas,
    Property,
    PropertyCreate,
    PropertyUpdate,
    Ubicacion,
)

# Nested objects merged sub-field by sub-field
PROPERTY_NESTED_FIELDS = {
    "ubicacion": Ubicacion,
    "caracteristicas": Caracteristicas,
    "agente": Agente,
}
PROPERTY_LIST_FIELDS = ("amenidades", "imagenes")
INQUIRY_LIST_FIELDS = ("amenidades_deseadas",)


def build_property(property_id: int, data: PropertyCreate, now: Optional[datetime] = None) -> Property:
    """
    Create a stored property from a validated create payload.

    Applies the same defaults as the storage translation: amoblado is
    False and sequences are empty when not supplied.
    """
    now = now or utc_now()
    caracteristicas = data.caracteristicas or Caracteristicas()
    if caracteristicas.amoblado is None:
        caracteristicas = caracteristicas.model_copy(update={"amoblado": False})

    return Property(
        id=property_id,
        titulo=data.titulo,
        descripcion=data.descripcion,
        precio=data.precio,
        tipo=data.tipo,
        estado=data.estado,
        ubicacion=data.ubicacion or Ubicacion(),
        caracteristicas=caracteristicas,
        amenidades=list(data.amenidades or []),
        imagenes=list(data.imagenes or []),
        fecha_disponible=data.fecha_disponible,
        garantia=data.garantia,
        agente=data.agente or Agente(),
        fecha_creacion=now,
        fecha_actualizacion=now,
    )


def build_inquiry(inquiry_id: int, data: InquiryCreate, now: Optional[datetime] = None) -> Inquiry:
    """Create a stored inquiry; new inquiries always start as "nueva"."""
    now = now or utc_now()
    values = data.model_dump(exclude={"amenidades_deseadas", "prioridad"})
    return Inquiry(
        id=inquiry_id,
        **values,
        amenidades_deseadas=list(data.amenidades_deseadas or []),
        estado=DEFAULT_INQUIRY_STATE,
        prioridad=data.prioridad or DEFAULT_PRIORITY,
        fecha_creacion=now,
        fecha_actualizacion=now,
    )


def _merge_nested(current: CamelModel, patch: Optional[CamelModel], model: type) -> CamelModel:
    """Overwrite only the sub-fields present in the patch object."""
    if patch is None:
        return model()
    updates = {name: getattr(patch, name) for name in patch.model_fields_set}
    return current.model_copy(update=updates)


def merge_property(existing: Property, patch: PropertyUpdate, now: Optional[datetime] = None) -> Property:
    """
    Apply a partial update to a property.

    Only fields the client supplied are written; omitted fields keep their
    value. An explicit null for a nested object clears all its sub-fields
    and for a sequence empties it. The identifier and creation timestamp
    are never touched; fechaActualizacion is refreshed.
    """
    updates: Dict[str, Any] = {}
    for name in patch.model_fields_set:
        value = getattr(patch, name)
        if name in PROPERTY_NESTED_FIELDS:
            value = _merge_nested(getattr(existing, name), value, PROPERTY_NESTED_FIELDS[name])
        elif name in PROPERTY_LIST_FIELDS:
            value = list(value or [])
        updates[name] = value

    updates["fecha_actualizacion"] = now or utc_now()
    return existing.model_copy(update=updates)


def merge_inquiry(existing: Inquiry, patch: InquiryUpdate, now: Optional[datetime] = None) -> Inquiry:
    """Apply a partial update to an inquiry; same rules as merge_property."""
    updates: Dict[str, Any] = {}
    for name in patch.model_fields_set:
        value = getattr(patch, name)
        if name in INQUIRY_LIST_FIELDS:
            value = list(value or [])
        updates[name] = value

    updates["fecha_actualizacion"] = now or utc_now()
    return existing.model_copy(update=updates)
