"""
Inquiry Data Models

Contact inquiries submitted by prospective buyers and tenants.
"""
from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import Field

from src.corretaje.models.base import CamelModel

# Known workflow states; the set is open, other values are stored as given
INQUIRY_STATES = ("nueva", "pendiente", "en_proceso", "completada")
PRIORITIES = ("alta", "media", "baja")

DEFAULT_INQUIRY_STATE = "nueva"
DEFAULT_PRIORITY = "media"

Prioridad = Literal["alta", "media", "baja"]


class InquiryCreate(CamelModel):
    """Payload accepted from the contact form."""

    nombre: str
    apellido: str
    email: str
    telefono: str
    tipo_servicio: str
    tipo_propiedad: Optional[str] = None
    ubicacion_preferida: Optional[str] = None
    presupuesto_maximo: Optional[float] = Field(None, ge=0)
    dormitorios: Optional[int] = Field(None, ge=0)
    banos: Optional[int] = Field(None, ge=0)
    estacionamientos: Optional[int] = Field(None, ge=0)
    amenidades_deseadas: Optional[List[str]] = None
    credito_pre_aprobado: Optional[bool] = None
    monto_pre_aprobado: Optional[float] = Field(None, ge=0)
    plazo_busqueda: Optional[str] = None
    fecha_mudanza: Optional[date] = None
    comentarios: Optional[str] = None
    prioridad: Optional[Prioridad] = None


class InquiryUpdate(CamelModel):
    """Partial update payload, used by agents to move an inquiry along."""

    nombre: Optional[str] = None
    apellido: Optional[str] = None
    email: Optional[str] = None
    telefono: Optional[str] = None
    tipo_servicio: Optional[str] = None
    tipo_propiedad: Optional[str] = None
    ubicacion_preferida: Optional[str] = None
    presupuesto_maximo: Optional[float] = Field(None, ge=0)
    dormitorios: Optional[int] = Field(None, ge=0)
    banos: Optional[int] = Field(None, ge=0)
    estacionamientos: Optional[int] = Field(None, ge=0)
    amenidades_deseadas: Optional[List[str]] = None
    credito_pre_aprobado: Optional[bool] = None
    monto_pre_aprobado: Optional[float] = Field(None, ge=0)
    plazo_busqueda: Optional[str] = None
    fecha_mudanza: Optional[date] = None
    comentarios: Optional[str] = None
    estado: Optional[str] = None
    prioridad: Optional[Prioridad] = None


class Inquiry(CamelModel):
    """Inquiry as returned by the API."""

    id: int
    nombre: str
    apellido: str
    email: str
    telefono: str
    tipo_servicio: str
    tipo_propiedad: Optional[str] = None
    ubicacion_preferida: Optional[str] = None
    presupuesto_maximo: Optional[float] = None
    dormitorios: Optional[int] = None
    banos: Optional[int] = None
    estacionamientos: Optional[int] = None
    amenidades_deseadas: List[str] = Field(default_factory=list)
    credito_pre_aprobado: Optional[bool] = None
    monto_pre_aprobado: Optional[float] = None
    plazo_busqueda: Optional[str] = None
    fecha_mudanza: Optional[date] = None
    comentarios: Optional[str] = None
    estado: str = DEFAULT_INQUIRY_STATE
    prioridad: Optional[str] = DEFAULT_PRIORITY
    fecha_creacion: datetime
    fecha_actualizacion: datetime
