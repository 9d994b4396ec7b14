"""
Property Data Models

Pydantic models for property listings in the external API shape.
"""
from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import Field

from src.corretaje.models.base import CamelModel

OFFERING_TYPES = ("venta", "arriendo")

EstadoPropiedad = Literal["venta", "arriendo"]


class Ubicacion(CamelModel):
    """
    Property location.

    Attributes:
        direccion: Street address
        comuna: District (comuna)
        ciudad: City
        region: Region
    """

    direccion: Optional[str] = None
    comuna: Optional[str] = None
    ciudad: Optional[str] = None
    region: Optional[str] = None


class Caracteristicas(CamelModel):
    """
    Physical attributes of a property.

    Attributes:
        dormitorios: Bedroom count
        banos: Bathroom count
        metros_cuadrados: Floor area in square meters
        estacionamientos: Parking spaces
        amoblado: Furnished flag
    """

    dormitorios: Optional[int] = Field(None, ge=0)
    banos: Optional[int] = Field(None, ge=0)
    metros_cuadrados: Optional[float] = Field(None, ge=0)
    estacionamientos: Optional[int] = Field(None, ge=0)
    amoblado: Optional[bool] = None


class Agente(CamelModel):
    """Listing agent contact."""

    nombre: Optional[str] = None
    telefono: Optional[str] = None
    email: Optional[str] = None


class PropertyCreate(CamelModel):
    """Payload accepted when creating a property."""

    titulo: str
    descripcion: Optional[str] = None
    precio: float = Field(..., ge=0)
    tipo: str
    estado: EstadoPropiedad
    ubicacion: Optional[Ubicacion] = None
    caracteristicas: Optional[Caracteristicas] = None
    amenidades: Optional[List[str]] = None
    imagenes: Optional[List[str]] = None
    fecha_disponible: Optional[date] = None
    garantia: Optional[str] = None
    agente: Optional[Agente] = None


class PropertyUpdate(CamelModel):
    """
    Partial update payload.

    Every field is present-or-absent: only the names in model_fields_set
    were supplied by the client. Identifier and timestamps are not
    accepted here, so they can never be overwritten by an update.
    """

    titulo: Optional[str] = None
    descripcion: Optional[str] = None
    precio: Optional[float] = Field(None, ge=0)
    tipo: Optional[str] = None
    estado: Optional[EstadoPropiedad] = None
    ubicacion: Optional[Ubicacion] = None
    caracteristicas: Optional[Caracteristicas] = None
    amenidades: Optional[List[str]] = None
    imagenes: Optional[List[str]] = None
    fecha_disponible: Optional[date] = None
    garantia: Optional[str] = None
    agente: Optional[Agente] = None


class Property(CamelModel):
    """Property listing as returned by the API."""

    id: int
    titulo: str
    descripcion: Optional[str] = None
    precio: float
    tipo: str
    estado: EstadoPropiedad
    ubicacion: Ubicacion = Field(default_factory=Ubicacion)
    caracteristicas: Caracteristicas = Field(default_factory=Caracteristicas)
    amenidades: List[str] = Field(default_factory=list)
    imagenes: List[str] = Field(default_factory=list)
    fecha_disponible: Optional[date] = None
    garantia: Optional[str] = None
    agente: Agente = Field(default_factory=Agente)
    fecha_creacion: datetime
    fecha_actualizacion: datetime
