"""
SQLAlchemy ORM Models

Flat storage layout for property listings and contact inquiries. Column
names follow the snake_case storage convention; see
src.corretaje.services.translator for the mapping to the API shape.
"""
from datetime import date
from typing import List, Optional

from sqlalchemy import (
    JSON, String, Integer, Float, Date, Boolean, Text, CheckConstraint, Index
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import JSONB

from src.corretaje.db.base import Base, TimestampMixin

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JsonList = JSON().with_variant(JSONB(), "postgresql")


class PropiedadRecord(Base, TimestampMixin):
    """Property listing row."""
    __tablename__ = "propiedades"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    titulo: Mapped[str] = mapped_column(String(255), nullable=False)
    descripcion: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    precio: Mapped[float] = mapped_column(Float, nullable=False)
    tipo: Mapped[str] = mapped_column(String(50), nullable=False, comment="casa, departamento, ...")
    estado: Mapped[str] = mapped_column(String(20), nullable=False, comment="venta or arriendo")

    # Location
    direccion: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    comuna: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    ciudad: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    region: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Attributes
    dormitorios: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    banos: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    metros_cuadrados: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    estacionamientos: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    amoblado: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True, default=False)

    amenidades: Mapped[List[str]] = mapped_column(JsonList, nullable=False, default=list)
    imagenes: Mapped[List[str]] = mapped_column(JsonList, nullable=False, default=list)

    fecha_disponible: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    garantia: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Agent contact
    agente_nombre: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    agente_telefono: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    agente_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    __table_args__ = (
        CheckConstraint("estado IN ('venta', 'arriendo')", name="check_propiedades_estado"),
        Index("idx_propiedades_estado", "estado"),
        Index("idx_propiedades_tipo", "tipo"),
        Index("idx_propiedades_comuna", "comuna"),
        Index("idx_propiedades_fecha_creacion", "fecha_creacion"),
    )

    def __repr__(self) -> str:
        return f"<PropiedadRecord(id={self.id}, titulo={self.titulo})>"


class ConsultaRecord(Base, TimestampMixin):
    """Contact inquiry row."""
    __tablename__ = "consultas"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    nombre: Mapped[str] = mapped_column(String(100), nullable=False)
    apellido: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    telefono: Mapped[str] = mapped_column(String(50), nullable=False)
    tipo_servicio: Mapped[str] = mapped_column(String(50), nullable=False)

    # What the requester is looking for
    tipo_propiedad: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    ubicacion_preferida: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    presupuesto_maximo: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    dormitorios: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    banos: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    estacionamientos: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    amenidades_deseadas: Mapped[List[str]] = mapped_column(JsonList, nullable=False, default=list)

    # Financing
    credito_pre_aprobado: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    monto_pre_aprobado: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    plazo_busqueda: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    fecha_mudanza: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    comentarios: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Workflow
    estado: Mapped[str] = mapped_column(String(20), nullable=False, default="nueva")
    prioridad: Mapped[Optional[str]] = mapped_column(String(10), nullable=True, default="media")

    __table_args__ = (
        Index("idx_consultas_estado", "estado"),
        Index("idx_consultas_tipo_servicio", "tipo_servicio"),
        Index("idx_consultas_fecha_creacion", "fecha_creacion"),
    )

    def __repr__(self) -> str:
        return f"<ConsultaRecord(id={self.id}, email={self.email})>"
