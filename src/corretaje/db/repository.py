"""
Repository Pattern for Data Access

CRUD operations for the relational backend. Every method runs one storage
operation in its own session and returns records in the external API
shape, translated by src.corretaje.services.translator.
"""
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, Type, TypeVar

from sqlalchemy import Select, delete, select, update
from sqlalchemy.orm import sessionmaker

from src.corretaje.db.base import Base
from src.corretaje.db.models import ConsultaRecord, PropiedadRecord
from src.corretaje.db.session import session_scope
from src.corretaje.models.base import CamelModel, as_utc, utc_now
from src.corretaje.models.inquiry import (
    DEFAULT_INQUIRY_STATE,
    DEFAULT_PRIORITY,
    Inquiry,
    InquiryCreate,
    InquiryUpdate,
)
from src.corretaje.models.property import Property, PropertyCreate, PropertyUpdate
from src.corretaje.services.filters import InquiryFilters, PropertyFilters
from src.corretaje.services.translator import (
    inquiry_to_external,
    inquiry_to_storage,
    property_to_external,
    property_to_storage,
)
from src.corretaje.utils.logger import get_logger

logger = get_logger(__name__)

R = TypeVar("R", bound=CamelModel)
F = TypeVar("F", bound=CamelModel)


class BaseRepository(Generic[R, F]):
    """
    Base repository with common CRUD operations.

    Subclasses bind an ORM model, the translator pair and the external
    schema, and express listing filters as WHERE clauses.
    """

    model: Type[Base]
    schema: Type[R]
    to_storage: Callable[..., Dict[str, Any]]
    to_external: Callable[[Mapping[str, Any]], Dict[str, Any]]
    resource: str

    def __init__(self, session_factory: Optional[sessionmaker]):
        """
        Initialize repository with a session factory.

        Args:
            session_factory: Factory for backend sessions, None when the
                backend is not configured
        """
        self.session_factory = session_factory

    def _external(self, row: Base) -> R:
        external = self.to_external(row.to_dict())
        # SQLite hands back naive datetimes; everything is stored in UTC
        for key in ("fechaCreacion", "fechaActualizacion"):
            if external.get(key) is not None:
                external[key] = as_utc(external[key])
        return self.schema.model_validate(external)

    def _storage(self, payload: CamelModel, partial: bool) -> Dict[str, Any]:
        external = payload.model_dump(by_alias=True, exclude_unset=True)
        values = self.to_storage(external, partial=partial, now=utc_now())
        # Identifiers are assigned by the backend and immutable
        values.pop("id", None)
        return values

    def apply_filters(self, query: Select, filters: F) -> Select:
        raise NotImplementedError

    def list(self, filters: F) -> List[R]:
        """
        Get records matching every supplied filter, newest first.

        Ties on fecha_creacion fall back to insertion (id) order.
        """
        with session_scope(self.session_factory, f"obtener {self.resource}") as session:
            query = self.apply_filters(select(self.model), filters)
            query = query.order_by(self.model.fecha_creacion.desc(), self.model.id.asc())
            rows = session.execute(query).scalars().all()
            records = [self._external(row) for row in rows]

        logger.debug("repository_list", model=self.model.__name__, count=len(records))
        return records

    def all(self) -> List[R]:
        """Every stored record, unordered (used for statistics)."""
        with session_scope(self.session_factory, f"obtener estadísticas de {self.resource}") as session:
            rows = session.execute(select(self.model)).scalars().all()
            return [self._external(row) for row in rows]

    def get(self, record_id: int) -> Optional[R]:
        """
        Get single record by primary key.

        Returns:
            Record in API shape, or None
        """
        with session_scope(self.session_factory, f"obtener {self.resource}") as session:
            row = session.get(self.model, record_id)
            found = self._external(row) if row is not None else None

        logger.debug(
            "repository_get_by_id",
            model=self.model.__name__,
            id=record_id,
            found=found is not None
        )
        return found

    def _insert(self, values: Dict[str, Any]) -> R:
        values["fecha_creacion"] = values["fecha_actualizacion"]
        with session_scope(self.session_factory, f"crear {self.resource}") as session:
            row = self.model(**values)
            session.add(row)
            session.flush()
            created = self._external(row)

        logger.info("repository_created", model=self.model.__name__, id=created.id)
        return created

    def update(self, record_id: int, patch: CamelModel) -> Optional[R]:
        """
        Apply a partial update.

        Only the columns derived from fields present in the patch are
        written; the backend keeps every other column as it is.

        Returns:
            Updated record, or None if no row has that id
        """
        values = self._storage(patch, partial=True)
        with session_scope(self.session_factory, f"actualizar {self.resource}") as session:
            result = session.execute(
                update(self.model).where(self.model.id == record_id).values(**values)
            )
            if result.rowcount == 0:
                logger.warning("repository_update_not_found", model=self.model.__name__, id=record_id)
                return None
            row = session.get(self.model, record_id, populate_existing=True)
            updated = self._external(row)

        logger.info("repository_updated", model=self.model.__name__, id=record_id)
        return updated

    def delete(self, record_id: int) -> bool:
        """
        Delete record (hard delete).

        Returns:
            True if deleted, False if not found
        """
        with session_scope(self.session_factory, f"eliminar {self.resource}") as session:
            result = session.execute(delete(self.model).where(self.model.id == record_id))
            deleted = result.rowcount > 0

        if deleted:
            logger.info("repository_deleted", model=self.model.__name__, id=record_id)
        else:
            logger.warning("repository_delete_not_found", model=self.model.__name__, id=record_id)
        return deleted


class PropertyRepository(BaseRepository[Property, PropertyFilters]):
    """Repository for property listings."""

    model = PropiedadRecord
    schema = Property
    to_storage = staticmethod(property_to_storage)
    to_external = staticmethod(property_to_external)
    resource = "propiedades"

    def apply_filters(self, query: Select, filters: PropertyFilters) -> Select:
        if filters.estado is not None:
            query = query.where(PropiedadRecord.estado == filters.estado)
        if filters.tipo is not None:
            query = query.where(PropiedadRecord.tipo == filters.tipo)
        if filters.comuna is not None:
            # Literal substring: % and _ in user input are not wildcards
            query = query.where(PropiedadRecord.comuna.icontains(filters.comuna, autoescape=True))
        if filters.precio_min is not None:
            query = query.where(PropiedadRecord.precio >= filters.precio_min)
        if filters.precio_max is not None:
            query = query.where(PropiedadRecord.precio <= filters.precio_max)
        if filters.dormitorios is not None:
            query = query.where(PropiedadRecord.dormitorios >= filters.dormitorios)
        if filters.banos is not None:
            query = query.where(PropiedadRecord.banos >= filters.banos)
        if filters.fecha_desde is not None:
            query = query.where(PropiedadRecord.fecha_creacion >= as_utc(filters.fecha_desde))
        if filters.fecha_hasta is not None:
            query = query.where(PropiedadRecord.fecha_creacion <= as_utc(filters.fecha_hasta))
        return query

    def create(self, data: PropertyCreate) -> Property:
        """Insert a new listing; defaults come from the shape translator."""
        return self._insert(self._storage(data, partial=False))


class InquiryRepository(BaseRepository[Inquiry, InquiryFilters]):
    """Repository for contact inquiries."""

    model = ConsultaRecord
    schema = Inquiry
    to_storage = staticmethod(inquiry_to_storage)
    to_external = staticmethod(inquiry_to_external)
    resource = "consultas"

    def apply_filters(self, query: Select, filters: InquiryFilters) -> Select:
        if filters.estado is not None:
            query = query.where(ConsultaRecord.estado == filters.estado)
        if filters.tipo_servicio is not None:
            query = query.where(ConsultaRecord.tipo_servicio == filters.tipo_servicio)
        if filters.prioridad is not None:
            query = query.where(ConsultaRecord.prioridad == filters.prioridad)
        if filters.fecha_desde is not None:
            query = query.where(ConsultaRecord.fecha_creacion >= as_utc(filters.fecha_desde))
        if filters.fecha_hasta is not None:
            query = query.where(ConsultaRecord.fecha_creacion <= as_utc(filters.fecha_hasta))
        return query

    def create(self, data: InquiryCreate) -> Inquiry:
        """Insert a new inquiry in state "nueva"."""
        values = self._storage(data, partial=False)
        values["estado"] = DEFAULT_INQUIRY_STATE
        values["prioridad"] = values.get("prioridad") or DEFAULT_PRIORITY
        return self._insert(values)
