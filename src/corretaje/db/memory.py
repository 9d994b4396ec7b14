"""
In-Memory Storage

Process-local fallback store for development and tests. Records are kept
in the external API shape, so no translation is involved. Data is lost on
restart and is not shared between worker processes: do not use in
production.

Each mutation (identifier increment plus list change) runs under one lock,
since FastAPI executes sync endpoints on a thread pool.
"""
import threading
from typing import Callable, Generic, List, Optional, TypeVar

from src.corretaje.models.base import CamelModel
from src.corretaje.models.inquiry import Inquiry
from src.corretaje.models.property import Property
from src.corretaje.services.filters import filter_inquiries, filter_properties
from src.corretaje.services.records import (
    build_inquiry,
    build_property,
    merge_inquiry,
    merge_property,
)
from src.corretaje.utils.logger import get_logger

logger = get_logger(__name__)

R = TypeVar("R", Property, Inquiry)


class InMemoryRepository(Generic[R]):
    """List-backed repository with monotonic integer identifiers."""

    def __init__(
        self,
        name: str,
        build: Callable[[int, CamelModel], R],
        merge: Callable[[R, CamelModel], R],
        select: Callable[[List[R], CamelModel], List[R]],
    ):
        self.name = name
        self._build = build
        self._merge = merge
        self._select = select
        self._records: List[R] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def list(self, filters: CamelModel) -> List[R]:
        """Records matching every supplied filter, newest first."""
        with self._lock:
            snapshot = list(self._records)
        return self._select(snapshot, filters)

    def all(self) -> List[R]:
        """Every stored record in insertion order."""
        with self._lock:
            return list(self._records)

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def get(self, record_id: int) -> Optional[R]:
        with self._lock:
            index = self._index_of(record_id)
            return self._records[index] if index is not None else None

    def create(self, data: CamelModel) -> R:
        with self._lock:
            record = self._build(self._next_id, data)
            self._next_id += 1
            self._records.append(record)

        logger.info("repository_created", repository=self.name, id=record.id)
        return record

    def update(self, record_id: int, patch: CamelModel) -> Optional[R]:
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                logger.warning("repository_update_not_found", repository=self.name, id=record_id)
                return None
            record = self._merge(self._records[index], patch)
            self._records[index] = record

        logger.info("repository_updated", repository=self.name, id=record_id)
        return record

    def delete(self, record_id: int) -> bool:
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                logger.warning("repository_delete_not_found", repository=self.name, id=record_id)
                return False
            del self._records[index]

        logger.info("repository_deleted", repository=self.name, id=record_id)
        return True

    def _index_of(self, record_id: int) -> Optional[int]:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return None


class InMemoryStore:
    """
    Holds one property and one inquiry collection.

    Instances are independent, so each test can build its own.
    """

    backend = "memoria"

    def __init__(self):
        self.propiedades: InMemoryRepository[Property] = InMemoryRepository(
            "propiedades", build_property, merge_property, filter_properties
        )
        self.consultas: InMemoryRepository[Inquiry] = InMemoryRepository(
            "consultas", build_inquiry, merge_inquiry, filter_inquiries
        )

    def health(self) -> str:
        return "connected"

    def close(self) -> None:
        """Nothing to release."""
