"""
SQLAlchemy Base and Mixins

Provides declarative base and reusable mixins for database models.
"""
from datetime import datetime
from typing import Any, Dict

from sqlalchemy import DateTime, inspect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from src.corretaje.models.base import utc_now


class Base(DeclarativeBase):
    """
    Base class for all database models.

    Provides common functionality and type hints for SQLAlchemy models.
    """

    # Type annotation for primary keys
    id: Any

    def to_dict(self) -> Dict[str, Any]:
        """
        Column values keyed by column name.

        This is the storage shape consumed by the shape translator.
        """
        return {
            attr.key: getattr(self, attr.key)
            for attr in inspect(self).mapper.column_attrs
        }


class TimestampMixin:
    """
    Mixin to add fecha_creacion and fecha_actualizacion columns.

    Both are stamped by the application, never taken from clients.
    """

    fecha_creacion: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
        comment="Timestamp when record was created"
    )

    fecha_actualizacion: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
        comment="Timestamp when record was last updated"
    )


def import_all_models():
    """
    Import all models to register them with SQLAlchemy Base.

    Must run before create_all so every table is known to the metadata.
    """
    from src.corretaje.db import models  # noqa: F401
