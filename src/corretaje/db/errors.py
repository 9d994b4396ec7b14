"""
Storage Exceptions

Raised by repositories when the persistence layer fails. The API turns
them into 500 responses.
"""
from typing import Optional


class StorageError(Exception):
    """A storage operation failed."""

    def __init__(self, operation: str, detail: Optional[str] = None):
        self.operation = operation
        self.detail = detail
        super().__init__(f"{operation}: {detail}" if detail else operation)


class StorageUnavailableError(StorageError):
    """The relational backend is not configured."""

    def __init__(self, operation: str):
        super().__init__(operation, "Base de datos no configurada (DATABASE_URL ausente)")
