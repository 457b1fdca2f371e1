"""
repositories/errors.py
----------------------
Typed outcomes raised by the data access layer.
"""

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError


class RepositoryError(Exception):
    """Base class for data access failures."""


class NotFound(RepositoryError):
    """A read-by-key found no row."""

    def __init__(self, entity: str, key) -> None:
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} {key!r} not found")


class StorageError(RepositoryError):
    """
    Any store-level failure other than a missing row: constraint
    violations, lost connections, pool timeouts, malformed queries.
    """

    def __init__(self, operation: str, cause: BaseException) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} failed: {cause}")


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Re-raise SQLAlchemy exceptions raised in the block as StorageError."""
    try:
        yield
    except SQLAlchemyError as e:
        raise StorageError(operation, e) from e
