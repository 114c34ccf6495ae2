import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class LookupFailure(Exception):
    """Base class for every failure a lookup or browse request can surface."""


class ValidationError(LookupFailure, ValueError):
    pass


class InvalidIdentifier(ValidationError):
    pass


class InvalidQuery(ValidationError):
    pass


class EntityNotFound(LookupFailure):
    def __init__(self, message: str = "Entity not found") -> None:
        super().__init__(message)


class StorageUnavailable(LookupFailure):
    pass


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Re-raise driver and ORM failures as StorageUnavailable.

    The original error is logged here and chained, never shown to clients.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("Storage failure while %s", operation)
        raise StorageUnavailable(operation) from exc
