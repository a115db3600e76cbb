from fastapi import HTTPException, status
from core.exceptions import (
    MenuError,
    ValidationError,
    DuplicateCategoryError,
    CannotDeletePredefinedError,
    ItemNotFoundError,
    InconsistentStoreError,
    PersistenceError,
)
import logging

logger = logging.getLogger(__name__)


def to_http_exception(error: MenuError) -> HTTPException:
    """
    Map a service error onto the HTTP status the admin panel expects
    """
    if isinstance(error, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.message)
    if isinstance(error, DuplicateCategoryError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=error.message)
    if isinstance(error, CannotDeletePredefinedError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.message)
    if isinstance(error, ItemNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)
    if isinstance(error, InconsistentStoreError):
        logger.error(f"Store left inconsistent: {error.message}")
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Menu data may be inconsistent. Re-fetch the category list before retrying.",
        )
    if isinstance(error, PersistenceError):
        logger.error(f"Storage failure: {error.message}")
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save menu data. Re-fetch before retrying.",
        )
    logger.error(f"Unhandled menu error: {error.message}")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=error.message)
