"""
Router utility functions.

Maps domain exceptions to HTTP status codes and envelope responses.

Dependencies: fastapi, article_index.core, article_index.models
System role: Shared error handling for API routers
"""

import logging

from fastapi.responses import JSONResponse

from article_index.core.exceptions import (
    ArticleIndexError,
    IngestionError,
    NotFoundError,
    ValidationError,
)
from article_index.models.article import ApiResponse, ErrorData

logger = logging.getLogger(__name__)


def status_code_for(error: ArticleIndexError) -> int:
    """
    HTTP status for a domain error.

    Args:
        error: Raised domain exception

    Returns:
        int: 400 for validation, 404 for missing resources, 500 otherwise
    """
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, NotFoundError):
        return 404
    return 500


def error_response(error: ArticleIndexError, message: str) -> JSONResponse:
    """
    Build an envelope response for a failed request.

    Args:
        error: Raised domain exception
        message: Summary of the failed operation

    Returns:
        JSONResponse: Envelope with success=False and the mapped status code
    """
    status_code = status_code_for(error)
    data = None
    if isinstance(error, IngestionError):
        data = ErrorData(details=error.details, processing_time_ms=error.processing_time_ms)

    if status_code >= 500:
        logger.error(
            f"{__name__}:error_response - {message}",
            extra={"error_type": type(error).__name__, "error_msg": error.message},
        )

    body = ApiResponse[ErrorData](
        success=False,
        message=message,
        data=data,
        error=error.message,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))
