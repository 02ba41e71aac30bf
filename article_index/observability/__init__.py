"""
Observability module.

Provides logging configuration, structured logging helpers, correlation
ID tracking and HTTP middleware.
"""

from article_index.observability.correlation import get_correlation_id, set_correlation_id
from article_index.observability.logger import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_correlation_id",
    "get_logger",
    "set_correlation_id",
]
