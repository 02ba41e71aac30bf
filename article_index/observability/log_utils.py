"""
Structured logging helpers.

Context passed as keyword arguments is flattened into log record extras.
Embedding vectors, records and other bulky values are summarized so a
log line never carries a full 1536-float payload.

Dependencies: logging (stdlib), pydantic
System role: Logging helper functions
"""

import logging
from numbers import Real
from typing import Any, Mapping

from pydantic import BaseModel

# Attribute names LogRecord already owns; extras using them raise KeyError
_RESERVED = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


def _is_vector(value: Any) -> bool:
    return (
        isinstance(value, (list, tuple))
        and len(value) > 0
        and all(isinstance(item, Real) and not isinstance(item, bool) for item in value)
    )


def safe_log_value(value: Any, max_length: int = 500) -> str:
    """
    Convert a context value to a short string for logging.

    - numeric lists and tuples render as vector(dim=N)
    - models with an id (records, chunks, results) render as Type(id=...)
    - other sequences and dicts render by size

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, str):
            text = value
        elif _is_vector(value):
            text = f"vector(dim={len(value)})"
        elif isinstance(value, BaseModel) and hasattr(value, "id"):
            text = f"{type(value).__name__}(id={value.id})"
        elif isinstance(value, (list, tuple, set)):
            text = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, Mapping):
            text = f"dict({len(value)} keys)"
        else:
            text = str(value)

        if len(text) > max_length:
            return text[:max_length] + f"... (truncated, {len(text)} total)"
        return text
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"


def _extras(context: Mapping[str, Any]) -> dict[str, str]:
    return {
        (f"ctx_{key}" if key in _RESERVED else key): safe_log_value(val)
        for key, val in context.items()
    }


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """Log a message with context attached as record extras."""
    logger.log(level, message, extra=_extras(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context,
) -> None:
    """
    Log an exception with its traceback and context.

    Domain errors carry a details mapping (stage, operation, id, ...);
    those keys are attached too, with explicit context taking precedence.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional context
    """
    details = getattr(exc, "details", None)
    merged = {**details, **context} if isinstance(details, Mapping) else dict(context)
    extra = _extras(merged)
    extra.update({
        "error_type": type(exc).__name__,
        "error_msg": getattr(exc, "message", None) or str(exc),
    })
    logger.error(message, exc_info=exc, extra=extra)
