"""Secure logging utilities to prevent information disclosure."""

import logging
import re
from typing import Any

from school_rbac.config import get_settings

_MAX_MESSAGE_LENGTH = 200

_PATH_PATTERN = re.compile(r"['\"]?(/[a-zA-Z0-9_./\-]+|[A-Z]:\\[^\s'\"]+)['\"]?")
_URL_PATTERN = re.compile(r"(postgresql|sqlite|redis|http|https)(\+\w+)?://[^\s]+")
_EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+")
_TOKEN_PATTERN = re.compile(r"[a-zA-Z0-9_\-]{32,}")


def is_debug_mode() -> bool:
    """Check if application is running in debug mode."""
    return get_settings().debug


def sanitize_exception_message(error: Exception) -> str:
    """Sanitize exception message for logging in production.

    Removes URLs (roles backend and database connection strings), file
    system paths, email addresses and long tokens, then truncates.

    Args:
        error: The exception to sanitize

    Returns:
        Sanitized error message suitable for production logs
    """
    error_msg = str(error)

    # URLs first so their paths are not half-replaced
    error_msg = _URL_PATTERN.sub("[URL]", error_msg)
    error_msg = _PATH_PATTERN.sub("[PATH]", error_msg)
    error_msg = _EMAIL_PATTERN.sub("[EMAIL]", error_msg)
    error_msg = _TOKEN_PATTERN.sub("[TOKEN]", error_msg)

    if len(error_msg) > _MAX_MESSAGE_LENGTH:
        error_msg = error_msg[: _MAX_MESSAGE_LENGTH - 3] + "..."

    return error_msg


def _log(
    logger: logging.Logger,
    level: int,
    message: str,
    error: Exception | None,
    context: dict[str, Any],
) -> None:
    if error is None:
        logger.log(level, message, extra=context if is_debug_mode() else None)
    elif is_debug_mode():
        logger.log(level, f"{message}: {error}", exc_info=level >= logging.ERROR, extra=context)
    else:
        logger.log(level, f"{message}: {sanitize_exception_message(error)}")


def log_error(
    logger: logging.Logger,
    message: str,
    error: Exception | None = None,
    **kwargs: Any,
) -> None:
    """Log an error with appropriate detail level based on environment.

    In debug mode, logs full exception details and context.
    In production, logs sanitized message without sensitive details.

    Args:
        logger: The logger instance to use
        message: The log message (should be generic, no sensitive data)
        error: Optional exception to include
        **kwargs: Additional context, only attached in debug mode
    """
    _log(logger, logging.ERROR, message, error, kwargs)


def log_warning(
    logger: logging.Logger,
    message: str,
    error: Exception | None = None,
    **kwargs: Any,
) -> None:
    """Log a warning with appropriate detail level based on environment."""
    _log(logger, logging.WARNING, message, error, kwargs)
