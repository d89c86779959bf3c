"""
Utility functions for the DotConfig package.

This module provides helpers shared by the command-line tool, such as
reporting errors consistently.
"""

import traceback
from typing import Optional

from DotConfig.exceptions import DotConfigError
from DotConfig.utils.logging import get_logger

# Get a logger for this module
logger = get_logger(__name__)

def log_error(error: Exception, additional_context: Optional[str] = None) -> None:
    """
    Log an error with optional context, and its traceback at debug level.

    DotConfig errors are logged with their error code and context so the
    offending path or value is visible without a traceback.

    Args:
        error: The exception that occurred
        additional_context: Optional description of what was being done

    Example:
        >>> try:
        ...     config.get_int("server.port")
        ... except DotConfigError as e:
        ...     log_error(e, "Reading server settings")
    """
    error_message = str(error)
    if isinstance(error, DotConfigError):
        error_message = f"[{error.error_code}] {error_message}"
        if error.context:
            error_message = f"{error_message} (context: {error.context})"

    if additional_context:
        logger.error(f"{additional_context}: {error_message}")
    else:
        logger.error(f"Error: {error_message}")

    logger.debug(f"Traceback: {''.join(traceback.format_exception(type(error), error, error.__traceback__))}")
