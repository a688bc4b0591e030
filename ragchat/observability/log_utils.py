"""
Logging utilities for safe structured logging.

Converts arbitrary values (tool arguments, model output) into bounded
strings before they reach a log record.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any


def safe_log_value(value: Any, max_length: int = 200) -> str:
    """
    Safely convert any value to a string for logging.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    if value is None:
        return "None"
    if isinstance(value, str):
        val_str = value
    elif isinstance(value, (list, tuple)):
        val_str = f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, dict):
        val_str = f"dict({len(value)} keys: {', '.join(map(str, list(value)[:5]))})"
    else:
        try:
            val_str = str(value)
        except Exception as e:
            return f"<unable to log: {type(e).__name__}>"

    if len(val_str) > max_length:
        return val_str[:max_length] + f"... (truncated, {len(val_str)} total)"
    return val_str


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """
    Log a message with structured context appended as key=value pairs.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Arbitrary key-value pairs
    """
    if not logger.isEnabledFor(level):
        return
    rendered = " ".join(f"{key}={safe_log_value(val)}" for key, val in context.items())
    logger.log(level, f"{message} ({rendered})" if rendered else message)
