"""
Logging Utilities

Category-prefixed logging on top of the standard logging module.
Debug and step messages are only emitted when DEBUG is enabled in settings;
errors are always emitted.
"""

import logging
from typing import Optional

from config.settings import settings


logger = logging.getLogger("tripwise")
_handler = logging.StreamHandler()
_handler.setFormatter(
    logging.Formatter('[%(asctime)s] [%(levelname)s] %(message)s', datefmt='%H:%M:%S')
)
logger.addHandler(_handler)
logger.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
logger.propagate = False


def _format(message: str, prefix: str) -> str:
    return f"[{prefix}] {message}" if prefix else message


def log_debug(message: str, *args, prefix: str = "") -> None:
    """
    Log a debug message only if DEBUG is set to True in settings.

    Args:
        message: The message to log, %-style placeholders allowed
        *args: Values formatted into the message
        prefix: Category of the log line (e.g., "PLAN", "GENERATE")
    """
    if not settings.DEBUG:
        return
    logger.debug(_format(message, prefix), *args)


def log_step(step_name: str, step_number: Optional[int] = None,
             total_steps: Optional[int] = None, prefix: str = "") -> None:
    """Log a pipeline step, optionally with its position in the pipeline."""
    if not settings.DEBUG:
        return

    if step_number is not None and total_steps is not None:
        progress = f"[{step_number}/{total_steps}]"
    elif step_number is not None:
        progress = f"[Step {step_number}]"
    else:
        progress = "[STEP]"

    logger.info(_format(f"{progress} {step_name}", prefix))


def log_success(message: str, prefix: str = "") -> None:
    """Log a success message with a checkmark."""
    if not settings.DEBUG:
        return
    logger.info(_format(f"✓ {message}", prefix))


def log_error(message: str, prefix: str = "") -> None:
    """Log an error message with an X mark."""
    logger.error(_format(f"✗ {message}", prefix))
