"""
Logging setup.

BookMatch logs through loguru. Engine components bind structured
context (component, strategy, attempt, event) so records can be
filtered or asserted on by the event name in ``record["extra"]``.
"""

import sys

from loguru import logger


LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan> | {message}"
)


def configure_logging(level: str = "INFO") -> None:
    """Replace default sinks with a single stderr sink."""
    logger.remove()
    logger.configure(extra={"component": "bookmatch"})
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)
