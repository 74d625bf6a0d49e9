"""Central logging configuration.

Usage:
    from utils.logging_config import configure_logging
    configure_logging(json_logs=False, level="INFO")

Idempotent: safe to call multiple times. All modules log through loguru's
shared ``logger``; this helper only decides where records go.
"""
from __future__ import annotations
import os
import sys
from typing import Optional

from loguru import logger

_CONFIGURED = False

PLAIN_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {name} | {message}"


def _stderr_sink(message) -> None:
    # resolve sys.stderr per record so redirected streams (pytest capture) are honoured
    sys.stderr.write(message)


def configure_logging(json_logs: bool = False, level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Replace loguru's default sink with a stderr sink (+ optional file sink).

    stdout stays reserved for command output such as the CLI's JSON document.

    log_file falls back to env PLANEGEOM_LOG_FILE; the file sink rotates at 5 MB
    and always serializes records as JSON lines.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return
    logger.remove()
    if json_logs:
        logger.add(_stderr_sink, level=level.upper(), serialize=True)
    else:
        logger.add(_stderr_sink, level=level.upper(), format=PLAIN_FORMAT)

    path = log_file or os.getenv('PLANEGEOM_LOG_FILE')
    if path:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        logger.add(path, level=level.upper(), serialize=True, rotation="5 MB", retention=3)
    _CONFIGURED = True


def reset_logging() -> None:  # used by tests to reconfigure sinks
    global _CONFIGURED
    logger.remove()
    logger.add(sys.stderr)
    _CONFIGURED = False


__all__ = ["configure_logging", "reset_logging", "PLAIN_FORMAT"]
