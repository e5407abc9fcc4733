"""Loguru configuration for applications embedding extragrid.

The library logs under the ``extragrid`` name and is disabled on import.
``configure_logging`` enables it and installs either a colored
human-readable sink or a JSON-lines sink on stderr.
"""

from __future__ import annotations

import json
import sys
from typing import Any

from loguru import logger


def _json_serializer(record: dict[str, Any]) -> str:
    """Serialize a log record to one JSON object.

    Fields: ``severity``, ``message``, ``time``, bound extras at the top level
    and ``exception`` (``"Type: value"``) for records carrying one.
    """
    log_entry: dict[str, Any] = {
        "severity": record["level"].name,
        "message": record["message"],
        "time": record["time"].isoformat(),
    }
    log_entry.update(record["extra"])

    exc_info = record["exception"]
    if exc_info is not None and exc_info.type is not None:
        log_entry["exception"] = f"{exc_info.type.__name__}: {exc_info.value}"

    return json.dumps(log_entry, default=str)


def _json_sink(message: Any) -> None:
    # stdout carries command output
    sys.stderr.write(_json_serializer(message.record) + "\n")


def configure_logging(*, json_output: bool = False, log_level: str = "WARNING") -> None:
    """Configure loguru and enable extragrid's log output.

    Args:
        json_output: If True, write one JSON object per line. If False, use
            human-readable colored output.
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    logger.remove()
    logger.enable("extragrid")

    if json_output:
        logger.add(_json_sink, level=log_level, format="{message}")
    else:
        logger.add(
            sys.stderr,
            level=log_level,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan> | "
                "<level>{message}</level>"
            ),
            colorize=True,
        )
