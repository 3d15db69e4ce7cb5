"""Logging configuration using loguru.

Provides:
- Human-readable logging for terminal use
- Structured JSON logging for CI pipelines
"""

import json
import sys
from datetime import UTC, datetime

from loguru import logger


def _json_formatter(record: dict) -> str:
    """Format log record as a single JSON line."""
    log_entry = {
        "timestamp": datetime.now(UTC).isoformat(),
        "severity": record["level"].name,
        "message": record["message"],
        "logger": record["name"],
        "function": record["function"],
        "line": record["line"],
    }

    if record.get("extra"):
        for key, value in record["extra"].items():
            if key not in log_entry:
                log_entry[key] = value

    # The returned template must not contain message text: loguru parses
    # both braces and <tag> markup in it
    record["extra"]["serialized"] = json.dumps(log_entry, default=str)
    return "{extra[serialized]}\n"


def _dev_formatter(record: dict) -> str:
    """Format log record for the terminal (human-readable)."""
    if record["level"].no >= logger.level("WARNING").no:
        return "<level>{level: <8}</level> | <level>{message}</level>\n"
    return "<level>{message}</level>\n"


def setup_logging(log_level: str = "INFO", json_logs: bool = False) -> None:
    """Configure loguru for the command line tool.

    Args:
        log_level: Minimum log level to output
        json_logs: If True, output one JSON object per line
    """
    # Remove default handler
    logger.remove()

    if json_logs:
        logger.add(
            sys.stderr,
            format=_json_formatter,
            level=log_level,
            serialize=False,  # We handle serialization in the formatter
        )
    else:
        logger.add(
            sys.stderr,
            format=_dev_formatter,
            level=log_level,
            colorize=None,
        )


__all__ = ["logger", "setup_logging"]
