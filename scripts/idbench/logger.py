"""Coloured logging configuration for the identifier benchmark.

Console output is coloured by level so progress messages stand apart from the
comparison table, which is written to stdout separately.
"""

from __future__ import annotations

import logging
import os
import re
from typing import ClassVar

CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")


class LogMessageFilter(logging.Filter):
    """A logging filter to remove problematic control characters from log messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Strip control characters from the message and any cached traceback text.

        Returns:
            Always True; records are cleaned, never dropped.
        """
        if isinstance(record.msg, str):
            record.msg = CONTROL_CHARS.sub("", record.msg)
        if record.exc_text:
            record.exc_text = CONTROL_CHARS.sub("", record.exc_text)
        return True


class ColoredFormatter(logging.Formatter):
    """Formatter that wraps each line in the ANSI colour for its level."""

    COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[90m",  # Grey
        "INFO": "\033[92m",  # Green
        "WARNING": "\033[93m",  # Yellow
        "ERROR": "\033[91m",  # Red
        "CRITICAL": "\033[95m",  # Magenta
    }
    RESET: ClassVar[str] = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with the colour of its level.

        Returns:
            The formatted, coloured line.
        """
        colour = self.COLORS.get(record.levelname, "")
        formatted = super().format(record)
        if colour:
            formatted = f"{colour}{formatted}{self.RESET}"
        return formatted


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

logger = logging.getLogger("idbench")
logger.setLevel(LOG_LEVEL)

# StreamHandler defaults to stderr, keeping stdout for the report
console_handler = logging.StreamHandler()
console_handler.setLevel(logging.DEBUG)
console_handler.setFormatter(ColoredFormatter("%(asctime)s - %(levelname)s - %(message)s"))
console_handler.addFilter(LogMessageFilter())

logger.addHandler(console_handler)

# Prevent duplicate logs from root logger
logger.propagate = False
