# src/game/logger.py
"""Console logging for the game, the env and the experiment scripts."""
from __future__ import annotations
import logging
import sys
from datetime import datetime


class HumanFormatter(logging.Formatter):
    """Compact one-line format for terminal display."""

    COLORS = {
        "DEBUG": "\033[90m",
        "INFO": "\033[36m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[1;31m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        ts = datetime.now().strftime("%H:%M:%S")
        name = record.name.replace("src.", "")
        msg = f"{color}{ts} [{record.levelname[0]}] {name}: {record.getMessage()}{self.RESET}"
        if record.exc_info:
            msg += "\n" + self.formatException(record.exc_info)
        return msg


def setup_logging(level: str = "warning") -> None:
    """Attach a single console handler to the `src` logger tree."""
    root = logging.getLogger("src")
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    root.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(HumanFormatter())
    root.addHandler(console)
