"""Logging setup for jico.

Everything is logged to stderr; stdout is reserved for command results.
"""

import logging
import sys
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "jico"


def level_from_verbosity(verbose: int, quiet: bool = False) -> int:
    """Map the -v/-q flags to a logging level. -v beats -q."""
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.ERROR if quiet else logging.WARNING


def setup_logging(level: int = logging.WARNING, color: bool = True) -> logging.Logger:
    """Install a single stderr handler and set the jico log level."""
    if color:
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    root = logging.getLogger()
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return logger


class StructuredLogger:
    """Logger under the ``jico`` namespace that appends ``key=value`` pairs."""

    def __init__(self, name: str):
        self._logger = logging.getLogger(f"{ROOT_LOGGER}.{name}")

    @property
    def name(self) -> str:
        return self._logger.name

    @staticmethod
    def _format(message: str, fields: dict[str, Any]) -> str:
        if not fields:
            return message
        pairs = " ".join(f"{k}={v}" for k, v in fields.items())
        return f"{message} [{pairs}]"

    def debug(self, message: str, **fields: Any) -> None:
        self._logger.debug(self._format(message, fields))

    def info(self, message: str, **fields: Any) -> None:
        self._logger.info(self._format(message, fields))
