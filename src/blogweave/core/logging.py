"""Centralized logging configuration for Blogweave."""

import logging
import os
from typing import Final

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["configure_logging", "console"]

_LOG_LEVEL_ENV: Final[str] = "BLOGWEAVE_LOG_LEVEL"
_DEFAULT_LEVEL_NAME: Final[str] = "INFO"

console = Console()


def _resolve_level(level_name: str | None = None) -> int:
    """Return the logging level, explicit argument first, then environment."""
    name = (level_name or os.getenv(_LOG_LEVEL_ENV, _DEFAULT_LEVEL_NAME)).upper()
    return getattr(logging, name, logging.INFO)


def configure_logging(level_name: str | None = None) -> None:
    """Configure logging once with a Rich handler."""
    root_logger = logging.getLogger()
    level = _resolve_level(level_name)

    managed = [h for h in root_logger.handlers if getattr(h, "_blogweave_managed", False)]
    if not managed:
        handler = RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler._blogweave_managed = True  # type: ignore[attr-defined]
        root_logger.addHandler(handler)

    root_logger.setLevel(level)

    # Quieten down noisy libraries
    logging.getLogger("asyncio").setLevel(logging.WARNING)
