from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_rich_logging(level: int = logging.INFO) -> None:
    """Configure the root logger with a Rich handler on stderr, keeping stdout for command output."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="%H:%M:%S",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_time=True, markup=False)],
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a module logger. Call setup_rich_logging() once at startup."""
    return logging.getLogger(name if name else "envicube")
