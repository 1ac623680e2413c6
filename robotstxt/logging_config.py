"""
Logging configuration (rich console handler + optional log file).
"""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

FILE_FORMAT = "%(asctime)s\t%(levelname)s\t%(name)s\t%(message)s"


def configure_logging(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    """
    Configure the root logger.

    Console output goes through rich on stderr; when a log file is given
    the same records are written there in a tab-separated format.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Clear existing handlers in case of re-init
    for handler in list(root.handlers):
        root.removeHandler(handler)

    console = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    console.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root.addHandler(file_handler)
