"""Root logger configuration shared by the demo drivers."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
DEFAULT_LOG_FILE = Path("logs") / "app.log"


def resolve_level(name: Optional[str]) -> int:
    level = logging.getLevelName((name or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    level: Optional[str] = "INFO",
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """Send log records to stderr and, optionally, to `log_file`.

    Call once per process from a driver's `main`. Existing root handlers are
    replaced so repeated calls do not duplicate output.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(resolve_level(level))

    formatter = logging.Formatter(LOG_FORMAT)
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    # SDK transports are chatty at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return root
