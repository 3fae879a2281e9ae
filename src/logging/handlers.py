# src/logging/handlers.py — v1
"""Size-rotated log file handler used when LOG_FILE is set."""

from __future__ import annotations

import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

_UNITS: dict[str, int] = {"": 1, "B": 1, "KB": 1024, "MB": 1024**2, "GB": 1024**3}

_SIZE_RE = re.compile(r"^(\d+)\s*([KMG]?B)?$", re.IGNORECASE)


def parse_size(size_str: str) -> int:
    """Parse '10MB', '512KB' or a bare byte count into bytes."""
    match = _SIZE_RE.match(size_str.strip())
    if not match:
        raise ValueError(f"Invalid size format: {size_str!r}. Use e.g. '10MB'.")
    return int(match.group(1)) * _UNITS[(match.group(2) or "").upper()]


def create_rotating_handler(
    log_file: str | Path,
    rotation: str = "10MB",
    retention: int = 30,
) -> RotatingFileHandler:
    """Create a rotating file handler, creating the parent directory if needed.

    Args:
        log_file: Path to log file (``~`` is expanded).
        rotation: Max file size before rotation (e.g. "10MB").
        retention: Number of rotated files to keep.
    """
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    return RotatingFileHandler(
        filename=str(path),
        maxBytes=parse_size(rotation),
        backupCount=max(retention, 0),
        encoding="utf-8",
    )
