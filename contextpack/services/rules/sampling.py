"""Fail-open file sampling helpers shared by the content rules."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def resolve(root: str | Path, path: str) -> Path:
    """Resolve a root-relative path; absolute paths pass through unchanged."""
    return Path(root) / path if root else Path(path)


def file_size(path: Path) -> int | None:
    """Return the size in bytes, or None when the file cannot be stat'ed."""
    try:
        return os.stat(path).st_size
    except OSError as e:
        logger.debug(f"stat failed for {path}: {e}")
        return None


def read_head(path: Path, limit: int) -> bytes | None:
    """Read up to `limit` bytes from the start of a file, or None on error."""
    try:
        with open(path, "rb") as f:
            return f.read(limit)
    except OSError as e:
        logger.debug(f"read failed for {path}: {e}")
        return None


def read_text(path: Path, limit: int | None = None) -> str | None:
    """Read a file (or its head) as text, replacing undecodable bytes."""
    data = read_head(path, limit if limit is not None else -1)
    if data is None:
        return None
    return data.decode("utf-8", errors="replace")
