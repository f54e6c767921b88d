import logging
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager

from contextpack.config.settings import settings

logger = logging.getLogger(__name__)


def setup_logging(level: str | int | None = None) -> None:
    """
    Configure root logging for command-line and script use.

    Defaults to `settings.log_level` (CONTEXTPACK_LOG_LEVEL).
    """
    if level is None:
        level = settings.log_level
    # Format: timestamp - level - logger name - message
    log_format = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
    date_format = "%H:%M:%S"

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stderr,
        force=True,
    )

    # YAML loading is chatty at DEBUG
    logging.getLogger("yaml").setLevel(logging.WARNING)


@contextmanager
def log_phase(name: str, log: logging.Logger | None = None) -> Iterator[None]:
    """Log the wall-clock duration of a processing phase at DEBUG."""
    target = log or logger
    start = time.perf_counter()
    target.debug(f"{name}: started")
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        target.debug(f"{name}: finished in {elapsed_ms:.2f}ms")
