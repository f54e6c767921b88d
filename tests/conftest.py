"""Root conftest: shared filesystem fixtures for selection tests.

Provides:
- make_tree: write a dict of relative paths to content under tmp_path
- LengthTokenCounter: deterministic token counter (1 token per character)
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


class LengthTokenCounter:
    """Token counter that prices text at one token per character."""

    def count(self, text: str) -> int:
        return len(text)


def write_tree(root: Path, files: dict[str, str | bytes]) -> Path:
    """Create files (and parent directories) under root."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[dict[str, str | bytes]], Path]:
    """Factory fixture: make_tree({"src/main.go": "..."}) -> root path."""

    def _make(files: dict[str, str | bytes]) -> Path:
        return write_tree(tmp_path, files)

    return _make


@pytest.fixture
def length_counter() -> LengthTokenCounter:
    return LengthTokenCounter()
