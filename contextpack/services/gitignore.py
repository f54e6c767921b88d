"""
.gitignore matching.

Loaded once per run from the root `.gitignore`; matching uses git's own
wildmatch semantics via pathspec.
"""

import logging
from pathlib import Path
from typing import Protocol

import pathspec

logger = logging.getLogger(__name__)


class GitIgnoreMatcher(Protocol):
    """Anything that can answer whether a root-relative path is ignored."""

    def match(self, relative_path: str) -> bool: ...

    def match_directory(self, relative_dir: str) -> bool: ...


class PathSpecGitIgnore:
    """GitIgnoreMatcher backed by a pathspec GitIgnoreSpec."""

    def __init__(self, patterns: list[str] | None = None) -> None:
        self.patterns = [p for p in (patterns or []) if p.strip() and not p.lstrip().startswith("#")]
        self._spec = pathspec.GitIgnoreSpec.from_lines(self.patterns)

    @classmethod
    def from_root(cls, root: str | Path, filename: str = ".gitignore") -> "PathSpecGitIgnore":
        """
        Load patterns from `<root>/.gitignore`.

        A missing or unreadable file yields a matcher that ignores nothing.
        """
        path = Path(root) / filename
        try:
            lines = path.read_text(encoding="utf-8", errors="replace").splitlines()
        except FileNotFoundError:
            return cls()
        except OSError as e:
            logger.warning(f"Could not read {path}: {e}")
            return cls()

        matcher = cls(lines)
        logger.debug(f"Loaded {len(matcher.patterns)} gitignore patterns from {path}")
        return matcher

    def match(self, relative_path: str) -> bool:
        if not self.patterns:
            return False
        return self._spec.match_file(relative_path.replace("\\", "/"))

    def match_directory(self, relative_dir: str) -> bool:
        """Check a directory; directory-only patterns need the trailing slash."""
        if not self.patterns:
            return False
        return self._spec.match_file(relative_dir.replace("\\", "/").rstrip("/") + "/")


class NullGitIgnore:
    """Matcher used when gitignore support is disabled."""

    def match(self, relative_path: str) -> bool:
        return False

    def match_directory(self, relative_dir: str) -> bool:
        return False
