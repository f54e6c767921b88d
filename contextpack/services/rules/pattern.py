"""Path pattern rule."""

import fnmatch
import posixpath
from dataclasses import dataclass, field
from typing import ClassVar

from contextpack.services.rules.types import Rule, RuleAction, RuleKind


def to_slash(path: str) -> str:
    """Normalize a path to forward-slash form."""
    return path.replace("\\", "/")


@dataclass(frozen=True)
class PatternRule(Rule):
    """
    Match paths against directory, glob, and plain patterns.

    - `dir/` matches when the path starts with it or contains `/dir/`
    - a pattern containing `*` is a glob against the basename only
    - anything else matches on prefix, `/pattern` substring, or equality

    Plain patterns are deliberately loose: `Thumbs.db` also matches
    `Thumbs.db.old`.
    """

    kind: ClassVar[RuleKind] = RuleKind.PATTERN

    patterns: tuple[str, ...]
    action: RuleAction = RuleAction.EXCLUDE
    _normalized: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        patterns = tuple(self.patterns)
        object.__setattr__(self, "patterns", patterns)
        object.__setattr__(self, "_normalized", tuple(to_slash(p) for p in patterns))

    def match(self, path: str) -> bool:
        normalized_path = to_slash(path)
        for pattern in self._normalized:
            if pattern.endswith("/"):
                if normalized_path.startswith(pattern) or f"/{pattern}" in normalized_path:
                    return True
                continue

            if "*" in pattern:
                if fnmatch.fnmatchcase(posixpath.basename(normalized_path), pattern):
                    return True
                continue

            if (
                normalized_path.startswith(pattern)
                or f"/{pattern}" in normalized_path
                or normalized_path == pattern
            ):
                return True
        return False

    def directory_patterns(self) -> tuple[str, ...]:
        """Patterns that name whole directories (trailing slash)."""
        return tuple(p for p in self._normalized if p.endswith("/"))

    def describe(self) -> str:
        return f"pattern({', '.join(self.patterns[:3])}{', ...' if len(self.patterns) > 3 else ''})"
