"""File extension rule."""

import posixpath
from dataclasses import dataclass
from typing import ClassVar

from contextpack.services.rules.pattern import to_slash
from contextpack.services.rules.types import Rule, RuleAction, RuleKind


def path_extension(path: str) -> str:
    """Return the final suffix of a path including the dot, or "" if none."""
    return posixpath.splitext(to_slash(path))[1]


@dataclass(frozen=True)
class ExtensionRule(Rule):
    """Match paths whose extension is in a set (case-sensitive)."""

    kind: ClassVar[RuleKind] = RuleKind.EXTENSION

    extensions: frozenset[str]
    action: RuleAction = RuleAction.EXCLUDE

    def __post_init__(self) -> None:
        normalized = frozenset(e if e.startswith(".") else f".{e}" for e in self.extensions if e)
        object.__setattr__(self, "extensions", normalized)

    def match(self, path: str) -> bool:
        ext = path_extension(path)
        if not ext:
            return False
        return ext in self.extensions

    def describe(self) -> str:
        return f"extension({', '.join(sorted(self.extensions)[:5])})"
