"""
Allocation priority order.

Relevance ranking when keywords are active; otherwise traversal order with
entry points (main.*, README*, ...) optionally moved to the front.
"""

import fnmatch
import posixpath

from contextpack.services.budget.allocator import BudgetItem

# Matched against the full relative path and against the basename
ENTRY_POINT_PATTERNS = (
    "main.*",
    "cmd/*/main.go",
    "__main__.py",
    "index.*",
    "app.*",
    "server.*",
    "lib.rs",
    "Main.java",
    "Application.java",
)

# Compared case-insensitively against the basename
DOC_ENTRY_PREFIXES = ("readme",)


def is_entry_point(relative_path: str) -> bool:
    """Check if a path is conventionally a program or project entry point."""
    path = relative_path.replace("\\", "/")
    basename = posixpath.basename(path)
    if basename.lower().startswith(DOC_ENTRY_PREFIXES):
        return True
    return any(
        fnmatch.fnmatchcase(path, pattern) or fnmatch.fnmatchcase(basename, pattern)
        for pattern in ENTRY_POINT_PATTERNS
    )


def rank_by_relevance(items: list[BudgetItem]) -> list[BudgetItem]:
    """Descending score, ties broken by ascending path."""
    return sorted(items, key=lambda item: (-(item.score or 0), item.path))


def boost_entry_points(items: list[BudgetItem]) -> list[BudgetItem]:
    """Stable partition: entry points first, relative order otherwise kept."""
    entries = [item for item in items if is_entry_point(item.path)]
    rest = [item for item in items if not is_entry_point(item.path)]
    return entries + rest


def priority_order(
    items: list[BudgetItem],
    relevance_active: bool,
    entry_point_boost: bool = True,
) -> list[BudgetItem]:
    """
    Build the order the allocator consumes.

    The entry-point boost only applies without relevance, so a relevance run
    stays strictly score-ordered.
    """
    if relevance_active:
        return rank_by_relevance(items)
    if entry_point_boost:
        return boost_entry_points(items)
    return list(items)
