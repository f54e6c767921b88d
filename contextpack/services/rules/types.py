"""
Rule types.

Rules form a closed set of kinds. Each concrete rule is an immutable
dataclass that answers `match(path)` for a path relative to the extraction
root and carries the action applied when it matches.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class RuleAction(str, Enum):
    """What the pipeline does with a path a rule matches."""

    INCLUDE = "include"
    EXCLUDE = "exclude"
    SKIP = "skip"


class RuleKind(str, Enum):
    """The fixed set of rule variants."""

    PATTERN = "pattern"
    EXTENSION = "extension"
    BINARY = "binary"
    ECOSYSTEM_LOCK = "ecosystem_lock"
    GENERATED = "generated"
    LOCK_SIGNATURE = "lock_signature"


@dataclass(frozen=True)
class Rule:
    """Base class for all rules."""

    kind: ClassVar[RuleKind]
    # Rough probability that a match is correct; reported with each exclusion
    confidence: ClassVar[float] = 1.0

    # Subclasses declare their own fields, ending with
    # `action: RuleAction = RuleAction.EXCLUDE`

    def match(self, path: str) -> bool:
        raise NotImplementedError

    def describe(self) -> str:
        """Short human-readable label for logs and exclusion reports."""
        return self.kind.value
