"""
Selection engine data types.

Data classes passed between traversal, filtering, scoring and allocation.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from contextpack.services.rules.types import RuleKind


class FilterStage(str, Enum):
    """Pipeline stages, in evaluation order."""

    GITIGNORE = "gitignore"
    DEFAULT_RULES = "default_rules"
    USER_EXCLUDE = "user_exclude"
    EXTENSION = "extension"
    RELEVANCE = "relevance"


@dataclass
class Candidate:
    """A file found during traversal, before its inclusion decision."""

    path: Path  # Absolute path
    relative_path: str  # Forward-slash path relative to the root
    size_bytes: int
    extension: str
    _content: str | None = field(default=None, repr=False)

    @property
    def content_loaded(self) -> bool:
        return self._content is not None

    def load_content(self) -> str:
        """
        Read and cache the file content as text.

        Undecodable bytes are replaced. Raises OSError when the file cannot
        be read; callers treat that as a non-fatal warning.
        """
        if self._content is None:
            data = self.path.read_bytes()
            self._content = data.decode("utf-8", errors="replace")
        return self._content

    def release_content(self) -> None:
        """Drop cached content once a file is rejected."""
        self._content = None


@dataclass(frozen=True)
class FilterDecision:
    """Outcome of the path-level pipeline stages (1-4) for one file."""

    selected: bool
    stage: FilterStage | None = None  # Stage that rejected the file
    rule: RuleKind | None = None  # Default rule that matched, for stage 2

    @property
    def reason(self) -> str:
        if self.selected:
            return "selected"
        if self.rule is not None:
            return f"{self.stage.value}:{self.rule.value}" if self.stage else self.rule.value
        return self.stage.value if self.stage else "rejected"


@dataclass(frozen=True)
class ScoreBreakdown:
    """Per-field keyword hit counts behind a relevance score."""

    filename_hits: int = 0
    directory_hits: int = 0
    import_hits: int = 0
    content_hits: int = 0


@dataclass
class ScoredFile:
    """A candidate with its relevance score."""

    candidate: Candidate
    score: int
    breakdown: ScoreBreakdown

    @property
    def relative_path(self) -> str:
        return self.candidate.relative_path


@dataclass(frozen=True)
class ClassificationWarning:
    """A non-fatal I/O problem met while classifying a file."""

    path: str
    stage: str  # "stat", "read"
    message: str


@dataclass(frozen=True)
class IncludedFile:
    """A file selected into the final output."""

    path: str
    content: str
    tokens: int
    score: int | None = None  # Relevance score, when relevance is active


@dataclass(frozen=True)
class ExcludedFile:
    """A file that passed filtering but did not fit in the token budget."""

    path: str
    tokens: int
    reason: str = "token_budget"
