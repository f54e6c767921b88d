"""
RelevanceScorer - weighted keyword scoring for candidate files.

score = 10 x filename hits + 5 x directory hits + 3 x import hits + 1 x content hits

Per keyword, all comparisons are case-insensitive:
- filename: the basename contains the keyword (one hit)
- directory: the parent path contains the keyword (one hit)
- imports: each import/reference line containing the keyword
- content: occurrences in the full text, capped per keyword
"""

import logging
import posixpath
from collections.abc import Iterable

from contextpack.services.relevance.references import extract_import_lines
from contextpack.services.types import Candidate, ScoreBreakdown, ScoredFile

logger = logging.getLogger(__name__)

FILENAME_WEIGHT = 10
DIRECTORY_WEIGHT = 5
IMPORT_WEIGHT = 3
CONTENT_WEIGHT = 1

# Keeps one keyword-dense file from drowning out path matches
MAX_CONTENT_HITS_PER_KEYWORD = 10


class RelevanceScorer:
    """Score files against a fixed, lower-cased keyword list."""

    def __init__(self, keywords: Iterable[str]) -> None:
        seen: dict[str, None] = {}
        for keyword in keywords:
            keyword = keyword.strip().lower()
            if keyword:
                seen[keyword] = None
        self.keywords: tuple[str, ...] = tuple(seen)

    @property
    def has_keywords(self) -> bool:
        return bool(self.keywords)

    def breakdown(self, relative_path: str, content: str) -> ScoreBreakdown:
        """Count keyword hits per field for one file."""
        if not self.keywords:
            return ScoreBreakdown()

        path = relative_path.replace("\\", "/").lower()
        directory, filename = posixpath.split(path)
        import_lines = [line.lower() for line in extract_import_lines(content)]
        text = content.lower()

        filename_hits = directory_hits = import_hits = content_hits = 0
        for keyword in self.keywords:
            if keyword in filename:
                filename_hits += 1
            if directory and keyword in directory:
                directory_hits += 1
            import_hits += sum(1 for line in import_lines if keyword in line)
            content_hits += min(text.count(keyword), MAX_CONTENT_HITS_PER_KEYWORD)

        return ScoreBreakdown(
            filename_hits=filename_hits,
            directory_hits=directory_hits,
            import_hits=import_hits,
            content_hits=content_hits,
        )

    @staticmethod
    def total(breakdown: ScoreBreakdown) -> int:
        return (
            FILENAME_WEIGHT * breakdown.filename_hits
            + DIRECTORY_WEIGHT * breakdown.directory_hits
            + IMPORT_WEIGHT * breakdown.import_hits
            + CONTENT_WEIGHT * breakdown.content_hits
        )

    def score_text(self, relative_path: str, content: str) -> tuple[int, ScoreBreakdown]:
        """Score a path and its content without a Candidate."""
        breakdown = self.breakdown(relative_path, content)
        return self.total(breakdown), breakdown

    def score(self, candidate: Candidate) -> ScoredFile:
        """
        Score a candidate, loading its content if needed.

        Raises OSError if the content cannot be read.
        """
        score, breakdown = self.score_text(candidate.relative_path, candidate.load_content())
        if score:
            logger.debug(f"Scored {candidate.relative_path}: {score} ({breakdown})")
        return ScoredFile(candidate=candidate, score=score, breakdown=breakdown)

