# Services package

from contextpack.services.budget import BudgetItem, BudgetResult, TokenBudgetAllocator
from contextpack.services.extractor import (
    CancellationToken,
    ExtractionResult,
    ExtractionStatus,
    Extractor,
    extract,
)
from contextpack.services.filter_pipeline import FilterPipeline
from contextpack.services.gitignore import GitIgnoreMatcher, NullGitIgnore, PathSpecGitIgnore
from contextpack.services.relevance import RelevanceScorer
from contextpack.services.tokens import ApproximateTokenCounter, TiktokenCounter, TokenCounter
from contextpack.services.traversal import DirectoryWalker
from contextpack.services.types import (
    Candidate,
    ClassificationWarning,
    ExcludedFile,
    FilterDecision,
    FilterStage,
    IncludedFile,
    ScoreBreakdown,
    ScoredFile,
)

__all__ = [
    # Orchestration
    "Extractor",
    "ExtractionResult",
    "ExtractionStatus",
    "CancellationToken",
    "extract",
    # Stages
    "FilterPipeline",
    "DirectoryWalker",
    "RelevanceScorer",
    "TokenBudgetAllocator",
    "BudgetItem",
    "BudgetResult",
    # Pluggable collaborators
    "GitIgnoreMatcher",
    "PathSpecGitIgnore",
    "NullGitIgnore",
    "TokenCounter",
    "TiktokenCounter",
    "ApproximateTokenCounter",
    # Data types
    "Candidate",
    "ClassificationWarning",
    "ExcludedFile",
    "FilterDecision",
    "FilterStage",
    "IncludedFile",
    "ScoreBreakdown",
    "ScoredFile",
]
