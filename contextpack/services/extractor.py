"""
Extractor - one synchronous selection run over a directory.

Flow:
1. Validate the root (the only fatal I/O error)
2. Build the FilterPipeline (gitignore, ecosystem scan, default rules)
3. Walk the tree in sorted order, pruning ignored directories
4. Classify each file on a bounded thread pool; results are re-joined in
   traversal order so the outcome never depends on thread scheduling
5. Order survivors by priority and run the greedy budget allocation
"""

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from contextpack.config.filter_config import FilterConfig
from contextpack.config.project_file import load_project_config, merge_filter_config
from contextpack.config.settings import Settings, settings as default_settings
from contextpack.core.exceptions import (
    BudgetTooLowError,
    ExtractionCancelledError,
    InvalidRootError,
    NoFilesMatchedError,
)
from contextpack.logging_setup import log_phase
from contextpack.services.budget import BudgetItem, TokenBudgetAllocator, priority_order
from contextpack.services.filter_pipeline import FilterPipeline
from contextpack.services.gitignore import GitIgnoreMatcher
from contextpack.services.rules import EcosystemRegistry
from contextpack.services.tokens import TiktokenCounter, TokenCounter
from contextpack.services.traversal import DirectoryWalker
from contextpack.services.types import (
    Candidate,
    ClassificationWarning,
    ExcludedFile,
    FilterStage,
    IncludedFile,
)

logger = logging.getLogger(__name__)


class ExtractionStatus(str, Enum):
    """Overall outcome of a run."""

    OK = "ok"
    NO_FILES_MATCHED = "no_files_matched"
    BUDGET_TOO_LOW = "budget_too_low"


class CancellationToken:
    """
    Cooperative cancellation for a run.

    Checked between files; never interrupts a file mid-classification and
    never fires once allocation has started.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._event = threading.Event()
        self.deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        self._event.set()

    @property
    def timed_out(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    @property
    def cancelled(self) -> bool:
        return self._event.is_set() or self.timed_out

    def raise_if_cancelled(self, processed: int) -> None:
        if self._event.is_set():
            raise ExtractionCancelledError(processed)
        if self.timed_out:
            raise ExtractionCancelledError(processed, reason="timed out")


@dataclass
class ExtractionResult:
    """Included and budget-excluded files with token accounting."""

    root: str
    status: ExtractionStatus
    included: list[IncludedFile] = field(default_factory=list)
    excluded: list[ExcludedFile] = field(default_factory=list)
    token_count: int = 0  # Sum of included costs
    total_tokens: int = 0  # Sum over every file that passed filtering
    max_tokens: int = 0
    files_scanned: int = 0
    filtered_out: dict[str, int] = field(default_factory=dict)  # Rejections per stage
    warnings: list[ClassificationWarning] = field(default_factory=list)

    @property
    def excluded_count(self) -> int:
        return len(self.excluded)

    @property
    def ok(self) -> bool:
        return self.status is ExtractionStatus.OK

    def raise_for_status(self) -> None:
        """
        Raise the matching error for an unsuccessful run.

        Raises:
            NoFilesMatchedError: nothing passed filtering
            BudgetTooLowError: files passed filtering but none fits the budget
        """
        if self.status is ExtractionStatus.NO_FILES_MATCHED:
            raise NoFilesMatchedError()
        if self.status is ExtractionStatus.BUDGET_TOO_LOW:
            smallest = min((f.tokens for f in self.excluded), default=0)
            raise BudgetTooLowError(self.max_tokens, smallest)

    def to_dict(self) -> dict[str, Any]:
        """Plain-data view for formatters and JSON output."""
        return {
            "root": self.root,
            "status": self.status.value,
            "included": [
                {"path": f.path, "tokens": f.tokens, "score": f.score, "content": f.content}
                for f in self.included
            ],
            "excluded": [
                {"path": f.path, "tokens": f.tokens, "reason": f.reason} for f in self.excluded
            ],
            "token_count": self.token_count,
            "total_tokens": self.total_tokens,
            "max_tokens": self.max_tokens,
            "excluded_count": self.excluded_count,
            "files_scanned": self.files_scanned,
            "filtered_out": dict(self.filtered_out),
            "warnings": [
                {"path": w.path, "stage": w.stage, "message": w.message} for w in self.warnings
            ],
        }


@dataclass
class _Outcome:
    """Per-file classification result produced by a worker."""

    candidate: Candidate
    selected: bool
    stage: FilterStage | None = None
    reason: str = ""
    tokens: int = 0
    score: int | None = None
    warning: ClassificationWarning | None = None


class Extractor:
    """
    Select the files of a directory for language-model context.

    Usage:
        extractor = Extractor(FilterConfig(relevance_keywords="auth", token_budget=8000))
        result = extractor.extract("path/to/repo")
        result.raise_for_status()
    """

    def __init__(
        self,
        config: FilterConfig | None = None,
        token_counter: TokenCounter | None = None,
        gitignore: GitIgnoreMatcher | None = None,
        registry: EcosystemRegistry | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.config = config or FilterConfig()
        self.settings = settings or default_settings
        self.token_counter: TokenCounter = token_counter or TiktokenCounter(self.settings.token_encoding)
        self.gitignore = gitignore
        self.registry = registry

    @staticmethod
    def validate_root(root: str | Path) -> Path:
        """
        Resolve and check the extraction root.

        Raises:
            InvalidRootError: if the root does not exist or is not a directory
        """
        path = Path(root)
        try:
            resolved = path.resolve(strict=True)
        except FileNotFoundError as e:
            raise InvalidRootError(str(path), "does not exist") from e
        except OSError as e:
            raise InvalidRootError(str(path), str(e)) from e
        if not resolved.is_dir():
            raise InvalidRootError(str(path), "not a directory")
        return resolved

    def build_pipeline(self, root: Path) -> FilterPipeline:
        return FilterPipeline(
            root,
            self.config,
            gitignore=self.gitignore,
            registry=self.registry,
            settings=self.settings,
        )

    def _classify(
        self,
        pipeline: FilterPipeline,
        candidate: Candidate,
        cancel_token: CancellationToken | None,
    ) -> _Outcome | None:
        if cancel_token is not None and cancel_token.cancelled:
            return None

        decision = pipeline.evaluate(candidate.relative_path)
        if not decision.selected:
            return _Outcome(candidate, False, decision.stage, decision.reason)

        try:
            content = candidate.load_content()
        except OSError as e:
            warning = ClassificationWarning(candidate.relative_path, "read", str(e))
            return _Outcome(candidate, False, None, "unreadable", warning=warning)

        score: int | None = None
        if pipeline.relevance_enabled:
            scored = pipeline.score(candidate)
            if not pipeline.passes_relevance(scored):
                candidate.release_content()
                return _Outcome(candidate, False, FilterStage.RELEVANCE, FilterStage.RELEVANCE.value)
            score = scored.score if scored is not None else None

        tokens = self.token_counter.count(content)
        return _Outcome(candidate, True, tokens=tokens, score=score)

    def _classify_all(
        self,
        pipeline: FilterPipeline,
        candidates: list[Candidate],
        cancel_token: CancellationToken | None,
    ) -> list[_Outcome]:
        outcomes: list[_Outcome] = []
        workers = max(1, self.settings.max_workers)

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="contextpack") as pool:
            futures: list[Future] = [
                pool.submit(self._classify, pipeline, candidate, cancel_token)
                for candidate in candidates
            ]
            try:
                # Collected in submission order, not completion order
                for processed, future in enumerate(futures):
                    if cancel_token is not None:
                        cancel_token.raise_if_cancelled(processed)
                    outcome = future.result()
                    if outcome is None:
                        # Worker saw the token before we did
                        cancel_token.raise_if_cancelled(processed)
                        continue
                    outcomes.append(outcome)
            except ExtractionCancelledError:
                for future in futures:
                    future.cancel()
                raise

        return outcomes

    def extract(
        self,
        root: str | Path,
        cancel_token: CancellationToken | None = None,
        timeout: float | None = None,
    ) -> ExtractionResult:
        """
        Run traversal, filtering, scoring and allocation for a root.

        Args:
            root: Directory to extract from
            cancel_token: Optional token to stop the run between files
            timeout: Seconds before the run is cancelled (ignored when a
                token is given)

        Returns:
            ExtractionResult. An empty selection is reported through `status`,
            not raised; call `raise_for_status()` to turn it into an error.

        Raises:
            InvalidRootError: if the root is missing or not a directory
            ExtractionCancelledError: if cancelled before allocation began
        """
        root_path = self.validate_root(root)
        if cancel_token is None and timeout is not None:
            cancel_token = CancellationToken(timeout)

        logger.info(f"Extracting from {root_path}")

        with log_phase("Pipeline setup", logger):
            pipeline = self.build_pipeline(root_path)

        walker = DirectoryWalker(root_path, should_prune=pipeline.should_prune_directory)
        candidates: list[Candidate] = []
        with log_phase("Traversal", logger):
            for candidate in walker.walk():
                if cancel_token is not None:
                    cancel_token.raise_if_cancelled(len(candidates))
                candidates.append(candidate)

        with log_phase("Classification", logger):
            outcomes = self._classify_all(pipeline, candidates, cancel_token)

        warnings = list(walker.warnings)
        filtered_out: dict[str, int] = {}
        survivors: list[BudgetItem] = []
        for outcome in outcomes:
            if outcome.warning is not None:
                logger.warning(
                    f"Skipping {outcome.warning.path}: {outcome.warning.stage} failed "
                    f"({outcome.warning.message})"
                )
                warnings.append(outcome.warning)
            if outcome.selected:
                survivors.append(
                    BudgetItem(
                        path=outcome.candidate.relative_path,
                        tokens=outcome.tokens,
                        score=outcome.score,
                        payload=outcome.candidate,
                    )
                )
            else:
                filtered_out[outcome.reason] = filtered_out.get(outcome.reason, 0) + 1

        # Last cancellation point: allocation always sees the full list
        if cancel_token is not None:
            cancel_token.raise_if_cancelled(len(outcomes))

        result = ExtractionResult(
            root=str(root_path),
            status=ExtractionStatus.OK,
            max_tokens=self.config.token_budget,
            files_scanned=len(candidates),
            filtered_out=filtered_out,
            warnings=warnings,
        )

        if not survivors:
            logger.info(f"No files matched in {root_path} ({len(candidates)} scanned)")
            result.status = ExtractionStatus.NO_FILES_MATCHED
            return result

        ordered = priority_order(
            survivors,
            relevance_active=pipeline.relevance_enabled,
            entry_point_boost=self.config.entry_point_boost,
        )
        with log_phase("Allocation", logger):
            budget = TokenBudgetAllocator(self.config.token_budget).allocate(ordered)

        for item in budget.included:
            candidate: Candidate = item.payload
            result.included.append(
                IncludedFile(
                    path=item.path,
                    content=candidate.load_content(),
                    tokens=item.tokens,
                    score=item.score,
                )
            )
        for item in budget.excluded:
            item.payload.release_content()
            result.excluded.append(ExcludedFile(path=item.path, tokens=item.tokens))

        result.token_count = budget.token_count
        result.total_tokens = budget.total_tokens
        if budget.budget_too_low:
            result.status = ExtractionStatus.BUDGET_TOO_LOW
            logger.info(
                f"Token budget {budget.max_tokens} too low: smallest file costs "
                f"{budget.smallest_excluded_cost} tokens"
            )

        logger.info(
            f"Selected {len(result.included)}/{len(candidates)} files "
            f"({result.token_count} tokens, {result.excluded_count} over budget)"
        )
        return result


def extract(
    root: str | Path,
    config: FilterConfig | None = None,
    *,
    use_project_file: bool = True,
    token_counter: TokenCounter | None = None,
    cancel_token: CancellationToken | None = None,
    timeout: float | None = None,
) -> ExtractionResult:
    """
    Convenience wrapper around Extractor.

    When no config is given and `use_project_file` is set, the root's
    `.contextpack.yml` (if any) supplies the filter settings.
    """
    if config is None and use_project_file:
        root_path = Extractor.validate_root(root)
        config = merge_filter_config(load_project_config(root_path))
    extractor = Extractor(config, token_counter=token_counter)
    return extractor.extract(root, cancel_token=cancel_token, timeout=timeout)
