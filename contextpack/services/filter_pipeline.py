"""
FilterPipeline - staged accept/reject decisions for candidate files.

Stages run in a fixed order and each can be switched off by FilterConfig:

1. .gitignore patterns
2. Default exclude rules (patterns, lock signature, ecosystem locks,
   generated heuristics, binary detection)
3. User exclude patterns
4. Extension allow-list
5. Relevance gate (needs file content, so it runs last and only for files
   that survived 1-4)

Exclusion stages always run before the allow-list, so an excluded path is
never brought back by a bare extension match.
"""

import logging
from pathlib import Path

from contextpack.config.filter_config import FilterConfig
from contextpack.config.settings import Settings, settings as default_settings
from contextpack.services.gitignore import GitIgnoreMatcher, NullGitIgnore, PathSpecGitIgnore
from contextpack.services.relevance.scorer import RelevanceScorer
from contextpack.services.rules import (
    EcosystemRegistry,
    ExtensionRule,
    PatternRule,
    Rule,
    RuleAction,
    default_excludes,
)
from contextpack.services.types import Candidate, FilterDecision, FilterStage, ScoredFile

logger = logging.getLogger(__name__)


class FilterPipeline:
    """
    Decide which files under a root are selected.

    Built once per extraction run. The rule tuple and ecosystem registry are
    read-only after construction, so `evaluate` is safe to call from worker
    threads.
    """

    def __init__(
        self,
        root: str | Path,
        config: FilterConfig,
        gitignore: GitIgnoreMatcher | None = None,
        registry: EcosystemRegistry | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.root = Path(root)
        self.config = config
        self.settings = settings or default_settings

        if gitignore is not None:
            self.gitignore: GitIgnoreMatcher = gitignore
        elif config.use_gitignore:
            self.gitignore = PathSpecGitIgnore.from_root(self.root)
        else:
            self.gitignore = NullGitIgnore()

        self.default_rules: tuple[Rule, ...] = ()
        self.registry: EcosystemRegistry | None = None
        if config.use_default_rules:
            self.registry = registry if registry is not None else EcosystemRegistry.scan(self.root)
            self.default_rules = default_excludes(self.root, self.registry, self.settings)

        self.user_excludes: PatternRule | None = (
            PatternRule(config.exclude_patterns, RuleAction.EXCLUDE)
            if config.exclude_patterns
            else None
        )
        self.allowed_extensions: ExtensionRule | None = (
            ExtensionRule(config.include_extensions, RuleAction.INCLUDE)
            if config.include_extensions
            else None
        )
        self.scorer: RelevanceScorer | None = (
            RelevanceScorer(config.relevance_keywords) if config.relevance_enabled else None
        )

        self._prune_rules = tuple(
            PatternRule(rule.directory_patterns(), RuleAction.EXCLUDE)
            for rule in (*self.default_rules, self.user_excludes)
            if isinstance(rule, PatternRule) and rule.directory_patterns()
        )

        logger.debug(
            f"FilterPipeline ready: gitignore={config.use_gitignore}, "
            f"default_rules={len(self.default_rules)}, "
            f"user_excludes={len(config.exclude_patterns)}, "
            f"extensions={sorted(config.include_extensions or [])}, "
            f"keywords={list(config.relevance_keywords)}"
        )

    @property
    def relevance_enabled(self) -> bool:
        return self.scorer is not None

    def evaluate(self, relative_path: str) -> FilterDecision:
        """Run stages 1-4 for one root-relative path."""
        if self.config.use_gitignore and self.gitignore.match(relative_path):
            return FilterDecision(False, FilterStage.GITIGNORE)

        for rule in self.default_rules:
            if rule.action is RuleAction.EXCLUDE and rule.match(relative_path):
                logger.debug(
                    f"Excluded {relative_path} by {rule.describe()} (confidence {rule.confidence:.2f})"
                )
                return FilterDecision(False, FilterStage.DEFAULT_RULES, rule.kind)

        if self.user_excludes is not None and self.user_excludes.match(relative_path):
            return FilterDecision(False, FilterStage.USER_EXCLUDE)

        if self.allowed_extensions is not None and not self.allowed_extensions.match(relative_path):
            return FilterDecision(False, FilterStage.EXTENSION)

        return FilterDecision(True)

    def should_process(self, relative_path: str) -> bool:
        """Shorthand for `evaluate(path).selected`."""
        return self.evaluate(relative_path).selected

    def should_prune_directory(self, relative_dir: str) -> bool:
        """
        Check if a whole directory can be skipped during traversal.

        Only directory-shaped rules are consulted (gitignore, and pattern
        rules ending in "/"), so pruning never drops a file that `evaluate`
        would have selected.
        """
        rel = relative_dir.replace("\\", "/").rstrip("/")
        if not rel:
            return False
        if self.config.use_gitignore:
            match_directory = getattr(self.gitignore, "match_directory", None)
            if match_directory is not None and match_directory(rel):
                return True
        dir_path = f"{rel}/"
        return any(rule.match(dir_path) for rule in self._prune_rules)

    def score(self, candidate: Candidate) -> ScoredFile | None:
        """
        Stage 5: score a candidate that passed stages 1-4.

        Returns None when relevance is inactive.
        """
        if self.scorer is None:
            return None
        return self.scorer.score(candidate)

    def passes_relevance(self, scored: ScoredFile | None) -> bool:
        """A file qualifies when relevance is off or its score is positive."""
        if self.scorer is None:
            return True
        return scored is not None and scored.score > 0
