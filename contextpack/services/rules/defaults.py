"""
Default exclude rule set.

Rules are ordered cheapest and most confident first; any single match
excludes the file.
"""

from pathlib import Path

from contextpack.config.settings import Settings, settings as default_settings
from contextpack.services.rules.binary import BinaryRule
from contextpack.services.rules.constants import DEFAULT_IGNORE_DIRS, DEFAULT_IGNORE_FILES
from contextpack.services.rules.ecosystem import EcosystemLockDetector, EcosystemRegistry
from contextpack.services.rules.generated import GeneratedFileDetector, LockSignatureDetector
from contextpack.services.rules.pattern import PatternRule
from contextpack.services.rules.types import Rule, RuleAction


def default_pattern_rule() -> PatternRule:
    """Pattern rule covering dependency/build directories and noise files."""
    return PatternRule(tuple(DEFAULT_IGNORE_DIRS + DEFAULT_IGNORE_FILES), RuleAction.EXCLUDE)


def default_excludes(
    root: str | Path,
    registry: EcosystemRegistry,
    settings: Settings | None = None,
) -> tuple[Rule, ...]:
    """
    Build the default exclude set for a root.

    Order: patterns → lock signature (~99%) → ecosystem lock (~95%) →
    generated heuristic (~85%) → binary detection.
    """
    cfg = settings or default_settings
    return (
        default_pattern_rule(),
        LockSignatureDetector(
            root=root,
            scan_bytes=cfg.lock_signature_scan_bytes,
        ),
        EcosystemLockDetector(registry=registry),
        GeneratedFileDetector(
            root=root,
            marker_scan_bytes=cfg.marker_scan_bytes,
            size_threshold=cfg.generated_size_threshold,
            min_lines=cfg.generated_min_lines,
            duplicate_threshold=cfg.generated_duplicate_ratio,
        ),
        BinaryRule(
            root=root,
            size_limit=cfg.binary_size_limit,
            sample_size=cfg.binary_sample_size,
            non_printable_ratio=cfg.binary_non_printable_ratio,
        ),
    )
