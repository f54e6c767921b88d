"""
Rules package for file classification.

Module structure:
- types.py: RuleAction, RuleKind and the Rule base
- pattern.py / extension.py: path-only predicates
- binary.py: extension, size and content-sample binary detection
- ecosystem.py: manifest scan registry and ecosystem-aware lock detection
- generated.py: generated-marker, low-entropy and lock-signature heuristics
- defaults.py: the default exclude set
- constants.py: curated tables
"""

from contextpack.services.rules.binary import BinaryRule, looks_binary
from contextpack.services.rules.defaults import default_excludes, default_pattern_rule
from contextpack.services.rules.ecosystem import EcosystemLockDetector, EcosystemRegistry
from contextpack.services.rules.extension import ExtensionRule, path_extension
from contextpack.services.rules.generated import (
    GeneratedFileDetector,
    LockSignatureDetector,
    has_generated_markers,
    has_lock_header,
    has_lock_signatures,
    has_low_entropy,
    normalize_line,
)
from contextpack.services.rules.pattern import PatternRule
from contextpack.services.rules.types import Rule, RuleAction, RuleKind

__all__ = [
    # Types
    "Rule",
    "RuleAction",
    "RuleKind",
    # Leaf rules
    "PatternRule",
    "ExtensionRule",
    "BinaryRule",
    # Context-aware rules
    "EcosystemRegistry",
    "EcosystemLockDetector",
    "GeneratedFileDetector",
    "LockSignatureDetector",
    # Rule sets
    "default_excludes",
    "default_pattern_rule",
    # Utilities
    "looks_binary",
    "path_extension",
    "has_generated_markers",
    "has_low_entropy",
    "has_lock_signatures",
    "has_lock_header",
    "normalize_line",
]
