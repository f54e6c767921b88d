"""
Tests for the default exclude rule set.

Tests cover:
- Rule order
- Settings thresholds flowing into the content rules
- Default pattern coverage
"""

from pathlib import Path

import pytest

from contextpack.config.settings import Settings
from contextpack.services.rules import (
    BinaryRule,
    EcosystemRegistry,
    GeneratedFileDetector,
    LockSignatureDetector,
    RuleKind,
    default_excludes,
    default_pattern_rule,
)


class TestDefaultExcludes:
    """Tests for default_excludes."""

    def test_rule_order(self, tmp_path: Path) -> None:
        """Patterns first, then lock signature, ecosystem, generated, binary."""
        rules = default_excludes(tmp_path, EcosystemRegistry())

        assert [r.kind for r in rules] == [
            RuleKind.PATTERN,
            RuleKind.LOCK_SIGNATURE,
            RuleKind.ECOSYSTEM_LOCK,
            RuleKind.GENERATED,
            RuleKind.BINARY,
        ]

    def test_settings_thresholds(self, tmp_path: Path) -> None:
        """Thresholds come from the supplied Settings."""
        custom = Settings(
            binary_size_limit=1234,
            generated_min_lines=7,
            lock_signature_scan_bytes=99,
        )

        rules = default_excludes(tmp_path, EcosystemRegistry(), custom)

        binary = next(r for r in rules if isinstance(r, BinaryRule))
        generated = next(r for r in rules if isinstance(r, GeneratedFileDetector))
        lock = next(r for r in rules if isinstance(r, LockSignatureDetector))
        assert binary.size_limit == 1234
        assert generated.min_lines == 7
        assert lock.scan_bytes == 99


class TestDefaultPatternRule:
    """Tests for the default pattern excludes."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.rule = default_pattern_rule()

    @pytest.mark.parametrize(
        "path",
        [
            ".git/config",
            "web/node_modules/react/index.js",
            "src/__pycache__/mod.cpython-312.pyc",
            ".venv/lib/site.py",
            "docs/.DS_Store",
            "notes.md.swp",
        ],
    )
    def test_noise_excluded(self, path: str) -> None:
        """VCS, dependency, cache and editor files are excluded."""
        assert self.rule.match(path) is True

    @pytest.mark.parametrize(
        "path",
        ["src/main.go", ".coveragerc", "builder/main.go", "README.md", ".gitignore"],
    )
    def test_source_kept(self, path: str) -> None:
        """Ordinary project files are not matched."""
        assert self.rule.match(path) is False
