"""
Tests for BinaryRule.

Tests cover:
- Curated extensions match without any I/O
- Size limit and empty files
- NUL byte and non-printable ratio sampling
- Fail-open behavior for unreadable paths
"""

from pathlib import Path

import pytest

from contextpack.services.rules import BinaryRule, looks_binary
from contextpack.services.rules.constants import BINARY_EXTENSIONS


class TestBinaryExtensions:
    """Tests for the extension short-circuit."""

    @pytest.mark.parametrize("ext", sorted(BINARY_EXTENSIONS))
    def test_curated_extension_always_binary(self, ext: str) -> None:
        """Every curated extension matches even when the file does not exist."""
        rule = BinaryRule(root="/nonexistent-root")

        assert rule.match(f"assets/file{ext}") is True

    def test_extension_case_insensitive(self) -> None:
        """PNG and png are treated the same."""
        rule = BinaryRule(root="/nonexistent-root")

        assert rule.match("logo.PNG") is True


class TestBinaryContent:
    """Tests for size and content sampling."""

    def test_plain_text_not_binary(self, tmp_path: Path) -> None:
        """Ordinary source text is not binary."""
        (tmp_path / "main.go").write_text("package main\n\nfunc main() {}\n")
        rule = BinaryRule(root=tmp_path)

        assert rule.match("main.go") is False

    def test_nul_byte_is_binary(self, tmp_path: Path) -> None:
        """A single NUL in the sample marks the file binary."""
        (tmp_path / "blob").write_bytes(b"header\x00rest of file")
        rule = BinaryRule(root=tmp_path)

        assert rule.match("blob") is True

    def test_empty_file_not_binary(self, tmp_path: Path) -> None:
        """Empty files are text."""
        (tmp_path / "empty.txt").write_bytes(b"")
        rule = BinaryRule(root=tmp_path)

        assert rule.match("empty.txt") is False

    def test_over_size_limit_is_binary(self, tmp_path: Path) -> None:
        """Files larger than the limit are binary without inspection."""
        (tmp_path / "big.txt").write_text("a" * 200)
        rule = BinaryRule(root=tmp_path, size_limit=100)

        assert rule.match("big.txt") is True

    def test_at_size_limit_is_sampled(self, tmp_path: Path) -> None:
        """A text file exactly at the limit is still sampled and kept."""
        (tmp_path / "edge.txt").write_text("a" * 100)
        rule = BinaryRule(root=tmp_path, size_limit=100)

        assert rule.match("edge.txt") is False

    def test_non_printable_ratio(self, tmp_path: Path) -> None:
        """Too many control bytes mark a file binary."""
        (tmp_path / "noise.dat2").write_bytes(bytes([1, 2, 3, 4]) * 10 + b"text")
        rule = BinaryRule(root=tmp_path)

        assert rule.match("noise.dat2") is True

    def test_missing_file_fails_open(self, tmp_path: Path) -> None:
        """Unreadable files are reported as not binary."""
        rule = BinaryRule(root=tmp_path)

        assert rule.match("does/not/exist.txt") is False


class TestLooksBinary:
    """Tests for the sample classifier."""

    def test_ratio_threshold(self) -> None:
        """Exactly at the threshold is text; above it is binary."""
        # 3 non-printable bytes out of 10 = 0.30
        at_threshold = bytes([1, 2, 3]) + b"abcdefg"
        above = bytes([1, 2, 3, 4]) + b"abcdef"

        assert looks_binary(at_threshold, 0.30) is False
        assert looks_binary(above, 0.30) is True

    def test_whitespace_is_printable(self) -> None:
        """Tabs, newlines and carriage returns do not count against a file."""
        assert looks_binary(b"\t\n\r\x0b\x0c" * 20) is False

    def test_empty_sample(self) -> None:
        """An empty sample is not binary."""
        assert looks_binary(b"") is False
