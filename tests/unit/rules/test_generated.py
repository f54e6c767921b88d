"""
Tests for the generated-file and lock-signature heuristics.

Tests cover:
- Generated-code markers (Go, protobuf, @generated)
- Line normalization and low-entropy detection
- Size threshold for the entropy check
- Lock signatures (strong, weak pairs, header comments)
"""

from pathlib import Path

import pytest

from contextpack.services.rules import (
    GeneratedFileDetector,
    LockSignatureDetector,
    has_generated_markers,
    has_lock_header,
    has_lock_signatures,
    has_low_entropy,
    normalize_line,
)


class TestGeneratedMarkers:
    """Tests for marker detection."""

    @pytest.mark.parametrize(
        "header",
        [
            "// Code generated by foo; DO NOT EDIT.",
            "# @generated by some-tool",
            "// Generated by the protocol buffer compiler.  DO NOT EDIT!",
            "/* This file was generated automatically */",
            "<auto-generated>",
        ],
    )
    def test_known_markers(self, header: str) -> None:
        """Marker comparison is case-insensitive."""
        assert has_generated_markers(header + "\npackage x\n") is True

    def test_plain_source(self) -> None:
        """Hand-written code has no markers."""
        assert has_generated_markers("def handler(request):\n    return ok\n") is False


class TestNormalizeLine:
    """Tests for structural line normalization."""

    def test_quoted_strings(self) -> None:
        """Quoted strings collapse to a placeholder."""
        assert normalize_line('name = "alpha"') == normalize_line('name = "beta"')

    def test_versions_and_hashes(self) -> None:
        """Versions and long hex runs collapse."""
        a = normalize_line("pkg 1.2.3 deadbeefdeadbeefdeadbeef")
        b = normalize_line("pkg 10.0.1 0123456789abcdef0123")

        assert a == b
        assert "1.2.3" not in a
        assert "deadbeef" not in a

    def test_numbers(self) -> None:
        """Bare numbers collapse."""
        assert normalize_line("value = 123") == normalize_line("value = 456")


class TestLowEntropy:
    """Tests for the repetitive-content check."""

    def test_repetitive_content(self) -> None:
        """Sixty structurally identical lines are low entropy."""
        text = "\n".join(f"value = {i}" for i in range(60))

        assert has_low_entropy(text) is True

    def test_varied_content(self) -> None:
        """A handful of distinct lines is not."""
        text = "import os\n\ndef main():\n    print(os.getcwd())\n"

        assert has_low_entropy(text) is False

    def test_too_few_lines(self) -> None:
        """Repetition below the minimum line count is ignored."""
        text = "\n".join("value = 1" for _ in range(10))

        assert has_low_entropy(text) is False


class TestGeneratedFileDetector:
    """Tests for GeneratedFileDetector on disk."""

    def test_marker_file_excluded(self, tmp_path: Path) -> None:
        """A Go file with the standard header is generated."""
        (tmp_path / "api.pb.go").write_text("// Code generated by foo; DO NOT EDIT.\n\npackage api\n")
        detector = GeneratedFileDetector(root=tmp_path)

        assert detector.match("api.pb.go") is True

    def test_low_entropy_file_excluded(self, tmp_path: Path) -> None:
        """Repetitive data tables are treated as generated."""
        (tmp_path / "table.py").write_text("\n".join(f"value = {i}" for i in range(60)))
        detector = GeneratedFileDetector(root=tmp_path)

        assert detector.match("table.py") is True

    def test_entropy_check_skipped_above_threshold(self, tmp_path: Path) -> None:
        """Large files only get the marker check."""
        content = "\n".join(f"value = {i}" for i in range(60))
        (tmp_path / "table.py").write_text(content)
        detector = GeneratedFileDetector(root=tmp_path, size_threshold=10)

        assert detector.match("table.py") is False

    def test_source_file_kept(self, tmp_path: Path) -> None:
        """Ordinary source is not generated."""
        (tmp_path / "app.py").write_text("import os\n\nprint(os.getcwd())\n")
        detector = GeneratedFileDetector(root=tmp_path)

        assert detector.match("app.py") is False

    def test_missing_file_fails_open(self, tmp_path: Path) -> None:
        """Unreadable files are not generated."""
        assert GeneratedFileDetector(root=tmp_path).match("gone.go") is False


class TestLockSignatures:
    """Tests for lock signature content checks."""

    def test_strong_signature(self) -> None:
        """One strong signature is enough."""
        assert has_lock_signatures('{\n  "lockfileVersion": 3\n}') is True

    def test_two_weak_signatures(self) -> None:
        """Two weak signatures are enough; one is not."""
        assert has_lock_signatures('"resolved": "x",\n"integrity": "y"') is True
        assert has_lock_signatures('"resolved": "x"') is False

    @pytest.mark.parametrize(
        "text",
        [
            "// checksum of resolved ticks, verified for integrity\n",
            "# resolved: see integrity notes; checksum pending\n",
            "dependencies = resolve(graph)\nintegrity = check(graph)\n",
        ],
    )
    def test_prose_words_not_signatures(self, text: str) -> None:
        """Weak signature words only count in lock-file key syntax."""
        assert has_lock_signatures(text) is False

    def test_cargo_style_weak_pair(self) -> None:
        """A TOML package table with a checksum line is lock-like."""
        text = '[[package]]\nname = "serde"\nversion = "1.0.0"\nchecksum = "abc123"\n'

        assert has_lock_signatures(text) is True

    def test_header_comment(self) -> None:
        """A lockfile header in the first lines counts."""
        assert has_lock_header("# THIS IS A LOCKFILE\nfoo:\n  bar\n") is True
        assert has_lock_header("x\n" * 10 + "# lock file\n") is False

    @pytest.mark.parametrize(
        "header",
        ["# yarn lockfile v1", "// auto-generated lock file", "# This is an autogenerated lockfile", "# lockfile"],
    )
    def test_header_claims(self, header: str) -> None:
        """Comments that declare the file a lockfile count."""
        assert has_lock_header(header + "\nfoo:\n") is True

    @pytest.mark.parametrize(
        "header",
        [
            "# Parse a lock file and report outdated pins.",
            "// Lockfile parsing utilities.",
            "# see the lock file docs",
        ],
    )
    def test_header_mentions_ignored(self, header: str) -> None:
        """A comment that merely mentions lock files is not a claim."""
        assert has_lock_header(header + "\nimport os\n") is False


class TestLockSignatureDetector:
    """Tests for LockSignatureDetector on disk."""

    def test_yarn_lock_header(self, tmp_path: Path) -> None:
        """yarn.lock with a header comment is excluded without ecosystem context."""
        (tmp_path / "yarn.lock").write_text("# THIS IS A LOCKFILE\nleft-pad@1.0.0:\n  version 1.0.0\n")

        assert LockSignatureDetector(root=tmp_path).match("yarn.lock") is True

    def test_name_must_mention_lock(self, tmp_path: Path) -> None:
        """Lock-like content in a non-lock file name is kept."""
        (tmp_path / "package.json").write_text('{"lockfileVersion": 3}')

        assert LockSignatureDetector(root=tmp_path).match("package.json") is False

    def test_lock_name_without_signature(self, tmp_path: Path) -> None:
        """A file merely named like a lock (e.g. source) is kept."""
        (tmp_path / "lock.go").write_text("package sync\n\ntype Lock struct{}\n")

        assert LockSignatureDetector(root=tmp_path).match("lock.go") is False

    def test_lockfile_parser_source_kept(self, tmp_path: Path) -> None:
        """Hand-written source about lock files is not a lock file."""
        (tmp_path / "lockfile_parser.py").write_text(
            "# Parse a lock file and report outdated pins.\n\nimport json\n\n\ndef parse(path):\n    return json.load(open(path))\n"
        )

        assert LockSignatureDetector(root=tmp_path).match("lockfile_parser.py") is False

    def test_clock_source_kept(self, tmp_path: Path) -> None:
        """Words like checksum and integrity in comments are not signatures."""
        (tmp_path / "clock.go").write_text(
            "package clock\n\n// checksum of resolved ticks, verified for integrity\nfunc Tick() int { return 1 }\n"
        )

        assert LockSignatureDetector(root=tmp_path).match("clock.go") is False

    def test_npm_lock_weak_pair(self, tmp_path: Path) -> None:
        """A lock-named JSON file with resolved and integrity keys is excluded."""
        (tmp_path / "deps.lock").write_text(
            '{\n  "left-pad": {\n    "resolved": "https://registry.example/left-pad.tgz",\n'
            '    "integrity": "sha512-abc"\n  }\n}\n'
        )

        assert LockSignatureDetector(root=tmp_path).match("deps.lock") is True
