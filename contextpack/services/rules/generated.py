"""
Heuristic detection of generated files and lock files.

Two independent detectors:

- GeneratedFileDetector: generated-code markers anywhere in the file head,
  plus a low-entropy check (highly repetitive normalized lines) for files
  below a size threshold.
- LockSignatureDetector: basename mentions "lock" and the content carries
  lock-file signature tokens or a header comment claiming to be a lockfile.
  Works without any ecosystem context.
"""

import logging
import posixpath
import re
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from contextpack.services.rules.constants import (
    GENERATED_DUPLICATE_RATIO,
    GENERATED_MARKERS,
    GENERATED_MIN_LINE_LENGTH,
    GENERATED_MIN_LINES,
    GENERATED_SIZE_THRESHOLD,
    LOCK_SIGNATURE_SCAN_BYTES,
    LOCK_STRONG_SIGNATURES,
    LOCK_WEAK_SIGNATURES,
    MARKER_SCAN_BYTES,
)
from contextpack.services.rules.sampling import file_size, read_text, resolve
from contextpack.services.rules.types import Rule, RuleAction, RuleKind

logger = logging.getLogger(__name__)

# Order matters: strings first so versions/hashes inside them collapse too
_QUOTED_RE = re.compile(r"\"(?:[^\"\\]|\\.)*\"|'(?:[^'\\]|\\.)*'")
_VERSION_RE = re.compile(r"\bv?\d+(?:\.\d+)+(?:[-+][0-9A-Za-z.-]+)?\b")
_HASH_RE = re.compile(r"\b(?:sha\d+-)?[0-9a-fA-F]{16,}\b|\bsha\d+-[A-Za-z0-9+/]+=*")
_NUMBER_RE = re.compile(r"\b\d+\b")

# The comment has to be the claim itself: "# THIS IS A LOCKFILE",
# "// auto-generated lock file", "# yarn lockfile v1" or a bare "# lockfile"
_LOCK_HEADER_RE = re.compile(
    r"^\s*(?:#|//|;|/?\*+)\s*"
    r"(?:this\s+is\s+an?\s+(?:auto-?generated\s+)?lock\s?file\b"
    r"|(?:auto-?generated|yarn)\s+lock\s?file\b"
    r"|lock\s?file(?:\s+v\d+)?\s*$)",
    re.IGNORECASE | re.MULTILINE,
)
_LOCK_HEADER_LINES = 5

_LOCK_WEAK_RES = tuple(re.compile(sig, re.MULTILINE) for sig in LOCK_WEAK_SIGNATURES)


def has_generated_markers(text: str) -> bool:
    """Check a file head for known generated-code markers (case-insensitive)."""
    lowered = text.lower()
    return any(marker in lowered for marker in GENERATED_MARKERS)


def normalize_line(line: str) -> str:
    """
    Reduce a line to its structural pattern.

    Quoted strings, version numbers, hash-like sequences and bare numbers are
    replaced with placeholders so lines differing only in data compare equal.
    """
    line = _QUOTED_RE.sub("<STR>", line)
    line = _HASH_RE.sub("<HASH>", line)
    line = _VERSION_RE.sub("<VER>", line)
    line = _NUMBER_RE.sub("<NUM>", line)
    return line.strip()


def duplicate_ratio(text: str, min_line_length: int = GENERATED_MIN_LINE_LENGTH) -> tuple[float, int]:
    """
    Return (duplicate fraction, significant line count) over normalized lines.

    Lines shorter than `min_line_length` once stripped are ignored.
    """
    patterns = [
        normalize_line(line)
        for line in text.splitlines()
        if len(line.strip()) >= min_line_length
    ]
    if not patterns:
        return 0.0, 0
    unique = len(set(patterns))
    return 1.0 - unique / len(patterns), len(patterns)


def has_low_entropy(
    text: str,
    min_lines: int = GENERATED_MIN_LINES,
    threshold: float = GENERATED_DUPLICATE_RATIO,
) -> bool:
    """Check if content is dominated by structurally identical lines."""
    ratio, count = duplicate_ratio(text)
    return count >= min_lines and ratio >= threshold


def has_lock_signatures(
    text: str,
    strong: tuple[str, ...] = LOCK_STRONG_SIGNATURES,
    weak: tuple[re.Pattern[str], ...] = _LOCK_WEAK_RES,
) -> bool:
    """
    Check content for one strong or at least two weak lock-file signatures.

    Strong signatures are plain substrings; weak ones are compiled patterns
    for lock-file key syntax such as `"resolved": "` or `checksum = "`.
    """
    if any(sig in text for sig in strong):
        return True
    return sum(1 for sig in weak if sig.search(text)) >= 2


def has_lock_header(text: str) -> bool:
    """Check the first few lines for a comment claiming to be a lockfile."""
    head = "\n".join(text.splitlines()[:_LOCK_HEADER_LINES])
    return bool(_LOCK_HEADER_RE.search(head))


@dataclass(frozen=True)
class GeneratedFileDetector(Rule):
    """Exclude files that carry generated-code markers or look machine-written."""

    kind: ClassVar[RuleKind] = RuleKind.GENERATED
    confidence: ClassVar[float] = 0.85

    root: str | Path = ""
    marker_scan_bytes: int = MARKER_SCAN_BYTES
    size_threshold: int = GENERATED_SIZE_THRESHOLD
    min_lines: int = GENERATED_MIN_LINES
    duplicate_threshold: float = GENERATED_DUPLICATE_RATIO
    action: RuleAction = RuleAction.EXCLUDE

    def match(self, path: str) -> bool:
        full_path = resolve(self.root, path)
        size = file_size(full_path)
        if not size:
            return False

        head = read_text(full_path, self.marker_scan_bytes)
        if head is None:
            return False
        if has_generated_markers(head):
            logger.debug(f"Generated marker found: {path}")
            return True

        if size > self.size_threshold:
            return False

        text = head if size <= self.marker_scan_bytes else read_text(full_path)
        if text is None:
            return False
        if has_low_entropy(text, self.min_lines, self.duplicate_threshold):
            logger.debug(f"Low-entropy content, treating as generated: {path}")
            return True
        return False


@dataclass(frozen=True)
class LockSignatureDetector(Rule):
    """Exclude lock-like files by name plus content signature."""

    kind: ClassVar[RuleKind] = RuleKind.LOCK_SIGNATURE
    confidence: ClassVar[float] = 0.99

    root: str | Path = ""
    scan_bytes: int = LOCK_SIGNATURE_SCAN_BYTES
    action: RuleAction = RuleAction.EXCLUDE

    def match(self, path: str) -> bool:
        basename = posixpath.basename(path.replace("\\", "/"))
        if "lock" not in basename.lower():
            return False

        head = read_text(resolve(self.root, path), self.scan_bytes)
        if not head:
            return False
        if has_lock_signatures(head) or has_lock_header(head):
            logger.debug(f"Lock-file signature found: {path}")
            return True
        return False
