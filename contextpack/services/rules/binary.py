"""Binary file rule."""

import posixpath
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from contextpack.services.rules.constants import (
    BINARY_EXTENSIONS,
    BINARY_NON_PRINTABLE_RATIO,
    BINARY_SAMPLE_SIZE,
    BINARY_SIZE_LIMIT,
)
from contextpack.services.rules.sampling import file_size, read_head, resolve
from contextpack.services.rules.types import Rule, RuleAction, RuleKind


def is_non_printable(byte: int) -> bool:
    """Bytes outside printable ASCII and the common control characters (\\a-\\r)."""
    return byte < 7 or 13 < byte < 32 or byte > 126


def looks_binary(sample: bytes, ratio: float = BINARY_NON_PRINTABLE_RATIO) -> bool:
    """Classify a content sample: any NUL, or too many non-printable bytes."""
    if not sample:
        return False
    if b"\x00" in sample:
        return True
    non_printable = sum(1 for b in sample if is_non_printable(b))
    return non_printable / len(sample) > ratio


@dataclass(frozen=True)
class BinaryRule(Rule):
    """
    Detect binary files, cheapest check first.

    1. Extension lookup against the curated set (no I/O)
    2. Size: above `size_limit` is binary, empty is not
    3. Content sample: NUL byte or non-printable ratio above threshold

    Any I/O failure is treated as "not binary".
    """

    kind: ClassVar[RuleKind] = RuleKind.BINARY
    confidence: ClassVar[float] = 0.9

    root: str | Path = ""
    size_limit: int = BINARY_SIZE_LIMIT
    sample_size: int = BINARY_SAMPLE_SIZE
    non_printable_ratio: float = BINARY_NON_PRINTABLE_RATIO
    action: RuleAction = RuleAction.EXCLUDE

    def match(self, path: str) -> bool:
        ext = posixpath.splitext(path.replace("\\", "/"))[1].lower()
        if ext and ext in BINARY_EXTENSIONS:
            return True

        full_path = resolve(self.root, path)
        size = file_size(full_path)
        if size is None or size == 0:
            return False
        if size > self.size_limit:
            return True

        sample = read_head(full_path, self.sample_size)
        if sample is None:
            return False
        return looks_binary(sample, self.non_printable_ratio)
