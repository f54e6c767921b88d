"""
Filter configuration for one extraction run.

FilterConfig is immutable once constructed. Validation happens here so a bad
exclude pattern fails at configuration time, before any traversal starts.
"""

import fnmatch
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from contextpack.core.exceptions import InvalidPatternError

_KEYWORD_SPLIT_RE = re.compile(r"[,\s]+")


def validate_pattern(pattern: str) -> str:
    """
    Check that an exclude pattern can be used for matching.

    Raises:
        InvalidPatternError: if the pattern is empty or its glob part does
            not compile (unterminated or reversed character class, NUL byte)
    """
    if not pattern or not pattern.strip():
        raise InvalidPatternError(pattern, "pattern is empty")
    if "\x00" in pattern:
        raise InvalidPatternError(pattern, "pattern contains a NUL byte")

    # Only "*" patterns are matched as globs; anything else is a literal
    if "*" in pattern:
        # fnmatch treats a lone "[" as a literal; reject it like a strict glob would
        if pattern.count("[") > pattern.count("]"):
            raise InvalidPatternError(pattern, "unterminated character class")
        try:
            re.compile(fnmatch.translate(pattern))
        except re.error as e:
            raise InvalidPatternError(pattern, str(e)) from e

    return pattern


def normalize_extension(ext: str) -> str:
    """Normalize an extension to carry a leading dot."""
    ext = ext.strip()
    if not ext:
        return ext
    return ext if ext.startswith(".") else f".{ext}"


def parse_keywords(raw: str | list[str] | tuple[str, ...] | None) -> tuple[str, ...]:
    """
    Tokenize relevance keywords.

    Accepts a comma/space separated string or a list of such strings.
    Keywords are lower-cased and de-duplicated, keeping first-seen order.
    """
    if raw is None:
        return ()
    parts = [raw] if isinstance(raw, str) else list(raw)

    keywords: list[str] = []
    for part in parts:
        for token in _KEYWORD_SPLIT_RE.split(str(part)):
            token = token.strip().lower()
            if token:
                keywords.append(token)
    return tuple(dict.fromkeys(keywords))


class FilterConfig(BaseModel):
    """Selection settings for a single extraction run."""

    model_config = ConfigDict(frozen=True)

    # None means every extension is allowed
    include_extensions: frozenset[str] | None = None
    exclude_patterns: tuple[str, ...] = ()
    use_gitignore: bool = True
    use_default_rules: bool = True
    relevance_keywords: tuple[str, ...] = ()
    token_budget: int = Field(default=0, ge=0)  # 0 = unlimited
    # Move entry points (main.*, README*) to the front when relevance is off
    entry_point_boost: bool = True

    @field_validator("include_extensions", mode="before")
    @classmethod
    def _normalize_extensions(cls, value: Any) -> frozenset[str] | None:
        if value is None:
            return None
        if isinstance(value, str):
            value = [v for v in value.split(",")]
        normalized = {normalize_extension(str(v)) for v in value}
        normalized.discard("")
        return frozenset(normalized) or None

    @field_validator("exclude_patterns", mode="before")
    @classmethod
    def _validate_patterns(cls, value: Any) -> tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            value = [v for v in value.split(",") if v.strip()]
        return tuple(validate_pattern(str(p).strip()) for p in value)

    @field_validator("relevance_keywords", mode="before")
    @classmethod
    def _parse_keywords(cls, value: Any) -> tuple[str, ...]:
        return parse_keywords(value)

    @property
    def relevance_enabled(self) -> bool:
        """Check if relevance filtering is active."""
        return bool(self.relevance_keywords)

    @property
    def has_budget(self) -> bool:
        """Check if a token ceiling is configured."""
        return self.token_budget > 0
