"""Core package: shared exceptions."""

from contextpack.core.exceptions import (
    BudgetTooLowError,
    ConfigFileError,
    ContextPackError,
    ExtractionCancelledError,
    InvalidPatternError,
    InvalidRootError,
    NoFilesMatchedError,
)

__all__ = [
    "ContextPackError",
    "InvalidRootError",
    "InvalidPatternError",
    "ConfigFileError",
    "NoFilesMatchedError",
    "BudgetTooLowError",
    "ExtractionCancelledError",
]
