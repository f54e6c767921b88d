"""
contextpack - select the files of a codebase for language-model context.

Package structure:
- config/: FilterConfig, engine Settings, project config file loading
- core/: Exception hierarchy
- services/: Traversal, rules, filter pipeline, relevance, budget, extractor
- logging_setup.py: Logging configuration helpers
"""

from contextpack.config import FilterConfig, Settings, settings
from contextpack.core import (
    BudgetTooLowError,
    ConfigFileError,
    ContextPackError,
    ExtractionCancelledError,
    InvalidPatternError,
    InvalidRootError,
    NoFilesMatchedError,
)
from contextpack.logging_setup import setup_logging
from contextpack.services import (
    CancellationToken,
    ExtractionResult,
    ExtractionStatus,
    Extractor,
    extract,
)

__version__ = "0.1.0"

__all__ = [
    "FilterConfig",
    "Settings",
    "settings",
    "Extractor",
    "ExtractionResult",
    "ExtractionStatus",
    "CancellationToken",
    "extract",
    "setup_logging",
    # Errors
    "ContextPackError",
    "InvalidRootError",
    "InvalidPatternError",
    "ConfigFileError",
    "NoFilesMatchedError",
    "BudgetTooLowError",
    "ExtractionCancelledError",
]
