"""Exceptions raised by the content selection engine."""


class ContextPackError(Exception):
    """Base error for all extraction failures."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidRootError(ContextPackError):
    """Root path is missing or is not a directory.

    Raised before traversal starts; no partial result is produced.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid root directory '{path}': {reason}")


class InvalidPatternError(ContextPackError):
    """A user-supplied exclude pattern cannot be compiled."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern '{pattern}': {reason}")


class ConfigFileError(ContextPackError):
    """The per-project config file exists but cannot be parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load config file {path}: {reason}")


class NoFilesMatchedError(ContextPackError):
    """Every candidate was rejected by the filtering stages."""

    def __init__(self, message: str = "No files matched the filter criteria"):
        super().__init__(message)


class BudgetTooLowError(ContextPackError):
    """Files passed filtering, but none fits inside the token budget."""

    def __init__(self, max_tokens: int, smallest_cost: int):
        self.max_tokens = max_tokens
        self.smallest_cost = smallest_cost
        super().__init__(
            f"Token budget {max_tokens} is too low: smallest candidate costs "
            f"{smallest_cost} tokens"
        )


class ExtractionCancelledError(ContextPackError):
    """The run was cancelled or timed out before allocation started."""

    def __init__(self, processed: int, reason: str = "cancelled"):
        self.processed = processed
        self.reason = reason
        super().__init__(f"Extraction {reason} after {processed} files")
