"""Configuration package."""

from contextpack.config.filter_config import FilterConfig, parse_keywords, validate_pattern
from contextpack.config.project_file import (
    ProjectFileConfig,
    load_project_config,
    merge_filter_config,
)
from contextpack.config.settings import Settings, settings

__all__ = [
    "FilterConfig",
    "parse_keywords",
    "validate_pattern",
    "ProjectFileConfig",
    "load_project_config",
    "merge_filter_config",
    "Settings",
    "settings",
]
