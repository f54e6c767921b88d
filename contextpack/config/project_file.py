"""
Per-project configuration file support.

A repository can carry a `.contextpack.yml` at its root:

    extensions: [".py", ".md"]
    excludes: ["docs/", "*.snap"]
    keywords: "auth, login"
    token_budget: 8000
    gitignore: true
    default_rules: true

Explicit overrides (e.g. from a caller or CLI) take precedence over the file;
exclude patterns from both sources are concatenated.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from contextpack.config.filter_config import FilterConfig
from contextpack.config.settings import settings
from contextpack.core.exceptions import ConfigFileError

logger = logging.getLogger(__name__)


class ProjectFileConfig(BaseModel):
    """Raw contents of a project config file. Every field is optional."""

    model_config = ConfigDict(extra="ignore")

    extensions: list[str] | None = None
    excludes: list[str] = []
    keywords: str | list[str] | None = None
    token_budget: int | None = None
    gitignore: bool | None = None
    default_rules: bool | None = None


def load_project_config(root: str | Path, filename: str | None = None) -> ProjectFileConfig:
    """
    Load the project config file from a root directory.

    A missing file yields an empty config.

    Raises:
        ConfigFileError: if the file exists but is not valid YAML or has the
            wrong shape
    """
    path = Path(root) / (filename or settings.project_config_filename)
    if not path.is_file():
        return ProjectFileConfig()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigFileError(str(path), str(e)) from e

    if data is None:
        return ProjectFileConfig()
    if not isinstance(data, dict):
        raise ConfigFileError(str(path), "top-level value must be a mapping")

    try:
        config = ProjectFileConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigFileError(str(path), str(e)) from e

    logger.debug(f"Loaded project config from {path}")
    return config


def merge_filter_config(
    project: ProjectFileConfig,
    *,
    include_extensions: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    relevance_keywords: str | list[str] | None = None,
    token_budget: int | None = None,
    use_gitignore: bool | None = None,
    use_default_rules: bool | None = None,
) -> FilterConfig:
    """
    Merge a project file config with explicit overrides into a FilterConfig.

    Raises:
        InvalidPatternError: if any merged exclude pattern is malformed
    """
    values: dict[str, Any] = {}

    extensions = include_extensions if include_extensions else project.extensions
    if extensions:
        values["include_extensions"] = extensions

    values["exclude_patterns"] = [*project.excludes, *(exclude_patterns or [])]

    keywords = relevance_keywords if relevance_keywords else project.keywords
    if keywords:
        values["relevance_keywords"] = keywords

    budget = token_budget if token_budget is not None else project.token_budget
    if budget is not None:
        values["token_budget"] = budget

    gitignore = use_gitignore if use_gitignore is not None else project.gitignore
    if gitignore is not None:
        values["use_gitignore"] = gitignore

    default_rules = use_default_rules if use_default_rules is not None else project.default_rules
    if default_rules is not None:
        values["use_default_rules"] = default_rules

    return FilterConfig(**values)
