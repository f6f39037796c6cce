"""Load the project configuration file (``checkplane.toml``).

Typical file::

    [project]
    name = "Advanced Example Project"
    logical_id = "advanced-example-project"
    repo_url = "https://github.com/acme/monitoring"

    [checks]
    locations = ["us-east-1", "eu-west-1"]
    tags = ["mac"]
    runtime_id = "2022.10"
    check_match = "**/*.check.py"

    [checks.browser_checks]
    test_match = "**/__checks__/*.spec.js"

    [cli]
    run_location = "eu-west-1"

Every ``[checks]`` key other than ``check_match`` and ``browser_checks``
is a check default and is merged into each check at construction time.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator

from construct_engine.constructs.check import CheckConfigDefaults

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "checkplane.toml"
DEFAULT_CHECK_MATCH = "**/*.check.py"


class ConfigLoadError(Exception):
    """Raised when the project configuration is missing or invalid."""


class ProjectSection(BaseModel):
    name: str = Field(..., min_length=1)
    logical_id: str = Field(..., min_length=1)
    repo_url: str | None = None


class BrowserChecksConfig(BaseModel):
    test_match: str | None = Field(
        default=None,
        description="Glob of script files that become browser checks automatically.",
    )


class ChecksConfig(BaseModel):
    check_match: str = DEFAULT_CHECK_MATCH
    browser_checks: BrowserChecksConfig = Field(default_factory=BrowserChecksConfig)
    defaults: CheckConfigDefaults = Field(default_factory=CheckConfigDefaults)

    @model_validator(mode="before")
    @classmethod
    def split_defaults(cls, data: Any) -> Any:
        # Everything that is not a loader setting is a check default.
        if not isinstance(data, dict) or "defaults" in data:
            return data
        loader_keys = {"check_match", "browser_checks"}
        result = {k: v for k, v in data.items() if k in loader_keys}
        result["defaults"] = {k: v for k, v in data.items() if k not in loader_keys}
        return result


class CliConfig(BaseModel):
    # Accepted so existing project files validate; no command reads it until
    # checks can be run remotely from the CLI.
    run_location: str | None = None


class ProjectConfig(BaseModel):
    project: ProjectSection
    checks: ChecksConfig = Field(default_factory=ChecksConfig)
    cli: CliConfig = Field(default_factory=CliConfig)


def find_config_file(path: Path) -> Path:
    """Return the config file for *path*, which may be the file or its directory."""
    if path.is_dir():
        return path / CONFIG_FILE_NAME
    return path


def load_project_config(path: Path) -> ProjectConfig:
    """Parse and validate the project configuration.

    Parameters
    ----------
    path:
        The project directory or the config file itself.

    Raises
    ------
    ConfigLoadError
        If the file is missing, is not valid TOML, or fails validation.
    """
    config_file = find_config_file(path)
    if not config_file.is_file():
        raise ConfigLoadError(f"Project configuration not found: '{config_file}'")

    try:
        with open(config_file, "rb") as fh:
            raw = tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise ConfigLoadError(f"Failed to read '{config_file}': {exc}") from exc

    try:
        config = ProjectConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigLoadError(f"Invalid project configuration in '{config_file}':\n{exc}") from exc

    logger.info("Loaded project configuration for %s", config.project.logical_id)
    return config
