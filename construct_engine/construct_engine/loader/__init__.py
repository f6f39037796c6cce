"""Project configuration and check file loading."""

from construct_engine.loader.check_loader import (
    CheckFileLoadError,
    discover_files,
    load_check_file,
    load_project,
)
from construct_engine.loader.config_loader import (
    CONFIG_FILE_NAME,
    ConfigLoadError,
    ProjectConfig,
    load_project_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "CheckFileLoadError",
    "ConfigLoadError",
    "ProjectConfig",
    "discover_files",
    "load_check_file",
    "load_project",
    "load_project_config",
]
