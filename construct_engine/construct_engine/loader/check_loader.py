"""Evaluate check files and collect their constructs into a project.

Check files are plain Python modules matching ``checks.check_match``
(``**/*.check.py`` by default).  Each one is executed with a session
bound to its project-relative path, so constructs it declares pick up
the project defaults and record which file they came from::

    config = load_project_config(Path("."))
    project = load_project(Path("."), config)
    document = project.synthesize()
"""

from __future__ import annotations

import logging
import runpy
from pathlib import Path

from construct_engine.constructs.browser_check import BrowserCheck, BrowserCheckCode
from construct_engine.constructs.project import Project
from construct_engine.loader.config_loader import ProjectConfig
from construct_engine.session import Session, activate_session

logger = logging.getLogger(__name__)

_SKIPPED_DIRS: frozenset[str] = frozenset({"node_modules", "__pycache__", ".git", ".venv", "venv"})


class CheckFileLoadError(Exception):
    """Raised when a check file fails to evaluate."""

    def __init__(self, file_path: str, cause: BaseException) -> None:
        self.file_path = file_path
        super().__init__(f"Error loading check file '{file_path}': {cause}")


def discover_files(base_path: Path, pattern: str) -> list[Path]:
    """Return files under *base_path* matching *pattern*, sorted by path."""
    matches = []
    for path in base_path.glob(pattern):
        if not path.is_file():
            continue
        if any(part in _SKIPPED_DIRS for part in path.relative_to(base_path).parts):
            continue
        matches.append(path)
    return sorted(matches)


def load_check_file(path: Path, session: Session) -> None:
    """Execute one check file inside *session*.

    Raises
    ------
    CheckFileLoadError
        If the file raises anything while being evaluated.
    """
    display_path = session.check_file_path or str(path)
    with activate_session(session):
        try:
            runpy.run_path(str(path), run_name="__checkplane__")
        except Exception as exc:
            raise CheckFileLoadError(display_path, exc) from exc
    logger.debug("Loaded check file %s", display_path)


def load_project(base_path: Path, config: ProjectConfig) -> Project:
    """Build the project described by *config* from the files under *base_path*."""
    base_path = base_path.resolve()
    project = Project(
        config.project.logical_id,
        name=config.project.name,
        repo_url=config.project.repo_url,
    )
    session = Session(
        check_defaults=config.checks.defaults,
        project=project,
        base_path=base_path,
    )

    check_files = discover_files(base_path, config.checks.check_match)
    for path in check_files:
        relative = path.relative_to(base_path).as_posix()
        load_check_file(path, session.for_file(relative))

    test_match = config.checks.browser_checks.test_match
    browser_files = discover_files(base_path, test_match) if test_match else []
    for path in browser_files:
        relative = path.relative_to(base_path).as_posix()
        BrowserCheck(
            relative,
            name=path.name,
            code=BrowserCheckCode(entrypoint=str(path)),
            session=session.for_file(relative),
        )

    logger.info(
        "Loaded %d check file(s) and %d browser script(s) into project %s",
        len(check_files),
        len(browser_files),
        project.logical_id,
    )
    return project
