"""Read-only context shared by every construct built during one invocation.

A :class:`Session` carries the project-wide check defaults, the path of
the check file currently being evaluated and the project registry that
constructs add themselves to.  Constructs receive it explicitly through
their ``session=`` argument.

User-authored ``*.check.py`` files cannot be handed a session, so the
loader activates one for the duration of each file::

    with activate_session(session.for_file("checks/home.check.py")):
        runpy.run_path(...)

Constructs built without an explicit session pick up the active one.
The scope ends with the ``with`` block, so nothing leaks from one
invocation into the next.
"""

from __future__ import annotations

import contextvars
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from construct_engine.constructs.check import CheckConfigDefaults
    from construct_engine.constructs.project import Project

logger = logging.getLogger(__name__)

_active_session: contextvars.ContextVar[Session | None] = contextvars.ContextVar(
    "checkplane_active_session",
    default=None,
)


class NoActiveSessionError(Exception):
    """Raised when a construct is built with no explicit or active session."""


@dataclass(frozen=True)
class Session:
    """Configuration context for construct construction."""

    check_defaults: CheckConfigDefaults | None = None
    check_file_path: str | None = None
    project: Project | None = None
    base_path: Path = field(default_factory=Path.cwd)

    def for_file(self, check_file_path: str | None) -> Session:
        """Return a copy of this session bound to another check file."""
        return replace(self, check_file_path=check_file_path)


def current_session() -> Session:
    """Return the active session, raising if none has been activated."""
    session = _active_session.get()
    if session is None:
        raise NoActiveSessionError(
            "No session is active. Pass session= to the construct or build it "
            "inside activate_session()."
        )
    return session


def resolve_session(session: Session | None) -> Session:
    """Prefer the explicitly injected session, fall back to the active one."""
    if session is not None:
        return session
    return current_session()


@contextmanager
def activate_session(session: Session) -> Iterator[Session]:
    """Make *session* the active session for the enclosed block."""
    token = _active_session.set(session)
    logger.debug("Activated session for check file %s", session.check_file_path)
    try:
        yield session
    finally:
        _active_session.reset(token)
