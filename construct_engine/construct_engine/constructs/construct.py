"""Abstract base for every deployable construct."""

from __future__ import annotations

import abc
import logging
from typing import Any, ClassVar

from construct_engine.constructs.ref import Ref
from construct_engine.session import Session, resolve_session

logger = logging.getLogger(__name__)


class Construct(abc.ABC):
    """A declarative description of one remote resource.

    Subclasses set :attr:`type` and implement :meth:`synthesize`.  On
    construction the instance registers itself in the session's project,
    when the session carries one.
    """

    type: ClassVar[str]
    # Replaceable constructs overwrite an existing registry entry with the
    # same logical id instead of raising.
    replaceable: ClassVar[bool] = False

    def __init__(self, logical_id: str, *, session: Session | None = None) -> None:
        if not isinstance(logical_id, str) or not logical_id.strip():
            raise ValueError(f"{type(self).__name__} requires a non-empty logical id, got {logical_id!r}.")
        self.logical_id = logical_id
        self.session = resolve_session(session)
        if self.session.project is not None:
            self.session.project.add_construct(self)

    def ref(self) -> Ref:
        """Return a pending reference to this construct."""
        return Ref.from_id(self.logical_id)

    @abc.abstractmethod
    def synthesize(self) -> dict[str, Any]:
        """Return the plain, wire-ready payload for this construct."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(logical_id={self.logical_id!r})"
