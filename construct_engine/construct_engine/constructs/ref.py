"""Deferred references between constructs.

A :class:`Ref` points at another construct by logical id.  It is created
at construction time and stays *pending* until the project resolution
pass (:meth:`~construct_engine.constructs.project.Project.resolve`)
checks that the target exists and turns it into the wire token
``{"ref": "<logicalId>"}``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class UnresolvedRefError(Exception):
    """Raised when a :class:`Ref` names a construct that is not registered."""


@dataclass(frozen=True)
class Ref:
    """A pending reference to a construct's logical id."""

    logical_id: str

    def __post_init__(self) -> None:
        if not isinstance(self.logical_id, str) or not self.logical_id:
            raise ValueError("Ref requires a non-empty logical id.")

    @classmethod
    def from_id(cls, logical_id: str) -> Ref:
        return cls(logical_id)

    def to_wire(self) -> dict[str, Any]:
        """Return the token the deploy endpoint expects for this reference."""
        return {"ref": self.logical_id}

    def __str__(self) -> str:
        return f"Ref({self.logical_id})"
