"""Environment variable bindings attached to checks and groups."""

from __future__ import annotations

from pydantic import BaseModel, Field


class EnvironmentVariable(BaseModel):
    """A key/value pair exposed to the check runtime."""

    key: str = Field(..., min_length=1)
    value: str = ""
    locked: bool = Field(
        default=False,
        description="Locked variables are write-only once deployed.",
    )
