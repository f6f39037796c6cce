"""Browser check construct: a Playwright script run in a real browser."""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar, cast

from pydantic import BaseModel, model_validator

from construct_engine.constructs.check import Check, CheckProps
from construct_engine.session import Session


class ScriptNotFoundError(Exception):
    """Raised when a browser check entrypoint does not exist on disk."""


class BrowserCheckCode(BaseModel):
    """Script source: inline ``content`` or an ``entrypoint`` file, not both."""

    content: str | None = None
    entrypoint: str | None = None

    @model_validator(mode="after")
    def exactly_one_source(self) -> BrowserCheckCode:
        if (self.content is None) == (self.entrypoint is None):
            raise ValueError("Browser check code needs exactly one of 'content' or 'entrypoint'.")
        return self


class BrowserCheckProps(CheckProps):
    code: BrowserCheckCode


class BrowserCheck(Check):
    """Runs a browser script on every check run.

    A relative ``entrypoint`` is resolved against the directory of the
    check file that declared the check (or the project root when the
    check was not declared in a file).  The script is read once, at
    construction time.
    """

    check_type: ClassVar[str] = "BROWSER"
    props_model: ClassVar[type[CheckProps]] = BrowserCheckProps

    def _configure(self, props: CheckProps, session: Session) -> None:
        props = cast(BrowserCheckProps, props)
        if props.code.content is not None:
            self.script = props.code.content
            self.script_path: Path | None = None
            return

        entrypoint = Path(props.code.entrypoint or "")
        if not entrypoint.is_absolute():
            base_dir = session.base_path
            if session.check_file_path:
                base_dir = (session.base_path / session.check_file_path).parent
            entrypoint = base_dir / entrypoint
        if not entrypoint.is_file():
            raise ScriptNotFoundError(f"Browser check entrypoint not found: {entrypoint}")
        self.script = entrypoint.read_text(encoding="utf-8")
        self.script_path = entrypoint

    def _type_payload(self) -> dict[str, Any]:
        return {
            "checkType": self.check_type,
            "script": self.script,
        }
