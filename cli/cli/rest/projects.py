"""Client for the ``projects`` resource.

Each operation builds one path and delegates to the transport; nothing is
validated, retried or cached here, and transport errors propagate as-is.
``deploy`` is the boundary where the whole synthesized construct graph
becomes a single remote operation.
"""

from __future__ import annotations

from typing import Any, Protocol
from urllib.parse import quote

import httpx

from construct_engine.config import DEFAULT_API_VERSION

PATH = "projects"


class ApiTransport(Protocol):
    """The verbs :class:`Projects` needs from its transport."""

    def get(self, path: str) -> httpx.Response: ...

    def post(self, path: str, body: Any = None) -> httpx.Response: ...

    def delete(self, path: str) -> httpx.Response: ...


def _flag(value: bool) -> str:
    """Render a boolean as the literal ``true``/``false`` the API expects."""
    return "true" if value else "false"


class Projects:
    """``/<api_version>/projects`` operations."""

    def __init__(self, api: ApiTransport, api_version: str = DEFAULT_API_VERSION) -> None:
        self.api = api
        self.api_version = api_version

    @property
    def _collection_path(self) -> str:
        return f"/{self.api_version}/{PATH}"

    def get_all(self) -> httpx.Response:
        return self.api.get(self._collection_path)

    def create(self, project: dict[str, Any]) -> httpx.Response:
        return self.api.post(self._collection_path, project)

    def delete(self, project_id: str) -> httpx.Response:
        # newSync is not configurable for deletes. The id is a single path segment.
        return self.api.delete(f"{self._collection_path}/{quote(project_id, safe='')}?newSync=true")

    def deploy(
        self,
        resources: dict[str, Any] | list[dict[str, Any]],
        *,
        dry_run: bool = False,
        new_sync: bool = True,
    ) -> httpx.Response:
        """POST the synthesized project to the deploy endpoint.

        Parameters
        ----------
        resources:
            The synthesized document, sent as the request body unmodified.
        dry_run:
            Ask the server to compute the change set without applying it.
        new_sync:
            Use the server's newer synchronisation engine.
        """
        path = f"{self._collection_path}/deploy?dryRun={_flag(dry_run)}&newSync={_flag(new_sync)}"
        return self.api.post(path, resources)


def projects(api: ApiTransport, api_version: str = DEFAULT_API_VERSION) -> Projects:
    """Return the projects operations bound to *api*."""
    return Projects(api, api_version=api_version)
