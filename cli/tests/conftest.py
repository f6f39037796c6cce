"""Shared fixtures for CLI tests.

Every test runs with the stored-credentials file redirected into
``tmp_path`` and with ``CHECKPLANE_*`` environment variables cleared, so
nothing on the developer's machine leaks into the results.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest


@pytest.fixture(autouse=True)
def _isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    for key in list(os.environ):
        if key.startswith("CHECKPLANE_"):
            monkeypatch.delenv(key)
    config_dir = tmp_path / ".checkplane"
    with (
        patch("cli.cloud._CONFIG_DIR", config_dir),
        patch("cli.cloud._CONFIG_FILE", config_dir / "config.toml"),
    ):
        yield config_dir


Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def make_transport(recorded_requests: list[httpx.Request]) -> Callable[..., httpx.MockTransport]:
    """Build a MockTransport that records requests and answers with *status_code*."""

    def _make(status_code: int = 200, json_body: object = None, handler: Handler | None = None) -> httpx.MockTransport:
        def _handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            if handler is not None:
                return handler(request)
            return httpx.Response(status_code, json=json_body if json_body is not None else {})

        return httpx.MockTransport(_handler)

    return _make
