"""Tests for cli/cli/rest/api.py -- the HTTP transport."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from cli.rest.api import USER_AGENT, ApiClient
from construct_engine.config import load_settings


class TestHeaders:
    def test_auth_and_account_headers(self, make_transport: Callable, recorded_requests: list[httpx.Request]):
        with ApiClient("https://api.example.com/", api_key="cu_1", account_id="acc-1", transport=make_transport()) as api:
            api.get("/next/projects")

        [request] = recorded_requests
        assert request.url == httpx.URL("https://api.example.com/next/projects")
        assert request.headers["Authorization"] == "Bearer cu_1"
        assert request.headers["X-Checkly-Account"] == "acc-1"
        assert request.headers["User-Agent"] == USER_AGENT

    def test_no_auth_header_without_key(self, make_transport: Callable, recorded_requests: list[httpx.Request]):
        with ApiClient("https://api.example.com", transport=make_transport()) as api:
            api.get("/next/projects")
        assert "Authorization" not in recorded_requests[0].headers
        assert "X-Checkly-Account" not in recorded_requests[0].headers

    def test_base_url_trailing_slash_stripped(self):
        with ApiClient("https://api.example.com/") as api:
            assert api.base_url == "https://api.example.com"


class TestVerbs:
    def test_post_sends_json(self, make_transport: Callable, recorded_requests: list[httpx.Request]):
        with ApiClient("https://api.example.com", transport=make_transport(201)) as api:
            response = api.post("/next/projects", {"name": "Shop"})
        assert response.status_code == 201
        assert json.loads(recorded_requests[0].content) == {"name": "Shop"}

    def test_delete(self, make_transport: Callable, recorded_requests: list[httpx.Request]):
        with ApiClient("https://api.example.com", transport=make_transport(204)) as api:
            api.delete("/next/projects/shop")
        assert recorded_requests[0].method == "DELETE"

    def test_status_error_propagates(self, make_transport: Callable):
        with ApiClient("https://api.example.com", transport=make_transport(401)) as api:
            with pytest.raises(httpx.HTTPStatusError):
                api.get("/next/projects")

    def test_request_error_propagates(self, make_transport: Callable):
        def _refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        with ApiClient("https://api.example.com", transport=make_transport(handler=_refuse)) as api:
            with pytest.raises(httpx.ConnectError):
                api.get("/next/projects")


class TestFromSettings:
    def test_builds_from_settings(self, make_transport: Callable, recorded_requests: list[httpx.Request]):
        settings = load_settings(api_url="https://api.eu.example.com", api_key="cu_9", account_id="acc-9")
        with ApiClient.from_settings(settings, transport=make_transport()) as api:
            api.get("/next/projects")
        [request] = recorded_requests
        assert request.url.host == "api.eu.example.com"
        assert request.headers["Authorization"] == "Bearer cu_9"
