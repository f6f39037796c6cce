"""Tests for cli/cli/display.py -- Rich output formatting.

Rendered output is captured via a Console writing to a StringIO buffer.
"""

from __future__ import annotations

import io

from rich.console import Console

from cli.display import (
    _TYPE_COLOURS,
    _coloured_type,
    display_deploy_result,
    display_project_list,
    display_project_summary,
)

_DOCUMENT = {
    "project": {"logicalId": "shop-monitoring", "name": "Shop monitoring", "repoUrl": None},
    "resources": [
        {"logicalId": "storefront", "type": "check-group", "payload": {"name": "Storefront"}},
        {
            "logicalId": "home-api",
            "type": "check",
            "payload": {"name": "Home API", "sourceFile": "checks/home.check.py"},
        },
        {"logicalId": "cart-api", "type": "check", "payload": {"name": "Cart API"}},
    ],
}


def _capture_console() -> tuple[Console, io.StringIO]:
    buf = io.StringIO()
    console = Console(file=buf, no_color=True, highlight=False, width=120)
    return console, buf


# ---------------------------------------------------------------------------
# _coloured_type
# ---------------------------------------------------------------------------


class TestColouredType:
    def test_known_types(self):
        for resource_type, colour in _TYPE_COLOURS.items():
            assert _coloured_type(resource_type) == f"[{colour}]{resource_type}[/{colour}]"

    def test_unknown_type_is_white(self):
        assert _coloured_type("dashboard") == "[white]dashboard[/white]"


# ---------------------------------------------------------------------------
# display_project_summary
# ---------------------------------------------------------------------------


class TestDisplayProjectSummary:
    def test_header_and_counts(self):
        console, buf = _capture_console()
        display_project_summary(console, _DOCUMENT)
        output = buf.getvalue()
        assert "Shop monitoring" in output
        assert "shop-monitoring" in output
        assert "2 check, 1 check-group" in output

    def test_resource_rows(self):
        console, buf = _capture_console()
        display_project_summary(console, _DOCUMENT)
        output = buf.getvalue()
        assert "home-api" in output
        assert "checks/home.check.py" in output
        assert "Storefront" in output

    def test_empty_project(self):
        console, buf = _capture_console()
        display_project_summary(console, {"project": {"logicalId": "empty", "name": "Empty"}, "resources": []})
        assert "no resources" in buf.getvalue()


# ---------------------------------------------------------------------------
# display_project_list / display_deploy_result
# ---------------------------------------------------------------------------


class TestDisplayProjectList:
    def test_rows(self):
        console, buf = _capture_console()
        display_project_list(
            console,
            [{"id": "p-1", "logicalId": "shop-monitoring", "name": "Shop", "repoUrl": "https://github.com/acme/shop"}],
        )
        output = buf.getvalue()
        assert "p-1" in output
        assert "https://github.com/acme/shop" in output

    def test_empty(self):
        console, buf = _capture_console()
        display_project_list(console, [])
        assert "No projects found." in buf.getvalue()


class TestDisplayDeployResult:
    def test_deploy(self):
        console, buf = _capture_console()
        display_deploy_result(console, _DOCUMENT, preview=False)
        assert "Deployed 3 resource(s)" in buf.getvalue()

    def test_preview(self):
        console, buf = _capture_console()
        display_deploy_result(console, _DOCUMENT, preview=True)
        output = buf.getvalue()
        assert "Preview only" in output
        assert "nothing was deployed" in output
