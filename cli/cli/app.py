"""Checkplane CLI application -- Typer-based developer interface.

Provides commands to synthesize a monitoring-as-code project, deploy it
to the monitoring API, destroy it, and list remote projects.
Human-readable output goes to *stderr* via Rich; machine-readable JSON
goes to *stdout* so that pipelines can compose cleanly.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import httpx
import typer
from pydantic import SecretStr
from rich.console import Console

from cli.cloud import (
    clear_cloud_config,
    load_api_url,
    load_stored_account_id,
    load_stored_api_key,
    save_cloud_config,
)
from cli.display import display_deploy_result, display_project_list, display_project_summary
from cli.rest.api import ApiClient
from cli.rest.projects import Projects
from construct_engine.config import DEFAULT_API_URL, Settings, load_settings
from construct_engine.constructs.check import MissingRequiredFieldError
from construct_engine.constructs.project import DuplicateLogicalIdError, Project
from construct_engine.constructs.ref import UnresolvedRefError
from construct_engine.loader.check_loader import CheckFileLoadError, load_project
from construct_engine.loader.config_loader import ConfigLoadError, ProjectConfig, load_project_config
from construct_engine.logging_config import configure_logging

# ---------------------------------------------------------------------------
# App & global state
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="checkplane",
    help="Checkplane - monitoring as code for synthetic checks",
    no_args_is_help=True,
)
console = Console(stderr=True)

# Mutable global options populated by the Typer callback.
_json_output: bool = False

_PROJECT_ERRORS = (
    ConfigLoadError,
    CheckFileLoadError,
    MissingRequiredFieldError,
    DuplicateLogicalIdError,
    UnresolvedRefError,
)


# ---------------------------------------------------------------------------
# Callback -- global options
# ---------------------------------------------------------------------------


@app.callback()
def _global_options(
    json_mode: bool = typer.Option(
        False,
        "--json/--no-json",
        help="Emit structured JSON to stdout instead of human-readable output.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging.",
    ),
) -> None:
    """Global options applied to every command."""
    global _json_output  # noqa: PLW0603
    _json_output = json_mode

    settings = load_settings()
    configure_logging("DEBUG" if verbose else settings.log_level, structured=settings.structured_logging)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_project(directory: Path) -> tuple[ProjectConfig, Project]:
    """Load the config and check files under *directory*, exiting on failure."""
    try:
        config = load_project_config(directory)
        project = load_project(directory, config)
    except _PROJECT_ERRORS as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=3) from exc
    return config, project


def _synthesize(project: Project, filter_file: str | None = None) -> dict[str, Any]:
    try:
        return project.synthesize(filter_file=filter_file)
    except _PROJECT_ERRORS as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=3) from exc


def _api_settings(api_url: str | None, api_key: str | None, account_id: str | None) -> Settings:
    """Resolve API settings: CLI option, then environment, then stored credentials."""
    settings = load_settings()

    if api_url is None:
        api_url = settings.api_url if "api_url" in settings.model_fields_set else load_api_url()
    if api_key is None:
        api_key = settings.api_key.get_secret_value() if settings.api_key else load_stored_api_key()
    if account_id is None:
        account_id = settings.account_id or load_stored_account_id()

    if not api_key or not account_id:
        console.print(
            "[red]No API credentials found. Run [bold]checkplane login[/bold] or set "
            "CHECKPLANE_API_KEY and CHECKPLANE_ACCOUNT_ID.[/red]"
        )
        raise typer.Exit(code=3)

    return settings.model_copy(
        update={"api_url": api_url, "api_key": SecretStr(api_key), "account_id": account_id},
    )


def _make_client(settings: Settings) -> ApiClient:
    return ApiClient.from_settings(settings)


@contextmanager
def _api_errors(api_url: str) -> Iterator[None]:
    """Turn transport failures into a red message and exit code 3."""
    try:
        yield
    except httpx.HTTPStatusError as exc:
        detail = exc.response.text
        try:
            detail = exc.response.json().get("message", detail)
        except (ValueError, AttributeError):
            pass
        console.print(f"[red]API error ({exc.response.status_code}): {detail}[/red]")
        raise typer.Exit(code=3) from exc
    except httpx.RequestError as exc:
        console.print(f"[red]Cannot reach API at {api_url}: {exc}[/red]")
        raise typer.Exit(code=3) from exc


def _json_body(response: httpx.Response) -> Any:
    """Return the decoded JSON body, or ``None`` for empty responses."""
    if not response.content:
        return None
    return response.json()


def _emit_json(data: Any) -> None:
    sys.stdout.write(json.dumps(data, indent=2, default=str) + "\n")


_DIRECTORY_ARGUMENT = typer.Argument(
    Path("."),
    help="Project directory containing checkplane.toml.",
    exists=True,
    file_okay=False,
    resolve_path=True,
)
_API_URL_OPTION = typer.Option(None, "--api-url", help="Monitoring API base URL.")
_API_KEY_OPTION = typer.Option(None, "--api-key", help="API key (overrides stored credentials).")
_ACCOUNT_ID_OPTION = typer.Option(None, "--account-id", help="Account id (overrides stored credentials).")


# ---------------------------------------------------------------------------
# synth
# ---------------------------------------------------------------------------


@app.command()
def synth(
    directory: Path = _DIRECTORY_ARGUMENT,
    file: str | None = typer.Option(
        None,
        "--file",
        "-f",
        help="Only include checks declared in this check file (project-relative path).",
    ),
) -> None:
    """Synthesize the project and print the deploy document to stdout."""
    _, project = _load_project(directory)
    document = _synthesize(project, filter_file=file)

    if not _json_output:
        display_project_summary(console, document)
    _emit_json(document)


# ---------------------------------------------------------------------------
# deploy
# ---------------------------------------------------------------------------


@app.command()
def deploy(
    directory: Path = _DIRECTORY_ARGUMENT,
    preview: bool = typer.Option(
        False,
        "--preview",
        help="Validate the project on the server without applying any change.",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Skip the confirmation prompt.",
    ),
    api_url: str | None = _API_URL_OPTION,
    api_key: str | None = _API_KEY_OPTION,
    account_id: str | None = _ACCOUNT_ID_OPTION,
) -> None:
    """Deploy every construct of the project in a single request."""
    settings = _api_settings(api_url, api_key, account_id)
    config, project = _load_project(directory)
    document = _synthesize(project)

    if not _json_output:
        display_project_summary(console, document)

    if not preview and not force:
        typer.confirm(
            f"Deploy project '{config.project.logical_id}' to {settings.api_url}?",
            abort=True,
            err=True,
        )

    with _api_errors(settings.api_url), _make_client(settings) as client:
        response = Projects(client, api_version=settings.api_version).deploy(document, dry_run=preview)

    if _json_output:
        _emit_json(_json_body(response))
    else:
        display_deploy_result(console, document, preview=preview)


# ---------------------------------------------------------------------------
# destroy
# ---------------------------------------------------------------------------


@app.command()
def destroy(
    directory: Path = _DIRECTORY_ARGUMENT,
    force: bool = typer.Option(
        False,
        "--force",
        help="Skip the confirmation prompt.",
    ),
    api_url: str | None = _API_URL_OPTION,
    api_key: str | None = _API_KEY_OPTION,
    account_id: str | None = _ACCOUNT_ID_OPTION,
) -> None:
    """Delete the project and every resource it deployed."""
    settings = _api_settings(api_url, api_key, account_id)
    try:
        config = load_project_config(directory)
    except ConfigLoadError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=3) from exc

    logical_id = config.project.logical_id
    if not force:
        typer.confirm(
            f"Destroy project '{logical_id}' and all of its checks? This cannot be undone.",
            abort=True,
            err=True,
        )

    with _api_errors(settings.api_url), _make_client(settings) as client:
        Projects(client, api_version=settings.api_version).delete(logical_id)

    if _json_output:
        _emit_json({"deleted": logical_id})
    else:
        console.print(f"[green]Project [bold]{logical_id}[/bold] destroyed.[/green]")


# ---------------------------------------------------------------------------
# projects
# ---------------------------------------------------------------------------


@app.command("projects")
def list_projects(
    api_url: str | None = _API_URL_OPTION,
    api_key: str | None = _API_KEY_OPTION,
    account_id: str | None = _ACCOUNT_ID_OPTION,
) -> None:
    """List the projects deployed to the account."""
    settings = _api_settings(api_url, api_key, account_id)

    with _api_errors(settings.api_url), _make_client(settings) as client:
        response = Projects(client, api_version=settings.api_version).get_all()
    result = _json_body(response) or []

    if _json_output:
        _emit_json(result)
    else:
        display_project_list(console, result)


# ---------------------------------------------------------------------------
# login / logout
# ---------------------------------------------------------------------------


@app.command()
def login(
    api_key: str = typer.Option(
        ...,
        "--api-key",
        help="API key created in the account settings.",
        prompt="API key",
        hide_input=True,
    ),
    account_id: str = typer.Option(
        ...,
        "--account-id",
        help="Account id the key belongs to.",
        prompt="Account id",
    ),
    api_url: str = typer.Option(
        DEFAULT_API_URL,
        "--api-url",
        help="Monitoring API base URL.",
    ),
) -> None:
    """Store API credentials in ``~/.checkplane/config.toml`` (mode 0600)."""
    if not api_key.strip() or not account_id.strip():
        console.print("[red]API key and account id must not be empty.[/red]")
        raise typer.Exit(code=1)

    save_cloud_config(api_url, api_key.strip(), account_id.strip())
    console.print(f"[green]✓ Credentials stored for account {account_id.strip()}[/green]")


@app.command()
def logout() -> None:
    """Remove stored credentials."""
    clear_cloud_config()
    console.print("[green]✓ Logged out, credentials removed.[/green]")
