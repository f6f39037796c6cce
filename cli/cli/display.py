"""Rich output formatting for the Checkplane CLI.

All functions write to a :class:`rich.console.Console` instance (typically
bound to *stderr*) so that machine-readable output on *stdout* is never
polluted with human-readable decoration.
"""

from __future__ import annotations

from collections import Counter
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# ---------------------------------------------------------------------------
# Resource type colour mapping
# ---------------------------------------------------------------------------

_TYPE_COLOURS: dict[str, str] = {
    "check": "cyan",
    "check-group": "magenta",
    "alert-channel": "yellow",
    "alert-channel-subscription": "dim",
}


def _coloured_type(resource_type: str) -> str:
    """Return a Rich markup string with the resource type colour-coded."""
    colour = _TYPE_COLOURS.get(resource_type, "white")
    return f"[{colour}]{resource_type}[/{colour}]"


# ---------------------------------------------------------------------------
# Synthesized project
# ---------------------------------------------------------------------------


def display_project_summary(console: Console, document: dict[str, Any]) -> None:
    """Render the synthesized project as a header panel and a resource table.

    Parameters
    ----------
    console:
        Rich console to write to (typically stderr).
    document:
        The output of :meth:`~construct_engine.constructs.project.Project.synthesize`.
    """
    project = document.get("project", {})
    resources = document.get("resources", [])
    counts = Counter(r.get("type", "?") for r in resources)
    counts_line = ", ".join(f"{n} {t}" for t, n in sorted(counts.items())) or "no resources"

    console.print(
        Panel(
            f"[bold]{project.get('name', '-')}[/bold]\n"
            f"Logical ID: {project.get('logicalId', '-')}\n"
            f"Repository: {project.get('repoUrl') or '-'}\n"
            f"Resources:  {counts_line}",
            title="Project",
            expand=False,
        )
    )

    if not resources:
        return

    table = Table(show_lines=False)
    table.add_column("Type")
    table.add_column("Logical ID", style="bold")
    table.add_column("Name")
    table.add_column("Source file", style="dim")

    for resource in resources:
        payload = resource.get("payload", {})
        table.add_row(
            _coloured_type(resource.get("type", "?")),
            resource.get("logicalId", "-"),
            str(payload.get("name") or "-"),
            str(payload.get("sourceFile") or "-"),
        )
    console.print(table)


# ---------------------------------------------------------------------------
# Remote projects
# ---------------------------------------------------------------------------


def display_project_list(console: Console, projects: list[dict[str, Any]]) -> None:
    """Render the projects returned by the API as a table."""
    if not projects:
        console.print("[yellow]No projects found.[/yellow]")
        return

    table = Table(title="Projects")
    table.add_column("ID", style="dim", max_width=36)
    table.add_column("Logical ID", style="bold")
    table.add_column("Name")
    table.add_column("Repository")
    table.add_column("Created")

    for entry in projects:
        table.add_row(
            str(entry.get("id", "-")),
            str(entry.get("logicalId", "-")),
            str(entry.get("name", "-")),
            str(entry.get("repoUrl") or "-"),
            str(entry.get("created_at", "-")),
        )
    console.print(table)


def display_deploy_result(console: Console, document: dict[str, Any], *, preview: bool) -> None:
    """Report the outcome of a deploy or a preview."""
    project = document.get("project", {})
    count = len(document.get("resources", []))
    if preview:
        console.print(
            f"[yellow]Preview only:[/yellow] {count} resource(s) of project "
            f"[bold]{project.get('logicalId', '-')}[/bold] validated, nothing was deployed."
        )
    else:
        console.print(
            f"[green]Deployed {count} resource(s) of project "
            f"[bold]{project.get('logicalId', '-')}[/bold].[/green]"
        )
