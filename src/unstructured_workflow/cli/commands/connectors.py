"""Source and destination commands: list, inspect, delete and check connectors."""

from __future__ import annotations

import typer
from rich.panel import Panel
from rich.table import Table

from unstructured_workflow.errors import UnstructuredError

from ..helpers import console, fail, format_time, get_client, print_json, status_style


def _connector_app(collection: str, noun: str) -> typer.Typer:
    """Build the sub-app for ``sources`` or ``destinations``.

    Both collections expose the same endpoints, so the commands are shared
    and only the client resource and labels differ.
    """
    connector_app = typer.Typer(help=f"Manage {noun} connectors")

    @connector_app.command("list")
    def list_connectors(
        connector_type: str = typer.Option(
            None, "--type", "-t", help=f"Only {noun}s of this connector type"
        ),
        json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    ):
        """List connectors."""
        try:
            with get_client() as client:
                items = getattr(client, collection).list(connector_type)
        except UnstructuredError as e:
            fail(f"listing {noun}s", e)

        if json_output:
            print_json(items)
            return

        if not items:
            console.print(f"[yellow]No {noun}s found[/yellow]")
            return

        table = Table(title=f"{noun.capitalize()}s")
        table.add_column("ID", style="dim")
        table.add_column("Name", style="cyan")
        table.add_column("Type")
        table.add_column("Updated", style="dim")

        for item in items:
            table.add_row(item.id, item.name, item.type, format_time(item.updated_at))

        console.print(table)

    @connector_app.command("get")
    def get_connector(
        connector_id: str = typer.Argument(..., help=f"{noun.capitalize()} ID"),
        json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    ):
        """Show one connector and its configuration."""
        try:
            with get_client() as client:
                item = getattr(client, collection).get(connector_id)
        except UnstructuredError as e:
            fail(f"getting {noun}", e)

        if json_output:
            print_json(item)
            return

        settings = "\n".join(
            f"  {key}: [bold]{value}[/bold]" for key, value in item.config.to_wire().items()
        )
        console.print(
            Panel(
                f"ID: [bold]{item.id}[/bold]\n"
                f"Type: [bold]{item.type}[/bold]\n"
                f"Created: {format_time(item.created_at)}\n"
                f"Updated: {format_time(item.updated_at)}\n"
                f"Config:\n{settings or '  -'}",
                title=item.name,
                border_style="blue",
            )
        )

    @connector_app.command("delete")
    def delete_connector(
        connector_id: str = typer.Argument(..., help=f"{noun.capitalize()} ID"),
        yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    ):
        """Delete a connector."""
        if not yes and not typer.confirm(f"Delete {noun} {connector_id}?"):
            raise typer.Exit(1)

        try:
            with get_client() as client:
                getattr(client, collection).delete(connector_id)
        except UnstructuredError as e:
            fail(f"deleting {noun}", e)

        console.print(f"[green]Deleted {noun}[/green] {connector_id}")

    @connector_app.command("check")
    def check_connector(
        connector_id: str = typer.Argument(..., help=f"{noun.capitalize()} ID"),
        latest: bool = typer.Option(
            False, "--latest", "-l", help="Show the latest check instead of starting one"
        ),
        json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    ):
        """Start a connection check, or show the latest one."""
        try:
            with get_client() as client:
                resource = getattr(client, collection)
                if latest:
                    check = resource.get_connection_check(connector_id)
                else:
                    check = resource.create_connection_check(connector_id)
        except UnstructuredError as e:
            fail("checking connection", e)

        if json_output:
            print_json(check)
            return

        console.print(f"Connection check {check.id}: {status_style(check.status)}")
        if check.reason:
            console.print(f"  [dim]{check.reason}[/dim]")

    return connector_app


sources_app = _connector_app("sources", "source")
destinations_app = _connector_app("destinations", "destination")
