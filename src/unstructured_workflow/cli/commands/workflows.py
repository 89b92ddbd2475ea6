"""Workflow commands: list, inspect, create, validate, run and delete."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.table import Table

from unstructured_workflow.errors import UnstructuredError
from unstructured_workflow.loader import WorkflowDefinition, load_workflow
from unstructured_workflow.payloads import ListWorkflowsRequest

from ..helpers import console, fail, format_time, get_client, print_json, status_style

workflows_app = typer.Typer(help="Manage workflows")


def _load(workflow_file: Path) -> WorkflowDefinition:
    try:
        return load_workflow(workflow_file)
    except (ValueError, UnstructuredError) as e:
        console.print(f"[red]Invalid workflow file:[/red] {e}")
        raise typer.Exit(1)


def _node_table(title: str, nodes: list) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    table.add_column("Subtype")

    for i, node in enumerate(nodes):
        table.add_row(str(i), node.name or "-", node.wire_type, node.envelope_subtype())
    return table


@workflows_app.command("list")
def list_workflows(
    source_id: str = typer.Option(None, "--source-id", help="Filter by source"),
    destination_id: str = typer.Option(None, "--destination-id", help="Filter by destination"),
    status: str = typer.Option(None, "--status", "-s", help="active or inactive"),
    name: str = typer.Option(None, "--name", "-n", help="Filter by name"),
    page: int = typer.Option(None, "--page", help="Page number"),
    page_size: int = typer.Option(None, "--page-size", help="Workflows per page"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """List workflows."""
    try:
        request = ListWorkflowsRequest(
            source_id=source_id,
            destination_id=destination_id,
            status=status,
            name=name,
            page=page,
            page_size=page_size,
        )
    except ValueError as e:
        console.print(f"[red]Invalid filter:[/red] {e}")
        raise typer.Exit(1)

    try:
        with get_client() as client:
            workflows = client.workflows.list(request)
    except UnstructuredError as e:
        fail("listing workflows", e)

    if json_output:
        print_json(workflows)
        return

    if not workflows:
        console.print("[yellow]No workflows found[/yellow]")
        return

    table = Table(title="Workflows")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Status")
    table.add_column("Nodes", justify="right")
    table.add_column("Created", style="dim")

    for workflow in workflows:
        table.add_row(
            workflow.id,
            workflow.name,
            status_style(workflow.status),
            str(len(workflow.workflow_nodes)),
            format_time(workflow.created_at),
        )

    console.print(table)


@workflows_app.command("get")
def get_workflow(
    workflow_id: str = typer.Argument(..., help="Workflow ID"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """Show a workflow and its nodes."""
    try:
        with get_client() as client:
            workflow = client.workflows.get(workflow_id)
    except UnstructuredError as e:
        fail("getting workflow", e)

    if json_output:
        print_json(workflow)
        return

    console.print(f"[bold]{workflow.name}[/bold] ({workflow.id})  {status_style(workflow.status)}")
    console.print(f"  Sources: {', '.join(workflow.sources) or '-'}")
    console.print(f"  Destinations: {', '.join(workflow.destinations) or '-'}")
    if workflow.schedule and workflow.schedule.crontab_entries:
        crons = ", ".join(e.cron_expression for e in workflow.schedule.crontab_entries)
        console.print(f"  Schedule: {crons}")
    if workflow.workflow_nodes:
        console.print(_node_table("Nodes", workflow.workflow_nodes))


@workflows_app.command("validate")
def validate(
    workflow_file: Path = typer.Argument(..., help="Workflow YAML or JSON file", exists=True),
):
    """Validate a workflow file's nodes without contacting the API."""
    definition = _load(workflow_file)
    errors = definition.validate()

    if errors:
        console.print(f"[red]Validation failed:[/red] {workflow_file}")
        for error in errors:
            console.print(f"  [red]-[/red] {error}")
        raise typer.Exit(1)

    console.print(f"[green]Valid workflow:[/green] {workflow_file}")
    console.print(_node_table(definition.name or "Nodes", definition.nodes))


@workflows_app.command("create")
def create_workflow(
    workflow_file: Path = typer.Argument(..., help="Workflow YAML or JSON file", exists=True),
    name: str = typer.Option(None, "--name", "-n", help="Override the workflow name"),
    source_id: str = typer.Option(None, "--source-id", help="Override the source"),
    destination_id: str = typer.Option(None, "--destination-id", help="Override the destination"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """Create a workflow from a file."""
    definition = _load(workflow_file)
    if name:
        definition.name = name
    if source_id:
        definition.source_id = source_id
    if destination_id:
        definition.destination_id = destination_id

    try:
        request = definition.to_create_request()
        with get_client() as client:
            workflow = client.workflows.create(request)
    except (ValueError, UnstructuredError) as e:
        fail("creating workflow", e)

    if json_output:
        print_json(workflow)
        return

    console.print(f"[green]Created workflow[/green] {workflow.name} ({workflow.id})")


@workflows_app.command("run")
def run_workflow(
    workflow_id: str = typer.Argument(..., help="Workflow ID"),
    files: list[Path] = typer.Option(
        None, "--file", "-f", help="Input file to upload (repeatable)", exists=True
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """Start a job for a workflow."""
    try:
        with get_client() as client:
            job = client.workflows.run(workflow_id, input_files=files or None)
    except UnstructuredError as e:
        fail("running workflow", e)

    if json_output:
        print_json(job)
        return

    console.print(f"[green]Started job[/green] {job.id}  {status_style(job.status)}")


@workflows_app.command("delete")
def delete_workflow(
    workflow_id: str = typer.Argument(..., help="Workflow ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete a workflow."""
    if not yes and not typer.confirm(f"Delete workflow {workflow_id}?"):
        raise typer.Exit(1)

    try:
        with get_client() as client:
            client.workflows.delete(workflow_id)
    except UnstructuredError as e:
        fail("deleting workflow", e)

    console.print(f"[green]Deleted workflow[/green] {workflow_id}")
