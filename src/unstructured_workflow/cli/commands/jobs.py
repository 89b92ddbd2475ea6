"""Job commands: follow runs, inspect failures and download outputs."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.panel import Panel
from rich.table import Table

from unstructured_workflow.errors import UnstructuredError

from ..helpers import console, fail, format_time, get_client, print_json, status_style

jobs_app = typer.Typer(help="Follow and manage jobs")


@jobs_app.command("list")
def list_jobs(
    workflow_id: str = typer.Option(None, "--workflow-id", "-w", help="Filter by workflow"),
    status: str = typer.Option(None, "--status", "-s", help="Filter by job status"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """List jobs."""
    try:
        with get_client() as client:
            jobs = client.jobs.list(workflow_id=workflow_id, status=status)
    except (ValueError, UnstructuredError) as e:
        fail("listing jobs", e)

    if json_output:
        print_json(jobs)
        return

    if not jobs:
        console.print("[yellow]No jobs found[/yellow]")
        return

    table = Table(title="Jobs")
    table.add_column("ID", style="dim")
    table.add_column("Workflow", style="cyan")
    table.add_column("Status")
    table.add_column("Runtime", justify="right")
    table.add_column("Created", style="dim")

    for job in jobs:
        table.add_row(
            job.id,
            job.workflow_name or job.workflow_id,
            status_style(job.status),
            job.runtime or "-",
            format_time(job.created_at),
        )

    console.print(table)


@jobs_app.command("get")
def get_job(
    job_id: str = typer.Argument(..., help="Job ID"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """Show a job."""
    try:
        with get_client() as client:
            job = client.jobs.get(job_id)
    except UnstructuredError as e:
        fail("getting job", e)

    if json_output:
        print_json(job)
        return

    outputs = len(job.output_node_files or [])
    console.print(
        Panel(
            f"Workflow: [bold]{job.workflow_name or '-'}[/bold] ({job.workflow_id})\n"
            f"Status: {status_style(job.status)}\n"
            f"Created: {format_time(job.created_at)}\n"
            f"Runtime: {job.runtime or '-'}\n"
            f"Output files: [bold]{outputs}[/bold]",
            title=f"Job {job.id}",
            border_style="blue",
        )
    )


@jobs_app.command("cancel")
def cancel_job(job_id: str = typer.Argument(..., help="Job ID")):
    """Cancel a running job."""
    try:
        with get_client() as client:
            client.jobs.cancel(job_id)
    except UnstructuredError as e:
        fail("cancelling job", e)

    console.print(f"[green]Cancelled job[/green] {job_id}")


@jobs_app.command("details")
def job_details(
    job_id: str = typer.Argument(..., help="Job ID"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """Show per-node processing counts for a job."""
    try:
        with get_client() as client:
            details = client.jobs.details(job_id)
    except UnstructuredError as e:
        fail("getting job details", e)

    if json_output:
        print_json(details)
        return

    console.print(f"Job {details.id}: {status_style(details.processing_status)}")
    if details.message:
        console.print(f"  [dim]{details.message}[/dim]")

    if not details.node_stats:
        return

    table = Table(title="Node Stats")
    table.add_column("Node", style="cyan")
    table.add_column("Type")
    table.add_column("Ready", justify="right")
    table.add_column("In Progress", justify="right")
    table.add_column("Success", justify="right", style="green")
    table.add_column("Failure", justify="right", style="red")

    for stat in details.node_stats:
        kind = "/".join(p for p in (stat.node_type, stat.node_subtype) if p) or "-"
        table.add_row(
            stat.node_name or "-",
            kind,
            str(stat.ready),
            str(stat.in_progress),
            str(stat.success),
            str(stat.failure),
        )

    console.print(table)


@jobs_app.command("failed-files")
def failed_files(
    job_id: str = typer.Argument(..., help="Job ID"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """List the documents a job failed to process."""
    try:
        with get_client() as client:
            result = client.jobs.failed_files(job_id)
    except UnstructuredError as e:
        fail("getting failed files", e)

    if json_output:
        print_json(result)
        return

    if not result.failed_files:
        console.print("[green]No failed files[/green]")
        return

    table = Table(title="Failed Files")
    table.add_column("Document", style="cyan")
    table.add_column("Error", style="red")

    for failed in result.failed_files:
        table.add_row(failed.document, failed.error)

    console.print(table)


@jobs_app.command("download")
def download(
    job_id: str = typer.Argument(..., help="Job ID"),
    output: Path = typer.Option(..., "--output", "-o", help="File to write"),
    node_id: str = typer.Option(None, "--node-id", help="Workflow node that produced the file"),
    file_id: str = typer.Option(None, "--file-id", help="Input file ID"),
):
    """Download a job output file."""
    try:
        with get_client() as client:
            with client.jobs.download(job_id, node_id=node_id, file_id=file_id) as stream:
                written = stream.write_to(output)
    except UnstructuredError as e:
        fail("downloading job output", e)

    console.print(f"[green]Wrote[/green] {written:,} bytes to {output}")
