"""unstructured-workflow CLI - Main entry point."""

from __future__ import annotations

from typing import Annotated

import typer

from unstructured_workflow import __version__
from unstructured_workflow.config import configure_logging, get_settings

from .helpers import console

app = typer.Typer(
    name="unstructured-workflow",
    help="Manage Unstructured platform connectors, workflows and jobs.",
    add_completion=True,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold cyan]unstructured-workflow[/bold cyan] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Override UNSTRUCTURED_LOG_LEVEL."),
    ] = None,
):
    """Unstructured workflow client.

    Reads [bold]UNSTRUCTURED_API_KEY[/bold] and [bold]UNSTRUCTURED_API_URL[/bold]
    from the environment, a .env file or unstructured.yaml.

    [bold]Quick Start:[/bold]

        unstructured-workflow sources list
        unstructured-workflow workflows validate pipeline.yaml
        unstructured-workflow workflows run WORKFLOW_ID -f doc.pdf
        unstructured-workflow jobs get JOB_ID
    """
    settings = get_settings()
    configure_logging(
        level=log_level or settings.log_level,
        format=settings.log_format,
        sanitize_logs=settings.sanitize_logs,
    )


# =============================================================================
# Register sub-app commands
# =============================================================================

from .commands.connectors import destinations_app, sources_app  # noqa: E402
from .commands.jobs import jobs_app  # noqa: E402
from .commands.workflows import workflows_app  # noqa: E402

app.add_typer(sources_app, name="sources")
app.add_typer(destinations_app, name="destinations")
app.add_typer(workflows_app, name="workflows")
app.add_typer(jobs_app, name="jobs")


if __name__ == "__main__":
    app()
