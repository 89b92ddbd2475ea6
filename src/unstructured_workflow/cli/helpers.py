"""Shared helpers for CLI modules: client factory, JSON output, error exits."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, NoReturn

import typer
from rich.console import Console

from unstructured_workflow.client import UnstructuredClient
from unstructured_workflow.errors import APIError
from unstructured_workflow.models.base import WireModel

console = Console()


def get_client() -> UnstructuredClient:
    """Build a client from settings (env vars, .env, unstructured.yaml)."""
    return UnstructuredClient()


def to_jsonable(value: Any) -> Any:
    if isinstance(value, WireModel):
        return value.to_wire()
    if isinstance(value, list):
        return [to_jsonable(v) for v in value]
    return value


def print_json(value: Any) -> None:
    print(json.dumps(to_jsonable(value), indent=2, default=str))


def fail(action: str, error: Exception) -> NoReturn:
    """Report an API failure and exit with status 1."""
    console.print(f"[red]Error {action}:[/red] {error}")
    if isinstance(error, APIError) and error.validation is not None:
        for detail in error.validation:
            console.print(f"  [dim]-[/dim] {detail}")
    raise typer.Exit(1)


def format_time(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S") if value else "-"


def status_style(status: str | None) -> str:
    colors = {
        "COMPLETED": "green",
        "SUCCESS": "green",
        "active": "green",
        "IN_PROGRESS": "yellow",
        "COMPLETED_WITH_ERRORS": "yellow",
        "SCHEDULED": "cyan",
        "SCHEDULED_FOR_PROCESSING": "cyan",
        "FAILED": "red",
        "FAILURE": "red",
        "STOPPED": "dim",
        "inactive": "dim",
    }
    if not status:
        return "-"
    color = colors.get(status, "white")
    return f"[{color}]{status}[/{color}]"
