"""Shared plumbing for API resources.

A resource builds :class:`~unstructured_workflow.transport.Call` objects and
hands them to an executor. With the blocking client the executor returns the
decoded result; with the async client it returns an awaitable, so the same
resource classes serve both.
"""

from collections.abc import Callable
from typing import Any
from urllib.parse import quote

from unstructured_workflow.transport import Call

Executor = Callable[[Call], Any]


def segment(value: str) -> str:
    """Quote an ID for use as a single path segment."""
    if not value:
        raise ValueError("resource id must not be empty")
    return quote(value, safe="")


class Resource:
    def __init__(self, execute: Executor):
        self._execute = execute

    def _call(self, operation: str, method: str, path: str, **kwargs: Any) -> Any:
        return self._execute(Call(operation, method, path, **kwargs))
