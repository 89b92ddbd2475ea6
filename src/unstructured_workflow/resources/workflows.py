"""Workflow endpoints."""

from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import Any

from unstructured_workflow.codec import decode_list
from unstructured_workflow.models.resources import Job, Workflow
from unstructured_workflow.payloads import (
    CreateWorkflowRequest,
    InputFile,
    ListWorkflowsRequest,
    RunWorkflowRequest,
    UpdateWorkflowRequest,
)
from unstructured_workflow.resources.base import Resource, segment


class WorkflowsResource(Resource):
    """``/workflows``.

    Create and update validate the node list locally first, so a bad
    pipeline raises before any request is made.
    """

    def create(self, request: CreateWorkflowRequest, timeout: float | None = None) -> Any:
        return self._call(
            "create workflow",
            "POST",
            "/workflows",
            json=request.body(),
            decode=Workflow.model_validate,
            timeout=timeout,
        )

    def list(
        self, request: ListWorkflowsRequest | None = None, timeout: float | None = None
    ) -> Any:
        return self._call(
            "list workflows",
            "GET",
            "/workflows",
            params=request.query() if request is not None else None,
            decode=partial(decode_list, decode=Workflow.model_validate, what="workflows"),
            timeout=timeout,
        )

    def get(self, id: str, timeout: float | None = None) -> Any:
        return self._call(
            "get workflow",
            "GET",
            f"/workflows/{segment(id)}",
            decode=Workflow.model_validate,
            timeout=timeout,
        )

    def update(self, request: UpdateWorkflowRequest, timeout: float | None = None) -> Any:
        return self._call(
            "update workflow",
            "PUT",
            f"/workflows/{segment(request.id)}",
            json=request.body(),
            decode=Workflow.model_validate,
            timeout=timeout,
        )

    def delete(self, id: str, timeout: float | None = None) -> Any:
        return self._call(
            "delete workflow",
            "DELETE",
            f"/workflows/{segment(id)}",
            timeout=timeout,
        )

    def run(
        self,
        id: str,
        input_files: list[InputFile | str | Path] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """Start a job. With ``input_files`` the body is multipart form data."""
        request = RunWorkflowRequest(id, input_files)
        return self._call(
            "run workflow",
            "POST",
            f"/workflows/{segment(request.id)}/run",
            files=request.files(),
            decode=Job.model_validate,
            timeout=timeout,
        )
