"""Request payloads and query builders."""

import mimetypes
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Any

from pydantic import Field, SerializeAsAny, field_serializer, field_validator

from unstructured_workflow.codec import encode_connector
from unstructured_workflow.models.base import WireModel
from unstructured_workflow.models.connectors import DestinationConfig, SourceConfig
from unstructured_workflow.models.enums import JobStatus, SortDirection, WorkflowState, WorkflowType
from unstructured_workflow.nodes.base import WorkflowNode
from unstructured_workflow.nodes.codec import decode_node, encode_nodes
from unstructured_workflow.nodes.ordering import validate_node_order

# Connectors


class CreateSourceRequest(WireModel):
    name: str
    config: SerializeAsAny[SourceConfig]

    def body(self) -> dict[str, Any]:
        return encode_connector(self.name, self.config)


class UpdateSourceRequest(WireModel):
    """Replace a source's configuration.

    The whole config is replaced: optional fields left as ``None`` are reset
    on the server, not kept.
    """

    id: str
    config: SerializeAsAny[SourceConfig]

    def body(self) -> dict[str, Any]:
        return {"config": self.config.to_wire()}


class CreateDestinationRequest(WireModel):
    name: str
    config: SerializeAsAny[DestinationConfig]

    def body(self) -> dict[str, Any]:
        return encode_connector(self.name, self.config)


class UpdateDestinationRequest(WireModel):
    """Replace a destination's configuration (full replace, like sources)."""

    id: str
    config: SerializeAsAny[DestinationConfig]

    def body(self) -> dict[str, Any]:
        return {"config": self.config.to_wire()}


# Workflows


class _WorkflowBody(WireModel):
    source_id: str | None = None
    destination_id: str | None = None
    workflow_type: WorkflowType | None = None
    workflow_nodes: list[SerializeAsAny[WorkflowNode]] | None = None
    schedule: str | None = Field(None, description="Cron-like schedule name, e.g. 'daily'")
    reprocess_all: bool | None = None

    @field_validator("workflow_nodes", mode="before")
    @classmethod
    def _decode_nodes(cls, value: Any) -> Any:
        # Envelope dicts become typed nodes; models are checked in validate_nodes().
        if isinstance(value, list):
            return [decode_node(v, check_models=False) if isinstance(v, dict) else v for v in value]
        return value

    @field_serializer("workflow_nodes")
    def _encode_nodes(self, nodes: list[WorkflowNode] | None) -> list[dict[str, Any]] | None:
        return encode_nodes(nodes) if nodes is not None else None

    def validate_nodes(self) -> None:
        """Check node order and provider models before anything is sent.

        Raises:
            NodeOrderError: if the nodes break an ordering rule.
            EmbedderModelError: if an embedder names a model its provider lacks.
            ProviderModelError: if a VLM partitioner names a model its provider lacks.
        """
        if not self.workflow_nodes:
            return
        validate_node_order(self.workflow_nodes)
        for node in self.workflow_nodes:
            node.validate_model()

    def body(self) -> dict[str, Any]:
        self.validate_nodes()
        return self.to_wire(exclude={"id"})


class CreateWorkflowRequest(_WorkflowBody):
    name: str
    workflow_type: WorkflowType = WorkflowType.CUSTOM


class UpdateWorkflowRequest(_WorkflowBody):
    """Update a workflow. Fields left as ``None`` are not sent."""

    id: str
    name: str | None = None


def _timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


class ListWorkflowsRequest(WireModel):
    """Filters for listing workflows. Unset filters are not sent."""

    dag_node_configuration_id: str | None = None
    source_id: str | None = None
    destination_id: str | None = None
    status: WorkflowState | None = None
    page: int | None = None
    page_size: int | None = None
    created_since: datetime | None = None
    created_before: datetime | None = None
    name: str | None = None
    sort_by: str | None = None
    sort_direction: SortDirection | None = None
    show_only_soft_deleted: bool | None = None
    show_recommender_workflows: bool | None = None

    def query(self) -> dict[str, str]:
        query: dict[str, str] = {}
        for key, value in self:
            if value is None:
                continue
            if isinstance(value, datetime):
                query[key] = _timestamp(value)
            elif isinstance(value, bool):
                query[key] = "true" if value else "false"
            else:
                query[key] = str(value)
        return query


class ListJobsRequest(WireModel):
    workflow_id: str | None = None
    status: JobStatus | None = None

    def query(self) -> dict[str, str]:
        return {key: str(value) for key, value in self if value is not None}


# Job inputs


class InputFile:
    """A file uploaded with a workflow run, sent as ``input_files`` form data."""

    def __init__(self, filename: str, content: bytes | IO[bytes], content_type: str | None = None):
        self.filename = filename
        self.content = content
        self.content_type = (
            content_type or mimetypes.guess_type(filename)[0] or "application/octet-stream"
        )

    @classmethod
    def from_path(cls, path: str | Path, content_type: str | None = None) -> "InputFile":
        path = Path(path)
        return cls(path.name, path.read_bytes(), content_type)

    @classmethod
    def from_bytes(cls, filename: str, data: bytes, content_type: str | None = None) -> "InputFile":
        return cls(filename, data, content_type)

    def as_multipart(self) -> tuple[str, tuple[str, Any, str]]:
        return ("input_files", (self.filename, self.content, self.content_type))

    def __repr__(self) -> str:
        return f"InputFile({self.filename!r}, content_type={self.content_type!r})"


class RunWorkflowRequest:
    """Run a workflow, optionally on uploaded files."""

    def __init__(self, id: str, input_files: list[InputFile | str | Path] | None = None):
        self.id = id
        self.input_files = [
            f if isinstance(f, InputFile) else InputFile.from_path(f) for f in input_files or []
        ]

    def files(self) -> list[tuple[str, tuple[str, Any, str]]] | None:
        if not self.input_files:
            return None
        return [f.as_multipart() for f in self.input_files]
