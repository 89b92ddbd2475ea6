"""Response models for sources, destinations, workflows and jobs."""

from datetime import datetime, timezone
from typing import Any

from pydantic import Field, SerializeAsAny, field_serializer, field_validator, model_validator

from unstructured_workflow.models.base import WireModel
from unstructured_workflow.models.connectors import (
    DESTINATIONS,
    SOURCES,
    DestinationConfig,
    SourceConfig,
)
from unstructured_workflow.models.enums import (
    ConnectionCheckStatus,
    JobProcessingStatus,
    JobStatus,
    WorkflowJobType,
    WorkflowState,
    WorkflowType,
)
from unstructured_workflow.models.registry import VariantRegistry
from unstructured_workflow.nodes.base import WorkflowNode
from unstructured_workflow.nodes.codec import decode_nodes, encode_nodes


def _as_utc(value: datetime | None) -> datetime | None:
    """Timestamps without a zone are UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _dispatch_config(data: Any, registry: VariantRegistry) -> Any:
    if not isinstance(data, dict):
        return data
    config = data.get("config")
    if isinstance(config, dict):
        variant = registry.lookup(data.get("type") or "")
        data = {**data, "config": variant.model_validate(config)}
    return data


class TimestampedModel(WireModel):
    created_at: datetime | None = Field(None, description="Creation time (UTC)")
    updated_at: datetime | None = Field(None, description="Last update time (UTC)")

    @field_validator("created_at", "updated_at", mode="after")
    @classmethod
    def _utc(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)


class Source(TimestampedModel):
    """A source connector as stored by the platform."""

    id: str
    name: str
    type: str
    config: SerializeAsAny[SourceConfig]

    @model_validator(mode="before")
    @classmethod
    def _decode_config(cls, data: Any) -> Any:
        return _dispatch_config(data, SOURCES)


class Destination(TimestampedModel):
    """A destination connector as stored by the platform."""

    id: str
    name: str
    type: str
    config: SerializeAsAny[DestinationConfig]

    @model_validator(mode="before")
    @classmethod
    def _decode_config(cls, data: Any) -> Any:
        return _dispatch_config(data, DESTINATIONS)


class ConnectionCheck(WireModel):
    """Result of a connector connection check."""

    id: str
    status: ConnectionCheckStatus
    reason: str | None = None
    created_at: datetime | None = None
    reported_at: datetime | None = None

    @field_validator("created_at", "reported_at", mode="after")
    @classmethod
    def _utc(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)


# Workflows


class CronTabEntry(WireModel):
    cron_expression: str


class WorkflowSchedule(WireModel):
    crontab_entries: list[CronTabEntry] = Field(default_factory=list)


class Workflow(TimestampedModel):
    """A pipeline binding sources and destinations to an ordered list of nodes."""

    id: str
    name: str
    sources: list[str] = Field(default_factory=list)
    destinations: list[str] = Field(default_factory=list)
    workflow_type: WorkflowType | None = None
    workflow_nodes: list[SerializeAsAny[WorkflowNode]] = Field(default_factory=list)
    schedule: WorkflowSchedule | None = None
    status: WorkflowState | None = None
    reprocess_all: bool | None = None

    @field_validator("workflow_nodes", mode="before")
    @classmethod
    def _decode_nodes(cls, value: Any) -> Any:
        if isinstance(value, list) and all(isinstance(v, dict) for v in value):
            return decode_nodes(value)
        return value if value is not None else []

    @field_serializer("workflow_nodes")
    def _encode_nodes(self, nodes: list[WorkflowNode]) -> list[dict[str, Any]]:
        return encode_nodes(nodes)


# Jobs


class NodeFileMetadata(WireModel):
    node_id: str
    file_id: str


class Job(WireModel):
    """One run of a workflow."""

    id: str
    workflow_id: str
    workflow_name: str = ""
    status: JobStatus
    created_at: datetime | None = None
    runtime: str | None = None
    input_file_ids: list[str] | None = None
    output_node_files: list[NodeFileMetadata] | None = None
    job_type: WorkflowJobType | None = None

    @field_validator("created_at", mode="after")
    @classmethod
    def _utc(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)

    @property
    def is_finished(self) -> bool:
        return JobStatus(self.status).is_terminal


class JobNodeDetails(WireModel):
    """Per-node file counters for a job."""

    node_name: str | None = None
    node_type: str | None = None
    node_subtype: str | None = None
    ready: int = 0
    in_progress: int = 0
    success: int = 0
    failure: int = 0


class JobDetails(WireModel):
    id: str
    processing_status: JobProcessingStatus
    node_stats: list[JobNodeDetails] = Field(default_factory=list)
    message: str | None = None


class FailedFile(WireModel):
    document: str
    error: str


class JobFailedFiles(WireModel):
    failed_files: list[FailedFile] = Field(default_factory=list)
