"""Workflow node base class and wire envelope."""

from typing import Any, ClassVar

from pydantic import Field

from unstructured_workflow.models.base import WireModel
from unstructured_workflow.models.enums import NodeType

# Envelope keys that never belong to a node's own settings.
HEADER_FIELDS = frozenset({"id", "name"})


class WorkflowNode(WireModel):
    """One step of a workflow pipeline.

    On the wire every node is an envelope::

        {"id": ..., "name": ..., "type": ..., "subtype": ..., "settings": {...}}

    Subclasses declare their settings as model fields and set ``family``
    (the stage kind used for ordering rules), ``wire_type`` and
    ``wire_subtype`` (the envelope discriminators).
    """

    family: ClassVar[NodeType]
    wire_type: ClassVar[str]
    wire_subtype: ClassVar[str]

    id: str | None = Field(None, description="Server-assigned node ID")
    name: str = Field("", description="Display name")

    def envelope_subtype(self) -> str:
        return self.wire_subtype

    def validate_model(self) -> None:
        """Pre-flight check of provider/model settings. Most nodes have none."""

    def settings(self) -> dict[str, Any] | None:
        """Settings object for the envelope, or None to leave it out."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            exclude=set(HEADER_FIELDS),
        )

    def to_wire(self, **kwargs: Any) -> dict[str, Any]:
        envelope: dict[str, Any] = {}
        if self.id:
            envelope["id"] = self.id
        envelope["name"] = self.name
        envelope["type"] = self.wire_type
        envelope["subtype"] = self.envelope_subtype()
        settings = self.settings()
        if settings is not None:
            envelope["settings"] = settings
        return envelope

    @classmethod
    def from_envelope(cls, header: dict[str, Any], settings: dict[str, Any]) -> "WorkflowNode":
        """Build a node from an already-dispatched envelope."""
        fields = {**settings, "id": header.get("id"), "name": header.get("name") or ""}
        return cls.model_validate(fields)
