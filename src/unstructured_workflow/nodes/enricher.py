"""Enricher node: LLM descriptions of images and tables, and entity extraction."""

from typing import Any, ClassVar

from unstructured_workflow.models.enums import EnrichmentType, NodeType
from unstructured_workflow.nodes.base import WorkflowNode

# Only these enrichments accept a custom prompt.
NER_ENRICHMENTS = frozenset({EnrichmentType.NER_OPENAI.value, EnrichmentType.NER_ANTHROPIC.value})


class Enricher(WorkflowNode):
    """Ask a model to describe or annotate elements.

    ``settings`` is left out of the envelope entirely unless this is an NER
    enrichment with a prompt override.
    """

    family: ClassVar[NodeType] = NodeType.ENRICH
    wire_type: ClassVar[str] = NodeType.ENRICH.value

    subtype: EnrichmentType
    ner_prompt_override: str | None = None

    def envelope_subtype(self) -> str:
        return self.subtype

    @property
    def is_image(self) -> bool:
        return "image" in self.subtype

    @property
    def is_table(self) -> bool:
        return "table" in self.subtype

    @property
    def is_ner(self) -> bool:
        return "ner" in self.subtype

    def settings(self) -> dict[str, Any] | None:
        if self.ner_prompt_override and self.subtype in NER_ENRICHMENTS:
            return {"prompt_interface_overrides": {"prompt": {"user": self.ner_prompt_override}}}
        return None

    @classmethod
    def from_envelope(cls, header: dict[str, Any], settings: dict[str, Any]) -> WorkflowNode:
        override = None
        overrides = settings.get("prompt_interface_overrides")
        if isinstance(overrides, dict) and isinstance(overrides.get("prompt"), dict):
            override = overrides["prompt"].get("user")
        return cls(
            id=header.get("id"),
            name=header.get("name") or "",
            subtype=header.get("subtype"),
            ner_prompt_override=override,
        )
