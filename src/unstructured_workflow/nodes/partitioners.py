"""Partitioner nodes: the first stage of every workflow."""

from typing import Any, ClassVar

from pydantic import Field

from unstructured_workflow.errors import ProviderModelError
from unstructured_workflow.models.base import WireModel
from unstructured_workflow.models.enums import (
    BlockType,
    Encoding,
    ExcludableElement,
    Model,
    NodeType,
    OutputFormat,
    PartitionerStrategy,
    Provider,
)
from unstructured_workflow.nodes.base import WorkflowNode

PROVIDER_MODELS: dict[str, frozenset[str]] = {
    Provider.OPENAI.value: frozenset({Model.GPT_4O.value, Model.GPT_4O_MINI.value}),
    Provider.ANTHROPIC.value: frozenset(
        {Model.CLAUDE_3_5_SONNET.value, Model.CLAUDE_3_7_SONNET.value}
    ),
    Provider.BEDROCK.value: frozenset(
        {
            Model.BEDROCK_NOVA_LITE.value,
            Model.BEDROCK_NOVA_PRO.value,
            Model.BEDROCK_CLAUDE_3_OPUS.value,
            Model.BEDROCK_CLAUDE_3_HAIKU.value,
            Model.BEDROCK_CLAUDE_3_SONNET.value,
            Model.BEDROCK_CLAUDE_3_5_SONNET.value,
            Model.BEDROCK_LLAMA_3_2_11B.value,
            Model.BEDROCK_LLAMA_3_2_90B.value,
        }
    ),
}


def validate_provider_model(provider: str | None, model: str | None) -> None:
    """Check that a VLM provider offers ``model``.

    The ``auto`` provider, or a missing provider or model, lets the
    server choose and is always accepted.

    Raises:
        ProviderModelError: if the provider is unknown or lacks the model.
    """
    if not provider or not model or provider == Provider.AUTO.value:
        return
    models = PROVIDER_MODELS.get(provider)
    if models is None:
        raise ProviderModelError(f"unknown provider: {provider}", {"provider": provider})
    if model not in models:
        raise ProviderModelError(
            f"invalid model {model} for provider {provider}",
            {"provider": provider, "model": model},
        )


class VLMPrompt(WireModel):
    text: str | None = None


class _VLMSettings(WorkflowNode):
    """Settings shared by the VLM-backed partitioners."""

    family: ClassVar[NodeType] = NodeType.PARTITION

    provider: Provider | None = None
    provider_api_key: str | None = None
    model: Model | None = None
    output_format: OutputFormat | None = None
    prompt: VLMPrompt | None = None
    format_html: bool | None = None
    unique_element_ids: bool | None = None

    def validate_model(self) -> None:
        validate_provider_model(self.provider, self.model)


class PartitionerAuto(_VLMSettings):
    """Let the platform pick a strategy per page.

    Travels under the VLM identity (``type="partition", subtype="vlm"``) with
    ``strategy="auto"`` in its settings.
    """

    wire_type: ClassVar[str] = NodeType.PARTITION.value
    wire_subtype: ClassVar[str] = PartitionerStrategy.VLM.value

    is_dynamic: bool = False
    allow_fast: bool = False

    def settings(self) -> dict[str, Any]:
        return {"strategy": PartitionerStrategy.AUTO.value, **super().settings()}


class PartitionerVLM(_VLMSettings):
    """Partition with a vision language model.

    Encoded with ``type="vlm", subtype="partition"``.
    """

    wire_type: ClassVar[str] = PartitionerStrategy.VLM.value
    wire_subtype: ClassVar[str] = NodeType.PARTITION.value

    strategy: str | None = None
    is_dynamic: bool | None = None
    allow_fast: bool | None = None

    @classmethod
    def from_envelope(cls, header: dict[str, Any], settings: dict[str, Any]) -> WorkflowNode:
        # Auto partitioners come back under the VLM subtype.
        if settings.get("strategy") == PartitionerStrategy.AUTO.value:
            settings = {k: v for k, v in settings.items() if k != "strategy"}
            return PartitionerAuto.from_envelope(header, settings)
        return super().from_envelope(header, settings)


class _LocalSettings(WorkflowNode):
    """Settings shared by the hi_res and fast partitioners."""

    family: ClassVar[NodeType] = NodeType.PARTITION
    wire_type: ClassVar[str] = NodeType.PARTITION.value

    include_page_breaks: bool | None = Field(None, description="Emit PageBreak elements")
    pdf_infer_table_structure: bool | None = None
    exclude_elements: list[ExcludableElement] | None = None
    xml_keep_tags: bool | None = None
    encoding: Encoding | None = None
    ocr_languages: list[str] | None = None
    extract_image_block_types: list[BlockType] | None = None
    infer_table_structure: bool | None = None

    def settings(self) -> dict[str, Any]:
        return {"strategy": self.wire_subtype, **super().settings()}


class PartitionerHiRes(_LocalSettings):
    wire_subtype: ClassVar[str] = PartitionerStrategy.HI_RES.value


class PartitionerFast(_LocalSettings):
    wire_subtype: ClassVar[str] = PartitionerStrategy.FAST.value


PARTITIONERS = (PartitionerAuto, PartitionerVLM, PartitionerHiRes, PartitionerFast)
