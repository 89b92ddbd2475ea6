"""Embedder node and its provider/model compatibility table."""

from typing import Any, ClassVar

from pydantic import ConfigDict

from unstructured_workflow.errors import EmbedderModelError
from unstructured_workflow.models.enums import EmbedderModel, EmbedderSubtype, NodeType
from unstructured_workflow.nodes.base import WorkflowNode

# subtype -> (display name, allowed models)
EMBEDDER_MODELS: dict[str, tuple[str, frozenset[str]]] = {
    EmbedderSubtype.AZURE_OPENAI.value: (
        "Azure OpenAI",
        frozenset(
            {
                EmbedderModel.AZURE_OPENAI_TEXT_EMBEDDING_3_SMALL.value,
                EmbedderModel.AZURE_OPENAI_TEXT_EMBEDDING_3_LARGE.value,
                EmbedderModel.AZURE_OPENAI_TEXT_EMBEDDING_ADA_002.value,
            }
        ),
    ),
    EmbedderSubtype.BEDROCK.value: (
        "Bedrock",
        frozenset(
            {
                EmbedderModel.BEDROCK_TITAN_EMBED_TEXT_V2.value,
                EmbedderModel.BEDROCK_TITAN_EMBED_TEXT_V1.value,
                EmbedderModel.BEDROCK_TITAN_EMBED_IMAGE_V1.value,
                EmbedderModel.BEDROCK_COHERE_EMBED_ENGLISH.value,
                EmbedderModel.BEDROCK_COHERE_EMBED_MULTILINGUAL.value,
            }
        ),
    ),
    EmbedderSubtype.TOGETHERAI.value: (
        "TogetherAI",
        frozenset({EmbedderModel.TOGETHERAI_M2_BERT_80M_32K_RETRIEVAL.value}),
    ),
    EmbedderSubtype.VOYAGEAI.value: (
        "VoyageAI",
        frozenset(
            {
                EmbedderModel.VOYAGEAI_3.value,
                EmbedderModel.VOYAGEAI_3_LARGE.value,
                EmbedderModel.VOYAGEAI_3_LITE.value,
                EmbedderModel.VOYAGEAI_CODE_3.value,
                EmbedderModel.VOYAGEAI_FINANCE_2.value,
                EmbedderModel.VOYAGEAI_LAW_2.value,
                EmbedderModel.VOYAGEAI_CODE_2.value,
                EmbedderModel.VOYAGEAI_MULTIMODAL_3.value,
            }
        ),
    ),
}


def validate_embedder_model(subtype: str, model_name: str) -> None:
    """Check that an embedding provider offers ``model_name``.

    Raises:
        EmbedderModelError: if the subtype is unknown or the model is not offered.
    """
    entry = EMBEDDER_MODELS.get(subtype)
    if entry is None:
        raise EmbedderModelError(f"unknown embedder subtype: {subtype}", subtype, model_name)
    display, models = entry
    if model_name not in models:
        raise EmbedderModelError(
            f"invalid model {model_name} for {display} embedder", subtype, model_name
        )


class Embedder(WorkflowNode):
    """Turn chunks into vectors with a hosted embedding model.

    There is one embedder shape; ``subtype`` names the provider. The model is
    not checked at construction, call :meth:`validate_model` before sending.
    """

    model_config = ConfigDict(protected_namespaces=())

    family: ClassVar[NodeType] = NodeType.EMBED
    wire_type: ClassVar[str] = NodeType.EMBED.value

    subtype: str
    model_name: str

    def envelope_subtype(self) -> str:
        return self.subtype

    def settings(self) -> dict[str, Any]:
        return {"model_name": self.model_name}

    def validate_model(self) -> None:
        validate_embedder_model(self.subtype, self.model_name)

    @classmethod
    def from_envelope(cls, header: dict[str, Any], settings: dict[str, Any]) -> WorkflowNode:
        return cls(
            id=header.get("id"),
            name=header.get("name") or "",
            subtype=header.get("subtype") or "",
            model_name=settings.get("model_name", ""),
        )
