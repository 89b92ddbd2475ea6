"""Chunker nodes: split partitioned elements into retrieval-sized chunks."""

from typing import Any, ClassVar

from pydantic import Field

from unstructured_workflow.models.enums import ChunkerSubtype, NodeType
from unstructured_workflow.nodes.base import WorkflowNode

# Protocol version tag sent with every chunker.
CONTEXTUAL_CHUNKING_STRATEGY = "v1"


class Chunker(WorkflowNode):
    """Settings shared by all chunking strategies."""

    family: ClassVar[NodeType] = NodeType.CHUNK
    wire_type: ClassVar[str] = NodeType.CHUNK.value

    api_url: str | None = Field(None, alias="unstructured_api_url")
    api_key: str | None = Field(None, alias="unstructured_api_key")
    include_orig_elements: bool | None = None
    new_after_n_chars: int | None = None
    max_characters: int | None = None
    overlap: int | None = None
    overlap_all: bool = False

    def settings(self) -> dict[str, Any]:
        settings = super().settings()
        settings["contextual_chunking_strategy"] = CONTEXTUAL_CHUNKING_STRATEGY
        return settings


class ChunkerCharacter(Chunker):
    wire_subtype: ClassVar[str] = ChunkerSubtype.CHARACTER.value


class ChunkerTitle(Chunker):
    wire_subtype: ClassVar[str] = ChunkerSubtype.TITLE.value

    combine_text_under_n_chars: int | None = None


class ChunkerPage(Chunker):
    wire_subtype: ClassVar[str] = ChunkerSubtype.PAGE.value


class ChunkerSimilarity(Chunker):
    wire_subtype: ClassVar[str] = ChunkerSubtype.SIMILARITY.value


CHUNKERS = (ChunkerCharacter, ChunkerTitle, ChunkerPage, ChunkerSimilarity)
