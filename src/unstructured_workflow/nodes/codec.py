"""Two-level decoding of workflow node envelopes.

The envelope ``type`` picks a family registry and ``subtype`` picks the
variant inside it.
"""

from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from unstructured_workflow.errors import DecodeError, UnknownVariantError
from unstructured_workflow.models.enums import (
    ChunkerSubtype,
    EmbedderSubtype,
    EnrichmentType,
    NodeType,
    PartitionerStrategy,
)
from unstructured_workflow.models.base import load_json
from unstructured_workflow.models.registry import VariantRegistry
from unstructured_workflow.nodes.base import WorkflowNode
from unstructured_workflow.nodes.chunkers import (
    CHUNKERS,
    ChunkerCharacter,
    ChunkerPage,
    ChunkerSimilarity,
    ChunkerTitle,
)
from unstructured_workflow.nodes.embedder import Embedder
from unstructured_workflow.nodes.enricher import Enricher
from unstructured_workflow.nodes.partitioners import (
    PARTITIONERS,
    PartitionerAuto,
    PartitionerFast,
    PartitionerHiRes,
    PartitionerVLM,
)

PARTITIONER_REGISTRY: VariantRegistry[type[WorkflowNode]] = VariantRegistry("partitioner")
PARTITIONER_REGISTRY.add(PartitionerStrategy.AUTO.value, PartitionerAuto)
PARTITIONER_REGISTRY.add(PartitionerStrategy.VLM.value, PartitionerVLM)
PARTITIONER_REGISTRY.add(PartitionerStrategy.HI_RES.value, PartitionerHiRes)
PARTITIONER_REGISTRY.add(PartitionerStrategy.FAST.value, PartitionerFast)
PARTITIONER_REGISTRY.verify_covers(list(PARTITIONERS))

# VLM partitioners are encoded as type="vlm", subtype="partition".
VLM_REGISTRY: VariantRegistry[type[WorkflowNode]] = VariantRegistry("vlm")
VLM_REGISTRY.add(NodeType.PARTITION.value, PartitionerVLM)

CHUNKER_REGISTRY: VariantRegistry[type[WorkflowNode]] = VariantRegistry("chunker")
CHUNKER_REGISTRY.add(ChunkerSubtype.CHARACTER.value, ChunkerCharacter)
CHUNKER_REGISTRY.add(ChunkerSubtype.TITLE.value, ChunkerTitle)
CHUNKER_REGISTRY.add(ChunkerSubtype.PAGE.value, ChunkerPage)
CHUNKER_REGISTRY.add(ChunkerSubtype.SIMILARITY.value, ChunkerSimilarity)
CHUNKER_REGISTRY.verify_covers(list(CHUNKERS))

EMBEDDER_REGISTRY: VariantRegistry[type[WorkflowNode]] = VariantRegistry("embedder")
for _subtype in EmbedderSubtype:
    EMBEDDER_REGISTRY.add(_subtype.value, Embedder)

ENRICHER_REGISTRY: VariantRegistry[type[WorkflowNode]] = VariantRegistry("enricher")
for _subtype in EnrichmentType:
    ENRICHER_REGISTRY.add(_subtype.value, Enricher)
del _subtype

NODE_FAMILIES: dict[str, VariantRegistry[type[WorkflowNode]]] = {
    NodeType.PARTITION.value: PARTITIONER_REGISTRY,
    PartitionerStrategy.VLM.value: VLM_REGISTRY,
    NodeType.CHUNK.value: CHUNKER_REGISTRY,
    NodeType.EMBED.value: EMBEDDER_REGISTRY,
    NodeType.ENRICH.value: ENRICHER_REGISTRY,
}


def decode_node(raw: Any, check_models: bool = True) -> WorkflowNode:
    """Decode one node envelope (JSON text, bytes or an already-parsed dict).

    Embedder models are checked against their provider unless ``check_models``
    is false, which leaves the check to the caller (see ``validate_model``).

    Raises:
        UnknownVariantError: if ``type`` or ``subtype`` is not registered.
        DecodeError: if the envelope or its settings are malformed.
        EmbedderModelError: if ``check_models`` and an embedder names a model
            its provider lacks.
    """
    header = load_json(raw, "workflow node")
    if not isinstance(header, dict):
        raise DecodeError(
            f"failed to unmarshal workflow node: expected object, got {type(header).__name__}",
            "workflow node",
        )

    node_type = header.get("type") or ""
    registry = NODE_FAMILIES.get(node_type)
    if registry is None:
        raise UnknownVariantError("node", node_type)
    variant = registry.lookup(header.get("subtype") or "")

    settings = header.get("settings")
    if settings is None:
        settings = {}
    elif not isinstance(settings, dict):
        raise DecodeError(
            f"failed to unmarshal {registry.name} node: settings must be an object",
            "workflow node",
        )

    try:
        node = variant.from_envelope(header, settings)
    except ValidationError as e:
        message = f"failed to unmarshal {registry.name} node: {e}"
        raise DecodeError(message, "workflow node", e) from e

    if check_models and isinstance(node, Embedder):
        node.validate_model()
    return node


def decode_nodes(raw: Any, check_models: bool = True) -> list[WorkflowNode]:
    """Decode a list of node envelopes, keeping their order."""
    items = load_json(raw, "workflow nodes")
    if items is None:
        return []
    if not isinstance(items, list):
        raise DecodeError("failed to unmarshal workflow nodes: expected a list", "workflow nodes")
    return [decode_node(item, check_models) for item in items]


def encode_nodes(nodes: Iterable[WorkflowNode]) -> list[dict[str, Any]]:
    return [node.to_wire() for node in nodes]
