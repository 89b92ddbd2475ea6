"""Workflow nodes: partitioners, chunkers, embedders and enrichers."""

from unstructured_workflow.nodes.base import WorkflowNode
from unstructured_workflow.nodes.chunkers import (
    Chunker,
    ChunkerCharacter,
    ChunkerPage,
    ChunkerSimilarity,
    ChunkerTitle,
)
from unstructured_workflow.nodes.codec import decode_node, decode_nodes, encode_nodes
from unstructured_workflow.nodes.embedder import Embedder, validate_embedder_model
from unstructured_workflow.nodes.enricher import Enricher
from unstructured_workflow.nodes.ordering import check_node_order, validate_node_order
from unstructured_workflow.nodes.partitioners import (
    PartitionerAuto,
    PartitionerFast,
    PartitionerHiRes,
    PartitionerVLM,
    VLMPrompt,
    validate_provider_model,
)

__all__ = [
    "WorkflowNode",
    "PartitionerAuto",
    "PartitionerVLM",
    "PartitionerHiRes",
    "PartitionerFast",
    "VLMPrompt",
    "validate_provider_model",
    "Chunker",
    "ChunkerCharacter",
    "ChunkerTitle",
    "ChunkerPage",
    "ChunkerSimilarity",
    "Embedder",
    "validate_embedder_model",
    "Enricher",
    "decode_node",
    "decode_nodes",
    "encode_nodes",
    "check_node_order",
    "validate_node_order",
]
