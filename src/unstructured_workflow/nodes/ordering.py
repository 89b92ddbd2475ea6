"""Workflow node ordering rules.

A workflow starts with exactly one partitioner. Chunkers follow a partitioner
or an enricher, embedders follow a chunker, and enrichers follow a
partitioner or another enricher but can never end the pipeline. Each kind of
enrichment (image, table, NER) may appear at most once.
"""

from collections.abc import Sequence

from unstructured_workflow.errors import NodeOrderError
from unstructured_workflow.models.enums import NodeType
from unstructured_workflow.nodes.base import WorkflowNode
from unstructured_workflow.nodes.chunkers import Chunker
from unstructured_workflow.nodes.embedder import Embedder
from unstructured_workflow.nodes.enricher import Enricher
from unstructured_workflow.nodes.partitioners import PARTITIONERS

PARTITION = NodeType.PARTITION.value
CHUNK = NodeType.CHUNK.value
EMBED = NodeType.EMBED.value
ENRICH = NodeType.ENRICH.value


def _is_partitioner(node: object) -> bool:
    return isinstance(node, PARTITIONERS)


def check_node_order(nodes: Sequence[WorkflowNode]) -> list[str]:
    """Check node order.

    Args:
        nodes: Workflow nodes in pipeline order

    Returns:
        List of violations (empty if valid)
    """
    if not nodes:
        return ["first node must be a partitioner"]

    errors = []
    if not _is_partitioner(nodes[0]):
        errors.append("first node must be a partitioner")

    last = PARTITION
    saw_image = saw_table = saw_ner = False
    final = len(nodes) - 1

    for i, node in enumerate(nodes[1:], start=1):
        if _is_partitioner(node):
            errors.append("only the first node may be a partitioner")

        elif isinstance(node, Chunker):
            if last not in (PARTITION, ENRICH):
                errors.append(f"{CHUNK} must be after {PARTITION} or {ENRICH}")
            last = CHUNK

        elif isinstance(node, Embedder):
            if last != CHUNK:
                errors.append(f"{EMBED} must be after {CHUNK}")
            last = EMBED

        elif isinstance(node, Enricher):
            if i == final:
                errors.append(f"{ENRICH} must not be the last node")
            if last not in (PARTITION, ENRICH):
                errors.append(f"{ENRICH} must be after {PARTITION} or {ENRICH}")

            if node.is_image:
                if saw_image:
                    errors.append("only one image enrichment is allowed")
                saw_image = True
            if node.is_table:
                if saw_table:
                    errors.append("only one table enrichment is allowed")
                saw_table = True
            if node.is_ner:
                if saw_ner:
                    errors.append("only one NER enrichment is allowed")
                saw_ner = True

            last = ENRICH

        else:
            errors.append(f"invalid node type {type(node).__name__} at index {i}")

    return errors


def validate_node_order(nodes: Sequence[WorkflowNode]) -> None:
    """Raise NodeOrderError carrying every ordering violation in ``nodes``."""
    errors = check_node_order(nodes)
    if errors:
        raise NodeOrderError(errors)
