"""Load workflow definitions from YAML or JSON files.

A file holds either a bare list of node envelopes or a mapping::

    name: invoices
    workflow_type: custom
    source_id: 0b5c...
    destination_id: 77aa...
    workflow_nodes:
      - {name: Partitioner, type: partition, subtype: fast, settings: {}}
      - {name: Chunker, type: chunk, subtype: chunk_by_title, settings: {}}
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from unstructured_workflow.errors import EmbedderModelError, ProviderModelError
from unstructured_workflow.nodes.base import WorkflowNode
from unstructured_workflow.nodes.codec import decode_nodes
from unstructured_workflow.nodes.ordering import check_node_order
from unstructured_workflow.payloads import CreateWorkflowRequest

logger = logging.getLogger(__name__)


@dataclass
class WorkflowDefinition:
    """A workflow read from disk, ready to be validated or created."""

    nodes: list[WorkflowNode]
    name: str = ""
    workflow_type: str = "custom"
    source_id: str | None = None
    destination_id: str | None = None
    schedule: str | None = None
    reprocess_all: bool | None = None
    path: Path | None = field(default=None, compare=False)

    def validate(self) -> list[str]:
        """Return ordering and provider model problems (empty if valid)."""
        errors = check_node_order(self.nodes)
        for i, node in enumerate(self.nodes):
            try:
                node.validate_model()
            except (EmbedderModelError, ProviderModelError) as e:
                errors.append(f"node {i}: {e.message}")
        return errors

    def to_create_request(self) -> CreateWorkflowRequest:
        return CreateWorkflowRequest(
            name=self.name,
            workflow_type=self.workflow_type,
            source_id=self.source_id,
            destination_id=self.destination_id,
            workflow_nodes=self.nodes,
            schedule=self.schedule,
            reprocess_all=self.reprocess_all,
        )


def parse_workflow(data: Any, path: Path | None = None) -> WorkflowDefinition:
    """Build a definition from already-parsed YAML/JSON data.

    Provider models are not checked here; :meth:`WorkflowDefinition.validate`
    reports them together with ordering problems.
    """
    if isinstance(data, list):
        return WorkflowDefinition(nodes=decode_nodes(data, check_models=False), path=path)

    if not isinstance(data, dict):
        raise ValueError("Workflow file must contain a node list or a mapping")
    if "workflow_nodes" not in data:
        raise ValueError("Missing required field: workflow_nodes")

    return WorkflowDefinition(
        nodes=decode_nodes(data["workflow_nodes"], check_models=False),
        name=data.get("name") or (path.stem if path else ""),
        workflow_type=data.get("workflow_type") or "custom",
        source_id=data.get("source_id"),
        destination_id=data.get("destination_id"),
        schedule=data.get("schedule"),
        reprocess_all=data.get("reprocess_all"),
        path=path,
    )


def load_workflow(path: str | Path) -> WorkflowDefinition:
    """Load a workflow definition from a ``.yaml``, ``.yml`` or ``.json`` file.

    JSON is a subset of YAML, so both go through ``yaml.safe_load``.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file is not valid YAML/JSON or has the wrong shape
        UnknownVariantError: If a node has an unknown type or subtype
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Workflow file not found: {path}")

    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

    definition = parse_workflow(data, path)
    logger.debug("Loaded %d nodes from %s", len(definition.nodes), path)
    return definition
