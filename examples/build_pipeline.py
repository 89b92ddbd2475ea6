#!/usr/bin/env python3
"""
build_pipeline.py - Assemble a workflow in code, check it locally, then create it.

Node order and embedder models are checked before anything is sent, so a
broken pipeline never reaches the API. Without UNSTRUCTURED_API_KEY the
script stops after printing the request body.

Run:
    pip install -e .
    python examples/build_pipeline.py
    unstructured-workflow workflows validate examples/pipeline.yaml
    unstructured-workflow workflows create examples/pipeline.yaml --source-id S --destination-id D
"""

import json
import os

from unstructured_workflow import CreateWorkflowRequest, NodeOrderError, UnstructuredClient
from unstructured_workflow.nodes import (
    ChunkerTitle,
    Embedder,
    Enricher,
    PartitionerHiRes,
    check_node_order,
)

# --- Nodes: partition -> enrich -> chunk -> embed ---

nodes = [
    PartitionerHiRes(name="Partitioner", ocr_languages=["eng"], pdf_infer_table_structure=True),
    Enricher(name="Image descriptions", subtype="openai_image_description"),
    ChunkerTitle(name="Chunker", max_characters=1200, overlap=100),
    Embedder(name="Embedder", subtype="azure_openai", model_name="text-embedding-3-small"),
]

# --- Local checks ---

print(f"{len(nodes)} nodes, order problems: {check_node_order(nodes) or 'none'}")

# A chunker ahead of the partitioner is rejected with every rule it breaks
try:
    broken = CreateWorkflowRequest(name="broken", workflow_nodes=[nodes[2], nodes[0], nodes[3]])
    broken.validate_nodes()
except NodeOrderError as e:
    print("Rejected broken pipeline:")
    for problem in e:
        print(f"  - {problem}")

request = CreateWorkflowRequest(
    name="invoices",
    source_id=os.environ.get("SOURCE_ID"),
    destination_id=os.environ.get("DESTINATION_ID"),
    workflow_nodes=nodes,
    schedule="weekly",
)
print(json.dumps(request.body(), indent=2))

# --- Create (needs credentials) ---

if not os.environ.get("UNSTRUCTURED_API_KEY"):
    raise SystemExit("UNSTRUCTURED_API_KEY not set; skipping create")

with UnstructuredClient() as client:
    workflow = client.workflows.create(request)
    print(f"Created {workflow.name} ({workflow.id}) with {len(workflow.workflow_nodes)} nodes")
