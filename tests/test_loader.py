"""Tests for loading workflow definitions from files."""

import json

import pytest

from conftest import WORKFLOW_NODES
from unstructured_workflow.errors import EmbedderModelError, UnknownVariantError
from unstructured_workflow.loader import WorkflowDefinition, load_workflow, parse_workflow
from unstructured_workflow.nodes import ChunkerTitle, Embedder, PartitionerFast, PartitionerVLM

PIPELINE_YAML = """\
name: invoices
source_id: src-1
destination_id: dst-1
schedule: weekly
workflow_nodes:
  - name: Partitioner
    type: partition
    subtype: hi_res
    settings:
      strategy: hi_res
      ocr_languages: [eng]
  - name: Image descriptions
    type: prompter
    subtype: openai_image_description
  - name: Chunker
    type: chunk
    subtype: chunk_by_title
    settings:
      max_characters: 1200
  - name: Embedder
    type: embed
    subtype: azure_openai
    settings:
      model_name: text-embedding-3-large
"""


class TestLoadWorkflow:
    """Tests for load_workflow."""

    def test_yaml_mapping(self, tmp_path):
        path = tmp_path / "pipeline.yaml"
        path.write_text(PIPELINE_YAML)
        definition = load_workflow(path)

        assert definition.name == "invoices"
        assert definition.source_id == "src-1"
        assert definition.schedule == "weekly"
        assert len(definition.nodes) == 4
        assert definition.validate() == []

    def test_json_node_list(self, tmp_path):
        path = tmp_path / "nodes.json"
        path.write_text(json.dumps(WORKFLOW_NODES))
        definition = load_workflow(path)
        assert [type(n) for n in definition.nodes] == [PartitionerFast, ChunkerTitle, Embedder]
        assert definition.path == path

    def test_name_defaults_to_file_stem(self, tmp_path):
        path = tmp_path / "contracts.yml"
        path.write_text(json.dumps({"workflow_nodes": WORKFLOW_NODES}))
        assert load_workflow(path).name == "contracts"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_workflow(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("workflow_nodes: [unclosed")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_workflow(path)

    def test_missing_nodes(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("name: nothing\n")
        with pytest.raises(ValueError, match="workflow_nodes"):
            load_workflow(path)

    def test_scalar_document(self, tmp_path):
        path = tmp_path / "scalar.yaml"
        path.write_text("just a string\n")
        with pytest.raises(ValueError, match="node list or a mapping"):
            load_workflow(path)

    def test_unknown_node(self, tmp_path):
        path = tmp_path / "unknown.yaml"
        path.write_text("- {name: x, type: partition, subtype: telepathy}\n")
        with pytest.raises(UnknownVariantError):
            load_workflow(path)

    def test_bad_embedder_model_reported_by_validate(self, tmp_path):
        """A wrong embedder model loads, then shows up next to ordering problems."""
        path = tmp_path / "embed.yaml"
        path.write_text(
            "- {name: p, type: partition, subtype: fast}\n"
            "- {name: e, type: embed, subtype: bedrock, settings: {model_name: voyage-3}}\n"
        )
        definition = load_workflow(path)
        assert definition.validate() == [
            "embed must be after chunk",
            "node 1: invalid model voyage-3 for Bedrock embedder",
        ]

    def test_bad_embedder_model_blocks_create(self, tmp_path):
        path = tmp_path / "embed.yaml"
        path.write_text(
            "- {name: p, type: partition, subtype: fast}\n"
            "- {name: c, type: chunk, subtype: chunk_by_title}\n"
            "- {name: e, type: embed, subtype: bedrock, settings: {model_name: voyage-3}}\n"
        )
        request = load_workflow(path).to_create_request()
        with pytest.raises(EmbedderModelError):
            request.body()


class TestWorkflowDefinition:
    """Tests for local validation and request building."""

    def test_validate_reports_order_problems(self):
        definition = parse_workflow(list(reversed(WORKFLOW_NODES)))
        errors = definition.validate()
        assert "first node must be a partitioner" in errors

    def test_validate_reports_model_problems(self):
        definition = WorkflowDefinition(
            nodes=[
                PartitionerVLM(provider="openai", model="claude-3-7-sonnet-20250219"),
                ChunkerTitle(),
                Embedder(subtype="togetherai", model_name="voyage-3"),
            ]
        )
        assert definition.validate() == [
            "node 0: invalid model claude-3-7-sonnet-20250219 for provider openai",
            "node 2: invalid model voyage-3 for TogetherAI embedder",
        ]

    def test_to_create_request(self, tmp_path):
        path = tmp_path / "pipeline.yaml"
        path.write_text(PIPELINE_YAML)
        body = load_workflow(path).to_create_request().body()
        assert body["name"] == "invoices"
        assert body["workflow_type"] == "custom"
        assert body["destination_id"] == "dst-1"
        assert body["workflow_nodes"][0]["settings"]["ocr_languages"] == ["eng"]
        assert "reprocess_all" not in body
