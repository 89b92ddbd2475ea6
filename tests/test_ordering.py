"""Tests for workflow node ordering rules."""

import pytest

from unstructured_workflow.errors import NodeOrderError
from unstructured_workflow.nodes import (
    ChunkerPage,
    ChunkerTitle,
    Embedder,
    Enricher,
    PartitionerAuto,
    PartitionerFast,
    PartitionerHiRes,
    PartitionerVLM,
    check_node_order,
    validate_node_order,
)


def fast():
    return PartitionerFast(name="Partitioner")


def title():
    return ChunkerTitle(name="Chunker")


def embedder():
    return Embedder(name="Embedder", subtype="voyageai", model_name="voyage-3")


def enricher(subtype="openai_image_description"):
    return Enricher(name="Enricher", subtype=subtype)


class TestValidSequences:
    """Sequences that pass every rule."""

    def test_partition_then_chunk(self):
        assert check_node_order([fast(), title()]) == []

    def test_full_pipeline_with_enrichment(self):
        validate_node_order([fast(), enricher(), title(), embedder()])

    def test_partitioner_alone(self):
        assert check_node_order([PartitionerHiRes()]) == []

    @pytest.mark.parametrize("partitioner", [PartitionerAuto, PartitionerVLM, PartitionerHiRes])
    def test_any_partitioner_may_lead(self, partitioner):
        assert check_node_order([partitioner(), title()]) == []

    def test_distinct_enrichment_kinds(self):
        nodes = [
            fast(),
            enricher("openai_image_description"),
            enricher("anthropic_table_description"),
            enricher("openai_ner"),
            title(),
        ]
        assert check_node_order(nodes) == []


class TestInvalidSequences:
    """Sequences breaking one or more rules."""

    def test_empty(self):
        assert check_node_order([]) == ["first node must be a partitioner"]

    def test_missing_partitioner(self):
        errors = check_node_order([title(), embedder()])
        assert "first node must be a partitioner" in errors

    def test_second_partitioner(self):
        errors = check_node_order([fast(), PartitionerHiRes(), title()])
        assert errors == ["only the first node may be a partitioner"]

    def test_duplicate_image_enrichment(self):
        nodes = [
            fast(),
            enricher("openai_image_description"),
            enricher("anthropic_image_description"),
            title(),
        ]
        assert check_node_order(nodes) == ["only one image enrichment is allowed"]

    def test_duplicate_image_enrichment_not_adjacent(self):
        """A different enrichment in between does not reset the image count."""
        nodes = [
            fast(),
            enricher("openai_image_description"),
            enricher("openai_table_description"),
            enricher("anthropic_image_description"),
            title(),
        ]
        assert check_node_order(nodes) == ["only one image enrichment is allowed"]

    def test_one_of_each_enrichment(self):
        nodes = [
            fast(),
            enricher("openai_image_description"),
            enricher("anthropic_table_description"),
            enricher("openai_ner"),
            title(),
        ]
        assert check_node_order(nodes) == []

    def test_duplicate_table_enrichment(self):
        nodes = [fast(), enricher("openai_table2html"), enricher("bedrock_table_description"), title()]
        assert check_node_order(nodes) == ["only one table enrichment is allowed"]

    def test_duplicate_ner_enrichment(self):
        nodes = [fast(), enricher("openai_ner"), enricher("anthropic_ner"), title()]
        assert check_node_order(nodes) == ["only one NER enrichment is allowed"]

    def test_enricher_last_reports_both_violations(self):
        """An enricher after an embedder, at the end, breaks two rules."""
        errors = check_node_order([fast(), title(), embedder(), enricher()])
        assert "prompter must not be the last node" in errors
        assert "prompter must be after partition or prompter" in errors

    def test_embed_without_chunk(self):
        assert check_node_order([fast(), embedder()]) == ["embed must be after chunk"]

    def test_chunk_after_chunk(self):
        assert check_node_order([fast(), title(), ChunkerPage()]) == [
            "chunk must be after partition or prompter"
        ]

    def test_unrecognized_node(self):
        errors = check_node_order([fast(), "not a node"])
        assert errors == ["invalid node type str at index 1"]

    def test_all_violations_accumulated(self):
        """The scan does not stop at the first problem."""
        errors = check_node_order([title(), fast(), embedder(), enricher()])
        assert errors == [
            "first node must be a partitioner",
            "only the first node may be a partitioner",
            "embed must be after chunk",
            "prompter must not be the last node",
            "prompter must be after partition or prompter",
        ]


class TestValidateNodeOrder:
    """Tests for the raising form."""

    def test_raises_aggregate(self):
        with pytest.raises(NodeOrderError) as exc_info:
            validate_node_order([title(), embedder()])
        err = exc_info.value
        assert len(err) >= 1
        assert "first node must be a partitioner" in list(err)
        assert str(err) == "\n".join(err.errors)

    def test_valid_returns_none(self):
        assert validate_node_order([fast(), title()]) is None
