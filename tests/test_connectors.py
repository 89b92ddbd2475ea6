"""Tests for connector configurations and the connector codec."""

import json
from datetime import UTC, datetime
from types import UnionType
from typing import Union, get_args, get_origin

import pytest

from conftest import DESTINATION_ENVELOPE, SOURCE_ENVELOPE
from unstructured_workflow.codec import (
    decode_destination,
    decode_destination_config,
    decode_list,
    decode_source,
    decode_source_config,
    encode_connector,
)
from unstructured_workflow.errors import DecodeError, UnknownVariantError
from unstructured_workflow.models.connectors import (
    DESTINATIONS,
    SOURCES,
    ConfluenceSourceConnectorConfig,
    DestinationConfig,
    PineconeDestinationConnectorConfig,
    SnowflakeConnectorConfig,
    S3ConnectorConfig,
    SourceConfig,
    concrete_variants,
)
from unstructured_workflow.models.enums import ConnectorType


def _sample_value(annotation):
    if get_origin(annotation) in (Union, UnionType):
        annotation = next(a for a in get_args(annotation) if a is not type(None))
    if annotation is int:
        return 7
    if annotation is bool:
        return True
    if annotation == list[str]:
        return ["a", "b"]
    return "value"


def _minimal_config(variant):
    """Instance of ``variant`` with every field the API requires filled in."""
    values = {
        name: _sample_value(field.annotation)
        for name, field in variant.model_fields.items()
        if field.get_default(call_default_factory=True) is not None
    }
    return variant(**values)


def _full_config(variant):
    """Instance of ``variant`` with every field, optional ones included, filled in."""
    values = {
        name: _sample_value(field.annotation) for name, field in variant.model_fields.items()
    }
    return variant(**values)


SOURCE_VARIANTS = list(SOURCES.items())
DESTINATION_VARIANTS = list(DESTINATIONS.items())


class TestRegistries:
    """Tests for discriminator coverage."""

    def test_every_source_variant_registered(self):
        registered = {cls for _, cls in SOURCES.items()}
        assert set(concrete_variants(SourceConfig)) <= registered

    def test_every_destination_variant_registered(self):
        registered = {cls for _, cls in DESTINATIONS.items()}
        assert set(concrete_variants(DestinationConfig)) <= registered

    @pytest.mark.parametrize("tag,variant", SOURCE_VARIANTS + DESTINATION_VARIANTS)
    def test_tag_matches_type(self, tag, variant):
        """Each class reports the discriminator it is registered under."""
        assert _minimal_config(variant).type() == tag

    def test_every_tag_is_a_connector_type(self):
        known = {t.value for t in ConnectorType}
        assert set(SOURCES) <= known
        assert set(DESTINATIONS) <= known

    def test_shared_kinds_in_both_registries(self):
        """Kinds usable both ways are one class registered twice."""
        for tag in ("s3", "gcs", "postgres", "snowflake", "couchbase", "elasticsearch",
                    "mongodb", "onedrive", "databricks_volumes", "kafka-cloud"):
            assert SOURCES.lookup(tag) is DESTINATIONS.lookup(tag)

    def test_source_only_not_destination(self):
        assert "confluence" in SOURCES
        assert "confluence" not in DESTINATIONS
        assert "pinecone" in DESTINATIONS
        assert "pinecone" not in SOURCES


class TestRoundTrip:
    """Encode then decode gives back an equal configuration."""

    @pytest.mark.parametrize("tag,variant", SOURCE_VARIANTS)
    def test_source_round_trip(self, tag, variant):
        config = _minimal_config(variant)
        envelope = {"id": "src-1", **encode_connector("my source", config)}
        source = decode_source(json.dumps(envelope))
        assert source.type == tag
        assert type(source.config) is variant
        assert source.config == config

    @pytest.mark.parametrize("tag,variant", DESTINATION_VARIANTS)
    def test_destination_round_trip(self, tag, variant):
        config = _minimal_config(variant)
        envelope = {"id": "dst-1", **encode_connector("my destination", config)}
        destination = decode_destination(envelope)
        assert destination.type == tag
        assert destination.config == config

    @pytest.mark.parametrize("tag,variant", SOURCE_VARIANTS)
    def test_source_round_trip_all_fields(self, tag, variant):
        """Optional fields survive the round trip as well as required ones."""
        config = _full_config(variant)
        source = decode_source({"id": "src-1", **encode_connector("my source", config)})
        assert source.config == config
        assert source.config.model_fields_set == config.model_fields_set

    @pytest.mark.parametrize("tag,variant", DESTINATION_VARIANTS)
    def test_destination_round_trip_all_fields(self, tag, variant):
        config = _full_config(variant)
        destination = decode_destination({"id": "dst-1", **encode_connector("out", config)})
        assert destination.config == config
        assert None not in destination.config.to_wire().values()


class TestEncodeConnector:
    """Tests for create/update bodies."""

    def test_envelope_shape(self):
        config = PineconeDestinationConnectorConfig(index_name="docs", api_key="k", namespace="ns")
        assert encode_connector("vectors", config) == {
            "name": "vectors",
            "type": "pinecone",
            "config": {"index_name": "docs", "api_key": "k", "namespace": "ns"},
        }

    def test_absent_optionals_omitted(self):
        """None means absent and is not sent."""
        body = encode_connector("s3", S3ConnectorConfig(remote_url="s3://b"))
        assert body["config"] == {"remote_url": "s3://b"}

    def test_empty_values_are_sent(self):
        """Empty-but-present values are distinct from absent ones."""
        config = S3ConnectorConfig(remote_url="s3://b", key="", anonymous=False, recursive=False)
        assert encode_connector("s3", config)["config"] == {
            "remote_url": "s3://b",
            "key": "",
            "anonymous": False,
            "recursive": False,
        }

    def test_zero_and_empty_list_sent(self):
        config = ConfluenceSourceConnectorConfig(
            url="https://wiki",
            username="me",
            max_num_of_spaces=0,
            max_num_of_docs_from_each_space=0,
            spaces=[],
        )
        wire = encode_connector("wiki", config)["config"]
        assert wire["max_num_of_spaces"] == 0
        assert wire["spaces"] == []

    def test_schema_alias(self):
        """Fields shadowing pydantic names travel under their wire name."""
        config = SnowflakeConnectorConfig.model_validate(
            {"account": "acct", "role": "r", "user": "u", "password": "p",
             "host": "h", "database": "d", "schema": "public"}
        )
        wire = config.to_wire()
        assert wire["schema"] == "public"
        assert "schema_" not in wire


class TestDecode:
    """Tests for envelope decoding."""

    def test_decode_source(self):
        source = decode_source(SOURCE_ENVELOPE)
        assert source.id == "src-1"
        assert isinstance(source.config, S3ConnectorConfig)
        assert source.config.anonymous is False
        assert source.config.key is None

    def test_naive_timestamp_is_utc(self):
        source = decode_source(SOURCE_ENVELOPE)
        assert source.created_at == datetime(2025, 1, 1, 10, 0, tzinfo=UTC)
        assert source.updated_at.tzinfo is not None

    def test_decode_destination_from_bytes(self):
        destination = decode_destination(json.dumps(DESTINATION_ENVELOPE).encode())
        assert isinstance(destination.config, PineconeDestinationConnectorConfig)
        assert destination.config.namespace == "default"

    def test_unknown_source_type(self):
        with pytest.raises(UnknownVariantError, match="unknown source type: totally-bogus-xyz"):
            decode_source({**SOURCE_ENVELOPE, "type": "totally-bogus-xyz"})

    def test_destination_type_not_a_source(self):
        """Registries are separate: a destination tag is unknown to sources."""
        with pytest.raises(UnknownVariantError):
            decode_source(DESTINATION_ENVELOPE)

    def test_missing_type(self):
        envelope = {k: v for k, v in SOURCE_ENVELOPE.items() if k != "type"}
        with pytest.raises(UnknownVariantError):
            decode_source(envelope)

    def test_invalid_json(self):
        with pytest.raises(DecodeError) as exc_info:
            decode_source("{not json")
        assert exc_info.value.operation == "source"
        assert exc_info.value.cause is not None

    def test_not_an_object(self):
        with pytest.raises(DecodeError, match="expected object"):
            decode_source("[1, 2]")

    @pytest.mark.parametrize("tag,variant", SOURCE_VARIANTS)
    def test_minimal_source_envelope(self, tag, variant):
        """An empty config decodes to the variant with zero-valued required fields."""
        source = decode_source({"id": "x", "name": "n", "type": tag, "config": {}})
        assert type(source.config) is variant
        assert source.config.type() == tag

    @pytest.mark.parametrize("tag,variant", DESTINATION_VARIANTS)
    def test_minimal_destination_envelope(self, tag, variant):
        destination = decode_destination({"id": "x", "name": "n", "type": tag, "config": {}})
        assert type(destination.config) is variant

    def test_required_fields_sent_when_zero(self):
        """Zero-valued required fields stay on the wire."""
        config = decode_source({"id": "x", "name": "n", "type": "postgres", "config": {}}).config
        wire = config.to_wire()
        assert wire["host"] == ""
        assert wire["port"] == 0
        assert "id_column" not in wire

    def test_config_shape_mismatch(self):
        """A field of the wrong type is a decode error."""
        with pytest.raises(DecodeError, match="s3"):
            decode_source({**SOURCE_ENVELOPE, "config": {"remote_url": ["not", "a", "url"]}})

    def test_envelope_shape_mismatch(self):
        envelope = {k: v for k, v in SOURCE_ENVELOPE.items() if k != "id"}
        with pytest.raises(DecodeError):
            decode_source(envelope)

    def test_unknown_config_fields_ignored(self):
        envelope = {**SOURCE_ENVELOPE, "config": {**SOURCE_ENVELOPE["config"], "new_field": 1}}
        assert decode_source(envelope).config.remote_url == "s3://bucket/invoices"

    def test_decode_bare_configs(self):
        assert isinstance(
            decode_source_config("s3", {"remote_url": "s3://b"}), S3ConnectorConfig
        )
        assert isinstance(
            decode_destination_config("s3", {"remote_url": "s3://b"}), S3ConnectorConfig
        )

    def test_source_dumps_concrete_config(self):
        """Serialising a Source keeps the concrete config's fields."""
        wire = decode_source(SOURCE_ENVELOPE).to_wire()
        assert wire["config"]["remote_url"] == "s3://bucket/invoices"
        assert wire["type"] == "s3"


class TestDecodeList:
    """Tests for list responses."""

    def test_empty_list(self):
        assert decode_list("[]", decode_source, "sources") == []

    def test_null_body(self):
        assert decode_list(None, decode_source, "sources") == []

    def test_items_decoded_in_order(self):
        second = {**SOURCE_ENVELOPE, "id": "src-2"}
        sources = decode_list([SOURCE_ENVELOPE, second], decode_source, "sources")
        assert [s.id for s in sources] == ["src-1", "src-2"]

    def test_not_a_list(self):
        with pytest.raises(DecodeError, match="expected a list"):
            decode_list({"items": []}, decode_source, "sources")
