"""Encoding and decoding of source and destination envelopes.

An envelope is ``{"id", "name", "created_at", "updated_at", "type", "config"}``.
Only the ``type`` discriminator is looked at before the nested ``config`` is
handed to the registered configuration class.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from unstructured_workflow.errors import DecodeError
from unstructured_workflow.models.base import load_json
from unstructured_workflow.models.connectors import (
    DESTINATIONS,
    SOURCES,
    ConnectorConfig,
    DestinationConfig,
    SourceConfig,
)
from unstructured_workflow.models.registry import VariantRegistry
from unstructured_workflow.models.resources import Destination, Source

logger = logging.getLogger(__name__)


def encode_connector(name: str, config: ConnectorConfig) -> dict[str, Any]:
    """Build the create/update body for a connector.

    The platform treats an update as a full replacement: optional fields left
    as ``None`` are omitted and the server resets them, they are not kept
    unchanged. Set ``""``, ``False``, ``0`` or ``[]`` to send an explicit
    empty value.
    """
    return {"name": name, "type": config.type(), "config": config.to_wire()}


def _decode_config(registry: VariantRegistry, connector_type: str, config: Any) -> Any:
    variant = registry.lookup(connector_type)
    try:
        return variant.model_validate(config if config is not None else {})
    except ValidationError as e:
        raise DecodeError(
            f"failed to unmarshal {connector_type} config: {e}", f"{registry.name} config", e
        ) from e


def decode_source_config(connector_type: str, config: Any) -> SourceConfig:
    """Decode a bare source ``config`` object for the given discriminator."""
    return _decode_config(SOURCES, connector_type, config)


def decode_destination_config(connector_type: str, config: Any) -> DestinationConfig:
    """Decode a bare destination ``config`` object for the given discriminator."""
    return _decode_config(DESTINATIONS, connector_type, config)


def _decode_envelope(raw: Any, registry: VariantRegistry, model: type, what: str) -> Any:
    data = load_json(raw, what)
    if not isinstance(data, dict):
        raise DecodeError(
            f"failed to unmarshal {what}: expected object, got {type(data).__name__}", what
        )
    # Dispatch first so an unknown type is reported as such, not as a shape error.
    config = _decode_config(registry, data.get("type") or "", data.get("config"))
    try:
        return model.model_validate({**data, "config": config})
    except ValidationError as e:
        raise DecodeError(f"failed to unmarshal {what}: {e}", what, e) from e


def decode_source(raw: Any) -> Source:
    """Decode a source envelope from JSON text, bytes or a parsed dict.

    Raises:
        UnknownVariantError: if ``type`` names no known source connector.
        DecodeError: if the body is not JSON or does not fit the connector's shape.
    """
    return _decode_envelope(raw, SOURCES, Source, "source")


def decode_destination(raw: Any) -> Destination:
    """Decode a destination envelope from JSON text, bytes or a parsed dict."""
    return _decode_envelope(raw, DESTINATIONS, Destination, "destination")


def decode_list(raw: Any, decode, what: str) -> list:
    """Decode a JSON array with ``decode`` applied to each item."""
    items = load_json(raw, what)
    if items is None:
        return []
    if not isinstance(items, list):
        raise DecodeError(f"failed to unmarshal {what}: expected a list", what)
    logger.debug("Decoding %d %s", len(items), what)
    return [decode(item) for item in items]
