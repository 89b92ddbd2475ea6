"""Wire models shared by the client: enums, connector configs and registries.

Response models that embed workflow nodes live in
:mod:`unstructured_workflow.models.resources`.
"""

from .base import WireModel
from .connectors import (
    DESTINATIONS,
    SOURCES,
    ConnectorConfig,
    DestinationConfig,
    SourceConfig,
)
from .registry import VariantRegistry

__all__ = [
    "WireModel",
    "VariantRegistry",
    "ConnectorConfig",
    "SourceConfig",
    "DestinationConfig",
    "SOURCES",
    "DESTINATIONS",
]
