"""Python client for the Unstructured platform workflow API.

Manage source and destination connectors, build and validate workflow
pipelines, run them and follow their jobs.
"""

__version__ = "0.1.0"

from unstructured_workflow.errors import (
    APIError,
    DecodeError,
    DuplicateDiscriminatorError,
    EmbedderModelError,
    HTTPValidationError,
    NodeOrderError,
    ProviderModelError,
    RegistryError,
    RequestTimeoutError,
    TransportError,
    UnknownVariantError,
    UnstructuredError,
    ValidationErrorDetail,
)
from unstructured_workflow.models import (
    DESTINATIONS,
    SOURCES,
    ConnectorConfig,
    DestinationConfig,
    SourceConfig,
    VariantRegistry,
    WireModel,
)
from unstructured_workflow.models.resources import (
    ConnectionCheck,
    Destination,
    Job,
    JobDetails,
    JobFailedFiles,
    Source,
    Workflow,
)
from unstructured_workflow.nodes import (
    Chunker,
    ChunkerCharacter,
    ChunkerPage,
    ChunkerSimilarity,
    ChunkerTitle,
    Embedder,
    Enricher,
    PartitionerAuto,
    PartitionerFast,
    PartitionerHiRes,
    PartitionerVLM,
    WorkflowNode,
    check_node_order,
    decode_node,
    decode_nodes,
    encode_nodes,
    validate_node_order,
)
from unstructured_workflow.codec import (
    decode_destination,
    decode_destination_config,
    decode_source,
    decode_source_config,
    encode_connector,
)
from unstructured_workflow.payloads import (
    CreateWorkflowRequest,
    InputFile,
    ListJobsRequest,
    ListWorkflowsRequest,
    UpdateWorkflowRequest,
)
from unstructured_workflow.transport import AsyncDownloadStream, DownloadStream
from unstructured_workflow.client import AsyncUnstructuredClient, UnstructuredClient
from unstructured_workflow.loader import WorkflowDefinition, load_workflow

__all__ = [
    "__version__",
    # Clients
    "UnstructuredClient",
    "AsyncUnstructuredClient",
    "DownloadStream",
    "AsyncDownloadStream",
    # Errors
    "UnstructuredError",
    "TransportError",
    "RequestTimeoutError",
    "APIError",
    "HTTPValidationError",
    "ValidationErrorDetail",
    "DecodeError",
    "UnknownVariantError",
    "RegistryError",
    "DuplicateDiscriminatorError",
    "NodeOrderError",
    "EmbedderModelError",
    "ProviderModelError",
    # Models
    "WireModel",
    "VariantRegistry",
    "ConnectorConfig",
    "SourceConfig",
    "DestinationConfig",
    "SOURCES",
    "DESTINATIONS",
    "Source",
    "Destination",
    "ConnectionCheck",
    "Workflow",
    "Job",
    "JobDetails",
    "JobFailedFiles",
    # Nodes
    "WorkflowNode",
    "PartitionerAuto",
    "PartitionerVLM",
    "PartitionerHiRes",
    "PartitionerFast",
    "Chunker",
    "ChunkerCharacter",
    "ChunkerTitle",
    "ChunkerPage",
    "ChunkerSimilarity",
    "Embedder",
    "Enricher",
    "check_node_order",
    "validate_node_order",
    "decode_node",
    "decode_nodes",
    "encode_nodes",
    # Codec
    "encode_connector",
    "decode_source_config",
    "decode_destination_config",
    "decode_source",
    "decode_destination",
    # Requests
    "CreateWorkflowRequest",
    "UpdateWorkflowRequest",
    "ListWorkflowsRequest",
    "ListJobsRequest",
    "InputFile",
    # Loader
    "WorkflowDefinition",
    "load_workflow",
]
