"""API resources grouped by endpoint collection."""

from .base import Resource
from .connectors import DestinationsResource, SourcesResource
from .jobs import JobsResource
from .workflows import WorkflowsResource

__all__ = [
    "Resource",
    "SourcesResource",
    "DestinationsResource",
    "WorkflowsResource",
    "JobsResource",
]
