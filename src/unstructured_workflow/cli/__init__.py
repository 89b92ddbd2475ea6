"""Command-line interface for the Unstructured workflow client."""

from .main import app

__all__ = ["app"]
