"""Shared pydantic base for everything that travels over the wire."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict

from unstructured_workflow.errors import DecodeError


class WireModel(BaseModel):
    """Base model for API payloads.

    Optional fields default to ``None``, which means "absent" and is dropped
    from the wire form. Any other value, including ``""``, ``False``, ``0`` and
    ``[]``, is present and always sent.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        use_enum_values=True,
    )

    def to_wire(self, **kwargs: Any) -> dict[str, Any]:
        """Dump to a JSON-ready dict with absent optionals omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True, **kwargs)


def load_json(raw: Any, operation: str) -> Any:
    """Parse ``raw`` if it is JSON text or bytes, otherwise return it unchanged."""
    if isinstance(raw, (bytes, bytearray, str)):
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise DecodeError(f"failed to unmarshal {operation}: {e}", operation, e) from e
    return raw
