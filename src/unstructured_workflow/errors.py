"""Unstructured Workflow Error Hierarchy.

Structured exception types for the client library.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any


class UnstructuredError(Exception):
    """Base error for all client exceptions."""

    code = "UNSTRUCTURED_ERROR"

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Transport Errors
class TransportError(UnstructuredError):
    """The HTTP request could not be completed (DNS, connect, protocol)."""

    code = "TRANSPORT_ERROR"

    def __init__(self, message: str, cause: Exception | None = None):
        details = {}
        if cause is not None:
            details["cause"] = str(cause)
        super().__init__(message, details)
        self.cause = cause


class RequestTimeoutError(TransportError):
    """The HTTP request exceeded its timeout."""

    code = "TIMEOUT"


# API Errors
class ValidationErrorDetail:
    """A single entry of a 422 ``detail`` array."""

    def __init__(self, loc: list[Any] | None = None, msg: str = "", type: str = ""):
        # loc may mix field names and list indices
        self.loc = list(loc or [])
        self.msg = msg
        self.type = type

    @classmethod
    def from_dict(cls, data: dict) -> ValidationErrorDetail:
        return cls(loc=data.get("loc"), msg=data.get("msg", ""), type=data.get("type", ""))

    def __str__(self) -> str:
        return f"{self.type} at {self.loc}: {self.msg}"

    def __repr__(self) -> str:
        return f"ValidationErrorDetail(loc={self.loc!r}, msg={self.msg!r}, type={self.type!r})"


class HTTPValidationError(UnstructuredError):
    """Structured body of a 422 Unprocessable Entity response."""

    code = "HTTP_VALIDATION"

    def __init__(self, detail: list[ValidationErrorDetail]):
        self.detail = list(detail)
        joined = "\n".join(str(d) for d in self.detail)
        super().__init__(
            f"{len(self.detail)} validation errors: {joined}",
            {"detail": [vars(d) for d in self.detail]},
        )

    @classmethod
    def from_body(cls, body: Any) -> HTTPValidationError | None:
        """Build from a decoded 422 body, or None if it has the wrong shape."""
        if not isinstance(body, dict) or not isinstance(body.get("detail"), list):
            return None
        if not all(isinstance(item, dict) for item in body["detail"]):
            return None
        return cls([ValidationErrorDetail.from_dict(item) for item in body["detail"]])

    def __len__(self) -> int:
        return len(self.detail)

    def __iter__(self) -> Iterator[ValidationErrorDetail]:
        return iter(self.detail)


class APIError(UnstructuredError):
    """The API answered with a non-2xx status."""

    code = "API_ERROR"

    def __init__(
        self,
        status_code: int,
        body: str = "",
        validation: HTTPValidationError | None = None,
        operation: str | None = None,
    ):
        reason = str(validation) if validation is not None else body
        message = f"API error occurred: status {status_code}: {reason}"
        if operation:
            message = f"failed to {operation}: {message}"
        super().__init__(
            message,
            {"status_code": status_code, "body": body, "operation": operation},
        )
        self.status_code = status_code
        self.body = body
        self.validation = validation
        self.operation = operation

    @property
    def is_validation_error(self) -> bool:
        return self.validation is not None


# Decode Errors
class DecodeError(UnstructuredError):
    """A response body was not valid JSON or did not match the expected shape."""

    code = "DECODE_ERROR"

    def __init__(self, message: str, operation: str | None = None, cause: Exception | None = None):
        details: dict[str, Any] = {"operation": operation}
        if cause is not None:
            details["cause"] = str(cause)
        super().__init__(message, details)
        self.operation = operation
        self.cause = cause


class UnknownVariantError(UnstructuredError):
    """A polymorphic discriminator did not match any registered variant."""

    code = "UNKNOWN_VARIANT"

    def __init__(self, registry: str, discriminator: str):
        super().__init__(
            f"unknown {registry} type: {discriminator}",
            {"registry": registry, "discriminator": discriminator},
        )
        self.registry = registry
        self.discriminator = discriminator


class RegistryError(UnstructuredError):
    """A variant registry is inconsistent with the set of variant classes."""

    code = "REGISTRY_ERROR"


class DuplicateDiscriminatorError(RegistryError):
    """Two variants were registered under the same discriminator."""

    code = "DUPLICATE_DISCRIMINATOR"


# Local validation Errors
class NodeOrderError(UnstructuredError):
    """A workflow node sequence broke one or more ordering rules.

    All violations found in the scan are kept; iterate the error or read
    ``errors`` to inspect them one by one.
    """

    code = "NODE_ORDER"

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("\n".join(self.errors), {"errors": self.errors})

    def __iter__(self) -> Iterator[str]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)


class EmbedderModelError(UnstructuredError):
    """An embedder names a model its provider does not offer."""

    code = "EMBEDDER_MODEL"

    def __init__(self, message: str, subtype: str | None = None, model: str | None = None):
        super().__init__(message, {"subtype": subtype, "model": model})
        self.subtype = subtype
        self.model = model


class ProviderModelError(UnstructuredError):
    """A VLM partitioner names a model its provider does not offer."""

    code = "PROVIDER_MODEL"
