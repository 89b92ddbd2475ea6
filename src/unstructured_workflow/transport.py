"""HTTP transport for the workflow API.

Resources describe each request as a :class:`Call`. :class:`Transport` and
:class:`AsyncTransport` execute a call with httpx, map failures onto the
client's error types and decode the body. Every call is a single attempt.
"""

import logging
import time
from collections.abc import AsyncIterator, Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any

import httpx
from pydantic import ValidationError

from unstructured_workflow.config.settings import DEFAULT_API_URL
from unstructured_workflow.errors import (
    APIError,
    DecodeError,
    HTTPValidationError,
    RequestTimeoutError,
    TransportError,
)

logger = logging.getLogger(__name__)

API_KEY_HEADER = "Unstructured-API-Key"
USER_AGENT = "unstructured-workflow-python"


@dataclass
class TransportConfig:
    """Immutable settings shared by every request of a client.

    Attributes:
        base_url: Workflow endpoint root, e.g. ``https://platform.unstructuredapp.io/api/v1``
        api_key: Value for the ``Unstructured-API-Key`` header
        timeout: Default timeout in seconds
        headers: Extra headers sent with every request
    """

    base_url: str = DEFAULT_API_URL
    api_key: str | None = None
    timeout: float = 60.0
    headers: dict[str, str] = field(default_factory=dict)


class APIKeyAuth(httpx.Auth):
    """Attach the platform API key to each request."""

    def __init__(self, api_key: str | None):
        self.api_key = api_key

    def auth_flow(self, request: httpx.Request):
        if self.api_key:
            request.headers[API_KEY_HEADER] = self.api_key
        yield request


@dataclass(frozen=True)
class Call:
    """One API operation.

    Attributes:
        operation: Human name used in errors and logs, e.g. ``"get job"``
        method: HTTP method
        path: Path below the base URL, starting with ``/``
        params: Query parameters (``None`` values are dropped)
        json: JSON request body
        files: Multipart files as ``(field, (filename, content, content_type))``
        decode: Applied to the parsed JSON body; ``None`` discards the body
        stream: Return a :class:`DownloadStream` instead of decoding
        timeout: Per-call timeout overriding the client default
    """

    operation: str
    method: str
    path: str
    params: dict[str, Any] | None = None
    json: Any = None
    files: list[tuple[str, tuple[str, Any, str]]] | None = None
    decode: Callable[[Any], Any] | None = None
    stream: bool = False
    timeout: float | None = None


def _query(params: dict[str, Any] | None) -> dict[str, Any] | None:
    if not params:
        return None
    return {k: v for k, v in params.items() if v is not None}


def _api_error(call: Call, response: httpx.Response) -> APIError:
    body = response.text
    validation = None
    if response.status_code == 422:
        try:
            validation = HTTPValidationError.from_body(response.json())
        except ValueError:
            validation = None
    logger.warning(
        "%s %s failed with status %d",
        call.method,
        call.path,
        response.status_code,
        extra={"operation": call.operation, "status_code": response.status_code},
    )
    return APIError(response.status_code, body, validation, call.operation)


def _decode(call: Call, response: httpx.Response) -> Any:
    if call.decode is None:
        return None
    try:
        data = response.json()
    except ValueError as e:
        message = f"failed to {call.operation}: invalid JSON response"
        raise DecodeError(message, call.operation, e) from e
    try:
        return call.decode(data)
    except ValidationError as e:
        raise DecodeError(f"failed to {call.operation}: {e}", call.operation, e) from e


def _log_response(call: Call, response: httpx.Response, started: float) -> None:
    duration_ms = (time.perf_counter() - started) * 1000
    logger.debug(
        "%s %s -> %d (%.1fms)",
        call.method,
        call.path,
        response.status_code,
        duration_ms,
        extra={
            "operation": call.operation,
            "method": call.method,
            "path": call.path,
            "status_code": response.status_code,
            "duration_ms": round(duration_ms, 1),
        },
    )


class _BaseTransport:
    def __init__(self, config: TransportConfig):
        self.config = config
        self.auth = APIKeyAuth(config.api_key)

    def _url(self, path: str) -> str:
        return self.config.base_url.rstrip("/") + path

    def _request_kwargs(self, call: Call) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"params": _query(call.params)}
        if call.json is not None:
            kwargs["json"] = call.json
        if call.files:
            kwargs["files"] = call.files
        if call.timeout is not None:
            kwargs["timeout"] = call.timeout
        return kwargs

    def _transport_error(self, call: Call, exc: httpx.RequestError) -> TransportError:
        if isinstance(exc, httpx.TimeoutException):
            logger.warning("%s %s timed out", call.method, call.path)
            return RequestTimeoutError(f"failed to {call.operation}: request timed out", exc)
        logger.warning("%s %s failed: %s", call.method, call.path, exc)
        return TransportError(f"failed to {call.operation}: {exc}", exc)


class Transport(_BaseTransport):
    """Blocking transport over :class:`httpx.Client`.

    Pass ``client`` to reuse an existing httpx client (it is not closed by
    :meth:`close`), or ``transport`` to plug in e.g. ``httpx.MockTransport``.
    """

    def __init__(
        self,
        config: TransportConfig,
        client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        super().__init__(config)
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=config.timeout,
            headers={"User-Agent": USER_AGENT, **config.headers},
            transport=transport,
        )

    def execute(self, call: Call) -> Any:
        request = self._client.build_request(
            call.method, self._url(call.path), **self._request_kwargs(call)
        )
        started = time.perf_counter()
        try:
            response = self._client.send(request, auth=self.auth, stream=True)
        except httpx.RequestError as e:
            raise self._transport_error(call, e) from e
        _log_response(call, response, started)

        if call.stream and response.is_success:
            return DownloadStream(response)

        try:
            response.read()
        except httpx.RequestError as e:
            raise self._transport_error(call, e) from e
        finally:
            response.close()

        if not response.is_success:
            raise _api_error(call, response)
        return _decode(call, response)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


class AsyncTransport(_BaseTransport):
    """Asyncio transport over :class:`httpx.AsyncClient`.

    Cancelling the awaiting task aborts the in-flight request and lets
    :class:`asyncio.CancelledError` propagate unchanged.
    """

    def __init__(
        self,
        config: TransportConfig,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(config)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=config.timeout,
            headers={"User-Agent": USER_AGENT, **config.headers},
            transport=transport,
        )

    async def execute(self, call: Call) -> Any:
        request = self._client.build_request(
            call.method, self._url(call.path), **self._request_kwargs(call)
        )
        started = time.perf_counter()
        try:
            response = await self._client.send(request, auth=self.auth, stream=True)
        except httpx.RequestError as e:
            raise self._transport_error(call, e) from e
        _log_response(call, response, started)

        if call.stream and response.is_success:
            return AsyncDownloadStream(response)

        try:
            await response.aread()
        except httpx.RequestError as e:
            raise self._transport_error(call, e) from e
        finally:
            await response.aclose()

        if not response.is_success:
            raise _api_error(call, response)
        return _decode(call, response)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()


# Downloads


class DownloadStream:
    """Caller-owned body of a job download.

    Close it on every path, preferably with ``with``::

        with client.jobs.download(job_id, node_id=..., file_id=...) as stream:
            stream.write_to("output.json")
    """

    def __init__(self, response: httpx.Response):
        self._response = response

    @property
    def content_type(self) -> str | None:
        return self._response.headers.get("content-type")

    @property
    def closed(self) -> bool:
        return self._response.is_closed

    def iter_bytes(self, chunk_size: int | None = None) -> Iterator[bytes]:
        return self._response.iter_bytes(chunk_size)

    def read(self) -> bytes:
        try:
            return self._response.read()
        finally:
            self.close()

    def write_to(self, target: str | Path | IO[bytes], chunk_size: int = 64 * 1024) -> int:
        """Copy the body to a path or binary file object; return bytes written."""
        written = 0
        try:
            if isinstance(target, (str, Path)):
                with open(target, "wb") as fh:
                    for chunk in self._response.iter_bytes(chunk_size):
                        written += fh.write(chunk)
            else:
                for chunk in self._response.iter_bytes(chunk_size):
                    written += target.write(chunk)
        finally:
            self.close()
        return written

    def close(self) -> None:
        self._response.close()

    def __enter__(self) -> "DownloadStream":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class AsyncDownloadStream:
    """Caller-owned body of a job download for the async client."""

    def __init__(self, response: httpx.Response):
        self._response = response

    @property
    def content_type(self) -> str | None:
        return self._response.headers.get("content-type")

    @property
    def closed(self) -> bool:
        return self._response.is_closed

    def aiter_bytes(self, chunk_size: int | None = None) -> AsyncIterator[bytes]:
        return self._response.aiter_bytes(chunk_size)

    async def read(self) -> bytes:
        try:
            return await self._response.aread()
        finally:
            await self.aclose()

    async def aclose(self) -> None:
        await self._response.aclose()

    async def __aenter__(self) -> "AsyncDownloadStream":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
