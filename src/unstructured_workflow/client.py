"""Clients for the Unstructured platform workflow API."""

import logging
from typing import Any

import httpx

from unstructured_workflow.config.settings import Settings, get_settings
from unstructured_workflow.resources import (
    DestinationsResource,
    JobsResource,
    SourcesResource,
    WorkflowsResource,
)
from unstructured_workflow.transport import AsyncTransport, Transport, TransportConfig

logger = logging.getLogger(__name__)


def _transport_config(
    api_key: str | None,
    base_url: str | None,
    timeout: float | None,
    headers: dict[str, str] | None,
    settings: Settings | None,
) -> TransportConfig:
    """Explicit arguments win over settings (env vars, .env, unstructured.yaml)."""
    settings = settings or get_settings()
    config = TransportConfig(
        base_url=(base_url or settings.api_url).rstrip("/"),
        api_key=api_key if api_key is not None else settings.api_key,
        timeout=timeout if timeout is not None else settings.timeout,
        headers=dict(headers or {}),
    )
    if not config.api_key:
        logger.warning("No API key configured; set UNSTRUCTURED_API_KEY or pass api_key")
    return config


class UnstructuredClient:
    """Blocking client.

    Example:
        with UnstructuredClient(api_key="...") as client:
            for source in client.sources.list():
                print(source.name, source.type)

    Args:
        api_key: Platform API key (default: ``UNSTRUCTURED_API_KEY``)
        base_url: Endpoint root (default: ``UNSTRUCTURED_API_URL`` or the public platform)
        timeout: Default per-request timeout in seconds
        headers: Extra headers for every request
        http_client: Existing ``httpx.Client`` to send requests with
        transport: httpx transport for the internal client, e.g. ``httpx.MockTransport``
        settings: Settings to fall back on instead of :func:`get_settings`
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
        http_client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
        settings: Settings | None = None,
    ):
        self.config = _transport_config(api_key, base_url, timeout, headers, settings)
        self._transport = Transport(self.config, client=http_client, transport=transport)
        self.sources = SourcesResource(self._transport.execute)
        self.destinations = DestinationsResource(self._transport.execute)
        self.workflows = WorkflowsResource(self._transport.execute)
        self.jobs = JobsResource(self._transport.execute)

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> "UnstructuredClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"UnstructuredClient(base_url={self.config.base_url!r})"


class AsyncUnstructuredClient:
    """Asyncio client with the same resources as :class:`UnstructuredClient`.

    Every resource method returns a coroutine. Cancelling the task aborts the
    request and raises :class:`asyncio.CancelledError`, never an API error.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        settings: Settings | None = None,
    ):
        self.config = _transport_config(api_key, base_url, timeout, headers, settings)
        self._transport = AsyncTransport(self.config, client=http_client, transport=transport)
        self.sources = SourcesResource(self._transport.execute)
        self.destinations = DestinationsResource(self._transport.execute)
        self.workflows = WorkflowsResource(self._transport.execute)
        self.jobs = JobsResource(self._transport.execute)

    async def aclose(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> "AsyncUnstructuredClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"AsyncUnstructuredClient(base_url={self.config.base_url!r})"
