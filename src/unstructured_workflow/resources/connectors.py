"""Source and destination connector endpoints."""

from functools import partial
from typing import Any

from unstructured_workflow.codec import decode_destination, decode_list, decode_source
from unstructured_workflow.models.connectors import DestinationConfig, SourceConfig
from unstructured_workflow.models.resources import ConnectionCheck
from unstructured_workflow.payloads import (
    CreateDestinationRequest,
    CreateSourceRequest,
    UpdateDestinationRequest,
    UpdateSourceRequest,
)
from unstructured_workflow.resources.base import Resource, segment


class _ConnectorResource(Resource):
    """Endpoints shared by ``/sources`` and ``/destinations``."""

    collection: str
    noun: str
    type_param: str

    def _decode_one(self, data: Any) -> Any:
        raise NotImplementedError

    def _list(self, connector_type: str | None, timeout: float | None) -> Any:
        return self._call(
            f"list {self.noun}s",
            "GET",
            f"/{self.collection}/",
            params={self.type_param: connector_type or None},
            decode=partial(decode_list, decode=self._decode_one, what=f"{self.noun}s"),
            timeout=timeout,
        )

    def get(self, id: str, timeout: float | None = None) -> Any:
        return self._call(
            f"get {self.noun}",
            "GET",
            f"/{self.collection}/{segment(id)}",
            decode=self._decode_one,
            timeout=timeout,
        )

    def delete(self, id: str, timeout: float | None = None) -> Any:
        return self._call(
            f"delete {self.noun}",
            "DELETE",
            f"/{self.collection}/{segment(id)}",
            timeout=timeout,
        )

    def create_connection_check(self, id: str, timeout: float | None = None) -> Any:
        """Ask the platform to test the connector's credentials."""
        return self._call(
            f"create {self.noun} connection check",
            "POST",
            f"/{self.collection}/{segment(id)}/connection-check",
            decode=ConnectionCheck.model_validate,
            timeout=timeout,
        )

    def get_connection_check(self, id: str, timeout: float | None = None) -> Any:
        return self._call(
            f"get {self.noun} connection check",
            "GET",
            f"/{self.collection}/{segment(id)}/connection-check",
            decode=ConnectionCheck.model_validate,
            timeout=timeout,
        )


class SourcesResource(_ConnectorResource):
    """``/sources``: returns :class:`~unstructured_workflow.models.resources.Source`."""

    collection = "sources"
    noun = "source"
    type_param = "source_type"

    def _decode_one(self, data: Any) -> Any:
        return decode_source(data)

    def list(self, source_type: str | None = None, timeout: float | None = None) -> Any:
        return self._list(source_type, timeout)

    def create(self, name: str, config: SourceConfig, timeout: float | None = None) -> Any:
        request = CreateSourceRequest(name=name, config=config)
        return self._call(
            "create source",
            "POST",
            "/sources/",
            json=request.body(),
            decode=self._decode_one,
            timeout=timeout,
        )

    def update(self, id: str, config: SourceConfig, timeout: float | None = None) -> Any:
        """Replace the source's configuration.

        This is a full replacement. Optional fields left as ``None`` are reset
        by the server, they are not kept from the current configuration.
        """
        request = UpdateSourceRequest(id=id, config=config)
        return self._call(
            "update source",
            "PUT",
            f"/sources/{segment(request.id)}",
            json=request.body(),
            decode=self._decode_one,
            timeout=timeout,
        )


class DestinationsResource(_ConnectorResource):
    """``/destinations``: returns :class:`~unstructured_workflow.models.resources.Destination`."""

    collection = "destinations"
    noun = "destination"
    type_param = "destination_type"

    def _decode_one(self, data: Any) -> Any:
        return decode_destination(data)

    def list(self, destination_type: str | None = None, timeout: float | None = None) -> Any:
        return self._list(destination_type, timeout)

    def create(self, name: str, config: DestinationConfig, timeout: float | None = None) -> Any:
        request = CreateDestinationRequest(name=name, config=config)
        return self._call(
            "create destination",
            "POST",
            "/destinations/",
            json=request.body(),
            decode=self._decode_one,
            timeout=timeout,
        )

    def update(self, id: str, config: DestinationConfig, timeout: float | None = None) -> Any:
        """Replace the destination's configuration (full replacement, see sources)."""
        request = UpdateDestinationRequest(id=id, config=config)
        return self._call(
            "update destination",
            "PUT",
            f"/destinations/{segment(request.id)}",
            json=request.body(),
            decode=self._decode_one,
            timeout=timeout,
        )
