"""Pytest configuration and fixtures."""

import json
import sys
from pathlib import Path

import httpx
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from unstructured_workflow import AsyncUnstructuredClient, UnstructuredClient  # noqa: E402
from unstructured_workflow.config import settings as settings_module  # noqa: E402

BASE_URL = "https://api.test/api/v1"
API_KEY = "test-key"

_ENV_VARS = (
    "UNSTRUCTURED_API_KEY",
    "UNSTRUCTURED_API_URL",
    "UNSTRUCTURED_TIMEOUT",
    "UNSTRUCTURED_LOG_LEVEL",
    "UNSTRUCTURED_LOG_FORMAT",
    "UNSTRUCTURED_SANITIZE_LOGS",
)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep the developer's env vars, .env and unstructured.yaml out of tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(
        settings_module,
        "_YAML_SEARCH_PATHS",
        [Path("unstructured.yaml"), Path("config/unstructured.yaml")],
    )
    settings_module.get_settings.cache_clear()
    yield
    settings_module.get_settings.cache_clear()


class Recorder:
    """Collects requests seen by a MockTransport handler."""

    def __init__(self, responder):
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def json_response(data, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=data)


def respond(data=None, status_code: int = 200, text: str | None = None) -> Recorder:
    """Recorder answering every request with the same response."""
    if text is not None:
        return Recorder(lambda request: httpx.Response(status_code, text=text))
    return Recorder(lambda request: httpx.Response(status_code, json=data))


def request_json(request: httpx.Request):
    return json.loads(request.content)


@pytest.fixture
def make_client():
    """Build a blocking client whose requests go to ``handler``."""
    clients = []

    def factory(handler, **kwargs) -> UnstructuredClient:
        client = UnstructuredClient(
            api_key=API_KEY,
            base_url=BASE_URL,
            transport=httpx.MockTransport(handler),
            **kwargs,
        )
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()


@pytest.fixture
def make_async_client():
    """Build an async client whose requests go to ``handler``."""

    def factory(handler, **kwargs) -> AsyncUnstructuredClient:
        return AsyncUnstructuredClient(
            api_key=API_KEY,
            base_url=BASE_URL,
            transport=httpx.MockTransport(handler),
            **kwargs,
        )

    return factory


# Sample wire payloads

SOURCE_ENVELOPE = {
    "id": "src-1",
    "name": "invoices",
    "created_at": "2025-01-01T10:00:00",
    "updated_at": "2025-01-02T10:00:00Z",
    "type": "s3",
    "config": {"remote_url": "s3://bucket/invoices", "anonymous": False, "recursive": True},
}

DESTINATION_ENVELOPE = {
    "id": "dst-1",
    "name": "vectors",
    "created_at": "2025-01-01T10:00:00Z",
    "type": "pinecone",
    "config": {"index_name": "docs", "api_key": "pk-123", "namespace": "default"},
}

WORKFLOW_NODES = [
    {"id": "n1", "name": "Partitioner", "type": "partition", "subtype": "fast", "settings": {"strategy": "fast"}},
    {
        "id": "n2",
        "name": "Chunker",
        "type": "chunk",
        "subtype": "chunk_by_title",
        "settings": {"max_characters": 1000, "contextual_chunking_strategy": "v1"},
    },
    {
        "id": "n3",
        "name": "Embedder",
        "type": "embed",
        "subtype": "voyageai",
        "settings": {"model_name": "voyage-3"},
    },
]

WORKFLOW = {
    "id": "wf-1",
    "name": "invoice pipeline",
    "sources": ["src-1"],
    "destinations": ["dst-1"],
    "workflow_type": "custom",
    "workflow_nodes": WORKFLOW_NODES,
    "schedule": {"crontab_entries": [{"cron_expression": "0 0 * * *"}]},
    "status": "active",
    "created_at": "2025-01-01T10:00:00Z",
    "updated_at": "2025-01-01T10:00:00Z",
    "reprocess_all": False,
}

JOB = {
    "id": "job-1",
    "workflow_id": "wf-1",
    "workflow_name": "invoice pipeline",
    "status": "IN_PROGRESS",
    "created_at": "2025-01-01T10:00:00Z",
    "runtime": "12s",
    "input_file_ids": ["f-1"],
    "output_node_files": [{"node_id": "n3", "file_id": "f-1"}],
    "job_type": "ephemeral",
}
