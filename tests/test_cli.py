"""Tests for the unstructured-workflow CLI."""

import json

import httpx
import pytest
from typer.testing import CliRunner

from conftest import (
    BASE_URL,
    DESTINATION_ENVELOPE,
    JOB,
    SOURCE_ENVELOPE,
    WORKFLOW,
    WORKFLOW_NODES,
    Recorder,
    respond,
)
from unstructured_workflow import UnstructuredClient, __version__
from unstructured_workflow.cli import main as cli_main
from unstructured_workflow.cli.commands import connectors, jobs, workflows
from unstructured_workflow.cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    """Leave the root logger alone while commands run."""
    monkeypatch.setattr(cli_main, "configure_logging", lambda **kwargs: None)


@pytest.fixture
def serve(monkeypatch):
    """Point every command at a client backed by ``handler``."""

    def install(handler) -> Recorder:
        recorder = handler if isinstance(handler, Recorder) else Recorder(handler)

        def factory():
            return UnstructuredClient(
                api_key="k", base_url=BASE_URL, transport=httpx.MockTransport(recorder)
            )

        for module in (connectors, workflows, jobs):
            monkeypatch.setattr(module, "get_client", factory)
        return recorder

    return install


class TestMain:
    """Tests for the top-level app."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_groups(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for group in ("sources", "destinations", "workflows", "jobs"):
            assert group in result.output


class TestConnectorCommands:
    """Tests for sources and destinations commands."""

    def test_sources_list_json(self, serve):
        recorder = serve(respond([SOURCE_ENVELOPE]))
        result = runner.invoke(app, ["sources", "list", "--type", "s3", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data[0]["id"] == "src-1"
        assert data[0]["config"]["remote_url"] == "s3://bucket/invoices"
        assert recorder.last.url.params["source_type"] == "s3"

    def test_sources_list_table(self, serve):
        serve(respond([SOURCE_ENVELOPE]))
        result = runner.invoke(app, ["sources", "list"])
        assert result.exit_code == 0
        assert "invoices" in result.output

    def test_sources_list_empty(self, serve):
        serve(respond([]))
        result = runner.invoke(app, ["sources", "list"])
        assert result.exit_code == 0
        assert "No sources found" in result.output

    def test_destinations_get(self, serve):
        recorder = serve(respond(DESTINATION_ENVELOPE))
        result = runner.invoke(app, ["destinations", "get", "dst-1"])
        assert result.exit_code == 0
        assert "pinecone" in result.output
        assert recorder.last.url.path == "/api/v1/destinations/dst-1"

    def test_delete_requires_confirmation(self, serve):
        recorder = serve(respond({}))
        result = runner.invoke(app, ["sources", "delete", "src-1"], input="n\n")
        assert result.exit_code == 1
        assert recorder.requests == []

    def test_delete_with_yes(self, serve):
        recorder = serve(lambda request: httpx.Response(204))
        result = runner.invoke(app, ["destinations", "delete", "dst-1", "--yes"])
        assert result.exit_code == 0
        assert recorder.last.method == "DELETE"

    def test_check(self, serve):
        recorder = serve(respond({"id": "chk-1", "status": "FAILURE", "reason": "bad credentials"}))
        result = runner.invoke(app, ["sources", "check", "src-1"])
        assert result.exit_code == 0
        assert "FAILURE" in result.output
        assert "bad credentials" in result.output
        assert recorder.last.method == "POST"

    def test_check_latest(self, serve):
        recorder = serve(respond({"id": "chk-1", "status": "SUCCESS"}))
        result = runner.invoke(app, ["destinations", "check", "dst-1", "--latest"])
        assert result.exit_code == 0
        assert recorder.last.method == "GET"

    def test_api_error_exits_1(self, serve):
        serve(respond(status_code=404, text="not found"))
        result = runner.invoke(app, ["sources", "get", "missing"])
        assert result.exit_code == 1
        assert "404" in result.output

    def test_validation_details_printed(self, serve):
        body = {"detail": [{"loc": ["path", "id"], "msg": "bad id", "type": "value_error"}]}
        serve(respond(body, status_code=422))
        result = runner.invoke(app, ["sources", "get", "x"])
        assert result.exit_code == 1
        assert "bad id" in result.output


class TestWorkflowCommands:
    """Tests for workflow commands."""

    def test_validate_ok(self, tmp_path):
        path = tmp_path / "pipeline.json"
        path.write_text(json.dumps(WORKFLOW_NODES))
        result = runner.invoke(app, ["workflows", "validate", str(path)])
        assert result.exit_code == 0
        assert "Valid workflow" in result.output

    def test_validate_reports_errors(self, tmp_path):
        path = tmp_path / "pipeline.json"
        path.write_text(json.dumps(list(reversed(WORKFLOW_NODES))))
        result = runner.invoke(app, ["workflows", "validate", str(path)])
        assert result.exit_code == 1
        assert "first node must be a partitioner" in result.output

    def test_validate_collects_embedder_model(self, tmp_path):
        """A wrong embedder model is listed with the other problems."""
        path = tmp_path / "pipeline.yaml"
        path.write_text(
            "- {name: e, type: embed, subtype: togetherai, settings: {model_name: voyage-3}}\n"
        )
        result = runner.invoke(app, ["workflows", "validate", str(path)])
        assert result.exit_code == 1
        assert "Validation failed" in result.output
        assert "first node must be a partitioner" in result.output
        assert "invalid model voyage-3 for TogetherAI embedder" in result.output

    def test_validate_unknown_node(self, tmp_path):
        path = tmp_path / "pipeline.yaml"
        path.write_text("- {name: x, type: teleport, subtype: now}\n")
        result = runner.invoke(app, ["workflows", "validate", str(path)])
        assert result.exit_code == 1
        assert "unknown node type: teleport" in result.output

    def test_list_json_with_filters(self, serve):
        recorder = serve(respond([WORKFLOW]))
        result = runner.invoke(
            app, ["workflows", "list", "--status", "active", "--page-size", "5", "--json"]
        )
        assert result.exit_code == 0
        assert json.loads(result.output)[0]["workflow_nodes"][0]["subtype"] == "fast"
        assert dict(recorder.last.url.params) == {"status": "active", "page_size": "5"}

    def test_list_invalid_status(self, serve):
        recorder = serve(respond([]))
        result = runner.invoke(app, ["workflows", "list", "--status", "sleeping"])
        assert result.exit_code == 1
        assert recorder.requests == []

    def test_get(self, serve):
        serve(respond(WORKFLOW))
        result = runner.invoke(app, ["workflows", "get", "wf-1"])
        assert result.exit_code == 0
        assert "invoice pipeline" in result.output
        assert "chunk_by_title" in result.output

    def test_create(self, serve, tmp_path):
        path = tmp_path / "pipeline.json"
        path.write_text(json.dumps({"name": "from file", "workflow_nodes": WORKFLOW_NODES}))
        recorder = serve(respond(WORKFLOW))
        result = runner.invoke(app, ["workflows", "create", str(path), "--source-id", "src-9"])
        assert result.exit_code == 0
        body = json.loads(recorder.last.content)
        assert body["name"] == "from file"
        assert body["source_id"] == "src-9"

    def test_run_with_file(self, serve, tmp_path):
        doc = tmp_path / "doc.txt"
        doc.write_text("hello")
        recorder = serve(respond(JOB))
        result = runner.invoke(app, ["workflows", "run", "wf-1", "-f", str(doc)])
        assert result.exit_code == 0
        assert "job-1" in result.output
        assert b'name="input_files"' in recorder.last.content


class TestJobCommands:
    """Tests for job commands."""

    def test_list(self, serve):
        recorder = serve(respond([JOB]))
        result = runner.invoke(app, ["jobs", "list", "-w", "wf-1"])
        assert result.exit_code == 0
        assert "IN_PROGRESS" in result.output
        assert recorder.last.url.params["workflow_id"] == "wf-1"

    def test_get_json(self, serve):
        serve(respond(JOB))
        result = runner.invoke(app, ["jobs", "get", "job-1", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output)["status"] == "IN_PROGRESS"

    def test_cancel(self, serve):
        recorder = serve(respond({}))
        result = runner.invoke(app, ["jobs", "cancel", "job-1"])
        assert result.exit_code == 0
        assert recorder.last.url.path == "/api/v1/jobs/job-1/cancel"

    def test_details(self, serve):
        serve(
            respond(
                {
                    "id": "job-1",
                    "processing_status": "IN_PROGRESS",
                    "node_stats": [{"node_name": "Chunker", "node_type": "chunk", "success": 4}],
                }
            )
        )
        result = runner.invoke(app, ["jobs", "details", "job-1"])
        assert result.exit_code == 0
        assert "Chunker" in result.output

    def test_failed_files(self, serve):
        serve(respond({"failed_files": [{"document": "a.pdf", "error": "corrupt"}]}))
        result = runner.invoke(app, ["jobs", "failed-files", "job-1"])
        assert result.exit_code == 0
        assert "a.pdf" in result.output

    def test_download(self, serve, tmp_path):
        recorder = serve(lambda request: httpx.Response(200, content=b"output"))
        out = tmp_path / "out.json"
        result = runner.invoke(
            app, ["jobs", "download", "job-1", "-o", str(out), "--node-id", "n3", "--file-id", "f-1"]
        )
        assert result.exit_code == 0
        assert out.read_bytes() == b"output"
        assert recorder.last.url.params["file_id"] == "f-1"

    def test_timeout_exits_1(self, serve):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        serve(handler)
        result = runner.invoke(app, ["jobs", "get", "job-1"])
        assert result.exit_code == 1
        assert "timed out" in result.output
