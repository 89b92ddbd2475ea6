"""Job endpoints.

There is no wait-until-done helper: poll :meth:`JobsResource.get` and check
``job.is_finished``.
"""

from functools import partial
from typing import Any

from unstructured_workflow.codec import decode_list
from unstructured_workflow.models.resources import Job, JobDetails, JobFailedFiles
from unstructured_workflow.payloads import ListJobsRequest
from unstructured_workflow.resources.base import Resource, segment


class JobsResource(Resource):
    """``/jobs``."""

    def list(
        self,
        workflow_id: str | None = None,
        status: str | None = None,
        timeout: float | None = None,
    ) -> Any:
        request = ListJobsRequest(workflow_id=workflow_id, status=status)
        return self._call(
            "list jobs",
            "GET",
            "/jobs/",
            params=request.query(),
            decode=partial(decode_list, decode=Job.model_validate, what="jobs"),
            timeout=timeout,
        )

    def get(self, id: str, timeout: float | None = None) -> Any:
        return self._call(
            "get job",
            "GET",
            f"/jobs/{segment(id)}",
            decode=Job.model_validate,
            timeout=timeout,
        )

    def cancel(self, id: str, timeout: float | None = None) -> Any:
        return self._call(
            "cancel job",
            "POST",
            f"/jobs/{segment(id)}/cancel",
            timeout=timeout,
        )

    def details(self, id: str, timeout: float | None = None) -> Any:
        return self._call(
            "get job details",
            "GET",
            f"/jobs/{segment(id)}/details",
            decode=JobDetails.model_validate,
            timeout=timeout,
        )

    def failed_files(self, id: str, timeout: float | None = None) -> Any:
        return self._call(
            "get job failed files",
            "GET",
            f"/jobs/{segment(id)}/failed-files",
            decode=JobFailedFiles.model_validate,
            timeout=timeout,
        )

    def download(
        self,
        id: str,
        node_id: str | None = None,
        file_id: str | None = None,
        timeout: float | None = None,
    ) -> Any:
        """Stream a job output. The caller owns the returned stream and must close it."""
        return self._call(
            "download job",
            "GET",
            f"/jobs/{segment(id)}/download",
            params={"node_id": node_id, "file_id": file_id},
            stream=True,
            timeout=timeout,
        )
