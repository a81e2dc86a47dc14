"""
Job retrieval operations.

``JobsClient`` asks a :class:`~rundeck_spine.core.protocols.JobFetcher` for a
raw collection document and hands it to the codec.

Manifesto:
    - **Transport-agnostic:** Any object with ``fetch(path, query)`` works
    - **Errors surface unchanged:** Transport errors from the fetcher are not
      wrapped, retried or logged-and-swallowed
    - **No partial results:** A decode failure returns nothing

Examples:
    >>> client = JobsClient(HttpJobFetcher(RundeckSettings()))
    >>> for job in client.list_job_summaries("ops"):
    ...     print(job.id, job.name)

Tags:
    client, retrieval, jobs, rundeck-spine

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from rundeck_spine.codec.documents import decode_job_details, decode_job_summaries
from rundeck_spine.core.errors import JobNotFoundError
from rundeck_spine.core.logging import LogContext, get_logger
from rundeck_spine.core.protocols import JobFetcher
from rundeck_spine.models.jobs import JobDetail, JobSummary

logger = get_logger(__name__)


class JobsClient:
    """Read-only access to job definitions."""

    def __init__(self, fetcher: JobFetcher):
        self._fetcher = fetcher

    def list_job_summaries(self, project_name: str) -> list[JobSummary]:
        """List the jobs defined in ``project_name``.

        An empty project yields an empty list.
        """
        with LogContext(project=project_name):
            logger.debug("jobs_list_requested")
            data = self._fetcher.fetch(["project", project_name, "jobs"], None)
            jobs = decode_job_summaries(data)
            logger.info("jobs_listed", count=len(jobs))
        return jobs

    def get_job_detail(self, identifier: str) -> JobDetail:
        """Fetch the full definition of one job.

        Raises:
            JobNotFoundError: the service returned an empty job list
        """
        with LogContext(job_id=identifier):
            logger.debug("job_detail_requested")
            data = self._fetcher.fetch(["job", identifier], None)
            jobs = decode_job_details(data)
            if not jobs:
                raise JobNotFoundError(f"job {identifier!r} not found").with_context(
                    job_id=identifier
                )
            logger.info("job_detail_fetched", name=jobs[0].name)
        return jobs[0]


__all__ = ["JobsClient"]
