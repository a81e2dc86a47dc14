"""
rundeck-spine: job-scheduler definition codec and read client.

    from rundeck_spine import JobsClient, HttpJobFetcher, RundeckSettings

    with HttpJobFetcher(RundeckSettings()) as fetcher:
        jobs = JobsClient(fetcher).list_job_summaries("ops")
"""

__version__ = "0.1.0"

from rundeck_spine.client import JobsClient  # noqa: E402
from rundeck_spine.codec.documents import (  # noqa: E402
    decode_job_details,
    decode_job_summaries,
    encode_job_details,
    encode_job_summaries,
)
from rundeck_spine.core.errors import (  # noqa: E402
    DecodeError,
    JobNotFoundError,
    MalformedDocumentError,
    RundeckSpineError,
    SchemaViolationError,
    TransportError,
)
from rundeck_spine.core.settings import RundeckSettings  # noqa: E402
from rundeck_spine.transport import HttpJobFetcher  # noqa: E402

__all__ = [
    "__version__",
    "JobsClient",
    "HttpJobFetcher",
    "RundeckSettings",
    "decode_job_summaries",
    "decode_job_details",
    "encode_job_summaries",
    "encode_job_details",
    "RundeckSpineError",
    "TransportError",
    "DecodeError",
    "MalformedDocumentError",
    "SchemaViolationError",
    "JobNotFoundError",
]
