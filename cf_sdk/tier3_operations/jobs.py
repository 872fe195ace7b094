"""
cf_sdk.tier3_operations.jobs
─────────────────────────────
Wait for an asynchronous Cloud Controller job to finish.

A delete issued with ``async=true`` returns a job resource; the job is
re-read from ``/v2/jobs/{id}`` with exponential backoff until its status
is ``finished`` or ``failed``. A failed job surfaces its error details as
a CloudFoundryError.
"""
from __future__ import annotations

from typing import Any

from cf_sdk.tier0_core.config import SdkSettings, get_settings
from cf_sdk.tier0_core.errors import CloudFoundryError
from cf_sdk.tier0_core.logging import get_logger
from cf_sdk.tier1_runtime.retry import poll_until
from cf_sdk.tier2_client.v2 import GetJobRequest, JobResource, JobStatus

log = get_logger(__name__)


def _job_id(job: JobResource) -> str | None:
    if job.id:
        return job.id
    return job.entity.id if job.entity else None


def _is_terminal(job: JobResource) -> bool:
    return job.entity is not None and job.entity.is_terminal


def _raise_if_failed(job: JobResource) -> None:
    entity = job.entity
    if entity is None or entity.status != JobStatus.FAILED.value:
        return
    details = entity.error_details
    if details is None:
        raise CloudFoundryError("UnknownError", entity.error or "job failed", job_id=_job_id(job))
    raise CloudFoundryError(
        details.error_code or "UnknownError",
        details.description or "",
        details.code,
        job_id=_job_id(job),
    )


async def wait_for_completion(
    client: Any,
    job: JobResource,
    settings: SdkSettings | None = None,
) -> None:
    """
    Poll *job* until it is terminal. Returns None when it finished and
    raises CloudFoundryError when it failed, JobTimeoutError when the
    completion timeout passes first.
    """
    settings = settings or get_settings()
    if _is_terminal(job):
        _raise_if_failed(job)
        return

    job_id = _job_id(job)
    if job_id is None and (job.entity is None or job.entity.status is None):
        # 204 delete: nothing left to wait for
        log.debug("job.none")
        return

    request = GetJobRequest(job_id=job_id)

    async def fetch() -> JobResource:
        response = await client.jobs.get(request)
        log.debug("job.poll", job_id=job_id, status=response.entity.status if response.entity else None)
        return response

    final = await poll_until(
        fetch,
        _is_terminal,
        min_wait=settings.job_poll_min_wait,
        max_wait=settings.job_poll_max_wait,
        timeout=settings.job_completion_timeout,
        description=f"Job {job_id}",
    )
    _raise_if_failed(final)
    log.info("job.finished", job_id=job_id)


__all__ = ["wait_for_completion"]
