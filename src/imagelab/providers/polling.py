"""Create/poll lifecycle for vendors that finish work out of band.

A job moves ``CREATED -> POLLING`` once the vendor returns its identifier and
then ends in exactly one of ``SUCCEEDED``, ``FAILED`` or ``EXHAUSTED``.
``EXHAUSTED`` is not an error: the caller receives the job id so the work can
be picked up later.

Attempts are strictly sequential. The fixed delay is awaited before every
poll, including the poll that follows a transport error, so a flaky vendor
cannot shorten the schedule.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

import httpx

from ..exceptions import UpstreamError, VendorTimeoutError

logger = logging.getLogger(__name__)

PollFn = Callable[[str], Awaitable[Mapping[str, Any]]]
SleepFn = Callable[[float], Awaitable[Any]]


class JobState(StrEnum):
    CREATED = "CREATED"
    POLLING = "POLLING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    EXHAUSTED = "EXHAUSTED"


class JobStatus(StrEnum):
    """Classification of a single poll response."""

    PENDING = "PENDING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


def classify_status(vendor_status: Any) -> JobStatus:
    if vendor_status == "SUCCEEDED":
        return JobStatus.SUCCEEDED
    if vendor_status == "FAILED":
        return JobStatus.FAILED
    return JobStatus.PENDING


@dataclass(slots=True)
class JobHandle:
    """Vendor job id plus the attempts consumed so far."""

    job_id: str
    attempts: int = 0
    state: JobState = JobState.CREATED


@dataclass(slots=True, frozen=True)
class PollOutcome:
    state: JobState
    job_id: str
    attempts: int
    payload: Mapping[str, Any] | None = None

    @property
    def is_terminal(self) -> bool:
        return self.state in {JobState.SUCCEEDED, JobState.FAILED}


@dataclass(slots=True)
class JobPoller:
    """Poll ``handle`` until a terminal vendor status or the attempt budget."""

    max_attempts: int = 60
    interval_seconds: float = 5.0
    sleep: SleepFn = asyncio.sleep
    retry_on: tuple[type[BaseException], ...] = (
        httpx.HTTPError,
        UpstreamError,
        VendorTimeoutError,
    )
    log: logging.Logger = field(default_factory=lambda: logger)

    async def run(self, handle: JobHandle, poll: PollFn) -> PollOutcome:
        if handle.state is not JobState.CREATED:
            raise RuntimeError(f"job {handle.job_id} is already {handle.state}")
        handle.state = JobState.POLLING

        while handle.attempts < self.max_attempts:
            await self.sleep(self.interval_seconds)
            handle.attempts += 1
            try:
                payload = await poll(handle.job_id)
            except self.retry_on as exc:
                self.log.warning(
                    "poller.attempt.error",
                    extra={
                        "job_id": handle.job_id,
                        "attempt": handle.attempts,
                        "error": str(exc),
                    },
                )
                continue

            if not isinstance(payload, Mapping):
                continue
            status = classify_status(payload.get("status"))
            if status is JobStatus.SUCCEEDED:
                return self._finish(handle, JobState.SUCCEEDED, payload)
            if status is JobStatus.FAILED:
                return self._finish(handle, JobState.FAILED, payload)

        return self._finish(handle, JobState.EXHAUSTED, None)

    def _finish(
        self,
        handle: JobHandle,
        state: JobState,
        payload: Mapping[str, Any] | None,
    ) -> PollOutcome:
        handle.state = state
        self.log.info(
            "poller.finished",
            extra={"job_id": handle.job_id, "state": str(state), "attempts": handle.attempts},
        )
        return PollOutcome(
            state=state, job_id=handle.job_id, attempts=handle.attempts, payload=payload
        )


__all__ = [
    "JobHandle",
    "JobPoller",
    "JobState",
    "JobStatus",
    "PollOutcome",
    "classify_status",
]
