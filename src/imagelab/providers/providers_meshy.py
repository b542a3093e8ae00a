"""Meshy image-to-3D driver."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Any

from ..exceptions import UpstreamError
from ..media import ImageReference
from ..schemas.results import MeshyResult
from .polling import JobHandle, JobPoller, JobState
from .providers_base import VendorDriver, raise_for_vendor_status, translate_http_errors

logger = logging.getLogger(__name__)

PENDING_MESSAGE = "Task is still processing. Use the task ID to check status."


@dataclass(slots=True)
class MeshyDriver(VendorDriver):
    """Create an image-to-3D task and poll it to completion."""

    api_endpoint: str = "https://api.meshy.ai/openapi/v1/image-to-3d"
    poller: JobPoller | None = None
    log: logging.Logger = field(default_factory=lambda: logger)

    vendor_name = "Meshy"

    def _poller(self) -> JobPoller:
        if self.poller is None:
            self.poller = JobPoller(
                max_attempts=self.config.meshy_max_poll_attempts,
                interval_seconds=self.config.meshy_poll_interval_seconds,
            )
        return self.poller

    async def image_to_3d(self, image: ImageReference) -> MeshyResult:
        api_key = self._require(self.config.meshy_api_key, "Meshy API key not configured")
        headers = {"Authorization": f"Bearer {api_key}"}

        task_id = await self._create_task(image, headers=headers)
        self.log.info("meshy.task.created", extra={"task_id": task_id})

        handle = JobHandle(job_id=task_id)
        # The vendor task is already billed; a disconnected caller must not
        # cancel the loop halfway through.
        poll_task = asyncio.ensure_future(
            self._poller().run(
                handle, lambda job_id: self._poll_task(job_id, headers=headers)
            )
        )
        poll_task.add_done_callback(partial(self._log_poll_result, task_id))
        outcome = await asyncio.shield(poll_task)

        if outcome.state is JobState.SUCCEEDED:
            payload = outcome.payload or {}
            model_urls = payload.get("model_urls")
            model_urls = model_urls if isinstance(model_urls, dict) else {}
            return MeshyResult(
                status="SUCCEEDED",
                task_id=task_id,
                model_url=model_urls.get("glb"),
                thumbnail_url=payload.get("thumbnail_url"),
            )
        if outcome.state is JobState.FAILED:
            self.log.warning("meshy.task.failed", extra={"task_id": task_id})
            raise UpstreamError("Meshy processing failed", details=f"Task ID: {task_id}")

        self.log.info(
            "meshy.task.pending", extra={"task_id": task_id, "attempts": outcome.attempts}
        )
        return MeshyResult(status="PENDING", task_id=task_id, message=PENDING_MESSAGE)

    async def _create_task(self, image: ImageReference, *, headers: dict[str, str]) -> str:
        body = {
            "image_url": image.source,
            "enable_pbr": True,
            "should_remesh": True,
            "should_texture": True,
        }
        with translate_http_errors(self.vendor_name, timeout=self.timeout):
            async with self._client() as client:
                response = await client.post(self.api_endpoint, headers=headers, json=body)
        raise_for_vendor_status(response, self.vendor_name)
        data = response.json()
        task_id = data.get("result") if isinstance(data, dict) else None
        if not task_id:
            raise UpstreamError("Meshy did not return a task id")
        return str(task_id)

    def _log_poll_result(self, task_id: str, task: asyncio.Future) -> None:
        # Also runs after the caller has been cancelled.
        if task.cancelled():
            self.log.warning("meshy.poll.cancelled", extra={"task_id": task_id})
            return
        exc = task.exception()
        if exc is not None:
            self.log.error("meshy.poll.error", extra={"task_id": task_id, "error": str(exc)})
            return
        self.log.info(
            "meshy.poll.finished",
            extra={"task_id": task_id, "state": str(task.result().state)},
        )

    async def _poll_task(self, task_id: str, *, headers: dict[str, str]) -> dict[str, Any]:
        with translate_http_errors(self.vendor_name, timeout=self.timeout):
            async with self._client() as client:
                response = await client.get(f"{self.api_endpoint}/{task_id}", headers=headers)
        raise_for_vendor_status(response, self.vendor_name)
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError("Meshy returned an unreadable task status") from exc


__all__ = ["MeshyDriver", "PENDING_MESSAGE"]
