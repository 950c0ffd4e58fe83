# pathwise/jobs/runs.py
"""
In-process generation runs.

Each run is an asyncio task with a status record the API can poll:
queued -> running -> succeeded | failed | cancelled

Only one run per (session, kind) is live at a time. Submitting a new one
cancels the previous task, so a superseded run never stores its result.
Every run is bounded by a deadline.
"""
import asyncio
import logging
import uuid
from collections import OrderedDict
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable

from pydantic import BaseModel

from pathwise.errors import NotFound, PathwiseError, TransportError

log = logging.getLogger(__name__)

MAX_FINISHED_RUNS = 500

FINISHED = ("succeeded", "failed", "cancelled")

ProgressFn = Callable[[int, str], None]
Job = Callable[[ProgressFn], Awaitable[Any]]


class GenerationRun(BaseModel):
    id: str
    session_id: str
    kind: str
    subject: str
    status: str = "queued"
    progress: int = 0
    message: str | None = "Queued"
    error: str | None = None
    result: Any = None
    created_at: datetime
    started_at: datetime | None = None
    finished_at: datetime | None = None

    @property
    def finished(self) -> bool:
        return self.status in FINISHED


def _now() -> datetime:
    return datetime.now(timezone.utc)


class RunRegistry:
    def __init__(self, timeout_seconds: float = 300):
        self.timeout_seconds = timeout_seconds
        self._runs: OrderedDict[str, GenerationRun] = OrderedDict()
        self._tasks: dict[str, asyncio.Task] = {}
        self._active: dict[tuple[str, str], str] = {}

    # -------------------------
    # Producer
    # -------------------------
    def submit(self, *, session_id: str, kind: str, subject: str, job: Job) -> GenerationRun:
        """Start job as a task; must be called from a running event loop."""
        key = (session_id, kind)
        previous = self._active.get(key)
        if previous is not None:
            self.cancel(previous, message="Superseded by a newer request")

        run = GenerationRun(
            id=str(uuid.uuid4()),
            session_id=session_id,
            kind=kind,
            subject=subject,
            created_at=_now(),
        )
        self._runs[run.id] = run
        self._active[key] = run.id
        self._tasks[run.id] = asyncio.create_task(self._execute(run, job), name=f"run-{run.id}")
        self._prune()
        log.info("[run] queued id=%s session=%s kind=%s subject=%r", run.id, session_id, kind, subject)
        return run

    def get(self, run_id: str) -> GenerationRun:
        run = self._runs.get(run_id)
        if run is None:
            raise NotFound(f"Run {run_id} not found.")
        return run

    def cancel(self, run_id: str, *, message: str = "Cancelled") -> GenerationRun:
        run = self.get(run_id)
        if run.finished:
            return run
        task = self._tasks.get(run_id)
        if task is not None:
            task.cancel()
        self._finish(run, status="cancelled", message=message)
        log.info("[run] cancelled id=%s (%s)", run_id, message)
        return run

    async def wait(self, run_id: str) -> GenerationRun:
        run = self.get(run_id)
        task = self._tasks.get(run_id)
        if task is not None:
            await asyncio.wait({task})
        return run

    # -------------------------
    # Worker
    # -------------------------
    def _update(self, run: GenerationRun, percent: int, message: str) -> None:
        if run.finished:
            return
        run.progress = max(0, min(100, percent))
        run.message = message

    def _finish(self, run: GenerationRun, *, status: str, message: str | None = None,
    error: str | None = None, result: Any = None) -> None:
        run.status = status
        if message is not None:
            run.message = message
        run.error = error
        run.result = result
        run.finished_at = _now()
        if status == "succeeded":
            run.progress = 100
        key = (run.session_id, run.kind)
        if self._active.get(key) == run.id:
            del self._active[key]
        self._tasks.pop(run.id, None)

    async def _execute(self, run: GenerationRun, job: Job) -> None:
        run.status = "running"
        run.started_at = _now()
        run.message = "Started"

        def report(percent: int, message: str) -> None:
            self._update(run, percent, message)

        try:
            result = await asyncio.wait_for(job(report), timeout=self.timeout_seconds)
        except asyncio.CancelledError:
            if not run.finished:
                self._finish(run, status="cancelled", message="Cancelled")
            raise
        except asyncio.TimeoutError:
            error = TransportError(f"Generation timed out after {self.timeout_seconds:g}s. Please try again.")
            self._finish(run, status="failed", message="Failed", error=error.message)
            log.warning("[run] timed out id=%s", run.id)
        except PathwiseError as e:
            self._finish(run, status="failed", message="Failed", error=e.message)
            log.warning("[run] failed id=%s: %s: %s", run.id, type(e).__name__, e.message)
        except Exception as e:
            self._finish(run, status="failed", message="Failed", error=f"{type(e).__name__}: {e}")
            log.exception("[run] crashed id=%s", run.id)
        else:
            if isinstance(result, BaseModel):
                result = result.model_dump(mode="json")
            self._finish(run, status="succeeded", message="Done", result=result)
            log.info("[run] succeeded id=%s", run.id)

    def _prune(self) -> None:
        finished = [rid for rid, r in self._runs.items() if r.finished]
        for rid in finished[:max(0, len(self._runs) - MAX_FINISHED_RUNS)]:
            del self._runs[rid]
