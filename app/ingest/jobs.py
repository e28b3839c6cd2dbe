"""In-memory job store for async analysis: track status (queued / running / done / failed) and results,
and make sure the same transcript is not analyzed twice at the same time."""
import hashlib
import threading
import time
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from app.core.config import settings

ACTIVE_STATUSES = ("queued", "running")


@dataclass
class Job:
    """A single async analysis job: job_id, content hash, status (queued | running | done | failed), timestamps, and result or error.
    Why available: In-memory store for /analyze_async so clients can poll /jobs/{job_id} until the job completes or fails."""

    job_id: str
    content_hash: str
    status: str  # queued | running | done | failed
    created_at: float
    started_at: Optional[float] = None
    finished_at: Optional[float] = None
    error: Optional[str] = None
    result: Any = None


def content_hash(transcript: str) -> str:
    """SHA-256 of the transcript text (UTF-8).
    Why available: Identifies duplicate submissions so a transcript already being analyzed is not queued again."""
    return hashlib.sha256((transcript or "").encode("utf-8")).hexdigest()


class JobStore:
    """Thread-safe in-memory job registry with an in-progress guard keyed by transcript hash.
    At most max_finished done/failed jobs are kept; queued and running jobs are never evicted.
    Background tasks update jobs from worker threads, so every mutation goes through the lock."""

    def __init__(self, max_finished: Optional[int] = None):
        self.max_finished = max_finished if max_finished is not None else settings.max_finished_jobs
        self._jobs: Dict[str, Job] = {}
        self._active: Dict[str, str] = {}  # content hash -> job_id
        self._lock = threading.Lock()

    def submit(self, transcript: str, enhance: bool = False) -> Tuple[Job, bool]:
        """Create a queued job for the transcript, or return the queued/running job for the same content and options.
        Returns (job, created)."""
        digest = content_hash(transcript) + (":enhanced" if enhance else "")
        with self._lock:
            existing_id = self._active.get(digest)
            existing = self._jobs.get(existing_id) if existing_id else None
            if existing is not None and existing.status in ACTIVE_STATUSES:
                return existing, False

            job = Job(
                job_id=str(uuid.uuid4()),
                content_hash=digest,
                status="queued",
                created_at=time.time(),
            )
            self._jobs[job.job_id] = job
            self._active[digest] = job.job_id
            return job, True

    def get(self, job_id: str) -> Optional[Job]:
        with self._lock:
            return self._jobs.get(job_id)

    def mark_running(self, job_id: str) -> None:
        with self._lock:
            job = self._jobs[job_id]
            job.status = "running"
            job.started_at = time.time()

    def mark_done(self, job_id: str, result: Any) -> None:
        with self._lock:
            job = self._jobs[job_id]
            job.status = "done"
            job.result = result
            job.finished_at = time.time()
            self._release(job)
            self._evict_finished()

    def mark_failed(self, job_id: str, error: str) -> None:
        with self._lock:
            job = self._jobs[job_id]
            job.status = "failed"
            job.error = error
            job.finished_at = time.time()
            self._release(job)
            self._evict_finished()

    def _release(self, job: Job) -> None:
        # caller holds the lock
        if self._active.get(job.content_hash) == job.job_id:
            del self._active[job.content_hash]

    def _evict_finished(self) -> None:
        # caller holds the lock; dict order is submission order, so the oldest finished jobs go first
        finished = [j.job_id for j in self._jobs.values() if j.status not in ACTIVE_STATUSES]
        for job_id in finished[: max(0, len(finished) - self.max_finished)]:
            del self._jobs[job_id]

    def clear(self) -> None:
        with self._lock:
            self._jobs.clear()
            self._active.clear()


# In-memory store (MVP). In production: Redis/DB.
JOBS = JobStore()
