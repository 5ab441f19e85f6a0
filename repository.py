from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

from job_matching.geo import distance_between
from job_matching.models import JobCandidate, WorkerCandidate

logger = logging.getLogger(__name__)


class Repository(Protocol):
    """Source of candidates for the matching core."""

    def list_active_jobs(self, **filters) -> List[JobCandidate]:
        ...

    def list_workers(self, **filters) -> List[WorkerCandidate]:
        ...


class InMemoryRepository:
    """
    Dictionary-backed store of workers and jobs.

    Created once at startup and handed to request handlers; nothing in the
    matching core reads it directly. Missing ids raise KeyError.
    """

    def __init__(
        self,
        workers: Optional[List[WorkerCandidate]] = None,
        jobs: Optional[List[JobCandidate]] = None,
    ):
        self._workers: Dict[str, WorkerCandidate] = {}
        self._jobs: Dict[str, JobCandidate] = {}
        for worker in workers or []:
            self.add_worker(worker)
        for job in jobs or []:
            self.add_job(job)

    @classmethod
    def load_json(cls, path: Union[str, Path]) -> "InMemoryRepository":
        """Build a repository from a JSON file shaped {"workers": [...], "jobs": [...]}."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        workers = [WorkerCandidate.model_validate(w) for w in data.get("workers", [])]
        jobs = [JobCandidate.model_validate(j) for j in data.get("jobs", [])]
        logger.info(f"Loaded {len(workers)} workers and {len(jobs)} jobs from {path}")
        return cls(workers=workers, jobs=jobs)

    # Workers

    def add_worker(self, worker: WorkerCandidate) -> WorkerCandidate:
        if worker.id in self._workers:
            raise ValueError(f"Worker {worker.id} already exists")
        self._workers[worker.id] = worker
        return worker

    def get_worker(self, worker_id: str) -> WorkerCandidate:
        try:
            return self._workers[worker_id]
        except KeyError:
            raise KeyError(f"Unknown worker: {worker_id}") from None

    def update_worker(self, worker: WorkerCandidate) -> WorkerCandidate:
        self.get_worker(worker.id)
        self._workers[worker.id] = worker
        return worker

    def remove_worker(self, worker_id: str) -> None:
        self.get_worker(worker_id)
        del self._workers[worker_id]

    def list_workers(
        self,
        trade: Optional[str] = None,
        verified: Optional[bool] = None,
        near_job: Optional[JobCandidate] = None,
    ) -> List[WorkerCandidate]:
        """
        Workers in insertion order, optionally filtered.

        When near_job is given, each worker's distance_km is filled in from
        coordinates (both sides must have them); otherwise the stored value is kept.
        """
        workers = list(self._workers.values())
        if trade:
            workers = [w for w in workers if w.trade_key == trade.strip().lower()]
        if verified is not None:
            workers = [w for w in workers if w.verified == verified]
        if near_job is not None:
            workers = [self._with_distance(w, near_job) for w in workers]
        return workers

    @staticmethod
    def _with_distance(worker: WorkerCandidate, job: JobCandidate) -> WorkerCandidate:
        distance = distance_between(worker, job)
        if distance is None:
            return worker
        return worker.model_copy(update={"distance_km": round(distance, 2)})

    # Jobs

    def add_job(self, job: JobCandidate) -> JobCandidate:
        if job.id in self._jobs:
            raise ValueError(f"Job {job.id} already exists")
        self._jobs[job.id] = job
        return job

    def get_job(self, job_id: str) -> JobCandidate:
        try:
            return self._jobs[job_id]
        except KeyError:
            raise KeyError(f"Unknown job: {job_id}") from None

    def update_job(self, job: JobCandidate) -> JobCandidate:
        self.get_job(job.id)
        self._jobs[job.id] = job
        return job

    def remove_job(self, job_id: str) -> None:
        self.get_job(job_id)
        del self._jobs[job_id]

    def list_jobs(self) -> List[JobCandidate]:
        return list(self._jobs.values())

    def list_active_jobs(
        self,
        category: Optional[str] = None,
        location: Optional[str] = None,
    ) -> List[JobCandidate]:
        jobs = [job for job in self._jobs.values() if job.is_active]
        if category:
            jobs = [job for job in jobs if job.category == category]
        if location:
            jobs = [job for job in jobs if location.lower() in job.location.lower()]
        return jobs
