"""Fire-and-forget background jobs.

Callers enqueue a job and move on; nothing they do waits for it or sees its
failures. Failures are only logged.
"""

import asyncio
import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class Job(ABC):
    @abstractmethod
    async def run(self) -> None:
        raise NotImplementedError


class JobQueue(ABC):
    @abstractmethod
    def enqueue(self, job: Job) -> None:
        raise NotImplementedError


class InProcessJobQueue(JobQueue):
    """Runs each job as a task on the running event loop."""

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task] = set()

    def enqueue(self, job: Job) -> None:
        task = asyncio.get_running_loop().create_task(self._run(job))
        # the loop only keeps weak references to tasks
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, job: Job) -> None:
        try:
            await job.run()
        except Exception:
            logger.exception(f"Job {job!r} failed")

    async def drain(self) -> None:
        """Wait for every job enqueued so far."""
        if self._tasks:
            await asyncio.gather(*self._tasks)


class InMemoryJobQueue(JobQueue):
    """Keeps jobs in a list until run_all() is called."""

    def __init__(self) -> None:
        self.jobs: list[Job] = []

    def enqueue(self, job: Job) -> None:
        self.jobs.append(job)

    async def run_all(self) -> None:
        jobs, self.jobs = self.jobs, []
        for job in jobs:
            await job.run()


job_queue = InProcessJobQueue()


def get_job_queue() -> JobQueue:
    return job_queue
