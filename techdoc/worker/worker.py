import queue
import threading
import time

from techdoc.config.settings import Settings
from techdoc.logging.logger import Log
from techdoc.processor.exceptions import QueueFullError
from techdoc.processor.models import ProcessingJob
from techdoc.worker.job_runner import JobRunner


class WorkerPool:
    """Bounded job queue drained by a fixed number of worker threads."""

    def __init__(self, job_runner: JobRunner, settings: Settings) -> None:
        self._job_runner = job_runner
        self._settings = settings
        self._queue: queue.Queue[ProcessingJob | None] = queue.Queue(
            maxsize=settings.processing_queue_size
        )
        self._threads: list[threading.Thread] = []
        self._stats_lock = threading.Lock()
        self._completed = 0
        self._crashed = 0
        self._accepting = False

    @property
    def is_running(self) -> bool:
        return any(thread.is_alive() for thread in self._threads)

    def start(self) -> None:
        """Spawn the worker threads. Calling start twice is a no-op."""
        if self.is_running:
            return
        self._threads = [
            threading.Thread(
                target=self._run_loop,
                name=f"techdoc-worker-{index}",
                daemon=True,
            )
            for index in range(self._settings.worker_count)
        ]
        self._accepting = True
        for thread in self._threads:
            thread.start()
        Log.info(
            f"Worker pool started: {self._settings.worker_count} threads, "
            f"queue size {self._settings.processing_queue_size}"
        )

    def submit(self, job: ProcessingJob) -> None:
        """Enqueue a job without waiting for it to run.

        Raises:
            QueueFullError: if the pool is stopped or the queue stays full for
                queue_put_timeout_seconds.
        """
        if not self._accepting or not self.is_running:
            raise QueueFullError("Worker pool is not accepting jobs")
        try:
            self._queue.put(job, timeout=self._settings.queue_put_timeout_seconds)
        except queue.Full as exc:
            raise QueueFullError(
                f"Processing queue is full ({self._settings.processing_queue_size} jobs)"
            ) from exc
        Log.debug(f"Queued document {job.document_id}, {self.pending_jobs()} pending")

    def pending_jobs(self) -> int:
        return self._queue.qsize()

    def stats(self) -> dict[str, int]:
        with self._stats_lock:
            return {
                "pending": self.pending_jobs(),
                "completed": self._completed,
                "crashed": self._crashed,
            }

    def wait_until_idle(self) -> None:
        """Block until every queued job has been processed."""
        self._queue.join()

    def stop(self, timeout: float | None = None) -> None:
        """Let queued jobs finish, then stop every thread.

        Jobs still queued when the timeout expires are abandoned.
        """
        if not self._threads:
            return
        self._accepting = False
        deadline = None if timeout is None else time.monotonic() + timeout
        Log.info(f"Worker pool stopping, {self.pending_jobs()} job(s) pending")
        for _ in self._threads:
            try:
                self._queue.put(None, timeout=self._remaining(deadline))
            except queue.Full:
                self._abandon_pending()
                try:
                    self._queue.put_nowait(None)
                except queue.Full:
                    # Only sentinels left; busy workers pick them up when they finish.
                    break
        for thread in self._threads:
            thread.join(self._remaining(deadline))
            if thread.is_alive():
                Log.warning(f"{thread.name} did not stop within {timeout}s")
        self._threads = []
        Log.info("Worker pool stopped")

    @staticmethod
    def _remaining(deadline: float | None) -> float | None:
        if deadline is None:
            return None
        return max(0.0, deadline - time.monotonic())

    def _abandon_pending(self) -> None:
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                return
            if item is None:
                # Keep sentinels already handed out for other threads.
                self._queue.task_done()
                self._queue.put_nowait(None)
                return
            self._queue.task_done()
            Log.warning(f"Abandoned queued document {item.document_id} on shutdown")

    def _run_loop(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is None:
                    return
                succeeded = self._job_runner.run(item)
                with self._stats_lock:
                    if succeeded:
                        self._completed += 1
                    else:
                        self._crashed += 1
            finally:
                self._queue.task_done()
