from techdoc.logging.logger import Log
from techdoc.processor.models import ProcessingJob
from techdoc.processor.processor import Processor


class JobRunner:
    """Run one job in isolation so a crash never takes down a worker thread."""

    def __init__(self, processor: Processor) -> None:
        self._processor = processor

    def run(self, job: ProcessingJob) -> bool:
        """Execute a single job. Returns False if the processor raised."""
        Log.info(f"Running job for document {job.document_id}")
        try:
            status = self._processor.process(job)
        except Exception as exc:
            Log.exception(f"Job for document {job.document_id} crashed: {exc}")
            return False
        outcome = status.value if status is not None else "skipped"
        Log.info(f"Job for document {job.document_id} finished: {outcome}")
        return True
