import logging
import math
import time
from dataclasses import dataclass, field
from typing import Callable, Sequence, TypeVar

import config
from errors import ClassifierError
from models import BatchAnalysis, FailedBatch, VideoMetadata

logger = logging.getLogger(__name__)

T = TypeVar("T")

ProgressCallback = Callable[[int, int, str], None]


def split_batches(items: Sequence[T], batch_size: int) -> list[list[T]]:
    """Split items into ceil(len/batch_size) consecutive slices."""
    if batch_size <= 0:
        raise ValueError("batch_size must be positive")
    return [list(items[i:i + batch_size]) for i in range(0, len(items), batch_size)]


@dataclass
class BatchRun:
    analyses: list[BatchAnalysis] = field(default_factory=list)
    failures: list[FailedBatch] = field(default_factory=list)


class BatchOrchestrator:
    """Runs the classifier over fixed-size batches, one at a time.

    A batch whose classification fails becomes a failure-marked placeholder
    plus a FailedBatch record; the remaining batches still run.
    """

    def __init__(
        self,
        classifier,
        batch_size: int = config.BATCH_SIZE,
        batch_delay: float = config.BATCH_DELAY,
        sleep=time.sleep,
    ):
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self.classifier = classifier
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self._sleep = sleep

    def batch_count(self, total: int) -> int:
        return math.ceil(total / self.batch_size)

    def run(
        self,
        videos: Sequence[VideoMetadata],
        user_name: str,
        channel_name: str,
        on_progress: ProgressCallback | None = None,
    ) -> BatchRun:
        batches = split_batches(videos, self.batch_size)
        total = len(batches)
        result = BatchRun()

        logger.info(
            "Starting batch analysis: %d batches of up to %d videos (Total: %d videos)",
            total, self.batch_size, len(videos),
        )

        for number, batch in enumerate(batches, start=1):
            if on_progress:
                on_progress(number, total, "analyzing")
            logger.info("[BATCH %d/%d] Analyzing %d videos...", number, total, len(batch))

            try:
                analysis = self.classifier.classify(batch, user_name, channel_name, number, total)
            except ClassifierError as e:
                logger.error("[BATCH %d/%d] Analysis failed: %s", number, total, e)
                result.analyses.append(BatchAnalysis.failed(number))
                result.failures.append(
                    FailedBatch(batch_number=number, error=str(e), videos_in_batch=len(batch))
                )
                if on_progress:
                    on_progress(number, total, "failed")
            else:
                logger.info("[BATCH %d/%d] Analysis completed", number, total)
                result.analyses.append(analysis)
                if on_progress:
                    on_progress(number, total, "done")

            if number < total:
                self._sleep(self.batch_delay)

        logger.info("[BATCH SUMMARY] %d/%d batches successful", total - len(result.failures), total)
        for failed in result.failures:
            logger.error("  - Batch %d: %s", failed.batch_number, failed.error)

        return result
