"""Drives a transcription job from submission to a parsed transcript."""

import time
from collections.abc import Callable

from distill.exceptions import (
    TranscriptionFailed,
    TranscriptionTimeout,
    TranscriptRetrievalError,
)
from distill.infrastructure.interfaces import TranscriptionService
from distill.logging import setup_logging

from .models import JobStatus, MediaFormat, StorageReference, Transcript, TranscriptionJob
from .transcript_builder import TranscriptBuilder

logger = setup_logging()

ProgressCallback = Callable[[TranscriptionJob], None]


class TranscriptionJobController:
    """Submits a transcription job and polls it until a terminal state."""

    def __init__(
        self,
        service: TranscriptionService,
        transcript_builder: TranscriptBuilder,
        poll_interval_seconds: float = 5.0,
        max_wait_seconds: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._service = service
        self._transcript_builder = transcript_builder
        self._poll_interval = poll_interval_seconds
        self._max_wait = max_wait_seconds
        self._sleep = sleep
        self._clock = clock

    def submit(
        self, reference: StorageReference, media_format: MediaFormat
    ) -> TranscriptionJob:
        """
        Starts a transcription job reading the stored object.

        Raises:
            SubmissionError: If the service rejects the job.
        """
        job_id = self._service.submit_job(reference, media_format)
        logger.info(
            "Transcription job submitted",
            extra={"job_id": job_id, "object_uri": reference.uri},
        )
        return TranscriptionJob(job_id=job_id)

    def await_completion(
        self, job: TranscriptionJob, on_progress: ProgressCallback | None = None
    ) -> Transcript:
        """
        Polls the job until it completes or fails, then parses its transcript.

        Args:
            job: A job returned by ``submit``.
            on_progress: Called with the job after every poll.

        Returns:
            The flattened transcript of the completed job.

        Raises:
            TranscriptionFailed: If the job ends in the failed state.
            TranscriptionTimeout: If ``max_wait_seconds`` elapses first.
            TranscriptRetrievalError: If the transcript cannot be retrieved.
            JobStateError: If the provider reports an impossible transition.
        """
        started = self._clock()

        while True:
            report = self._service.get_status(job.job_id)
            if report.state is None:
                logger.warning(
                    "Unrecognised transcription status",
                    extra={"job_id": job.job_id, "status": report.provider_status},
                )
            job = job.advance(report)
            self._notify(on_progress, job)

            if job.status is JobStatus.COMPLETED:
                break
            if job.status is JobStatus.FAILED:
                reason = job.failure_reason or "no reason reported"
                logger.error(
                    "Transcription job failed",
                    extra={"job_id": job.job_id, "reason": reason},
                )
                raise TranscriptionFailed(job.job_id, reason)

            waited = self._clock() - started
            if self._max_wait is not None and waited >= self._max_wait:
                logger.error(
                    "Transcription job timed out",
                    extra={"job_id": job.job_id, "waited_seconds": waited},
                )
                raise TranscriptionTimeout(job.job_id, waited)

            self._sleep(self._poll_interval)

        logger.info(
            "Transcription job completed",
            extra={"job_id": job.job_id, "polls": job.polls},
        )
        return self._retrieve(job)

    def _retrieve(self, job: TranscriptionJob) -> Transcript:
        """Fetches and flattens the transcript of a completed job."""
        if not job.output_ref:
            raise TranscriptRetrievalError(job.job_id, "the job reported no output location")

        document = self._service.fetch_transcript(job.output_ref)
        if not document.segments:
            raise TranscriptRetrievalError(job.job_id, "the transcript is empty")

        transcript = self._transcript_builder.build(document)
        logger.info(
            "Transcript parsed",
            extra={"job_id": job.job_id, "segment_count": len(transcript.segments)},
        )
        return transcript

    def _notify(self, on_progress: ProgressCallback | None, job: TranscriptionJob) -> None:
        if on_progress is None:
            return
        try:
            on_progress(job)
        except Exception:
            logger.warning(
                "Progress callback raised", extra={"job_id": job.job_id}, exc_info=True
            )
