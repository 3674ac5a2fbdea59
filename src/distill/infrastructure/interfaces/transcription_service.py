"""Abstract interface for asynchronous transcription services."""

from abc import ABC, abstractmethod

from distill.domain.models import (
    JobStatusReport,
    MediaFormat,
    StorageReference,
    TranscriptDocument,
)


class TranscriptionService(ABC):
    """Abstract base class for job-based transcription backends."""

    @abstractmethod
    def submit_job(self, reference: StorageReference, media_format: MediaFormat) -> str:
        """
        Starts a transcription job for a stored audio object.

        Args:
            reference: Location of the uploaded audio.
            media_format: Container format of the audio.

        Returns:
            The provider job identifier.

        Raises:
            SubmissionError: If the service rejects the job.
        """

    @abstractmethod
    def get_status(self, job_id: str) -> JobStatusReport:
        """
        Reads the current status of a job.

        Raises:
            TranscriptRetrievalError: If the status cannot be read.
        """

    @abstractmethod
    def fetch_transcript(self, output_ref: str) -> TranscriptDocument:
        """
        Fetches the transcript document of a completed job.

        Args:
            output_ref: Output location reported with the completed status.

        Raises:
            TranscriptRetrievalError: If the document cannot be fetched or parsed.
        """
