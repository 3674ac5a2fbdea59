"""AssemblyAI implementation of the TranscriptionService interface."""

from collections.abc import Callable
from typing import Any

import assemblyai as aai
import httpx
from assemblyai import api

from distill.domain.models import (
    Alternative,
    DocumentSegment,
    JobStatus,
    JobStatusReport,
    MediaFormat,
    StorageReference,
    TranscriptDocument,
)
from distill.exceptions import SubmissionError, TranscriptRetrievalError
from distill.infrastructure.interfaces import TranscriptionService
from distill.logging import setup_logging

logger = setup_logging()

_STATUS_MAP = {
    "queued": JobStatus.SUBMITTED,
    "processing": JobStatus.IN_PROGRESS,
    "completed": JobStatus.COMPLETED,
    "error": JobStatus.FAILED,
}


def _status_value(status: Any) -> str:
    return str(getattr(status, "value", status))


class AssemblyAITranscriber(TranscriptionService):
    """Runs transcription jobs on AssemblyAI."""

    def __init__(
        self,
        transcriber: aai.Transcriber,
        http_client: httpx.Client,
        url_resolver: Callable[[StorageReference], str],
    ):
        self._transcriber = transcriber
        self._http_client = http_client
        self._url_resolver = url_resolver

    def submit_job(self, reference: StorageReference, media_format: MediaFormat) -> str:
        """
        Submits the stored object by URL without waiting for the result.

        AssemblyAI detects the container format itself; the format is only logged.
        """
        audio_url = self._url_resolver(reference)
        try:
            transcript = self._transcriber.submit(audio_url)
        except Exception as e:
            logger.exception(
                "AssemblyAI rejected the transcription job",
                extra={"object_uri": reference.uri, "media_format": media_format.value},
            )
            raise SubmissionError(reference.uri, e) from e

        if not transcript.id:
            raise SubmissionError(
                reference.uri, Exception(transcript.error or "no job id returned")
            )

        logger.info(
            "AssemblyAI job created",
            extra={
                "job_id": transcript.id,
                "object_uri": reference.uri,
                "media_format": media_format.value,
            },
        )
        return transcript.id

    def get_status(self, job_id: str) -> JobStatusReport:
        response = self._get(job_id)
        provider_status = _status_value(response.status)
        state = _STATUS_MAP.get(provider_status)
        return JobStatusReport(
            state=state,
            provider_status=provider_status,
            output_ref=response.id if state is JobStatus.COMPLETED else None,
            failure_reason=response.error if state is JobStatus.FAILED else None,
        )

    def fetch_transcript(self, output_ref: str) -> TranscriptDocument:
        """
        Converts the completed transcript into a transcript document.

        Every recognised word becomes one segment with a single alternative.
        Responses without word timings fall back to one segment of the full text.
        """
        response = self._get(output_ref)
        words = response.words or []

        try:
            if words:
                segments = [
                    DocumentSegment(
                        alternatives=[
                            Alternative(content=word.text, confidence=word.confidence)
                        ],
                        speaker=word.speaker,
                    )
                    for word in words
                ]
            elif response.text:
                segments = [
                    DocumentSegment(
                        alternatives=[
                            Alternative(
                                content=response.text,
                                confidence=response.confidence or 0.0,
                            )
                        ]
                    )
                ]
            else:
                segments = []
        except Exception as e:
            logger.exception("Malformed AssemblyAI transcript", extra={"job_id": output_ref})
            raise TranscriptRetrievalError(output_ref, "malformed transcript", e) from e

        logger.info(
            "AssemblyAI transcript fetched",
            extra={"job_id": output_ref, "segment_count": len(segments)},
        )
        return TranscriptDocument(job_id=output_ref, segments=segments)

    def _get(self, job_id: str):
        try:
            return api.get_transcript(self._http_client, job_id)
        except Exception as e:
            logger.exception("AssemblyAI status request failed", extra={"job_id": job_id})
            raise TranscriptRetrievalError(job_id, "status request failed", e) from e
