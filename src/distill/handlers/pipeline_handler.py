"""Handler running the upload, transcription and summarization pipeline."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from distill.domain import (
    AudioSource,
    DeliveryMetadata,
    ProgressObserver,
    Stage,
    StorageReference,
    SummarizationClient,
    Summary,
    Transcript,
    TranscriptionJobController,
)
from distill.exceptions import SinkError, UploadError
from distill.infrastructure.interfaces import OutputSink, StorageGateway
from distill.logging import setup_logging

logger = setup_logging()


class OutputType(str, Enum):
    """Output sinks selectable on the command line."""

    TERMINAL = "terminal"
    TEXT = "text"
    WORD = "word"
    MARKDOWN = "markdown"
    WEBHOOK = "webhook"


class DeliveryStatus(str, Enum):
    DELIVERED = "delivered"
    SKIPPED = "skipped"
    FAILED = "failed"


class PipelineResult(BaseModel):
    """Artifacts and delivery outcome of a completed pipeline run."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    reference: StorageReference
    job_id: str
    transcript: Transcript
    summary: Summary
    output_type: OutputType
    delivery: DeliveryStatus
    sink_error: SinkError | None = None


class PipelineHandler:
    """Orchestrates audio-to-summary operations."""

    def __init__(
        self,
        storage: StorageGateway,
        controller: TranscriptionJobController,
        summarizer: SummarizationClient,
        sinks: dict[OutputType, OutputSink],
        fallback_sink: OutputSink,
        bucket_name: str,
        key_prefix: str = "",
    ):
        self._storage = storage
        self._controller = controller
        self._summarizer = summarizer
        self._sinks = sinks
        self._fallback_sink = fallback_sink
        self._bucket_name = bucket_name
        self._key_prefix = key_prefix

    def run(
        self,
        source: AudioSource,
        output_type: OutputType,
        observer: ProgressObserver | None = None,
    ) -> PipelineResult:
        """
        Uploads, transcribes and summarizes an audio file, then delivers the summary.

        Args:
            source: The local audio file.
            output_type: The sink receiving the summary.
            observer: Receives stage and poll notifications.

        Returns:
            PipelineResult with every intermediate artifact and the delivery outcome.

        Raises:
            UploadError: If the upload fails.
            SubmissionError: If the transcription job is rejected.
            TranscriptionFailed: If the transcription job fails.
            TranscriptionTimeout: If the transcription job exceeds the wait limit.
            TranscriptRetrievalError: If the transcript cannot be retrieved.
            ModelInvocationError: If the model call fails.
            ResponseParseError: If the model returns no text.
        """
        observer = observer or ProgressObserver()
        logger.info(
            "Processing audio",
            extra={
                "file_name": source.file_name,
                "media_format": source.media_format.value,
                "output_type": output_type.value,
            },
        )

        observer.stage_started(Stage.UPLOAD, self._bucket_name)
        reference = self._upload(source)

        observer.stage_started(Stage.TRANSCRIPTION, reference.region)
        job = self._controller.submit(reference, source.media_format)
        transcript = self._controller.await_completion(job, observer.job_polled)

        observer.stage_started(Stage.SUMMARIZATION)
        summary = self._summarizer.summarize(transcript.text)

        observer.stage_started(Stage.DELIVERY, output_type.value)
        metadata = DeliveryMetadata(source_name=source.file_name, transcript=transcript)
        delivery, sink_error = self._dispatch(summary, metadata, output_type)

        logger.info(
            "Audio processed",
            extra={
                "file_name": source.file_name,
                "job_id": job.job_id,
                "delivery": delivery.value,
            },
        )
        return PipelineResult(
            reference=reference,
            job_id=job.job_id,
            transcript=transcript,
            summary=summary,
            output_type=output_type,
            delivery=delivery,
            sink_error=sink_error,
        )

    def _upload(self, source: AudioSource) -> StorageReference:
        self._storage.ensure_bucket_exists(self._bucket_name)
        object_name = f"{self._key_prefix}{source.file_name}"
        try:
            data = source.path.open("rb")
        except OSError as e:
            raise UploadError(self._bucket_name, object_name, e) from e
        with data:
            return self._storage.upload(
                bucket_name=self._bucket_name,
                object_name=object_name,
                data=data,
                size=source.size,
                content_type=source.content_type,
            )

    def _dispatch(
        self, summary: Summary, metadata: DeliveryMetadata, output_type: OutputType
    ) -> tuple[DeliveryStatus, SinkError | None]:
        """Delivers to the selected sink, echoing to the fallback sink when it is unavailable."""
        sink = self._sinks.get(output_type)
        if sink is None:
            logger.warning(
                "Output sink not configured, using terminal",
                extra={"output_type": output_type.value},
            )
            self._fallback_sink.render(summary, metadata)
            return DeliveryStatus.SKIPPED, None

        try:
            sink.render(summary, metadata)
        except Exception as e:
            if isinstance(e, SinkError):
                error = e
            else:
                logger.exception(
                    "Output sink raised an unexpected error",
                    extra={"output_type": output_type.value},
                )
                error = SinkError(sink.name, e)
                error.__cause__ = e
            logger.error(
                "Summary delivery failed, using terminal",
                extra={"output_type": output_type.value, "error": str(error)},
            )
            if sink is not self._fallback_sink:
                self._fallback_sink.render(summary, metadata)
            return DeliveryStatus.FAILED, error

        return DeliveryStatus.DELIVERED, None
