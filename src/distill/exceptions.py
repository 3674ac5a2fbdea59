"""Custom exceptions for the distill pipeline."""


class DistillError(Exception):
    """Base class for errors that abort (or degrade) a pipeline run."""

    stage = "pipeline"

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class ConfigurationError(DistillError):
    """Raised when the configuration cannot be loaded or is incomplete."""

    stage = "configuration"


class AudioSourceError(DistillError):
    """Raised when the input audio file cannot be used."""

    stage = "input"

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot use audio file '{path}': {reason}")


class UploadError(DistillError):
    """Raised when uploading to object storage fails."""

    stage = "upload"

    def __init__(self, bucket_name: str, object_name: str, cause: Exception | None = None):
        self.bucket_name = bucket_name
        self.object_name = object_name
        detail = f": {cause}" if cause else ""
        target = f"'{object_name}' to bucket" if object_name else "to bucket"
        super().__init__(f"Failed to upload {target} '{bucket_name}'{detail}", cause)


class SubmissionError(DistillError):
    """Raised when the transcription service rejects a job."""

    stage = "transcription"

    def __init__(self, object_uri: str, cause: Exception | None = None):
        self.object_uri = object_uri
        detail = f": {cause}" if cause else ""
        super().__init__(
            f"Transcription job for '{object_uri}' was rejected{detail}", cause
        )


class TranscriptionFailed(DistillError):
    """Raised when a transcription job reaches the failed state."""

    stage = "transcription"

    def __init__(self, job_id: str, reason: str):
        self.job_id = job_id
        self.reason = reason
        super().__init__(f"Transcription job '{job_id}' failed: {reason}")


class TranscriptionTimeout(DistillError):
    """Raised when a transcription job does not finish within the wait limit."""

    stage = "transcription"

    def __init__(self, job_id: str, waited_seconds: float):
        self.job_id = job_id
        self.waited_seconds = waited_seconds
        super().__init__(
            f"Transcription job '{job_id}' did not finish after {waited_seconds:.0f}s"
        )


class TranscriptRetrievalError(DistillError):
    """Raised when a completed job's transcript cannot be fetched or parsed."""

    stage = "transcription"

    def __init__(self, job_id: str, reason: str, cause: Exception | None = None):
        self.job_id = job_id
        self.reason = reason
        super().__init__(
            f"Could not retrieve transcript for job '{job_id}': {reason}", cause
        )


class JobStateError(DistillError):
    """Raised on a status transition the job state machine does not allow."""

    stage = "transcription"

    def __init__(self, job_id: str, current: str, requested: str):
        self.job_id = job_id
        self.current = current
        self.requested = requested
        super().__init__(
            f"Job '{job_id}' cannot move from '{current}' to '{requested}'"
        )


class ModelInvocationError(DistillError):
    """Raised when the remote model call fails."""

    stage = "summarization"

    def __init__(self, model_id: str, cause: Exception | None = None):
        self.model_id = model_id
        detail = f": {cause}" if cause else ""
        super().__init__(f"Model '{model_id}' invocation failed{detail}", cause)


class ResponseParseError(DistillError):
    """Raised when a model response carries no usable text."""

    stage = "summarization"


class SinkError(DistillError):
    """Raised when the summary cannot be delivered to an output sink."""

    stage = "delivery"

    def __init__(self, sink_name: str, cause: Exception | None = None):
        self.sink_name = sink_name
        detail = f": {cause}" if cause else ""
        super().__init__(f"Delivery to '{sink_name}' failed{detail}", cause)
