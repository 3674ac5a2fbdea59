"""Domain models for the audio summarization pipeline."""

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from distill.exceptions import AudioSourceError, JobStateError


class MediaFormat(str, Enum):
    """Audio container formats accepted by the transcription stage."""

    AMR = "amr"
    FLAC = "flac"
    M4A = "m4a"
    MP3 = "mp3"
    MP4 = "mp4"
    OGG = "ogg"
    WAV = "wav"
    WEBM = "webm"

    @property
    def content_type(self) -> str:
        return _CONTENT_TYPES[self]


_CONTENT_TYPES = {
    MediaFormat.AMR: "audio/amr",
    MediaFormat.FLAC: "audio/flac",
    MediaFormat.M4A: "audio/m4a",
    MediaFormat.MP3: "audio/mpeg",
    MediaFormat.MP4: "audio/mp4",
    MediaFormat.OGG: "audio/ogg",
    MediaFormat.WAV: "audio/wav",
    MediaFormat.WEBM: "audio/webm",
}

_EXTENSIONS = {
    ".amr": MediaFormat.AMR,
    ".flac": MediaFormat.FLAC,
    ".m4a": MediaFormat.M4A,
    ".mp3": MediaFormat.MP3,
    ".mp4": MediaFormat.MP4,
    ".ogg": MediaFormat.OGG,
    ".opus": MediaFormat.OGG,
    ".wav": MediaFormat.WAV,
    ".webm": MediaFormat.WEBM,
}


class AudioSource(BaseModel, frozen=True):
    """A local audio file selected for summarization."""

    path: Path
    media_format: MediaFormat
    size: int

    @property
    def file_name(self) -> str:
        return self.path.name

    @property
    def content_type(self) -> str:
        return self.media_format.content_type

    @classmethod
    def from_path(cls, raw_path: str | Path) -> "AudioSource":
        """
        Resolves a user-supplied path into an audio source.

        Args:
            raw_path: Path to the audio file; a leading ``~`` is expanded.

        Returns:
            AudioSource with the absolute path and inferred media format.

        Raises:
            AudioSourceError: If the file is missing or its format unsupported.
        """
        path = Path(raw_path).expanduser()
        if not path.exists():
            raise AudioSourceError(str(raw_path), "the path does not exist")
        if not path.is_file():
            raise AudioSourceError(str(raw_path), "the path is not a file")

        media_format = _EXTENSIONS.get(path.suffix.lower())
        if media_format is None:
            raise AudioSourceError(
                str(raw_path),
                f"unsupported media format '{path.suffix or '(none)'}'",
            )

        resolved = path.resolve()
        return cls(path=resolved, media_format=media_format, size=resolved.stat().st_size)


class StorageReference(BaseModel, frozen=True):
    """Location of an uploaded object."""

    bucket_name: str
    object_name: str
    region: str

    @property
    def uri(self) -> str:
        return f"s3://{self.bucket_name}/{self.object_name}"


class JobStatus(str, Enum):
    """Lifecycle states of a transcription job."""

    SUBMITTED = "submitted"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)


_ALLOWED_TRANSITIONS: dict[JobStatus, frozenset[JobStatus]] = {
    JobStatus.SUBMITTED: frozenset(JobStatus),
    JobStatus.IN_PROGRESS: frozenset(
        {JobStatus.IN_PROGRESS, JobStatus.COMPLETED, JobStatus.FAILED}
    ),
    JobStatus.COMPLETED: frozenset(),
    JobStatus.FAILED: frozenset(),
}


class JobStatusReport(BaseModel, frozen=True):
    """
    A single status observation returned by the transcription service.

    ``state`` is None when the provider reported a status this system does
    not recognise.
    """

    state: JobStatus | None
    provider_status: str
    output_ref: str | None = None
    failure_reason: str | None = None


class TranscriptionJob(BaseModel, frozen=True):
    """A submitted transcription job and its last observed status."""

    job_id: str
    status: JobStatus = JobStatus.SUBMITTED
    output_ref: str | None = None
    failure_reason: str | None = None
    polls: int = 0

    def advance(self, report: JobStatusReport) -> "TranscriptionJob":
        """
        Applies a status observation and returns the resulting job.

        Raises:
            JobStateError: If the job is terminal or the transition is not allowed.
        """
        if report.state is None:
            return self.model_copy(update={"polls": self.polls + 1})

        if report.state not in _ALLOWED_TRANSITIONS[self.status]:
            raise JobStateError(self.job_id, self.status.value, report.state.value)

        update = {"status": report.state, "polls": self.polls + 1}
        if report.state is JobStatus.COMPLETED:
            update["output_ref"] = report.output_ref
        elif report.state is JobStatus.FAILED:
            update["failure_reason"] = report.failure_reason
        return self.model_copy(update=update)


class Alternative(BaseModel, frozen=True):
    """One candidate recognition for a transcript segment."""

    content: str
    confidence: float


class DocumentSegment(BaseModel, frozen=True):
    """A transcript document segment with its candidate recognitions."""

    alternatives: list[Alternative] = Field(min_length=1)
    speaker: str | None = None


class TranscriptDocument(BaseModel, frozen=True):
    """Structured transcript as produced by the transcription service."""

    job_id: str
    segments: list[DocumentSegment]


class TranscriptSegment(BaseModel, frozen=True):
    """A recognised segment after selecting its best alternative."""

    text: str
    confidence: float
    speaker: str | None = None


class Transcript(BaseModel, frozen=True):
    """Ordered recognised text of an audio file."""

    segments: list[TranscriptSegment]

    @property
    def text(self) -> str:
        return " ".join(segment.text for segment in self.segments if segment.text)

    def by_speaker(self) -> str:
        """Renders consecutive segments of one speaker as ``Speaker X: ...`` lines."""
        if not any(segment.speaker for segment in self.segments):
            return self.text

        lines: list[str] = []
        current_speaker: str | None = None
        current_words: list[str] = []
        for segment in self.segments:
            if not segment.text:
                continue
            if current_words and segment.speaker != current_speaker:
                lines.append(_speaker_line(current_speaker, current_words))
                current_words = []
            current_speaker = segment.speaker
            current_words.append(segment.text)
        if current_words:
            lines.append(_speaker_line(current_speaker, current_words))
        return "\n".join(lines)


def _speaker_line(speaker: str | None, words: list[str]) -> str:
    return f"Speaker {speaker or '?'}: {' '.join(words)}"


class SummaryRequest(BaseModel, frozen=True):
    """Model invocation payload for one summarization."""

    model_id: str
    prompt: str
    max_tokens: int
    temperature: float
    top_p: float
    top_k: int
    system_prompt: str | None = None


class TextBlock(BaseModel, frozen=True):
    """A content block carrying generated text."""

    type: Literal["text"] = "text"
    text: str


class OpaqueBlock(BaseModel, frozen=True):
    """A content block of a kind the summarizer does not consume."""

    type: Literal["other"] = "other"
    kind: str


ContentBlock = Annotated[Union[TextBlock, OpaqueBlock], Field(discriminator="type")]


class ModelResponse(BaseModel, frozen=True):
    """Response envelope of a model invocation."""

    blocks: list[ContentBlock]
    stop_reason: str | None = None


class Summary(BaseModel, frozen=True):
    """The generated summary."""

    text: str
    model_id: str


class DeliveryMetadata(BaseModel, frozen=True):
    """Context rendered next to the summary by output sinks."""

    source_name: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    transcript: Transcript | None = None
