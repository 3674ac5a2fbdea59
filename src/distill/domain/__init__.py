"""Domain layer exports."""

from .models import (
    Alternative,
    AudioSource,
    DeliveryMetadata,
    DocumentSegment,
    JobStatus,
    JobStatusReport,
    MediaFormat,
    ModelResponse,
    OpaqueBlock,
    StorageReference,
    Summary,
    SummaryRequest,
    TextBlock,
    Transcript,
    TranscriptDocument,
    TranscriptionJob,
    TranscriptSegment,
)
from .progress import ProgressObserver, Stage
from .summarizer import SummarizationClient
from .transcript_builder import TranscriptBuilder
from .transcription_controller import TranscriptionJobController

__all__ = [
    "Alternative",
    "AudioSource",
    "DeliveryMetadata",
    "DocumentSegment",
    "JobStatus",
    "JobStatusReport",
    "MediaFormat",
    "ModelResponse",
    "OpaqueBlock",
    "ProgressObserver",
    "Stage",
    "StorageReference",
    "Summary",
    "SummaryRequest",
    "SummarizationClient",
    "TextBlock",
    "Transcript",
    "TranscriptBuilder",
    "TranscriptDocument",
    "TranscriptionJob",
    "TranscriptionJobController",
    "TranscriptSegment",
]
