"""Progress observation for interactive feedback."""

from enum import Enum

from .models import TranscriptionJob


class Stage(str, Enum):
    """Pipeline stages in execution order."""

    UPLOAD = "upload"
    TRANSCRIPTION = "transcription"
    SUMMARIZATION = "summarization"
    DELIVERY = "delivery"


class ProgressObserver:
    """Receives progress notifications; the default implementation ignores them."""

    def stage_started(self, stage: Stage, detail: str = "") -> None:
        pass

    def job_polled(self, job: TranscriptionJob) -> None:
        pass
