"""Infrastructure interface exports."""

from .llm_service import LLMService
from .output_sink import OutputSink
from .storage_gateway import StorageGateway
from .transcription_service import TranscriptionService

__all__ = ["LLMService", "OutputSink", "StorageGateway", "TranscriptionService"]
