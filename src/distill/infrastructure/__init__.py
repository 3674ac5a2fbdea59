"""Infrastructure layer exports."""

from .assemblyai_transcriber import AssemblyAITranscriber
from .file_sinks import MarkdownSink, TextFileSink, WordDocumentSink
from .gemini_llm import GeminiLLMService
from .minio_storage import MinioStorageGateway
from .terminal_sink import TerminalSink
from .webhook_sink import ChatWebhookSink

__all__ = [
    "AssemblyAITranscriber",
    "ChatWebhookSink",
    "GeminiLLMService",
    "MarkdownSink",
    "MinioStorageGateway",
    "TerminalSink",
    "TextFileSink",
    "WordDocumentSink",
]
