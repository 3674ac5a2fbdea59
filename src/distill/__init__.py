"""Summarize audio files through object storage, AssemblyAI and Gemini."""

from distill.exceptions import (
    AudioSourceError,
    ConfigurationError,
    DistillError,
    JobStateError,
    ModelInvocationError,
    ResponseParseError,
    SinkError,
    SubmissionError,
    TranscriptionFailed,
    TranscriptionTimeout,
    TranscriptRetrievalError,
    UploadError,
)
from distill.logging import setup_logging

__all__ = [
    "setup_logging",
    "AudioSourceError",
    "ConfigurationError",
    "DistillError",
    "JobStateError",
    "ModelInvocationError",
    "ResponseParseError",
    "SinkError",
    "SubmissionError",
    "TranscriptionFailed",
    "TranscriptionTimeout",
    "TranscriptRetrievalError",
    "UploadError",
]
