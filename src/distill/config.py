"""Application configuration loaded from environment variables."""

import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from distill.exceptions import ConfigurationError

DEFAULT_PROMPT_TEMPLATE = (
    "Summarize the following transcript of a meeting or conversation. "
    "Start with a concise summary of the key points and decisions in one or "
    "two paragraphs. Then list every action item as a bullet point, naming "
    "the owner and any deadline when the transcript mentions them. If there "
    "are no action items, say so."
)


class StorageConfig(BaseModel, frozen=True):
    """S3-compatible object storage configuration."""

    endpoint: str = "s3.amazonaws.com"
    access_key: str = ""
    secret_key: str = ""
    secure: bool = True
    bucket_name: str = ""
    region: str | None = None
    key_prefix: str = ""
    presign_expiry_seconds: int = Field(default=3600, gt=0)


class TranscriptionConfig(BaseModel, frozen=True):
    """AssemblyAI transcription configuration."""

    api_key: str = ""
    language_code: str = "en_us"
    speaker_labels: bool = True
    poll_interval_seconds: float = Field(default=5.0, gt=0)
    max_wait_seconds: float | None = Field(default=None, gt=0)


class ModelConfig(BaseModel, frozen=True):
    """Gemini model and decoding configuration."""

    api_key: str = ""
    model_id: str = "gemini-2.5-flash"
    max_tokens: int = Field(default=2048, gt=0)
    temperature: float = Field(default=0.5, ge=0.0, le=2.0)
    top_p: float = Field(default=0.9, ge=0.0, le=1.0)
    top_k: int = Field(default=40, gt=0)
    system_prompt: str | None = None
    prompt_template: str = DEFAULT_PROMPT_TEMPLATE


class OutputConfig(BaseModel, frozen=True):
    """Output sink configuration."""

    webhook_url: str | None = None
    webhook_timeout_seconds: float = Field(default=10.0, gt=0)
    output_dir: Path = Path(".")
    include_transcript: bool = True


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    storage: StorageConfig = StorageConfig()
    transcription: TranscriptionConfig = TranscriptionConfig()
    model: ModelConfig = ModelConfig()
    output: OutputConfig = OutputConfig()
    log_level: str = "WARNING"


def _optional(name: str) -> str | None:
    value = os.getenv(name, "").strip()
    return value or None


def _read_prompt_template(path: str | None) -> str:
    if path is None:
        return DEFAULT_PROMPT_TEMPLATE
    try:
        template = Path(path).expanduser().read_text(encoding="utf-8").strip()
    except OSError as e:
        raise ConfigurationError(f"Cannot read prompt template '{path}'", e) from e
    if not template:
        raise ConfigurationError(f"Prompt template '{path}' is empty")
    return template


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    try:
        return AppConfig(
            storage=StorageConfig(
                endpoint=os.getenv("DISTILL_S3_ENDPOINT", "s3.amazonaws.com"),
                access_key=os.getenv("DISTILL_S3_ACCESS_KEY", ""),
                secret_key=os.getenv("DISTILL_S3_SECRET_KEY", ""),
                secure=os.getenv("DISTILL_S3_SECURE", "true"),
                bucket_name=os.getenv("DISTILL_S3_BUCKET", ""),
                region=_optional("DISTILL_S3_REGION"),
                key_prefix=os.getenv("DISTILL_S3_KEY_PREFIX", ""),
                presign_expiry_seconds=os.getenv(
                    "DISTILL_PRESIGN_EXPIRY_SECONDS", "3600"
                ),
            ),
            transcription=TranscriptionConfig(
                api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
                language_code=os.getenv("DISTILL_LANGUAGE_CODE", "en_us"),
                speaker_labels=os.getenv("DISTILL_SPEAKER_LABELS", "true"),
                poll_interval_seconds=os.getenv("DISTILL_POLL_INTERVAL_SECONDS", "5"),
                max_wait_seconds=_optional("DISTILL_MAX_WAIT_SECONDS"),
            ),
            model=ModelConfig(
                api_key=os.getenv("GEMINI_API_KEY", ""),
                model_id=os.getenv("DISTILL_MODEL_ID", "gemini-2.5-flash"),
                max_tokens=os.getenv("DISTILL_MAX_TOKENS", "2048"),
                temperature=os.getenv("DISTILL_TEMPERATURE", "0.5"),
                top_p=os.getenv("DISTILL_TOP_P", "0.9"),
                top_k=os.getenv("DISTILL_TOP_K", "40"),
                system_prompt=_optional("DISTILL_SYSTEM_PROMPT"),
                prompt_template=_read_prompt_template(
                    _optional("DISTILL_PROMPT_TEMPLATE_PATH")
                ),
            ),
            output=OutputConfig(
                webhook_url=_optional("DISTILL_WEBHOOK_URL"),
                webhook_timeout_seconds=os.getenv(
                    "DISTILL_WEBHOOK_TIMEOUT_SECONDS", "10"
                ),
                output_dir=os.getenv("DISTILL_OUTPUT_DIR", "."),
                include_transcript=os.getenv("DISTILL_INCLUDE_TRANSCRIPT", "true"),
            ),
            log_level=os.getenv("DISTILL_LOG_LEVEL", "WARNING").upper(),
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}", e) from e
