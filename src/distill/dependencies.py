"""Dependency injection configuration for the distill command line tool."""

from collections.abc import Iterator
from contextlib import ExitStack, contextmanager
from datetime import timedelta

import assemblyai as aai
import httpx
from google import genai
from minio import Minio
from rich.console import Console

from distill.config import AppConfig
from distill.domain import SummarizationClient, TranscriptBuilder, TranscriptionJobController
from distill.handlers import OutputType, PipelineHandler
from distill.infrastructure import (
    AssemblyAITranscriber,
    ChatWebhookSink,
    GeminiLLMService,
    MarkdownSink,
    MinioStorageGateway,
    TerminalSink,
    TextFileSink,
    WordDocumentSink,
)
from distill.infrastructure.interfaces import OutputSink
from distill.logging import setup_logging

logger = setup_logging()


def get_storage(config: AppConfig) -> MinioStorageGateway:
    """Returns the object storage gateway."""
    client = Minio(
        endpoint=config.storage.endpoint,
        access_key=config.storage.access_key,
        secret_key=config.storage.secret_key,
        secure=config.storage.secure,
        region=config.storage.region,
    )
    return MinioStorageGateway(
        client,
        presign_expiry=timedelta(seconds=config.storage.presign_expiry_seconds),
        region=config.storage.region,
    )


def get_transcription_service(
    config: AppConfig, storage: MinioStorageGateway, stack: ExitStack
) -> AssemblyAITranscriber:
    """Returns the AssemblyAI transcription service."""
    aai.settings.api_key = config.transcription.api_key
    aai_config = aai.TranscriptionConfig(
        language_code=config.transcription.language_code,
        speaker_labels=config.transcription.speaker_labels,
    )
    http_client = stack.enter_context(
        httpx.Client(
            base_url=aai.settings.base_url,
            headers={"authorization": config.transcription.api_key},
            timeout=30.0,
        )
    )
    return AssemblyAITranscriber(
        aai.Transcriber(config=aai_config), http_client, storage.presigned_url
    )


def get_controller(
    config: AppConfig, storage: MinioStorageGateway, stack: ExitStack
) -> TranscriptionJobController:
    """Returns the transcription job controller."""
    return TranscriptionJobController(
        get_transcription_service(config, storage, stack),
        TranscriptBuilder(),
        poll_interval_seconds=config.transcription.poll_interval_seconds,
        max_wait_seconds=config.transcription.max_wait_seconds,
    )


def get_summarizer(config: AppConfig) -> SummarizationClient:
    """Returns the Gemini-backed summarization client."""
    client = genai.Client(api_key=config.model.api_key)
    return SummarizationClient(GeminiLLMService(client), config.model)


def get_sinks(
    config: AppConfig, console: Console, stack: ExitStack
) -> dict[OutputType, OutputSink]:
    """Returns the available output sinks; the webhook sink needs a configured URL."""
    output = config.output
    sinks: dict[OutputType, OutputSink] = {
        OutputType.TERMINAL: TerminalSink(console, output.include_transcript),
        OutputType.TEXT: TextFileSink(output.output_dir, output.include_transcript),
        OutputType.MARKDOWN: MarkdownSink(output.output_dir, output.include_transcript),
        OutputType.WORD: WordDocumentSink(output.output_dir, output.include_transcript),
    }
    if output.webhook_url:
        sinks[OutputType.WEBHOOK] = ChatWebhookSink(
            stack.enter_context(httpx.Client(timeout=output.webhook_timeout_seconds)),
            output.webhook_url,
        )
    else:
        logger.info("Webhook sink disabled, DISTILL_WEBHOOK_URL is not set")
    return sinks


@contextmanager
def get_handler(config: AppConfig, console: Console) -> Iterator[PipelineHandler]:
    """Yields the configured pipeline handler and closes its HTTP clients on exit."""
    with ExitStack() as stack:
        storage = get_storage(config)
        sinks = get_sinks(config, console, stack)
        yield PipelineHandler(
            storage=storage,
            controller=get_controller(config, storage, stack),
            summarizer=get_summarizer(config),
            sinks=sinks,
            fallback_sink=sinks[OutputType.TERMINAL],
            bucket_name=config.storage.bucket_name,
            key_prefix=config.storage.key_prefix,
        )
