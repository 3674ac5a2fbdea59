from contextlib import ExitStack

from rich.console import Console

from distill.config import (
    AppConfig,
    ModelConfig,
    OutputConfig,
    StorageConfig,
    TranscriptionConfig,
)
from distill.dependencies import get_handler, get_sinks
from distill.handlers import OutputType
from distill.infrastructure import ChatWebhookSink


def test_webhook_sink_needs_a_url(tmp_path):
    config = AppConfig(output=OutputConfig(output_dir=tmp_path))
    with ExitStack() as stack:
        sinks = get_sinks(config, Console(), stack)
    assert set(sinks) == {
        OutputType.TERMINAL,
        OutputType.TEXT,
        OutputType.MARKDOWN,
        OutputType.WORD,
    }


def test_webhook_sink_with_url(tmp_path):
    config = AppConfig(
        output=OutputConfig(output_dir=tmp_path, webhook_url="https://hooks.example/T000")
    )
    with ExitStack() as stack:
        sinks = get_sinks(config, Console(), stack)
        assert isinstance(sinks[OutputType.WEBHOOK], ChatWebhookSink)
        assert sinks[OutputType.TEXT].path == tmp_path / "summary.txt"


def test_webhook_client_is_closed_with_the_stack(tmp_path):
    config = AppConfig(
        output=OutputConfig(output_dir=tmp_path, webhook_url="https://hooks.example/T000")
    )
    with ExitStack() as stack:
        client = get_sinks(config, Console(), stack)[OutputType.WEBHOOK]._client
        assert not client.is_closed
    assert client.is_closed


def test_handler_closes_http_clients_on_exit(tmp_path):
    config = AppConfig(
        storage=StorageConfig(bucket_name="mys3bucket"),
        transcription=TranscriptionConfig(api_key="aai-test"),
        model=ModelConfig(api_key="gemini-test"),
        output=OutputConfig(output_dir=tmp_path, webhook_url="https://hooks.example/T000"),
    )
    with get_handler(config, Console()) as handler:
        clients = [
            handler._controller._service._http_client,
            handler._sinks[OutputType.WEBHOOK]._client,
        ]
        assert not any(client.is_closed for client in clients)
    assert all(client.is_closed for client in clients)
