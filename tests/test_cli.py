from contextlib import nullcontext

import pytest
from typer.testing import CliRunner

from distill import main as cli
from distill.config import AppConfig, StorageConfig
from distill.domain import StorageReference, Summary, Transcript, TranscriptSegment
from distill.exceptions import SinkError, TranscriptionFailed
from distill.handlers import DeliveryStatus, OutputType, PipelineResult

runner = CliRunner()


class StubHandler:
    def __init__(self, delivery=DeliveryStatus.DELIVERED, error=None):
        self.delivery = delivery
        self.error = error
        self.runs = []

    def run(self, source, output_type, observer=None):
        self.runs.append((source, output_type))
        if self.error:
            raise self.error
        sink_error = None
        if self.delivery is DeliveryStatus.FAILED:
            sink_error = SinkError(output_type.value, ConnectionError("endpoint unreachable"))
        return PipelineResult(
            reference=StorageReference(
                bucket_name="mys3bucket", object_name=source.file_name, region="us-east-1"
            ),
            job_id="job-1",
            transcript=Transcript(segments=[TranscriptSegment(text="Hello.", confidence=0.9)]),
            summary=Summary(text="A summary.", model_id="gemini-test"),
            output_type=output_type,
            delivery=self.delivery,
            sink_error=sink_error,
        )


@pytest.fixture
def handler(monkeypatch):
    stub = StubHandler()
    monkeypatch.setattr(cli, "get_handler", lambda config, console: nullcontext(stub))
    monkeypatch.setattr(cli, "setup_logging", lambda level=None: None)
    monkeypatch.setattr(
        cli,
        "load_config",
        lambda: AppConfig(storage=StorageConfig(bucket_name="mys3bucket")),
    )
    return stub


def test_success_exits_zero(handler, audio_file):
    result = runner.invoke(cli.app, ["-i", str(audio_file)])

    assert result.exit_code == 0, result.output
    assert "Welcome to Distill CLI" in result.output
    assert "Done!" in result.output
    [(source, output_type)] = handler.runs
    assert source.file_name == "meeting.m4a"
    assert output_type is OutputType.TERMINAL


def test_output_type_is_case_insensitive(handler, audio_file):
    result = runner.invoke(cli.app, ["-i", str(audio_file), "-o", "Markdown"])
    assert result.exit_code == 0, result.output
    assert handler.runs[0][1] is OutputType.MARKDOWN
    assert "Summary delivered (markdown)" in result.output


def test_unknown_output_type_is_usage_error(handler, audio_file):
    result = runner.invoke(cli.app, ["-i", str(audio_file), "-o", "pdf"])
    assert result.exit_code == 2
    assert handler.runs == []


def test_pipeline_failure_names_stage(handler, audio_file):
    handler.error = TranscriptionFailed("job-1", "audio too short")

    result = runner.invoke(cli.app, ["-i", str(audio_file)])

    assert result.exit_code == cli.EXIT_FAILURE
    assert "Error in transcription stage" in result.output
    assert "audio too short" in result.output


def test_failed_delivery_exits_two(handler, audio_file):
    handler.delivery = DeliveryStatus.FAILED
    result = runner.invoke(cli.app, ["-i", str(audio_file), "-o", "webhook"])
    assert result.exit_code == cli.EXIT_DELIVERY_FAILED
    assert "delivery failed" in result.output


def test_skipped_delivery_still_succeeds(handler, audio_file):
    handler.delivery = DeliveryStatus.SKIPPED
    result = runner.invoke(cli.app, ["-i", str(audio_file), "-o", "webhook"])
    assert result.exit_code == 0, result.output
    assert "not configured" in result.output


def test_missing_file_is_input_error(handler, tmp_path):
    result = runner.invoke(cli.app, ["-i", str(tmp_path / "absent.m4a")])
    assert result.exit_code == cli.EXIT_FAILURE
    assert "Error in input stage" in result.output
    assert handler.runs == []


def test_missing_bucket_is_configuration_error(handler, monkeypatch, audio_file):
    monkeypatch.setattr(cli, "load_config", lambda: AppConfig())
    result = runner.invoke(cli.app, ["-i", str(audio_file)])
    assert result.exit_code == cli.EXIT_FAILURE
    assert "Error in configuration stage" in result.output


def test_bucket_option_overrides_configuration(monkeypatch, audio_file):
    seen = []
    stub = StubHandler()

    def get_handler(config, console):
        seen.append(config.storage.bucket_name)
        return nullcontext(stub)

    monkeypatch.setattr(cli, "get_handler", get_handler)
    monkeypatch.setattr(cli, "setup_logging", lambda level=None: None)
    monkeypatch.setattr(cli, "load_config", lambda: AppConfig())

    result = runner.invoke(cli.app, ["-i", str(audio_file), "--bucket", "other-bucket"])

    assert result.exit_code == 0, result.output
    assert seen == ["other-bucket"]
