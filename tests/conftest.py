import pytest

from distill.config import ModelConfig
from distill.domain import SummarizationClient, TranscriptBuilder, TranscriptionJobController
from distill.handlers import OutputType, PipelineHandler

from fakes import FakeLLM, FakeStorage, RecordingSink


@pytest.fixture
def model_config():
    return ModelConfig(
        model_id="gemini-test",
        max_tokens=512,
        temperature=0.2,
        top_p=0.8,
        top_k=20,
        prompt_template="Summarize this.",
    )


@pytest.fixture
def audio_file(tmp_path):
    path = tmp_path / "meeting.m4a"
    path.write_bytes(b"fake audio bytes")
    return path


@pytest.fixture
def make_handler(model_config):
    """Builds a pipeline handler around fake collaborators."""

    def _make(service, llm=None, sinks=None, fallback=None, storage=None):
        fallback = fallback or RecordingSink("terminal")
        sinks = sinks if sinks is not None else {OutputType.TERMINAL: fallback}
        controller = TranscriptionJobController(
            service, TranscriptBuilder(), poll_interval_seconds=0.01, sleep=lambda s: None
        )
        return PipelineHandler(
            storage=storage or FakeStorage(),
            controller=controller,
            summarizer=SummarizationClient(llm or FakeLLM(), model_config),
            sinks=sinks,
            fallback_sink=fallback,
            bucket_name="mys3bucket",
        )

    return _make
