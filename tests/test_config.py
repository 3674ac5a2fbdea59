from pathlib import Path

import pytest

from distill.config import DEFAULT_PROMPT_TEMPLATE, load_config
from distill.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in [
        "DISTILL_S3_BUCKET",
        "DISTILL_S3_REGION",
        "DISTILL_S3_SECURE",
        "DISTILL_MAX_WAIT_SECONDS",
        "DISTILL_WEBHOOK_URL",
        "DISTILL_PROMPT_TEMPLATE_PATH",
        "DISTILL_TEMPERATURE",
        "DISTILL_TOP_K",
        "DISTILL_POLL_INTERVAL_SECONDS",
    ]:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = load_config()
    assert config.storage.endpoint == "s3.amazonaws.com"
    assert config.storage.secure is True
    assert config.storage.region is None
    assert config.transcription.poll_interval_seconds == 5.0
    assert config.transcription.max_wait_seconds is None
    assert config.model.prompt_template == DEFAULT_PROMPT_TEMPLATE
    assert config.output.webhook_url is None
    assert config.output.output_dir == Path(".")


def test_values_from_environment(monkeypatch):
    monkeypatch.setenv("DISTILL_S3_BUCKET", "mys3bucket")
    monkeypatch.setenv("DISTILL_S3_SECURE", "false")
    monkeypatch.setenv("DISTILL_MAX_WAIT_SECONDS", "900")
    monkeypatch.setenv("DISTILL_TEMPERATURE", "0.1")
    monkeypatch.setenv("DISTILL_TOP_K", "250")
    monkeypatch.setenv("DISTILL_WEBHOOK_URL", "https://hooks.example/T000")

    config = load_config()

    assert config.storage.bucket_name == "mys3bucket"
    assert config.storage.secure is False
    assert config.transcription.max_wait_seconds == 900
    assert config.model.temperature == 0.1
    assert config.model.top_k == 250
    assert config.output.webhook_url == "https://hooks.example/T000"


def test_config_is_immutable():
    config = load_config()
    with pytest.raises(Exception):
        config.model.top_k = 1


def test_prompt_template_from_file(monkeypatch, tmp_path):
    template = tmp_path / "prompt.txt"
    template.write_text("List the decisions.\n", encoding="utf-8")
    monkeypatch.setenv("DISTILL_PROMPT_TEMPLATE_PATH", str(template))
    assert load_config().model.prompt_template == "List the decisions."


def test_missing_prompt_template_file(monkeypatch, tmp_path):
    monkeypatch.setenv("DISTILL_PROMPT_TEMPLATE_PATH", str(tmp_path / "missing.txt"))
    with pytest.raises(ConfigurationError, match="Cannot read prompt template"):
        load_config()


def test_invalid_values_are_configuration_errors(monkeypatch):
    monkeypatch.setenv("DISTILL_POLL_INTERVAL_SECONDS", "soon")
    with pytest.raises(ConfigurationError) as exc_info:
        load_config()
    assert exc_info.value.stage == "configuration"
