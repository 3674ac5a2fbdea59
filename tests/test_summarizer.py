import pytest

from distill.domain import ModelResponse, OpaqueBlock, SummarizationClient, TextBlock
from distill.exceptions import ModelInvocationError, ResponseParseError

from fakes import FakeLLM


def test_request_is_deterministic(model_config):
    client = SummarizationClient(FakeLLM(), model_config)
    first = client.build_request("Arsenal beat Luton Town...")
    second = client.build_request("Arsenal beat Luton Town...")
    assert first == second
    assert first.prompt == "Summarize this.\n\nArsenal beat Luton Town..."
    assert (first.model_id, first.max_tokens, first.temperature, first.top_p, first.top_k) == (
        "gemini-test",
        512,
        0.2,
        0.8,
        20,
    )


def test_summarize_sends_built_request(model_config):
    llm = FakeLLM()
    summary = SummarizationClient(llm, model_config).summarize("transcript")
    assert summary.text == "A summary."
    assert summary.model_id == "gemini-test"
    assert llm.requests == [SummarizationClient(llm, model_config).build_request("transcript")]


def test_text_blocks_are_concatenated_in_order(model_config):
    response = ModelResponse(
        blocks=[
            OpaqueBlock(kind="thought"),
            TextBlock(text="First paragraph.\n\n"),
            OpaqueBlock(kind="function_call"),
            TextBlock(text="Second paragraph."),
        ]
    )
    summary = SummarizationClient(FakeLLM(response), model_config).summarize("t")
    assert summary.text == "First paragraph.\n\nSecond paragraph."


@pytest.mark.parametrize(
    "blocks",
    [[], [OpaqueBlock(kind="thought")], [TextBlock(text="  \n")]],
)
def test_response_without_text_is_a_parse_error(model_config, blocks):
    client = SummarizationClient(FakeLLM(ModelResponse(blocks=blocks)), model_config)
    with pytest.raises(ResponseParseError) as exc_info:
        client.summarize("t")
    assert exc_info.value.stage == "summarization"


def test_invocation_errors_propagate(model_config):
    error = ModelInvocationError("gemini-test", Exception("permission denied"))
    client = SummarizationClient(FakeLLM(error=error), model_config)
    with pytest.raises(ModelInvocationError, match="permission denied"):
        client.summarize("t")


def test_blocks_parse_from_tagged_payload():
    response = ModelResponse.model_validate(
        {"blocks": [{"type": "text", "text": "hi"}, {"type": "other", "kind": "inline_data"}]}
    )
    assert isinstance(response.blocks[0], TextBlock)
    assert isinstance(response.blocks[1], OpaqueBlock)
