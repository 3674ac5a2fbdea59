"""Gemini LLM service implementation."""

from typing import Any

from google import genai

from distill.domain.models import ModelResponse, OpaqueBlock, SummaryRequest, TextBlock
from distill.exceptions import ModelInvocationError
from distill.infrastructure.interfaces import LLMService
from distill.logging import setup_logging

logger = setup_logging()

_PART_KINDS = (
    "function_call",
    "function_response",
    "inline_data",
    "file_data",
    "executable_code",
    "code_execution_result",
)


def _to_block(part: Any) -> TextBlock | OpaqueBlock:
    """Maps a response part to a content block; thoughts are not summary text."""
    if getattr(part, "thought", None):
        return OpaqueBlock(kind="thought")
    text = getattr(part, "text", None)
    if isinstance(text, str):
        return TextBlock(text=text)
    for kind in _PART_KINDS:
        if getattr(part, kind, None) is not None:
            return OpaqueBlock(kind=kind)
    return OpaqueBlock(kind="unknown")


class GeminiLLMService(LLMService):
    """LLM service implementation using Google Gemini."""

    def __init__(self, client: genai.Client):
        self._client = client

    def invoke(self, request: SummaryRequest) -> ModelResponse:
        config: dict[str, Any] = {
            "max_output_tokens": request.max_tokens,
            "temperature": request.temperature,
            "top_p": request.top_p,
            "top_k": request.top_k,
        }
        if request.system_prompt:
            config["system_instruction"] = request.system_prompt

        try:
            response = self._client.models.generate_content(
                model=request.model_id,
                contents=request.prompt,
                config=config,
            )
        except Exception as e:
            logger.exception("Gemini API call failed", extra={"model_id": request.model_id})
            raise ModelInvocationError(request.model_id, e) from e

        candidates = response.candidates or []
        if not candidates:
            logger.warning("Gemini returned no candidates", extra={"model_id": request.model_id})
            return ModelResponse(blocks=[])

        candidate = candidates[0]
        parts = candidate.content.parts if candidate.content and candidate.content.parts else []
        finish_reason = getattr(candidate, "finish_reason", None)

        logger.info(
            "LLM invocation completed",
            extra={"model_id": request.model_id, "part_count": len(parts)},
        )
        return ModelResponse(
            blocks=[_to_block(part) for part in parts],
            stop_reason=str(getattr(finish_reason, "value", finish_reason))
            if finish_reason is not None
            else None,
        )
