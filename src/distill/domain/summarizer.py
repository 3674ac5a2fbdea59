"""Core business logic for transcript summarization."""

from distill.config import ModelConfig
from distill.exceptions import ResponseParseError
from distill.infrastructure.interfaces import LLMService
from distill.logging import setup_logging

from .models import ModelResponse, Summary, SummaryRequest, TextBlock

logger = setup_logging()


class SummarizationClient:
    """Summarizes transcripts with a remote model."""

    def __init__(self, llm_service: LLMService, config: ModelConfig):
        self._llm = llm_service
        self._config = config

    def build_request(self, transcript_text: str) -> SummaryRequest:
        """Wraps the transcript in the prompt template with the configured decoding parameters."""
        return SummaryRequest(
            model_id=self._config.model_id,
            prompt=f"{self._config.prompt_template}\n\n{transcript_text}",
            max_tokens=self._config.max_tokens,
            temperature=self._config.temperature,
            top_p=self._config.top_p,
            top_k=self._config.top_k,
            system_prompt=self._config.system_prompt,
        )

    def summarize(self, transcript_text: str) -> Summary:
        """
        Generates a summary with action items for a transcript.

        Args:
            transcript_text: The flattened transcript.

        Returns:
            Summary built from every text block of the model response.

        Raises:
            ModelInvocationError: If the model call fails.
            ResponseParseError: If the response carries no text.
        """
        request = self.build_request(transcript_text)
        logger.info(
            "Requesting summary",
            extra={"model_id": request.model_id, "prompt_chars": len(request.prompt)},
        )

        response = self._llm.invoke(request)
        text = self.extract_text(response)

        logger.info(
            "Summary generated",
            extra={"model_id": request.model_id, "summary_chars": len(text)},
        )
        return Summary(text=text, model_id=request.model_id)

    @staticmethod
    def extract_text(response: ModelResponse) -> str:
        """Concatenates the text blocks of a response in order."""
        texts = [block.text for block in response.blocks if isinstance(block, TextBlock)]
        text = "".join(texts).strip()
        if not text:
            raise ResponseParseError(
                f"Model response has no text content "
                f"({len(response.blocks)} blocks, stop reason: {response.stop_reason})"
            )
        return text
