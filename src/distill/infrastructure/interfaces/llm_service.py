"""Abstract interface for LLM service operations."""

from abc import ABC, abstractmethod

from distill.domain.models import ModelResponse, SummaryRequest


class LLMService(ABC):
    """Abstract base class for LLM backends."""

    @abstractmethod
    def invoke(self, request: SummaryRequest) -> ModelResponse:
        """
        Sends a prompt with its decoding parameters to the model.

        Args:
            request: The model identifier, prompt and decoding parameters.

        Returns:
            ModelResponse with the content blocks in the order generated.

        Raises:
            ModelInvocationError: If the model call fails.
        """
