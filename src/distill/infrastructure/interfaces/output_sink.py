"""Abstract interface for summary output sinks."""

from abc import ABC, abstractmethod

from distill.domain.models import DeliveryMetadata, Summary


class OutputSink(ABC):
    """Abstract base class for summary destinations."""

    name: str = "sink"

    @abstractmethod
    def render(self, summary: Summary, metadata: DeliveryMetadata) -> None:
        """
        Delivers a summary.

        Raises:
            SinkError: If delivery fails.
        """
