"""Terminal implementation of the OutputSink interface."""

from rich.console import Console

from distill.domain.models import DeliveryMetadata, Summary
from distill.exceptions import SinkError
from distill.infrastructure.interfaces import OutputSink


class TerminalSink(OutputSink):
    """Prints the summary, and optionally the transcript, to the console."""

    name = "terminal"

    def __init__(self, console: Console, include_transcript: bool = True):
        self._console = console
        self._include_transcript = include_transcript

    def render(self, summary: Summary, metadata: DeliveryMetadata) -> None:
        try:
            self._print("")
            self._print(f"Summary:\n{summary.text}\n")
            if self._include_transcript and metadata.transcript is not None:
                self._print(f"Transcription:\n{metadata.transcript.text}\n")
        except OSError as e:
            raise SinkError(self.name, e) from e

    def _print(self, text: str) -> None:
        self._console.print(text, markup=False, highlight=False, soft_wrap=True)
