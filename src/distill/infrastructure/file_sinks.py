"""File-based implementations of the OutputSink interface."""

from abc import abstractmethod
from pathlib import Path

from docx import Document

from distill.domain.models import DeliveryMetadata, Summary
from distill.exceptions import SinkError
from distill.infrastructure.interfaces import OutputSink
from distill.logging import setup_logging

logger = setup_logging()


class _FileSink(OutputSink):
    """Writes the summary to a file in the output directory."""

    file_name = "summary"

    def __init__(self, output_dir: Path, include_transcript: bool = True):
        self._output_dir = output_dir
        self._include_transcript = include_transcript

    @property
    def path(self) -> Path:
        return self._output_dir / self.file_name

    def render(self, summary: Summary, metadata: DeliveryMetadata) -> None:
        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
            self._write(summary, metadata)
        except Exception as e:
            logger.exception("Writing summary file failed", extra={"path": str(self.path)})
            raise SinkError(self.name, e) from e
        logger.info("Summary written", extra={"path": str(self.path), "sink": self.name})

    def _transcript(self, metadata: DeliveryMetadata) -> str | None:
        if not self._include_transcript or metadata.transcript is None:
            return None
        return metadata.transcript.by_speaker()

    @abstractmethod
    def _write(self, summary: Summary, metadata: DeliveryMetadata) -> None:
        """Writes the output file at ``path``."""


class TextFileSink(_FileSink):
    """Plain text output: summary followed by the transcription."""

    name = "text"
    file_name = "summary.txt"

    def _write(self, summary: Summary, metadata: DeliveryMetadata) -> None:
        content = summary.text
        transcript = self._transcript(metadata)
        if transcript is not None:
            content += f"\n\nTranscription:\n{transcript}"
        self.path.write_text(content, encoding="utf-8")


class MarkdownSink(_FileSink):
    """Markdown output with Summary and Transcription sections."""

    name = "markdown"
    file_name = "summary.md"

    def _write(self, summary: Summary, metadata: DeliveryMetadata) -> None:
        content = f"# Summary\n\n{summary.text}\n"
        transcript = self._transcript(metadata)
        if transcript is not None:
            lines = transcript.split("\n")
            content += "\n# Transcription\n\n" + "\n\n".join(lines) + "\n"
        self.path.write_text(content, encoding="utf-8")


class WordDocumentSink(_FileSink):
    """Word document output built with python-docx."""

    name = "word"
    file_name = "summary.docx"

    def _write(self, summary: Summary, metadata: DeliveryMetadata) -> None:
        doc = Document()
        doc.add_heading(f"Summary: {metadata.source_name}", level=1)
        doc.add_paragraph(
            f"Generated {metadata.created_at.strftime('%Y-%m-%d %H:%M %Z')} "
            f"with {summary.model_id}"
        )
        for paragraph in summary.text.split("\n\n"):
            doc.add_paragraph(paragraph.strip())

        transcript = self._transcript(metadata)
        if transcript is not None:
            doc.add_heading("Transcription", level=2)
            for line in transcript.split("\n"):
                doc.add_paragraph(line)

        doc.save(str(self.path))
