"""Core business logic for transcript building."""

from .models import DocumentSegment, Transcript, TranscriptDocument, TranscriptSegment


class TranscriptBuilder:
    """Builds flat transcripts from structured transcript documents."""

    def build(self, document: TranscriptDocument) -> Transcript:
        """
        Selects the best alternative of every segment, keeping document order.

        Args:
            document: The transcript document returned by the provider.

        Returns:
            Transcript whose ``text`` joins the selected segments with single spaces.
        """
        return Transcript(segments=[self._select(s) for s in document.segments])

    def _select(self, segment: DocumentSegment) -> TranscriptSegment:
        """Picks the highest-confidence alternative; the first one wins ties."""
        best = max(segment.alternatives, key=lambda a: a.confidence)
        return TranscriptSegment(
            text=best.content.strip(),
            confidence=best.confidence,
            speaker=segment.speaker,
        )
