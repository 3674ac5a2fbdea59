"""Chat webhook implementation of the OutputSink interface."""

import httpx

from distill.domain.models import DeliveryMetadata, Summary
from distill.exceptions import SinkError
from distill.infrastructure.interfaces import OutputSink
from distill.logging import setup_logging

logger = setup_logging()


class ChatWebhookSink(OutputSink):
    """Posts the summary to an incoming chat webhook (Slack-compatible payload)."""

    name = "webhook"

    def __init__(self, client: httpx.Client, url: str):
        self._client = client
        self._url = url

    def render(self, summary: Summary, metadata: DeliveryMetadata) -> None:
        payload = {"text": f"*Summary of {metadata.source_name}*\n\n{summary.text}"}
        try:
            response = self._client.post(self._url, json=payload)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.exception("Webhook delivery failed", extra={"source": metadata.source_name})
            raise SinkError(self.name, e) from e
        logger.info(
            "Summary posted to webhook",
            extra={"source": metadata.source_name, "status_code": response.status_code},
        )
