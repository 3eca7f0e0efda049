"""HTTP transport for delivering a batch of match records.

The whole batch goes out as one JSON array in a single POST. There is no
retry: on any failure the run reports it and ends, and the next run will
pick the same files up again.
"""

import json
import logging
from dataclasses import dataclass

import httpx

from collector.exceptions import TransportError

logger = logging.getLogger(__name__)


@dataclass
class SendResult:
    """Outcome of one POST: success flag plus raw response or error text."""

    success: bool
    response: str


def encode_batch(batch: list[dict]) -> bytes:
    """Serialize a batch to JSON, keeping non-ASCII player names readable."""
    return json.dumps(batch, ensure_ascii=False).encode("utf-8")


class ResultsClient:
    """Posts match record batches to the remote collector.

    Usage::

        with ResultsClient(config.api_endpoint, timeout=30.0) as client:
            result = client.send(batch)
    """

    def __init__(
        self,
        endpoint: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.timeout = timeout
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def post_batch(self, batch: list[dict]) -> str:
        """POST the batch and return the response body.

        Raises:
            TransportError: On connection errors, timeouts or non-2xx status.
        """
        try:
            response = self._client.post(
                self.endpoint,
                content=encode_batch(batch),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as exc:
            raise TransportError(
                f"Error contacting API: {exc}", url=self.endpoint
            ) from exc

        if not response.is_success:
            raise TransportError(
                f"API returned HTTP {response.status_code}: {response.text}",
                url=self.endpoint,
                status_code=response.status_code,
                response_text=response.text,
            )
        return response.text

    def send(self, batch: list[dict]) -> SendResult:
        """POST the batch, reporting failure instead of raising."""
        logger.info("Sending %d matches to %s", len(batch), self.endpoint)
        try:
            body = self.post_batch(batch)
        except TransportError as exc:
            logger.error("Error sending to API: %s", exc)
            return SendResult(success=False, response=str(exc))
        return SendResult(success=True, response=body)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ResultsClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
