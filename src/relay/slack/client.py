"""Slack incoming-webhook client.

This module provides a thin async wrapper around httpx for posting
messages to Slack incoming webhooks. One client is meant to live for the
whole process and be shared by every invocation so that connections are
reused. It holds no per-invocation state.

There is no retry logic and no timeout override: the httpx defaults govern
worst-case latency, and a single POST is made per call.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from src.relay.webhook.models import NotificationPayload


logger = logging.getLogger(__name__)


class SlackClient:
    """Async client for Slack incoming webhooks.

    Attributes:
        transport: Optional httpx transport used for every request.

    Example:
        >>> client = SlackClient()
        >>> async with client:
        ...     await client.post_message(url, NotificationPayload(text="hi"))
    """

    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the Slack client.

        Args:
            transport: Optional httpx transport. Tests pass an
                       httpx.MockTransport here.
        """
        self.transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the HTTP client, creating it if necessary.

        Returns:
            The httpx AsyncClient instance.
        """
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(transport=self.transport)
        return self._client

    def _default_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json; charset=utf-8",
        }

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "SlackClient":
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: Any,
        exc_val: Any,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit - close the client."""
        await self.close()

    async def post_message(
        self,
        webhook_url: str,
        payload: NotificationPayload,
    ) -> httpx.Response:
        """Post a message to a Slack incoming webhook.

        Args:
            webhook_url: The incoming webhook URL.
            payload: The message to post.

        Returns:
            The HTTP response from Slack, whatever its status.

        Raises:
            httpx.HTTPError: On network-level failure or an invalid URL.
        """
        response = await self.client.post(
            webhook_url,
            content=payload.to_json_bytes(),
            headers=self._default_headers(),
        )

        logger.debug(
            "Slack webhook responded",
            extra={"status_code": response.status_code},
        )

        return response


def create_slack_client(
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> SlackClient:
    """Factory function to create a SlackClient instance.

    Args:
        transport: Optional httpx transport.

    Returns:
        A configured SlackClient instance.
    """
    return SlackClient(transport=transport)
