"""GitHub issue webhook handler for the Slack relay.

This module provides the WebhookHandler class, which turns one GitHub
issue event into one Slack notification. Signature verification of the
inbound webhook is not performed here.

Flow for each invocation:
1. Log the received payload
2. Extract issue.html_url, or report "Issue URL not found."
3. Resolve SLACK_URL, or report "SLACK_URL not set."
4. POST {"text": "New GitHub Issue: <url>"} to Slack
5. Report "Success" for a 2xx response, otherwise
   "Failed to post message to Slack."

Any unexpected fault is logged and reported as "Error: <message>". Nothing
propagates to the caller, and at most one outbound request is made.

GitHub Webhook Payload Structure (issues event, fields used):
{
  "action": "opened",
  "issue": {
    "html_url": "https://github.com/org/repo/issues/1"
  }
}
"""

import json
import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

from pydantic import ValidationError

from src.relay.config import (
    RelaySettings,
    SlackSettings,
    get_settings,
    get_slack_settings,
)
from src.relay.webhook.models import (
    LogSink,
    NotificationPayload,
    OutcomeStatus,
    RelayOutcome,
)

if TYPE_CHECKING:
    from src.relay.slack.client import SlackClient

logger = logging.getLogger(__name__)


def _lookup(node: Any, key: str) -> Optional[Any]:
    """Look up a key on a JSON object, returning None when absent."""
    if not isinstance(node, dict):
        return None
    return node.get(key)


def extract_issue_url(event: Any) -> Optional[str]:
    """Extract issue.html_url from a GitHub webhook payload.

    The lookup is two sequential optional steps: the top-level ``issue``
    object, then its ``html_url`` string. Any other content is ignored.

    Args:
        event: The decoded JSON payload.

    Returns:
        The issue URL, or None if either step finds nothing usable.
    """
    issue = _lookup(event, "issue")
    if issue is None:
        return None

    html_url = _lookup(issue, "html_url")
    if not isinstance(html_url, str) or not html_url:
        return None

    return html_url


def _describe_payload(event: Any, verbose: bool) -> str:
    if verbose:
        return json.dumps(event, default=str, ensure_ascii=False)
    if isinstance(event, dict):
        return f"<redacted; keys={sorted(str(k) for k in event)}>"
    return f"<redacted; type={type(event).__name__}>"


class WebhookHandler:
    """Relay for GitHub issue events to a Slack incoming webhook.

    The handler keeps no per-invocation state, so one instance may serve
    concurrent invocations. The shared SlackClient is only used to issue
    requests.

    Attributes:
        slack_client: Long-lived client used for the outbound POST.
        settings_provider: Callable resolving settings for each invocation.
    """

    def __init__(
        self,
        slack_client: "SlackClient",
        settings_provider: Callable[[], RelaySettings] = get_settings,
    ) -> None:
        """Initialize the webhook handler.

        Args:
            slack_client: The shared Slack client.
            settings_provider: Resolves settings on every invocation.
                               Defaults to reading the environment.
        """
        self.slack_client = slack_client
        self.settings_provider = settings_provider

    def _resolve_settings(self, sink: LogSink) -> SlackSettings:
        """Resolve settings for one invocation.

        Invalid logging or server options fall back to the Slack URL alone
        with default logging, so they never block delivery.

        Args:
            sink: Diagnostic sink for this invocation.

        Returns:
            RelaySettings, or SlackSettings when the options are invalid.
        """
        try:
            return self.settings_provider()
        except ValidationError as e:
            sink.warning("Invalid relay options, using defaults: %s", e)
            return get_slack_settings()

    async def handle(
        self,
        event: Any,
        log: Optional[LogSink] = None,
        settings: Optional[RelaySettings] = None,
    ) -> str:
        """Process one event and return the outcome message.

        Args:
            event: The decoded GitHub webhook payload.
            log: Diagnostic sink for this invocation. Defaults to the
                 module logger.
            settings: Explicit settings. When omitted they are resolved
                      through settings_provider.

        Returns:
            One of "Success", "Issue URL not found.", "SLACK_URL not set.",
            "Failed to post message to Slack." or "Error: <message>".
        """
        outcome = await self.relay(event, log=log, settings=settings)
        return outcome.message

    async def relay(
        self,
        event: Any,
        log: Optional[LogSink] = None,
        settings: Optional[RelaySettings] = None,
    ) -> RelayOutcome:
        """Process one event and return the structured outcome.

        Args:
            event: The decoded GitHub webhook payload.
            log: Diagnostic sink for this invocation.
            settings: Explicit settings, or None to resolve them.

        Returns:
            RelayOutcome describing what happened. Never raises.
        """
        sink: LogSink = log if log is not None else logger

        try:
            active: SlackSettings = (
                settings if settings is not None else self._resolve_settings(sink)
            )
            log_payloads = getattr(active, "log_payloads", True)

            sink.info(
                "Received payload: %s",
                _describe_payload(event, log_payloads),
            )

            issue_url = extract_issue_url(event)
            if issue_url is None:
                sink.warning("Issue URL not found in payload.")
                return RelayOutcome(status=OutcomeStatus.ISSUE_URL_NOT_FOUND)

            sink.info("Extracted issue URL: %s", issue_url)

            if not active.slack_configured:
                sink.warning("Environment variable SLACK_URL is not set.")
                return RelayOutcome(status=OutcomeStatus.SLACK_URL_NOT_SET)

            payload = NotificationPayload.for_issue(issue_url)
            response = await self.slack_client.post_message(
                active.slack_url, payload
            )

            sink.info(
                "Response from Slack: %s %s",
                response.status_code,
                response.reason_phrase,
            )

            if response.is_success:
                return RelayOutcome(
                    status=OutcomeStatus.SUCCESS,
                    status_code=response.status_code,
                )

            return RelayOutcome(
                status=OutcomeStatus.DELIVERY_FAILED,
                status_code=response.status_code,
            )

        except Exception as e:
            detail = str(e) or type(e).__name__
            sink.error("Error: %s", detail)
            return RelayOutcome(status=OutcomeStatus.ERROR, detail=detail)


def create_webhook_handler(
    slack_client: "SlackClient",
    settings_provider: Callable[[], RelaySettings] = get_settings,
) -> WebhookHandler:
    """Factory function to create a WebhookHandler instance.

    Args:
        slack_client: The shared Slack client.
        settings_provider: Resolves settings on every invocation.

    Returns:
        A configured WebhookHandler instance.
    """
    return WebhookHandler(
        slack_client=slack_client,
        settings_provider=settings_provider,
    )
