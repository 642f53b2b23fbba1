"""GitHub webhook handling for the relay.

This module receives GitHub issue events, extracts the issue URL and
forwards a notification to Slack. The inbound webhook signature is not
verified.
"""

from .handler import WebhookHandler, create_webhook_handler, extract_issue_url
from .models import (
    LogSink,
    NotificationPayload,
    OutcomeStatus,
    RelayOutcome,
)

__all__ = [
    "LogSink",
    "NotificationPayload",
    "OutcomeStatus",
    "RelayOutcome",
    "WebhookHandler",
    "create_webhook_handler",
    "extract_issue_url",
]
