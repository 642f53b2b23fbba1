"""Data models for the issue notification relay.

This module defines the outbound Slack payload and the outcome type the
webhook handler produces for every invocation. The host runtime only ever
sees the rendered outcome message; the structured form is kept for logging
and tests.

The models use Pydantic for validation, consistent with the relay's
configuration approach in config.py.
"""

from enum import Enum
from typing import Any, Optional, Protocol

from pydantic import BaseModel, Field


NOTIFICATION_PREFIX = "New GitHub Issue: "


class LogSink(Protocol):
    """Line-oriented diagnostic sink for a single invocation.

    A logging.Logger or logging.LoggerAdapter satisfies this protocol.
    """

    def info(self, msg: Any, *args: Any) -> None: ...

    def warning(self, msg: Any, *args: Any) -> None: ...

    def error(self, msg: Any, *args: Any) -> None: ...


class NotificationPayload(BaseModel):
    """Slack incoming-webhook message body.

    Attributes:
        text: The message text posted to the channel.
    """

    text: str = Field(
        ...,
        description="Message text posted to the Slack channel",
    )

    @classmethod
    def for_issue(cls, issue_url: str) -> "NotificationPayload":
        """Build the notification for a newly created issue.

        Args:
            issue_url: The issue's html_url.

        Returns:
            NotificationPayload with the fixed message format.
        """
        return cls(text=f"{NOTIFICATION_PREFIX}{issue_url}")

    def to_json_bytes(self) -> bytes:
        """Serialize to compact UTF-8 JSON, e.g. {"text":"..."}."""
        return self.model_dump_json().encode("utf-8")


class OutcomeStatus(str, Enum):
    """Categories of invocation outcome.

    Attributes:
        SUCCESS: Slack accepted the message with a 2xx status.
        ISSUE_URL_NOT_FOUND: The event has no issue.html_url.
        SLACK_URL_NOT_SET: SLACK_URL is unset or empty.
        DELIVERY_FAILED: Slack answered with a non-2xx status.
        ERROR: An unexpected fault occurred; detail holds its message.
    """

    SUCCESS = "success"
    ISSUE_URL_NOT_FOUND = "issue_url_not_found"
    SLACK_URL_NOT_SET = "slack_url_not_set"
    DELIVERY_FAILED = "delivery_failed"
    ERROR = "error"


_FIXED_MESSAGES = {
    OutcomeStatus.SUCCESS: "Success",
    OutcomeStatus.ISSUE_URL_NOT_FOUND: "Issue URL not found.",
    OutcomeStatus.SLACK_URL_NOT_SET: "SLACK_URL not set.",
    OutcomeStatus.DELIVERY_FAILED: "Failed to post message to Slack.",
}


class RelayOutcome(BaseModel):
    """Result of a single relay invocation.

    Attributes:
        status: The outcome category.
        detail: Fault message for ERROR outcomes.
        status_code: HTTP status returned by Slack, when a response arrived.
    """

    status: OutcomeStatus

    detail: Optional[str] = None

    status_code: Optional[int] = None

    @property
    def message(self) -> str:
        """Render the outcome as the string returned to the host runtime."""
        if self.status == OutcomeStatus.ERROR:
            return f"Error: {self.detail or ''}"
        return _FIXED_MESSAGES[self.status]

    @property
    def delivered(self) -> bool:
        """Whether the notification reached Slack."""
        return self.status == OutcomeStatus.SUCCESS
