"""AWS Lambda entry point for the issue relay.

The GitHub webhook is delivered to the function as the invocation event.
The Slack client and the event loop it is bound to live at module level,
so warm invocations reuse open connections.
"""

import asyncio
import logging

from pydantic import ValidationError

from src.relay.config import get_settings
from src.relay.slack.client import create_slack_client
from src.relay.webhook.handler import create_webhook_handler

# Configure logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)

invocation_logger = logging.getLogger(__name__)

_loop = asyncio.new_event_loop()
slack_client = create_slack_client()
webhook_handler = create_webhook_handler(slack_client)


def _apply_log_level() -> None:
    try:
        logger.setLevel(get_settings().log_level)
    except ValidationError as e:
        # The handler falls back to defaults for the same options
        logger.warning(f"Invalid relay settings, keeping log level: {e}")


def lambda_handler(event, context):
    """
    Lambda handler for GitHub issue webhooks.

    Args:
        event: GitHub webhook payload
        context: Lambda context

    Returns:
        Outcome message string
    """
    _apply_log_level()

    request_id = getattr(context, "aws_request_id", None) or "-"
    invocation_logger.info(f"Relay invoked: request_id={request_id}")

    outcome = _loop.run_until_complete(
        webhook_handler.relay(event, log=invocation_logger)
    )

    if outcome.delivered:
        invocation_logger.info(f"Relay delivered: request_id={request_id}")
    else:
        invocation_logger.warning(
            f"Relay not delivered: request_id={request_id}, "
            f"status={outcome.status.value}"
        )

    return outcome.message
