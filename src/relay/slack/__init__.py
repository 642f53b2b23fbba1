"""Slack incoming-webhook delivery for the relay."""

from src.relay.slack.client import SlackClient, create_slack_client

__all__ = [
    "SlackClient",
    "create_slack_client",
]
