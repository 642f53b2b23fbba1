"""FastAPI application entry point for the issue relay.

This module exposes the same webhook handler used by the Lambda entry
point over HTTP, for container or local hosting. GitHub (or a proxy in
front of it) posts issue events to `/webhooks/github`; the response body
carries the handler's outcome message.
"""

import json
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request

from .config import RelaySettings, get_settings
from .slack.client import SlackClient, create_slack_client
from .webhook.handler import WebhookHandler, create_webhook_handler

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Global instances, initialized during lifespan startup
slack_client: Optional[SlackClient] = None
webhook_handler: Optional[WebhookHandler] = None


def _redact_url(value: str, visible_chars: int = 24) -> str:
    """Redact a webhook URL, showing only its leading characters.

    Slack incoming-webhook URLs embed their secret in the path.

    Args:
        value: The URL to redact.
        visible_chars: Number of characters to show at the start.

    Returns:
        Redacted string with asterisks replacing hidden characters.
    """
    if len(value) <= visible_chars:
        return "*" * len(value)
    return value[:visible_chars] + "*" * (len(value) - visible_chars)


def _log_configuration(settings: RelaySettings) -> None:
    """Log configuration values with the Slack URL redacted.

    Args:
        settings: The relay settings to log.
    """
    logger.info("Relay configuration:")
    if settings.slack_configured:
        logger.info(f"  Slack URL: {_redact_url(settings.slack_url)}")
    else:
        logger.warning("  Slack URL: <not set>")
    logger.info(f"  Log Payloads: {settings.log_payloads}")
    logger.info(f"  Log Level: {settings.log_level}")
    logger.info(f"  Host: {settings.host}")
    logger.info(f"  Port: {settings.port}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown.

    Handles:
    - Configuration loading and logging (with the Slack URL redacted)
    - Creation of the shared Slack client and webhook handler
    - Closing the Slack client on shutdown
    """
    global slack_client, webhook_handler

    logger.info("Issue relay starting up...")

    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level)
    _log_configuration(settings)

    slack_client = create_slack_client()
    webhook_handler = create_webhook_handler(slack_client)

    logger.info("Issue relay started successfully")

    yield

    logger.info("Issue relay shutting down...")

    if slack_client is not None:
        await slack_client.close()

    logger.info("Issue relay shutdown complete")


app = FastAPI(
    title="Issue Slack Relay",
    description="Forwards new GitHub issue notifications to Slack",
    version="1.0.0",
    lifespan=lifespan,
)


@app.get("/health")
async def health():
    """Liveness probe endpoint.

    Returns:
        dict: Status indicating the application is healthy.
    """
    return {"status": "healthy"}


@app.post("/webhooks/github")
async def github_webhook(request: Request):
    """GitHub webhook receiver endpoint.

    The inbound signature is not verified. The handler never raises, and
    a body that is not valid JSON is reported the same way as any other
    fault.

    Returns:
        dict: The handler's outcome message under "result".
    """
    if webhook_handler is None:
        logger.error("Relay not initialized")
        return {"result": "Error: Relay not initialized"}

    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error("Error: %s", e)
        return {"result": f"Error: {e}"}

    result = await webhook_handler.handle(payload)
    return {"result": result}


if __name__ == "__main__":
    import uvicorn

    # For local development, load settings to get host/port
    dev_settings = get_settings()
    uvicorn.run(
        "src.relay.main:app",
        host=dev_settings.host,
        port=dev_settings.port,
    )
