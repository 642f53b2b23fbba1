"""GitHub issue to Slack notification relay.

This package receives GitHub issue webhook events and forwards a short
notification to a Slack incoming webhook:
- Issue URL extraction from the raw event payload
- Slack message delivery over a shared HTTP client
- AWS Lambda and FastAPI entry points around a single handler
"""
