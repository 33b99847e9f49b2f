"""AWS Lambda entry point for the Shikshanam API."""

from typing import Any

from loguru import logger
from mangum import Mangum

from .api import app

# CloudWatch only captures stdout
logger.add(lambda msg: print(msg, end=""), level="INFO")
handler = Mangum(app, lifespan="off")


def _event_route(event: dict[str, Any]) -> str:
    """``METHOD path`` for HTTP API (v2) and REST API (v1) events."""
    http = event.get("requestContext", {}).get("http", {})
    method = http.get("method") or event.get("httpMethod") or "?"
    path = event.get("rawPath") or event.get("path") or "?"
    return f"{method} {path}"


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Translate an API Gateway event through the ASGI app.

    Services are built on the first request of a cold start, since Mangum
    runs without the application lifespan.
    """
    aws_request_id = getattr(context, "aws_request_id", None)
    with logger.contextualize(aws_request_id=aws_request_id):
        logger.info(f"Lambda invoked: {_event_route(event)}")
        response = handler(event, context)
        logger.info(f"Lambda response status: {response.get('statusCode')}")

    return response  # type: ignore[no-any-return]
