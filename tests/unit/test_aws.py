"""Test AWS Lambda handler."""

from unittest.mock import patch

from shikshanam.aws import _event_route, lambda_handler


def test_lambda_handler_delegates_to_mangum() -> None:
    """Test the handler forwards event and context to the ASGI adapter."""
    mock_response = {"statusCode": 200, "body": "{}", "headers": {}}
    event = {"rawPath": "/health", "requestContext": {"http": {"method": "GET"}}}
    context = object()

    with patch("shikshanam.aws.handler", return_value=mock_response) as mock_handler:
        result = lambda_handler(event, context)

    mock_handler.assert_called_once_with(event, context)
    assert result == mock_response


def test_lambda_handler_with_rest_api_event() -> None:
    """Test REST API events (path instead of rawPath) are handled."""
    mock_response = {"statusCode": 404, "body": "{}", "headers": {}}
    event = {"path": "/api/packages/unknown", "httpMethod": "GET"}

    with patch("shikshanam.aws.handler", return_value=mock_response):
        result = lambda_handler(event, None)

    assert result["statusCode"] == 404


def test_event_route() -> None:
    """Test method and path are read from both API Gateway event formats."""
    v2_event = {"rawPath": "/health", "requestContext": {"http": {"method": "GET"}}}
    v1_event = {"path": "/api/homepage", "httpMethod": "GET"}

    assert _event_route(v2_event) == "GET /health"
    assert _event_route(v1_event) == "GET /api/homepage"
    assert _event_route({}) == "? ?"
