"""
API Gateway Lambda handler for the DailyTracker application.

This Lambda function provides REST API endpoints for reading and toggling a
day's activities, listing the history of recorded days, the stored counter,
and health checks, with CORS support for browser clients.

Functions:
    lambda_handler: Main entry point for API Gateway events
    _handle_get_day: Handle GET /days/{date}
    _handle_toggle_activity: Handle POST /days/{date}/toggle
    _handle_get_history: Handle GET /history
    _handle_get_counter: Handle GET /counter
    _handle_change_counter: Handle POST /counter/increment|decrement
    _handle_health_check: Handle GET /health
    _create_response: Create standardized HTTP responses
    _handle_cors_preflight: Handle OPTIONS requests for CORS
"""

import asyncio
import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from urllib.parse import unquote_plus

from ..exceptions import (
    InvalidKeyFormatError,
    StoreUnavailableError,
    UnknownActivityError,
)
from ..models.activity import ActivityType
from ..services.activity_service import ActivityService

logger = logging.getLogger(__name__)
logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

TODAY = "today"


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Main Lambda handler for API Gateway events.

    Routes incoming HTTP requests to the appropriate handler based on the
    HTTP method and resource path. Store failures become 503 responses so
    clients can offer a retry; bad keys or activity names become 400.

    Args:
        event: API Gateway event containing HTTP request data
        context: AWS Lambda runtime context

    Returns:
        HTTP response dictionary with statusCode, headers, and body

    Event Structure:
        {
            "httpMethod": "GET|POST|OPTIONS",
            "resource": "/days/{date}|/days/{date}/toggle|/history|/counter|/health",
            "pathParameters": {"date": "2024-06-01"},
            "body": "{\"activity\": \"reading\"}"
        }
    """
    try:
        _log_api_request(event)

        http_method = event.get("httpMethod", "").upper()
        resource = event.get("resource", "")
        path_params = event.get("pathParameters") or {}

        if http_method == "OPTIONS":
            return _handle_cors_preflight()

        try:
            activity_service = ActivityService()
        except StoreUnavailableError as e:
            return _store_unavailable_response(e)
        except Exception as e:
            _log_api_error("SERVICE_INIT_ERROR", str(e))
            return _create_error_response(500, "Service initialization failed", str(e))

        if resource == "/health" and http_method == "GET":
            return _handle_health_check(activity_service)

        elif resource == "/days/{date}" and http_method == "GET":
            return _handle_get_day(activity_service, path_params.get("date"))

        elif resource == "/days/{date}/toggle" and http_method == "POST":
            return _handle_toggle_activity(
                activity_service, path_params.get("date"), event.get("body")
            )

        elif resource == "/history" and http_method == "GET":
            return _handle_get_history(activity_service)

        elif resource == "/counter" and http_method == "GET":
            return _handle_get_counter(activity_service)

        elif resource == "/counter/increment" and http_method == "POST":
            return _handle_change_counter(activity_service, 1)

        elif resource == "/counter/decrement" and http_method == "POST":
            return _handle_change_counter(activity_service, -1)

        else:
            return _create_error_response(
                404,
                "Not Found",
                f"Resource {resource} with method {http_method} not found",
            )

    except Exception as e:
        _log_api_error("UNEXPECTED_ERROR", str(e), event)
        return _create_error_response(500, "Internal Server Error", "Unexpected error occurred")


def _handle_health_check(activity_service: ActivityService) -> Dict[str, Any]:
    """
    Handle GET /health endpoint for service health monitoring.

    Returns:
        HTTP response with health check results, 503 if the store is unhealthy
    """
    health_result = activity_service.health_check()

    response_data = {
        **health_result,
        "environment": os.getenv("ENVIRONMENT", "unknown"),
    }

    status_code = 200 if health_result["status"] == "healthy" else 503
    return _create_response(status_code, response_data)


def _handle_get_day(activity_service: ActivityService, date: Optional[str]) -> Dict[str, Any]:
    """
    Handle GET /days/{date} endpoint.

    A date of "today" resolves to the local calendar date. A day that was
    never recorded is returned with every activity false.

    Response Body:
        {
            "day": {
                "date": "2024-06-01",
                "activities": {"reading": false, "exercising": true, "music": false},
                "unlocked": true
            }
        }
    """
    date = _resolve_date(date)

    try:
        record = asyncio.run(activity_service.get_day(date))
    except InvalidKeyFormatError as e:
        return _create_error_response(400, "Invalid Date", str(e))
    except StoreUnavailableError as e:
        return _store_unavailable_response(e)

    return _create_response(200, {"day": record.to_api_dict(), "timestamp": _now()})


def _handle_toggle_activity(
    activity_service: ActivityService, date: Optional[str], body: Optional[str]
) -> Dict[str, Any]:
    """
    Handle POST /days/{date}/toggle endpoint.

    Request Body:
        {"activity": "reading|exercising|music"}

    Activity names must match exactly; "Reading" or " music" are rejected.

    Returns:
        HTTP response with the day as stored after the toggle
    """
    if not body or body.strip() == "":
        return _create_error_response(400, "Missing Request Body", "Request body is required")

    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        return _create_error_response(400, "Invalid JSON", f"Request body is not valid JSON: {str(e)}")

    if not isinstance(data, dict) or not data.get("activity"):
        return _create_error_response(400, "Missing Required Field", "Field 'activity' is required")

    date = _resolve_date(date)

    try:
        record = asyncio.run(activity_service.toggle_activity(date, data["activity"]))
    except InvalidKeyFormatError as e:
        return _create_error_response(400, "Invalid Date", str(e))
    except UnknownActivityError:
        valid_types = [t.value for t in ActivityType]
        return _create_error_response(
            400,
            "Invalid Activity",
            f"Activity must be one of: {', '.join(valid_types)}",
        )
    except StoreUnavailableError as e:
        return _store_unavailable_response(e)

    return _create_response(200, {"day": record.to_api_dict(), "timestamp": _now()})


def _handle_get_history(activity_service: ActivityService) -> Dict[str, Any]:
    """
    Handle GET /history endpoint.

    An empty "days" list means nothing has been recorded yet; a history that
    could not be read is a 503, never an empty list.

    Response Body:
        {
            "days": [
                {"date": "2024-03-01", "activities": {...}, "unlocked": true},
                {"date": "2024-01-05", "activities": {...}, "unlocked": false}
            ],
            "total_count": 2
        }
    """
    try:
        history = asyncio.run(activity_service.get_history())
    except StoreUnavailableError as e:
        return _store_unavailable_response(e)

    days = [record.to_api_dict() for record in history]
    return _create_response(
        200, {"days": days, "total_count": len(days), "timestamp": _now()}
    )


def _handle_get_counter(activity_service: ActivityService) -> Dict[str, Any]:
    try:
        value = asyncio.run(activity_service.get_counter())
    except StoreUnavailableError as e:
        return _store_unavailable_response(e)

    return _create_response(200, {"counter": value, "timestamp": _now()})


def _handle_change_counter(activity_service: ActivityService, delta: int) -> Dict[str, Any]:
    try:
        value = asyncio.run(activity_service.change_counter(delta))
    except StoreUnavailableError as e:
        return _store_unavailable_response(e)

    return _create_response(200, {"counter": value, "timestamp": _now()})


def _resolve_date(date: Optional[str]) -> Optional[str]:
    """URL-decode a path date; "today" maps to None so the service picks today."""
    if date is None:
        return None

    date = unquote_plus(date)
    return None if date.lower() == TODAY else date


def _store_unavailable_response(error: StoreUnavailableError) -> Dict[str, Any]:
    _log_api_error(
        "STORE_UNAVAILABLE",
        error.message,
        {"operation": error.operation, "key": error.key},
    )
    return _create_error_response(
        503, "Store Unavailable", "Data could not be read or written, please retry"
    )


def _handle_cors_preflight() -> Dict[str, Any]:
    """
    Handle OPTIONS requests for CORS preflight checks.

    Returns:
        HTTP response with CORS headers
    """
    return {
        "statusCode": 200,
        "headers": _get_cors_headers(),
        "body": "",
    }


def _create_response(status_code: int, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a standardized HTTP response with proper headers.

    Args:
        status_code: HTTP status code
        data: Response data to serialize as JSON

    Returns:
        HTTP response dictionary
    """
    return {
        "statusCode": status_code,
        "headers": {
            **_get_cors_headers(),
            "Content-Type": "application/json",
        },
        "body": json.dumps(data, indent=2, default=str),
    }


def _create_error_response(status_code: int, error: str, details: str = "") -> Dict[str, Any]:
    """
    Create a standardized error response.

    Args:
        status_code: HTTP status code
        error: High-level error message
        details: Detailed error information

    Returns:
        HTTP error response dictionary
    """
    error_data = {
        "error": error,
        "details": details,
        "timestamp": _now(),
        "status_code": status_code,
    }

    return _create_response(status_code, error_data)


def _get_cors_headers() -> Dict[str, str]:
    cors_origin = os.getenv("CORS_ORIGIN", "*")

    return {
        "Access-Control-Allow-Origin": cors_origin,
        "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token",
        "Access-Control-Max-Age": "86400",
    }


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _log_api_request(event: Dict[str, Any]) -> None:
    """
    Log API request information for monitoring.

    Creates a structured log line without the request body.

    Args:
        event: API Gateway event
    """
    log_data = {
        "event": "API_REQUEST",
        "httpMethod": event.get("httpMethod"),
        "resource": event.get("resource"),
        "pathParameters": event.get("pathParameters"),
        "timestamp": _now(),
        "requestId": (event.get("requestContext") or {}).get("requestId"),
    }

    logger.info(json.dumps(log_data, default=str))


def _log_api_error(error_type: str, error_message: str, context: Optional[Dict[str, Any]] = None) -> None:
    """
    Log API errors with context for debugging.

    Args:
        error_type: Type of error that occurred
        error_message: Detailed error message
        context: Additional context information
    """
    log_data = {
        "event": "API_ERROR",
        "errorType": error_type,
        "errorMessage": error_message,
        "timestamp": _now(),
    }

    if context:
        log_data["context"] = {k: v for k, v in context.items() if k != "body"}

    logger.error(json.dumps(log_data, default=str))
