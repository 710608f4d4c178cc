"""
Single entrypoint Lambda that routes HTTP API requests to thin handler modules.

One Lambda keeps the engine pool and the FAQ snapshot cache warm across
routes.
"""

from typing import Callable, Dict, Tuple
import json

from . import faqs, health_check


def _response(status: int, body: Dict) -> Dict:
    """Format a JSON API Gateway HTTP API response."""
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def _matches(route_key: str, prefix: str) -> bool:
    """Match whole path segments; a trailing slash matches sub-paths only."""
    if prefix.endswith("/"):
        return route_key.startswith(prefix)
    return route_key == prefix or route_key.startswith(prefix + "/")


def lambda_handler(event, context):
    """
    Entry point invoked by API Gateway HTTP API.

    The event carries the HTTP method and path; we route it to the matching
    handler. Routes are checked in order, most specific first.
    """
    method = event.get("requestContext", {}).get("http", {}).get("method", "")
    path = event.get("requestContext", {}).get("http", {}).get("path", "")
    route_key = f"{method.upper()} {path.rstrip('/') or '/'}"

    route_table: Tuple[Tuple[str, Callable], ...] = (
        ("GET /health/db", health_check.db_handler),
        ("GET /health", health_check.lambda_handler),
        ("POST /faqs/ask", faqs.ask_handler),
        ("POST /faqs", faqs.create_handler),
        ("GET /faqs/", faqs.get_handler),  # /faqs/{id} before the list route
        ("GET /faqs", faqs.list_handler),
        ("PATCH /faqs/", faqs.update_handler),
        ("DELETE /faqs/", faqs.delete_handler),
    )

    for prefix, handler in route_table:
        if _matches(route_key, prefix):
            return handler(event, context)

    return _response(404, {"message": "Route not found", "route": route_key})
