"""Health check handlers for GET /health and GET /health/db."""

import os
import json
from datetime import datetime, timezone

from utils.logging_config import get_logger

logger = get_logger(__name__)


def _get_faq_service():
    from services.faq_service import get_faq_service
    return get_faq_service()


def _respond(status: int, body: dict) -> dict:
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def lambda_handler(event, context):
    """Report liveness plus whether the FAQ store answers a ping."""
    body = {
        "environment": os.environ.get("ENVIRONMENT", "dev"),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    try:
        _get_faq_service().health()
    except Exception as exc:
        logger.warning("Health check failed", extra={"error": str(exc)})
        body.update(status="error", database="disconnected", error=str(exc))
        return _respond(503, body)

    body.update(status="ok", database="connected")
    return _respond(200, body)


def db_handler(event, context):
    """Return dialect, server version and current time from the store."""
    try:
        info = _get_faq_service().database_info()
    except Exception as exc:
        logger.warning("Database info failed", extra={"error": str(exc)})
        return _respond(503, {"status": "error", "message": str(exc)})
    return _respond(200, {"status": "connected", **info})
