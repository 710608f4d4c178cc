"""
FAQ handlers: CRUD on /faqs and the question-answering route POST /faqs/ask.

Handlers stay thin: parse and validate the request, call FaqService, shape
the JSON response. Only request parsing produces a 400; anything raised by
the service or the store that is not an AppError is logged and reported as
500 so callers can tell it apart from the "not sure" fallback.
"""

from __future__ import annotations

import base64
import json
import uuid
from typing import Callable, Dict, Type

from pydantic import BaseModel, ValidationError as PydanticValidationError

from models.faq import AskRequest, FaqCreate, FaqUpdate
from models.response import ApiResponse
from utils.error_handling import (
    AppError,
    BadRequestError,
    error_response,
    json_response,
    to_response,
)
from utils.logging_config import get_logger
from utils.validators import parse_entry_id

logger = get_logger(__name__)


def _get_faq_service():
    """Lazy-load the shared FaqService to avoid import-time DB connections."""
    from services.faq_service import get_faq_service
    return get_faq_service()


def _json_body(event: Dict) -> dict:
    body = event.get("body")
    if not body:
        return {}
    if event.get("isBase64Encoded"):
        body = base64.b64decode(body).decode("utf-8")
    return json.loads(body)


def _parse_body(model: Type[BaseModel], event: Dict) -> BaseModel:
    """Decode and validate the request body, raising BadRequestError on bad input."""
    try:
        return model.model_validate(_json_body(event))
    except PydanticValidationError as exc:
        raise BadRequestError(details=json.loads(exc.json(include_url=False))) from exc
    except ValueError as exc:
        # json.JSONDecodeError, binascii.Error and UnicodeDecodeError
        raise BadRequestError(details=str(exc)) from exc


def _path(event: Dict) -> str:
    return event.get("requestContext", {}).get("http", {}).get("path", "")


def _entry_id(event: Dict) -> int:
    path_params = event.get("pathParameters") or {}
    if path_params.get("id"):
        return parse_entry_id(f"/faqs/{path_params['id']}")
    return parse_entry_id(_path(event))


def _guarded(action: str, handler: Callable[[Dict, str], Dict]) -> Callable:
    """Wrap a handler with correlation ids and the shared error policy."""

    def wrapper(event, context):
        correlation_id = str(uuid.uuid4())
        try:
            return handler(event, correlation_id)
        except AppError as exc:
            logger.info(
                f"{action} rejected",
                extra={"correlation_id": correlation_id, "status": exc.status_code},
            )
            return to_response(exc, correlation_id)
        except Exception:
            logger.exception(f"{action} failed", extra={"correlation_id": correlation_id})
            return error_response(500, "Internal error", correlation_id=correlation_id)

    wrapper.__name__ = handler.__name__
    wrapper.__doc__ = handler.__doc__
    return wrapper


def _ask(event: Dict, correlation_id: str) -> Dict:
    """Handle POST /faqs/ask."""
    request = _parse_body(AskRequest, event)
    response = _get_faq_service().ask(request.text, request.lang)
    logger.info(
        "Question answered",
        extra={
            "correlation_id": correlation_id,
            "results": len(response.results),
            "fallback": response.message is not None,
        },
    )
    return json_response(200, response.to_json())


def _create(event: Dict, correlation_id: str) -> Dict:
    """Handle POST /faqs."""
    entry = _get_faq_service().create(_parse_body(FaqCreate, event))
    return json_response(201, entry.model_dump_json())


def _list(event: Dict, correlation_id: str) -> Dict:
    """Handle GET /faqs?lang=xx."""
    query_params = event.get("queryStringParameters") or {}
    entries = _get_faq_service().find_all(query_params.get("lang"))
    return json_response(200, [entry.model_dump(mode="json") for entry in entries])


def _get(event: Dict, correlation_id: str) -> Dict:
    """Handle GET /faqs/{id}."""
    entry = _get_faq_service().find_one(_entry_id(event))
    return json_response(200, entry.model_dump_json())


def _update(event: Dict, correlation_id: str) -> Dict:
    """Handle PATCH /faqs/{id}."""
    entry_id = _entry_id(event)
    entry = _get_faq_service().update(entry_id, _parse_body(FaqUpdate, event))
    return json_response(200, entry.model_dump_json())


def _delete(event: Dict, correlation_id: str) -> Dict:
    """Handle DELETE /faqs/{id}."""
    entry_id = _entry_id(event)
    _get_faq_service().remove(entry_id)
    body = ApiResponse(message=f"FAQ {entry_id} deleted", correlation_id=correlation_id)
    return json_response(200, body.model_dump_json(exclude_none=True))


ask_handler = _guarded("FAQ ask", _ask)
create_handler = _guarded("FAQ create", _create)
list_handler = _guarded("FAQ list", _list)
get_handler = _guarded("FAQ fetch", _get)
update_handler = _guarded("FAQ update", _update)
delete_handler = _guarded("FAQ delete", _delete)
