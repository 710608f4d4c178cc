"""
Local handler tests using the in-memory store.

These tests drive the Lambda entrypoint with API Gateway HTTP API events.

Run with: pytest tests/unit/test_handlers_local.py -v
"""

import base64
import json
from unittest.mock import MagicMock

import pytest

from handlers.main import lambda_handler
from services.faq_service import FaqService


def _event(method, path, body=None, query=None, path_params=None):
    event = {"requestContext": {"http": {"method": method, "path": path}}}
    if body is not None:
        event["body"] = body if isinstance(body, str) else json.dumps(body)
    if query is not None:
        event["queryStringParameters"] = query
    if path_params is not None:
        event["pathParameters"] = path_params
    return event


def _call(*args, **kwargs):
    result = lambda_handler(_event(*args, **kwargs), None)
    return result["statusCode"], json.loads(result["body"])


class TestAskHandler:
    """Test POST /faqs/ask."""

    def test_confident_match(self, shared_service):
        status, body = _call("POST", "/faqs/ask", {"text": "opening hours"})

        assert status == 200
        assert [r["id"] for r in body["results"]] == [1]
        assert body["results"][0]["score"] == 0.7
        assert "ambiguous" not in body
        assert "message" not in body

    def test_fallback_message(self, shared_service):
        status, body = _call("POST", "/faqs/ask", {"text": "xyz unknown query"})

        assert status == 200
        assert body == {"results": [], "message": "Not sure, please contact staff."}

    def test_ambiguous_flag_serialized_when_true(self, shared_service):
        status, body = _call("POST", "/faqs/ask", {"text": "appointment booking hours schedule"})

        assert status == 200
        assert body["ambiguous"] is True
        assert len(body["results"]) == 2

    def test_language_filter(self, shared_service):
        status, body = _call("POST", "/faqs/ask", {"text": "opening hours", "lang": "fr"})

        assert status == 200
        assert body["results"] == []

    def test_blank_text_is_not_rejected(self, shared_service):
        status, body = _call("POST", "/faqs/ask", {"text": "   "})

        assert status == 200
        assert body["message"] == "Not sure, please contact staff."

    def test_missing_text_is_rejected(self, shared_service):
        status, body = _call("POST", "/faqs/ask", {"lang": "en"})

        assert status == 400
        assert body["message"] == "Invalid request"
        assert "correlation_id" in body

    def test_malformed_json_is_rejected(self, shared_service):
        status, body = _call("POST", "/faqs/ask", "{not json")

        assert status == 400
        assert body["status"] == "error"

    def test_base64_body(self, shared_service):
        event = _event("POST", "/faqs/ask")
        event["body"] = base64.b64encode(json.dumps({"text": "opening hours"}).encode()).decode()
        event["isBase64Encoded"] = True

        result = lambda_handler(event, None)

        assert result["statusCode"] == 200
        assert json.loads(result["body"])["results"][0]["id"] == 1

    def test_store_failure_is_an_infrastructure_error(self, monkeypatch):
        import services.faq_service as faq_service_module

        repository = MagicMock()
        repository.fetch_entries.side_effect = RuntimeError("connection refused")
        monkeypatch.setattr(faq_service_module, "_service", FaqService(repository))

        status, body = _call("POST", "/faqs/ask", {"text": "opening hours"})

        assert status == 500
        assert body["message"] == "Internal error"
        assert "results" not in body

    def test_store_value_error_is_not_a_client_error(self, monkeypatch):
        import services.faq_service as faq_service_module

        repository = MagicMock()
        repository.fetch_entries.side_effect = ValueError("corrupt row from store")
        monkeypatch.setattr(faq_service_module, "_service", FaqService(repository))

        status, body = _call("POST", "/faqs/ask", {"text": "opening hours"})

        assert status == 500
        assert body["message"] == "Internal error"
        assert "error" not in body

    def test_store_value_error_on_create_is_500(self, monkeypatch):
        import services.faq_service as faq_service_module

        repository = MagicMock()
        repository.create.side_effect = ValueError("DB secret missing fields")
        monkeypatch.setattr(faq_service_module, "_service", FaqService(repository))

        status, _ = _call("POST", "/faqs", {"question": "Q?", "answer": "A.", "tags": ["hours"]})

        assert status == 500


class TestCrudHandlers:
    """Test the /faqs CRUD routes."""

    def test_create_then_get(self, shared_service):
        status, created = _call(
            "POST",
            "/faqs",
            {"question": "Do you have parking?", "answer": "Yes, 20 spaces.", "tags": ["location"]},
        )
        assert status == 201
        assert created["lang"] == "en"

        status, fetched = _call("GET", f"/faqs/{created['id']}")
        assert status == 200
        assert fetched["question"] == "Do you have parking?"

    def test_create_requires_a_tag(self, shared_service):
        status, body = _call("POST", "/faqs", {"question": "Q?", "answer": "A.", "tags": []})

        assert status == 400
        assert body["error"]

    def test_list_filters_by_language(self, shared_service):
        _call("POST", "/faqs", {"question": "Bonjour?", "answer": "Oui.", "tags": ["general"], "lang": "fr"})

        status, everything = _call("GET", "/faqs")
        assert status == 200
        assert len(everything) == 4

        status, french = _call("GET", "/faqs", query={"lang": "fr"})
        assert [e["question"] for e in french] == ["Bonjour?"]

    def test_get_missing_is_404(self, shared_service):
        status, body = _call("GET", "/faqs/99")

        assert status == 404
        assert body["message"] == "FAQ with ID 99 not found"

    def test_non_numeric_id_is_422(self, shared_service):
        status, body = _call("GET", "/faqs/abc")

        assert status == 422
        assert body["status"] == "error"

    def test_non_ascii_digit_id_is_422(self, shared_service):
        status, body = _call("GET", "/faqs/\u00b2")

        assert status == 422
        assert body["message"].startswith("Validation failed")

    def test_path_parameters_take_precedence(self, shared_service):
        status, body = _call("GET", "/faqs/2", path_params={"id": "3"})

        assert status == 200
        assert body["id"] == 3

    def test_update(self, shared_service):
        status, body = _call("PATCH", "/faqs/1", {"answer": "Open daily."})

        assert status == 200
        assert body["answer"] == "Open daily."
        assert body["tags"] == ["hours", "schedule"]

    def test_update_rejects_empty_tags(self, shared_service):
        status, _ = _call("PATCH", "/faqs/1", {"tags": []})

        assert status == 400

    def test_delete(self, shared_service):
        status, body = _call("DELETE", "/faqs/2")
        assert status == 200
        assert body["message"] == "FAQ 2 deleted"

        status, _ = _call("DELETE", "/faqs/2")
        assert status == 404

    def test_ask_sees_new_entries(self, shared_service):
        _call(
            "POST",
            "/faqs",
            {"question": "Is there a parking garage?", "answer": "Level B1.", "tags": ["location"]},
        )

        status, body = _call("POST", "/faqs/ask", {"text": "parking garage"})

        assert status == 200
        assert body["results"][0]["question"] == "Is there a parking garage?"


class TestDefaultWiring:
    """Without a database the handlers serve the seeded clinic FAQs."""

    def test_seeded_store_answers(self):
        status, body = _call("POST", "/faqs/ask", {"text": "How can I book an appointment?"})

        assert status == 200
        assert body["results"][0]["tags"] == ["booking"]
