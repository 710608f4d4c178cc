"""Pydantic models for API payloads."""

from models.faq import (  # noqa: F401
    AskRequest,
    AskResponse,
    FaqCreate,
    FaqEntry,
    FaqResult,
    FaqUpdate,
)
from models.response import ApiResponse  # noqa: F401
