"""FAQ models: stored entries, CRUD payloads and the /faqs/ask contract."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    if not cleaned:
        raise ValueError("must not be empty")
    return cleaned


def _clean_tags(value: Optional[List[str]]) -> Optional[List[str]]:
    if value is None:
        return None
    tags = [tag.strip() for tag in value]
    if not tags or any(not tag for tag in tags):
        raise ValueError("tags must contain at least one non-empty string")
    return tags


class FaqEntry(BaseModel):
    """Read-only snapshot of a stored FAQ, as handed to the matcher."""

    model_config = ConfigDict(frozen=True)

    id: int
    question: str
    answer: str
    tags: List[str] = Field(default_factory=list)
    lang: str = "en"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class FaqCreate(BaseModel):
    """Payload for POST /faqs."""

    question: str
    answer: str
    tags: List[str] = Field(min_length=1)
    lang: str = Field(default="en", min_length=2, max_length=2)

    @field_validator("question", "answer")
    @classmethod
    def validate_text(cls, value: str) -> str:
        """Reject blank question/answer text."""
        return _clean_text(value)

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, value: List[str]) -> List[str]:
        return _clean_tags(value)


class FaqUpdate(BaseModel):
    """Payload for PATCH /faqs/{id}; only provided fields change."""

    question: Optional[str] = None
    answer: Optional[str] = None
    tags: Optional[List[str]] = None
    lang: Optional[str] = Field(default=None, min_length=2, max_length=2)

    @field_validator("question", "answer")
    @classmethod
    def validate_text(cls, value: Optional[str]) -> Optional[str]:
        return _clean_text(value)

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return _clean_tags(value)

    def changes(self) -> dict:
        """Fields explicitly set by the caller."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class AskRequest(BaseModel):
    """
    Payload for POST /faqs/ask.

    Blank text is accepted on purpose: it simply scores zero everywhere and
    comes back as the fallback message.
    """

    text: str
    lang: str = "en"


class FaqResult(BaseModel):
    """Public projection of a matched entry."""

    id: int
    question: str
    answer: str
    tags: List[str]
    score: float = Field(ge=0, le=1)


class AskResponse(BaseModel):
    """Ranked answers, or an empty list plus a fallback message."""

    results: List[FaqResult] = Field(default_factory=list)
    ambiguous: Optional[bool] = None
    message: Optional[str] = None

    def to_json(self) -> str:
        """Serialize without the optional keys that are unset."""
        return self.model_dump_json(exclude_none=True)
