"""Common response wrapper."""

from typing import Any, Optional
from pydantic import BaseModel


class ApiResponse(BaseModel):
    """Envelope for non-FAQ payloads (errors, deletes)."""

    message: str
    status: str = "ok"
    error: Optional[Any] = None
    correlation_id: Optional[str] = None
