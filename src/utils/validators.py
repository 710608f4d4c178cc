"""Lightweight validation helpers for request parsing."""

from typing import Any, Optional

from utils.error_handling import ValidationError


def ensure_present(value: Any, field: str) -> None:
    """Raise ValidationError if value is missing."""
    if value in (None, "", []):
        raise ValidationError(f"{field} is required")


def parse_entry_id(path: str, prefix: str = "/faqs/") -> int:
    """
    Extract the integer id from paths like ``/faqs/12``.

    Mirrors a ParseIntPipe: anything that is not a positive integer is a 422.
    """
    ensure_present(path, "path")
    raw: Optional[str] = path[len(prefix):] if path.startswith(prefix) else None
    raw = (raw or "").strip("/")
    ensure_present(raw, "id")
    if not (raw.isascii() and raw.isdigit()):
        raise ValidationError(f"Validation failed (numeric string is expected): {raw}")
    return int(raw)
