"""Ticket form validation applied before a create reaches the backend."""

from __future__ import annotations

from typing import Any

from .config import MIN_DESCRIPTION_LENGTH, MIN_TITLE_LENGTH, PRIORITY_DISPLAY_ORDER, STATUS_DISPLAY_ORDER
from .errors import ValidationError


def validate_ticket_form(data: dict[str, Any]) -> dict[str, str]:
    """Return a mapping of field name to error message (empty when valid)."""
    errors: dict[str, str] = {}
    title = str(data.get("title") or "").strip()
    description = str(data.get("description") or "").strip()

    if not title:
        errors["title"] = "Title is required"
    elif len(title) < MIN_TITLE_LENGTH:
        errors["title"] = f"Title must be at least {MIN_TITLE_LENGTH} characters"

    if not description:
        errors["description"] = "Description is required"
    elif len(description) < MIN_DESCRIPTION_LENGTH:
        errors["description"] = f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters"

    status = data.get("status")
    if status is not None and status not in STATUS_DISPLAY_ORDER:
        errors["status"] = f"Unknown status: {status}"

    priority = data.get("priority")
    if priority is not None and priority not in PRIORITY_DISPLAY_ORDER:
        errors["priority"] = f"Unknown priority: {priority}"
    return errors


def require_valid_ticket(data: dict[str, Any]) -> None:
    errors = validate_ticket_form(data)
    if errors:
        raise ValidationError(errors)
