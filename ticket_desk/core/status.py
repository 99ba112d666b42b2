"""Status and role normalization utilities.

Centralizes the handling of ticket status strings and user role spellings so
that filtering and assignment logic only ever branch on canonical values.
"""

from __future__ import annotations

from .config import (
    OPEN_STATUSES,
    PRIORITY_DISPLAY_ORDER,
    PRIORITY_LABELS,
    STATUS_CLOSED,
    STATUS_DISPLAY_ORDER,
    STATUS_LABELS,
)
from .models import Role

# Spellings accepted at the backend boundary (lowercase keys)
ROLE_ALIASES: dict[str, Role] = {
    "admin": Role.ADMIN,
    "administrator": Role.ADMIN,
    "agent": Role.AGENT,
    "requester": Role.REQUESTER,
    "customer": Role.REQUESTER,
}


def normalize_role(value) -> Role:
    """Map a raw role string to the canonical ``Role``.

    Parameters
    ----------
    value : str | Role | None
        Raw role value from the users table.

    Returns
    -------
    Role
        Canonical role. Missing or unrecognized values map to
        ``Role.REQUESTER``, the least privileged role.

    Examples
    --------
    >>> normalize_role("customer")
    <Role.REQUESTER: 'requester'>
    >>> normalize_role("Agent")
    <Role.AGENT: 'agent'>
    """
    if isinstance(value, Role):
        return value
    if not value:
        return Role.REQUESTER
    return ROLE_ALIASES.get(str(value).strip().lower(), Role.REQUESTER)


def is_open_status(status: str | None) -> bool:
    """True for statuses counted as open (``open`` and ``in_progress``)."""
    return status in OPEN_STATUSES


def is_closed_status(status: str | None) -> bool:
    return status == STATUS_CLOSED


def status_options() -> list[tuple[str, str]]:
    """(value, label) pairs for status pickers, in display order."""
    return [(s, STATUS_LABELS[s]) for s in STATUS_DISPLAY_ORDER]


def priority_options() -> list[tuple[str, str]]:
    return [(p, PRIORITY_LABELS[p]) for p in PRIORITY_DISPLAY_ORDER]
