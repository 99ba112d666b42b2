"""Role-aware ticket visibility filtering."""

from __future__ import annotations

from collections.abc import Iterable

from ticket_desk.core.config import (
    FILTER_ALL,
    FILTER_CLOSED,
    FILTER_MY_ASSIGNED,
    FILTER_MY_CLOSED,
    FILTER_MY_OPEN,
    FILTER_OPEN,
)
from ticket_desk.core.models import Role, Ticket, User
from ticket_desk.core.status import is_closed_status, is_open_status


def owned_by(tickets: Iterable[Ticket], user_id) -> list[Ticket]:
    """Tickets whose requester is ``user_id``, in input order."""
    return [t for t in tickets if t.requester_id == user_id]


def assigned_to(tickets: Iterable[Ticket], user_id) -> list[Ticket]:
    """Tickets assigned to ``user_id`` that are not closed, in input order."""
    return [t for t in tickets if t.assigned_to_id == user_id and not is_closed_status(t.status)]


def open_tickets(tickets: Iterable[Ticket]) -> list[Ticket]:
    return [t for t in tickets if is_open_status(t.status)]


def closed_tickets(tickets: Iterable[Ticket]) -> list[Ticket]:
    return [t for t in tickets if is_closed_status(t.status)]


def with_status(tickets: Iterable[Ticket], status: str) -> list[Ticket]:
    return [t for t in tickets if t.status == status]


def _requester_view(tickets: list[Ticket], user: User, filter_name: str) -> list[Ticket]:
    own = owned_by(tickets, user.id)
    if filter_name == FILTER_MY_OPEN:
        return open_tickets(own)
    if filter_name == FILTER_MY_CLOSED:
        return closed_tickets(own)
    return own


def _agent_view(tickets: list[Ticket], user: User, filter_name: str) -> list[Ticket]:
    if filter_name == FILTER_ALL:
        return list(tickets)
    if filter_name == FILTER_OPEN:
        return open_tickets(tickets)
    if filter_name == FILTER_MY_ASSIGNED:
        return assigned_to(tickets, user.id)
    if filter_name == FILTER_CLOSED:
        return closed_tickets(tickets)
    return with_status(tickets, filter_name)


def _admin_view(tickets: list[Ticket], filter_name: str) -> list[Ticket]:
    if filter_name == FILTER_ALL:
        return list(tickets)
    if filter_name == FILTER_OPEN:
        return open_tickets(tickets)
    return with_status(tickets, filter_name)


def filter_tickets(
    tickets: Iterable[Ticket] | None,
    current_user: User | None,
    filter_name: str = FILTER_ALL,
) -> list[Ticket]:
    """Select the tickets ``current_user`` may see under ``filter_name``.

    Requesters are always narrowed to their own tickets before the named
    filter is applied; agents and admins see every ticket. The result keeps
    the input order. With no current user the result is empty.

    Parameters
    ----------
    tickets : iterable of Ticket or None
        Full ticket collection.
    current_user : User or None
        Active session identity.
    filter_name : str
        Named view, e.g. ``"all"``, ``"open"``, ``"my_assigned"``,
        ``"my_open"``, or a raw status value.

    Returns
    -------
    list[Ticket]
        Visible tickets.
    """
    if current_user is None or tickets is None:
        return []
    items = list(tickets)
    if current_user.role is Role.REQUESTER:
        return _requester_view(items, current_user, filter_name)
    if current_user.role is Role.AGENT:
        return _agent_view(items, current_user, filter_name)
    if current_user.role is Role.ADMIN:
        return _admin_view(items, filter_name)
    return []
