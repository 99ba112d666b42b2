"""Pure helpers to build the ticket list view context (filter options, counts)."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from ticket_desk.core.config import (
    FILTER_ALL,
    FILTER_CLOSED,
    FILTER_MY_ASSIGNED,
    FILTER_MY_CLOSED,
    FILTER_MY_OPEN,
    FILTER_OPEN,
    OPEN_STATUSES,
    STATUS_CLOSED,
)
from ticket_desk.core.mappers import tickets_to_dataframe
from ticket_desk.core.models import Role, Ticket, User
from ticket_desk.features.visibility import filters as vis

# Presentation labels only; filtering always branches on Role
ROLE_LABELS: dict[Role, str] = {
    Role.ADMIN: "admin",
    Role.AGENT: "agent",
    Role.REQUESTER: "customer",
}


@dataclass(frozen=True, slots=True)
class FilterOption:
    value: str
    label: str
    count: int


@dataclass(slots=True)
class TicketListContext:
    """Everything a ticket list view needs for one user and filter."""

    user: User | None
    filter_name: str
    tickets: list[Ticket] = field(default_factory=list)
    options: list[FilterOption] = field(default_factory=list)
    status_distribution: dict[str, int] = field(default_factory=dict)


def role_label(user: User | None) -> str:
    if user is None:
        return ""
    return ROLE_LABELS.get(user.role, user.role.value)


def default_filter(user: User | None) -> str:
    if user is not None and user.role is Role.REQUESTER:
        return FILTER_MY_OPEN
    return FILTER_ALL


def status_counts(tickets: Iterable[Ticket]) -> dict[str, int]:
    df = tickets_to_dataframe(tickets)
    if df.empty:
        return {}
    counts = df["status"].dropna().value_counts()
    return {str(status): int(n) for status, n in counts.items()}


def filter_options(tickets: Iterable[Ticket], user: User | None) -> list[FilterOption]:
    """Named filters offered to ``user`` with the number of matching tickets.

    Open counts include in-progress tickets. Agents additionally get a
    "My Assigned" option placed before "Closed".
    """
    if user is None:
        return []
    items = list(tickets)
    visible = vis.filter_tickets(items, user, FILTER_ALL)
    counts = status_counts(visible)
    open_count = sum(counts.get(s, 0) for s in OPEN_STATUSES)
    closed_count = counts.get(STATUS_CLOSED, 0)

    if user.role is Role.REQUESTER:
        return [
            FilterOption(FILTER_MY_OPEN, f"My Open Tickets ({open_count})", open_count),
            FilterOption(FILTER_MY_CLOSED, f"My Closed Tickets ({closed_count})", closed_count),
        ]

    options = [
        FilterOption(FILTER_ALL, f"All Tickets ({len(visible)})", len(visible)),
        FilterOption(FILTER_OPEN, f"Open ({open_count})", open_count),
        FilterOption(FILTER_CLOSED, f"Closed ({closed_count})", closed_count),
    ]
    if user.role is Role.AGENT:
        mine = len(vis.assigned_to(items, user.id))
        options.insert(2, FilterOption(FILTER_MY_ASSIGNED, f"My Assigned ({mine})", mine))
    return options


def build_list_context(
    tickets: Iterable[Ticket],
    user: User | None,
    filter_name: str | None = None,
) -> TicketListContext:
    items = list(tickets)
    name = filter_name or default_filter(user)
    if user is None:
        return TicketListContext(user=None, filter_name=name)
    return TicketListContext(
        user=user,
        filter_name=name,
        tickets=vis.filter_tickets(items, user, name),
        options=filter_options(items, user),
        status_distribution=status_counts(vis.filter_tickets(items, user, FILTER_ALL)),
    )
