"""Visibility feature module: which tickets a user may see under a named view."""

from ticket_desk.features.visibility.context import (
    ROLE_LABELS,
    FilterOption,
    TicketListContext,
    build_list_context,
    default_filter,
    filter_options,
    role_label,
    status_counts,
)
from ticket_desk.features.visibility.filters import (
    assigned_to,
    closed_tickets,
    filter_tickets,
    open_tickets,
    owned_by,
    with_status,
)

__all__ = [
    "ROLE_LABELS",
    "FilterOption",
    "TicketListContext",
    "assigned_to",
    "build_list_context",
    "closed_tickets",
    "default_filter",
    "filter_options",
    "filter_tickets",
    "open_tickets",
    "owned_by",
    "role_label",
    "status_counts",
    "with_status",
]
