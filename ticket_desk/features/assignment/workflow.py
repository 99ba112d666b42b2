"""Comment submission with auto-assignment to the first responding agent."""

from __future__ import annotations

import logging
from typing import Any

from ticket_desk.core.models import Comment, Role, Ticket, User
from ticket_desk.core.repository import TicketRepository

logger = logging.getLogger(__name__)


def should_auto_assign(acting_user: User | None, assigned_to_id) -> bool:
    """Only agents claim tickets, and only tickets nobody holds yet."""
    if acting_user is None or acting_user.role is not Role.AGENT:
        return False
    return not assigned_to_id


def assign_on_reply(repo: TicketRepository, ticket_id, acting_user: User | None) -> Ticket | None:
    """Claim ``ticket_id`` for ``acting_user`` when an agent replies to an unassigned ticket.

    The ticket is read fresh from the backend before writing. Returns the
    updated ticket, or ``None`` when no assignment was made.

    The read-check-write sequence is not atomic: two agents commenting at the
    same moment can both see the ticket unassigned. The record returned by the
    update is checked and a lost race is logged; the last write stands.
    """
    if acting_user is None or acting_user.role is not Role.AGENT:
        return None

    ticket = repo.get_by_id(ticket_id)
    if not should_auto_assign(acting_user, ticket.assigned_to_id):
        return None

    current = repo.update(ticket_id, {"assigned_to_id": acting_user.id})
    logger.info("Ticket %s auto-assigned to agent %s", ticket_id, acting_user.id)

    if current.assigned_to_id != acting_user.id:
        logger.warning(
            "Ticket %s assignment race: assigned to %s after agent %s claimed it",
            ticket_id,
            current.assigned_to_id,
            acting_user.id,
        )
    return current


def create_comment_with_assignment(
    repo: TicketRepository,
    comment_data: dict[str, Any],
    acting_user: User | None,
) -> Comment:
    """Create a comment and, for an agent on an unassigned ticket, claim it.

    The comment is always written first. A failure of the assignment step
    propagates even though the comment has already been persisted.
    """
    comment = repo.create_comment(comment_data)
    assign_on_reply(repo, comment_data.get("ticket_id"), acting_user)
    return comment
