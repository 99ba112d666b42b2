"""TicketRepository: CRUD for tickets, comments, and users over the table API."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from .errors import TransportError, ValidationError
from .mappers import normalize_comment, normalize_ticket, normalize_user, unwrap_resource
from .models import Comment, Ticket, User
from .table_client import TableAPI

logger = logging.getLogger(__name__)

# A write response with this many keys or fewer only echoes the identifier
ECHO_ONLY_MAX_KEYS = 2

# Fields fixed at insert time; an update patch may not carry them
IMMUTABLE_TICKET_FIELDS: frozenset[str] = frozenset({"id", "requester_id", "created_at"})


@dataclass(frozen=True, slots=True)
class WriteStrategy:
    """One update dialect: the HTTP verb and whether the patch is wrapped."""

    method: str
    wrap: bool = False

    def body(self, patch: dict[str, Any]) -> dict[str, Any]:
        if self.wrap:
            return {"resource": [patch]}
        return dict(patch)

    @property
    def label(self) -> str:
        return f"{self.method} ({'resource wrapper' if self.wrap else 'raw'})"


# Tried in order until one succeeds
UPDATE_STRATEGIES: Sequence[WriteStrategy] = (
    WriteStrategy("PUT"),
    WriteStrategy("PATCH"),
    WriteStrategy("PATCH", wrap=True),
)


class TicketRepository:
    def __init__(self, api: TableAPI, update_strategies: Sequence[WriteStrategy] = UPDATE_STRATEGIES):
        if not update_strategies:
            raise ValueError("at least one update strategy is required")
        self.api = api
        self.update_strategies = tuple(update_strategies)

    @property
    def _tickets(self) -> str:
        return self.api.settings.tickets_table

    @property
    def _comments(self) -> str:
        return self.api.settings.comments_table

    @property
    def _users(self) -> str:
        return self.api.settings.users_table

    # ------------------ Tickets ------------------
    def list(self) -> list[Ticket]:
        response = self.api.request(self.api.table_path(self._tickets))
        return [normalize_ticket(row) for row in unwrap_resource(response)]

    def get_by_id(self, ticket_id) -> Ticket:
        if ticket_id is None:
            raise ValidationError({"id": "Ticket id is required"})
        response = self.api.request(self.api.table_path(self._tickets, ticket_id))
        return normalize_ticket(response or {})

    def create(self, data: dict[str, Any]) -> Ticket:
        """Insert one ticket using the backend's batch envelope.

        Some deployments echo only the primary key on insert; when the returned
        row lacks either timestamp the authoritative record is re-fetched.
        """
        response = self.api.request(
            self.api.table_path(self._tickets), "POST", {"resource": [data]}
        )
        rows = unwrap_resource(response)
        if not rows:
            raise TransportError("Backend returned no record for the created ticket")
        created = rows[0]
        if created.get("id") is None:
            raise TransportError("Backend returned a created ticket without an id")
        if not created.get("created_at") or not created.get("updated_at"):
            return self.get_by_id(created.get("id"))
        return normalize_ticket(created)

    def update(self, ticket_id, patch: dict[str, Any]) -> Ticket:
        """Apply a partial update, falling through the configured write dialects.

        Each strategy is an independent request. Failures before the last
        strategy are logged and skipped; if every strategy fails the last error
        is raised. A patch touching an immutable field is rejected before any
        request is made.
        """
        frozen = sorted(IMMUTABLE_TICKET_FIELDS.intersection(patch))
        if frozen:
            raise ValidationError({name: "This field cannot be changed" for name in frozen})
        endpoint = self.api.table_path(self._tickets, ticket_id)
        last_error: TransportError | None = None
        for strategy in self.update_strategies:
            try:
                response = self.api.request(endpoint, strategy.method, strategy.body(patch))
            except TransportError as exc:
                logger.debug("Ticket %s update via %s failed: %s", ticket_id, strategy.label, exc)
                last_error = exc
                continue
            return self._complete_update(ticket_id, response)
        raise last_error

    def remove(self, ticket_id) -> bool:
        self.api.request(self.api.table_path(self._tickets, ticket_id), "DELETE")
        return True

    def _complete_update(self, ticket_id, response: Any) -> Ticket:
        rows = unwrap_resource(response)
        record = rows[0] if rows else None
        if not isinstance(record, dict) or len(record) <= ECHO_ONLY_MAX_KEYS:
            return self.get_by_id(ticket_id)
        return normalize_ticket(record)

    # ------------------ Comments ------------------
    def list_for_ticket(self, ticket_id) -> list[Comment]:
        endpoint = f"{self.api.table_path(self._comments)}?filter=ticket_id={ticket_id}"
        response = self.api.request(endpoint)
        comments = [normalize_comment(row) for row in unwrap_resource(response)]
        # sorted() is stable, so equal timestamps keep backend order
        return sorted(comments, key=lambda c: c.created_at)

    def list_all_comments(self) -> list[Comment]:
        response = self.api.request(self.api.table_path(self._comments))
        return [normalize_comment(row) for row in unwrap_resource(response)]

    def create_comment(self, data: dict[str, Any]) -> Comment:
        response = self.api.request(
            self.api.table_path(self._comments), "POST", {"resource": [data]}
        )
        rows = unwrap_resource(response)
        if not rows:
            raise TransportError("Backend returned no record for the created comment")
        created = rows[0]
        # Insert responses may echo only the id; fill from the submitted fields
        return normalize_comment(
            {
                "id": created.get("id"),
                "ticket_id": data.get("ticket_id"),
                "user_id": data.get("user_id"),
                "comment": data.get("comment"),
                "created_at": created.get("created_at"),
            }
        )

    # ------------------ Users ------------------
    def list_users(self) -> list[User]:
        response = self.api.request(self.api.table_path(self._users))
        return [normalize_user(row) for row in unwrap_resource(response)]

    def get_user(self, user_id) -> User:
        response = self.api.request(self.api.table_path(self._users, user_id))
        return normalize_user(response or {})
