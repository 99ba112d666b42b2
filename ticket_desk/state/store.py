"""Ticket state machine: immutable state folded over tagged actions."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from ticket_desk.core.errors import TicketDeskError
from ticket_desk.core.models import Comment, Ticket, User
from ticket_desk.core.repository import TicketRepository
from ticket_desk.core.validation import require_valid_ticket
from ticket_desk.features.assignment import assign_on_reply

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    NONE = "none"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class TicketState:
    tickets: tuple[Ticket, ...] = ()
    loading: bool = False
    outcome: Outcome = Outcome.NONE
    error: str | None = None
    form_open: bool = False
    editing: Ticket | None = None


# ------------------ Actions ------------------
@dataclass(frozen=True, slots=True)
class BeginLoading:
    pass


@dataclass(frozen=True, slots=True)
class SetTickets:
    tickets: tuple[Ticket, ...]


@dataclass(frozen=True, slots=True)
class SetError:
    message: str


@dataclass(frozen=True, slots=True)
class AddTicket:
    ticket: Ticket


@dataclass(frozen=True, slots=True)
class UpdateTicket:
    ticket: Ticket


@dataclass(frozen=True, slots=True)
class DeleteTicket:
    ticket_id: Any


@dataclass(frozen=True, slots=True)
class OpenForm:
    pass


@dataclass(frozen=True, slots=True)
class CloseForm:
    pass


@dataclass(frozen=True, slots=True)
class SetEditing:
    ticket: Ticket | None


@dataclass(frozen=True, slots=True)
class ClearError:
    pass


Action = (
    BeginLoading
    | SetTickets
    | SetError
    | AddTicket
    | UpdateTicket
    | DeleteTicket
    | OpenForm
    | CloseForm
    | SetEditing
    | ClearError
)


def _succeeded(state: TicketState, **changes) -> TicketState:
    return replace(state, loading=False, outcome=Outcome.SUCCESS, error=None, **changes)


def reduce(state: TicketState, action: Action) -> TicketState:
    """Return the state that results from applying ``action`` to ``state``.

    Every terminal action (tickets set, ticket added/updated/deleted, error)
    ends loading. Errors keep the loaded tickets. Unknown actions leave the
    state unchanged.
    """
    if isinstance(action, BeginLoading):
        return replace(state, loading=True)
    if isinstance(action, SetTickets):
        return _succeeded(state, tickets=tuple(action.tickets))
    if isinstance(action, SetError):
        return replace(state, loading=False, outcome=Outcome.ERROR, error=action.message)
    if isinstance(action, AddTicket):
        return _succeeded(state, tickets=(action.ticket, *state.tickets), form_open=False)
    if isinstance(action, UpdateTicket):
        tickets = tuple(action.ticket if t.id == action.ticket.id else t for t in state.tickets)
        return _succeeded(state, tickets=tickets, editing=None)
    if isinstance(action, DeleteTicket):
        tickets = tuple(t for t in state.tickets if t.id != action.ticket_id)
        return _succeeded(state, tickets=tickets)
    if isinstance(action, OpenForm):
        return replace(state, form_open=True, editing=None)
    if isinstance(action, CloseForm):
        return replace(state, form_open=False, editing=None)
    if isinstance(action, SetEditing):
        return replace(state, editing=action.ticket, form_open=False)
    if isinstance(action, ClearError):
        return replace(state, error=None, outcome=Outcome.NONE)
    return state


class TicketStore:
    """Holds the current ``TicketState`` and runs repository-backed actions.

    Each repository call is one loading transaction: it begins loading and
    always finishes with a terminal action. Failures become the ``error``
    string and are not raised to the caller.
    """

    def __init__(self, repository: TicketRepository, state: TicketState | None = None):
        self.repository = repository
        self._state = state or TicketState()

    @property
    def state(self) -> TicketState:
        return self._state

    def dispatch(self, action: Action) -> TicketState:
        self._state = reduce(self._state, action)
        return self._state

    def _attempt(self, operation: Callable[[], Any]) -> tuple[bool, Any]:
        """Call ``operation``, turning any failure into a ``SetError`` dispatch."""
        try:
            return True, operation()
        except TicketDeskError as exc:
            logger.warning("Ticket operation failed: %s", exc)
            self.dispatch(SetError(str(exc)))
        except Exception as exc:
            logger.exception("Unexpected error during ticket operation")
            self.dispatch(SetError(f"Unexpected error: {exc}"))
        return False, None

    def _run(self, operation: Callable[[], Any], on_success: Callable[[Any], Action]) -> Any:
        self.dispatch(BeginLoading())
        ok, result = self._attempt(operation)
        if ok:
            self.dispatch(on_success(result))
        return result

    # ------------------ Repository Actions ------------------
    def load_tickets(self) -> list[Ticket] | None:
        return self._run(self.repository.list, lambda tickets: SetTickets(tuple(tickets)))

    def add_ticket(self, data: dict[str, Any]) -> Ticket | None:
        def create():
            require_valid_ticket(data)
            return self.repository.create(data)

        return self._run(create, AddTicket)

    def edit_ticket(self, ticket_id, patch: dict[str, Any]) -> Ticket | None:
        return self._run(lambda: self.repository.update(ticket_id, patch), UpdateTicket)

    def remove_ticket(self, ticket_id) -> bool:
        removed = self._run(lambda: self.repository.remove(ticket_id), lambda _: DeleteTicket(ticket_id))
        return bool(removed)

    def submit_comment(self, comment_data: dict[str, Any], acting_user: User | None) -> Comment | None:
        """Post a comment, auto-assign on an agent reply, and refresh the ticket list.

        All three steps share one loading transaction. Once the comment is
        persisted it is returned even if the assignment or the reload fails;
        that failure is reported through ``error``.
        """
        self.dispatch(BeginLoading())
        ok, comment = self._attempt(lambda: self.repository.create_comment(comment_data))
        if not ok:
            return None

        def assign_and_reload():
            assign_on_reply(self.repository, comment_data.get("ticket_id"), acting_user)
            return self.repository.list()

        ok, tickets = self._attempt(assign_and_reload)
        if ok:
            self.dispatch(SetTickets(tuple(tickets)))
        return comment

    # ------------------ Form Actions ------------------
    def open_form(self) -> TicketState:
        return self.dispatch(OpenForm())

    def close_form(self) -> TicketState:
        return self.dispatch(CloseForm())

    def set_editing(self, ticket: Ticket | None) -> TicketState:
        return self.dispatch(SetEditing(ticket))

    def clear_error(self) -> TicketState:
        return self.dispatch(ClearError())
