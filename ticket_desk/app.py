"""Application entry point: wire settings, client, repository, store, and session."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ticket_desk.core.config import BackendSettings, load_settings
from ticket_desk.core.models import Ticket
from ticket_desk.core.repository import TicketRepository
from ticket_desk.core.table_client import TableAPI
from ticket_desk.features.visibility import filter_tickets
from ticket_desk.state.session import Session
from ticket_desk.state.store import TicketStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TicketDesk:
    repository: TicketRepository
    store: TicketStore
    session: Session

    def visible_tickets(self, filter_name: str = "all") -> list[Ticket]:
        return filter_tickets(self.store.state.tickets, self.session.current_user, filter_name)


def create_app(settings: BackendSettings | None = None) -> TicketDesk:
    """Build a ready-to-use ``TicketDesk``; no request is made until used."""
    settings = settings or load_settings()
    repository = TicketRepository(TableAPI(settings))
    logger.debug("Ticket desk configured for service %s", settings.db_service)
    return TicketDesk(repository=repository, store=TicketStore(repository), session=Session())


def start(settings: BackendSettings | None = None) -> TicketDesk:
    """Create the app, load the user directory, and load tickets.

    A failed user load propagates; a failed ticket load is reported through
    the store's error field.
    """
    desk = create_app(settings)
    desk.session = Session.load(desk.repository)
    desk.store.load_tickets()
    return desk
