"""Error taxonomy shared by the transport, repository, and state layers."""

from __future__ import annotations


class TicketDeskError(Exception):
    """Base class for every error raised by ticket_desk."""


class ConfigError(TicketDeskError):
    """Backend base URL or API key is missing."""


class TransportError(TicketDeskError):
    """A request to the tabular backend did not succeed."""


class NetworkError(TransportError):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ApiError(TransportError):
    def __init__(self, status: int, message: str):
        super().__init__(f"API Error: {status} - {message}")
        self.status = status
        self.message = message


class ValidationError(TicketDeskError):
    """Ticket form data failed validation; ``errors`` maps field -> message."""

    def __init__(self, errors: dict[str, str]):
        summary = "; ".join(f"{field}: {msg}" for field, msg in errors.items())
        super().__init__(f"Invalid ticket: {summary}")
        self.errors = dict(errors)
