"""Shared pytest fixtures for the ticket_desk suite.

The project root is put on sys.path so `import ticket_desk` resolves from a
plain checkout without an editable install. The fixtures wire an in-memory
`_table` backend behind the table client, so repository, workflow and store
tests never touch the network.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ticket_desk.core.config import BackendSettings  # noqa: E402
from ticket_desk.core.errors import ApiError  # noqa: E402
from ticket_desk.core.repository import TicketRepository  # noqa: E402
from ticket_desk.core.table_client import TableAPI  # noqa: E402

STAMP = "2024-09-01T10:00:00Z"


class InMemoryBackend:
    """Minimal `_table` emulation: echoes only ids on writes, like many deployments."""

    def __init__(self, tickets=(), comments=(), users=(), reject_methods=()):
        self.tables = {
            "tickets": {row["id"]: dict(row) for row in tickets},
            "ticket_comments": {row["id"]: dict(row) for row in comments},
            "users": {row["id"]: dict(row) for row in users},
        }
        self.reject_methods = set(reject_methods)
        self._next_id = 100

    def __call__(self, method, endpoint, body):
        if method in self.reject_methods:
            raise ApiError(405, "Method Not Allowed")
        path, _, query = endpoint.partition("?")
        parts = path.strip("/").split("/")
        rows = self.tables[parts[2]]
        record_id = int(parts[3]) if len(parts) > 3 else None

        if method == "GET" and record_id is None:
            items = list(rows.values())
            if query.startswith("filter="):
                field, _, value = query[len("filter=") :].partition("=")
                items = [r for r in items if str(r.get(field)) == value]
            return {"resource": items}
        if record_id is not None and record_id not in rows:
            raise ApiError(404, "Record not found")
        if method == "GET":
            return dict(rows[record_id])
        if method == "POST":
            echoed = []
            for rec in body["resource"]:
                self._next_id += 1
                rows[self._next_id] = {**rec, "id": self._next_id, "created_at": STAMP, "updated_at": STAMP}
                echoed.append({"id": self._next_id})
            return {"resource": echoed}
        if method in ("PUT", "PATCH"):
            patch = body["resource"][0] if "resource" in body else body
            rows[record_id].update(patch)
            return {"id": record_id}
        if method == "DELETE":
            del rows[record_id]
            return {"id": record_id}
        raise ApiError(400, f"Unsupported method {method}")


class DummyAPI(TableAPI):
    def __init__(self, handler):
        self.settings = BackendSettings(base_url="https://example.test/api/v2", api_key="test-key")
        self.base_url = self.settings.base_url
        self.handler = handler
        self.calls = []

    def request(self, endpoint, method="GET", body=None):
        self.calls.append((method, endpoint, body))
        return self.handler(method, endpoint, body)


def ticket_row(id, requester_id=7, status="open", assigned_to_id=None, **extra):
    row = {
        "id": id,
        "title": f"Ticket {id}",
        "description": f"Description for ticket {id}",
        "status": status,
        "priority": "medium",
        "requester_id": requester_id,
        "assigned_to_id": assigned_to_id,
        "created_at": STAMP,
        "updated_at": STAMP,
    }
    row.update(extra)
    return row


SAMPLE_USERS = [
    {"id": 1, "name": "Alice Admin", "email": "alice@example.com", "role": "admin"},
    {"id": 2, "name": "Bob Johnson", "email": "bob@example.com", "role": "agent"},
    {"id": 3, "name": "Carol Agent", "email": "carol@example.com", "role": "agent"},
    {"id": 7, "name": "Dan Customer", "email": "dan@example.com", "role": "customer"},
]


@pytest.fixture
def backend():
    return InMemoryBackend(
        tickets=[ticket_row(1), ticket_row(2, assigned_to_id=3), ticket_row(3, status="closed")],
        comments=[{"id": 1, "ticket_id": 1, "user_id": 7, "comment": "Printer jammed", "created_at": STAMP}],
        users=SAMPLE_USERS,
    )


@pytest.fixture
def api(backend):
    return DummyAPI(backend)


@pytest.fixture
def repo(api):
    return TicketRepository(api)
