"""Tests for the visibility feature module."""

from ticket_desk.core.mappers import normalize_ticket
from ticket_desk.core.models import Role, User
from ticket_desk.features.visibility import (
    build_list_context,
    default_filter,
    filter_options,
    filter_tickets,
    role_label,
    status_counts,
)


def _tickets(*rows):
    return [normalize_ticket({"created_at": "2024-09-01T10:00:00Z", **row}) for row in rows]


def _sample_tickets():
    return _tickets(
        {"id": 1, "requester_id": 7, "status": "open", "assigned_to_id": 3},
        {"id": 2, "requester_id": 9, "status": "in_progress", "assigned_to_id": None},
        {"id": 3, "requester_id": 7, "status": "closed", "assigned_to_id": 3},
        {"id": 4, "requester_id": 9, "status": "open", "assigned_to_id": 4},
        {"id": 5, "requester_id": 7, "status": "in_progress", "assigned_to_id": 3},
    )


REQUESTER = User(id=7, name="Dan", email="dan@example.com", role=Role.REQUESTER)
AGENT = User(id=3, name="Carol", email="carol@example.com", role=Role.AGENT)
ADMIN = User(id=1, name="Alice", email="alice@example.com", role=Role.ADMIN)


def test_requester_sees_only_own_tickets_in_order():
    tickets = _tickets(
        {"id": 10, "requester_id": 7, "status": "open"},
        {"id": 11, "requester_id": 7, "status": "closed"},
        {"id": 12, "requester_id": 9, "status": "open"},
    )
    result = filter_tickets(tickets, REQUESTER, "all")
    assert [t.id for t in result] == [10, 11]


def test_requester_named_filters():
    tickets = _sample_tickets()
    assert [t.id for t in filter_tickets(tickets, REQUESTER, "my_open")] == [1, 5]
    assert [t.id for t in filter_tickets(tickets, REQUESTER, "my_closed")] == [3]
    # agent-only views never widen a requester's scope
    assert [t.id for t in filter_tickets(tickets, REQUESTER, "my_assigned")] == [1, 3, 5]


def test_agent_my_assigned_excludes_closed_and_others():
    tickets = _tickets(
        {"id": 1, "assigned_to_id": 3, "status": "open"},
        {"id": 2, "assigned_to_id": 3, "status": "closed"},
        {"id": 3, "assigned_to_id": 4, "status": "open"},
    )
    assert [t.id for t in filter_tickets(tickets, AGENT, "my_assigned")] == [1]


def test_agent_views():
    tickets = _sample_tickets()
    assert len(filter_tickets(tickets, AGENT, "all")) == 5
    assert [t.id for t in filter_tickets(tickets, AGENT, "open")] == [1, 2, 4, 5]
    assert [t.id for t in filter_tickets(tickets, AGENT, "closed")] == [3]
    assert [t.id for t in filter_tickets(tickets, AGENT, "in_progress")] == [2, 5]


def test_admin_views():
    tickets = _sample_tickets()
    assert len(filter_tickets(tickets, ADMIN, "all")) == 5
    assert [t.id for t in filter_tickets(tickets, ADMIN, "open")] == [1, 2, 4, 5]
    assert [t.id for t in filter_tickets(tickets, ADMIN, "closed")] == [3]
    assert filter_tickets(tickets, ADMIN, "my_assigned") == []


def test_no_current_user_fails_closed():
    tickets = _sample_tickets()
    for name in ("all", "open", "my_open", "closed", "anything"):
        assert filter_tickets(tickets, None, name) == []
    assert filter_tickets(None, ADMIN) == []


def test_default_filter_per_role():
    assert default_filter(REQUESTER) == "my_open"
    assert default_filter(AGENT) == "all"
    assert default_filter(None) == "all"


def test_requester_filter_options():
    options = filter_options(_sample_tickets(), REQUESTER)
    assert [(o.value, o.count) for o in options] == [("my_open", 2), ("my_closed", 1)]
    assert options[0].label == "My Open Tickets (2)"


def test_agent_filter_options_include_my_assigned():
    options = filter_options(_sample_tickets(), AGENT)
    assert [(o.value, o.count) for o in options] == [
        ("all", 5),
        ("open", 4),
        ("my_assigned", 2),
        ("closed", 1),
    ]


def test_admin_filter_options():
    options = filter_options(_sample_tickets(), ADMIN)
    assert [o.value for o in options] == ["all", "open", "closed"]


def test_status_counts():
    assert status_counts(_sample_tickets()) == {"open": 2, "in_progress": 2, "closed": 1}
    assert status_counts([]) == {}


def test_build_list_context():
    ctx = build_list_context(_sample_tickets(), REQUESTER)
    assert ctx.filter_name == "my_open"
    assert [t.id for t in ctx.tickets] == [1, 5]
    assert ctx.status_distribution == {"open": 1, "closed": 1, "in_progress": 1}
    empty = build_list_context(_sample_tickets(), None)
    assert empty.tickets == [] and empty.options == []


def test_role_label_uses_customer_alias():
    assert role_label(REQUESTER) == "customer"
    assert role_label(AGENT) == "agent"
