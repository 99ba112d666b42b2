import pytest

from ticket_desk.core.errors import ValidationError
from ticket_desk.core.status import priority_options, status_options
from ticket_desk.core.validation import require_valid_ticket, validate_ticket_form


def test_valid_form():
    data = {"title": "VPN", "description": "Cannot reach the VPN", "status": "open", "priority": "high"}
    assert validate_ticket_form(data) == {}


def test_required_and_length_rules():
    errors = validate_ticket_form({"title": "  ", "description": "too short"})
    assert errors["title"] == "Title is required"
    assert "at least 10" in errors["description"]


def test_unknown_status_and_priority():
    errors = validate_ticket_form(
        {"title": "Printer", "description": "Printer is jammed again", "status": "pending", "priority": "p1"}
    )
    assert set(errors) == {"status", "priority"}


def test_require_valid_ticket_raises():
    with pytest.raises(ValidationError) as excinfo:
        require_valid_ticket({"title": "ok title", "description": ""})
    assert excinfo.value.errors == {"description": "Description is required"}


def test_form_option_lists():
    assert status_options() == [("open", "Open"), ("in_progress", "In Progress"), ("closed", "Closed")]
    assert [value for value, _ in priority_options()] == ["low", "medium", "high", "urgent"]
