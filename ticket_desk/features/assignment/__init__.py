"""Assignment feature module: auto-assign tickets to the first agent who replies."""

from ticket_desk.features.assignment.workflow import (
    assign_on_reply,
    create_comment_with_assignment,
    should_auto_assign,
)

__all__ = [
    "assign_on_reply",
    "create_comment_with_assignment",
    "should_auto_assign",
]
