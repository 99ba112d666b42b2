"""Domain data models for tickets, comments, and users."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class Role(str, Enum):
    ADMIN = "admin"
    AGENT = "agent"
    REQUESTER = "requester"


@dataclass(slots=True)
class Ticket:
    id: Any
    title: str | None
    description: str | None
    status: str | None
    requester_id: Any
    created_at: datetime
    updated_at: datetime
    priority: str = "medium"
    assigned_to_id: Any = None
    category_id: Any = None


@dataclass(slots=True)
class Comment:
    id: Any
    ticket_id: Any
    user_id: Any
    comment: str | None
    created_at: datetime


@dataclass(slots=True)
class User:
    id: Any
    name: str | None
    email: str | None
    role: Role
    department: str | None = None
    avatar: str | None = None
    created_at: datetime | None = None
