"""Mapping raw tabular-backend rows into Ticket, Comment, and User models."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict
from datetime import datetime
from typing import Any

import pandas as pd
import pytz

from .config import DEFAULT_PRIORITY
from .models import Comment, Ticket, User
from .status import normalize_role

TICKET_COLUMNS = (
    "id",
    "title",
    "description",
    "status",
    "priority",
    "requester_id",
    "assigned_to_id",
    "category_id",
    "created_at",
    "updated_at",
)


def utc_now() -> datetime:
    return datetime.now(pytz.UTC)


def parse_dt(val) -> datetime | None:
    if val is None or val == "":
        return None
    ts = pd.to_datetime(val, utc=True, errors="coerce")
    if ts is None or pd.isna(ts):
        return None
    return ts.to_pydatetime()


def unwrap_resource(payload: Any) -> list[dict[str, Any]]:
    """Return the row list from a ``{"resource": [...]}`` envelope.

    A bare list passes through; a bare row becomes a one-element list.
    """
    if payload is None:
        return []
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and "resource" in payload:
        return list(payload.get("resource") or [])
    return [payload]


def normalize_ticket(raw: dict[str, Any], now: datetime | None = None) -> Ticket:
    now = now or utc_now()
    created = parse_dt(raw.get("created_at"))
    updated = parse_dt(raw.get("updated_at"))
    created_at = created or now
    return Ticket(
        id=raw.get("id"),
        title=raw.get("title"),
        description=raw.get("description"),
        status=raw.get("status"),
        priority=raw.get("priority") or DEFAULT_PRIORITY,
        requester_id=raw.get("requester_id"),
        assigned_to_id=raw.get("assigned_to_id"),
        category_id=raw.get("category_id"),
        created_at=created_at,
        updated_at=updated or created or now,
    )


def normalize_comment(raw: dict[str, Any], now: datetime | None = None) -> Comment:
    return Comment(
        id=raw.get("id"),
        ticket_id=raw.get("ticket_id"),
        user_id=raw.get("user_id"),
        comment=raw.get("comment"),
        created_at=parse_dt(raw.get("created_at")) or now or utc_now(),
    )


def normalize_user(raw: dict[str, Any]) -> User:
    return User(
        id=raw.get("id"),
        name=raw.get("name"),
        email=raw.get("email"),
        role=normalize_role(raw.get("role")),
        department=raw.get("department"),
        avatar=raw.get("avatar"),
        created_at=parse_dt(raw.get("created_at")),
    )


def tickets_to_dataframe(tickets: Iterable[Ticket]) -> pd.DataFrame:
    rows = [asdict(t) for t in tickets]
    if not rows:
        return pd.DataFrame(columns=list(TICKET_COLUMNS))
    df = pd.DataFrame(rows, columns=list(TICKET_COLUMNS))
    df["priority"] = df["priority"].fillna(DEFAULT_PRIORITY)
    df["updated_at"] = pd.to_datetime(df["updated_at"], utc=True, errors="coerce")
    return df.sort_values(by="updated_at", ascending=False, na_position="last", kind="stable")
