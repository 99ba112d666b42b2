"""Central configuration, constants, and backend connection settings."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

# =============================================================================
# Backend Connection Settings
# =============================================================================
DEFAULT_DB_SERVICE = "pgsqlTDAtest"
DEFAULT_TICKETS_TABLE = "tickets"
DEFAULT_COMMENTS_TABLE = "ticket_comments"
DEFAULT_USERS_TABLE = "users"

API_KEY_HEADER = "X-DreamFactory-Api-Key"
WRITE_METHODS: frozenset[str] = frozenset({"POST", "PUT", "PATCH"})

# Environment variable names (a local .env file is honoured)
ENV_BASE_URL = "TICKETDESK_API_BASE_URL"
ENV_API_KEY = "TICKETDESK_API_KEY"
ENV_DB_SERVICE = "TICKETDESK_DB_SERVICE"
ENV_TICKETS_TABLE = "TICKETDESK_TICKETS_TABLE"
ENV_COMMENTS_TABLE = "TICKETDESK_COMMENTS_TABLE"
ENV_USERS_TABLE = "TICKETDESK_USERS_TABLE"

SETTINGS_FILE_NAME = "ticket_desk.yaml"

# =============================================================================
# Ticket Workflow Configuration
# =============================================================================
STATUS_OPEN = "open"
STATUS_IN_PROGRESS = "in_progress"
STATUS_CLOSED = "closed"

# Canonical display order for status options
STATUS_DISPLAY_ORDER: Sequence[str] = (STATUS_OPEN, STATUS_IN_PROGRESS, STATUS_CLOSED)

# "Open" views fold in-progress tickets into the open bucket for every role
OPEN_STATUSES: frozenset[str] = frozenset({STATUS_OPEN, STATUS_IN_PROGRESS})

STATUS_LABELS: dict[str, str] = {
    STATUS_OPEN: "Open",
    STATUS_IN_PROGRESS: "In Progress",
    STATUS_CLOSED: "Closed",
}

# =============================================================================
# Priority Configuration
# =============================================================================
DEFAULT_PRIORITY = "medium"

PRIORITY_DISPLAY_ORDER: Sequence[str] = ("low", "medium", "high", "urgent")

PRIORITY_LABELS: dict[str, str] = {
    "low": "Low",
    "medium": "Medium",
    "high": "High",
    "urgent": "Urgent",
}

# =============================================================================
# Named Ticket Filters
# =============================================================================
FILTER_ALL = "all"
FILTER_OPEN = "open"
FILTER_CLOSED = "closed"
FILTER_MY_OPEN = "my_open"
FILTER_MY_CLOSED = "my_closed"
FILTER_MY_ASSIGNED = "my_assigned"

# =============================================================================
# Form Validation
# =============================================================================
MIN_TITLE_LENGTH: int = 3
MIN_DESCRIPTION_LENGTH: int = 10

# =============================================================================
# Session Defaults
# =============================================================================
# Demo identity selected on startup when present in the users table
DEFAULT_USER_ID: int = 2


@dataclass(slots=True)
class BackendSettings:
    base_url: str | None = None
    api_key: str | None = None
    db_service: str = DEFAULT_DB_SERVICE
    tickets_table: str = DEFAULT_TICKETS_TABLE
    comments_table: str = DEFAULT_COMMENTS_TABLE
    users_table: str = DEFAULT_USERS_TABLE


def _load_settings_file(path: str | Path | None) -> dict[str, Any]:
    yaml_path = Path(path) if path else Path.cwd() / SETTINGS_FILE_NAME
    if not yaml_path.exists():
        return {}
    data = yaml.safe_load(yaml_path.read_text()) or {}
    backend = data.get("backend", data)
    return backend if isinstance(backend, dict) else {}


def load_settings(
    settings_file: str | Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
    **overrides: Any,
) -> BackendSettings:
    """Resolve backend settings.

    Precedence, highest first: keyword overrides, environment variables
    (after loading a ``.env`` file), the optional YAML settings file, and
    built-in defaults. Missing base URL or API key are left as ``None``; the
    transport raises ``ConfigError`` when a request is attempted.
    """
    if env is None:
        load_dotenv()
        env = os.environ
    file_values = _load_settings_file(settings_file)

    def pick(key: str, env_name: str, default: str | None) -> str | None:
        if overrides.get(key) is not None:
            return overrides[key]
        if env.get(env_name):
            return env[env_name]
        if file_values.get(key):
            return str(file_values[key])
        return default

    return BackendSettings(
        base_url=pick("base_url", ENV_BASE_URL, None),
        api_key=pick("api_key", ENV_API_KEY, None),
        db_service=pick("db_service", ENV_DB_SERVICE, DEFAULT_DB_SERVICE),
        tickets_table=pick("tickets_table", ENV_TICKETS_TABLE, DEFAULT_TICKETS_TABLE),
        comments_table=pick("comments_table", ENV_COMMENTS_TABLE, DEFAULT_COMMENTS_TABLE),
        users_table=pick("users_table", ENV_USERS_TABLE, DEFAULT_USERS_TABLE),
    )
