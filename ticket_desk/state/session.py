"""Session identity: the swappable current user plus the loaded user directory."""

from __future__ import annotations

from dataclasses import dataclass, field

from ticket_desk.core.config import DEFAULT_USER_ID
from ticket_desk.core.models import Role, User
from ticket_desk.core.repository import TicketRepository


@dataclass(frozen=True, slots=True)
class UserSummary:
    name: str
    role: Role
    department: str | None = None


def pick_default_user(users: list[User]) -> User | None:
    """Prefer the demo user, then the first agent, then anyone."""
    for user in users:
        if user.id == DEFAULT_USER_ID:
            return user
    for user in users:
        if user.role is Role.AGENT:
            return user
    return users[0] if users else None


@dataclass(slots=True)
class Session:
    """Explicit identity value handed to filtering and assignment.

    Holds zero or one current user. Never persisted.
    """

    users: list[User] = field(default_factory=list)
    current_user: User | None = None

    @classmethod
    def load(cls, repo: TicketRepository) -> Session:
        users = repo.list_users()
        return cls(users=users, current_user=pick_default_user(users))

    def switch_user(self, repo: TicketRepository, user_id) -> User:
        user = repo.get_user(user_id)
        self.current_user = user
        return user

    def sign_out(self) -> None:
        self.current_user = None

    def is_agent(self) -> bool:
        return self.current_user is not None and self.current_user.role is Role.AGENT

    def is_admin(self) -> bool:
        return self.current_user is not None and self.current_user.role is Role.ADMIN

    def is_requester(self) -> bool:
        return self.current_user is not None and self.current_user.role is Role.REQUESTER

    def describe_user(self, user_id) -> UserSummary:
        if not user_id:
            return UserSummary(name="Unknown User", role=Role.REQUESTER)
        user = next((u for u in self.users if str(u.id) == str(user_id)), None)
        if user is None:
            return UserSummary(name=f"User #{user_id}", role=Role.REQUESTER)
        return UserSummary(name=user.name or "Unknown User", role=user.role, department=user.department)
