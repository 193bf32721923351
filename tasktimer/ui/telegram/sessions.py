from __future__ import annotations

from aiogram.types import User

from tasktimer.domain.tasks.models import Principal
from tasktimer.domain.tasks.service import TaskService
from tasktimer.domain.tasks.session import IdentityHub, TaskSession


def principal_from_user(user: User) -> Principal:
    return Principal(user_id=str(user.id), display_name=user.full_name or None, avatar_url=None)


class SessionRegistry:
    """One identity hub and one task session per Telegram user, created lazily."""

    def __init__(self, service: TaskService) -> None:
        self._service = service
        self._entries: dict[int, tuple[IdentityHub, TaskSession]] = {}

    def _entry(self, telegram_user_id: int) -> tuple[IdentityHub, TaskSession]:
        entry = self._entries.get(telegram_user_id)
        if entry is None:
            hub = IdentityHub()
            session = TaskSession(self._service)
            hub.subscribe(session)
            entry = (hub, session)
            self._entries[telegram_user_id] = entry
        return entry

    def hub_for(self, telegram_user_id: int) -> IdentityHub:
        return self._entry(telegram_user_id)[0]

    def session_for(self, telegram_user_id: int) -> TaskSession:
        return self._entry(telegram_user_id)[1]
