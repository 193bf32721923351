from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject

from tasktimer.infra.clock.system_clock import SystemClock
from tasktimer.ui.telegram.sessions import SessionRegistry


class DIMiddleware(BaseMiddleware):
    """
    Inject dependencies to handlers via `data` dict.

    Handlers can request args by name, e.g.
      async def handler(message: Message, session: TaskSession, hub: IdentityHub, clock: SystemClock): ...
    """

    def __init__(self, registry: SessionRegistry, clock: SystemClock) -> None:
        self._registry = registry
        self._clock = clock

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        # keep names stable across the project
        data["clock"] = self._clock
        data["tz"] = self._clock.tz

        user = getattr(event, "from_user", None)
        if user is not None:
            data["session"] = self._registry.session_for(user.id)
            data["hub"] = self._registry.hub_for(user.id)

        return await handler(event, data)
