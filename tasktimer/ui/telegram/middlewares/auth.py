from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, Iterable

from aiogram import BaseMiddleware
from aiogram.types import CallbackQuery, Message, TelegramObject

logger = logging.getLogger(__name__)


class AllowListMiddleware(BaseMiddleware):
    """Drop updates from users outside ``allowed_ids``; an empty set allows everyone."""

    def __init__(self, allowed_ids: Iterable[int]):
        self._allowed = frozenset(allowed_ids)

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        if not self._allowed:
            return await handler(event, data)

        user = getattr(event, "from_user", None)
        user_id = user.id if user else None

        if user_id not in self._allowed:
            logger.warning("Blocked update from user_id=%s", user_id)
            if isinstance(event, Message):
                await event.answer("Not authorized.")
            elif isinstance(event, CallbackQuery):
                await event.answer("Not authorized.", show_alert=True)
            return None

        return await handler(event, data)
