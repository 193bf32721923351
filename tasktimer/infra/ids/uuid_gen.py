from __future__ import annotations

import uuid

from tasktimer.domain.tasks.ports import IdGenerator


class UuidGenerator(IdGenerator):
    def new_id(self) -> str:
        # hex keeps callback_data short enough for Telegram
        return uuid.uuid4().hex
