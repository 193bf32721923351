"""
Tests for the Done/Delete callback handlers: signed-out users cannot mutate tasks.
"""
from __future__ import annotations

import asyncio
from datetime import timezone
from typing import Optional

from tasktimer.domain.tasks.models import Principal
from tasktimer.ui.telegram.handlers.tasks import task_delete_cb, task_done_cb
from tasktimer.ui.telegram.keyboards.tasks import CB_DELETE, CB_DONE
from tasktimer.ui.telegram.texts import tasks as texts


class SpySession:
    """Stands in for TaskSession and records which mutations were requested."""

    def __init__(self, principal: Optional[Principal]) -> None:
        self.principal = principal
        self.calls: list[tuple[str, str]] = []

    async def complete(self, task_id: str) -> bool:
        self.calls.append(("complete", task_id))
        return True

    async def remove(self, task_id: str) -> bool:
        self.calls.append(("remove", task_id))
        return True


class FakeCallback:
    def __init__(self, data: str) -> None:
        self.data = data
        self.message = None
        self.answers: list[tuple[Optional[str], bool]] = []

    async def answer(self, text: Optional[str] = None, show_alert: bool = False) -> None:
        self.answers.append((text, show_alert))


def test_done_after_logout_is_refused():
    session = SpySession(principal=None)
    cb = FakeCallback(f"{CB_DONE}abc")
    asyncio.run(task_done_cb(cb, session, timezone.utc))
    assert session.calls == []
    assert cb.answers == [(texts.SIGN_IN_PROMPT, True)]


def test_delete_after_logout_is_refused():
    session = SpySession(principal=None)
    cb = FakeCallback(f"{CB_DELETE}abc")
    asyncio.run(task_delete_cb(cb, session, timezone.utc))
    assert session.calls == []
    assert cb.answers == [(texts.SIGN_IN_PROMPT, True)]


def test_signed_in_callbacks_reach_the_session():
    session = SpySession(principal=Principal("42"))
    done, delete = FakeCallback(f"{CB_DONE}a"), FakeCallback(f"{CB_DELETE}b")
    asyncio.run(task_done_cb(done, session, timezone.utc))
    asyncio.run(task_delete_cb(delete, session, timezone.utc))
    assert session.calls == [("complete", "a"), ("remove", "b")]
    assert done.answers == [(None, False)]
    assert delete.answers == [(None, False)]
