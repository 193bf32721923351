from __future__ import annotations

from typing import Optional

from tasktimer.domain.common.errors import InvalidInputError


def validate_owner(owner_id: Optional[str]) -> str:
    if owner_id is None or not str(owner_id).strip():
        raise InvalidInputError("Owner is required.")
    return str(owner_id)


def clean_text(text: Optional[str]) -> str:
    cleaned = (text or "").strip()
    if not cleaned:
        raise InvalidInputError("Task text is required.")
    return cleaned
