from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    bot_token: str
    timezone: str
    db_path: Path
    log_level: int = logging.INFO
    # empty: every Telegram user may sign in
    allowed_user_ids: frozenset[int] = field(default_factory=frozenset)


def _parse_user_ids(raw: str) -> frozenset[int]:
    ids = set()
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            ids.add(int(part))
        except ValueError:
            raise RuntimeError(f"ALLOWED_USER_IDS contains an invalid id: {part!r}") from None
    return frozenset(ids)


def _parse_log_level(raw: str) -> int:
    level = logging.getLevelName(raw.upper())
    if not isinstance(level, int):
        raise RuntimeError(f"LOG_LEVEL {raw!r} is not a logging level")
    return level


def load_settings(dotenv: bool = True) -> Settings:
    if dotenv:
        load_dotenv()

    bot_token = os.getenv("BOT_TOKEN", "").strip()
    tz = os.getenv("TZ", "Europe/Helsinki").strip() or "Europe/Helsinki"
    db_raw = os.getenv("DB_PATH", "data/tasktimer.db").strip() or "data/tasktimer.db"

    if not bot_token:
        raise RuntimeError("BOT_TOKEN missing in .env")

    return Settings(
        bot_token=bot_token,
        timezone=tz,
        db_path=Path(db_raw),
        log_level=_parse_log_level(os.getenv("LOG_LEVEL", "INFO").strip() or "INFO"),
        allowed_user_ids=_parse_user_ids(os.getenv("ALLOWED_USER_IDS", "")),
    )
