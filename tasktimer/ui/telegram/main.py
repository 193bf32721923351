from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.exceptions import TelegramBadRequest
from aiogram.filters import ExceptionTypeFilter
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.types import ErrorEvent

from tasktimer.config import Settings, load_settings
from tasktimer.domain.common.time import to_iso
from tasktimer.domain.tasks.service import TaskService
from tasktimer.infra.clock.system_clock import SystemClock
from tasktimer.infra.db.connection import Database
from tasktimer.infra.db.repo.tasks_sqlite import TasksSqliteRepo
from tasktimer.infra.db.schema_version import apply_migrations
from tasktimer.infra.ids.uuid_gen import UuidGenerator
from tasktimer.ui.telegram.handlers.start import router as start_router
from tasktimer.ui.telegram.handlers.summary import router as summary_router
from tasktimer.ui.telegram.handlers.tasks import router as tasks_router
from tasktimer.ui.telegram.middlewares.auth import AllowListMiddleware
from tasktimer.ui.telegram.middlewares.di import DIMiddleware
from tasktimer.ui.telegram.sessions import SessionRegistry

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - [PID:%(process)d] - %(message)s",
    )


async def build_service(settings: Settings, clock: SystemClock) -> TaskService:
    # --- DB path: one place, always absolute, ensure dir exists ---
    db_path = settings.db_path
    if not db_path.is_absolute():
        db_path = Path.cwd() / db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("DB_PATH: %s", db_path)

    db = Database(str(db_path))
    await apply_migrations(db=db, now_iso=to_iso(clock.now()))

    return TaskService(repo=TasksSqliteRepo(db), clock=clock, ids=UuidGenerator())


def build_dispatcher(settings: Settings, registry: SessionRegistry, clock: SystemClock) -> Dispatcher:
    dp = Dispatcher(storage=MemoryStorage())

    # --- middlewares ---
    for observer in (dp.message, dp.callback_query):
        observer.middleware(AllowListMiddleware(settings.allowed_user_ids))
        observer.middleware(DIMiddleware(registry, clock))

    # --- routers ---
    # summary before tasks: commands must win over the "waiting for task text" state
    dp.include_router(start_router)
    dp.include_router(summary_router)
    dp.include_router(tasks_router)

    @dp.error(ExceptionTypeFilter(TelegramBadRequest))
    async def handle_old_callback_query(event: ErrorEvent) -> None:
        """Ignore TelegramBadRequest for old/invalid callback queries (e.g. after bot restart)."""
        msg = str(event.exception).lower()
        if "query is too old" in msg or "query id is invalid" in msg:
            logger.debug("Ignoring old/invalid callback query: %s", event.exception)
            return
        raise event.exception

    return dp


async def main() -> None:
    settings = load_settings()
    configure_logging(settings)

    pid = os.getpid()
    logger.info("Bot starting - PID: %s", pid)

    clock = SystemClock(settings.timezone)
    service = await build_service(settings, clock)
    registry = SessionRegistry(service)

    bot = Bot(
        token=settings.bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )
    dp = build_dispatcher(settings, registry, clock)

    logger.info("Starting polling - PID: %s", pid)
    try:
        await dp.start_polling(bot)
    finally:
        await bot.session.close()
        logger.info("Bot shutdown complete - PID: %s", pid)


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
