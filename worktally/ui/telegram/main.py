from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from worktally.config import load_settings
from worktally.domain.common.time import to_iso
from worktally.domain.tasks.service import TaskService
from worktally.infra.clock.system_clock import SystemClock
from worktally.infra.db.connection import Database
from worktally.infra.db.repo.tasks_sqlite import TasksSqliteRepo
from worktally.infra.db.schema_version import apply_migrations
from worktally.infra.ids.uuid_gen import UuidGenerator

from worktally.ui.telegram.handlers.cancel import router as cancel_router
from worktally.ui.telegram.handlers.edit import router as edit_router
from worktally.ui.telegram.handlers.start import router as start_router
from worktally.ui.telegram.handlers.stats import router as stats_router
from worktally.ui.telegram.handlers.tasks import router as tasks_router
from worktally.ui.telegram.middlewares.auth import OwnerOnlyMiddleware
from worktally.ui.telegram.middlewares.di import DIMiddleware

logger = logging.getLogger(__name__)


async def main() -> None:
    settings = load_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - [PID:%(process)d] - %(message)s",
    )
    logger.info("Bot starting - PID: %s", os.getpid())

    repo_root = Path(__file__).resolve().parents[3]  # .../worktally/ui/telegram/main.py -> repo root

    # --- DB path: always absolute, ensure dir exists ---
    db_path = settings.db_path
    if not db_path.is_absolute():
        db_path = repo_root / db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("DB_PATH: %s", db_path)

    db = Database(str(db_path))
    clock = SystemClock()
    ids = UuidGenerator()

    # --- migrations ---
    await apply_migrations(db=db, now_iso=to_iso(clock.now()))

    # --- bot/dispatcher ---
    bot = Bot(
        token=settings.bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )
    dp = Dispatcher()

    # --- services ---
    task_service = TaskService(repo=TasksSqliteRepo(db), clock=clock, ids=ids)

    # --- middlewares ---
    dp.message.middleware(OwnerOnlyMiddleware(settings.owner_telegram_id))
    dp.callback_query.middleware(OwnerOnlyMiddleware(settings.owner_telegram_id))

    dp.message.middleware(DIMiddleware(task_service, clock))
    dp.callback_query.middleware(DIMiddleware(task_service, clock))

    # --- routers ---
    dp.include_router(start_router)
    dp.include_router(cancel_router)
    dp.include_router(tasks_router)
    dp.include_router(edit_router)
    dp.include_router(stats_router)

    logger.info("Starting polling")
    try:
        await dp.start_polling(bot)
    finally:
        await bot.session.close()
        logger.info("Bot shutdown complete - PID: %s", os.getpid())


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
