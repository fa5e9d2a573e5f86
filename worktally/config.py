from dataclasses import dataclass
import logging
import os
from pathlib import Path

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    bot_token: str
    owner_telegram_id: int
    db_path: Path
    log_level: int


def load_settings() -> Settings:
    load_dotenv()

    bot_token = os.getenv("BOT_TOKEN", "").strip()
    owner_raw = os.getenv("OWNER_TELEGRAM_ID", "0").strip() or "0"
    db_raw = os.getenv("DB_PATH", "data/worktally.db").strip()
    level_raw = os.getenv("LOG_LEVEL", "INFO").strip().upper()

    if not bot_token:
        raise RuntimeError("BOT_TOKEN missing in .env")
    try:
        owner_id = int(owner_raw)
    except ValueError:
        owner_id = 0
    if owner_id <= 0:
        raise RuntimeError("OWNER_TELEGRAM_ID missing/invalid in .env")

    level = logging.getLevelName(level_raw)
    if not isinstance(level, int):
        raise RuntimeError(f"LOG_LEVEL {level_raw!r} is not a logging level")

    # db_path may be relative; main.py resolves it against the repo root
    return Settings(
        bot_token=bot_token,
        owner_telegram_id=owner_id,
        db_path=Path(db_raw),
        log_level=level,
    )
