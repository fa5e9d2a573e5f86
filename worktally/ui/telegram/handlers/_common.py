from __future__ import annotations

from typing import Optional, Tuple

from aiogram.types import Message


def command_args(message: Message) -> str:
    text = (message.text or "").strip()
    if not text:
        return ""
    parts = text.split(maxsplit=1)
    if len(parts) < 2:
        return ""
    return parts[1].strip()


def split_id_and_rest(args: str) -> Tuple[Optional[str], str]:
    """'<id> rest of text' -> ('<id>', 'rest of text')."""
    parts = args.split(maxsplit=1)
    if not parts:
        return None, ""
    return parts[0], parts[1].strip() if len(parts) > 1 else ""


def parse_minutes(raw: str) -> int:
    """Whole minutes -> seconds. Raises ValueError on anything else."""
    raw = (raw or "").strip()
    if not raw.isdigit():
        raise ValueError("minutes must be a non-negative whole number")
    return int(raw) * 60


def parse_tags(raw: str) -> Tuple[str, ...]:
    raw = (raw or "").strip()
    if raw == "-":
        return ()
    return tuple(t.strip() for t in raw.split(",") if t.strip())
