from __future__ import annotations

from typing import Iterable, Tuple

from worktally.domain.common.errors import ValidationError

MAX_TITLE_LEN = 200
MAX_BODY_LEN = 2000
MAX_TAG_LEN = 50


def validate_title(title: str) -> None:
    if not title or not title.strip():
        raise ValidationError("Title is required.")
    if len(title.strip()) > MAX_TITLE_LEN:
        raise ValidationError(f"Title is too long (max {MAX_TITLE_LEN} chars).")


def validate_body(body: str) -> None:
    if not body or not body.strip():
        raise ValidationError("Body is required.")
    if len(body.strip()) > MAX_BODY_LEN:
        raise ValidationError(f"Body is too long (max {MAX_BODY_LEN} chars).")


def validate_seconds(value: int, what: str = "Duration") -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{what} must be a whole number of seconds.")
    if value < 0:
        raise ValidationError(f"{what} cannot be negative.")


def validate_tag(tag: str) -> str:
    cleaned = (tag or "").strip()
    if not cleaned:
        raise ValidationError("Tag cannot be blank.")
    if len(cleaned) > MAX_TAG_LEN:
        raise ValidationError(f"Tag is too long (max {MAX_TAG_LEN} chars).")
    return cleaned


def clean_tags(tags: Iterable[str]) -> Tuple[str, ...]:
    """Trim tags and drop blank ones, keeping order and duplicates."""
    return tuple(t.strip() for t in tags if t and t.strip())
