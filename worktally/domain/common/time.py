from __future__ import annotations

from datetime import date, datetime, timezone


def ensure_aware(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    return dt


def to_iso(dt: datetime) -> str:
    ensure_aware(dt)
    # store as ISO 8601 in UTC so lexical order matches time order
    return dt.astimezone(timezone.utc).isoformat()


def from_iso(s: str) -> datetime:
    return datetime.fromisoformat(s)


def utc_date(dt: datetime) -> date:
    return ensure_aware(dt).astimezone(timezone.utc).date()


def utc_label(dt: datetime, fmt: str) -> str:
    return ensure_aware(dt).astimezone(timezone.utc).strftime(fmt)
