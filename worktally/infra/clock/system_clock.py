from __future__ import annotations

from datetime import datetime, timezone

from worktally.domain.tasks.ports import Clock


class SystemClock(Clock):
    """UTC wall clock; statistics and day boundaries are computed in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
