from __future__ import annotations

import json
from typing import Any, List, Optional, Sequence

from worktally.domain.common.errors import NotFoundError, StaleTaskError
from worktally.domain.common.time import from_iso, to_iso
from worktally.domain.tasks.models import Task, TaskOrder
from worktally.domain.tasks.ports import TaskRepository
from worktally.infra.db.connection import Database

_ORDER_SQL = {
    TaskOrder.CREATED_DESC: "created_at DESC, rowid DESC",
    TaskOrder.UPDATED_ASC: "updated_at ASC, rowid ASC",
}


class TasksSqliteRepo(TaskRepository):
    def __init__(self, db: Database) -> None:
        self._db = db

    async def ensure_user(self, owner_id: int, now_iso: str) -> None:
        row = await self._db.fetchone("SELECT user_id FROM users WHERE user_id = ?;", (owner_id,))
        if row:
            await self._db.execute("UPDATE users SET last_seen_at = ? WHERE user_id = ?;", (now_iso, owner_id))
            return
        await self._db.execute(
            "INSERT INTO users(user_id, created_at, last_seen_at) VALUES (?, ?, ?);",
            (owner_id, now_iso, now_iso),
        )

    async def get(self, task_id: str) -> Optional[Task]:
        row = await self._db.fetchone("SELECT * FROM tasks WHERE task_id = ?;", (task_id,))
        return self._row_to_task(row) if row else None

    async def list_by_owner(
        self,
        owner_id: int,
        finished: Optional[bool] = None,
        tag: Optional[str] = None,
        order: TaskOrder = TaskOrder.CREATED_DESC,
    ) -> Sequence[Task]:
        where = ["owner_id = ?"]
        params: List[Any] = [owner_id]
        if finished is not None:
            where.append("is_finished = ?")
            params.append(1 if finished else 0)
        if tag:
            where.append("EXISTS (SELECT 1 FROM json_each(tasks.tags_json) WHERE trim(json_each.value) = ?)")
            params.append(tag.strip())

        rows = await self._db.fetchall(
            f"SELECT * FROM tasks WHERE {' AND '.join(where)} ORDER BY {_ORDER_SQL[order]};",
            params,
        )
        return [self._row_to_task(r) for r in rows]

    async def add(self, task: Task) -> None:
        await self._db.execute(
            """
            INSERT INTO tasks(
              task_id, owner_id, title, body, created_at, updated_at,
              last_work_start_at, exp_duration, worked_time, is_finished, tags_json, version
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?);
            """,
            (
                task.task_id,
                task.owner_id,
                task.title,
                task.body,
                to_iso(task.created_at),
                to_iso(task.updated_at),
                to_iso(task.last_work_start_at) if task.last_work_start_at else None,
                task.exp_duration,
                task.worked_time,
                1 if task.is_finished else 0,
                json.dumps(list(task.tags), ensure_ascii=False),
                task.version,
            ),
        )

    async def update(self, task: Task, expected_version: int) -> None:
        changed = await self._db.execute(
            """
            UPDATE tasks
            SET title = ?,
                body = ?,
                updated_at = ?,
                last_work_start_at = ?,
                exp_duration = ?,
                worked_time = ?,
                is_finished = ?,
                tags_json = ?,
                version = version + 1
            WHERE task_id = ? AND version = ?;
            """,
            (
                task.title,
                task.body,
                to_iso(task.updated_at),
                to_iso(task.last_work_start_at) if task.last_work_start_at else None,
                task.exp_duration,
                task.worked_time,
                1 if task.is_finished else 0,
                json.dumps(list(task.tags), ensure_ascii=False),
                task.task_id,
                expected_version,
            ),
        )
        if changed:
            return
        if await self.get(task.task_id) is None:
            raise NotFoundError(f"Task {task.task_id} not found.")
        raise StaleTaskError("Task was changed meanwhile, reload and try again.")

    async def delete(self, task_id: str) -> bool:
        return await self._db.execute("DELETE FROM tasks WHERE task_id = ?;", (task_id,)) > 0

    def _row_to_task(self, row) -> Task:
        tags_raw = row["tags_json"]
        return Task(
            task_id=row["task_id"],
            owner_id=row["owner_id"],
            title=row["title"],
            body=row["body"],
            created_at=from_iso(row["created_at"]),
            updated_at=from_iso(row["updated_at"]),
            last_work_start_at=from_iso(row["last_work_start_at"]) if row["last_work_start_at"] else None,
            exp_duration=int(row["exp_duration"]),
            worked_time=int(row["worked_time"] or 0),
            is_finished=bool(row["is_finished"]),
            tags=tuple(json.loads(tags_raw)) if tags_raw else (),
            version=int(row["version"]),
        )
