"""Tag membership helpers over a task list."""
from __future__ import annotations

from collections import Counter
from typing import Dict, List, Sequence

from worktally.domain.tasks.models import Task


def task_tag_set(task: Task) -> frozenset:
    return frozenset(t.strip() for t in task.tags if t and t.strip())


def count_tags(tasks: Sequence[Task]) -> Dict[str, int]:
    """Number of tasks carrying each tag, keyed in ascending tag order.

    A tag repeated on one task counts once for that task.
    """
    counts: Counter = Counter()
    for task in tasks:
        counts.update(task_tag_set(task))
    return {tag: counts[tag] for tag in sorted(counts)}


def tasks_with_tag(tasks: Sequence[Task], tag: str) -> List[Task]:
    wanted = tag.strip()
    return [task for task in tasks if wanted in task_tag_set(task)]


def shared_tags(tasks: Sequence[Task], min_tasks: int = 2) -> List[str]:
    return [tag for tag, n in count_tags(tasks).items() if n >= min_tasks]
