"""
Task ordering engine.

Keeps a priority-aware total order over a project's daily tasks:

- Pending tasks (anything not done, missed included) display by
  (importance desc, order asc) within a day.
- Done tasks display after all pending ones, by order desc, so the most
  recently completed task comes first.

Inserting a task assigns one new order value and leaves its neighbours
alone. Only when two neighbouring order values leave no integer between
them is the day's pending group renumbered (see rebalance_peers).

Every function takes the current task sequence and returns a new tuple;
unknown ids are a no-op and return the input unchanged.
"""

import uuid
from dataclasses import fields, replace
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Sequence

from stride.models.enums import TaskStatus
from stride.services.snapshots import TaskSnapshot
from stride.services.week import epoch_millis
from stride.logging_config import get_logger

logger = get_logger(__name__)

# Spacing used when a day's pending tasks are renumbered
ORDER_STEP = 1024

IMMUTABLE_FIELDS = frozenset({"id", "project_id"})
UPDATABLE_FIELDS = frozenset(f.name for f in fields(TaskSnapshot)) - IMMUTABLE_FIELDS


def pending_sort_key(task: TaskSnapshot) -> tuple[int, int]:
    return (-task.importance, task.order)


def sort_for_display(tasks: Iterable[TaskSnapshot]) -> list[TaskSnapshot]:
    """
    Canonical display order for a project's task list.

    Pending tasks grouped by day, each day by (importance desc, order
    asc); then done tasks by order desc.
    """
    tasks = list(tasks)
    pending = sorted(
        (t for t in tasks if not t.is_done),
        key=lambda t: (t.scheduled_date, -t.importance, t.order),
    )
    done = sorted((t for t in tasks if t.is_done), key=lambda t: -t.order)
    return pending + done


def find_task(tasks: Iterable[TaskSnapshot], task_id: uuid.UUID) -> TaskSnapshot | None:
    return next((t for t in tasks if t.id == task_id), None)


def insertion_index(peers: Sequence[TaskSnapshot], importance: int) -> int:
    """
    Position for a new task among peers sorted by pending_sort_key.

    The new task goes after every peer of equal or higher importance,
    i.e. before the first peer that is strictly less important.
    """
    for index, peer in enumerate(peers):
        if peer.importance < importance:
            return index
    return len(peers)


def order_for_slot(
    peers: Sequence[TaskSnapshot],
    index: int,
    now: date | datetime,
) -> int | None:
    """
    Order value for a task placed at peers[index].

    Returns None when the neighbours at index-1 and index have no free
    integer strictly between them.
    """
    if not peers:
        return epoch_millis(now)
    if index == 0:
        return peers[0].order - 1
    if index == len(peers):
        return peers[-1].order + 1

    before = peers[index - 1].order
    after = peers[index].order
    middle = (before + after) // 2
    if before < middle < after:
        return middle
    return None


def rebalance_peers(peers: Sequence[TaskSnapshot]) -> list[TaskSnapshot]:
    """Renumber peers (already in display order) to evenly spaced orders."""
    return [replace(peer, order=index * ORDER_STEP) for index, peer in enumerate(peers)]


def insert_task(
    tasks: Sequence[TaskSnapshot],
    task: TaskSnapshot,
    now: date | datetime,
) -> tuple[TaskSnapshot, ...]:
    """
    Add a task, giving it an order that ranks it correctly on its day.

    Among the pending tasks sharing its date the new task lands after
    its equal-importance run and before the first less important task.

    Returns other-day pending tasks, then the new task's day in display
    order, then done tasks.
    """
    pending = [t for t in tasks if not t.is_done]
    done = [t for t in tasks if t.is_done]

    peers = sorted(
        (t for t in pending if t.scheduled_date == task.scheduled_date),
        key=pending_sort_key,
    )
    other_days = [t for t in pending if t.scheduled_date != task.scheduled_date]

    index = insertion_index(peers, task.importance)
    order = order_for_slot(peers, index, now)
    if order is None:
        logger.debug(
            f"No free order between {peers[index - 1].order} and {peers[index].order} "
            f"on {task.scheduled_date}; renumbering {len(peers)} tasks"
        )
        peers = rebalance_peers(peers)
        order = order_for_slot(peers, index, now)

    placed = replace(task, order=order)
    peers.insert(index, placed)

    logger.debug(
        f"Inserted task {task.id} on {task.scheduled_date} at position {index} "
        f"(importance={task.importance}, order={order})"
    )

    return tuple(other_days + peers + done)


def toggle_task(
    tasks: Sequence[TaskSnapshot],
    task_id: uuid.UUID,
    now: date | datetime,
) -> tuple[TaskSnapshot, ...]:
    """
    Flip a task between done and not done.

    Completing a task moves its order past every other order in the
    list so it heads the done list. Reopening it puts it ahead of the
    other pending tasks on its day (within its importance level).
    A missed task counts as not done; completing it marks it done.
    """
    target = find_task(tasks, task_id)
    if target is None:
        return tuple(tasks)

    now_millis = epoch_millis(now)
    if target.is_done:
        day_orders = [
            t.order for t in tasks
            if not t.is_done and t.id != task_id and t.scheduled_date == target.scheduled_date
        ]
        order = min(day_orders) - 1 if day_orders else now_millis
        updated = replace(target, status=TaskStatus.PENDING, order=order)
    else:
        other_orders = [t.order for t in tasks if t.id != task_id]
        order = max(now_millis, max(other_orders) + 1) if other_orders else now_millis
        updated = replace(target, status=TaskStatus.DONE, order=order)

    return tuple(updated if t.id == task_id else t for t in tasks)


def reorder_tasks(
    tasks: Sequence[TaskSnapshot],
    ordered_ids: Sequence[uuid.UUID],
) -> tuple[TaskSnapshot, ...]:
    """
    Renumber tasks to match a caller-supplied ordering (e.g. after a drag).

    Named pending tasks get their zero-based position among the named
    pending ids. Done tasks display by descending order, so named done
    tasks are numbered from the top down. Unknown and repeated ids are
    skipped and tasks not named keep their order.
    """
    done = {t.id: t.is_done for t in tasks}
    resolved = [task_id for task_id in dict.fromkeys(ordered_ids) if task_id in done]
    pending_ids = [task_id for task_id in resolved if not done[task_id]]
    done_ids = [task_id for task_id in resolved if done[task_id]]

    positions = {task_id: index for index, task_id in enumerate(pending_ids)}
    positions.update(
        (task_id, len(done_ids) - 1 - index) for index, task_id in enumerate(done_ids)
    )

    return tuple(
        replace(t, order=positions[t.id]) if t.id in positions else t
        for t in tasks
    )


def update_task(
    tasks: Sequence[TaskSnapshot],
    task_id: uuid.UUID,
    changes: Mapping[str, Any],
) -> tuple[TaskSnapshot, ...]:
    """Merge partial field changes into one task. id and project_id never change."""
    target = find_task(tasks, task_id)
    if target is None:
        return tuple(tasks)

    applicable = {key: value for key, value in changes.items() if key in UPDATABLE_FIELDS}
    updated = replace(target, **applicable)
    return tuple(updated if t.id == task_id else t for t in tasks)


def delete_task(
    tasks: Sequence[TaskSnapshot],
    task_id: uuid.UUID,
) -> tuple[TaskSnapshot, ...]:
    return tuple(t for t in tasks if t.id != task_id)
