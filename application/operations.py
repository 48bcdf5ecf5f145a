"""Batch operations behind the CLI commands.

Every operation loads what it needs from the store, mutates it, writes it
back and returns what the caller needs for printing. Task numbers are
1-based, as shown to the user.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from core import (
    Clock,
    DoneTask,
    FilterTag,
    OpenTask,
    OpenTaskList,
    TagStyles,
    TaskList,
    TaskNotFoundError,
    TaskNumberError,
    matches_all,
    now,
    unique_task_id,
)
from application.ports import SessionDriver, TaskStore
from application.session import Outcome, run_session

logger = logging.getLogger("ivly.operations")


def task_index(tasks: TaskList, num: int) -> int:
    if not 1 <= num <= len(tasks):
        raise TaskNumberError(num, len(tasks))
    return num - 1


def add_task(
    store: TaskStore,
    description: str,
    note: Optional[str] = None,
    tags: Iterable[str] = (),
    clock: Clock = now,
) -> Tuple[int, OpenTask]:
    tasks = store.load_open_list()
    taken = tasks.ids() + store.load_done_list().ids()
    task = OpenTask.new(description, note or "", tags, clock=clock, task_id=unique_task_id(taken))
    tasks.append(task)
    store.save_open_list(tasks)
    logger.debug("added task %s", task.id)
    return len(tasks) - 1, task


def finish_task(store: TaskStore, task_num: Optional[int] = None, clock: Clock = now) -> Tuple[OpenTaskList, OpenTask]:
    """Mark a task finished; without a number, the first unfinished one."""
    tasks = store.load_open_list()
    if task_num is None:
        task_num = (tasks.first_unfinished() or 0) + 1
    task = tasks.finish(task_index(tasks, task_num), clock)
    store.save_open_list(tasks)
    return tasks, task


def sweep(store: TaskStore, clock: Clock = now) -> Tuple[OpenTaskList, List[DoneTask]]:
    """Archive finished open tasks into the done list (most recent first)."""
    open_tasks = store.load_open_list()
    done_tasks = store.load_done_list()
    swept = [task.complete(clock) for task in open_tasks.take_finished()]
    for task in swept:
        done_tasks.append(task)
    done_tasks.sort_recent_first()
    store.save_done_list(done_tasks)
    store.save_open_list(open_tasks)
    return open_tasks, swept


def bump(store: TaskStore, task_nums: Sequence[int]) -> Tuple[OpenTaskList, List[OpenTask]]:
    """Send tasks to the end of the list.

    Numbers refer to positions before any bump; they are applied from the
    highest down so earlier bumps do not shift later ones.
    """
    tasks = store.load_open_list()
    bumped: List[OpenTask] = []
    for num in sorted(set(task_nums), reverse=True):
        task = tasks.remove_at(task_index(tasks, num))
        tasks.append(task)
        bumped.append(task)
    store.save_open_list(tasks)
    return tasks, bumped


def move_task(store: TaskStore, task_num: int, insert_before: int) -> Tuple[OpenTask, Optional[OpenTask]]:
    """Move a task in front of another; returns the moved task and its new successor."""
    tasks = store.load_open_list()
    from_ = task_index(tasks, task_num)
    before = task_index(tasks, insert_before)
    target = tasks.reposition(from_, before)
    store.save_open_list(tasks)
    successor = tasks[target + 1] if target + 1 < len(tasks) else None
    return tasks[target], successor


def _apply_edit(task, description: Optional[str], note: Optional[str], tags: Sequence[FilterTag]) -> None:
    if description is not None:
        task.description = description
    if note is not None:
        task.note = note
    for tag in tags:
        if tag.negated:
            task.remove_tag(tag.name)
        else:
            task.add_tag(tag.name)


def edit_task(
    store: TaskStore,
    task_id: str,
    description: Optional[str] = None,
    note: Optional[str] = None,
    tags: Sequence[FilterTag] = (),
) -> str:
    """Edit an open or done task by id; returns which list held it."""
    open_tasks = store.load_open_list()
    task = open_tasks.find(task_id)
    if task is not None:
        _apply_edit(task, description, note, tags)
        store.save_open_list(open_tasks)
        return "open"
    done_tasks = store.load_done_list()
    done = done_tasks.find(task_id)
    if done is not None:
        _apply_edit(done, description, note, tags)
        store.save_done_list(done_tasks)
        return "done"
    raise TaskNotFoundError(task_id)


def remove_task(store: TaskStore, task_id: str) -> str:
    """Delete a task from whichever list holds it; returns that list's name."""
    open_tasks = store.load_open_list()
    if open_tasks.remove_id(task_id):
        store.save_open_list(open_tasks)
        return "open"
    done_tasks = store.load_done_list()
    if done_tasks.remove_id(task_id):
        store.save_done_list(done_tasks)
        return "done"
    raise TaskNotFoundError(task_id, f"task `{task_id}` not found in todo or done task lists")


def set_tag_style(store: TaskStore, tag: str, fg: Optional[str] = None, bg: Optional[str] = None) -> TagStyles:
    styles = store.load_tag_styles()
    if fg:
        styles.set_fg(tag, fg)
    if bg:
        styles.set_bg(tag, bg)
    store.save_tag_styles(styles)
    return styles


def filter_tasks(tasks: TaskList, filters: Sequence[FilterTag]) -> List[Tuple[int, object]]:
    """Tasks passing every filter, paired with their position in the full list."""
    return [(i, task) for i, task in enumerate(tasks) if matches_all(filters, task.tags)]


def interactive_edit(store: TaskStore, driver: SessionDriver, clock: Clock = now) -> Outcome:
    """Run the reorder/edit session and persist the open list only on save."""
    tasks = store.load_open_list()
    outcome = run_session(tasks, driver, clock=clock, reserved_ids=store.load_done_list().ids())
    if outcome is Outcome.SAVE:
        store.save_open_list(tasks)
    return outcome


__all__ = [
    "task_index",
    "add_task",
    "finish_task",
    "sweep",
    "bump",
    "move_task",
    "edit_task",
    "remove_task",
    "set_tag_style",
    "filter_tasks",
    "interactive_edit",
]
