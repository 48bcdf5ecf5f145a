"""Command handlers: ``cmd_<name>(args, deps) -> int``.

Handlers let :class:`core.IvlyError` propagate; ``tasks_app.main`` turns it
into an error line and exit code 1.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from application.operations import (
    add_task,
    bump,
    edit_task,
    filter_tasks,
    finish_task,
    interactive_edit,
    move_task,
    remove_task,
    set_tag_style,
    sweep,
)
from application.ports import SessionDriver, TaskStore
from application.session import Outcome
from core import Clock, IvlyError, OpenTaskList, TagStyles, now, parse_add_tag
from .cli_print import (
    LIST_HEADER,
    backlog_text,
    done_list_row,
    open_list_row,
    table_text,
    tags_text,
    todo_task_text,
)

logger = logging.getLogger("ivly.cli")

TOP_TASKS = 6


@dataclass
class CliDeps:
    store_factory: Callable[[], TaskStore]
    driver_factory: Callable[[], SessionDriver]
    echo: Callable[..., None]
    ask: Callable[[str], str]
    clock: Clock = now


def _print_tasks(deps: CliDeps, indexed: Sequence, tag_styles: TagStyles, limit: Optional[int] = TOP_TASKS) -> None:
    shown = indexed if limit is None else indexed[:limit]
    for index, task in shown:
        deps.echo(todo_task_text(index, task, tag_styles, deps.clock))


def _print_top(deps: CliDeps, store: TaskStore, tasks: OpenTaskList) -> None:
    _print_tasks(deps, list(enumerate(tasks)), store.load_tag_styles())


def _run_interactive(deps: CliDeps) -> int:
    outcome = interactive_edit(deps.store_factory(), deps.driver_factory(), deps.clock)
    if outcome is Outcome.SAVE:
        deps.echo("✅ Saved changes")
    else:
        deps.echo("No changes made")
    return 0


def cmd_show(args, deps: CliDeps) -> int:
    store = deps.store_factory()
    matching = filter_tasks(store.load_open_list(), getattr(args, "tags", []) or [])
    _print_tasks(deps, matching, store.load_tag_styles())
    remaining = len(matching) - TOP_TASKS
    if remaining > 0:
        deps.echo(backlog_text(remaining))
    return 0


def _ask_new_task(deps: CliDeps):
    description = deps.ask("Task description:").strip()
    note = deps.ask("Task note:").strip()
    tags: List[str] = [parse_add_tag(token) for token in deps.ask("Tags:").split()]
    return description, note or None, tags


def cmd_add(args, deps: CliDeps) -> int:
    if getattr(args, "interactive", False):
        return _run_interactive(deps)
    if args.description is None:
        description, note, tags = _ask_new_task(deps)
    else:
        description, note, tags = args.description, args.note, args.tags or []
    store = deps.store_factory()
    index, task = add_task(store, description, note, tags, clock=deps.clock)
    deps.echo(f"✅ Added new task! ID: {task.id}")
    deps.echo(todo_task_text(index, task, store.load_tag_styles(), deps.clock))
    return 0


def cmd_finish(args, deps: CliDeps) -> int:
    store = deps.store_factory()
    for num in args.task_num or [None]:
        tasks, task = finish_task(store, num, clock=deps.clock)
        deps.echo(f"✅ Finished '{task.description}'!")
        _print_top(deps, store, tasks)
    return 0


def cmd_sweep(args, deps: CliDeps) -> int:
    store = deps.store_factory()
    tasks, swept = sweep(store, clock=deps.clock)
    logger.debug("swept %d tasks", len(swept))
    deps.echo("✅ Swept finished tasks into done list")
    _print_top(deps, store, tasks)
    return 0


def cmd_bump(args, deps: CliDeps) -> int:
    store = deps.store_factory()
    tasks, bumped = bump(store, args.task_num)
    tag_styles = store.load_tag_styles()
    for task in bumped:
        deps.echo(f"✅ Bumped '{task.description}'!")
    _print_tasks(deps, [(tasks.index_of(task.id), task) for task in bumped], tag_styles, limit=None)
    return 0


def cmd_move(args, deps: CliDeps) -> int:
    if args.task_num is None and args.insert_before is None:
        return _run_interactive(deps)
    if args.task_num is None or args.insert_before is None:
        raise IvlyError("please specify both a task number and the number to insert before")
    moved, successor = move_task(deps.store_factory(), args.task_num, args.insert_before)
    if successor is None:
        deps.echo(f"✅ Moved '{moved.description}'!")
    else:
        deps.echo(f"✅ Moved '{moved.description}' in front of '{successor.description}'!")
    return 0


def cmd_list(args, deps: CliDeps) -> int:
    only_open = bool(getattr(args, "open", False))
    only_done = bool(getattr(args, "done", False))
    # Both flags or neither: show both lists.
    show_open = only_open or not (only_open ^ only_done)
    show_done = only_done or not (only_open ^ only_done)
    filters = getattr(args, "tags", []) or []

    store = deps.store_factory()
    rows = []
    if show_open:
        rows.extend(open_list_row(i, task, deps.clock) for i, task in filter_tasks(store.load_open_list(), filters))
    if show_done:
        rows.extend(done_list_row(task, deps.clock) for _, task in filter_tasks(store.load_done_list(), filters))
    deps.echo(table_text(LIST_HEADER, rows))
    return 0


def cmd_tag(args, deps: CliDeps) -> int:
    styles = set_tag_style(deps.store_factory(), args.tag, fg=args.fg, bg=args.bg)
    deps.echo(tags_text(styles))
    return 0


def cmd_edit(args, deps: CliDeps) -> int:
    if args.task_id is None:
        return _run_interactive(deps)
    edit_task(deps.store_factory(), args.task_id, description=args.desc, note=args.note, tags=args.tags or [])
    deps.echo(f"✅ Edited task {args.task_id}")
    return 0


def cmd_remove(args, deps: CliDeps) -> int:
    which = remove_task(deps.store_factory(), args.task_id)
    list_name = "todo" if which == "open" else "done"
    deps.echo(f"✅ Removed task `{args.task_id}` from {list_name} task list")
    return 0


__all__ = [
    "CliDeps",
    "TOP_TASKS",
    "cmd_show",
    "cmd_add",
    "cmd_finish",
    "cmd_sweep",
    "cmd_bump",
    "cmd_move",
    "cmd_list",
    "cmd_tag",
    "cmd_edit",
    "cmd_remove",
]
