"""Interactive reorder/edit session over the open task list.

The session is a plain state machine: a driver feeds it one key at a time
through :meth:`Session.handle_key` and redraws after each call, until
``outcome`` is decided. Keys are single characters or one of
``up down home end enter backspace``.
"""

import logging
from enum import Enum
from typing import Callable, Dict, Iterable, Optional

from core import (
    VIEWING,
    Clock,
    Cursor,
    EditField,
    Editing,
    EditMode,
    OpenTask,
    OpenTaskList,
    commit,
    now,
    start_edit,
    unique_task_id,
)
from application.ports import SessionDriver

logger = logging.getLogger("ivly.session")

PRIORITY_KEYS = "123456"


class Outcome(Enum):
    SAVE = "save"
    FORGET = "forget"


class Session:
    def __init__(self, tasks: OpenTaskList, clock: Clock = now, reserved_ids: Iterable[str] = ()):
        self.tasks = tasks
        self.clock = clock
        self.cursor = Cursor(tasks)
        self.mode: EditMode = VIEWING
        self.show_help: bool = False
        self.outcome: Optional[Outcome] = None
        self._reserved_ids = set(reserved_ids)
        self._view_actions: Dict[str, Callable[[], None]] = {
            "q": lambda: self._decide(Outcome.SAVE),
            "X": lambda: self._decide(Outcome.FORGET),
            "up": lambda: self.cursor.move_relative(-1),
            "down": lambda: self.cursor.move_relative(1),
            "home": self.cursor.move_to_start,
            "end": self.cursor.move_to_end,
            "=": self.shift_earlier,
            "-": self.shift_later,
            "D": self.delete_selected,
            "a": self.add_task,
            "e": lambda: self.begin_edit(EditField.DESCRIPTION),
            "n": lambda: self.begin_edit(EditField.NOTE),
            "t": lambda: self.begin_edit(EditField.TAGS),
            "?": self.toggle_help,
        }

    @property
    def running(self) -> bool:
        return self.outcome is None

    @property
    def editing(self) -> Optional[Editing]:
        return self.mode if isinstance(self.mode, Editing) else None

    def handle_key(self, key: str) -> None:
        if self.outcome is not None:
            return
        if isinstance(self.mode, Editing):
            self._handle_editing(self.mode, key)
        else:
            self._handle_viewing(key)

    def _handle_viewing(self, key: str) -> None:
        if len(key) == 1 and key in PRIORITY_KEYS:
            self.set_priority(int(key) - 1)
            return
        action = self._view_actions.get(key)
        if action is not None:
            action()

    def _handle_editing(self, editing: Editing, key: str) -> None:
        if key == "enter":
            self.mode = commit(editing, self.tasks)
            logger.debug("committed %s of task #%d", editing.field.value, editing.index + 1)
        elif key == "backspace":
            editing.backspace()
        elif len(key) == 1 and key.isprintable():
            editing.push(key)

    def _decide(self, outcome: Outcome) -> None:
        self.outcome = outcome
        logger.debug("session finished: %s", outcome.value)

    def _move_selected(self, to_before: Callable[[int], int]) -> None:
        selected = self.cursor.selected
        if selected is None:
            return
        target = self.tasks.reposition(selected, to_before(selected))
        self.cursor.set(target)

    def shift_earlier(self) -> None:
        self._move_selected(lambda i: max(i - 1, 0))

    def shift_later(self) -> None:
        self._move_selected(lambda i: min(i + 2, len(self.tasks)))

    def set_priority(self, slot: int) -> None:
        selected = self.cursor.selected
        if selected is None:
            return
        target = self.tasks.reposition(selected, self.cursor.set_priority(slot))
        self.cursor.set(target)

    def delete_selected(self) -> None:
        selected = self.cursor.selected
        if selected is None:
            return
        removed = self.tasks.remove_at(selected)
        self.cursor.clamp()
        logger.debug("removed task %s", removed.id)

    def add_task(self) -> None:
        taken = self._reserved_ids.union(self.tasks.ids())
        self.tasks.append(OpenTask.new("", clock=self.clock, task_id=unique_task_id(taken)))
        self.cursor.set(len(self.tasks) - 1)
        self.begin_edit(EditField.DESCRIPTION)

    def begin_edit(self, field: EditField) -> None:
        selected = self.cursor.selected
        if selected is None:
            return
        self.mode = start_edit(self.tasks, selected, field)

    def toggle_help(self) -> None:
        self.show_help = not self.show_help


def run_session(
    tasks: OpenTaskList,
    driver: SessionDriver,
    clock: Clock = now,
    reserved_ids: Iterable[str] = (),
) -> Outcome:
    """Run an interactive session over a private copy of ``tasks``.

    On ``SAVE`` the caller's list takes the final state; otherwise it is left
    exactly as it was, including when the driver raises.
    """
    session = Session(tasks.copy(), clock=clock, reserved_ids=reserved_ids)
    driver.drive(session)
    outcome = session.outcome
    if outcome is None:
        logger.warning("session ended without a decision; discarding changes")
        outcome = Outcome.FORGET
    if outcome is Outcome.SAVE:
        tasks.replace_all(session.tasks)
    return outcome


__all__ = ["Outcome", "Session", "run_session", "PRIORITY_KEYS"]
