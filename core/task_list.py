"""Ordered task lists.

The open list's order is the display priority. Positions are 0-based here;
the CLI translates 1-based task numbers before calling in.
"""

import copy
from typing import Generic, Iterable, Iterator, List, Optional, TypeVar

from .clock import Clock, now
from .task import DoneTask, OpenTask, Task

T = TypeVar("T", bound=Task)


class TaskList(Generic[T]):
    def __init__(self, tasks: Optional[Iterable[T]] = None):
        self._tasks: List[T] = list(tasks or [])

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[T]:
        return iter(self._tasks)

    def __getitem__(self, index: int) -> T:
        return self._tasks[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TaskList):
            return NotImplemented
        return type(self) is type(other) and self._tasks == other._tasks

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._tasks!r})"

    def _check(self, index: int, upper: int) -> None:
        if not 0 <= index < upper:
            raise IndexError(f"task position {index} out of range for list of {len(self._tasks)}")

    def append(self, task: T) -> None:
        self._tasks.append(task)

    def insert(self, index: int, task: T) -> None:
        self._check(index, len(self._tasks) + 1)
        self._tasks.insert(index, task)

    def remove_at(self, index: int) -> T:
        self._check(index, len(self._tasks))
        return self._tasks.pop(index)

    def reposition(self, from_: int, to_before: int) -> int:
        """Move the task at ``from_`` so it sits in front of the task now at ``to_before``.

        ``to_before`` may equal ``len`` (move to the end). Returns the task's
        new position.
        """
        self._check(from_, len(self._tasks))
        self._check(to_before, len(self._tasks) + 1)
        target = to_before - 1 if from_ < to_before else to_before
        if target != from_:
            task = self._tasks.pop(from_)
            self._tasks.insert(target, task)
        return target

    def index_of(self, task_id: str) -> Optional[int]:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return None

    def find(self, task_id: str) -> Optional[T]:
        i = self.index_of(task_id)
        return None if i is None else self._tasks[i]

    def remove_id(self, task_id: str) -> int:
        """Drop every task with ``task_id``; returns how many were removed."""
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if t.id != task_id]
        return before - len(self._tasks)

    def ids(self) -> List[str]:
        return [t.id for t in self._tasks]

    def copy(self):
        return type(self)(copy.deepcopy(self._tasks))

    def replace_all(self, other: "TaskList[T]") -> None:
        """Take over ``other``'s contents, keeping this list's identity."""
        self._tasks[:] = list(other)


class OpenTaskList(TaskList[OpenTask]):
    def finish(self, index: int, clock: Clock = now) -> OpenTask:
        self._check(index, len(self._tasks))
        task = self._tasks[index]
        task.finish(clock)
        return task

    def first_unfinished(self) -> Optional[int]:
        for i, task in enumerate(self._tasks):
            if not task.is_finished():
                return i
        return None

    def take_finished(self) -> List[OpenTask]:
        """Remove and return finished tasks, keeping the rest in order."""
        finished = [t for t in self._tasks if t.is_finished()]
        self._tasks = [t for t in self._tasks if not t.is_finished()]
        return finished


class DoneTaskList(TaskList[DoneTask]):
    def sort_recent_first(self) -> None:
        self._tasks.sort(key=lambda t: t.completed, reverse=True)


__all__ = ["TaskList", "OpenTaskList", "DoneTaskList"]
