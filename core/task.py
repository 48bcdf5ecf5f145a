"""Task records.

A task is generic over its status tag: open tasks carry an optional
completion marker (set by ``finish``), done tasks carry a mandatory
completion time. ``OpenTask.complete`` converts one into the other.
"""

import secrets
from dataclasses import dataclass, field
from typing import Generic, Iterable, List, Optional, TypeVar

from .clock import Clock, now

ID_ALPHABET = "_-0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
ID_LENGTH = 4


def new_task_id(size: int = ID_LENGTH) -> str:
    # A leading "-" would read as an option on the command line.
    first = secrets.choice(ID_ALPHABET.replace("-", ""))
    return first + "".join(secrets.choice(ID_ALPHABET) for _ in range(size - 1))


def unique_task_id(taken: Iterable[str]) -> str:
    taken = set(taken)
    while True:
        candidate = new_task_id()
        if candidate not in taken:
            return candidate


@dataclass(frozen=True)
class Done:
    """Completion marker; ``completed`` is seconds since the epoch."""

    completed: int

    def age(self, clock: Clock = now) -> int:
        return max(0, clock() - self.completed)


@dataclass(frozen=True)
class Open:
    marked: Optional[Done] = None


S = TypeVar("S", Open, Done)


@dataclass
class Task(Generic[S]):
    id: str
    description: str
    created: int
    status: S
    note: str = ""
    tags: List[str] = field(default_factory=list)

    def add_tag(self, tag: str) -> None:
        if tag not in self.tags:
            self.tags.append(tag)

    def remove_tag(self, tag: str) -> None:
        self.tags = [t for t in self.tags if t != tag]

    def age(self, clock: Clock = now) -> int:
        """Seconds since creation, never negative."""
        return max(0, clock() - self.created)


class OpenTask(Task[Open]):
    @classmethod
    def new(
        cls,
        description: str = "",
        note: str = "",
        tags: Iterable[str] = (),
        *,
        clock: Clock = now,
        task_id: Optional[str] = None,
    ) -> "OpenTask":
        task = cls(
            id=task_id or new_task_id(),
            description=description,
            created=clock(),
            status=Open(),
            note=note,
        )
        for tag in tags:
            task.add_tag(tag)
        return task

    def is_finished(self) -> bool:
        return self.status.marked is not None

    def finish(self, clock: Clock = now) -> None:
        """Mark finished; a second call keeps the first completion time."""
        if self.status.marked is None:
            self.status = Open(marked=Done(completed=clock()))

    def finished_age(self, clock: Clock = now) -> Optional[int]:
        marked = self.status.marked
        return marked.age(clock) if marked else None

    def complete(self, clock: Clock = now) -> "DoneTask":
        done = self.status.marked or Done(completed=clock())
        return DoneTask(
            id=self.id,
            description=self.description,
            created=self.created,
            status=done,
            note=self.note,
            tags=list(self.tags),
        )


class DoneTask(Task[Done]):
    @property
    def completed(self) -> int:
        return self.status.completed

    def completed_age(self, clock: Clock = now) -> int:
        return self.status.age(clock)


def tag_csv(tags: Iterable[str]) -> str:
    return ",".join(tags)


__all__ = [
    "ID_ALPHABET",
    "ID_LENGTH",
    "new_task_id",
    "unique_task_id",
    "Done",
    "Open",
    "Task",
    "OpenTask",
    "DoneTask",
    "tag_csv",
]
