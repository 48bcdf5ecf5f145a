"""Edit mode: either viewing the list or editing one field of one task.

There is no cancel transition. Once a buffer is open, the only ways out are
committing it or discarding the whole session.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .task import OpenTask, tag_csv
from .task_list import OpenTaskList


class EditField(Enum):
    DESCRIPTION = "description"
    NOTE = "note"
    TAGS = "tags"

    def read(self, task: OpenTask) -> str:
        if self is EditField.DESCRIPTION:
            return task.description
        if self is EditField.NOTE:
            return task.note
        return tag_csv(task.tags)

    def write(self, task: OpenTask, value: str) -> None:
        if self is EditField.DESCRIPTION:
            task.description = value
        elif self is EditField.NOTE:
            task.note = value
        else:
            # Literal split: "" becomes [""] and stray commas give empty tags.
            task.tags = value.split(",")


@dataclass(frozen=True)
class Viewing:
    pass


@dataclass
class Editing:
    field: EditField
    index: int
    buffer: str = ""

    def push(self, ch: str) -> None:
        self.buffer += ch

    def backspace(self) -> None:
        self.buffer = self.buffer[:-1]

    def shows(self, index: int, field: EditField) -> bool:
        return self.index == index and self.field is field


EditMode = Union[Viewing, Editing]

VIEWING = Viewing()


def start_edit(tasks: OpenTaskList, index: int, field: EditField) -> Editing:
    """Open a buffer seeded with the committed value of ``field``."""
    return Editing(field=field, index=index, buffer=field.read(tasks[index]))


def commit(editing: Editing, tasks: OpenTaskList) -> Viewing:
    field_value = editing.buffer
    editing.field.write(tasks[editing.index], field_value)
    return VIEWING


__all__ = ["EditField", "Viewing", "Editing", "EditMode", "VIEWING", "start_edit", "commit"]
