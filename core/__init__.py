from .clock import Clock, now
from .cursor import Cursor
from .editing import VIEWING, EditField, Editing, EditMode, Viewing, commit, start_edit
from .errors import (
    IvlyError,
    SessionError,
    StorageError,
    TagParseError,
    TaskNotFoundError,
    TaskNumberError,
)
from .tags import COLOURS, FilterTag, TagStyle, TagStyles, matches_all, parse_add_tag
from .task import Done, DoneTask, Open, OpenTask, Task, new_task_id, tag_csv, unique_task_id
from .task_list import DoneTaskList, OpenTaskList, TaskList

__all__ = [
    "Clock",
    "now",
    "Cursor",
    # Editing
    "VIEWING",
    "EditField",
    "Editing",
    "EditMode",
    "Viewing",
    "commit",
    "start_edit",
    # Errors
    "IvlyError",
    "SessionError",
    "StorageError",
    "TagParseError",
    "TaskNotFoundError",
    "TaskNumberError",
    # Tags
    "COLOURS",
    "FilterTag",
    "TagStyle",
    "TagStyles",
    "matches_all",
    "parse_add_tag",
    # Tasks
    "Done",
    "DoneTask",
    "Open",
    "OpenTask",
    "Task",
    "new_task_id",
    "unique_task_id",
    "tag_csv",
    "DoneTaskList",
    "OpenTaskList",
    "TaskList",
]
