"""Error taxonomy for ivly.

``IndexError`` raised by task lists is deliberately not wrapped: it signals a
caller bug, not a user mistake.
"""


class IvlyError(Exception):
    """Base class for errors reported to the user."""


class TaskNumberError(IvlyError):
    def __init__(self, num: int, length: int):
        self.num = num
        self.length = length
        super().__init__(f"task number {num} is not within task range 1..={length}")


class TaskNotFoundError(IvlyError):
    def __init__(self, task_id: str, message: str = ""):
        self.task_id = task_id
        super().__init__(message or f"No task found with ID '{task_id}'")


class TagParseError(IvlyError, ValueError):
    """A tag token without its + or / prefix."""


class StorageError(IvlyError):
    """Serialising or writing a data file failed."""


class SessionError(IvlyError):
    """The interactive terminal failed (raw mode, drawing or reading input)."""


__all__ = [
    "IvlyError",
    "TaskNumberError",
    "TaskNotFoundError",
    "TagParseError",
    "StorageError",
    "SessionError",
]
