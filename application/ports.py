from typing import TYPE_CHECKING, Protocol

from core import DoneTaskList, OpenTaskList, TagStyles

if TYPE_CHECKING:
    from application.session import Session


class TaskStore(Protocol):
    def load_open_list(self) -> OpenTaskList:
        ...

    def save_open_list(self, tasks: OpenTaskList) -> None:
        ...

    def load_done_list(self) -> DoneTaskList:
        ...

    def save_done_list(self, tasks: DoneTaskList) -> None:
        ...

    def load_tag_styles(self) -> TagStyles:
        ...

    def save_tag_styles(self, styles: TagStyles) -> None:
        ...


class SessionDriver(Protocol):
    def drive(self, session: "Session") -> None:
        """Render, read one key, dispatch; repeat until ``session.outcome`` is set."""
        ...
