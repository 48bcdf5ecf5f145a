import itertools

import pytest

from core import DoneTaskList, OpenTask, OpenTaskList, TagStyles

T0 = 1_700_000_000


class FixedClock:
    def __init__(self, value: int = T0):
        self.value = value

    def __call__(self) -> int:
        return self.value

    def advance(self, seconds: int) -> None:
        self.value += seconds


class MemoryStore:
    """In-memory TaskStore; hands out copies like a real store would."""

    def __init__(self, open_tasks=(), done_tasks=(), tag_styles=None):
        self.open = OpenTaskList(open_tasks)
        self.done = DoneTaskList(done_tasks)
        self.tag_styles = tag_styles or TagStyles()
        self.saves = []

    def load_open_list(self):
        return self.open.copy()

    def save_open_list(self, tasks):
        self.open = tasks.copy()
        self.saves.append("open")

    def load_done_list(self):
        return self.done.copy()

    def save_done_list(self, tasks):
        self.done = tasks.copy()
        self.saves.append("done")

    def load_tag_styles(self):
        return self.tag_styles

    def save_tag_styles(self, styles):
        self.tag_styles = styles
        self.saves.append("tags")


class ScriptedDriver:
    """Feeds a fixed key list to the session, stopping once it has an outcome."""

    def __init__(self, keys=(), fail_with=None):
        self.keys = list(keys)
        self.fail_with = fail_with
        self.frames = 0

    def drive(self, session):
        for key in self.keys:
            if not session.running:
                break
            session.handle_key(key)
            self.frames += 1
        if self.fail_with is not None:
            raise self.fail_with


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def make_task(clock):
    counter = itertools.count()

    def factory(description, note="", tags=(), task_id=None):
        return OpenTask.new(
            description,
            note,
            tags,
            clock=clock,
            task_id=task_id or f"t{next(counter):03d}",
        )

    return factory


@pytest.fixture
def abc(make_task):
    return OpenTaskList([make_task("A"), make_task("B"), make_task("C")])


@pytest.fixture
def store_factory():
    return MemoryStore


@pytest.fixture
def scripted():
    return ScriptedDriver
