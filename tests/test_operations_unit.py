import pytest

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
    task_index,
)
from application.session import Outcome
from core import FilterTag, TaskNotFoundError, TaskNumberError


def _descs(tasks):
    return [t.description for t in tasks]


def test_task_index_is_one_based(abc):
    assert task_index(abc, 1) == 0
    assert task_index(abc, 3) == 2
    with pytest.raises(TaskNumberError, match="1..=3"):
        task_index(abc, 4)
    with pytest.raises(TaskNumberError):
        task_index(abc, 0)


def test_add_task_appends_and_saves(store_factory, abc, clock):
    store = store_factory(abc)
    index, task = add_task(store, "D", "note", ["x", "x"], clock=clock)
    assert index == 3
    assert task.tags == ["x"]
    assert _descs(store.open) == ["A", "B", "C", "D"]
    assert task.id not in abc.ids()


def test_add_task_id_unique_across_done(store_factory, abc, clock, monkeypatch):
    store = store_factory([], [abc[0].complete(clock)])
    draws = iter([abc[0].id, "zzzz"])
    monkeypatch.setattr("core.task.new_task_id", lambda: next(draws))
    _, task = add_task(store, "D", clock=clock)
    assert task.id == "zzzz"


def test_finish_defaults_to_first_unfinished(store_factory, abc, clock):
    abc.finish(0, clock)
    store = store_factory(abc)
    _, task = finish_task(store, clock=clock)
    assert task.description == "B"
    assert [t.is_finished() for t in store.open] == [True, True, False]


def test_finish_all_done_falls_back_to_first(store_factory, abc, clock):
    for i in range(3):
        abc.finish(i, clock)
    _, task = finish_task(store_factory(abc), clock=clock)
    assert task.description == "A"


def test_finish_on_empty_list_errors(store_factory, clock):
    with pytest.raises(TaskNumberError):
        finish_task(store_factory(), clock=clock)


def test_finish_by_number(store_factory, abc, clock):
    store = store_factory(abc)
    _, task = finish_task(store, 3, clock=clock)
    assert task.description == "C"
    with pytest.raises(TaskNumberError):
        finish_task(store, 7, clock=clock)


def test_sweep_moves_finished_and_sorts_done(store_factory, abc, clock):
    store = store_factory(abc)
    finish_task(store, 3, clock=clock)
    clock.advance(60)
    finish_task(store, 1, clock=clock)
    open_tasks, swept = sweep(store, clock=clock)
    assert _descs(open_tasks) == ["B"]
    assert _descs(swept) == ["A", "C"]
    assert _descs(store.done) == ["A", "C"]
    assert store.done[0].completed == clock.value


def test_bump_processes_highest_first(store_factory, make_task):
    store = store_factory([make_task(d) for d in "ABCDE"])
    tasks, bumped = bump(store, [2, 4, 2])
    assert _descs(bumped) == ["D", "B"]
    assert _descs(tasks) == ["A", "C", "E", "D", "B"]
    assert _descs(store.open) == ["A", "C", "E", "D", "B"]


def test_bump_out_of_range(store_factory, abc):
    with pytest.raises(TaskNumberError):
        bump(store_factory(abc), [4])


def test_move_task_in_front(store_factory, abc):
    store = store_factory(abc)
    moved, successor = move_task(store, 3, 1)
    assert (moved.description, successor.description) == ("C", "A")
    assert _descs(store.open) == ["C", "A", "B"]


def test_move_task_later(store_factory, abc):
    store = store_factory(abc)
    moved, successor = move_task(store, 1, 3)
    assert (moved.description, successor.description) == ("A", "C")
    assert _descs(store.open) == ["B", "A", "C"]


def test_move_last_onto_itself_has_no_successor(store_factory, abc):
    moved, successor = move_task(store_factory(abc), 3, 3)
    assert moved.description == "C"
    assert successor is None


def test_edit_open_task(store_factory, abc):
    abc[1].tags = ["old", "keep"]
    store = store_factory(abc)
    which = edit_task(
        store,
        abc[1].id,
        description="B2",
        note="n",
        tags=[FilterTag("new"), FilterTag("old", negated=True)],
    )
    assert which == "open"
    task = store.open[1]
    assert (task.description, task.note, task.tags) == ("B2", "n", ["keep", "new"])


def test_edit_done_task(store_factory, abc, clock):
    done = abc[0].complete(clock)
    done.tags = ["gone"]
    store = store_factory([], [done])
    assert edit_task(store, done.id, note="later", tags=[FilterTag("gone", negated=True)]) == "done"
    assert store.done[0].note == "later"
    assert store.done[0].tags == []


def test_edit_unknown_id(store_factory):
    with pytest.raises(TaskNotFoundError, match="No task found with ID 'nope'"):
        edit_task(store_factory(), "nope", description="x")


def test_remove_task_from_either_list(store_factory, abc, clock):
    done = abc[2].complete(clock)
    done.id = "done"
    store = store_factory(abc, [done])
    assert remove_task(store, abc[0].id) == "open"
    assert remove_task(store, "done") == "done"
    assert _descs(store.open) == ["B", "C"]
    assert len(store.done) == 0
    with pytest.raises(TaskNotFoundError, match="not found in todo or done task lists"):
        remove_task(store, "done")


def test_set_tag_style(store_factory):
    store = store_factory()
    styles = set_tag_style(store, "work", fg="red")
    styles = set_tag_style(store, "work", bg="blue")
    style = styles.get("work")
    assert (style.fg, style.bg) == ("red", "blue")
    assert store.saves == ["tags", "tags"]


def test_filter_tasks_keeps_positions(abc):
    abc[0].tags = ["work"]
    abc[2].tags = ["work", "urgent"]
    result = filter_tasks(abc, [FilterTag("work"), FilterTag("urgent", negated=True)])
    assert [(i, t.description) for i, t in result] == [(0, "A")]
    assert len(filter_tasks(abc, [])) == 3


def test_interactive_edit_saves_only_on_save(store_factory, abc, clock, scripted):
    store = store_factory(abc)
    assert interactive_edit(store, scripted(["D", "X"]), clock) is Outcome.FORGET
    assert store.saves == []
    assert interactive_edit(store, scripted(["D", "q"]), clock) is Outcome.SAVE
    assert store.saves == ["open"]
    assert _descs(store.open) == ["B", "C"]
