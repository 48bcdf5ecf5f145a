import logging

import pytest

from application.session import Outcome, Session, run_session
from core import VIEWING, EditField, Editing, OpenTaskList, SessionError


def _descs(tasks):
    return [t.description for t in tasks]


def _session(tasks, clock, cursor=0):
    session = Session(tasks, clock=clock)
    session.cursor.set(cursor)
    return session


def test_shift_earlier_scenario(abc, clock):
    session = _session(abc, clock, cursor=2)
    session.handle_key("=")
    assert _descs(session.tasks) == ["A", "C", "B"]
    assert session.cursor.index == 1


def test_shift_later_scenario(abc, clock):
    session = _session(abc, clock, cursor=0)
    session.handle_key("-")
    assert _descs(session.tasks) == ["B", "A", "C"]
    assert session.cursor.index == 1


def test_set_priority_one_scenario(abc, clock):
    session = _session(abc, clock, cursor=2)
    session.handle_key("1")
    assert _descs(session.tasks) == ["C", "A", "B"]
    assert session.cursor.index == 0


def test_shift_earlier_at_top_is_noop(abc, clock):
    session = _session(abc, clock, cursor=0)
    session.handle_key("=")
    assert _descs(session.tasks) == ["A", "B", "C"]
    assert session.cursor.index == 0


def test_shift_later_at_bottom_is_noop(abc, clock):
    session = _session(abc, clock, cursor=2)
    session.handle_key("-")
    assert _descs(session.tasks) == ["A", "B", "C"]
    assert session.cursor.index == 2


def test_priority_beyond_length_moves_to_end(abc, clock):
    session = _session(abc, clock, cursor=0)
    session.handle_key("6")
    assert _descs(session.tasks) == ["B", "C", "A"]
    assert session.cursor.index == 2


def test_structural_keys_ignored_past_end(abc, clock):
    session = _session(abc, clock, cursor=3)
    for key in "=-1De":
        session.handle_key(key)
    assert _descs(session.tasks) == ["A", "B", "C"]
    assert session.mode is VIEWING


def test_navigation(abc, clock):
    session = _session(abc, clock)
    session.handle_key("up")
    assert session.cursor.index == 0
    session.handle_key("down")
    session.handle_key("down")
    session.handle_key("down")
    session.handle_key("down")
    assert session.cursor.index == 3
    session.handle_key("home")
    assert session.cursor.index == 0
    session.handle_key("end")
    assert session.cursor.index == 2


def test_delete_reclamps_cursor(abc, clock):
    session = _session(abc, clock, cursor=2)
    session.handle_key("D")
    assert _descs(session.tasks) == ["A", "B"]
    assert session.cursor.index == 2
    assert session.cursor.selected is None
    session.handle_key("up")
    session.handle_key("D")
    session.handle_key("up")
    session.handle_key("D")
    assert len(session.tasks) == 0
    assert session.cursor.index == 0
    session.handle_key("D")
    assert len(session.tasks) == 0


def test_add_appends_blank_and_edits_description(abc, clock):
    session = _session(abc, clock)
    session.handle_key("a")
    assert len(session.tasks) == 4
    assert session.cursor.index == 3
    assert session.editing == Editing(EditField.DESCRIPTION, 3, "")
    for ch in "new":
        session.handle_key(ch)
    session.handle_key("enter")
    assert session.tasks[3].description == "new"
    assert session.tasks[3].created == clock.value
    assert session.mode is VIEWING


def test_add_avoids_reserved_ids(clock, monkeypatch):
    draws = iter(["used", "free"])
    monkeypatch.setattr("core.task.new_task_id", lambda: next(draws))
    session = Session(OpenTaskList(), clock=clock, reserved_ids=["used"])
    session.handle_key("a")
    assert session.tasks[0].id == "free"


def test_editing_swallows_view_keys(abc, clock):
    session = _session(abc, clock)
    session.handle_key("n")
    for key in ["q", "X", "D", "=", "up", "home", "?"]:
        session.handle_key(key)
    assert session.running
    assert session.editing.buffer == "qXD=?"
    assert not session.show_help
    session.handle_key("backspace")
    session.handle_key("enter")
    assert session.tasks[0].note == "qXD="
    assert session.cursor.index == 0


def test_no_cancel_while_editing(abc, clock):
    """There is no key that leaves Editing without writing the buffer."""
    session = _session(abc, clock)
    session.handle_key("e")
    session.handle_key("X")
    session.handle_key("escape")
    assert session.running
    assert session.editing is not None
    session.handle_key("enter")
    assert session.tasks[0].description == "AX"


def test_editing_tags_empty_buffer(abc, clock):
    session = _session(abc, clock)
    session.handle_key("t")
    session.handle_key("enter")
    assert session.tasks[0].tags == [""]


def test_help_toggle_and_unknown_keys(abc, clock):
    session = _session(abc, clock)
    session.handle_key("?")
    assert session.show_help
    session.handle_key("z")
    session.handle_key("pageup")
    session.handle_key("?")
    assert not session.show_help
    assert _descs(session.tasks) == ["A", "B", "C"]


def test_keys_after_outcome_are_ignored(abc, clock):
    session = _session(abc, clock)
    session.handle_key("q")
    assert session.outcome is Outcome.SAVE
    session.handle_key("D")
    assert len(session.tasks) == 3


def test_run_session_save_replaces_list(abc, clock, scripted):
    original = abc
    outcome = run_session(abc, scripted(["down", "D", "e", "!", "enter", "q"]), clock=clock)
    assert outcome is Outcome.SAVE
    assert abc is original
    assert _descs(abc) == ["A", "C!"]


def test_run_session_forget_restores_exactly(abc, clock, scripted):
    before = abc.copy()
    outcome = run_session(abc, scripted(["D", "a", "x", "enter", "-", "t", "z", "enter", "X"]), clock=clock)
    assert outcome is Outcome.FORGET
    assert abc == before


def test_run_session_driver_error_leaves_list(abc, clock, scripted):
    before = abc.copy()
    driver = scripted(["D", "D"], fail_with=SessionError("terminal gone"))
    with pytest.raises(SessionError):
        run_session(abc, driver, clock=clock)
    assert abc == before


def test_run_session_without_outcome_forgets(abc, clock, scripted, caplog):
    before = abc.copy()
    with caplog.at_level(logging.WARNING, logger="ivly.session"):
        outcome = run_session(abc, scripted(["D"]), clock=clock)
    assert outcome is Outcome.FORGET
    assert abc == before
    assert "discarding" in caplog.text


def test_run_session_on_empty_list(clock, scripted):
    tasks = OpenTaskList()
    outcome = run_session(tasks, scripted(["=", "-", "1", "D", "e", "end", "q"]), clock=clock)
    assert outcome is Outcome.SAVE
    assert len(tasks) == 0
