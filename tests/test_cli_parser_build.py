import argparse

import pytest

import ivly
from core import FilterTag
from interface import cli_commands
from interface.cli_parser import colour_name


def _parse(argv):
    parser = ivly.build_parser()
    return ivly.parse_args(parser, argv)


def test_build_parser_has_core_commands():
    help_text = ivly.build_parser().format_help()
    for command in ("add", "finish", "sweep", "bump", "move", "list", "tag", "edit", "remove"):
        assert command in help_text


def test_no_command_shows_with_filters():
    args = _parse(["+work", "/home"])
    assert args.func is cli_commands.cmd_show
    assert args.tags == [FilterTag("work"), FilterTag("home", negated=True)]


def test_no_arguments_shows_top_tasks():
    args = _parse([])
    assert args.func is cli_commands.cmd_show
    assert args.tags == []


def test_theme_before_filters():
    args = _parse(["--theme", "contrast", "+work"])
    assert args.theme == "contrast"
    assert args.tags == [FilterTag("work")]


@pytest.mark.parametrize("alias", ["add", "a"])
def test_add_with_note_and_tags(alias):
    args = _parse([alias, "Write report", "+work", "+urgent", "-n", "draft"])
    assert args.func is cli_commands.cmd_add
    assert (args.description, args.note, args.tags, args.interactive) == ("Write report", "draft", ["work", "urgent"], False)


def test_add_rejects_negated_tag():
    with pytest.raises(SystemExit):
        _parse(["add", "x", "/work"])


def test_numbers_and_aliases():
    assert _parse(["f", "1", "3"]).task_num == [1, 3]
    assert _parse(["finish"]).task_num == []
    args = _parse(["mv", "3", "1"])
    assert (args.func, args.task_num, args.insert_before) == (cli_commands.cmd_move, 3, 1)
    assert _parse(["bump", "2", "2"]).task_num == [2, 2]
    assert _parse(["ls", "--done", "/x"]).tags == [FilterTag("x", negated=True)]


def test_edit_and_tag_arguments():
    args = _parse(["edit", "abcd", "+a", "/b", "-d", "new"])
    assert (args.task_id, args.desc, args.note) == ("abcd", "new", None)
    assert args.tags == [FilterTag("a"), FilterTag("b", negated=True)]
    args = _parse(["tag", "work", "--fg", "bright_red", "--bg", "Blue"])
    assert (args.tag, args.fg, args.bg) == ("work", "bright red", "blue")


def test_colour_name_validation():
    assert colour_name("brightcyan") == "bright cyan"
    with pytest.raises(argparse.ArgumentTypeError):
        colour_name("mauve")


def test_unknown_arguments_after_command_rejected():
    with pytest.raises(SystemExit):
        _parse(["sweep", "+work"])
