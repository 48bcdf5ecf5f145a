"""CLI parser construction for the ivly command."""

import argparse
from typing import Any, Mapping

from core import COLOURS, FilterTag, TagParseError, parse_add_tag

DESCRIPTION = """\
Command line tasks following the Ivy Lee method.

Without a command, prints the top six open tasks. Filter them with tags:
+tag keeps tasks carrying the tag, /tag keeps tasks without it.
"""


def filter_tag(value: str) -> FilterTag:
    try:
        return FilterTag.parse(value)
    except TagParseError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def add_tag(value: str) -> str:
    try:
        return parse_add_tag(value)
    except TagParseError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def colour_name(value: str) -> str:
    """Accept ``bright red``, ``bright_red``, ``bright-red`` and ``brightred``."""
    name = " ".join(value.strip().lower().replace("_", " ").replace("-", " ").split())
    if name.startswith("bright") and not name.startswith("bright "):
        name = "bright " + name[len("bright"):]
    if name not in COLOURS:
        raise argparse.ArgumentTypeError(f"unknown colour {value!r} (choose from {', '.join(COLOURS)})")
    return name


def build_parser(commands: Any, themes: Mapping[str, Any], default_theme: str) -> argparse.ArgumentParser:
    # "+" and "/" mark filter tags at the top level; they reach the caller as unknown args.
    parser = argparse.ArgumentParser(
        prog="ivly",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        prefix_chars="-+/",
    )
    parser.add_argument("--theme", choices=list(themes.keys()), default=None, help=f"palette (default: {default_theme})")
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.set_defaults(func=commands.cmd_show, tags=[])

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    # add
    ap = sub.add_parser("add", aliases=["a"], help="Add a new task; without a description, asks for one")
    ap.add_argument("description", nargs="?", help="the task description")
    ap.add_argument("-n", "--note", help="the task note")
    ap.add_argument("tags", nargs="*", type=add_tag, metavar="+TAG", help="task tags, prefixed with +")
    ap.add_argument("-i", "--tui", dest="interactive", action="store_true", help="use the interactive editor")
    ap.set_defaults(func=commands.cmd_add)

    # finish
    fp = sub.add_parser("finish", aliases=["f"], help="Finish tasks; without numbers, the first unfinished one")
    fp.add_argument("task_num", nargs="*", type=int, help="1-based task numbers")
    fp.set_defaults(func=commands.cmd_finish)

    # sweep
    swp = sub.add_parser("sweep", help="Move finished tasks into the done list")
    swp.set_defaults(func=commands.cmd_sweep)

    # bump
    bp = sub.add_parser("bump", help="Bump tasks to the end of the open list")
    bp.add_argument("task_num", nargs="+", type=int, help="1-based task numbers")
    bp.set_defaults(func=commands.cmd_bump)

    # move
    mp = sub.add_parser("move", aliases=["mv"], help="Move a task; without numbers, opens the interactive editor")
    mp.add_argument("task_num", nargs="?", type=int, help="the task number")
    mp.add_argument("insert_before", nargs="?", type=int, help="the task number to insert before")
    mp.set_defaults(func=commands.cmd_move)

    # list
    lp = sub.add_parser("list", aliases=["ls"], help="List open and done tasks")
    lp.add_argument("--open", action="store_true", help="only show open tasks")
    lp.add_argument("--done", action="store_true", help="only show done tasks")
    lp.add_argument("tags", nargs="*", type=filter_tag, metavar="+TAG|/TAG", help="filter by tags")
    lp.set_defaults(func=commands.cmd_list)

    # tag
    tp = sub.add_parser("tag", help="Set the colours of a tag")
    tp.add_argument("tag")
    tp.add_argument("--fg", type=colour_name, help="foreground colour")
    tp.add_argument("--bg", type=colour_name, help="background colour")
    tp.set_defaults(func=commands.cmd_tag)

    # edit
    ep = sub.add_parser("edit", help="Edit a task by id; without an id, opens the interactive editor")
    ep.add_argument("task_id", nargs="?")
    ep.add_argument("-d", "--desc", help="set the description")
    ep.add_argument("-n", "--note", help="set the note")
    ep.add_argument("tags", nargs="*", type=filter_tag, metavar="+TAG|/TAG", help="add or remove tags")
    ep.set_defaults(func=commands.cmd_edit)

    # remove
    rp = sub.add_parser("remove", help="Remove a task completely")
    rp.add_argument("task_id")
    rp.set_defaults(func=commands.cmd_remove)

    return parser
