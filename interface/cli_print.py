"""Colourised terminal output for the non-interactive commands."""

from typing import List, Optional, Sequence, Tuple

from prompt_toolkit import print_formatted_text
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.styles import Style

from core import Clock, DoneTask, OpenTask, TagStyle, TagStyles, now, tag_csv
from util.age import format_age

from .tui_display import display_width, pad_display
from .tui_themes import DEFAULT_THEME, build_style

INDENT = "       "

# Tag colour names to prompt_toolkit's ANSI colour names.
_ANSI = {
    "black": "ansiblack",
    "red": "ansired",
    "green": "ansigreen",
    "yellow": "ansiyellow",
    "blue": "ansiblue",
    "magenta": "ansimagenta",
    "cyan": "ansicyan",
    "white": "ansigray",
    "bright black": "ansibrightblack",
    "bright red": "ansibrightred",
    "bright green": "ansibrightgreen",
    "bright yellow": "ansibrightyellow",
    "bright blue": "ansibrightblue",
    "bright magenta": "ansibrightmagenta",
    "bright cyan": "ansibrightcyan",
    "bright white": "ansiwhite",
}

LIST_HEADER = ("ID", "Task#", "Description", "Note", "Status", "Created", "Finished", "Tags")


def ansi_colour(name: Optional[str]) -> Optional[str]:
    """prompt_toolkit colour for a tag colour name; unknown names render white."""
    if not name:
        return None
    return _ANSI.get(name.strip().lower(), _ANSI["white"])


def tag_style_string(style: Optional[TagStyle]) -> str:
    if style is None:
        return ""
    parts = [ansi_colour(style.fg) or ""]
    bg = style.bg and _ANSI.get(style.bg.strip().lower())
    if bg:
        parts.append(f"bg:{bg}")
    return " ".join(p for p in parts if p)


def todo_task_text(index: int, task: OpenTask, tag_styles: TagStyles, clock: Clock = now) -> FormattedText:
    """Three-line block: number and description, note, then age and tags."""
    desc_style = "class:task.desc class:finished" if task.is_finished() else "class:task.desc"
    fragments: List[Tuple[str, str]] = [
        ("", " "),
        ("class:task.num", f"{index + 1}.".rjust(4)),
        ("", " "),
        (desc_style, task.description),
    ]
    finished = task.finished_age(clock)
    if finished is not None:
        fragments.append(("", " ➡ "))
        fragments.append(("class:completed", f"Completed {format_age(finished)}"))
    fragments.append(("", "\n"))

    if task.note:
        fragments.append(("", INDENT))
        fragments.append(("class:note", task.note))
        fragments.append(("", "\n"))

    fragments.append(("", INDENT))
    fragments.append(("class:age", format_age(task.age(clock))))
    fragments.append(("", " "))
    for tag in task.tags:
        fragments.append((tag_style_string(tag_styles.get(tag)), tag))
        fragments.append(("", " "))
    return FormattedText(fragments)


def backlog_text(remaining: int) -> FormattedText:
    return FormattedText([("", "\n      "), ("class:backlog", f"{remaining} tasks in backlog")])


def tags_text(tag_styles: TagStyles) -> FormattedText:
    fragments: List[Tuple[str, str]] = []
    for i, (tag, style) in enumerate(tag_styles.items()):
        if i:
            fragments.append(("", "\n"))
        fragments.append((tag_style_string(style), tag))
        fragments.append(("", f"\t{style.fg}\t{style.bg or ''}"))
    return FormattedText(fragments)


def open_list_row(position: int, task: OpenTask, clock: Clock = now) -> Tuple[str, ...]:
    finished = task.finished_age(clock)
    return (
        task.id,
        str(position + 1),
        task.description,
        task.note,
        "marked" if task.is_finished() else "todo",
        format_age(task.age(clock)),
        format_age(finished) if finished is not None else "",
        tag_csv(task.tags),
    )


def done_list_row(task: DoneTask, clock: Clock = now) -> Tuple[str, ...]:
    return (
        task.id,
        "",
        task.description,
        task.note,
        "done",
        format_age(task.age(clock)),
        format_age(task.completed_age(clock)),
        tag_csv(task.tags),
    )


def table_text(header: Sequence[str], rows: Sequence[Sequence[str]]) -> FormattedText:
    """Plain table with horizontal rules only."""
    widths = [display_width(h) for h in header]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], display_width(cell))
    total = sum(widths) + 3 * (len(widths) - 1) + 2
    rule = "─" * total

    def line(cells: Sequence[str]) -> str:
        return " " + " │ ".join(pad_display(cell, widths[i]) for i, cell in enumerate(cells)) + " "

    fragments: List[Tuple[str, str]] = [
        ("class:text.dim", rule + "\n"),
        ("class:header", line(header) + "\n"),
        ("class:text.dim", "═" * total),
    ]
    for row in rows:
        fragments.append(("", "\n" + line(row)))
        fragments.append(("class:text.dim", "\n" + rule))
    if not rows:
        fragments.append(("class:text.dim", "\n" + rule))
    return FormattedText(fragments)


class Printer:
    """Writes formatted text with the active theme's style."""

    def __init__(self, theme: str = DEFAULT_THEME, output=None):
        self.style: Style = build_style(theme)
        self.output = output

    def echo(self, text="", **kwargs) -> None:
        if isinstance(text, str):
            text = FormattedText([("", text)])
        print_formatted_text(text, style=self.style, output=self.output, **kwargs)
