"""Rendering helpers for the interactive session.

Every function here is a pure function of session state, terminal width and
the clock, returning prompt_toolkit fragments. Uncommitted edit buffers are
shown in place of the committed value and never written back.
"""
from typing import List, Optional, Tuple

from prompt_toolkit.formatted_text import FormattedText

from core import Clock, EditField, OpenTask, now
from util.age import format_age
from util.responsive import Column, ColumnLayout

from .tui_display import align_display, pad_display

HIGHLIGHT_SYMBOL = ">>"

TABLE_LAYOUT = ColumnLayout(
    columns=[
        Column("num", length=5, align="right"),
        Column("description", percent=35),
        Column("note", percent=35),
        Column("created", length=10, align="center"),
        Column("tags"),
    ],
    spacing=1,
    gutter=len(HIGHLIGHT_SYMBOL),
)

HEADERS = {
    "num": "Task#",
    "description": "Description",
    "note": "Note",
    "created": "Created",
    "tags": "Tags",
}

EDITING_HINT = "Enter to accept changes"
VIEWING_HINT = "? Toggle Help  X Exit  q Save and exit"

HELP_ROWS: List[Tuple[str, str]] = [
    ("⬆/⬇", "Select row"),
    ("+/-", "Change priority"),
    ("1-6", "Set priority"),
    ("e", "Edit description"),
    ("n", "Edit note"),
    ("t", "Edit tags"),
    ("a", "Add new task"),
    ("D", "Remove task"),
    ("q", "Save and exit"),
    ("X", "Exit"),
]
HELP_WIDTHS = (5, 19)

Fragments = List[Tuple[str, str]]


def _merge_style(row_style: Optional[str], fragment_style: str) -> str:
    if not row_style:
        return fragment_style
    return f"{row_style} {fragment_style}".strip()


def _cells(layout: ColumnLayout, widths, values, styles, row_style: str) -> Fragments:
    fragments: Fragments = []
    sep = " " * layout.spacing
    for i, col in enumerate(layout.columns):
        if i:
            fragments.append((row_style, sep))
        text = align_display(values[col.name], widths[col.name], col.align)
        fragments.append((_merge_style(row_style, styles.get(col.name, "")), text))
    return fragments


def _field_value(session, index: int, task: OpenTask, field: EditField) -> Tuple[str, bool]:
    editing = session.editing
    if editing is not None and editing.shows(index, field):
        return editing.buffer, True
    return field.read(task), False


def render_header_text(width: int) -> FormattedText:
    widths = TABLE_LAYOUT.calculate_widths(width)
    values = dict(HEADERS)
    fragments: Fragments = [("class:header", " " * TABLE_LAYOUT.gutter)]
    centered = ColumnLayout(
        columns=[Column(c.name, c.length, c.percent, "center") for c in TABLE_LAYOUT.columns],
        spacing=TABLE_LAYOUT.spacing,
        gutter=TABLE_LAYOUT.gutter,
    )
    fragments.extend(_cells(centered, widths, values, {}, "class:header"))
    return FormattedText(fragments)


def render_rows_text(session, width: int, clock: Clock = now) -> FormattedText:
    """One line per open task; the selected row carries the cursor marker."""
    widths = TABLE_LAYOUT.calculate_widths(width)
    selected = session.cursor.selected
    fragments: Fragments = []
    for i, task in enumerate(session.tasks):
        if i:
            fragments.append(("", "\n"))
        if i == selected:
            row_style = "class:selected"
            # Lets the Window scroll the selected row into view.
            fragments.append(("[SetCursorPosition]", ""))
            fragments.append((row_style, HIGHLIGHT_SYMBOL))
        else:
            row_style = "class:row.alt" if i % 2 == 1 else ""
            fragments.append((row_style, " " * TABLE_LAYOUT.gutter))

        desc, desc_editing = _field_value(session, i, task, EditField.DESCRIPTION)
        note, note_editing = _field_value(session, i, task, EditField.NOTE)
        tags, tags_editing = _field_value(session, i, task, EditField.TAGS)

        desc_style = "class:task.desc"
        if desc_editing:
            desc_style += " class:editing"
        if task.is_finished():
            desc_style += " class:finished"
        styles = {
            "description": desc_style,
            "note": "class:note class:editing" if note_editing else "class:note",
            "tags": "class:editing" if tags_editing else "",
        }
        values = {
            "num": str(i + 1),
            "description": desc,
            "note": note,
            "created": format_age(task.age(clock)),
            "tags": tags,
        }
        fragments.extend(_cells(TABLE_LAYOUT, widths, values, styles, row_style))
    return FormattedText(fragments)


def render_table_text(session, width: int, clock: Clock = now) -> FormattedText:
    fragments: Fragments = list(render_header_text(width))
    rows = list(render_rows_text(session, width, clock))
    if rows:
        fragments.append(("", "\n"))
        fragments.extend(rows)
    return FormattedText(fragments)


def render_footer_text(session, width: int) -> FormattedText:
    hint = EDITING_HINT if session.editing is not None else VIEWING_HINT
    return FormattedText([("class:footer", align_display(hint, width, "center"))])


def render_help_text() -> FormattedText:
    key_w, label_w = HELP_WIDTHS
    fragments: Fragments = []
    for i, (key, label) in enumerate(HELP_ROWS):
        if i:
            fragments.append(("class:help", "\n"))
        fragments.append(("class:help.key", align_display(key, key_w, "right")))
        fragments.append(("class:help", " " + pad_display(label, label_w - 1)))
    return FormattedText(fragments)


def help_size() -> Tuple[int, int]:
    """(width, height) of the help overlay."""
    return sum(HELP_WIDTHS), len(HELP_ROWS)
