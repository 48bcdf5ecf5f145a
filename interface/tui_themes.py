#!/usr/bin/env python3
"""TUI themes and styling."""

from typing import Dict

from prompt_toolkit.styles import Style


THEMES: Dict[str, Dict[str, str]] = {
    "ivy": {
        "": "",  # terminal's own colours
        "header": "bold",
        "selected": "reverse",
        "row.alt": "bg:ansibrightblack",
        "task.num": "ansibrightblack bold",
        "task.desc": "bold",
        "finished": "strike",
        "completed": "ansigreen underline",
        "note": "italic",
        "editing": "ansiyellow",
        "age": "#a5a5a5 underline",
        "backlog": "italic #7f7f7f",
        "text.dim": "#7f7f7f",
        "footer": "",
        "help": "bg:ansimagenta",
        "help.key": "bg:ansimagenta bold",
        "message.ok": "",
        "message.error": "ansired bold",
    },
    "contrast": {
        "": "#e8eaec",
        "header": "#ffb347 bold",
        "selected": "bg:#3d4047 #e8eaec bold",
        "row.alt": "bg:#26282c",
        "task.num": "#8a9097 bold",
        "task.desc": "#e8eaec bold",
        "finished": "strike",
        "completed": "#b8f171 underline",
        "note": "#a7b0ba italic",
        "editing": "#f0c674",
        "age": "#a7b0ba underline",
        "backlog": "italic #6f757d",
        "text.dim": "#97a0a9",
        "footer": "#a7b0ba",
        "help": "bg:#5f3d7a #e8eaec",
        "help.key": "bg:#5f3d7a #ffb347 bold",
        "message.ok": "#b8f171",
        "message.error": "#ff6b6b bold",
    },
}

DEFAULT_THEME = "ivy"


def get_theme_palette(theme: str) -> Dict[str, str]:
    """Get theme palette, falling back to default if theme not found."""
    base = THEMES.get(theme)
    if not base:
        base = THEMES[DEFAULT_THEME]
    return dict(base)


def build_style(theme: str) -> Style:
    """Build Style object from theme name."""
    palette = get_theme_palette(theme)
    return Style.from_dict(palette)
