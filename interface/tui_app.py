#!/usr/bin/env python3
"""Full-screen terminal driver for the interactive reorder/edit session."""

import logging
from typing import Optional

from prompt_toolkit.application import Application
from prompt_toolkit.application.current import get_app
from prompt_toolkit.filters import Condition
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import ConditionalContainer, Float, FloatContainer, HSplit, Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl

from application.session import Session
from core import SessionError
from .tui_render import (
    help_size,
    render_footer_text,
    render_header_text,
    render_help_text,
    render_rows_text,
)
from .tui_themes import DEFAULT_THEME, build_style

logger = logging.getLogger("ivly.session")

# Keys forwarded to the session by name; everything printable goes through Keys.Any.
NAMED_KEYS = ("up", "down", "home", "end", "enter", "backspace")


class PromptToolkitDriver:
    """Runs a :class:`Session` inside a prompt_toolkit ``Application``.

    One key press is one ``handle_key`` call followed by a redraw. The
    application owns raw mode and the alternate screen and releases both on
    every exit path, so by the time ``SessionError`` escapes the terminal is
    already restored.
    """

    def __init__(self, theme: str = DEFAULT_THEME, input=None, output=None):
        self.theme = theme
        self.input = input
        self.output = output

    @staticmethod
    def get_terminal_width() -> int:
        try:
            return max(1, get_app().output.get_size().columns)
        except Exception:
            return 100

    def _key_bindings(self, session: Session) -> KeyBindings:
        kb = KeyBindings()

        def dispatch(event, key: str) -> None:
            session.handle_key(key)
            if not session.running:
                event.app.exit()

        for name in NAMED_KEYS:
            kb.add(name, eager=True)(lambda event, name=name: dispatch(event, name))

        @kb.add(Keys.Any, eager=True)
        def _(event):
            for key_press in event.key_sequence:
                data = key_press.data or ""
                if key_press.key != Keys.BracketedPaste and len(data) != 1:
                    continue
                for ch in data:
                    if ch.isprintable():
                        dispatch(event, ch)
                    if not session.running:
                        return

        return kb

    def _layout(self, session: Session) -> Layout:
        header = Window(
            content=FormattedTextControl(lambda: render_header_text(self.get_terminal_width())),
            height=1,
            always_hide_cursor=True,
        )
        rows = Window(
            content=FormattedTextControl(lambda: render_rows_text(session, self.get_terminal_width(), session.clock)),
            always_hide_cursor=True,
            wrap_lines=False,
        )
        footer = Window(
            content=FormattedTextControl(lambda: render_footer_text(session, self.get_terminal_width())),
            height=1,
            always_hide_cursor=True,
        )
        help_width, help_height = help_size()
        help_panel = ConditionalContainer(
            Window(
                content=FormattedTextControl(render_help_text),
                width=help_width,
                height=help_height,
                style="class:help",
                always_hide_cursor=True,
            ),
            filter=Condition(lambda: session.show_help),
        )
        root = FloatContainer(
            content=HSplit([header, rows, footer]),
            floats=[Float(content=help_panel, left=0, bottom=0)],
        )
        return Layout(root)

    def build_application(self, session: Session) -> Application:
        return Application(
            layout=self._layout(session),
            key_bindings=self._key_bindings(session),
            style=build_style(self.theme),
            full_screen=True,
            input=self.input,
            output=self.output,
        )

    def drive(self, session: Session) -> None:
        app = self.build_application(session)
        logger.debug("interactive session started with %d tasks", len(session.tasks))
        try:
            app.run()
        except (OSError, EOFError) as exc:
            raise SessionError(f"terminal session failed: {exc}") from exc


def make_driver(theme: Optional[str] = None) -> PromptToolkitDriver:
    return PromptToolkitDriver(theme=theme or DEFAULT_THEME)
