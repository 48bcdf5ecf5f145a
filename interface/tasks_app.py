#!/usr/bin/env python3
"""
ivly — command line tasks following the Ivy Lee method.

Thin facade: resolves configuration, wires storage and the terminal driver
into the command handlers and maps errors to exit codes.
"""

import argparse
import logging
import sys
from importlib.metadata import version as pkg_version, PackageNotFoundError
from pathlib import Path
from typing import List, Optional

from prompt_toolkit import prompt

from config import get_data_dir, get_log_level, get_user_theme
from core import IvlyError, StorageError, TagParseError, FilterTag
from infrastructure.file_repository import FileTaskStore
from util.logging_setup import parse_level, setup_logging

from . import cli_commands
from .cli_commands import CliDeps
from .cli_parser import build_parser as build_cli_parser
from .cli_print import Printer
from .tui_app import make_driver
from .tui_themes import THEMES, DEFAULT_THEME

logger = logging.getLogger("ivly.cli")


def build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    return build_cli_parser(commands=cli_commands, themes=THEMES, default_theme=DEFAULT_THEME)


def parse_args(parser: argparse.ArgumentParser, argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse ``argv``; without a command, leftover ``+tag``/``/tag`` words become filters."""
    args, extras = parser.parse_known_args(argv)
    if args.command is not None:
        if extras:
            parser.error(f"unrecognized arguments: {' '.join(extras)}")
        return args
    try:
        args.tags = [FilterTag.parse(token) for token in extras]
    except TagParseError as exc:
        parser.error(str(exc))
    return args


def ask(question: str) -> str:
    return prompt(f"{question} ")


def prepare_data_dir() -> Path:
    data_dir = get_data_dir()
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageError(f"cannot create storage directory {data_dir}: {exc}") from exc
    return data_dir


def build_deps(data_dir: Path, theme: str) -> CliDeps:
    printer = Printer(theme)
    return CliDeps(
        store_factory=lambda: FileTaskStore(data_dir),
        driver_factory=lambda: make_driver(theme),
        echo=printer.echo,
        ask=ask,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parse_args(parser, argv)
    if getattr(args, "version", False):
        try:
            print(pkg_version("ivly"))
        except PackageNotFoundError:
            print("0.0.0")
        return 0

    level = parse_level(get_log_level())
    theme = args.theme or get_user_theme() or DEFAULT_THEME
    try:
        data_dir = prepare_data_dir()
        setup_logging(console_level=level, log_dir=data_dir if level <= logging.DEBUG else None)
        return args.func(args, build_deps(data_dir, theme))
    except IvlyError as exc:
        logger.debug("command failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
