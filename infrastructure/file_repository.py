import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Callable, TypeVar

import yaml

from core import DoneTaskList, OpenTaskList, StorageError, TagStyles
from application.ports import TaskStore
from infrastructure.task_codec import (
    done_list_from_data,
    done_task_to_dict,
    open_list_from_data,
    open_task_to_dict,
    tag_styles_from_dict,
    tag_styles_to_dict,
)

logger = logging.getLogger("ivly.storage")

OPEN_FILE = "open.yaml"
DONE_FILE = "done.yaml"
TAGS_FILE = "tags.yaml"

R = TypeVar("R")


def backup_name(filename: str) -> str:
    """``open.yaml`` -> ``open.bak.yaml``."""
    stem, dot, ext = filename.rpartition(".")
    return f"{stem}.bak.{ext}" if dot else f"{filename}.bak"


class FileTaskStore(TaskStore):
    """YAML files in one directory; task lists keep a shadow backup of the previous write."""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir).expanduser()

    def _read(self, path: Path) -> Any:
        return yaml.safe_load(path.read_text(encoding="utf-8"))

    def _load_with_backup(self, filename: str, decode: Callable[[Any], R]) -> R:
        path = self.data_dir / filename
        backup = self.data_dir / backup_name(filename)
        if not path.exists() and not backup.exists():
            logger.info("No tasks saved in %s, creating a new set", path)
            return decode(None)
        try:
            return decode(self._read(path))
        except (OSError, yaml.YAMLError, ValueError) as exc:
            logger.warning("Failed to read the saved tasks, opening backup tasks (%s)", exc)
        try:
            return decode(self._read(backup))
        except (OSError, yaml.YAMLError, ValueError) as exc:
            logger.warning("No tasks saved, creating a new set (%s)", exc)
        return decode(None)

    def _write(self, filename: str, data: Any, *, keep_backup: bool) -> None:
        path = self.data_dir / filename
        try:
            text = yaml.safe_dump(data, allow_unicode=True, sort_keys=False)
        except yaml.YAMLError as exc:
            raise StorageError(f"failed to serialise {filename}") from exc
        self.data_dir.mkdir(parents=True, exist_ok=True)
        if keep_backup and path.exists():
            try:
                shutil.copyfile(path, self.data_dir / backup_name(filename))
            except OSError as exc:
                logger.warning("Could not refresh backup of %s: %s", filename, exc)
        tmp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                delete=False,
                dir=str(self.data_dir),
                prefix=f".{filename}.",
                suffix=".tmp",
            ) as tmp:
                tmp.write(text)
                tmp.flush()
                os.fsync(tmp.fileno())
                tmp_path = Path(tmp.name)
            os.replace(str(tmp_path), str(path))
        except OSError as exc:
            raise StorageError(f"failed to write {path}: {exc}") from exc
        finally:
            if tmp_path and tmp_path.exists():
                try:
                    tmp_path.unlink()
                except OSError:
                    pass
        logger.debug("wrote %s", path)

    def load_open_list(self) -> OpenTaskList:
        return self._load_with_backup(OPEN_FILE, open_list_from_data)

    def save_open_list(self, tasks: OpenTaskList) -> None:
        self._write(OPEN_FILE, [open_task_to_dict(t) for t in tasks], keep_backup=True)

    def load_done_list(self) -> DoneTaskList:
        return self._load_with_backup(DONE_FILE, done_list_from_data)

    def save_done_list(self, tasks: DoneTaskList) -> None:
        self._write(DONE_FILE, [done_task_to_dict(t) for t in tasks], keep_backup=True)

    def load_tag_styles(self) -> TagStyles:
        path = self.data_dir / TAGS_FILE
        if not path.exists():
            return TagStyles()
        try:
            return tag_styles_from_dict(self._read(path))
        except (OSError, yaml.YAMLError, ValueError) as exc:
            logger.warning("Ignoring unreadable tag styles in %s: %s", path, exc)
            return TagStyles()

    def save_tag_styles(self, styles: TagStyles) -> None:
        self._write(TAGS_FILE, tag_styles_to_dict(styles), keep_backup=False)


__all__ = ["FileTaskStore", "backup_name", "OPEN_FILE", "DONE_FILE", "TAGS_FILE"]
