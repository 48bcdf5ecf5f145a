"""Plain-dict contract for stored tasks and tag styles.

Empty notes and tag lists are left out of the stored form; decoding fills
them back in. Decoders raise ``ValueError`` on anything malformed so the
store can fall back to its backup file.
"""

from typing import Any, Dict, List, Mapping

from core import Done, DoneTask, DoneTaskList, Open, OpenTask, OpenTaskList, TagStyle, TagStyles


def _common_to_dict(task) -> Dict[str, Any]:
    d: Dict[str, Any] = {"id": task.id, "description": task.description}
    if task.note:
        d["note"] = task.note
    d["created"] = task.created
    if task.tags:
        d["tags"] = list(task.tags)
    return d


def open_task_to_dict(task: OpenTask) -> Dict[str, Any]:
    d = _common_to_dict(task)
    marked = task.status.marked
    d["state"] = {"marked": {"completed": marked.completed}} if marked else {}
    return d


def done_task_to_dict(task: DoneTask) -> Dict[str, Any]:
    d = _common_to_dict(task)
    d["state"] = {"completed": task.completed}
    return d


def _require_mapping(raw: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise ValueError(f"{what} must be a mapping, got {type(raw).__name__}")
    return raw


def _require_int(raw: Any, what: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValueError(f"{what} must be an integer timestamp")
    return raw


def _common_fields(raw: Mapping[str, Any]) -> Dict[str, Any]:
    task_id = raw.get("id")
    description = raw.get("description")
    if not isinstance(task_id, str) or not task_id:
        raise ValueError("task id missing")
    if not isinstance(description, str):
        raise ValueError(f"task {task_id}: description missing")
    tags = raw.get("tags") or []
    if not isinstance(tags, list):
        raise ValueError(f"task {task_id}: tags must be a list")
    return {
        "id": task_id,
        "description": description,
        "note": str(raw.get("note") or ""),
        "created": _require_int(raw.get("created"), f"task {task_id}: created"),
        "tags": [str(t) for t in tags],
    }


def open_task_from_dict(raw: Any) -> OpenTask:
    raw = _require_mapping(raw, "task")
    fields = _common_fields(raw)
    state = _require_mapping(raw.get("state") or {}, "state")
    marked = state.get("marked")
    done = None
    if marked is not None:
        marked = _require_mapping(marked, "marked")
        done = Done(completed=_require_int(marked.get("completed"), "completed"))
    return OpenTask(status=Open(marked=done), **fields)


def done_task_from_dict(raw: Any) -> DoneTask:
    raw = _require_mapping(raw, "task")
    fields = _common_fields(raw)
    state = _require_mapping(raw.get("state"), "state")
    return DoneTask(status=Done(completed=_require_int(state.get("completed"), "completed")), **fields)


def _require_list(raw: Any) -> List[Any]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError("task file must hold a list of tasks")
    return raw


def open_list_from_data(raw: Any) -> OpenTaskList:
    return OpenTaskList(open_task_from_dict(item) for item in _require_list(raw))


def done_list_from_data(raw: Any) -> DoneTaskList:
    return DoneTaskList(done_task_from_dict(item) for item in _require_list(raw))


def tag_styles_to_dict(styles: TagStyles) -> Dict[str, Dict[str, Any]]:
    data: Dict[str, Dict[str, Any]] = {}
    for tag, style in styles.items():
        data[tag] = {"fg": style.fg, "bg": style.bg}
    return data


def tag_styles_from_dict(raw: Any) -> TagStyles:
    if raw is None:
        return TagStyles()
    raw = _require_mapping(raw, "tag styles")
    styles: Dict[str, TagStyle] = {}
    for tag, entry in raw.items():
        entry = _require_mapping(entry, f"style for {tag}")
        bg = entry.get("bg")
        styles[str(tag)] = TagStyle(fg=str(entry.get("fg") or "green"), bg=str(bg) if bg else None)
    return TagStyles(styles)


__all__ = [
    "open_task_to_dict",
    "done_task_to_dict",
    "open_task_from_dict",
    "done_task_from_dict",
    "open_list_from_data",
    "done_list_from_data",
    "tag_styles_to_dict",
    "tag_styles_from_dict",
]
