# src/todolist/engine/state.py

"""
Flat state export/restore.

The flat state is a plain, versioned mapping that survives a
presentation-layer lifecycle event (tear down the screen, build it again):

    format: 1
    draft: "<text as typed>"
    tasks:
      - [<id>, "<label>", <done>]

Rows are positional ([id, label, done]) and kept in collection order.

This module performs *structural* checks only. Labels are restored as
stored and are not re-validated against the draft rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final, Optional

import yaml

from .ids import IdGenerator
from .model import Task
from .store import TaskListStore


FORMAT_VERSION: Final[int] = 1

FlatState = dict[str, Any]


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RestoreError(Exception):
    """
    Raised when a flat state is malformed (missing field, wrong type).
    """

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------

def export_state(store: TaskListStore) -> FlatState:
    """Return the full store state as a flat mapping."""
    return {
        "format": FORMAT_VERSION,
        "draft": store.draft,
        "tasks": [[t.id, t.label, t.done] for t in store.tasks],
    }


def restore_state(flat: Any, *, id_generator: Optional[IdGenerator] = None) -> TaskListStore:
    """
    Rebuild a store from a flat state.

    Ids, labels, done flags, order and draft come back exactly as exported.
    Raises RestoreError on any structural problem.
    """
    if not isinstance(flat, dict):
        raise RestoreError("<root>", "flat state must be a mapping")

    _check_format(flat)

    if "draft" not in flat:
        raise RestoreError("draft", "missing required field")

    draft = flat["draft"]
    if not isinstance(draft, str):
        raise RestoreError("draft", "must be a string")

    tasks = _parse_rows(flat)

    return TaskListStore(tasks, draft=draft, id_generator=id_generator)


# ---------------------------------------------------------------------
# YAML encoding
# ---------------------------------------------------------------------

class _StateDumper(yaml.SafeDumper):
    pass


def _quoted_str(dumper: yaml.SafeDumper, value: str) -> yaml.ScalarNode:
    return dumper.represent_scalar("tag:yaml.org,2002:str", value, style='"')


_StateDumper.add_representer(str, _quoted_str)


def dump_state(flat: FlatState) -> str:
    """
    Encode a flat state as YAML text.

    Strings are always double-quoted: plain and single-quoted scalars fold
    line breaks such as U+0085, which would change the draft on reload.
    """
    return yaml.dump(flat, Dumper=_StateDumper, sort_keys=False, allow_unicode=True)


def load_state(text: str) -> FlatState:
    """
    Decode YAML text into a flat state mapping.

    Only the YAML layer is checked here; pass the result to
    restore_state for field checks.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise RestoreError("<root>", f"Invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise RestoreError("<root>", "YAML root must be a mapping/dictionary")

    return data


# ---------------------------------------------------------------------
# Field checks
# ---------------------------------------------------------------------

def _check_format(flat: dict[str, Any]) -> None:
    if "format" not in flat:
        raise RestoreError("format", "missing required field")

    value = flat["format"]
    if isinstance(value, bool) or not isinstance(value, int):
        raise RestoreError("format", "must be an integer")

    if value != FORMAT_VERSION:
        raise RestoreError("format", f"unsupported version {value} (expected {FORMAT_VERSION})")


def _parse_rows(flat: dict[str, Any]) -> list[Task]:
    if "tasks" not in flat:
        raise RestoreError("tasks", "missing required field")

    raw = flat["tasks"]
    if not isinstance(raw, list):
        raise RestoreError("tasks", "must be a list")

    out: list[Task] = []
    seen: set[int] = set()

    for i, row in enumerate(raw):
        where = f"tasks[{i}]"

        if not isinstance(row, (list, tuple)) or len(row) != 3:
            raise RestoreError(where, "must be a [id, label, done] row")

        task_id, label, done = row

        if isinstance(task_id, bool) or not isinstance(task_id, int):
            raise RestoreError(f"{where}.id", "must be an integer")
        if not isinstance(label, str):
            raise RestoreError(f"{where}.label", "must be a string")
        if not isinstance(done, bool):
            raise RestoreError(f"{where}.done", "must be a boolean")

        if task_id in seen:
            raise RestoreError(f"{where}.id", f"duplicate id {task_id}")
        seen.add(task_id)

        out.append(Task(id=task_id, label=label, done=done))

    return out
