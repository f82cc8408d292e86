# src/todolist/engine/render.py

"""
Rendering helpers for the single to-do screen.

Screen layout (top to bottom):
- title,
- input row (draft, add button state, validation message),
- active section ("Items") or an empty hint,
- completed section ("Completed Items" + clear button) or an empty hint.

It is presentation-only: it reads store snapshots and never mutates.
"""

from __future__ import annotations

import re
import shutil
import sys
from dataclasses import dataclass
from typing import Final, Sequence

from .model import Task
from .store import TaskListStore


# ---------------------------------------------------------------------
# ANSI / terminal helpers
# ---------------------------------------------------------------------

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[90m"
_STRIKE = "\033[9m"
_ERROR = "\033[31m"

TITLE: Final[str] = "TODO List"
ACTIVE_HEADER: Final[str] = "Items"
COMPLETED_HEADER: Final[str] = "Completed Items"
ACTIVE_EMPTY: Final[str] = "No items yet."
COMPLETED_EMPTY: Final[str] = "No completed items yet."
DRAFT_PLACEHOLDER: Final[str] = "Add a task…"


def _supports_color() -> bool:
    """Return True if stdout is a TTY."""
    return sys.stdout.isatty()


def _visible_len(s: str) -> int:
    """Return string length without ANSI colour escapes."""
    return len(_ANSI_RE.sub("", s))


# ---------------------------------------------------------------------
# Row numbering
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ScreenRows:
    """
    Display order of tasks on screen: active first, then completed.

    Row numbers are 1-based and only valid for the snapshot they were
    built from.
    """

    active: tuple[Task, ...]
    completed: tuple[Task, ...]

    @classmethod
    def of(cls, store: TaskListStore) -> "ScreenRows":
        return cls(active=store.active_tasks(), completed=store.completed_tasks())

    @property
    def all(self) -> tuple[Task, ...]:
        return self.active + self.completed

    def task_id_at(self, number: int) -> int | None:
        rows = self.all
        if number < 1 or number > len(rows):
            return None
        return rows[number - 1].id


# ---------------------------------------------------------------------
# Screen
# ---------------------------------------------------------------------

def render_screen(store: TaskListStore, *, color: bool = True) -> str:
    """Render the whole screen as text (no trailing newline)."""
    use_color = color and _supports_color()
    width = min(60, shutil.get_terminal_size(fallback=(60, 24)).columns)
    rows = ScreenRows.of(store)

    def c(s: str, code: str) -> str:
        return f"{code}{s}{_RESET}" if use_color else s

    rule = c("-" * width, _DIM)
    lines: list[str] = [c(TITLE, _BOLD), ""]

    lines.extend(_input_row(store, c))
    lines.append(rule)

    if rows.active:
        lines.append(c(ACTIVE_HEADER, _BOLD))
        lines.extend(_task_lines(rows.active, start=1, c=c))
    else:
        lines.append(c(ACTIVE_EMPTY, _DIM))

    lines.append(rule)

    if rows.completed:
        lines.append(c(COMPLETED_HEADER, _BOLD))
        lines.extend(_task_lines(rows.completed, start=len(rows.active) + 1, c=c))
        button = "[Clear Completed]"
        pad = max(0, width - _visible_len(button))
        lines.append(" " * pad + button)
    else:
        lines.append(c(COMPLETED_EMPTY, _DIM))

    return "\n".join(lines)


def _input_row(store: TaskListStore, c) -> list[str]:
    v = store.validation
    text = store.draft if store.draft else c(DRAFT_PLACEHOLDER, _DIM)
    button = "[Add]" if v.valid else c("[Add] (disabled)", _DIM)

    out = [f"> {text}  {button}"]
    if v.message is not None:
        out.append(c(v.message, _ERROR))
    return out


def _task_lines(tasks: Sequence[Task], *, start: int, c) -> list[str]:
    out: list[str] = []
    for n, task in enumerate(tasks, start=start):
        box = "[x]" if task.done else "[ ]"
        label = c(task.label, _STRIKE + _DIM) if task.done else task.label
        out.append(f"{n:>3}. {box} {label}")
    return out
