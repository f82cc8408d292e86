# src/todolist/engine/store.py

"""
Task list store.

This module contains *all* state-changing operations on the task list
and the draft input: add, toggle, delete, clear completed, set draft.

Design principles:
- One ordered list is the single source; active/completed are filters.
- Every operation is total: unknown ids and invalid drafts are no-ops.
- Effective mutations bump `version` and notify listeners; no-ops don't.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import TYPE_CHECKING, Callable, Iterable, Optional

from .ids import IdGenerator, RandomIdGenerator
from .model import Task, sample_tasks, split_by_done
from .validate import Validation, compute_validation

if TYPE_CHECKING:
    from .state import FlatState


logger = logging.getLogger(__name__)

Listener = Callable[["TaskListStore"], None]


class TaskListStore:
    def __init__(
        self,
        seed: Optional[Iterable[Task]] = None,
        *,
        draft: str = "",
        id_generator: Optional[IdGenerator] = None,
    ) -> None:
        self._lock = threading.RLock()
        self._next_id: IdGenerator = id_generator or RandomIdGenerator()
        self._tasks: list[Task] = []
        self._draft = draft
        self._version = 0
        self._listeners: list[Listener] = []

        seen: set[int] = set()
        for task in seed or ():
            if task.id in seen:
                raise ValueError(f"Duplicate task id in seed: {task.id}")
            seen.add(task.id)
            self._tasks.append(task)
            self._reserve(task.id)

    @classmethod
    def with_samples(cls, *, id_generator: Optional[IdGenerator] = None) -> "TaskListStore":
        """Build a store seeded with the four first-launch sample tasks."""
        gen = id_generator or RandomIdGenerator()
        return cls(sample_tasks(gen), id_generator=gen)

    # -----------------------------------------------------------------
    # Read-only views
    # -----------------------------------------------------------------

    @property
    def tasks(self) -> tuple[Task, ...]:
        with self._lock:
            return tuple(self._tasks)

    @property
    def draft(self) -> str:
        return self._draft

    @property
    def validation(self) -> Validation:
        return compute_validation(self._draft)

    @property
    def version(self) -> int:
        return self._version

    def active_tasks(self) -> tuple[Task, ...]:
        with self._lock:
            return split_by_done(self._tasks)[0]

    def completed_tasks(self) -> tuple[Task, ...]:
        with self._lock:
            return split_by_done(self._tasks)[1]

    def get(self, task_id: int) -> Optional[Task]:
        with self._lock:
            i = self._index_of(task_id)
            return self._tasks[i] if i is not None else None

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return isinstance(task_id, int) and self.get(task_id) is not None

    # -----------------------------------------------------------------
    # Mutations
    # -----------------------------------------------------------------

    def set_draft(self, text: str) -> None:
        """Replace the draft verbatim (no trimming, no clamp)."""
        with self._lock:
            if text == self._draft:
                return
            self._draft = text
            self._changed()

    def add_task(self) -> Optional[Task]:
        """
        Append the current draft as a new active task.

        Returns the new task, or None if the draft is invalid (nothing
        changes in that case).
        """
        with self._lock:
            v = compute_validation(self._draft)
            if not v.valid:
                logger.debug("add ignored: %s", v.message)
                return None

            task = Task(id=self._fresh_id(), label=v.trimmed, done=False)
            self._tasks.append(task)
            self._draft = ""
            logger.debug("task added: id=%s label=%r", task.id, task.label)
            self._changed()
            return task

    def toggle(self, task_id: int) -> Optional[Task]:
        """
        Flip done, keeping the task at its position.

        The stored task is replaced by a copy; returns the new task, or
        None for an unknown id.
        """
        with self._lock:
            i = self._index_of(task_id)
            if i is None:
                logger.debug("toggle ignored: unknown id %s", task_id)
                return None

            task = replace(self._tasks[i], done=not self._tasks[i].done)
            self._tasks[i] = task
            logger.debug("task toggled: id=%s done=%s", task.id, task.done)
            self._changed()
            return task

    def delete(self, task_id: int) -> bool:
        """Remove the matching task. Returns False if it was not there."""
        with self._lock:
            i = self._index_of(task_id)
            if i is None:
                logger.debug("delete ignored: unknown id %s", task_id)
                return False

            del self._tasks[i]
            logger.debug("task deleted: id=%s", task_id)
            self._changed()
            return True

    def clear_completed(self) -> int:
        """Remove every done task. Returns how many were removed."""
        with self._lock:
            kept = [t for t in self._tasks if not t.done]
            removed = len(self._tasks) - len(kept)
            if not removed:
                return 0

            self._tasks = kept
            logger.debug("cleared %d completed task(s)", removed)
            self._changed()
            return removed

    # -----------------------------------------------------------------
    # Change notification
    # -----------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call `listener(store)` after every effective mutation.

        Returns a callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -----------------------------------------------------------------
    # Flat state
    # -----------------------------------------------------------------

    def export(self) -> "FlatState":
        from .state import export_state

        return export_state(self)

    @classmethod
    def restore(
        cls,
        flat: "FlatState",
        *,
        id_generator: Optional[IdGenerator] = None,
    ) -> "TaskListStore":
        from .state import restore_state

        return restore_state(flat, id_generator=id_generator)

    # -----------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------

    def _index_of(self, task_id: int) -> Optional[int]:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    def _reserve(self, task_id: int) -> None:
        reserve = getattr(self._next_id, "reserve", None)
        if reserve is not None:
            reserve(task_id)

    def _fresh_id(self) -> int:
        while True:
            n = self._next_id()
            if self._index_of(n) is None:
                return n

    def _changed(self) -> None:
        self._version += 1
        for listener in list(self._listeners):
            listener(self)

    def __repr__(self) -> str:
        active, completed = split_by_done(self._tasks)
        return (
            f"TaskListStore(active={len(active)}, completed={len(completed)}, "
            f"draft={self._draft!r})"
        )
