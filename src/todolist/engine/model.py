# src/todolist/engine/model.py

"""
Core domain models.

This module defines the in-memory representation of a task and the
sample seed shown on first launch.

No rendering or serialisation should happen here.
"""

from dataclasses import dataclass
from typing import Callable, Final, Iterable


# ---------------------------------------------------------------------
# Task
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Task:
    """
    A single to-do entry.

    Notes:
    - id is the only identity; two tasks with equal labels are distinct.
    - label is trimmed and length-checked before a Task is built
      (see validate.compute_validation), not here.
    - Task is immutable; toggling done replaces the task at its
      position with a copy (see TaskListStore.toggle), so snapshots
      handed out by the store never change under the caller.
    """

    id: int
    label: str
    done: bool = False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def same_as(self, other: "Task") -> bool:
        """Return True if every field matches (not just the id)."""
        return (self.id, self.label, self.done) == (other.id, other.label, other.done)


# ---------------------------------------------------------------------
# Sample seed
# ---------------------------------------------------------------------

SAMPLE_TASKS: Final[tuple[tuple[str, bool], ...]] = (
    # Active
    ("Learn Java", False),
    ("Complete Math homework", False),
    # Completed
    ("Complete Mini Project", True),
    ("Buy groceries", True),
)


def sample_tasks(next_id: Callable[[], int]) -> list[Task]:
    """
    Build the first-launch seed: two active and two completed tasks.

    Ids come from `next_id` so the seed obeys the same uniqueness rule
    as tasks added later.
    """
    return [Task(id=next_id(), label=label, done=done) for label, done in SAMPLE_TASKS]


# ---------------------------------------------------------------------
# Partition helpers
# ---------------------------------------------------------------------

def split_by_done(tasks: Iterable[Task]) -> tuple[tuple[Task, ...], tuple[Task, ...]]:
    """
    Partition tasks into (active, completed).

    This is a filter, not a sort: relative order is kept in both halves.
    """
    active: list[Task] = []
    completed: list[Task] = []
    for t in tasks:
        (completed if t.done else active).append(t)
    return tuple(active), tuple(completed)
