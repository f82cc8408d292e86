from __future__ import annotations

from typing import Any

import pytest

from todolist.engine.ids import CounterIdGenerator
from todolist.engine.state import (
    FORMAT_VERSION,
    RestoreError,
    dump_state,
    export_state,
    load_state,
    restore_state,
)
from todolist.engine.store import TaskListStore


def _snapshot(store: TaskListStore) -> list[tuple[int, str, bool]]:
    return [(t.id, t.label, t.done) for t in store.tasks]


@pytest.fixture()
def store() -> TaskListStore:
    s = TaskListStore.with_samples()
    s.set_draft("Walk the dog")
    s.add_task()
    s.toggle(s.tasks[0].id)
    s.set_draft("  half typed")
    return s


def test_export_layout(store: TaskListStore) -> None:
    flat = export_state(store)
    assert flat["format"] == FORMAT_VERSION
    assert flat["draft"] == "  half typed"
    assert flat["tasks"][0] == [store.tasks[0].id, "Learn Java", True]
    assert len(flat["tasks"]) == 5


def test_round_trip_is_exact(store: TaskListStore) -> None:
    restored = TaskListStore.restore(store.export())

    assert _snapshot(restored) == _snapshot(store)
    assert all(a.same_as(b) for a, b in zip(restored.tasks, store.tasks, strict=True))
    assert restored.draft == store.draft


def test_round_trip_through_yaml(store: TaskListStore) -> None:
    text = dump_state(store.export())
    restored = restore_state(load_state(text))

    assert _snapshot(restored) == _snapshot(store)
    assert restored.draft == "  half typed"


def test_restored_store_is_independent(store: TaskListStore) -> None:
    restored = TaskListStore.restore(store.export())
    restored.toggle(restored.tasks[1].id)
    assert store.tasks[1].done is False


def test_restored_counter_does_not_reissue_ids() -> None:
    s = TaskListStore.with_samples(id_generator=CounterIdGenerator())
    restored = restore_state(s.export(), id_generator=CounterIdGenerator())
    restored.set_draft("new")
    task = restored.add_task()
    assert task is not None
    assert task.id not in {t.id for t in s.tasks}


def _valid() -> dict[str, Any]:
    return {"format": 1, "draft": "", "tasks": [[1, "a", False], [2, "b", True]]}


@pytest.mark.parametrize(
    "mutate, field",
    [
        (lambda d: d.pop("format"), "format"),
        (lambda d: d.update(format=2), "format"),
        (lambda d: d.update(format="1"), "format"),
        (lambda d: d.pop("draft"), "draft"),
        (lambda d: d.update(draft=None), "draft"),
        (lambda d: d.pop("tasks"), "tasks"),
        (lambda d: d.update(tasks={"a": 1}), "tasks"),
        (lambda d: d["tasks"].append([3, "c"]), "tasks[2]"),
        (lambda d: d["tasks"].append("3, c, false"), "tasks[2]"),
        (lambda d: d["tasks"].append(["3", "c", False]), "tasks[2].id"),
        (lambda d: d["tasks"].append([True, "c", False]), "tasks[2].id"),
        (lambda d: d["tasks"].append([3, None, False]), "tasks[2].label"),
        (lambda d: d["tasks"].append([3, "c", "no"]), "tasks[2].done"),
        (lambda d: d["tasks"].append([1, "dup", False]), "tasks[2].id"),
    ],
)
def test_malformed_state_fails_fast(mutate: Any, field: str) -> None:
    flat = _valid()
    mutate(flat)

    with pytest.raises(RestoreError) as excinfo:
        restore_state(flat)

    assert excinfo.value.field == field
    assert str(excinfo.value).startswith(f"{field}: ")


def test_non_mapping_root_rejected() -> None:
    with pytest.raises(RestoreError):
        restore_state([[1, "a", False]])


def test_load_state_rejects_bad_yaml() -> None:
    with pytest.raises(RestoreError):
        load_state("format: [1\n")

    with pytest.raises(RestoreError):
        load_state("- just a list\n")


@pytest.mark.parametrize("draft", ["\x85", "x\x85 ", " a", "a\rb", "  'quoted'  ", "# not a comment", "true", "1"])
def test_yaml_keeps_draft_verbatim(draft: str) -> None:
    s = TaskListStore(draft=draft)
    restored = restore_state(load_state(dump_state(s.export())))
    assert restored.draft == draft
