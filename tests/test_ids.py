from __future__ import annotations

import pytest

from todolist.engine.ids import CounterIdGenerator, RandomIdGenerator, make_id_generator


def test_random_ids_are_distinct_and_fit_63_bits() -> None:
    gen = RandomIdGenerator()
    ids = [gen() for _ in range(1000)]
    assert len(set(ids)) == len(ids)
    assert all(0 <= n < 2**63 for n in ids)


def test_random_generator_redraws_on_repeat(monkeypatch: pytest.MonkeyPatch) -> None:
    draws = iter([7, 7, 7, 9])
    monkeypatch.setattr("todolist.engine.ids.secrets.randbits", lambda _bits: next(draws))

    gen = RandomIdGenerator()
    assert gen() == 7
    assert gen() == 9


def test_counter_is_monotonic_and_honours_reserve() -> None:
    gen = CounterIdGenerator()
    assert [gen(), gen(), gen()] == [1, 2, 3]

    gen.reserve(10)
    assert gen() == 11

    gen.reserve(5)
    assert gen() == 12


def test_make_id_generator() -> None:
    assert isinstance(make_id_generator("random"), RandomIdGenerator)
    assert isinstance(make_id_generator(" Counter "), CounterIdGenerator)
    with pytest.raises(ValueError):
        make_id_generator("uuid")
