from __future__ import annotations

import pytest

from adapters.random_source.seeded_rng import SeededRandomSource, new_simple_rng, simple_rng
from ports.random_source import RandomSource


def test_seeded_source_satisfies_port():
    assert isinstance(SeededRandomSource(1), RandomSource)


def test_same_seed_gives_same_sequence():
    a = simple_rng(1234)
    b = simple_rng(1234)

    assert [a.roll(20) for _ in range(30)] == [b.roll(20) for _ in range(30)]


def test_rolls_stay_on_the_die():
    rng = simple_rng(7)

    rolls = [rng.roll(6) for _ in range(500)]

    assert set(rolls) == {1, 2, 3, 4, 5, 6}


def test_single_sided_die_always_rolls_one():
    rng = new_simple_rng()

    assert {rng.roll(1) for _ in range(10)} == {1}


def test_zero_sided_die_is_rejected():
    with pytest.raises(ValueError):
        simple_rng(1).roll(0)


def test_spawned_sources_are_reproducible_and_independent():
    parent_a = simple_rng(5)
    parent_b = simple_rng(5)

    child_a1, child_a2 = parent_a.spawn(), parent_a.spawn()
    child_b1 = parent_b.spawn()

    seq_a1 = [child_a1.roll(1000) for _ in range(10)]
    assert seq_a1 == [child_b1.roll(1000) for _ in range(10)]
    assert seq_a1 != [child_a2.roll(1000) for _ in range(10)]


def test_new_simple_rng_uses_integer_timestamp_seed():
    rng = new_simple_rng()

    assert isinstance(rng.seed, int)
    assert rng.seed > 0
