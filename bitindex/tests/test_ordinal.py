from __future__ import annotations

import random

import pytest

from bitindex.presence import PresenceSet, PresenceSet8, PresenceSet64

from .conftest import present_slots, random_sets


@pytest.fixture  # type: ignore[misc]
def slots() -> PresenceSet8:
    result = PresenceSet8(4)
    result.unset_bit(1)
    return result


@pytest.mark.parametrize(("rank", "expected"), [(0, 0), (1, 2), (2, 3), (3, None)])
def test_get(slots: PresenceSet8, rank: int, expected: int | None) -> None:
    assert slots.get(rank) == expected
    assert slots.get_from_low_end(rank) == expected
    assert slots.bits == 0b1101


@pytest.mark.parametrize(("rank", "expected"), [(0, 3), (1, 2), (2, 0), (3, None)])
def test_get_from_high_end(
    slots: PresenceSet8, rank: int, expected: int | None
) -> None:
    assert slots.get_from_high_end(rank) == expected
    assert slots.bits == 0b1101


def test_far_ranks_at_full_width() -> None:
    slots = PresenceSet64(64)
    slots.unset_bit(1)
    assert slots.get_from_low_end(61) == 62
    assert slots.get_from_high_end(60) == 3
    assert slots.nb_elements() == 63


def test_ordinal_matches_linear_scan(
    variant: type[PresenceSet], rng: random.Random
) -> None:
    for slots in random_sets(variant, rng):
        expected = present_slots(slots.bits)
        before = slots.copy()
        for rank in range(slots.capacity):
            if rank < len(expected):
                assert slots.get_from_low_end(rank) == expected[rank]
                assert slots.get_from_high_end(rank) == expected[-rank - 1]
            else:
                assert slots.get_from_low_end(rank) is None
                assert slots.get_from_high_end(rank) is None
        assert slots == before


def test_rank_zero_is_extremum(
    variant: type[PresenceSet], rng: random.Random
) -> None:
    for slots in random_sets(variant, rng):
        assert slots.get_from_low_end(0) == slots.smallest()
        assert slots.get_from_high_end(0) == slots.largest()

    empty = variant.empty(3)
    assert empty.get_from_low_end(0) is None
    assert empty.get_from_high_end(0) is None


def test_ordinal_bounds_follow_capacity(variant: type[PresenceSet]) -> None:
    slots = variant.empty(4)
    slots.set_bit(0)

    # within capacity but beyond the population
    assert slots.get_from_low_end(3) is None
    assert slots.get_from_high_end(3) is None
    assert slots.pop_from_low_end(3) is None

    for method in (
        slots.get_from_low_end,
        slots.get_from_high_end,
        slots.pop_from_low_end,
        slots.pop_from_high_end,
        slots.get,
        slots.pop,
    ):
        with pytest.raises(IndexError):
            method(4)
        with pytest.raises(IndexError):
            method(-1)
    assert slots.bits == 0b1


def test_ordinal_on_zero_capacity(variant: type[PresenceSet]) -> None:
    slots = variant(0)
    with pytest.raises(IndexError):
        slots.get_from_low_end(0)
    assert slots.smallest() is None
    assert slots.pop_smallest() is None


def test_pop_from_low_end(slots: PresenceSet8) -> None:
    assert slots.pop_from_low_end(1) == 2
    assert slots.bits == 0b1001
    assert slots.pop(1) == 3
    assert slots.bits == 0b0001
    assert slots.pop(1) is None
    assert slots.bits == 0b0001


def test_pop_from_high_end(slots: PresenceSet8) -> None:
    assert slots.pop_from_high_end(2) == 0
    assert slots.bits == 0b1100
    assert slots.pop_from_high_end(0) == 3
    assert slots.bits == 0b0100
    assert slots.pop_from_high_end(1) is None
    assert slots.pop_from_high_end(0) == 2
    assert slots.is_empty()


def test_pop_matches_linear_scan(
    variant: type[PresenceSet], rng: random.Random
) -> None:
    for slots in random_sets(variant, rng):
        expected = present_slots(slots.bits)
        if not expected:
            continue
        rank = rng.randrange(len(expected))

        low = slots.copy()
        assert low.pop_from_low_end(rank) == expected[rank]
        assert present_slots(low.bits) == expected[:rank] + expected[rank + 1 :]

        high = slots.copy()
        assert high.pop_from_high_end(rank) == expected[-rank - 1]
        assert sorted(present_slots(high.bits) + [expected[-rank - 1]]) == expected
