from __future__ import annotations

import random
from typing import Iterator

import pytest

from bitindex.presence import (
    PresenceSet,
    PresenceSet8,
    PresenceSet16,
    PresenceSet32,
    PresenceSet64,
    PresenceSet128,
)

VARIANTS = [PresenceSet8, PresenceSet16, PresenceSet32, PresenceSet64, PresenceSet128]


@pytest.fixture(params=VARIANTS, ids=lambda cls: cls.__name__)  # type: ignore[misc]
def variant(request: pytest.FixtureRequest) -> type[PresenceSet]:
    return request.param


@pytest.fixture  # type: ignore[misc]
def rng() -> random.Random:
    return random.Random(42)


def present_slots(bits: int) -> list[int]:
    """Return the set positions of `bits` in increasing order by linear scan."""
    return [position for position in range(bits.bit_length()) if bits >> position & 1]


def random_sets(
    cls: type[PresenceSet], rng: random.Random, count: int = 25
) -> Iterator[PresenceSet]:
    """Yield `count` presence sets of random capacity and random contents."""
    for _ in range(count):
        capacity = rng.randint(1, cls.width)
        yield cls.from_bits(rng.getrandbits(capacity), capacity)
