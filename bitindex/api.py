"""Helpers for choosing the presence set variant that fits a capacity.

Each :class:`~bitindex.presence.PresenceSet` variant is backed by a word of a
fixed width. Callers that know how many slots they need, but not which width
to use, can let :func:`for_capacity` pick the narrowest variant that fits.

"""

from __future__ import annotations

import logging

from public import public

from .presence import (
    PresenceSet,
    PresenceSet8,
    PresenceSet16,
    PresenceSet32,
    PresenceSet64,
    PresenceSet128,
)

logger = logging.getLogger(__name__)

VARIANTS: tuple[type[PresenceSet], ...] = (
    PresenceSet8,
    PresenceSet16,
    PresenceSet32,
    PresenceSet64,
    PresenceSet128,
)

WIDTHS: tuple[int, ...] = tuple(variant.width for variant in VARIANTS)
public(WIDTHS=WIDTHS)

_BY_WIDTH = {cls.width: cls for cls in VARIANTS}


@public  # type: ignore[misc]
def variant(width: int) -> type[PresenceSet]:
    """Return the presence set class backed by a word of `width` bits.

    Raises
    ------
    ValueError
        If no variant has a backing word of `width` bits.

    """
    try:
        cls = _BY_WIDTH[width]
    except KeyError:
        raise ValueError(
            f"no presence set of width {width}, expected one of {WIDTHS}"
        ) from None
    return cls


@public  # type: ignore[misc]
def for_capacity(capacity: int) -> type[PresenceSet]:
    """Return the narrowest presence set class able to hold `capacity` slots.

    Raises
    ------
    ValueError
        If `capacity` is negative or larger than the widest variant.

    Examples
    --------
    >>> from bitindex.api import for_capacity
    >>> for_capacity(12).__name__
    'PresenceSet16'

    """
    if capacity < 0:
        raise ValueError(
            f"capacity not greater than or equal to 0, capacity == {capacity}"
        )
    cls = next((cls for cls in VARIANTS if capacity <= cls.width), None)
    if cls is None:
        raise ValueError(
            f"capacity {capacity} exceeds the widest presence set ({WIDTHS[-1]} bits)"
        )
    logger.debug("capacity %d fits in %s", capacity, cls.__name__)
    return cls


@public  # type: ignore[misc]
def presence_set(capacity: int, *, empty: bool = False) -> PresenceSet:
    """Construct a presence set of `capacity` slots in the narrowest variant.

    Parameters
    ----------
    capacity
        The number of slots to track.
    empty
        Start with no slot present instead of all of them.

    """
    cls = for_capacity(capacity)
    return cls.empty(capacity) if empty else cls(capacity)
