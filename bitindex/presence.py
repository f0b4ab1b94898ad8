r"""Fixed-capacity presence sets backed by a single machine word.

A presence set tracks which of ``capacity`` slots, numbered ``0`` through
``capacity - 1``, are currently present. Slot ``p`` is present iff bit ``p`` of
the backing integer is set, with the least significant bit standing for slot
``0``.

The backing word has a fixed width :math:`W` of 8, 16, 32, 64 or 128 bits, one
concrete class per width. Python integers are unbounded, so every value stored
in a presence set is masked to :math:`W` bits, which mirrors the behavior of a
fixed-size unsigned integer.

Two kinds of failure are kept apart:

* Asking for an index at or beyond ``capacity`` is a programming error and
  raises :class:`IndexError`.
* Asking for an extremum or a rank that doesn't exist among the present slots
  is ordinary and returns :data:`None`.

Ordinal selection, finding the :math:`k`-th present slot from either end, is
done in :math:`O\left(\min(k, m - k)\right)` pops where :math:`m` is the number
of present slots, by answering far-half ranks from the opposite end.

"""

from __future__ import annotations

from typing import Any, ClassVar, Iterator, Optional, TypeVar

import toolz

from .protocols import BitMask

P = TypeVar("P", bound="PresenceSet")


def full_mask(nbits: int) -> int:
    """Return an integer with exactly the low `nbits` bits set."""
    return (1 << nbits) - 1


def lowest_bit(bits: int) -> int:
    """Return the position of the lowest set bit of a nonzero `bits`.

    This is the count of trailing zeros of `bits`.

    """
    assert bits > 0, f"bits must be positive, bits == {bits}"
    return (bits & -bits).bit_length() - 1


def highest_bit(bits: int) -> int:
    """Return the position of the highest set bit of a nonzero `bits`."""
    assert bits > 0, f"bits must be positive, bits == {bits}"
    return bits.bit_length() - 1


class PresenceSet:
    """A set of present slots stored as one fixed-width unsigned integer.

    :class:`PresenceSet` itself has no backing width and can't be
    instantiated. Use one of :class:`PresenceSet8`, :class:`PresenceSet16`,
    :class:`PresenceSet32`, :class:`PresenceSet64` or :class:`PresenceSet128`,
    or let :func:`bitindex.api.for_capacity` pick one.

    Attributes
    ----------
    width
        The number of bits in the backing word.
    mask
        An integer with all `width` bits set.

    Examples
    --------
    >>> from bitindex import PresenceSet8
    >>> slots = PresenceSet8(4)
    >>> slots
    PresenceSet8(capacity=4, bits=0b00001111)
    >>> slots.unset_bit(1)
    >>> list(slots)
    [0, 2, 3]
    >>> slots.get_from_low_end(1), slots.get_from_high_end(1)
    (2, 2)
    >>> slots.get_from_low_end(3) is None
    True

    """

    __slots__ = "_bits", "_capacity"

    width: ClassVar[int]
    mask: ClassVar[int]

    def __init_subclass__(cls, *, width: Optional[int] = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if width is not None:
            cls.width = width
            cls.mask = full_mask(width)

    def __init__(self, capacity: int) -> None:
        """Construct a presence set with all `capacity` slots present.

        Parameters
        ----------
        capacity
            The number of slots to track.

        Raises
        ------
        ValueError
            If `capacity` is negative or doesn't fit in the backing word.

        """
        self._capacity = self._check_capacity(capacity)
        self._bits = full_mask(capacity)

    @classmethod
    def _check_capacity(cls, capacity: int) -> int:
        try:
            width = cls.width
        except AttributeError:
            raise TypeError(
                f"{cls.__name__} has no backing width, use one of its width variants"
            ) from None
        if capacity < 0:
            raise ValueError(
                f"capacity not greater than or equal to 0, capacity == {capacity}"
            )
        if capacity > width:
            raise ValueError(
                f"{cls.__name__} can only keep {width} bits, not {capacity}"
            )
        return capacity

    @classmethod
    def empty(cls: type[P], capacity: int) -> P:
        """Construct a presence set of `capacity` slots with none present.

        Raises
        ------
        ValueError
            If `capacity` is negative or doesn't fit in the backing word.

        """
        result = cls(capacity)
        result.clear()
        return result

    @classmethod
    def from_bits(cls: type[P], bits: int, capacity: int) -> P:
        """Construct a presence set of `capacity` slots from a raw bitmap.

        Raises
        ------
        ValueError
            If `capacity` is invalid or `bits` has a bit set at or beyond
            `capacity`.

        """
        result = cls.empty(capacity)
        if bits < 0 or bits & ~full_mask(capacity):
            raise ValueError(f"bits {bits:#b} do not fit in {capacity} slots")
        result._bits = bits
        return result

    @property
    def bits(self) -> int:
        """Return the raw bitmap."""
        return self._bits

    @property
    def capacity(self) -> int:
        """Return the number of slots tracked by this set."""
        return self._capacity

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(capacity={self._capacity}, "
            f"bits={self._bits:#0{self.width + 2}b})"
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, PresenceSet):
            return NotImplemented
        return (
            type(self) is type(other)
            and self._bits == other._bits
            and self._capacity == other._capacity
        )

    def __len__(self) -> int:
        """Return the number of present slots."""
        return self.nb_elements()

    def __contains__(self, slot: Any) -> bool:
        """Check whether `slot` is present."""
        return isinstance(slot, int) and slot >= 0 and bool(self._bits >> slot & 1)

    def __iter__(self) -> Iterator[int]:
        """Iterate over the present slots in increasing order."""
        return iter(self.copy().pop_smallest, None)

    def __reversed__(self) -> Iterator[int]:
        """Iterate over the present slots in decreasing order."""
        return iter(self.copy().pop_largest, None)

    def copy(self: P) -> P:
        """Return an independent copy of this set."""
        cls = type(self)
        result = cls.__new__(cls)
        result._bits = self._bits
        result._capacity = self._capacity
        return result

    __copy__ = copy

    def is_empty(self) -> bool:
        """Return whether no slot is present."""
        return not self._bits

    def nb_elements(self) -> int:
        """Return the number of present slots."""
        return self._bits.bit_count()

    def clear(self) -> None:
        """Mark every slot as absent."""
        self._bits = 0

    def restore(self) -> None:
        """Mark every slot as present again."""
        self._bits = full_mask(self._capacity)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self._capacity:
            raise IndexError(
                f"{type(self).__name__} can only handle inputs up to "
                f"{self._capacity}, index == {index}"
            )

    def _single_bit(self, index: int) -> int:
        self._check_index(index)
        return 1 << index

    def set_bit(self, index: int) -> None:
        """Mark slot `index` as present.

        Raises
        ------
        IndexError
            If `index` is not a slot of this set.

        """
        self._bits |= self._single_bit(index)

    def unset_bit(self, index: int) -> None:
        """Mark slot `index` as absent.

        Raises
        ------
        IndexError
            If `index` is not a slot of this set.

        """
        self._bits &= ~self._single_bit(index)

    def _discard(self, position: int) -> None:
        # positions come from the bitmap itself, so they may sit beyond
        # capacity after a careless `add`
        self._bits &= ~(1 << position)

    def smallest(self) -> int | None:
        """Return the lowest present slot, or :data:`None` if there isn't one."""
        bits = self._bits
        return lowest_bit(bits) if bits else None

    def largest(self) -> int | None:
        """Return the highest present slot, or :data:`None` if there isn't one.

        For a nonzero word this is ``(width - 1) - clz(bits)``.

        """
        bits = self._bits
        return highest_bit(bits) if bits else None

    def pop_smallest(self) -> int | None:
        """Remove and return the lowest present slot, if any."""
        result = self.smallest()
        if result is not None:
            self._discard(result)
        return result

    def pop_largest(self) -> int | None:
        """Remove and return the highest present slot, if any."""
        result = self.largest()
        if result is not None:
            self._discard(result)
        return result

    def add(self, raw_bits: int) -> None:
        """Merge the raw bitmap `raw_bits` into this set.

        `raw_bits` is truncated to the backing width but is **not** checked
        against :attr:`capacity`. Callers must not pass bits at or beyond
        :attr:`capacity`; doing so breaks this set's invariants.

        """
        self._bits |= raw_bits & self.mask

    def absorb(self, other: BitMask) -> None:
        """Merge `other` into this set.

        The present slots become the union of both sets and the capacity
        becomes the larger of the two capacities.

        Raises
        ------
        ValueError
            If the capacity of `other` doesn't fit in this set's backing word.

        """
        capacity = self._check_capacity(other.capacity)
        self._bits |= other.bits & self.mask
        self._capacity = max(self._capacity, capacity)

    def _select(self, rank: int, *, from_low_end: bool) -> int | None:
        nb_elements = self.nb_elements()
        if rank >= nb_elements:
            return None
        if not rank:
            return self.smallest() if from_low_end else self.largest()
        if rank == nb_elements - 1:
            return self.largest() if from_low_end else self.smallest()
        if 2 * rank > nb_elements:
            # closer to the other end
            return self._select(
                nb_elements - rank - 1, from_low_end=not from_low_end
            )
        scratch = self.copy()
        pop = scratch.pop_smallest if from_low_end else scratch.pop_largest
        return toolz.nth(rank, iter(pop, None))

    def get_from_low_end(self, rank: int) -> int | None:
        """Return the present slot of rank `rank` counting up from slot 0.

        Parameters
        ----------
        rank
            A zero-based rank among the present slots.

        Returns
        -------
        int or None
            The slot, or :data:`None` if fewer than ``rank + 1`` slots are
            present.

        Raises
        ------
        IndexError
            If `rank` is not less than :attr:`capacity`, however many slots
            are present.

        """
        self._check_index(rank)
        return self._select(rank, from_low_end=True)

    def get_from_high_end(self, rank: int) -> int | None:
        """Return the present slot of rank `rank` counting down from the top.

        See :meth:`get_from_low_end` for the meaning of the return value and
        the exceptions raised.

        """
        self._check_index(rank)
        return self._select(rank, from_low_end=False)

    get = get_from_low_end

    def pop_from_low_end(self, rank: int) -> int | None:
        """Remove and return the result of :meth:`get_from_low_end`."""
        result = self.get_from_low_end(rank)
        if result is not None:
            self._discard(result)
        return result

    def pop_from_high_end(self, rank: int) -> int | None:
        """Remove and return the result of :meth:`get_from_high_end`."""
        result = self.get_from_high_end(rank)
        if result is not None:
            self._discard(result)
        return result

    pop = pop_from_low_end


class PresenceSet8(PresenceSet, width=8):
    """A presence set of at most 8 slots."""

    __slots__ = ()


class PresenceSet16(PresenceSet, width=16):
    """A presence set of at most 16 slots."""

    __slots__ = ()


class PresenceSet32(PresenceSet, width=32):
    """A presence set of at most 32 slots."""

    __slots__ = ()


class PresenceSet64(PresenceSet, width=64):
    """A presence set of at most 64 slots."""

    __slots__ = ()


class PresenceSet128(PresenceSet, width=128):
    """A presence set of at most 128 slots."""

    __slots__ = ()
