"""Protocol classes used by bitindex."""

import abc

from typing_extensions import Protocol, runtime_checkable


@runtime_checkable
class BitMask(Protocol):
    """A protocol for objects exposing a bitmap and the number of slots it spans.

    Every :class:`~bitindex.presence.PresenceSet` satisfies this protocol, and
    so does any other object with integer ``bits`` and ``capacity``
    attributes. :meth:`~bitindex.presence.PresenceSet.absorb` accepts any
    :class:`BitMask`.

    """

    @property
    @abc.abstractmethod
    def bits(self) -> int:
        """Return the raw bitmap, bit ``p`` set iff slot ``p`` is present."""

    @property
    @abc.abstractmethod
    def capacity(self) -> int:
        """Return the number of meaningful low-order bit positions."""
