from __future__ import annotations

import logging
from bisect import bisect_left, bisect_right
from collections.abc import Iterable, Iterator
from typing import Generic

from .config import config
from .exceptions import CanonicalFormError
from .typings import KT, VT, Breakpoint, Interval

logger = logging.getLogger(__name__)
logger.setLevel(config.log_level)


class CompressedIntervalMap(Generic[KT, VT]):
    """
    A mapping from every key of a totally ordered key space to a value.

    The whole key space initially maps to ``base_value``. Half-open ranges
    ``[begin, end)`` are reassigned in bulk with :meth:`assign`. Only the points
    where the value changes (breakpoints) are stored, in two parallel sorted
    lists searched with binary search, and the stored form is always minimal:

    - consecutive breakpoints carry different values;
    - the first breakpoint never carries ``base_value``.

    Keys need only support ``<``; values need only support ``==``.

    Example::

        m = CompressedIntervalMap("a")
        m.assign(3, 5, "b")
        m[2], m[3], m[5]  # ('a', 'b', 'a')
        str(m)  # '[-inf:a][3:b][5:a]'
        m.assign(2, 3, "c")
        str(m)  # '[-inf:a][2:c][3:b][5:a]'
    """

    __slots__ = ("_base_value", "_keys", "_values")

    def __init__(self, base_value: VT) -> None:
        """Associate the whole key space with base_value."""
        self._base_value = base_value
        self._keys: list[KT] = []
        self._values: list[VT] = []

    @classmethod
    def from_ranges(
        cls, base_value: VT, ranges: Iterable[tuple[KT, KT, VT]]
    ) -> CompressedIntervalMap[KT, VT]:
        """
        Build a map by assigning each ``(begin, end, value)`` triple in order.
        Later ranges override earlier ones where they overlap.
        """
        result: CompressedIntervalMap[KT, VT] = cls(base_value)
        for key_begin, key_end, value in ranges:
            result.assign(key_begin, key_end, value)
        return result

    @property
    def base_value(self) -> VT:
        """The value of every key below the smallest breakpoint."""
        return self._base_value

    def lookup(self, key: KT) -> VT:
        """
        Returns the value of the breakpoint with the greatest key <= the given
        key, or the base value if there is no such breakpoint.
        """
        pos = bisect_right(self._keys, key)
        if pos == 0:
            return self._base_value
        return self._values[pos - 1]

    def assign(self, key_begin: KT, key_end: KT, value: VT) -> None:
        """
        Assign value to every key in [key_begin, key_end), leaving all other
        keys untouched.

        If ``not key_begin < key_end`` the range is empty and nothing happens.
        """
        if not key_begin < key_end:
            logger.debug(f"Ignored empty range [{key_begin!r}, {key_end!r})")
            return

        keys = self._keys
        values = self._values

        # Every breakpoint in keys[start:stop] lies within [key_begin, key_end].
        start = bisect_left(keys, key_begin)
        stop = bisect_right(keys, key_end)

        head_value = values[start - 1] if start > 0 else self._base_value
        tail_value = values[stop - 1] if stop > 0 else self._base_value

        new_keys: list[KT] = []
        new_values: list[VT] = []
        if not head_value == value:
            new_keys.append(key_begin)
            new_values.append(value)
        if not tail_value == value:
            new_keys.append(key_end)
            new_values.append(tail_value)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"assign [{key_begin!r}, {key_end!r}) -> {value!r}: "
                f"replacing {stop - start} breakpoint(s) with {len(new_keys)}"
            )
        keys[start:stop] = new_keys
        values[start:stop] = new_values

    def __getitem__(self, key: KT) -> VT:
        return self.lookup(key)

    def __setitem__(self, key: slice, value: VT) -> None:
        """Slice assignment: ``m[begin:end] = value`` is ``m.assign(begin, end, value)``."""
        if not isinstance(key, slice):
            raise TypeError(
                f"{self.__class__.__name__!r} object only supports slice assignment"
            )
        if key.start is None or key.stop is None or key.step is not None:
            raise TypeError(
                f"{self.__class__.__name__!r} slice assignment requires "
                "both bounds and no step"
            )
        self.assign(key.start, key.stop, value)

    def __len__(self) -> int:
        """Number of stored breakpoints."""
        return len(self._keys)

    def items(self) -> Iterator[Breakpoint[KT, VT]]:
        """Iterate over (breakpoint_key, value) pairs in key order."""
        return zip(self._keys, self._values)

    def intervals(self) -> Iterator[Interval[KT, VT]]:
        """
        Iterate over the (begin, end, value) triples partitioning the key
        space. ``None`` stands for the unbounded ends.

        Example:
            >>> m = CompressedIntervalMap.from_ranges("a", [(3, 5, "b")])
            >>> list(m.intervals())
            [(None, 3, 'a'), (3, 5, 'b'), (5, None, 'a')]
        """
        begin: KT | None = None
        value = self._base_value
        for key, next_value in self.items():
            yield begin, key, value
            begin, value = key, next_value
        yield begin, None, value

    def is_canonical(self) -> bool:
        try:
            self.check_canonical()
        except CanonicalFormError:
            return False
        return True

    def check_canonical(self) -> None:
        """
        Verify that the breakpoints are strictly increasing and minimal.

        Raises:
            CanonicalFormError: On the first offending breakpoint.
        """
        previous = self._base_value
        for index, (key, value) in enumerate(self.items()):
            if index > 0 and not self._keys[index - 1] < key:
                raise CanonicalFormError(
                    f"breakpoint {key!r} does not follow {self._keys[index - 1]!r}",
                    index,
                )
            if value == previous:
                raise CanonicalFormError(
                    f"breakpoint {key!r} repeats the preceding value {value!r}",
                    index,
                )
            previous = value

    def copy(self) -> CompressedIntervalMap[KT, VT]:
        """Return a shallow copy of the map."""
        other: CompressedIntervalMap[KT, VT] = self.__class__(self._base_value)
        other._keys = self._keys.copy()
        other._values = self._values.copy()
        return other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompressedIntervalMap):
            return NotImplemented
        return (
            self._base_value == other._base_value
            and self._keys == other._keys
            and self._values == other._values
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        parts = [f"[-inf:{self._base_value}]"]
        parts.extend(f"[{key}:{value}]" for key, value in self.items())
        return "".join(parts)

    def __repr__(self) -> str:
        # Keys need not be hashable, so no dict is built here.
        breakpoints = ", ".join(f"{key!r}: {value!r}" for key, value in self.items())
        return f"{self.__class__.__name__}({self._base_value!r}, {{{breakpoints}}})"
