"""Pixel bitmasks for two-dimensional collision detection.

A mask is a grid of bits: set bits mark occupied pixels. Offsets passed to
the overlap functions give the position of the other mask's top-left corner
relative to this mask's top-left corner, and may be negative::

    +----+----------..
    |A   | yoffset
    |  +-+----------..
    +--|B
    |xoffset
    |  |
    :  :
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

STRIPE_WIDTH = 32
_STRIPE_MASK = (1 << STRIPE_WIDTH) - 1

_Pass = tuple[int, int, Callable[[int], int]]


def _stripe(row: int, index: int) -> int:
    """Return the 32-pixel word of ``row`` at stripe ``index``."""
    if index < 0:
        return 0
    return (row >> (STRIPE_WIDTH * index)) & _STRIPE_MASK


def _lowest_bit(word: int) -> int:
    return (word & -word).bit_length() - 1


class Bitmask:
    """A width x height grid of bits, cleared on creation."""

    __slots__ = ("width", "height", "_rows")

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"invalid bitmask size {width}x{height}")
        self.width = width
        self.height = height
        # Bit x of row y is the pixel at (x, y).
        self._rows = [0] * height

    def __repr__(self) -> str:
        return f"Bitmask({self.width}, {self.height})"

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"pixel ({x}, {y}) outside {self.width}x{self.height} mask"
            )

    def getbit(self, x: int, y: int) -> bool:
        """Return True if the pixel at (x, y) is set."""
        self._check(x, y)
        return bool((self._rows[y] >> x) & 1)

    def setbit(self, x: int, y: int) -> None:
        """Set the pixel at (x, y)."""
        self._check(x, y)
        self._rows[y] |= 1 << x

    def clearbit(self, x: int, y: int) -> None:
        """Clear the pixel at (x, y)."""
        self._check(x, y)
        self._rows[y] &= ~(1 << x)

    def _disjoint(self, other: Bitmask, xoffset: int, yoffset: int) -> bool:
        return (
            xoffset >= self.width
            or yoffset >= self.height
            or yoffset <= -other.height
        )

    def _row_pairs(self, other: Bitmask, yoffset: int) -> Iterator[tuple[int, int]]:
        """Yield (row in self, row in other) for rows both masks cover."""
        start = max(0, yoffset)
        stop = min(self.height, yoffset + other.height)
        for ay in range(start, stop):
            yield ay, ay - yoffset

    def _shifted_rows(self, other: Bitmask, xoffset: int, yoffset: int) -> Iterator[int]:
        """Yield the overlapping bits of each shared row, in self's frame."""
        for ay, by in self._row_pairs(other, yoffset):
            yield self._rows[ay] & (other._rows[by] << xoffset)

    def overlap(self, other: Bitmask, xoffset: int, yoffset: int) -> bool:
        """Return True if the masks share a set pixel at the given offset."""
        if self._disjoint(other, xoffset, yoffset):
            return False
        if xoffset < 0:
            return other.overlap(self, -xoffset, -yoffset)
        return any(self._shifted_rows(other, xoffset, yoffset))

    def overlap_area(self, other: Bitmask, xoffset: int, yoffset: int) -> int:
        """Return the number of pixels set in both masks at the given offset."""
        if self._disjoint(other, xoffset, yoffset):
            return 0
        if xoffset < 0:
            return other.overlap_area(self, -xoffset, -yoffset)
        return sum(row.bit_count() for row in self._shifted_rows(other, xoffset, yoffset))

    def _scan_passes(self, other: Bitmask, xoffset: int) -> Iterator[_Pass]:
        """Yield (stripe of self, stripe of other, alignment) in scan order."""
        first = xoffset // STRIPE_WIDTH
        shift = xoffset % STRIPE_WIDTH
        if shift:
            rshift = STRIPE_WIDTH - shift

            def left(word: int) -> int:
                return (word << shift) & _STRIPE_MASK

            def right(word: int) -> int:
                return word >> rshift

            astripes = (self.width - 1) // STRIPE_WIDTH - first
            bstripes = (other.width - 1) // STRIPE_WIDTH + 1
            for i in range(max(0, min(astripes, bstripes))):
                yield first + i, i, left
                yield first + i + 1, i, right
            if bstripes > astripes:
                yield first + astripes, astripes, left
        else:
            count = (min(other.width, self.width - xoffset) - 1) // STRIPE_WIDTH + 1
            for i in range(max(0, count)):
                yield first + i, i, lambda word: word

    def overlap_pos(
        self, other: Bitmask, xoffset: int, yoffset: int
    ) -> tuple[int, int] | None:
        """Return a shared pixel as (x, y) in this mask's coordinates, or None."""
        if self._disjoint(other, xoffset, yoffset):
            return None
        if xoffset < 0:
            hit = other.overlap_pos(self, -xoffset, -yoffset)
            if hit is None:
                return None
            return hit[0] + xoffset, hit[1] + yoffset

        pairs = list(self._row_pairs(other, yoffset))
        for a_stripe, b_stripe, align in self._scan_passes(other, xoffset):
            for ay, by in pairs:
                word = _stripe(self._rows[ay], a_stripe) & align(
                    _stripe(other._rows[by], b_stripe)
                )
                if word:
                    return a_stripe * STRIPE_WIDTH + _lowest_bit(word), ay
        return None

    def draw(self, other: Bitmask, xoffset: int, yoffset: int) -> None:
        """OR ``other`` onto this mask at the given offset, clipped to this mask."""
        if self._disjoint(other, xoffset, yoffset):
            return
        full = (1 << self.width) - 1
        for ay, by in self._row_pairs(other, yoffset):
            row = other._rows[by]
            shifted = row << xoffset if xoffset >= 0 else row >> -xoffset
            self._rows[ay] |= shifted & full