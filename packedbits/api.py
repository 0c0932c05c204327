"""packedbits functional API.

.. note::

   Every function that operates on a bitmap takes the bitmap as its **last**
   argument.

   This is intentional, and is the way the functions must be written to enable
   `currying <https://en.wikipedia.org/wiki/Currying>`_.  Currying is the
   technique that allows us to use the right shift operator (``>>``) to chain
   operations.

"""

from __future__ import annotations

import inspect
from typing import Any, Iterable, List

import tabulate
import toolz
from public import private, public

from . import word
from .bitmap import Bitmap


@private  # type: ignore[misc]
class shiftable(toolz.curry):
    """Shiftable curry."""

    @property
    def __signature__(self) -> inspect.Signature:
        return inspect.signature(self.func)  # pragma: no cover

    def __rrshift__(self, other: Bitmap) -> Any:
        return self(other)


@public  # type: ignore[misc]
def bitmap(length: int, initial_value: bool = False) -> Bitmap:
    """Construct a bitmap of `length` bits all set to `initial_value`.

    Parameters
    ----------
    length
        The number of bits in the bitmap.
    initial_value
        The value of every bit.

    Examples
    --------
    >>> from packedbits.api import bitmap, invert, set_range, true_bits
    >>> bitmap(8) >> set_range(2, 4, True) >> invert >> true_bits
    [0, 1, 5, 6, 7]

    """
    return Bitmap(length, initial_value)


@public  # type: ignore[misc]
def from_indices(length: int, indices: Iterable[int]) -> Bitmap:
    """Construct a bitmap of `length` bits with every bit in `indices` set."""
    return Bitmap.from_indices(length, indices)


@public  # type: ignore[misc]
@shiftable
def set_bit(index: int, value: bool, bm: Bitmap) -> Bitmap:
    """Set the bit at `index` of `bm` to `value`.

    Parameters
    ----------
    index
        The bit to set.
    value
        The value to set the bit to.
    bm
        The bitmap to modify.

    """
    return bm.set_bit(index, value)


@public  # type: ignore[misc]
@shiftable
def set_range(start: int, end: int, value: bool, bm: Bitmap) -> Bitmap:
    """Set the bits of `bm` from `start` to `end` inclusive to `value`.

    Parameters
    ----------
    start
        The first bit of the range.
    end
        The last bit of the range.
    value
        The value to set the bits to.
    bm
        The bitmap to modify.

    """
    return bm.set_range(start, end, value)


@public  # type: ignore[misc]
@shiftable
def set_all_bits(value: bool, bm: Bitmap) -> Bitmap:
    """Set every bit of `bm` to `value`."""
    return bm.set_all_bits(value)


@public  # type: ignore[misc]
@shiftable
def union(other: Bitmap, bm: Bitmap) -> Bitmap:
    """Set every bit of `bm` that is set in `other`.

    Parameters
    ----------
    other
        A bitmap of the same length as `bm`.
    bm
        The bitmap to modify.

    """
    return bm.union(other)


@public  # type: ignore[misc]
@shiftable
def intersect(other: Bitmap, bm: Bitmap) -> Bitmap:
    """Clear every bit of `bm` that is not set in `other`.

    Parameters
    ----------
    other
        A bitmap of the same length as `bm`.
    bm
        The bitmap to modify.

    """
    return bm.intersect(other)


@public  # type: ignore[misc]
@shiftable
def invert(bm: Bitmap) -> Bitmap:
    """Flip every bit of `bm`."""
    return bm.invert()


@public  # type: ignore[misc]
@shiftable
def true_bits(bm: Bitmap) -> List[int]:
    """Return the indices of the set bits of `bm` in ascending order."""
    return sorted(bm.get_true_bits())


@private  # type: ignore[misc]
def word_rows(bm: Bitmap) -> Iterable[List[Any]]:
    """Yield one table row per storage word of `bm`."""
    size = bm.word_size
    length = bm.length
    for word_index in range(len(bm.words)):
        first = word_index * size
        last = min(first + size, length) - 1
        values = [bm[index] for index in range(first, last + 1)]
        bits = "".join("1" if value else "0" for value in values)
        hexval = sum(1 << offset for offset, value in enumerate(values) if value)
        digits = word.word_count(size, 4)
        yield [word_index, first, last, f"0x{hexval:0{digits}x}", bits]


@public  # type: ignore[misc]
@shiftable
def pretty(
    bm: Bitmap,
    *,
    tablefmt: str = "simple",
    **kwargs: Any,
) -> str:
    """Pretty-format a bitmap, one row per storage word.

    Parameters
    ----------
    bm
        The bitmap to format
    tablefmt
        The format of the table, passed to `tabulate.tabulate`
    kwargs
        Additional keyword arguments passed to the `tabulate.tabulate`
        function

    Returns
    -------
    str
        Pretty-formatted bitmap. The ``bits`` column lists each word's logical
        bits least significant first, and the ``hex`` column shows the word
        with its padding bits cleared.

    See Also
    --------
    packedbits.api.show

    """
    return tabulate.tabulate(
        list(word_rows(bm)),
        tablefmt=tablefmt,
        headers=["word", "first", "last", "hex", "bits"],
        disable_numparse=True,
        **kwargs,
    )


@public  # type: ignore[misc]
@shiftable
def show(bm: Bitmap, **kwargs: Any) -> None:
    """Pretty-print a bitmap.

    Parameters
    ----------
    bm
        The bitmap to print
    kwargs
        Additional keyword arguments passed to
        :func:`~packedbits.api.pretty`

    """
    print(pretty(bm, **kwargs))
