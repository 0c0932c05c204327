"""Primitives for working with fixed-width unsigned words.

A word is a Python :class:`int` in the range ``[0, 2 ** word_size)``. Bit
offsets count from the least significant bit, so offset ``0`` is the
right-most bit of a word.

"""

from array import array
from typing import FrozenSet, Iterator, Tuple

UNSIGNED_TYPECODES: FrozenSet[str] = frozenset("BHILQ")


def word_size(typecode: str) -> int:
    """Return the number of bits in a word of `typecode`.

    Parameters
    ----------
    typecode
        An unsigned :mod:`array` typecode such as ``"B"`` or ``"Q"``.

    """
    if typecode not in UNSIGNED_TYPECODES:
        raise ValueError(f"typecode must be unsigned, got {typecode!r}")
    return array(typecode).itemsize * 8


def all_ones(size: int) -> int:
    """Return a word of `size` bits with every bit set."""
    return (1 << size) - 1


def word_count(length: int, size: int) -> int:
    """Return the number of `size`-bit words needed to hold `length` bits."""
    return -(-length // size)


def position(index: int, size: int) -> Tuple[int, int]:
    """Return the word index and bit offset of the bit at `index`."""
    return divmod(index, size)


def tail_mask(offset: int, size: int) -> int:
    """Return a mask of the bits at `offset` and above."""
    return (all_ones(size) << offset) & all_ones(size)


def head_mask(offset: int, size: int) -> int:
    """Return a mask of the bits at `offset` and below."""
    return all_ones(size) >> (size - offset - 1)


def apply_mask(word: int, mask: int, value: bool, size: int) -> int:
    """Set or clear the bits of `word` selected by `mask`.

    Parameters
    ----------
    word
        The word to modify.
    mask
        The bits to touch.
    value
        Whether the masked bits should become ``1`` or ``0``.
    size
        The width of `word` in bits.

    """
    if value:
        return word | mask
    return word & ~mask & all_ones(size)


def offsets(word: int) -> Iterator[int]:
    """Yield the offsets of the set bits in `word`, lowest first.

    The scan stops as soon as no higher bits remain set.

    """
    offset = 0
    while word:
        if word & 1:
            yield offset
        word >>= 1
        offset += 1


def indices(word_index: int, word: int, size: int) -> Iterator[int]:
    """Yield the absolute bit indices of the set bits of `word`."""
    base = word_index * size
    return (base + offset for offset in offsets(word))
