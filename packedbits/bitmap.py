"""A fixed-length sequence of booleans packed into machine words.

Bits are stored in an :class:`array.array` of unsigned words. Bit ``i`` lives
in word ``i // W`` at offset ``i % W``, where ``W`` is the word size and offset
``0`` is the least significant bit of a word.

The last word may hold padding bits past the logical length. Word-wise
operations (:meth:`~packedbits.bitmap.Bitmap.set_all_bits`,
:meth:`~packedbits.bitmap.Bitmap.invert` and the set algebra) touch them, but
they are never observable: every read masks them off.

.. warning::
   Bitmaps do no locking. Mutating a bitmap while another thread reads or
   iterates over it is undefined behavior.

"""

from __future__ import annotations

import itertools
import operator
import sys
from array import array
from typing import Any, ClassVar, Iterable, Iterator, Set

import toolz
from loguru import logger
from typing_extensions import Self

from . import word
from .exceptions import ArgumentInvalidError, ArgumentRangeError

HASH_SEED = 671604886


class Bitmap(Iterable[bool]):
    """A fixed-length, word-packed array of bits.

    Every mutating method works in place and returns the bitmap itself, so
    calls can be chained.

    Attributes
    ----------
    typecode
        The :mod:`array` typecode of the storage words. Override it in a
        subclass to change the word size.
    word_size
        The number of bits per word, derived from `typecode`.
    word_mask
        A word with every bit set.
    words
        The storage words.

    Examples
    --------
    >>> from packedbits import Bitmap
    >>> bitmap = Bitmap(200).set_bit(10, True).set_range(63, 65, True)
    >>> bitmap
    Bitmap(200, {10, 63, 64, 65})
    >>> bitmap[64]
    True
    >>> sorted(bitmap.invert().get_true_bits())[:3]
    [0, 1, 2]

    """

    __slots__ = "_length", "words"

    typecode: ClassVar[str] = "Q"
    word_size: ClassVar[int] = word.word_size(typecode)
    word_mask: ClassVar[int] = word.all_ones(word_size)

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.word_size = word.word_size(cls.typecode)
        cls.word_mask = word.all_ones(cls.word_size)

    def __init__(self, length: int, initial_value: bool = False) -> None:
        """Construct a :class:`~packedbits.bitmap.Bitmap`.

        Parameters
        ----------
        length
            The number of bits in the bitmap.
        initial_value
            The value of every bit after construction.

        Raises
        ------
        ArgumentInvalidError
            If `length` is negative

        """
        if length < 0:
            raise ArgumentInvalidError(
                "length", f"length must be non-negative, length == {length}"
            )
        self._length = length
        nwords = word.word_count(length, self.word_size)
        self.words = array(self.typecode, [0]) * nwords
        logger.debug("allocated {} words for a bitmap of {} bits", nwords, length)

        if initial_value:
            self.set_all_bits(initial_value)

    @classmethod
    def from_indices(cls, length: int, indices: Iterable[int]) -> Self:
        """Construct a bitmap of `length` bits with `indices` set."""
        bitmap = cls(length)
        for index in indices:
            bitmap.set_bit(index, True)
        return bitmap

    def copy(self) -> Self:
        """Return an independent bitmap with the same bits."""
        clone = type(self)(self._length)
        clone.words[:] = self.words
        return clone

    @property
    def length(self) -> int:
        """Return the number of bits in the bitmap."""
        return self._length

    def __len__(self) -> int:
        return self._length

    def __repr__(self) -> str:
        name = type(self).__name__
        true_bits = self.get_true_bits()
        if not true_bits:
            return f"{name}({self._length})"
        values = ", ".join(map(str, sorted(true_bits)))
        return f"{name}({self._length}, {{{values}}})"

    def _check_index(self, index: int, param: str = "index") -> None:
        if not 0 <= index < self._length:
            raise ArgumentRangeError(param, index, self._length)

    def _check_other(self, other: Bitmap, operation: str) -> None:
        if other._length != self._length:
            logger.debug(
                "refusing to {} bitmaps of length {} and {}",
                operation,
                self._length,
                other._length,
            )
            raise ArgumentInvalidError(
                "other",
                f"length mismatch, cannot {operation} bitmaps of length "
                f"{self._length} and {other._length}",
            )
        if other.word_size != self.word_size:
            raise ArgumentInvalidError(
                "other",
                f"word size mismatch, cannot {operation} bitmaps of word size "
                f"{self.word_size} and {other.word_size}",
            )

    def get_bit(self, index: int) -> bool:
        """Return the value of the bit at `index`.

        Raises
        ------
        ArgumentRangeError
            If `index` is not in ``[0, length)``

        """
        self._check_index(index)
        word_index, offset = word.position(index, self.word_size)
        return bool(self.words[word_index] >> offset & 1)

    def set_bit(self, index: int, value: bool) -> Self:
        """Set the bit at `index` to `value`.

        Raises
        ------
        ArgumentRangeError
            If `index` is not in ``[0, length)``

        """
        self._check_index(index)
        word_index, offset = word.position(index, self.word_size)
        self.words[word_index] = word.apply_mask(
            self.words[word_index], 1 << offset, value, self.word_size
        )
        return self

    def __getitem__(self, index: int) -> bool:
        try:
            return self.get_bit(index)
        except ArgumentRangeError:
            raise IndexError("bitmap index out of range") from None

    def __setitem__(self, index: int, value: bool) -> None:
        try:
            self.set_bit(index, value)
        except ArgumentRangeError:
            raise IndexError("bitmap assignment index out of range") from None

    def set_all_bits(self, value: bool) -> Self:
        """Set every word, padding included, to all ones or all zeros."""
        fill = self.word_mask if value else 0
        self.words[:] = array(self.typecode, [fill]) * len(self.words)
        logger.debug("filled {} words with {}", len(self.words), bool(value))
        return self

    def set_range(self, start: int, end: int, value: bool) -> Self:
        """Set every bit from `start` to `end` inclusive to `value`.

        Parameters
        ----------
        start
            The first bit of the range.
        end
            The last bit of the range.
        value
            The value to set the bits to.

        Raises
        ------
        ArgumentRangeError
            If `start` or `end` is not in ``[0, length)``
        ArgumentInvalidError
            If `start` is greater than `end`

        """
        self._check_index(start, "start")
        self._check_index(end, "end")
        if start > end:
            logger.debug("refusing to set inverted range [{}, {}]", start, end)
            raise ArgumentInvalidError(
                "end", f"range is inverted, start == {start} > end == {end}"
            )
        if start == end:
            return self.set_bit(start, value)

        size = self.word_size
        start_word, start_offset = word.position(start, size)
        end_word, end_offset = word.position(end, size)
        tail = word.tail_mask(start_offset, size)
        head = word.head_mask(end_offset, size)
        bits = self.words

        if start_word == end_word:
            bits[start_word] = word.apply_mask(
                bits[start_word], tail & head, value, size
            )
        else:
            bits[start_word] = word.apply_mask(bits[start_word], tail, value, size)
            fill = self.word_mask if value else 0
            nwords = end_word - start_word - 1
            bits[start_word + 1 : end_word] = array(self.typecode, [fill]) * nwords
            bits[end_word] = word.apply_mask(bits[end_word], head, value, size)

        logger.debug("set bits [{}, {}] to {}", start, end, bool(value))
        return self

    def union(self, other: Bitmap) -> Self:
        """Set every bit that is set in `other`.

        Raises
        ------
        ArgumentInvalidError
            If `other` has a different length

        """
        self._check_other(other, "union")
        self.words[:] = array(
            self.typecode, map(operator.or_, self.words, other.words)
        )
        logger.debug("took the union of two bitmaps of length {}", self._length)
        return self

    def intersect(self, other: Bitmap) -> Self:
        """Clear every bit that is not set in `other`.

        Raises
        ------
        ArgumentInvalidError
            If `other` has a different length

        """
        self._check_other(other, "intersect")
        self.words[:] = array(
            self.typecode, map(operator.and_, self.words, other.words)
        )
        logger.debug("took the intersection of two bitmaps of length {}", self._length)
        return self

    def invert(self) -> Self:
        """Flip every bit, padding included."""
        mask = self.word_mask
        self.words[:] = array(self.typecode, (bits ^ mask for bits in self.words))
        logger.debug("inverted a bitmap of length {}", self._length)
        return self

    def _logical_words(self) -> Iterator[int]:
        """Yield the storage words with the padding bits cleared."""
        bits = self.words
        if not bits:
            return
        padding = len(bits) * self.word_size - self._length
        yield from itertools.islice(bits, len(bits) - 1)
        yield bits[-1] & (self.word_mask >> padding)

    def _as_int(self) -> int:
        """Return the logical bits as a single integer, bit ``i`` at ``2 ** i``."""
        logical = array(self.typecode, self._logical_words())
        if sys.byteorder == "big":
            logical.byteswap()
        return int.from_bytes(logical.tobytes(), "little")

    def get_true_bits(self) -> Set[int]:
        """Return the indices of the bits that are set."""
        size = self.word_size
        return set(
            toolz.concat(
                word.indices(word_index, bits, size)
                for word_index, bits in enumerate(self._logical_words())
                if bits
            )
        )

    def count(self) -> int:
        """Return the number of bits that are set."""
        return sum(bin(bits).count("1") for bits in self._logical_words())

    def __iter__(self) -> Iterator[bool]:
        """Lazily iterate over the value of every bit in index order."""
        return map(self.get_bit, range(self._length))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Bitmap):
            return NotImplemented
        return self._length == other._length and self._as_int() == other._as_int()

    def __hash__(self) -> int:
        return hash((HASH_SEED, self._length, self._as_int()))
