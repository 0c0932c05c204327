"""Exceptions raised by packedbits."""

from typing import Any


class BitmapError(Exception):
    """Base class for errors raised by a :class:`~packedbits.bitmap.Bitmap`."""


class ArgumentRangeError(BitmapError, ValueError):
    """An index argument fell outside of ``[0, length)``.

    Attributes
    ----------
    param
        The name of the offending parameter.
    value
        The value that was passed.
    length
        The length of the bitmap the value was checked against.

    """

    def __init__(self, param: str, value: Any, length: int) -> None:
        super().__init__(
            f"{param} out of range, must be in [0, {length}), {param} == {value!r}"
        )
        self.param = param
        self.value = value
        self.length = length


class ArgumentInvalidError(BitmapError, ValueError):
    """An argument was in range but structurally wrong."""

    def __init__(self, param: str, message: str) -> None:
        super().__init__(f"{message} ({param})")
        self.param = param
