from __future__ import annotations

from typing import Iterator

import pytest
from loguru import logger

from packedbits.bitmap import Bitmap

BITMAP_LENGTH = 200


class ByteBitmap(Bitmap):
    """A bitmap backed by 8-bit words, to exercise word boundaries cheaply."""

    __slots__ = ()

    typecode = "B"


@pytest.fixture  # type: ignore[misc]
def bitmap() -> Bitmap:
    return Bitmap(BITMAP_LENGTH)


@pytest.fixture(  # type: ignore[misc]
    params=[Bitmap, ByteBitmap], ids=["64-bit", "8-bit"]
)
def bitmap_type(request: pytest.FixtureRequest) -> type[Bitmap]:
    return request.param


@pytest.fixture  # type: ignore[misc]
def log_messages() -> Iterator[list[str]]:
    messages: list[str] = []
    logger.enable("packedbits")
    sink_id = logger.add(messages.append, level="DEBUG", format="{message}")
    try:
        yield messages
    finally:
        logger.remove(sink_id)
        logger.disable("packedbits")


def single_bit_set(bitmap: Bitmap, index: int) -> bool:
    return all(bit == (i == index) for i, bit in enumerate(bitmap))
