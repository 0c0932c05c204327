import pytest

from packedbits import word


@pytest.mark.parametrize(("typecode", "expected"), [("B", 8), ("H", 16), ("Q", 64)])
def test_word_size(typecode, expected):
    assert word.word_size(typecode) == expected


@pytest.mark.parametrize("typecode", ["b", "q", "d", ""])
def test_word_size_rejects_signed_and_float(typecode):
    with pytest.raises(ValueError):
        word.word_size(typecode)


@pytest.mark.parametrize(
    ("length", "size", "expected"), [(0, 64, 0), (1, 64, 1), (64, 64, 1), (65, 64, 2)]
)
def test_word_count(length, size, expected):
    assert word.word_count(length, size) == expected


def test_position():
    assert word.position(0, 64) == (0, 0)
    assert word.position(63, 64) == (0, 63)
    assert word.position(64, 64) == (1, 0)
    assert word.position(130, 8) == (16, 2)


def test_masks():
    assert word.all_ones(8) == 0xFF
    assert word.tail_mask(3, 8) == 0b11111000
    assert word.head_mask(3, 8) == 0b00001111
    assert word.tail_mask(0, 8) == word.head_mask(7, 8) == 0xFF


def test_apply_mask():
    assert word.apply_mask(0b0001, 0b0110, True, 8) == 0b0111
    assert word.apply_mask(0xFF, 0b0110, False, 8) == 0b11111001


def test_offsets():
    assert list(word.offsets(0)) == []
    assert list(word.offsets(0b1010_0001)) == [0, 5, 7]
    assert list(word.offsets(1 << 63)) == [63]


def test_indices():
    assert list(word.indices(2, 0b101, 64)) == [128, 130]
