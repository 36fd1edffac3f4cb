import random

import pytest

from plasma.encoding import bits
from plasma.errors import EncodingOverflow


def test_encode_is_lsb_first():
    assert bits.encode(1, 4) == [True, False, False, False]
    assert bits.encode(6, 4) == [False, True, True, False]
    assert bits.encode(0, 3) == [False, False, False]


@pytest.mark.parametrize("width", [1, 7, 8, 24, 32, 64])
def test_decode_inverts_encode(width):
    rng = random.Random(width)
    samples = {0, (1 << width) - 1} | {rng.randrange(1 << width) for _ in range(50)}
    for v in samples:
        enc = bits.encode(v, width)
        assert len(enc) == width
        assert bits.decode(enc) == v


def test_overflow_is_rejected():
    with pytest.raises(EncodingOverflow) as ei:
        bits.encode(16, 4, "nonce")
    assert ei.value.data["width"] == 4
    assert ei.value.data["subject"] == "nonce"
    with pytest.raises(EncodingOverflow):
        bits.encode(-1, 8)


def test_bad_width_and_types():
    with pytest.raises(ValueError):
        bits.encode(0, 0)
    with pytest.raises(TypeError):
        bits.encode(True, 4)
    with pytest.raises(TypeError):
        bits.encode(1.0, 4)  # type: ignore[arg-type]


def test_decode_accepts_any_sequence():
    assert bits.decode([]) == 0
    assert bits.decode((False, True, True)) == 6
    assert bits.le_bits_to_int([True] * 10) == 1023


def test_pack_is_msb_first_with_low_padding():
    assert bits.pack_bits_into_bytes([True]) == b"\x80"
    assert bits.pack_bits_into_bytes([False, True]) == b"\x40"
    assert bits.pack_bits_into_bytes([True] * 8 + [True]) == b"\xff\x80"
    assert bits.pack_bits_into_bytes([]) == b""


def test_unpack_restores_prefix():
    src = [True, False, True, True, False, False, True, False, True, True]
    packed = bits.pack_bits_into_bytes(src)
    assert len(packed) == 2
    assert bits.unpack_bytes_into_bits(packed, len(src)) == src
    with pytest.raises(ValueError):
        bits.unpack_bytes_into_bits(packed, 17)
