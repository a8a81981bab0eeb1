import numpy as np
import pytest

from asset_pack.encoder import (
    bits_for_palette_size,
    pack_image,
    pack_indices,
    pixels_per_byte_for,
    unpack_image,
    unpack_indices,
)
from asset_pack.errors import EncodingInvariantError
from asset_pack.palette import Palette

from helpers import BLUE, CLEAR, GREEN, RED, make_image


@pytest.mark.parametrize(
    "size, bits",
    [(0, 1), (1, 1), (2, 1), (3, 2), (4, 2), (5, 3), (8, 3), (9, 4), (16, 4), (17, 5), (256, 8)],
)
def test_bits_for_palette_size(size, bits):
    assert bits_for_palette_size(size) == bits


def test_palette_over_256_colours_cannot_be_packed():
    assert bits_for_palette_size(257) == 9
    with pytest.raises(EncodingInvariantError):
        pixels_per_byte_for(9)


@pytest.mark.parametrize("bits, ppb", [(1, 8), (2, 4), (3, 2), (4, 2), (5, 1), (8, 1)])
def test_pixels_per_byte(bits, ppb):
    assert pixels_per_byte_for(bits) == ppb


def test_zero_bits_rejected():
    with pytest.raises(EncodingInvariantError):
        pixels_per_byte_for(0)


def test_first_pixel_goes_in_low_bits():
    assert pack_indices([1, 2, 3, 0], 2, 4) == bytes([0b00111001])


def test_short_final_group_leaves_high_bits_zero():
    # 9 pixels at 1 bit: one full byte and one byte holding a single pixel
    assert pack_indices([1, 0, 1, 1, 0, 0, 0, 0, 1], 1, 8) == bytes([0x0D, 0x01])
    # 3 bits, 2 per byte: top two bits of every byte unused
    assert pack_indices([5, 6, 7], 3, 2) == bytes([5 | (6 << 3), 7])


def test_empty_input_packs_to_nothing():
    assert pack_indices([], 2, 4) == b""
    assert unpack_indices(b"", 2, 4, 0).shape == (0,)


def test_index_wider_than_bit_width_rejected():
    with pytest.raises(EncodingInvariantError):
        pack_indices([4], 2, 4)
    with pytest.raises(EncodingInvariantError):
        pack_indices([-1], 2, 4)


def test_too_many_pixels_per_byte_rejected():
    with pytest.raises(EncodingInvariantError):
        pack_indices([0, 1], 3, 3)


@pytest.mark.parametrize("bits", [1, 2, 3, 4, 8])
def test_unpack_restores_indices(bits):
    rng = np.random.default_rng(bits)
    ppb = pixels_per_byte_for(bits)
    # odd length so the last byte is a short group for every width below 8
    idx = rng.integers(0, 1 << bits, size=37)
    data = pack_indices(idx, bits, ppb)
    assert len(data) == -(-37 // ppb)
    assert unpack_indices(data, bits, ppb, 37).tolist() == idx.tolist()


def test_unpack_count_must_fit():
    with pytest.raises(EncodingInvariantError):
        unpack_indices(b"\x00", 2, 4, 5)


def test_two_image_scenario(two_images):
    palette = Palette.from_images(two_images)
    assert (palette.bits_per_colour, palette.pixels_per_byte) == (2, 4)

    a = pack_image(two_images[0], palette)
    b = pack_image(two_images[1], palette)
    # red=0 green=1 blue=2, first-seen order
    assert a.data == bytes([0 | (1 << 2)])
    assert b.data == bytes([1 | (2 << 2)])
    assert a.data[0] >> 4 == 0
    assert a.pixel_count == 2


def test_single_colour_scenario():
    image = make_image("dot", [RED] * 5)
    palette = Palette.from_images([image])
    assert (palette.bits_per_colour, palette.pixels_per_byte) == (1, 8)

    packed = pack_image(image, palette)
    # the only colour has index 0, so all five 1-bit slots are 0
    assert packed.data == bytes([0])


def test_unknown_colour_aborts_packing(two_images):
    palette = Palette.from_images(two_images)
    stray = make_image("stray", [RED, CLEAR, BLUE])
    with pytest.raises(EncodingInvariantError, match="stray"):
        pack_image(stray, palette)


def test_pack_image_round_trip(two_images):
    images = two_images + [make_image("c", [BLUE, RED, GREEN, GREEN, RED, BLUE, RED])]
    palette = Palette.from_images(images)
    for img in images:
        packed = pack_image(img, palette)
        assert np.array_equal(unpack_image(packed, palette), img.pixels)


def test_label_defaults_to_name(two_images):
    palette = Palette.from_images(two_images)
    assert pack_image(two_images[0], palette).label == "a"
    assert pack_image(two_images[0], palette, label="_a").label == "_a"
