# asset_pack/encoder.py
from __future__ import annotations

"""
Bit packing of palette indices.

Layout:
  Consecutive groups of `pixels_per_byte` indices share one byte. The first
  index of a group sits in the least significant `bits_per_colour` bits, each
  following index one slot higher:

      byte = sum(i_j << (j * bits_per_colour))

  A short final group leaves its unused high bits zero.
"""

from typing import TYPE_CHECKING, Optional

import numpy as np

from .core_types import AssetImage, IndexArray, PackedImage, U8Pixels
from .errors import EncodingInvariantError

if TYPE_CHECKING:  # pragma: no cover
    from .palette import Palette

BITS_PER_BYTE = 8


def bits_for_palette_size(size: int) -> int:
    """
    ceil(log2(size)) with a floor of 1 bit.
      1, 2 -> 1   3, 4 -> 2   5..8 -> 3   ...   129..256 -> 8
    An empty palette (every image empty) also costs 1 bit.
    """
    if size < 0:
        raise ValueError("palette size must be >= 0")
    return max(1, (size - 1).bit_length())


def pixels_per_byte_for(bits_per_colour: int) -> int:
    """floor(8 / bits). Widths that do not fit a byte are a hard failure."""
    if bits_per_colour < 1 or bits_per_colour > BITS_PER_BYTE:
        raise EncodingInvariantError(
            f"{bits_per_colour} bits per colour cannot be packed into bytes "
            f"(palette has more than {1 << BITS_PER_BYTE} colours)."
        )
    return BITS_PER_BYTE // bits_per_colour


def _check_layout(bits_per_colour: int, pixels_per_byte: int) -> None:
    max_ppb = pixels_per_byte_for(bits_per_colour)
    if pixels_per_byte < 1 or pixels_per_byte > max_ppb:
        raise EncodingInvariantError(
            f"{pixels_per_byte} pixels of {bits_per_colour} bits do not fit a byte."
        )


def pack_indices(
    indices: IndexArray, bits_per_colour: int, pixels_per_byte: int
) -> bytes:
    """Pack palette indices into bytes using the layout described above."""
    _check_layout(bits_per_colour, pixels_per_byte)
    idx = np.asarray(indices, dtype=np.int64).reshape(-1)
    n = int(idx.shape[0])
    if n == 0:
        return b""
    if int(idx.min()) < 0 or int(idx.max()) >= (1 << bits_per_colour):
        raise EncodingInvariantError(
            f"palette index out of range for {bits_per_colour} bits per colour."
        )

    n_bytes = -(-n // pixels_per_byte)
    groups = np.zeros(n_bytes * pixels_per_byte, dtype=np.int64)
    groups[:n] = idx
    groups = groups.reshape(n_bytes, pixels_per_byte)

    shifts = np.arange(pixels_per_byte, dtype=np.int64) * bits_per_colour
    packed = np.bitwise_or.reduce(groups << shifts, axis=1)
    return packed.astype(np.uint8).tobytes()


def unpack_indices(
    data: bytes, bits_per_colour: int, pixels_per_byte: int, count: int
) -> IndexArray:
    """Inverse of pack_indices; `count` trims the padding of the last byte."""
    _check_layout(bits_per_colour, pixels_per_byte)
    raw = np.frombuffer(bytes(data), dtype=np.uint8).astype(np.int64)
    if count > raw.shape[0] * pixels_per_byte or count < 0:
        raise EncodingInvariantError(
            f"{len(data)} bytes cannot hold {count} pixels at "
            f"{pixels_per_byte} pixels per byte."
        )
    shifts = np.arange(pixels_per_byte, dtype=np.int64) * bits_per_colour
    mask = (1 << bits_per_colour) - 1
    slots = (raw[:, None] >> shifts[None, :]) & mask
    return slots.reshape(-1)[:count]


def pack_image(
    image: AssetImage,
    palette: "Palette",
    bits_per_colour: Optional[int] = None,
    pixels_per_byte: Optional[int] = None,
    label: Optional[str] = None,
) -> PackedImage:
    """
    Pack one image against a finished palette. Every colour must resolve;
    an unknown colour raises EncodingInvariantError and nothing is returned.
    """
    bits = palette.bits_per_colour if bits_per_colour is None else bits_per_colour
    ppb = pixels_per_byte_for(bits) if pixels_per_byte is None else pixels_per_byte

    try:
        idx = palette.indices(image.pixels)
    except EncodingInvariantError as exc:
        raise EncodingInvariantError(f"{image.name}: {exc}") from exc

    data = pack_indices(idx, bits, ppb)
    return PackedImage(
        name=image.name,
        label=label if label is not None else image.name,
        data=data,
        pixel_count=len(image),
    )


def unpack_image(
    packed: PackedImage,
    palette: "Palette",
    bits_per_colour: Optional[int] = None,
    pixels_per_byte: Optional[int] = None,
) -> U8Pixels:
    """Rebuild the (N, 4) pixel rows of a packed image."""
    bits = palette.bits_per_colour if bits_per_colour is None else bits_per_colour
    ppb = pixels_per_byte_for(bits) if pixels_per_byte is None else pixels_per_byte
    idx = unpack_indices(packed.data, bits, ppb, packed.pixel_count)
    if idx.shape[0] and int(idx.max()) >= palette.size:
        raise EncodingInvariantError(
            f"{packed.name}: packed index {int(idx.max())} outside palette "
            f"of {palette.size} colours."
        )
    return palette.colours[idx]


__all__ = [
    "BITS_PER_BYTE",
    "bits_for_palette_size",
    "pixels_per_byte_for",
    "pack_indices",
    "unpack_indices",
    "pack_image",
    "unpack_image",
]
