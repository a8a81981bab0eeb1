# asset_pack/palette.py
from __future__ import annotations

"""
Global palette built from every input image.

Exports:
  Palette.from_images(images, order="first-seen") -> Palette
  Palette.index(colour) -> int
  Palette.indices(pixels) -> IndexArray

Ordering:
  "first-seen" : colours are numbered in order of first appearance, scanning
                 images in input order and each image row-major.
  "sorted"     : colours are numbered by (r, g, b, a) ascending.
Both are deterministic, so the same inputs always give the same output.
"""

from typing import Dict, Iterator, List, Sequence

import numpy as np

from .constants import DEFAULT_PALETTE_ORDER, PALETTE_ORDERS
from .core_types import (
    AssetImage,
    IndexArray,
    Pixel,
    U8Pixels,
    as_pixel_rows,
    coerce_to_pixel,
    pixel_keys,
    pixel_to_hex,
)
from .encoder import bits_for_palette_size, pixels_per_byte_for
from .errors import EmptyInputError, EncodingInvariantError


class Palette:
    """
    Immutable colour table. Lookup and rendering both read `colours`, so the
    order a colour is emitted in is the index it is packed with.
    """

    __slots__ = ("_colours", "_keys_sorted", "_index_of_sorted", "_index_of")

    def __init__(self, colours: U8Pixels) -> None:
        cols = as_pixel_rows(colours).copy()
        keys = pixel_keys(cols)
        if np.unique(keys).shape[0] != keys.shape[0]:
            raise ValueError("palette colours must be distinct")
        cols.flags.writeable = False

        order = np.argsort(keys, kind="stable")
        keys_sorted = keys[order]
        keys_sorted.flags.writeable = False
        order.flags.writeable = False

        self._colours = cols
        self._keys_sorted = keys_sorted
        self._index_of_sorted = order
        self._index_of: Dict[int, int] = {
            int(k): i for i, k in enumerate(keys.tolist())
        }

    @classmethod
    def from_images(
        cls, images: Sequence[AssetImage], order: str = DEFAULT_PALETTE_ORDER
    ) -> "Palette":
        """Collect the distinct colours of every image into one palette."""
        if len(images) == 0:
            raise EmptyInputError("No Images to process.")
        if order not in PALETTE_ORDERS:
            raise ValueError(f"unknown palette order: {order!r}")

        stacked = np.concatenate([img.pixels for img in images], axis=0)
        keys = pixel_keys(stacked)
        _uniq, first_at = np.unique(keys, return_index=True)

        if order == "first-seen":
            rows = np.sort(first_at)
        else:
            rows = first_at  # np.unique output is already key-sorted
        return cls(stacked[rows])

    # Views

    @property
    def colours(self) -> U8Pixels:
        """Read-only (P, 4) uint8 array; row i is the colour with index i."""
        return self._colours

    @property
    def size(self) -> int:
        return int(self._colours.shape[0])

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[Pixel]:
        for row in self._colours.tolist():
            yield (row[0], row[1], row[2], row[3])

    def __contains__(self, colour: object) -> bool:
        try:
            px = coerce_to_pixel(colour)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return False
        return _key_of(px) in self._index_of

    def __repr__(self) -> str:
        return f"Palette(size={self.size})"

    @property
    def bits_per_colour(self) -> int:
        return bits_for_palette_size(self.size)

    @property
    def pixels_per_byte(self) -> int:
        return pixels_per_byte_for(self.bits_per_colour)

    def hex_codes(self) -> List[str]:
        return [pixel_to_hex(c) for c in self]

    # Lookup

    def index(self, colour: Pixel) -> int:
        """Index of `colour`. Raises EncodingInvariantError if it is unknown."""
        px = coerce_to_pixel(colour)
        idx = self._index_of.get(_key_of(px))
        if idx is None:
            raise EncodingInvariantError(
                f"Palette doesn't contain colour {pixel_to_hex(px)}."
            )
        return idx

    def indices(self, pixels: U8Pixels) -> IndexArray:
        """
        Vectorised index lookup for (N, 4) pixels. Raises
        EncodingInvariantError naming the first unknown colour.
        """
        px = as_pixel_rows(pixels)
        if px.shape[0] == 0:
            return np.zeros((0,), dtype=np.int64)
        if self.size == 0:
            raise EncodingInvariantError("Palette is empty; no colour can resolve.")
        keys = pixel_keys(px)
        pos = np.searchsorted(self._keys_sorted, keys)
        pos_clipped = np.minimum(pos, self._keys_sorted.shape[0] - 1)
        found = self._keys_sorted[pos_clipped] == keys
        if not bool(np.all(found)):
            bad = int(np.argmin(found))
            raise EncodingInvariantError(
                f"Palette doesn't contain colour "
                f"{pixel_to_hex(coerce_to_pixel(px[bad]))} (pixel {bad})."
            )
        return self._index_of_sorted[pos_clipped].astype(np.int64)


def _key_of(px: Pixel) -> int:
    return (px[0] << 24) | (px[1] << 16) | (px[2] << 8) | px[3]


__all__ = ["Palette"]
