# asset_pack/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

from dataclasses import dataclass, field
from typing import Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

Pixel = Tuple[int, int, int, int]  # (r, g, b, a)
HexStr = str

U8Pixels = NDArray[np.uint8]  # (N, 4) RGBA rows
U8Rgba = NDArray[np.uint8]  # (H, W, 4)
IndexArray = NDArray[np.int64]  # (N,) palette indices

CHANNELS = 4

# Value objects


@dataclass(frozen=True, eq=False)
class AssetImage:
    """Named image as a flat, read-only sequence of RGBA pixels (row-major)."""

    name: str
    pixels: U8Pixels  # shape (N, 4)
    width: int = 0
    height: int = 0

    def __post_init__(self) -> None:
        px = as_pixel_rows(self.pixels).copy()
        px.flags.writeable = False
        object.__setattr__(self, "pixels", px)

    def __len__(self) -> int:
        return int(self.pixels.shape[0])


@dataclass(frozen=True)
class PackedImage:
    """An image's pixels rewritten as packed palette indices."""

    name: str
    label: str
    data: bytes
    pixel_count: int = field(default=0)

    def __len__(self) -> int:
        return len(self.data)


# Small helpers


def pixel_to_hex(pixel: Pixel) -> HexStr:
    """RGBA tuple to lowercase hex string '#rrggbbaa'."""
    return f"#{pixel[0]:02x}{pixel[1]:02x}{pixel[2]:02x}{pixel[3]:02x}"


def coerce_to_pixel(value: Union[Sequence[int], NDArray[np.generic]]) -> Pixel:
    """
    Coerce a 4-length sequence or array row to an (int, int, int, int) tuple.
    Channels must lie in 0..255.
    """
    if isinstance(value, np.ndarray):
        value = value.reshape(-1).tolist()
    if len(value) != CHANNELS:  # type: ignore[arg-type]
        raise ValueError(f"expected {CHANNELS} channels, got {len(value)}")  # type: ignore[arg-type]
    out = tuple(int(c) for c in value)  # type: ignore[union-attr]
    if any(c < 0 or c > 255 for c in out):
        raise ValueError(f"channel out of range in {out}")
    return out  # type: ignore[return-value]


def as_pixel_rows(
    pixels: Union[np.ndarray, Sequence[Sequence[int]]]
) -> U8Pixels:
    """
    Validate and normalise pixels to a contiguous uint8 (N, 4) array.
    Accepts (N,4) or (H,W,4) arrays, or a sequence of 4-tuples.
    """
    if isinstance(pixels, np.ndarray):
        arr = pixels
        if arr.dtype != np.uint8:
            raise TypeError("expected uint8 pixel data")
    else:
        rows = [coerce_to_pixel(p) for p in pixels]
        arr = np.array(rows, dtype=np.uint8).reshape(-1, CHANNELS)
    if arr.ndim == 3 and arr.shape[-1] == CHANNELS:
        arr = arr.reshape(-1, CHANNELS)
    if arr.ndim != 2 or arr.shape[-1] != CHANNELS:
        raise TypeError(f"expected (N,{CHANNELS}) pixels, got shape {arr.shape}")
    return np.ascontiguousarray(arr)


def pixel_keys(pixels: U8Pixels) -> NDArray[np.uint32]:
    """Pack each RGBA row into one uint32 key (r in the top byte)."""
    px = pixels.astype(np.uint32, copy=False)
    return (px[:, 0] << 24) | (px[:, 1] << 16) | (px[:, 2] << 8) | px[:, 3]


__all__ = [
    # aliases / types
    "Pixel",
    "HexStr",
    "U8Pixels",
    "U8Rgba",
    "IndexArray",
    "CHANNELS",
    # value objects
    "AssetImage",
    "PackedImage",
    # helpers
    "pixel_to_hex",
    "coerce_to_pixel",
    "as_pixel_rows",
    "pixel_keys",
]
