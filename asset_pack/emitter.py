# asset_pack/emitter.py
from __future__ import annotations

"""
Assembly text rendering.

Output layout (in order):
  header banner
  Palette          one DEFB line of r, g, b, a per colour, in index order
  bits_per_colour / pixels_per_byte EQU constants
  _<name>          one block per image, DEFB rows of packed bytes
  ALIGN
  AssetAddressTable
    _ADR_<name>    DEFW _<name>      (one per image)
  AssetAddressTableEnd
  ASSET_MAX        EQU (end - start) / entry size
  ASSET_<name>     EQU (_ADR_<name> - start) / entry size
"""

import re
from typing import List, Sequence

from .constants import (
    ADDRESS_PREFIX,
    ADDRESS_TABLE_LABEL,
    ASSET_COUNT_LABEL,
    ASSET_PREFIX,
    BITS_PER_COLOUR_LABEL,
    DEFAULT_ROW_WIDTH,
    FILE_HEADER,
    IMAGE_LABEL_PREFIX,
    LABEL_COLUMN,
    PALETTE_LABEL,
    PIXELS_PER_BYTE_LABEL,
    TABLE_ENTRY_SIZE,
    PackConfig,
)
from .core_types import PackedImage
from .errors import InputError
from .palette import Palette
from .utils import chunked

_NON_LABEL_CHARS = re.compile(r"[^A-Za-z0-9_]")
_DEFB_VALUE = re.compile(r"0x([0-9A-Fa-f]{2})")


def image_label(name: str, prefix: str = IMAGE_LABEL_PREFIX) -> str:
    """Assembler label for an asset: prefix + name with non-word chars as '_'."""
    if not name:
        raise InputError("Asset name is empty; cannot derive a label.")
    return prefix + _NON_LABEL_CHARS.sub("_", name)


def _column(text: str, width: int = LABEL_COLUMN) -> str:
    """Pad `text` to `width`, always leaving at least one space."""
    return text + " " * max(1, width - len(text))


def _defb(values: Sequence[int]) -> str:
    return "\tDEFB " + ", ".join(f"0x{v:02X}" for v in values)


def render_palette(palette: Palette, label: str = PALETTE_LABEL) -> str:
    lines = [label]
    lines.extend(_defb(colour) for colour in palette)
    return "\n".join(lines) + "\n"


def render_constants(bits_per_colour: int, pixels_per_byte: int) -> str:
    return (
        f"{BITS_PER_COLOUR_LABEL}\tEQU {bits_per_colour}\n"
        f"{PIXELS_PER_BYTE_LABEL}\tEQU {pixels_per_byte}\n"
    )


def render_image(packed: PackedImage, row_width: int = DEFAULT_ROW_WIDTH) -> str:
    """
    Label line followed by DEFB rows of at most `row_width` bytes.
    The final row may be shorter; every byte is written exactly once.
    """
    lines = [packed.label]
    lines.extend(_defb(row) for row in chunked(packed.data, row_width))
    return "\n".join(lines) + "\n"


def render_address_table(
    labels: Sequence[str],
    table_label: str = ADDRESS_TABLE_LABEL,
    entry_size: int = TABLE_ENTRY_SIZE,
) -> str:
    """
    Word-aligned table of image addresses, an end marker, the entry count,
    and one ordinal constant per image.
    """
    lines: List[str] = ["ALIGN", "", table_label]
    for label in labels:
        lines.append(_column(ADDRESS_PREFIX + label) + f"DEFW\t{label}")
    lines.append(f"{table_label}End")
    lines.append("")
    lines.append(
        f"{ASSET_COUNT_LABEL}\tEQU\t({table_label}End - {table_label}) / {entry_size}"
    )
    lines.append("")
    for label in labels:
        lines.append(
            _column(ASSET_PREFIX + label)
            + f"EQU\t({ADDRESS_PREFIX}{label} - {table_label}) / {entry_size}"
        )
    return "\n".join(lines) + "\n"


def render_assembly(
    palette: Palette,
    packed_images: Sequence[PackedImage],
    config: PackConfig = PackConfig(),
) -> str:
    """Full assembly source for one pack run."""
    bits = palette.bits_per_colour
    ppb = palette.pixels_per_byte
    parts: List[str] = [
        FILE_HEADER + "\n",
        render_palette(palette),
        render_constants(bits, ppb),
    ]
    parts.extend(render_image(p, config.row_width) for p in packed_images)
    parts.append(
        render_address_table(
            [p.label for p in packed_images], entry_size=config.entry_size
        )
    )
    return "\n".join(parts)


def parse_defb_bytes(block: str) -> List[int]:
    """Byte values of every DEFB line in `block`, in order."""
    out: List[int] = []
    for line in block.splitlines():
        stripped = line.strip()
        if not stripped.startswith("DEFB"):
            continue
        out.extend(int(h, 16) for h in _DEFB_VALUE.findall(stripped))
    return out


__all__ = [
    "image_label",
    "render_palette",
    "render_constants",
    "render_image",
    "render_address_table",
    "render_assembly",
    "parse_defb_bytes",
]
