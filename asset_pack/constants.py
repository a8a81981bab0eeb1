# asset_pack/constants.py
"""
Output labels and tunables used across the project.

- Label names and prefixes for the emitted assembly
- Default output path and row width
- PackConfig: the frozen run configuration built from these defaults
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Tuple

# =========================
# Output file
# =========================
DEFAULT_OUTPUT = Path("assets.s")

FILE_HEADER = r"""; ###########################################################
;              _    ____ ____  _____ _____ ____
;             / \  / ___/ ___|| ____|_   _/ ___|
;            / _ \ \___ \___ \|  _|   | | \___ \
;           / ___ \ ___) |__) | |___  | |  ___) |
;          /_/   \_\____/____/|_____| |_| |____/
; ###########################################################"""

# =========================
# Labels
# =========================
PALETTE_LABEL = "Palette"
BITS_PER_COLOUR_LABEL = "bits_per_colour"
PIXELS_PER_BYTE_LABEL = "pixels_per_byte"
IMAGE_LABEL_PREFIX = "_"
ADDRESS_TABLE_LABEL = "AssetAddressTable"
ADDRESS_PREFIX = "_ADR"
ASSET_PREFIX = "ASSET"
ASSET_COUNT_LABEL = "ASSET_MAX"

# Bytes per DEFW entry in the address table (32-bit words).
TABLE_ENTRY_SIZE = 4

# Packed bytes per DEFB line.
DEFAULT_ROW_WIDTH = 8

# Column the table directives line up on.
LABEL_COLUMN = 28

# =========================
# Inputs
# =========================
IMAGE_EXTENSIONS: FrozenSet[str] = frozenset(
    {".png", ".gif", ".bmp", ".jpg", ".jpeg", ".webp"}
)

PALETTE_ORDERS: Tuple[str, ...] = ("first-seen", "sorted")
DEFAULT_PALETTE_ORDER = "first-seen"


@dataclass(frozen=True)
class PackConfig:
    """Run configuration. The CLI fills this from argparse."""

    output: Path = DEFAULT_OUTPUT
    row_width: int = DEFAULT_ROW_WIDTH
    palette_order: str = DEFAULT_PALETTE_ORDER
    entry_size: int = TABLE_ENTRY_SIZE
    verify: bool = False
    debug: bool = False

    def __post_init__(self) -> None:
        if self.row_width < 1:
            raise ValueError("row_width must be >= 1")
        if self.palette_order not in PALETTE_ORDERS:
            raise ValueError(
                f"palette_order must be one of {', '.join(PALETTE_ORDERS)}"
            )
        if self.entry_size < 1:
            raise ValueError("entry_size must be >= 1")


__all__ = [
    "DEFAULT_OUTPUT",
    "FILE_HEADER",
    "PALETTE_LABEL",
    "BITS_PER_COLOUR_LABEL",
    "PIXELS_PER_BYTE_LABEL",
    "IMAGE_LABEL_PREFIX",
    "ADDRESS_TABLE_LABEL",
    "ADDRESS_PREFIX",
    "ASSET_PREFIX",
    "ASSET_COUNT_LABEL",
    "TABLE_ENTRY_SIZE",
    "DEFAULT_ROW_WIDTH",
    "LABEL_COLUMN",
    "IMAGE_EXTENSIONS",
    "PALETTE_ORDERS",
    "DEFAULT_PALETTE_ORDER",
    "PackConfig",
]
