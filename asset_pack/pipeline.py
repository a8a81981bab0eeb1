# asset_pack/pipeline.py
from __future__ import annotations

"""
Pack run driver.

  collect images -> build palette -> pack every image -> render -> write

Every image is packed before any text is produced, and the text is written to
a temporary file that replaces the destination only once complete. Any error
stops the run with nothing written.
"""

import os
import tempfile
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .constants import PackConfig
from .core_types import AssetImage, PackedImage
from .emitter import image_label, render_assembly
from .encoder import pack_image, unpack_image
from .errors import EmptyInputError, EncodingInvariantError, InputError, OutputError
from .image_io import PathLike, expand_inputs, load_images
from .palette import Palette
from .utils import debug_log, key_value_pairs_to_string, warn


@dataclass
class PackReport:
    """Summary of one run, for logging and tests."""

    palette_size: int
    bits_per_colour: int
    pixels_per_byte: int
    image_bytes: Dict[str, int] = field(default_factory=dict)
    output: Optional[Path] = None
    elapsed: float = 0.0

    @property
    def total_bytes(self) -> int:
        return sum(self.image_bytes.values())


def _unique_labels(images: Sequence[AssetImage]) -> List[str]:
    labels: List[str] = []
    seen: Dict[str, str] = {}
    for img in images:
        label = image_label(img.name)
        if label in seen:
            raise InputError(
                f"Assets {seen[label]!r} and {img.name!r} both map to label {label}."
            )
        seen[label] = img.name
        labels.append(label)
    return labels


def verify_packed(
    images: Sequence[AssetImage], packed: Sequence[PackedImage], palette: Palette
) -> None:
    """Unpack every image and compare with its source pixels."""
    for img, p in zip(images, packed):
        restored = unpack_image(p, palette)
        if not np.array_equal(restored, img.pixels):
            raise EncodingInvariantError(
                f"{img.name}: packed data does not unpack to the source pixels."
            )


def pack_images(
    images: Sequence[AssetImage], config: PackConfig = PackConfig()
) -> Tuple[Palette, List[PackedImage]]:
    """Build the shared palette, then pack every image against it."""
    if len(images) == 0:
        raise EmptyInputError("No Images to process.")
    labels = _unique_labels(images)
    for img in images:
        if len(img) == 0:
            warn(f"{img.name}: no pixels, packs to zero bytes")

    palette = Palette.from_images(images, order=config.palette_order)
    bits = palette.bits_per_colour
    ppb = palette.pixels_per_byte

    packed = [
        pack_image(img, palette, bits, ppb, label=label)
        for img, label in zip(images, labels)
    ]
    if config.verify:
        verify_packed(images, packed, palette)
    return palette, packed


def build_assembly(
    images: Sequence[AssetImage], config: PackConfig = PackConfig()
) -> Tuple[str, PackReport]:
    """Pack `images` and render the complete assembly source in memory."""
    palette, packed = pack_images(images, config)
    text = render_assembly(palette, packed, config)
    report = PackReport(
        palette_size=palette.size,
        bits_per_colour=palette.bits_per_colour,
        pixels_per_byte=palette.pixels_per_byte,
        image_bytes={p.name: len(p) for p in packed},
    )
    if config.debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Palette", palette.size),
                    ("Bits/colour", report.bits_per_colour),
                    ("Pixels/byte", report.pixels_per_byte),
                    ("Packed bytes", report.total_bytes),
                ]
            )
        )
        debug_log(f"palette: {' '.join(palette.hex_codes())}")
    return text, report


def _output_mode(path: Path) -> int:
    """Mode of the existing destination, else what a plain open() would give."""
    if path.exists():
        return path.stat().st_mode & 0o777
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_atomically(path: Path, text: str) -> Path:
    """
    Write `text` to a temporary file next to `path`, then move it into place.
    Raises OutputError; no partial file is left behind.
    """
    path = Path(path)
    directory = path.parent
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            newline="\n",
            dir=directory,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as fh:
            tmp_name = fh.name
            fh.write(text)
        os.chmod(tmp_name, _output_mode(path))
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise OutputError(
            f"Failed to write output file - '{path}': {exc}", path=path
        ) from exc
    return path


def run(sources: Sequence[PathLike], config: PackConfig = PackConfig()) -> PackReport:
    """Load, pack, render and write. Returns the run summary."""
    t_start = time.perf_counter()
    paths = expand_inputs(sources)
    if not paths:
        raise EmptyInputError("No Images to process.")
    if config.debug:
        debug_log(f"inputs: {', '.join(str(p) for p in paths)}")

    images = load_images(paths)
    text, report = build_assembly(images, config)
    report.output = write_atomically(config.output, text)
    report.elapsed = time.perf_counter() - t_start
    return report


__all__ = [
    "PackReport",
    "pack_images",
    "verify_packed",
    "build_assembly",
    "write_atomically",
    "run",
]
