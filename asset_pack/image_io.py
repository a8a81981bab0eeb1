# asset_pack/image_io.py
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from .constants import IMAGE_EXTENSIONS
from .core_types import AssetImage, U8Rgba
from .errors import InputError

"""
Image decoding: files on disk -> named RGBA pixel sequences.
"""

PathLike = Union[str, Path]


def asset_name_from_path(path: PathLike) -> str:
    """Asset name is the file stem. Raises InputError if there is none."""
    p = Path(path)
    name = p.stem
    if not name or name in (".", ".."):
        raise InputError(f"Couldn't parse file name from path: {p}", path=p)
    try:
        name.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InputError(
            f"Image path name ({p!r}) contained invalid unicode.", path=p
        ) from exc
    return name


def load_rgba_array(path: Path) -> U8Rgba:
    """Decode the first frame of an image with Pillow as uint8 (H, W, 4)."""
    try:
        with Image.open(path) as im0:
            im0.seek(0)
            im = im0.convert("RGBA")
    except FileNotFoundError as exc:
        raise InputError(f"Failed to open {path}.", path=path) from exc
    except UnidentifiedImageError as exc:
        raise InputError(f"Failed to decode {path}: not an image.", path=path) from exc
    except Image.DecompressionBombError as exc:
        raise InputError(f"Failed to decode {path}: {exc}", path=path) from exc
    except (OSError, ValueError) as exc:
        raise InputError(f"Failed to read {path}: {exc}", path=path) from exc
    return np.array(im, dtype=np.uint8)


def load_asset_image(path: PathLike) -> AssetImage:
    """Load one image file as an AssetImage named after its stem."""
    p = Path(path)
    name = asset_name_from_path(p)
    arr = load_rgba_array(p)
    height, width = int(arr.shape[0]), int(arr.shape[1])
    return AssetImage(
        name=name, pixels=arr.reshape(-1, 4), width=width, height=height
    )


def expand_inputs(sources: Iterable[PathLike]) -> List[Path]:
    """
    Expand folders to their image files, sorted by lowercase name.
    Plain file paths pass through in the order given.
    """
    out: List[Path] = []
    for src in sources:
        p = Path(src)
        if p.is_dir():
            files = [
                f
                for f in p.iterdir()
                if f.is_file() and f.suffix.lower() in IMAGE_EXTENSIONS
            ]
            files.sort(key=lambda f: f.name.lower())
            out.extend(files)
        else:
            out.append(p)
    return out


def load_images(paths: Sequence[PathLike]) -> List[AssetImage]:
    """Load every path; the first failure aborts the whole batch."""
    return [load_asset_image(p) for p in paths]


def save_image_rgba(path: Path, pixels: np.ndarray, width: int, height: int) -> Path:
    """Write (N, 4) RGBA rows back out as a PNG of the given size."""
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    out = np.asarray(pixels, dtype=np.uint8).reshape(height, width, 4)
    Image.fromarray(out).save(path)
    return path


__all__ = [
    "asset_name_from_path",
    "load_rgba_array",
    "load_asset_image",
    "expand_inputs",
    "load_images",
    "save_image_rgba",
]
