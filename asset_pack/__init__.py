# asset_pack/__init__.py
"""
asset_pack package.

Purpose:
  Pack RGBA images into palette-indexed, bit-packed bytes and emit them as
  assembly source with a shared palette and an asset address table.
  See pack_assets.py for the CLI.

Public API:
  Palette        : global colour table built from every input image.
  pack_image     : pack one image against a finished palette.
  render_assembly: full assembly text for a palette and packed images.
  build_assembly : images -> (assembly text, report), all in memory.
  run            : paths -> written output file, the CLI entry point.
  core_types     : shared aliases and value objects (AssetImage, PackedImage).
  errors         : AssetPackError and its subclasses.
  utils          : formatting and logging helpers.

Quick start:
  from asset_pack import build_assembly
  from asset_pack.image_io import load_images
  text, report = build_assembly(load_images(["hero.png", "coin.png"]))
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import constants
from . import core_types
from . import errors
from . import utils

from .constants import PackConfig  # noqa: E402,F401
from .core_types import AssetImage, PackedImage  # noqa: E402,F401
from .errors import (  # noqa: E402,F401
    AssetPackError,
    EmptyInputError,
    EncodingInvariantError,
    InputError,
    OutputError,
)
from .palette import Palette  # noqa: E402,F401
from .encoder import pack_image, unpack_image  # noqa: E402,F401
from .emitter import render_assembly  # noqa: E402,F401
from .pipeline import build_assembly, run  # noqa: E402,F401

__all__ = [
    "__version__",
    "constants",
    "core_types",
    "errors",
    "utils",
    "PackConfig",
    "AssetImage",
    "PackedImage",
    "AssetPackError",
    "EmptyInputError",
    "EncodingInvariantError",
    "InputError",
    "OutputError",
    "Palette",
    "pack_image",
    "unpack_image",
    "render_assembly",
    "build_assembly",
    "run",
]
