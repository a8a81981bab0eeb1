# asset_pack/errors.py
"""
Error hierarchy. Every error is fatal to the run; the CLI reports the message
and exits non-zero.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class AssetPackError(Exception):
    """Base class for all pack failures."""


class InputError(AssetPackError):
    """A source file cannot be opened, decoded, or named."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class EmptyInputError(AssetPackError):
    """No images were supplied."""


class EncodingInvariantError(AssetPackError):
    """Packing hit a state the palette should have made impossible."""


class OutputError(AssetPackError):
    """The destination cannot be created or written."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


__all__ = [
    "AssetPackError",
    "InputError",
    "EmptyInputError",
    "EncodingInvariantError",
    "OutputError",
]
