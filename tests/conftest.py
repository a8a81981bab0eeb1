from pathlib import Path
from typing import Callable, Sequence

import numpy as np
import pytest

from asset_pack.core_types import Pixel
from asset_pack.image_io import save_image_rgba

from helpers import BLUE, GREEN, RED, make_image


@pytest.fixture
def two_images():
    """Image A = [red, green], image B = [green, blue]."""
    return [make_image("a", [RED, GREEN]), make_image("b", [GREEN, BLUE])]


@pytest.fixture
def write_png(tmp_path: Path) -> Callable[..., Path]:
    """Write a W x H RGBA PNG under tmp_path and return its path."""

    def _write(name: str, pixels: Sequence[Pixel], width: int, height: int) -> Path:
        arr = np.array(list(pixels), dtype=np.uint8).reshape(-1, 4)
        return save_image_rgba(tmp_path / name, arr, width, height)

    return _write
