from typing import Sequence

import numpy as np

from asset_pack.core_types import AssetImage, Pixel

RED: Pixel = (255, 0, 0, 255)
GREEN: Pixel = (0, 255, 0, 255)
BLUE: Pixel = (0, 0, 255, 255)
CLEAR: Pixel = (0, 0, 0, 0)


def make_image(name: str, pixels: Sequence[Pixel]) -> AssetImage:
    arr = np.array(list(pixels), dtype=np.uint8).reshape(-1, 4)
    return AssetImage(name=name, pixels=arr, width=len(pixels), height=1)
