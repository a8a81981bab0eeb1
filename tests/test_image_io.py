import numpy as np
import pytest
from PIL import Image

from asset_pack.core_types import AssetImage
from asset_pack.errors import InputError
from asset_pack.image_io import (
    asset_name_from_path,
    expand_inputs,
    load_asset_image,
    load_images,
)

from helpers import BLUE, CLEAR, GREEN, RED


def test_asset_name_is_file_stem(tmp_path):
    assert asset_name_from_path(tmp_path / "hero.png") == "hero"
    assert asset_name_from_path("sprites/coin.gold.png") == "coin.gold"


def test_load_png_row_major(write_png):
    path = write_png("tile.png", [RED, GREEN, BLUE, CLEAR], 2, 2)
    image = load_asset_image(path)
    assert image.name == "tile"
    assert (image.width, image.height) == (2, 2)
    assert image.pixels.shape == (4, 4)
    assert [tuple(p) for p in image.pixels.tolist()] == [RED, GREEN, BLUE, CLEAR]


def test_rgb_images_get_opaque_alpha(tmp_path):
    path = tmp_path / "flat.png"
    Image.new("RGB", (3, 1), (10, 20, 30)).save(path)
    image = load_asset_image(path)
    assert image.pixels.tolist() == [[10, 20, 30, 255]] * 3


def test_loaded_pixels_are_read_only(write_png):
    image = load_asset_image(write_png("one.png", [RED], 1, 1))
    with pytest.raises(ValueError):
        image.pixels[0, 0] = 0


def test_missing_file(tmp_path):
    with pytest.raises(InputError) as info:
        load_asset_image(tmp_path / "nope.png")
    assert info.value.path == tmp_path / "nope.png"


def test_oversized_canvas_is_an_input_error(write_png, monkeypatch):
    path = write_png("huge.png", [RED] * 100, 10, 10)
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)
    with pytest.raises(InputError, match="huge.png") as info:
        load_asset_image(path)
    assert info.value.path == path


def test_undecodable_file(tmp_path):
    path = tmp_path / "junk.png"
    path.write_bytes(b"definitely not a png")
    with pytest.raises(InputError, match="junk.png"):
        load_asset_image(path)


def test_batch_stops_at_first_failure(write_png, tmp_path):
    good = write_png("good.png", [RED], 1, 1)
    with pytest.raises(InputError):
        load_images([good, tmp_path / "missing.png"])


def test_expand_folder_sorted_by_name(write_png, tmp_path):
    write_png("b.png", [RED], 1, 1)
    write_png("A.png", [RED], 1, 1)
    (tmp_path / "notes.txt").write_text("skip me")
    paths = expand_inputs([tmp_path])
    assert [p.name for p in paths] == ["A.png", "b.png"]


def test_expand_keeps_file_order(tmp_path):
    paths = expand_inputs([tmp_path / "z.png", tmp_path / "a.png"])
    assert [p.name for p in paths] == ["z.png", "a.png"]


def test_image_pixels_are_copied():
    src = np.zeros((2, 4), dtype=np.uint8)
    image = AssetImage("copy", src)
    src[0, 0] = 9
    assert image.pixels[0, 0] == 0
    assert src.flags.writeable
