import pytest

import pack_assets

from helpers import GREEN, RED


def test_main_writes_assembly(write_png, tmp_path, capsys):
    src = write_png("hero.png", [RED, GREEN, RED], 3, 1)
    out = tmp_path / "assets.s"
    assert pack_assets.main([str(src), "-o", str(out), "--verify"]) == 0
    assert "\n_hero\n" in out.read_text()
    stdout = capsys.readouterr().out
    assert "palette_size=2" in stdout
    assert "bits_per_colour=1" in stdout


def test_main_without_inputs_fails(tmp_path, capsys):
    out = tmp_path / "assets.s"
    assert pack_assets.main(["-o", str(out)]) == 1
    assert "[error] No Images to process." in capsys.readouterr().err
    assert not out.exists()


def test_main_reports_bad_file(tmp_path, capsys):
    out = tmp_path / "assets.s"
    assert pack_assets.main([str(tmp_path / "gone.png"), "-o", str(out)]) == 1
    assert "gone.png" in capsys.readouterr().err


def test_row_width_must_be_positive(tmp_path):
    with pytest.raises(SystemExit) as info:
        pack_assets.main(["x.png", "--row-width", "0"])
    assert info.value.code == 2


def test_palette_order_flag(write_png, tmp_path):
    src = write_png("pair.png", [RED, GREEN], 2, 1)
    out = tmp_path / "assets.s"
    assert pack_assets.main([str(src), "-o", str(out), "--palette-order", "sorted"]) == 0
    palette_lines = out.read_text().split("\nPalette\n", 1)[1].splitlines()[:2]
    assert palette_lines == ["\tDEFB 0x00, 0xFF, 0x00, 0xFF", "\tDEFB 0xFF, 0x00, 0x00, 0xFF"]
