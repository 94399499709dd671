"""
Tests for image loading, cover-cropping and EXIF dates.
"""

from datetime import datetime

import numpy as np
import pytest
from PIL import Image

from photo_frame.image_io import (
    encode_png,
    fit_cover,
    is_image_file,
    load_image_rgb,
    read_capture_timestamp,
    save_png,
)


class FakeExif(dict):
    def __init__(self, base, ifds):
        super().__init__(base)
        self._ifds = ifds

    def get_ifd(self, tag):
        return self._ifds.get(tag, {})


class FakeImage:
    def __init__(self, exif):
        self._exif = exif

    def getexif(self):
        return self._exif


class TestLoad:
    """Tests for load_image_rgb()."""

    def test_png_path(self, tmp_path):
        path = tmp_path / "a.png"
        Image.new("RGB", (5, 3), (1, 2, 3)).save(path)
        rgb = load_image_rgb(path)
        assert rgb.shape == (3, 5, 3)
        assert rgb.dtype == np.uint8
        assert rgb[0, 0].tolist() == [1, 2, 3]

    def test_alpha_flattened_onto_white(self, tmp_path):
        path = tmp_path / "t.png"
        Image.new("RGBA", (2, 2), (0, 0, 0, 0)).save(path)
        assert np.all(load_image_rgb(path) == 255)

    def test_bytes_source(self):
        png = encode_png(np.zeros((4, 6, 3), dtype=np.uint8))
        assert load_image_rgb(png).shape == (4, 6, 3)


class TestFitCover:
    """Tests for fit_cover()."""

    def test_exact_size(self):
        rgb = np.zeros((480, 800, 3), dtype=np.uint8)
        assert fit_cover(rgb, 800, 480) is rgb

    @pytest.mark.parametrize("shape", [(100, 100, 3), (600, 200, 3), (90, 1000, 3)])
    def test_fills_target(self, shape):
        rgb = np.full(shape, 120, dtype=np.uint8)
        out = fit_cover(rgb, 80, 48)
        assert out.shape == (48, 80, 3)

    def test_rejects_non_u8(self):
        with pytest.raises(TypeError):
            fit_cover(np.zeros((4, 4, 3), dtype=np.float32), 2, 2)


class TestSave:
    """Tests for save_png()/is_image_file()."""

    def test_forces_png_suffix(self, tmp_path):
        out = save_png(tmp_path / "frame.jpg", np.zeros((2, 2, 3), dtype=np.uint8))
        assert out.suffix == ".png"
        assert is_image_file(out)

    def test_is_image_file_false_for_text(self, tmp_path):
        path = tmp_path / "x.png"
        path.write_text("nope")
        assert not is_image_file(path)


class TestCaptureTimestamp:
    """Tests for read_capture_timestamp()."""

    def test_prefers_datetime_original(self):
        exif = FakeExif(
            {306: "2020:01:01 00:00:00"}, {0x8769: {36867: "2019:06:08 10:11:12"}}
        )
        assert read_capture_timestamp(FakeImage(exif)) == datetime(2019, 6, 8, 10, 11, 12)

    def test_falls_back_to_datetime(self):
        exif = FakeExif({306: "2020:01:01 00:00:00"}, {})
        assert read_capture_timestamp(FakeImage(exif)) == datetime(2020, 1, 1)

    def test_unparsable_is_none(self):
        exif = FakeExif({306: "sometime"}, {})
        assert read_capture_timestamp(FakeImage(exif)) is None

    def test_no_exif(self):
        assert read_capture_timestamp(Image.new("RGB", (2, 2))) is None
