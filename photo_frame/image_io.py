# photo_frame/image_io.py
from __future__ import annotations

import io
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .constants import OVERLAY_PAPER
from .core_types import U8Image, assert_u8_image_rgb

"""
Image I/O helpers (RGB in sRGB), cover-crop resize, and EXIF capture dates.
"""

try:
    from PIL import ImageCms  # ICC conversion if profile present
except Exception:  # pragma: no cover
    ImageCms = None  # type: ignore[assignment]

ImageSource = Union[str, Path, bytes]

_EXIF_IFD = 0x8769
_TAG_DATETIME_ORIGINAL = 36867
_TAG_DATETIME = 306
_EXIF_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"


def _convert_to_srgb(im: Image.Image) -> Image.Image:
    im = ImageOps.exif_transpose(im)
    icc_bytes = im.info.get("icc_profile")

    if icc_bytes and ImageCms is not None and im.mode in ("RGB", "RGBA"):
        try:
            src_prof = ImageCms.ImageCmsProfile(io.BytesIO(icc_bytes))
            dst_prof = ImageCms.createProfile("sRGB")
            im2 = ImageCms.profileToProfile(
                im,
                src_prof,
                dst_prof,
                renderingIntent=ImageCms.Intent.PERCEPTUAL,
                outputMode=im.mode,
            )
            if im2 is not None:
                return im2
        except (ImageCms.PyCMSError, OSError):
            return im
    return im


def _flatten(im: Image.Image) -> Image.Image:
    """Drop alpha by compositing onto paper white."""
    if im.mode in ("RGBA", "LA") or (im.mode == "P" and "transparency" in im.info):
        rgba = im.convert("RGBA")
        paper = Image.new("RGBA", rgba.size, OVERLAY_PAPER + (255,))
        return Image.alpha_composite(paper, rgba).convert("RGB")
    return im.convert("RGB")


def open_image(source: ImageSource) -> Image.Image:
    """Open a path or encoded bytes; the caller closes the result."""
    if isinstance(source, (bytes, bytearray)):
        return Image.open(io.BytesIO(source))
    return Image.open(source)


def load_image_rgb(source: ImageSource) -> U8Image:
    """Load an image as uint8 (H, W, 3) sRGB with EXIF orientation applied."""
    with open_image(source) as im0:
        im = _flatten(_convert_to_srgb(im0))
        return np.array(im, dtype=np.uint8)


def fit_cover(rgb: U8Image, width: int, height: int) -> U8Image:
    """Scale and centre-crop so the result fills exactly width x height."""
    assert_u8_image_rgb(rgb)
    if rgb.shape[0] == height and rgb.shape[1] == width:
        return rgb
    im = Image.fromarray(rgb)
    fitted = ImageOps.fit(
        im, (int(width), int(height)), method=Image.Resampling.LANCZOS, centering=(0.5, 0.5)
    )
    return np.array(fitted, dtype=np.uint8)


def save_png(path: Path, rgb: U8Image) -> Path:
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    Image.fromarray(assert_u8_image_rgb(rgb)).save(path)
    return path


def encode_png(rgb: U8Image) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(assert_u8_image_rgb(rgb)).save(buf, format="PNG")
    return buf.getvalue()


def read_capture_timestamp(im: Image.Image) -> Optional[datetime]:
    """EXIF DateTimeOriginal, falling back to DateTime; None when absent or unparsable."""
    exif = im.getexif()
    if not exif:
        return None
    candidates = (
        exif.get_ifd(_EXIF_IFD).get(_TAG_DATETIME_ORIGINAL),
        exif.get(_TAG_DATETIME),
    )
    for raw in candidates:
        if not raw:
            continue
        try:
            return datetime.strptime(str(raw).strip("\x00 "), _EXIF_DATE_FORMAT)
        except ValueError:
            continue
    return None


def probe_image(path: Path) -> Tuple[int, int, Optional[datetime]]:
    """(width, height, capture timestamp) after EXIF orientation, without decoding pixels."""
    with Image.open(path) as im:
        width, height = im.size
        orientation = im.getexif().get(0x0112, 1)
        if orientation in (5, 6, 7, 8):
            width, height = height, width
        return width, height, read_capture_timestamp(im)


def is_image_file(path: Path) -> bool:
    try:
        with Image.open(path) as im:
            im.verify()
        return True
    except (UnidentifiedImageError, OSError):
        return False


__all__ = [
    "open_image",
    "load_image_rgb",
    "fit_cover",
    "save_png",
    "encode_png",
    "read_capture_timestamp",
    "probe_image",
    "is_image_file",
]
