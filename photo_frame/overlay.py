# photo_frame/overlay.py
from __future__ import annotations

"""
Text overlays drawn with Pillow before quantisation.

- draw_date_overlay      : capture date, bottom-left
- draw_countdown_overlay : "N days until <label>", top-right
- render_error_image     : white fallback frame with a centred message

Labels are palette black on white so they quantise to crisp text.
"""

from datetime import date, datetime
from typing import Optional, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .constants import (
    ERROR_FONT_SIZE,
    OVERLAY_FONT_SIZE,
    OVERLAY_INK,
    OVERLAY_MARGIN,
    OVERLAY_PADDING,
    OVERLAY_PAPER,
)
from .core_types import U8Image, assert_u8_image_rgb


def _font(size: int) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
    return ImageFont.load_default(size=size)


def format_photo_date(when: datetime | date) -> str:
    """'June 8, 2023'."""
    return f"{when:%B} {when.day}, {when.year}"


def format_countdown(days: int, label: str) -> str:
    if days == 0:
        return f"{label} is today"
    unit = "day" if days == 1 else "days"
    return f"{days} {unit} until {label}"


def _draw_label(
    im: Image.Image, text: str, corner: str, size: int = OVERLAY_FONT_SIZE
) -> None:
    """Draw text on a paper box anchored at 'bottom-left' or 'top-right'."""
    draw = ImageDraw.Draw(im)
    font = _font(size)
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    box_w = (right - left) + 2 * OVERLAY_PADDING
    box_h = (bottom - top) + 2 * OVERLAY_PADDING
    W, H = im.size
    if corner == "bottom-left":
        x0, y0 = OVERLAY_MARGIN, H - OVERLAY_MARGIN - box_h
    elif corner == "top-right":
        x0, y0 = W - OVERLAY_MARGIN - box_w, OVERLAY_MARGIN
    else:
        raise ValueError(f"unknown corner {corner!r}")
    draw.rectangle((x0, y0, x0 + box_w, y0 + box_h), fill=OVERLAY_PAPER)
    draw.text(
        (x0 + OVERLAY_PADDING - left, y0 + OVERLAY_PADDING - top),
        text,
        font=font,
        fill=OVERLAY_INK,
    )


def draw_date_overlay(rgb: U8Image, when: datetime | date) -> U8Image:
    """Return a copy of rgb with the capture date in the bottom-left corner."""
    im = Image.fromarray(assert_u8_image_rgb(rgb).copy())
    _draw_label(im, format_photo_date(when), "bottom-left")
    return np.array(im, dtype=np.uint8)


def draw_countdown_overlay(
    rgb: U8Image, target: date, label: str, today: Optional[date] = None
) -> U8Image:
    """Return a copy with the countdown drawn top-right; unchanged once target has passed."""
    today = today or date.today()
    days = (target - today).days
    if days < 0:
        return rgb
    im = Image.fromarray(assert_u8_image_rgb(rgb).copy())
    _draw_label(im, format_countdown(days, label), "top-right")
    return np.array(im, dtype=np.uint8)


def render_error_image(message: str, width: int, height: int) -> U8Image:
    """Paper-white frame with a centred message in ink."""
    im = Image.new("RGB", (int(width), int(height)), OVERLAY_PAPER)
    draw = ImageDraw.Draw(im)
    font = _font(ERROR_FONT_SIZE)
    left, top, right, bottom = draw.textbbox((0, 0), message, font=font)
    pos: Tuple[float, float] = (
        (width - (right - left)) / 2 - left,
        (height - (bottom - top)) / 2 - top,
    )
    draw.text(pos, message, font=font, fill=OVERLAY_INK)
    return np.array(im, dtype=np.uint8)


__all__ = [
    "format_photo_date",
    "format_countdown",
    "draw_date_overlay",
    "draw_countdown_overlay",
    "render_error_image",
]
