# photo_frame/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]
HexStr = str

U8Image = NDArray[np.uint8]  # (H, W, 3)
F64Image = NDArray[np.float64]  # (H, W, 3) error-diffusion accumulator

NameOf = Dict[RGBTuple, str]  # palette RGB -> human-readable name

# Value objects


@dataclass(frozen=True)
class PaletteItem:
    """Display palette entry."""

    rgb: RGBTuple
    name: str


@dataclass(frozen=True)
class PhotoRecord:
    """One catalog photo. `url` is an opaque identifier (a file path for local catalogs)."""

    url: str
    width: int
    height: int
    capture_timestamp: Optional[datetime] = None
    on_this_day: bool = False

    def __post_init__(self) -> None:
        if int(self.width) <= 0 or int(self.height) <= 0:
            raise ValueError(
                f"photo dimensions must be positive, got {self.width}x{self.height}"
            )


@dataclass(frozen=True)
class TimeBucket:
    """Age band for weighted selection. max_age_days is math.inf for the final bucket."""

    max_age_days: float
    weight: int

    @property
    def unbounded(self) -> bool:
        return math.isinf(self.max_age_days)

    def label(self) -> str:
        return "inf" if self.unbounded else f"{self.max_age_days:g}"


# Small helpers


def clamp_value(value: float, lo: float, hi: float) -> float:
    """Clamp value to [lo, hi]."""
    return lo if value < lo else hi if value > hi else value


def round_half_up(value: float) -> int:
    """Round to nearest with halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def clamp_channel(value: float) -> int:
    """Round to nearest and clamp a channel sample into [0, 255]."""
    return int(clamp_value(round_half_up(value), 0, 255))


def rgb_to_hex(rgb: RGBTuple) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}"


def hex_to_rgb(hex_str: str) -> RGBTuple:
    """Parse '#rgb' or '#rrggbb' (case-insensitive) into an RGB tuple."""
    s = hex_str.strip().lower()
    if not s.startswith("#"):
        raise ValueError("hex must start with '#'")
    if len(s) == 4:
        r, g, b = s[1], s[2], s[3]
        s = f"#{r}{r}{g}{g}{b}{b}"
    if len(s) != 7:
        raise ValueError("hex must be '#rrggbb' or '#rgb'")
    return (int(s[1:3], 16), int(s[3:5], 16), int(s[5:7], 16))


def assert_u8_image_rgb(image: np.ndarray) -> U8Image:
    """Validate a uint8 (H,W,3) image and return it typed as U8Image."""
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[-1] != 3:
        raise TypeError(
            f"expected uint8 (H,W,3) image, got {image.dtype} {tuple(image.shape)}"
        )
    return image  # type: ignore[return-value]


__all__ = [
    # aliases / types
    "RGBTuple",
    "HexStr",
    "U8Image",
    "F64Image",
    "NameOf",
    # value objects
    "PaletteItem",
    "PhotoRecord",
    "TimeBucket",
    # helpers
    "clamp_value",
    "round_half_up",
    "clamp_channel",
    "rgb_to_hex",
    "hex_to_rgb",
    "assert_u8_image_rgb",
]
