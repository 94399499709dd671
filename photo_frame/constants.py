# photo_frame/constants.py
"""
Global palette and tunables used across the project.

- PALETTE (the 6-colour ACeP set, canonical order)
- Display geometry
- Error-diffusion kernel
- Selection defaults (time buckets, history, on-this-day)
- Rendering defaults (overlays, cache)
"""
from __future__ import annotations

from typing import List, Tuple

# =========================
# Display palette (hex, name)
# =========================
# Order is the nearest-colour tie-break: earlier entries win equal distances.
PALETTE: List[Tuple[str, str]] = [
    ("#000000", "Black"),
    ("#ffffff", "White"),
    ("#00ff00", "Green"),
    ("#0000ff", "Blue"),
    ("#ff0000", "Red"),
    ("#ffff00", "Yellow"),
]

# =================
# Display geometry
# =================
DISPLAY_WIDTH: int = 800
DISPLAY_HEIGHT: int = 480

# ====================
# Dithering (DITHER_*)
# ====================
# Floyd-Steinberg: (dx, dy, weight); weights sum to 16/16.
KERNEL_FS: Tuple[Tuple[int, int, float], ...] = (
    (1, 0, 7 / 16),
    (-1, 1, 3 / 16),
    (0, 1, 5 / 16),
    (1, 1, 1 / 16),
)

# ======================
# Selection (SELECT_*)
# ======================
RECENT_THRESHOLD_DAYS: int = 90
RECENT_WEIGHT: int = 80
OLD_WEIGHT: int = 20
BUCKET_WEIGHT_TOTAL: int = 100
HISTORY_SIZE: int = 20
NAVIGATION_HISTORY_FACTOR: int = 2

ON_THIS_DAY_ENABLED: bool = True
ON_THIS_DAY_WINDOW_DAYS: int = 3
ON_THIS_DAY_PROBABILITY: float = 0.5
# Month/day distances are measured in a leap year so Feb 29 has a slot.
ON_THIS_DAY_REFERENCE_YEAR: int = 2000
DAYS_IN_YEAR: int = 365

SECONDS_PER_DAY: float = 24 * 60 * 60

# ======================
# Rendering (RENDER_*)
# ======================
DITHER_ENABLED: bool = True
DATE_OVERLAY_ENABLED: bool = True
IMAGE_CACHE_ENABLED: bool = True
ALBUM_REFRESH_INTERVAL_MINUTES: int = 60
COUNTDOWN_LABEL: str = "Holidays"

OVERLAY_FONT_SIZE: int = 22
OVERLAY_PADDING: int = 8
OVERLAY_MARGIN: int = 12
OVERLAY_INK: Tuple[int, int, int] = (0, 0, 0)
OVERLAY_PAPER: Tuple[int, int, int] = (255, 255, 255)
ERROR_FONT_SIZE: int = 28

IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".webp", ".bmp", ".tif", ".tiff"}

__all__ = [
    "PALETTE",
    "DISPLAY_WIDTH",
    "DISPLAY_HEIGHT",
    "KERNEL_FS",
    "RECENT_THRESHOLD_DAYS",
    "RECENT_WEIGHT",
    "OLD_WEIGHT",
    "BUCKET_WEIGHT_TOTAL",
    "HISTORY_SIZE",
    "NAVIGATION_HISTORY_FACTOR",
    "ON_THIS_DAY_ENABLED",
    "ON_THIS_DAY_WINDOW_DAYS",
    "ON_THIS_DAY_PROBABILITY",
    "ON_THIS_DAY_REFERENCE_YEAR",
    "DAYS_IN_YEAR",
    "SECONDS_PER_DAY",
    "DITHER_ENABLED",
    "DATE_OVERLAY_ENABLED",
    "IMAGE_CACHE_ENABLED",
    "ALBUM_REFRESH_INTERVAL_MINUTES",
    "COUNTDOWN_LABEL",
    "OVERLAY_FONT_SIZE",
    "OVERLAY_PADDING",
    "OVERLAY_MARGIN",
    "OVERLAY_INK",
    "OVERLAY_PAPER",
    "ERROR_FONT_SIZE",
    "IMAGE_EXTENSIONS",
]
