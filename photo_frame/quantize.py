# photo_frame/quantize.py
from __future__ import annotations

"""
Nearest-colour quantisation against the display palette.

Functions:
  colour_distance_squared(a, b) -> int
  nearest_index(colour, palette=PALETTE_ITEMS) -> int
  nearest(colour, palette=PALETTE_ITEMS) -> RGBTuple
  quantize_pixel(colour) -> (palette RGB, per-channel error)
  nearest_indices(pixels, pal_rgb=PALETTE_RGB) -> int32 [N]
  is_palette_only(image, palette=PALETTE_ITEMS) -> bool

Distances are squared Euclidean in RGB. Ties go to the earliest palette entry.
Inputs must already be clamped to [0, 255]; anything else is a caller bug and
raises ValueError.
"""

from typing import List, Sequence, Set, Tuple

import numpy as np

from .core_types import PaletteItem, RGBTuple, U8Image
from .palette_data import PALETTE_ITEMS, PALETTE_RGB


def colour_distance_squared(a: Sequence[float], b: Sequence[float]) -> float:
    """Squared Euclidean RGB distance. No sqrt: ordering is all we need."""
    dr = a[0] - b[0]
    dg = a[1] - b[1]
    db = a[2] - b[2]
    return dr * dr + dg * dg + db * db


def _check_channels(colour: Sequence[float]) -> None:
    if len(colour) != 3:
        raise ValueError(f"expected an RGB triple, got {len(colour)} channels")
    for channel in colour:
        if not 0 <= channel <= 255:
            raise ValueError(f"channel out of range [0, 255]: {tuple(colour)}")


def nearest_index(
    colour: Sequence[float], palette: List[PaletteItem] = PALETTE_ITEMS
) -> int:
    """Index of the nearest palette entry; first entry wins ties."""
    _check_channels(colour)
    best_idx = 0
    best_dist = colour_distance_squared(colour, palette[0].rgb)
    for idx in range(1, len(palette)):
        dist = colour_distance_squared(colour, palette[idx].rgb)
        if dist < best_dist:
            best_dist = dist
            best_idx = idx
    return best_idx


def nearest(
    colour: Sequence[float], palette: List[PaletteItem] = PALETTE_ITEMS
) -> RGBTuple:
    """Nearest palette colour for an RGB triple."""
    return palette[nearest_index(colour, palette)].rgb


def quantize_pixel(
    colour: Sequence[float], palette: List[PaletteItem] = PALETTE_ITEMS
) -> Tuple[RGBTuple, Tuple[float, float, float]]:
    """Return (palette colour, colour - palette colour)."""
    rgb = nearest(colour, palette)
    return rgb, (colour[0] - rgb[0], colour[1] - rgb[1], colour[2] - rgb[2])


def nearest_indices(pixels: np.ndarray, pal_rgb: U8Image = PALETTE_RGB) -> np.ndarray:
    """
    Vectorised nearest lookup for an (N, 3) array of samples.
    np.argmin returns the first minimum, which keeps the palette-order tie-break.
    """
    pts = np.asarray(pixels)
    if pts.ndim != 2 or pts.shape[1] != 3:
        raise ValueError(f"expected (N, 3) samples, got {tuple(pts.shape)}")
    if pts.size and (pts.min() < 0 or pts.max() > 255):
        raise ValueError("channel out of range [0, 255]")
    pts32 = pts.astype(np.int32, copy=False)
    pal32 = pal_rgb.astype(np.int32)
    diff = pts32[:, None, :] - pal32[None, :, :]
    dist2 = np.sum(diff * diff, axis=2)
    return np.argmin(dist2, axis=1).astype(np.int32)


def palette_set(palette: List[PaletteItem] = PALETTE_ITEMS) -> Set[RGBTuple]:
    """Return a set of all RGB tuples present in the palette."""
    return {p.rgb for p in palette}


def is_palette_only(
    image: U8Image, palette: List[PaletteItem] = PALETTE_ITEMS
) -> bool:
    """True if every pixel of an (H, W, 3) image is a palette colour."""
    flat = np.asarray(image).reshape(-1, 3)
    if flat.shape[0] == 0:
        return True
    uniques = np.unique(flat, axis=0)
    pal = palette_set(palette)
    return all((int(r), int(g), int(b)) in pal for r, g, b in uniques.tolist())


__all__ = [
    "colour_distance_squared",
    "nearest_index",
    "nearest",
    "quantize_pixel",
    "nearest_indices",
    "palette_set",
    "is_palette_only",
]
