# photo_frame/dither/floyd_steinberg.py
from __future__ import annotations

"""
Floyd-Steinberg error diffusion onto the 6-colour display palette.

        X   7/16
  3/16 5/16 1/16

Scan order is strictly row-major, left to right. Each pixel's accumulator holds
its source sample plus error pushed by already-visited neighbours; the kernel
only writes to pixels that have not been visited yet. Accumulators are allowed
to leave [0, 255]; clamping happens only when a sample is handed to the
quantiser.
"""

import math
from typing import List, Tuple

import numpy as np

from ..constants import KERNEL_FS
from ..core_types import U8Image
from ..palette_data import PALETTE_ITEMS, PALETTE_RGB
from ..quantize import nearest_indices


def as_raster(raster: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Validate a raster against the stated geometry and return it as (H, W, 3).

    Accepts an (H, W, 3) array or a flat row-major buffer of W*H*3 samples.
    Any disagreement between width/height and the buffer is a caller bug.
    """
    if int(width) <= 0 or int(height) <= 0:
        raise ValueError(f"raster dimensions must be positive, got {width}x{height}")
    arr = np.asarray(raster)
    expected = (int(height), int(width), 3)
    if arr.ndim == 1:
        if arr.size != expected[0] * expected[1] * 3:
            raise ValueError(
                f"raster buffer holds {arr.size} samples, "
                f"expected {width}x{height}x3 = {expected[0] * expected[1] * 3}"
            )
        arr = arr.reshape(expected)
    elif arr.shape != expected:
        raise ValueError(
            f"raster shape {tuple(arr.shape)} does not match "
            f"{width}x{height} (expected {expected})"
        )
    if arr.size and (arr.min() < 0 or arr.max() > 255):
        raise ValueError("raster samples must lie in [0, 255]")
    return arr


def dither(raster: np.ndarray, width: int, height: int) -> U8Image:
    """
    Floyd-Steinberg diffusion in RGB against the display palette.
    Returns a new uint8 (H, W, 3) raster holding only palette colours.
    """
    src = as_raster(raster, width, height)
    H, W = int(height), int(width)

    # Scratch accumulator as nested Python floats, discarded on return.
    acc: List[List[List[float]]] = src.astype(np.float64).tolist()
    pal = [item.rgb for item in PALETTE_ITEMS]
    chosen = [[0] * W for _ in range(H)]

    nbrs: Tuple[Tuple[int, int, float], ...] = KERNEL_FS
    for y in range(H):
        row = acc[y]
        picks = chosen[y]
        for x in range(W):
            r, g, b = row[x]
            # Clamped copy for the palette lookup; error uses the raw values.
            cr = min(255, max(0, math.floor(r + 0.5)))
            cg = min(255, max(0, math.floor(g + 0.5)))
            cb = min(255, max(0, math.floor(b + 0.5)))
            j = 0
            best = -1
            for k, (pr, pg, pb) in enumerate(pal):
                d = (cr - pr) * (cr - pr) + (cg - pg) * (cg - pg) + (cb - pb) * (cb - pb)
                if best < 0 or d < best:
                    best = d
                    j = k
            picks[x] = j

            pr, pg, pb = pal[j]
            er, eg, eb = r - pr, g - pg, b - pb
            if not (er or eg or eb):
                continue
            for dx, dy, w in nbrs:
                nx, ny = x + dx, y + dy
                if 0 <= ny < H and 0 <= nx < W:
                    px = acc[ny][nx]
                    px[0] += er * w
                    px[1] += eg * w
                    px[2] += eb * w

    return PALETTE_RGB[np.array(chosen, dtype=np.intp)].astype(np.uint8)


def quantize_only(raster: np.ndarray, width: int, height: int) -> U8Image:
    """Map every pixel to its nearest palette colour with no diffusion."""
    src = as_raster(raster, width, height)
    flat = src.reshape(-1, 3)
    idx = nearest_indices(np.floor(flat.astype(np.float64) + 0.5))
    return PALETTE_RGB[idx].reshape(src.shape).astype(np.uint8)


__all__ = ["as_raster", "dither", "quantize_only"]
