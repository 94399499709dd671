# photo_frame/palette_data.py
from __future__ import annotations

"""
Palette definitions and builders.

Exports:
  PALETTE: list[tuple[str, str]]  # [(hex, name), ...]
  build_palette(hex_name_pairs=PALETTE)
    -> (items: list[PaletteItem],
        name_of: dict[RGBTuple, str],
        pal_rgb: uint8 [P,3])
  PALETTE_ITEMS, PALETTE_RGB, NAME_OF: the display palette, built once.
"""

from typing import Dict, List, Tuple

import numpy as np

from .constants import PALETTE
from .core_types import PaletteItem, RGBTuple, U8Image, hex_to_rgb


def build_palette(
    hex_name_pairs: List[Tuple[str, str]] = PALETTE,
) -> Tuple[List[PaletteItem], Dict[RGBTuple, str], U8Image]:
    """
    Convert a list of (hex, name) into:
      items: list[PaletteItem] with rgb and name
      name_of: dict mapping RGBTuple -> name
      pal_rgb: uint8 array [P,3] in the same order
    """
    if not hex_name_pairs:
        raise ValueError("palette must not be empty")

    items: List[PaletteItem] = []
    name_of: Dict[RGBTuple, str] = {}
    for hx, name in hex_name_pairs:
        rgb_tuple = hex_to_rgb(hx)
        if rgb_tuple in name_of:
            raise ValueError(f"duplicate palette colour {hx}")
        items.append(PaletteItem(rgb=rgb_tuple, name=name))
        name_of[rgb_tuple] = name

    pal_rgb: U8Image = np.array([pi.rgb for pi in items], dtype=np.uint8)
    pal_rgb.setflags(write=False)
    return items, name_of, pal_rgb


PALETTE_ITEMS, NAME_OF, PALETTE_RGB = build_palette()


__all__ = ["PALETTE", "build_palette", "PALETTE_ITEMS", "NAME_OF", "PALETTE_RGB"]
