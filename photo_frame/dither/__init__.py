# photo_frame/dither/__init__.py
"""
Dithering API.

Provides:
  dither(raster, width, height)
    Map an RGB raster to the display palette using Floyd-Steinberg error diffusion.

  quantize_only(raster, width, height)
    Nearest-colour mapping with no diffusion ("raw" mode).

    Args:
      raster : uint8 [H,W,3], or a flat row-major buffer of W*H*3 samples
      width  : int, must agree with the raster
      height : int, must agree with the raster

    Returns:
      uint8 [H,W,3] raster holding only palette colours.

    Notes:
      - Row-major scan, no serpentine. Error never lands on visited pixels.
      - A mismatched width/height raises ValueError; nothing is truncated.
      - Each call owns its accumulator, so separate rasters can be
        processed on separate threads.
"""

from .floyd_steinberg import as_raster, dither, quantize_only

__all__ = ["as_raster", "dither", "quantize_only"]
