# photo_frame/__init__.py
"""
photo_frame package.

Purpose:
  Photo selection and rendering for a 6-colour e-paper frame. See
  render_frame.py for the CLI.

Public API:
  PhotoPicker    : age-weighted, on-this-day photo selection with history.
  dither         : subpackage; dither() and quantize_only() map rasters onto
                   the display palette.
  nearest        : nearest palette colour for one RGB triple.
  FrameRenderer  : load -> crop -> overlays -> dither pipeline.
  FrameConfig    : validated runtime settings; load_config() reads env/.env.
  core_types     : PhotoRecord, TimeBucket, PaletteItem and type aliases.
  PALETTE        : (hex, name) pairs in tie-break order.

Quick start:
  from photo_frame import PhotoPicker, FrameRenderer, load_config
  cfg = load_config()
  picker = PhotoPicker.from_config(cfg)
  result = FrameRenderer(cfg).render_next(picker, catalog)
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import core_types
from . import palette_data
from . import utils
from . import dither
from . import selection

from .constants import PALETTE
from .core_types import PaletteItem, PhotoRecord, TimeBucket
from .quantize import nearest, nearest_index
from .selection import PhotoPicker
from .config import ConfigError, FrameConfig, load_config
from .pipeline import FrameRenderer, RenderResult

__all__ = [
    "__version__",
    "core_types",
    "palette_data",
    "utils",
    "dither",
    "selection",
    "PALETTE",
    "PaletteItem",
    "PhotoRecord",
    "TimeBucket",
    "nearest",
    "nearest_index",
    "PhotoPicker",
    "ConfigError",
    "FrameConfig",
    "load_config",
    "FrameRenderer",
    "RenderResult",
]
