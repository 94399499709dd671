# photo_frame/pipeline.py
from __future__ import annotations

"""
Rendering pipeline: photo descriptor -> display-ready palette raster.

Steps:
  1. Load the photo (loader callable; local files by default)
  2. Cover-crop to the display size
  3. Optional overlays (capture date, countdown)
  4. Floyd-Steinberg dither, or plain quantisation in raw / no-dither mode

The last successful render is cached when image caching is enabled.
"""

import threading
import time
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Iterable, Optional

from .config import FrameConfig
from .core_types import PhotoRecord, U8Image
from .dither import dither, quantize_only
from .image_io import fit_cover, load_image_rgb
from .overlay import draw_countdown_overlay, draw_date_overlay, render_error_image
from .selection import PhotoPicker
from .utils import debug_log, format_seconds_compact, log, warn

PhotoLoader = Callable[[str], U8Image]


@dataclass(frozen=True)
class RenderResult:
    image: U8Image
    photo: Optional[PhotoRecord]
    width: int
    height: int
    dithered: bool
    processed_at: datetime


class FrameRenderer:
    """Turns PhotoRecords into palette rasters sized for the display."""

    def __init__(
        self,
        config: FrameConfig,
        loader: PhotoLoader = load_image_rgb,
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        self.config = config
        self._loader = loader
        self._today = today or date.today
        self._lock = threading.Lock()
        self._current: Optional[RenderResult] = None

    def prepare(self, photo: PhotoRecord) -> U8Image:
        """Load, crop and overlay; the result is still full colour."""
        cfg = self.config
        rgb = fit_cover(self._loader(photo.url), cfg.display_width, cfg.display_height)
        if cfg.date_overlay_enabled and photo.capture_timestamp is not None:
            rgb = draw_date_overlay(rgb, photo.capture_timestamp)
        if cfg.countdown_date is not None:
            rgb = draw_countdown_overlay(
                rgb, cfg.countdown_date, cfg.countdown_label, today=self._today()
            )
        return rgb

    def render(self, photo: PhotoRecord, raw: bool = False) -> RenderResult:
        cfg = self.config
        use_dither = cfg.dither_enabled and not raw
        t0 = time.perf_counter()

        rgb = self.prepare(photo)
        t1 = time.perf_counter()
        if use_dither:
            out = dither(rgb, cfg.display_width, cfg.display_height)
        else:
            out = quantize_only(rgb, cfg.display_width, cfg.display_height)
        t2 = time.perf_counter()

        if cfg.debug:
            debug_log(
                f"render {photo.url}  prepare={format_seconds_compact(t1 - t0)}  "
                f"{'dither' if use_dither else 'quantize'}={format_seconds_compact(t2 - t1)}"
            )

        result = RenderResult(
            image=out,
            photo=photo,
            width=cfg.display_width,
            height=cfg.display_height,
            dithered=use_dither,
            processed_at=datetime.now(),
        )
        if cfg.image_cache_enabled:
            with self._lock:
                self._current = result
        return result

    def render_fallback(self, message: str) -> RenderResult:
        """Quantised error frame; never cached."""
        cfg = self.config
        rgb = render_error_image(message, cfg.display_width, cfg.display_height)
        return RenderResult(
            image=quantize_only(rgb, cfg.display_width, cfg.display_height),
            photo=None,
            width=cfg.display_width,
            height=cfg.display_height,
            dithered=False,
            processed_at=datetime.now(),
        )

    def _render_or_fallback(self, photo: PhotoRecord, raw: bool) -> RenderResult:
        if photo.on_this_day and photo.capture_timestamp is not None:
            log(f'Selected "On this day" photo from {photo.capture_timestamp.year}')
        try:
            return self.render(photo, raw=raw)
        except (OSError, ValueError) as e:
            warn(f"Image processing failed: {e}")
            return self.render_fallback("Processing error")

    def render_next(
        self, picker: PhotoPicker, catalog: Iterable[PhotoRecord], raw: bool = False
    ) -> RenderResult:
        """Pick a fresh photo and render it, falling back to an error frame."""
        photos = list(catalog) if catalog is not None else []
        if not photos:
            warn("No photos available")
            return self.render_fallback("No photos in album")
        photo = picker.pick(photos)
        if photo is None:
            warn("Failed to pick a photo")
            return self.render_fallback("Failed to select photo")
        return self._render_or_fallback(photo, raw)

    def render_forward(
        self, picker: PhotoPicker, catalog: Iterable[PhotoRecord], raw: bool = False
    ) -> RenderResult:
        """Step forward through navigation history; pick fresh only at the tail."""
        photo = picker.next()
        if photo is None:
            return self.render_next(picker, catalog, raw=raw)
        return self._render_or_fallback(photo, raw)

    def render_previous(self, picker: PhotoPicker, raw: bool = False) -> RenderResult:
        """
        Step back through navigation history.
        At the start of history the cached frame is returned, else a fallback.
        """
        photo = picker.previous()
        if photo is None:
            log("At beginning of navigation history")
            cached = self.current()
            if cached is not None:
                return cached
            return self.render_fallback("No previous image")
        return self._render_or_fallback(photo, raw)

    def render_current(
        self, picker: PhotoPicker, catalog: Iterable[PhotoRecord], raw: bool = False
    ) -> RenderResult:
        """The cached frame, or a fresh pick when nothing is cached."""
        cached = self.current()
        if cached is not None:
            return cached
        return self.render_next(picker, catalog, raw=raw)

    def current(self) -> Optional[RenderResult]:
        with self._lock:
            return self._current

    def clear_cache(self) -> None:
        with self._lock:
            self._current = None
        log("Image cache cleared")


__all__ = ["PhotoLoader", "RenderResult", "FrameRenderer"]
