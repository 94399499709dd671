# photo_frame/catalog.py
from __future__ import annotations

"""
Photo catalogs: a local-folder source and a refreshing in-memory cache.

scan_folder(folder)       -> list[PhotoRecord] built from image files, name order
CatalogCache(loader, ...) -> snapshot holder; refreshes when stale, keeps the
                             old snapshot if a refresh fails
"""

import threading
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from PIL import UnidentifiedImageError

from .constants import ALBUM_REFRESH_INTERVAL_MINUTES, IMAGE_EXTENSIONS
from .core_types import PhotoRecord
from .image_io import probe_image
from .utils import debug_log, log, warn, error

CatalogLoader = Callable[[], List[PhotoRecord]]


def scan_folder(folder: Path, debug: bool = False) -> List[PhotoRecord]:
    """Build PhotoRecords for every readable image directly inside folder."""
    folder = Path(folder)
    if not folder.is_dir():
        raise NotADirectoryError(f"not a folder: {folder}")

    files = [
        p
        for p in folder.iterdir()
        if p.is_file() and p.suffix.lower() in IMAGE_EXTENSIONS
    ]
    files.sort(key=lambda p: p.name.lower())

    photos: List[PhotoRecord] = []
    for path in files:
        try:
            width, height, taken = probe_image(path)
        except (UnidentifiedImageError, OSError) as e:
            warn(f"skipping unreadable image {path.name}: {e}")
            continue
        photos.append(
            PhotoRecord(url=str(path), width=width, height=height, capture_timestamp=taken)
        )
        if debug:
            debug_log(f"catalog: {path.name} {width}x{height} taken={taken or '-'}")
    return photos


@dataclass(frozen=True)
class CatalogStatus:
    photo_count: int
    last_refresh: Optional[datetime]
    cache_age_minutes: Optional[int]
    is_refreshing: bool


class CatalogCache:
    """
    Holds the latest catalog snapshot.

    get() refreshes when empty or older than the interval. A failed refresh
    keeps the previous snapshot and only raises when there is none.
    """

    def __init__(
        self,
        loader: CatalogLoader,
        refresh_interval_minutes: int = ALBUM_REFRESH_INTERVAL_MINUTES,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._loader = loader
        self.refresh_interval_minutes = int(refresh_interval_minutes)
        self._clock = clock or datetime.now
        self._photos: List[PhotoRecord] = []
        self._last_refresh: Optional[datetime] = None
        self._refresh_lock = threading.Lock()

    def needs_refresh(self) -> bool:
        if self._last_refresh is None:
            return True
        age = (self._clock() - self._last_refresh).total_seconds()
        return age > self.refresh_interval_minutes * 60

    def get(self) -> List[PhotoRecord]:
        if not self._photos or self.needs_refresh():
            self.refresh()
        return list(self._photos)

    def refresh(self) -> None:
        if not self._refresh_lock.acquire(blocking=False):
            debug_log("catalog refresh already in progress, skipping")
            return
        try:
            log("Refreshing catalog")
            try:
                photos = list(self._loader())
            except Exception as e:
                error(f"catalog refresh failed: {e}")
                if not self._photos:
                    raise
                return
            self._photos = photos
            self._last_refresh = self._clock()
            log(f"Catalog refreshed: {len(photos)} photos")
        finally:
            self._refresh_lock.release()

    def status(self) -> CatalogStatus:
        age = None
        if self._last_refresh is not None:
            age = int(round((self._clock() - self._last_refresh).total_seconds() / 60))
        return CatalogStatus(
            photo_count=len(self._photos),
            last_refresh=self._last_refresh,
            cache_age_minutes=age,
            is_refreshing=self._refresh_lock.locked(),
        )


__all__ = ["CatalogLoader", "scan_folder", "CatalogStatus", "CatalogCache"]
