# photo_frame/config.py
from __future__ import annotations

"""
Runtime configuration.

Values come from environment variables (optionally seeded from a .env file via
python-dotenv) with defaults from constants.py. Everything is validated once
at startup; the selection and dithering code trusts the result.

Environment:
  TIME_BUCKETS                    "30:50,365:30,inf:20" (max_age_days:weight, ...)
  RECENT_THRESHOLD_DAYS           used when TIME_BUCKETS is unset (default 90)
  RECENT_WEIGHT / OLD_WEIGHT      used when TIME_BUCKETS is unset (80 / 20)
  HISTORY_SIZE                    anti-repetition memory (20)
  ON_THIS_DAY_ENABLED             true
  ON_THIS_DAY_WINDOW_DAYS         3
  DITHER_ENABLED                  true
  DATE_OVERLAY_ENABLED            true
  IMAGE_CACHE_ENABLED             true
  ALBUM_REFRESH_INTERVAL_MINUTES  60
  COUNTDOWN_DATE                  YYYY-MM-DD, empty disables
  COUNTDOWN_LABEL                 "Holidays"
  DEBUG                           false
"""

import math
import os
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import List, Mapping, Optional, Tuple, Union

from dotenv import dotenv_values, load_dotenv

from . import constants as C
from .core_types import TimeBucket
from .errors import ConfigError
from .selection.buckets import validate_buckets

_FALSE_WORDS = {"false", "0", "no", "off"}
_INF_WORDS = {"inf", "infinity", "unbounded", "∞"}


def default_buckets(
    threshold_days: int = C.RECENT_THRESHOLD_DAYS,
    recent_weight: int = C.RECENT_WEIGHT,
    old_weight: int = C.OLD_WEIGHT,
) -> List[TimeBucket]:
    """Two-bucket split: recent photos vs. everything else."""
    return [
        TimeBucket(max_age_days=float(threshold_days), weight=int(recent_weight)),
        TimeBucket(max_age_days=math.inf, weight=int(old_weight)),
    ]


@dataclass
class FrameConfig:
    time_buckets: List[TimeBucket] = field(default_factory=default_buckets)
    history_size: int = C.HISTORY_SIZE
    on_this_day_enabled: bool = C.ON_THIS_DAY_ENABLED
    on_this_day_window_days: int = C.ON_THIS_DAY_WINDOW_DAYS
    dither_enabled: bool = C.DITHER_ENABLED
    date_overlay_enabled: bool = C.DATE_OVERLAY_ENABLED
    image_cache_enabled: bool = C.IMAGE_CACHE_ENABLED
    album_refresh_interval_minutes: int = C.ALBUM_REFRESH_INTERVAL_MINUTES
    countdown_date: Optional[date] = None
    countdown_label: str = C.COUNTDOWN_LABEL
    display_width: int = C.DISPLAY_WIDTH
    display_height: int = C.DISPLAY_HEIGHT
    debug: bool = False

    def problems(self) -> List[str]:
        """Every validation problem, empty when the config is usable."""
        found = list(validate_buckets(self.time_buckets))
        if self.history_size < 1:
            found.append("HISTORY_SIZE must be at least 1")
        if self.on_this_day_window_days < 0:
            found.append("ON_THIS_DAY_WINDOW_DAYS must not be negative")
        if self.album_refresh_interval_minutes < 1:
            found.append("ALBUM_REFRESH_INTERVAL_MINUTES must be at least 1")
        if self.display_width <= 0 or self.display_height <= 0:
            found.append("display dimensions must be positive")
        return found

    def validate(self) -> "FrameConfig":
        found = self.problems()
        if found:
            raise ConfigError(found)
        return self

    def summary_pairs(self) -> List[Tuple[str, object]]:
        """(name, value) pairs for a one-line config print."""
        buckets = " ".join(f"{b.label()}d:{b.weight}" for b in self.time_buckets)
        return [
            ("Buckets", buckets),
            ("History", self.history_size),
            ("On this day", self.on_this_day_enabled),
            ("Window", self.on_this_day_window_days),
            ("Dither", self.dither_enabled),
            ("Date overlay", self.date_overlay_enabled),
            ("Display", f"{self.display_width}x{self.display_height}"),
        ]


# Parsing helpers


def parse_bool(raw: Optional[str], default: bool) -> bool:
    """Anything other than false/0/no/off counts as true; unset keeps the default."""
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() not in _FALSE_WORDS


def parse_int(name: str, raw: Optional[str], default: int) -> int:
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


def parse_max_age(token: str) -> float:
    token = token.strip().lower()
    if token in _INF_WORDS:
        return math.inf
    try:
        return float(token)
    except ValueError:
        raise ConfigError(f"bad bucket age {token!r}") from None


def parse_time_buckets(spec: str) -> List[TimeBucket]:
    """Parse "30:50,365:30,inf:20" into buckets. Structural checks only."""
    buckets: List[TimeBucket] = []
    for part in spec.split(","):
        part = part.strip()
        if not part:
            continue
        age_s, sep, weight_s = part.partition(":")
        if not sep:
            raise ConfigError(f"bucket {part!r} must look like max_age_days:weight")
        try:
            weight = int(weight_s.strip())
        except ValueError:
            raise ConfigError(f"bad bucket weight in {part!r}") from None
        buckets.append(TimeBucket(max_age_days=parse_max_age(age_s), weight=weight))
    if not buckets:
        raise ConfigError("TIME_BUCKETS is empty")
    return buckets


def parse_date(name: str, raw: Optional[str]) -> Optional[date]:
    if raw is None or raw.strip() == "":
        return None
    try:
        return date.fromisoformat(raw.strip())
    except ValueError:
        raise ConfigError(f"{name} must be YYYY-MM-DD, got {raw!r}") from None


def config_from_mapping(env: Mapping[str, Optional[str]]) -> FrameConfig:
    """Build (without validating) a FrameConfig from an environment-like mapping."""
    buckets_raw = env.get("TIME_BUCKETS")
    if buckets_raw and buckets_raw.strip():
        buckets = parse_time_buckets(buckets_raw)
    else:
        buckets = default_buckets(
            parse_int("RECENT_THRESHOLD_DAYS", env.get("RECENT_THRESHOLD_DAYS"), C.RECENT_THRESHOLD_DAYS),
            parse_int("RECENT_WEIGHT", env.get("RECENT_WEIGHT"), C.RECENT_WEIGHT),
            parse_int("OLD_WEIGHT", env.get("OLD_WEIGHT"), C.OLD_WEIGHT),
        )

    return FrameConfig(
        time_buckets=buckets,
        history_size=parse_int("HISTORY_SIZE", env.get("HISTORY_SIZE"), C.HISTORY_SIZE),
        on_this_day_enabled=parse_bool(env.get("ON_THIS_DAY_ENABLED"), C.ON_THIS_DAY_ENABLED),
        on_this_day_window_days=parse_int(
            "ON_THIS_DAY_WINDOW_DAYS", env.get("ON_THIS_DAY_WINDOW_DAYS"), C.ON_THIS_DAY_WINDOW_DAYS
        ),
        dither_enabled=parse_bool(env.get("DITHER_ENABLED"), C.DITHER_ENABLED),
        date_overlay_enabled=parse_bool(env.get("DATE_OVERLAY_ENABLED"), C.DATE_OVERLAY_ENABLED),
        image_cache_enabled=parse_bool(env.get("IMAGE_CACHE_ENABLED"), C.IMAGE_CACHE_ENABLED),
        album_refresh_interval_minutes=parse_int(
            "ALBUM_REFRESH_INTERVAL_MINUTES",
            env.get("ALBUM_REFRESH_INTERVAL_MINUTES"),
            C.ALBUM_REFRESH_INTERVAL_MINUTES,
        ),
        countdown_date=parse_date("COUNTDOWN_DATE", env.get("COUNTDOWN_DATE")),
        countdown_label=(env.get("COUNTDOWN_LABEL") or C.COUNTDOWN_LABEL).strip(),
        debug=parse_bool(env.get("DEBUG"), False),
    )


def load_config(
    env: Optional[Mapping[str, Optional[str]]] = None,
    env_file: Optional[Union[str, Path]] = None,
) -> FrameConfig:
    """
    Load and validate configuration.

    With env=None the process environment is used, after load_dotenv() has
    filled in anything missing from env_file (or a .env in the working dir).
    With an explicit mapping, env_file values sit underneath it.
    """
    if env is None:
        load_dotenv(dotenv_path=env_file, override=False)
        source: Mapping[str, Optional[str]] = os.environ
    elif env_file is not None:
        source = {**dotenv_values(env_file), **env}
    else:
        source = env
    return config_from_mapping(source).validate()


__all__ = [
    "ConfigError",
    "FrameConfig",
    "default_buckets",
    "parse_bool",
    "parse_int",
    "parse_time_buckets",
    "parse_date",
    "config_from_mapping",
    "load_config",
]
