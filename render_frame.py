#!/usr/bin/env python3
"""
render_frame.py
Render photos for a 6-colour e-paper frame (800x480 by default).

Usage:
  python render_frame.py SRC [--out PATH] [--count N] [--raw] [--no-dither] [--seed S] [--jobs J] [--env-file F] [--debug]

Sources:
  file   : render that one photo.
  folder : treat the folder as the album; the picker chooses --count photos
           (age-weighted, on-this-day, no recent repeats) and renders them.

Output:
  PNG holding only palette colours. A file source writes <stem>_frame.png next
  to the input unless --out is given. A folder source writes
  <NN>_<stem>_frame.png into --out (default: the album folder).

Notes:
  Configuration comes from the environment and an optional .env file; see
  photo_frame.config for the variable names.
  CPU bound. ThreadPoolExecutor is used for --jobs > 1.
"""

from __future__ import annotations

import argparse
import os
import random
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from photo_frame.catalog import CatalogCache, scan_folder
from photo_frame.config import ConfigError, FrameConfig, load_config
from photo_frame.core_types import PhotoRecord
from photo_frame.image_io import probe_image, save_png
from photo_frame.palette_data import NAME_OF
from photo_frame.pipeline import FrameRenderer, RenderResult
from photo_frame.selection import PhotoPicker
from photo_frame.utils import (
    # formatting
    format_seconds_compact,
    format_total_duration_compact,
    colour_usage_report,
    # pretty logging
    print_banner,
    log,
    debug_log,
    error,
    print_config_line,
    key_value_pairs_to_string,
    enable_line_buffered_stdout,
)

OUTPUT_SUFFIX = "_frame"

# CLI args


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        src: Path to image or album folder
        out: optional output file (file source) or directory (folder source)
        count: photos to pick from a folder
        raw: quantise without dithering for this run
        no_dither: turn off dithering in the loaded config
        seed: optional int seed for reproducible picks
        jobs: parallel renders
        env_file: optional .env path
        debug: bool for verbose details
    """
    parser = argparse.ArgumentParser(
        prog="render-frame",
        description="Render photo(s) for a 6-colour e-paper frame.",
    )
    parser.add_argument("src", type=Path, help="Input image or album folder")
    parser.add_argument(
        "--out", type=Path, default=None, help="Output file or directory (optional)"
    )
    parser.add_argument(
        "--count", type=int, default=1, help="Photos to pick from a folder"
    )
    parser.add_argument(
        "--raw", action="store_true", help="Skip dithering for this run (plain quantisation)"
    )
    parser.add_argument(
        "--no-dither", action="store_true", help="Disable Floyd-Steinberg dithering"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for picks")
    parser.add_argument("--jobs", type=int, default=1, help="Renders in parallel")
    parser.add_argument(
        "--env-file", type=Path, default=None, help="Load settings from this .env file"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose details")
    return parser.parse_args(argv)


# Per-photo processing


def _output_path_for(
    photo: PhotoRecord, index: int, outdir: Path
) -> Path:
    return outdir / f"{index:02d}_{Path(photo.url).stem}{OUTPUT_SUFFIX}.png"


def _render_timed(
    renderer: FrameRenderer, photo: PhotoRecord, raw: bool
) -> Tuple[RenderResult, float]:
    t0 = time.perf_counter()
    result = renderer.render(photo, raw=raw)
    return result, time.perf_counter() - t0


def _report(
    result: RenderResult, out_path: Path, render_secs: float, debug: bool
) -> None:
    """Print the per-photo block: what was written and which colours it used."""
    photo = result.photo
    title = Path(photo.url).name if photo is not None else "fallback"
    print_banner(title)
    if debug and photo is not None:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Source", f"{photo.width}x{photo.height}"),
                    ("Taken", photo.capture_timestamp or "-"),
                    ("On this day", photo.on_this_day),
                ]
            )
        )
    log(f"Wrote {out_path.name} | size={result.width}x{result.height} | dithered={result.dithered}")
    log("Colours used:")
    for hex_code, name, count in colour_usage_report(result.image, NAME_OF):
        log(f"  {hex_code}  {name}: {count:,}")
    log(f"Total pixels: {result.width * result.height:,}")
    if debug:
        debug_log(f"render {format_seconds_compact(render_secs)}")


def _render_file(
    src: Path, out: Optional[Path], renderer: FrameRenderer, raw: bool, debug: bool
) -> None:
    width, height, taken = probe_image(src)
    photo = PhotoRecord(url=str(src), width=width, height=height, capture_timestamp=taken)
    dst = out if out is not None else src.with_name(f"{src.stem}{OUTPUT_SUFFIX}.png")
    result, secs = _render_timed(renderer, photo, raw)
    dst = save_png(dst, result.image)
    _report(result, dst, secs, debug)


def _album_loader(folder: Path, debug: bool):
    """Catalog loader that skips our own output files."""

    def load() -> List[PhotoRecord]:
        return [
            p
            for p in scan_folder(folder, debug=debug)
            if not Path(p.url).stem.endswith(OUTPUT_SUFFIX)
        ]

    return load


def _render_album(
    folder: Path,
    outdir: Path,
    cfg: FrameConfig,
    renderer: FrameRenderer,
    count: int,
    seed: Optional[int],
    jobs: int,
    raw: bool,
) -> None:
    cache = CatalogCache(
        _album_loader(folder, cfg.debug),
        refresh_interval_minutes=cfg.album_refresh_interval_minutes,
    )
    catalog = cache.get()
    if cfg.debug:
        debug_log(
            key_value_pairs_to_string(
                [("Photos", len(catalog)), ("Count", count), ("Jobs", jobs), ("Seed", seed if seed is not None else "-")]
            )
        )

    outdir.mkdir(parents=True, exist_ok=True)
    if not catalog:
        result = renderer.render_fallback("No photos in album")
        dst = save_png(outdir / f"00_empty{OUTPUT_SUFFIX}.png", result.image)
        _report(result, dst, 0.0, cfg.debug)
        return

    rng = random.Random(seed) if seed is not None else None
    anniversary_rng = random.Random(seed + 1) if seed is not None else None
    picker = PhotoPicker.from_config(cfg, rng=rng, anniversary_rng=anniversary_rng)

    # Picks are sequential so history stays in order; renders may overlap.
    picks = [picker.pick(catalog) for _ in range(max(0, count))]
    chosen = [p for p in picks if p is not None]

    if jobs <= 1:
        timed = [_render_timed(renderer, p, raw) for p in chosen]
    else:
        with ThreadPoolExecutor(max_workers=jobs) as ex:
            futures = [ex.submit(_render_timed, renderer, p, raw) for p in chosen]
            timed = [f.result() for f in futures]

    for i, (photo, (result, secs)) in enumerate(zip(chosen, timed), start=1):
        dst = save_png(_output_path_for(photo, i, outdir), result.image)
        _report(result, dst, secs, cfg.debug)

    nav = picker.navigation_status()
    hist = picker.history_status()
    print_config_line(
        "history",
        [("Recent", f"{hist.size}/{hist.max_size}"), ("Navigation", nav.total)],
        debug=cfg.debug,
    )


# Entry point


def main(argv: Optional[Sequence[str]] = None) -> None:
    """
    CLI entry point.

    Handles a single file or an album folder. Exits with 2 when the source is
    missing and 1 when the configuration is invalid.
    """
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)
    t_start = time.perf_counter()

    src = args.src
    if not src.exists():
        print(f"error: not found: {src}", file=sys.stderr, flush=True)
        sys.exit(2)

    try:
        cfg = load_config(env_file=args.env_file)
    except ConfigError as e:
        error(f"invalid configuration: {e}")
        sys.exit(1)
    if args.no_dither:
        cfg.dither_enabled = False
    if args.debug:
        cfg.debug = True

    cpu_cores = os.cpu_count() or 1
    print_config_line(
        "run",
        [("CPU cores", cpu_cores), ("Jobs", args.jobs), ("Raw", args.raw)],
        debug=False,
    )
    print_config_line("frame", cfg.summary_pairs(), debug=cfg.debug)

    renderer = FrameRenderer(cfg)
    if src.is_dir():
        outdir = args.out if args.out is not None else src
        _render_album(src, outdir, cfg, renderer, args.count, args.seed, args.jobs, args.raw)
    else:
        _render_file(src, args.out, renderer, args.raw, cfg.debug)

    log(f"Total time {format_total_duration_compact(time.perf_counter() - t_start)}")


if __name__ == "__main__":
    main()
