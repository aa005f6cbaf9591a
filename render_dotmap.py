#!/usr/bin/env python3
"""
render_dotmap.py
Turn map images into dot grids for a limited physical palette.

Usage:
  python render_dotmap.py INPUT --width W --height H [--detail N]
      [--water-depth 0..100] [--no-black-water] [--vibrancy 0..100]
      [--coastline 0..100] [--sensitivity 0..100]
      [--palette dotmaps.config.json] [--no-limit] [--outdir DIR] [--debug]

Input:
  Any Pillow-readable image, or a folder of them. Alpha is ignored.

Output:
  <stem>_dotmap.png  dot preview
  <stem>_dotmap.json grid as {"grid": [[hex|null]], "width": W, "height": H}
  A parts list (used / available / short per colour) and base plate count.
"""

from __future__ import annotations

import argparse
import io
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from dotmap.constants import BASE_PLATE_SIZE, DEFAULT_GRID_HEIGHT, DEFAULT_GRID_WIDTH
from dotmap.grid_ops import base_plates_needed, grid_to_json, parts_list
from dotmap.image_io import (
    IMAGE_EXTS,
    is_image_file,
    load_image_rgba,
    render_grid_preview,
    save_png_rgba,
)
from dotmap.limit import limit_quantities
from dotmap.options import RenderOptions
from dotmap.palette_data import PaletteConfig, default_palette, load_palette_config
from dotmap.synthesize import synthesize
from dotmap.utils import (
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_seconds_compact,
    format_total_duration_compact,
    key_value_pairs_to_string,
    log,
    log_to,
    print_banner,
    print_config_line,
    warn,
)

OUTPUT_SUFFIX = "_dotmap"


def _slider(text: str) -> int:
    value = int(text)
    if not 0 <= value <= 100:
        raise argparse.ArgumentTypeError(f"expected 0..100, got {value}")
    return value


def _positive(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return value


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        src: Path to image or folder
        width, height: grid size in cells
        detail: optional coarse sampling size
        water_depth, black_water, vibrancy, coastline, sensitivity: render options
        palette: optional Path to a palette config JSON
        no_limit: skip supply limiting
        outdir: optional Path for outputs
        cell_px: preview dot size
        jobs: files processed in parallel
        debug: bool for verbose details
    """
    parser = argparse.ArgumentParser(
        prog="render_dotmap",
        description="Convert map image(s) into dot grids for a limited palette.",
    )
    parser.add_argument("src", type=Path, help="Input image or folder")
    parser.add_argument("--width", type=_positive, default=DEFAULT_GRID_WIDTH, help="Grid width in cells")
    parser.add_argument("--height", type=_positive, default=DEFAULT_GRID_HEIGHT, help="Grid height in cells")
    parser.add_argument(
        "--detail",
        type=_positive,
        default=None,
        help="Sample at this long-side size, then upscale. Omit for full detail.",
    )
    parser.add_argument("--water-depth", type=_slider, default=50, help="Darker water as it rises (0..100)")
    parser.add_argument(
        "--no-black-water",
        dest="black_water",
        action="store_false",
        help="Leave black out of the water gradient",
    )
    parser.add_argument("--vibrancy", type=_slider, default=60, help="Land saturation boost (0..100)")
    parser.add_argument("--coastline", type=_slider, default=70, help="Coastline spread weight (0..100)")
    parser.add_argument("--sensitivity", type=_slider, default=50, help="Water sensitivity (0..100)")
    parser.add_argument("--palette", type=Path, default=None, help="Palette config JSON")
    parser.add_argument("--no-limit", action="store_true", help="Ignore colour supply")
    parser.add_argument("--outdir", type=Path, default=None, help="Output directory (optional)")
    parser.add_argument("--cell-px", type=_positive, default=12, help="Preview pixels per cell")
    parser.add_argument("--jobs", type=_positive, default=1, help="Files processed in parallel")
    parser.add_argument("--debug", action="store_true", help="Verbose details")
    return parser.parse_args(argv)


def options_from_args(args: argparse.Namespace) -> RenderOptions:
    return RenderOptions(
        water_depth=args.water_depth,
        include_black_in_water=args.black_water,
        colour_vibrancy=args.vibrancy,
        coastline_width=args.coastline,
        water_sensitivity=args.sensitivity,
    )


# Per-file processing


def _process_single_image(
    src_path: Path,
    outdir: Optional[Path],
    args: argparse.Namespace,
    config: PaletteConfig,
    options: RenderOptions,
    out: Optional[TextIO] = None,
) -> None:
    """
    Process a single image path end-to-end:
      load -> synthesise -> limit -> save preview + grid -> report.

    Report lines go to out (default sys.stdout) for this thread only.
    """
    with log_to(out if out is not None else sys.stdout):
        _render_image(src_path, outdir, args, config, options)


def _render_image(
    src_path: Path,
    outdir: Optional[Path],
    args: argparse.Namespace,
    config: PaletteConfig,
    options: RenderOptions,
) -> None:
    t_start = time.perf_counter()
    out_dir = outdir if outdir is not None else src_path.parent
    stem = f"{src_path.stem}{OUTPUT_SUFFIX}"

    print_banner(src_path.name)

    rgba = load_image_rgba(src_path)
    if args.debug:
        debug_log(f"loaded {rgba.shape[1]}x{rgba.shape[0]}")
    t_loaded = time.perf_counter()

    palette = config.palette
    grid = synthesize(
        rgba,
        args.width,
        args.height,
        palette,
        detail_resolution=args.detail,
        options=options,
        debug=args.debug,
    )
    t_synth = time.perf_counter()

    if not args.no_limit:
        grid = limit_quantities(grid, palette, options, debug=args.debug)
    t_limit = time.perf_counter()

    png_path = save_png_rgba(
        out_dir / f"{stem}.png", render_grid_preview(grid, cell_px=args.cell_px)
    )
    json_path = out_dir / f"{stem}.json"
    json_path.write_text(grid_to_json(grid), encoding="utf-8")
    t_saved = time.perf_counter()

    log(f"Wrote {png_path.name}, {json_path.name} | grid={args.width}x{args.height}")
    log("Parts:")
    short_total = 0
    for row in parts_list(grid, palette):
        short = f"  short={row.shortfall:,}" if row.shortfall else ""
        log(f"  {row.hex}  {row.name}: {row.used:,} / {row.available:,}{short}")
        short_total += row.shortfall
    plates = base_plates_needed(args.width, args.height, config.plate_size)
    log(f"Base plates: {plates}")
    if config.plate_quantity is not None and plates > config.plate_quantity:
        warn(f"needs {plates} base plates, only {config.plate_quantity} available")
    if short_total:
        warn(f"{short_total:,} dots over supply")

    if args.debug:
        debug_log(
            f"Total {format_total_duration_compact(t_saved - t_start)}  "
            f"(load={format_seconds_compact(t_loaded - t_start)}, "
            f"synth={format_seconds_compact(t_synth - t_loaded)}, "
            f"limit={format_seconds_compact(t_limit - t_synth)}, "
            f"save={format_seconds_compact(t_saved - t_limit)})"
        )
    else:
        log(f"Total time {format_total_duration_compact(t_saved - t_start)}")


def _process_one_captured(
    path: Path,
    outdir: Optional[Path],
    args: argparse.Namespace,
    config: PaletteConfig,
    options: RenderOptions,
) -> str:
    """
    Process a single file into its own buffer.

    Used by the thread pool so each file's report stays together and can be
    printed in order. sys.stdout is never swapped.
    """
    buf = io.StringIO()
    _process_single_image(path, outdir, args, config, options, out=buf)
    return buf.getvalue()


def _list_images(folder: Path) -> List[Path]:
    files = [
        p
        for p in folder.iterdir()
        if p.is_file()
        and p.suffix.lower() in IMAGE_EXTS
        and not p.stem.endswith(OUTPUT_SUFFIX)
    ]
    files.sort(key=lambda p: p.name.lower())
    return files


# Entry point


def main(argv: Optional[Sequence[str]] = None) -> None:
    """
    CLI entry point.

    Handles a single file or a folder. In folder mode supports --jobs
    parallelism while keeping per-file output together and in order.
    """
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    src = args.src
    if not src.exists():
        error(f"not found: {src}")
        sys.exit(2)

    try:
        options = options_from_args(args)
        config = (
            load_palette_config(args.palette)
            if args.palette is not None
            else PaletteConfig(palette=default_palette(), plate_size=BASE_PLATE_SIZE)
        )
    except (OSError, ValueError) as e:
        error(str(e))
        sys.exit(2)

    if args.outdir is not None:
        args.outdir.mkdir(parents=True, exist_ok=True)

    print_config_line(
        "render",
        [
            ("Grid", f"{args.width}x{args.height}"),
            ("Detail", args.detail or "-"),
            ("Depth", options.water_depth),
            ("Black water", options.include_black_in_water),
            ("Vibrancy", options.colour_vibrancy),
            ("Coastline", options.coastline_width),
            ("Sensitivity", options.water_sensitivity),
            ("Limit", not args.no_limit),
        ],
        debug=False,
    )
    if args.debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Palette", str(args.palette) if args.palette else "built-in"),
                    ("Colours", len(config.palette.colours)),
                    ("Jobs", args.jobs),
                ]
            )
        )

    if src.is_dir():
        files = _list_images(src)
        if args.debug:
            debug_log(key_value_pairs_to_string([("Images", len(files))]))
        if args.jobs == 1:
            for p in files:
                _process_single_image(p, args.outdir, args, config, options)
        else:
            with ThreadPoolExecutor(max_workers=args.jobs) as ex:
                futures = [
                    ex.submit(_process_one_captured, p, args.outdir, args, config, options)
                    for p in files
                ]
                blocks = [f.result() for f in futures]
            print("".join(blocks), end="", flush=True)
    else:
        if not is_image_file(src):
            error(f"not an image: {src}")
            sys.exit(2)
        _process_single_image(src, args.outdir, args, config, options)


if __name__ == "__main__":
    main()
