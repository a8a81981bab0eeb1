#!/usr/bin/env python3
"""
pack_assets.py
Pack RGBA images into palette-indexed bytes and emit them as assembly source.

Usage:
  python pack_assets.py INPUT [INPUT ...] -o assets.s --row-width N --palette-order [first-seen|sorted] --verify --debug

Input:
  Image files or folders of images (.png .gif .bmp .jpg .jpeg .webp). Folders
  are expanded in name order. The asset name is the file stem.

Output:
  One assembly file (default assets.s) with the shared palette, bit width
  constants, one DEFB block per image, and an asset address table.

Notes:
  All images share one palette, so every image is packed at the bit width
  the full colour set needs. Any failure aborts the run before the output
  file is replaced.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from asset_pack.constants import (
    DEFAULT_OUTPUT,
    DEFAULT_PALETTE_ORDER,
    DEFAULT_ROW_WIDTH,
    PALETTE_ORDERS,
    PackConfig,
)
from asset_pack.errors import AssetPackError
from asset_pack.pipeline import PackReport, run
from asset_pack.utils import (
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_byte_size,
    format_total_duration_compact,
    log,
    print_banner,
    print_config_line,
)

# CLI args


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        inputs: list of Paths (files or folders)
        output: Path of the assembly file to write
        row_width: packed bytes per DEFB line
        palette_order: "first-seen" | "sorted"
        verify: bool, unpack and compare every image before writing
        debug: bool for verbose details
    """
    parser = argparse.ArgumentParser(
        prog="pack_assets",
        description="Pack images into a shared palette and emit assembly source.",
    )
    parser.add_argument(
        "inputs", type=Path, nargs="*", help="Input images or folders"
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT,
        help=f"Assembly file to write (default {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--row-width",
        type=int,
        default=DEFAULT_ROW_WIDTH,
        help="Packed bytes per DEFB line.",
    )
    parser.add_argument(
        "--palette-order",
        choices=list(PALETTE_ORDERS),
        default=DEFAULT_PALETTE_ORDER,
        help="How palette indices are assigned.",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Unpack every image and compare before writing",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose details")
    args = parser.parse_args(argv)
    if args.row_width < 1:
        parser.error("--row-width must be >= 1")
    return args


def _report(report: PackReport, debug: bool) -> None:
    for name, n_bytes in report.image_bytes.items():
        log(f"  {name}: {format_byte_size(n_bytes)}")
    log(
        f"Wrote {report.output} | palette_size={report.palette_size} "
        f"| bits_per_colour={report.bits_per_colour} "
        f"| pixels_per_byte={report.pixels_per_byte}"
    )
    if debug:
        debug_log(f"packed total {format_byte_size(report.total_bytes)}")
    log(f"Total time {format_total_duration_compact(report.elapsed)}")


# Entry point


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns the process exit status."""
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    config = PackConfig(
        output=args.output,
        row_width=args.row_width,
        palette_order=args.palette_order,
        verify=args.verify,
        debug=args.debug,
    )
    print_config_line(
        "run",
        [
            ("Inputs", len(args.inputs)),
            ("Output", str(config.output)),
            ("Row width", config.row_width),
            ("Order", config.palette_order),
            ("Verify", config.verify),
        ],
        debug=False,
    )

    try:
        report = run(args.inputs, config)
    except AssetPackError as e:
        error(str(e))
        return 1

    print_banner(config.output.name)
    _report(report, args.debug)
    return 0


if __name__ == "__main__":
    sys.exit(main())
