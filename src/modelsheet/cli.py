"""CLI for building a model sheet.

Matches the character renders in a folder, places them on the sheet
with the Pillow backend, and writes '<folder>_modelsheet_v.NNN.psd'
plus '<folder>_modelsheet.jpg' into the same folder.

Usage:
    # Build with default settings
    python -m modelsheet.cli renders/eric

    # Build with a settings override file
    python -m modelsheet.cli renders/eric --config sheet.yaml
"""

import argparse
import sys
import time

from .builder import build_model_sheet
from .pillow_compositor import PillowCompositor
from .settings import load_settings


def build(folder: str, config_path: str | None = None) -> None:
    """Build one folder and print a summary."""
    settings = load_settings(config_path)
    w, h = settings["canvas"]["size"]
    print(f"Building model sheet for {folder} ({w}x{h})")

    t0 = time.monotonic()
    result = build_model_sheet(folder, PillowCompositor(), settings)
    elapsed = time.monotonic() - t0

    for source in result.plan.dropped:
        print(f"  skipped {source.file_name} (no free slot)")
    print(
        f"\nCreated {len(result.plan.placements)} layers in {elapsed:.1f}s.\n"
        f"Saved as: {result.psd_path.name} and {result.jpg_path.name}"
    )


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Build a character model sheet from a folder of PNG renders.",
    )
    parser.add_argument(
        "folder", nargs="?",
        help="Folder containing front/back/left/right/hero PNG files",
    )
    parser.add_argument(
        "--config", default=None,
        help="Optional YAML settings file",
    )
    args = parser.parse_args(args)

    if not args.folder:
        print("No folder selected. Build cancelled.")
        sys.exit(1)

    try:
        build(args.folder, args.config)
    except (ValueError, RuntimeError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
