"""CLI for previewing a model sheet layout without rendering.

Usage:
    python -m modelsheet.plan_cli renders/eric [--config sheet.yaml]
"""

import argparse
import sys

from .matcher import find_folder_image, find_matching_files
from .naming import output_paths
from .planner import plan_layout
from .settings import load_settings


def describe_plan(folder: str, config_path: str | None = None) -> None:
    """Print matched files, slot assignments, and output names."""
    settings = load_settings(config_path)
    sources = find_matching_files(folder, settings["keywords"])
    if not sources:
        raise ValueError(
            f"No PNG files found with keywords: {', '.join(settings['keywords'])}"
        )

    plan = plan_layout(
        sources,
        folder_image=find_folder_image(folder),
        canvas_size=settings["canvas"]["size"],
        grid_order=settings["grid_order"],
    )
    psd_path, jpg_path = output_paths(folder)

    print(f"Matched {len(sources)} file(s) in {folder}")
    for p in plan.placements:
        s = p.slot
        print(
            f"  {s.label:<12} {p.source.file_name} [{s.keyword}] "
            f"center=({s.center_x:g}, {s.center_y:g}) "
            f"box={s.target_width:g}x{s.target_height:g}"
        )
    for source in plan.dropped:
        print(f"  {'dropped':<12} {source.file_name} [{source.keyword}]")
    print(f"Outputs: {psd_path.name}, {jpg_path.name}")


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Show how a folder's renders would be laid out.",
    )
    parser.add_argument("folder", help="Folder containing PNG renders")
    parser.add_argument("--config", default=None, help="Optional YAML settings file")
    args = parser.parse_args(args)

    try:
        describe_plan(args.folder, args.config)
    except (ValueError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
