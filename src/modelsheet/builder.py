"""Model sheet builder — run one folder end to end.

Pipeline:
  1. Resolve output paths (next free PSD version, fixed JPEG name).
  2. Create the document, named after the PSD.
  3. Match renders by keyword. No matches: discard the document, abort.
  4. Plan the layout and create the "Model Sheet - <timestamp>" group.
  5. Place each planned view: linked layer (embedded if linking fails),
     renamed to its keyword, moved into the group, scaled to fit its
     slot and centred on it. Any failure aborts the whole run.
  6. Add the background fill. A failure here is reported and skipped.
  7. Save the PSD, then export the JPEG.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .compositor import Compositor, bounds_center, bounds_size, fit_scale
from .matcher import find_folder_image, find_matching_files
from .naming import output_paths, timestamp
from .planner import LayoutPlan, Placement, plan_layout
from .settings import load_settings


GROUP_NAME_PREFIX = "Model Sheet - "


@dataclass
class BuildResult:
    psd_path: Path
    jpg_path: Path
    plan: LayoutPlan
    background_applied: bool


def place_image(compositor: Compositor, placement: Placement, group, fit: dict):
    """Place one view as a layer, fitted and centred on its slot.

    Args:
        compositor: Open compositor.
        placement: Source image and destination slot.
        group: Group handle the layer is moved into.
        fit: Dict with padding, min_scale, max_scale.

    Returns:
        The compositor's layer handle.

    Raises:
        RuntimeError: Wraps any failure with the offending file name.
    """
    source, slot = placement.source, placement.slot
    try:
        try:
            layer = compositor.place_image(source.path, linked=True)
        except RuntimeError:
            layer = compositor.place_image(source.path, linked=False)

        compositor.rename_layer(layer, source.keyword)
        compositor.move_to_group(layer, group)

        scale = fit_scale(
            bounds_size(compositor.layer_bounds(layer)),
            (slot.target_width, slot.target_height),
            padding=fit["padding"],
            min_scale=fit["min_scale"],
            max_scale=fit["max_scale"],
        )
        if scale != 1.0:
            compositor.resize_layer(layer, scale * 100)

        cx, cy = bounds_center(compositor.layer_bounds(layer))
        compositor.translate_layer(layer, slot.center_x - cx, slot.center_y - cy)
    except Exception as e:
        raise RuntimeError(
            f"Failed to create smart object for {source.file_name}: {e}"
        ) from e
    return layer


def build_model_sheet(
    folder: str | Path,
    compositor: Compositor,
    settings: dict | None = None,
    now: datetime | None = None,
    report=print,
) -> BuildResult:
    """Build, save, and export the model sheet for one render folder.

    Args:
        folder: Directory holding the PNG renders; outputs land here too.
        compositor: Backend that performs the document operations.
        settings: Normalized settings (see load_settings). None = defaults.
        now: Clock override for the group timestamp.
        report: Callable for progress/warning lines.

    Returns:
        BuildResult with output paths and the plan that was placed.

    Raises:
        ValueError: No PNG in folder matched any keyword.
        RuntimeError: A view could not be placed.
        FileNotFoundError / NotADirectoryError: Bad folder.
    """
    if settings is None:
        settings = load_settings()
    folder = Path(folder)
    keywords = settings["keywords"]
    canvas_w, canvas_h = settings["canvas"]["size"]

    psd_path, jpg_path = output_paths(folder)
    sources = find_matching_files(folder, keywords)

    compositor.create_document(canvas_w, canvas_h, psd_path.stem)

    if not sources:
        compositor.close_document()
        raise ValueError(
            f"No PNG files found with keywords: {', '.join(keywords)}"
        )

    plan = plan_layout(
        sources,
        folder_image=find_folder_image(folder),
        canvas_size=(canvas_w, canvas_h),
        grid_order=settings["grid_order"],
    )

    group = compositor.create_group(GROUP_NAME_PREFIX + timestamp(now))
    for placement in plan.placements:
        place_image(compositor, placement, group, settings["fit"])
        report(
            f"  placed {placement.source.file_name} -> "
            f"{placement.slot.label} ({placement.slot.keyword})"
        )

    background_applied = True
    try:
        compositor.add_background(settings["background"])
    except (RuntimeError, ValueError, OSError) as e:
        background_applied = False
        report(f"  warning: background not added ({e})")

    compositor.save_document(psd_path)
    compositor.export_jpeg(jpg_path, settings["jpeg_quality"])

    return BuildResult(
        psd_path=psd_path,
        jpg_path=jpg_path,
        plan=plan,
        background_applied=background_applied,
    )
