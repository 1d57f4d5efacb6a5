"""Layout planner — decide which view goes where on the canvas.

Canvas layout (2048x2048 default):
  ┌─────────┬─────────┬───────────────────┐
  │         │         │                   │
  │  front  │  right  │                   │
  │         │         │                   │
  ├─────────┼─────────┤       hero        │
  │         │         │                   │
  │  left   │  back   │                   │
  │         │         │                   │
  └─────────┴─────────┴───────────────────┘
   ← W/4 →   ← W/4 →   ←       W/2       →

Hero resolution order: an explicit "hero" file, then the file named
after the folder, then the "front" file (which then leaves the grid).
Grid cells are filled by grid_order first, then by whatever matched
files remain in discovery order. Files beyond the fourth cell are
dropped.

Pure logic: no file access, no clock. The same inputs always give the
same plan.
"""

from dataclasses import dataclass, field

from .matcher import SourceImage


DEFAULT_CANVAS_SIZE = (2048, 2048)

DEFAULT_GRID_ORDER = ("front", "right", "left", "back")

HERO_KEYWORD = "hero"

GRID_LABELS = ("top-left", "top-right", "bottom-left", "bottom-right")


@dataclass(frozen=True)
class LayoutSlot:
    """A destination box on the canvas, addressed by its centre."""

    keyword: str
    center_x: float
    center_y: float
    target_width: float
    target_height: float
    label: str = ""


@dataclass(frozen=True)
class Placement:
    source: SourceImage
    slot: LayoutSlot


@dataclass
class LayoutPlan:
    """Planner output. placements is hero first, then grid cells in order."""

    hero: SourceImage | None
    placements: list[Placement] = field(default_factory=list)
    dropped: list[SourceImage] = field(default_factory=list)


# ── Geometry ──────────────────────────────────────────────────────


def hero_slot(canvas_size=DEFAULT_CANVAS_SIZE, keyword: str = HERO_KEYWORD) -> LayoutSlot:
    """Right half of the canvas, full height."""
    w, h = canvas_size
    hero_w = w / 2
    return LayoutSlot(
        keyword=keyword,
        center_x=w - hero_w / 2,
        center_y=h / 2,
        target_width=hero_w,
        target_height=h,
        label="hero",
    )


def grid_slots(canvas_size=DEFAULT_CANVAS_SIZE) -> list[tuple[float, float, float, float, str]]:
    """The four left-half cells as (center_x, center_y, width, height, label).

    Row-major: top-left, top-right, bottom-left, bottom-right.
    """
    w, h = canvas_size
    cell_w = (w / 2) / 2
    cell_h = h / 2
    cells = []
    for i, label in enumerate(GRID_LABELS):
        row, col = divmod(i, 2)
        cells.append((
            cell_w * col + cell_w / 2,
            cell_h * row + cell_h / 2,
            cell_w,
            cell_h,
            label,
        ))
    return cells


# ── Selection ─────────────────────────────────────────────────────


def _last_tagged(sources: list[SourceImage], keyword: str) -> SourceImage | None:
    found = None
    for source in sources:
        if source.keyword.lower() == keyword:
            found = source
    return found


def _resolve_hero(
    sources: list[SourceImage], folder_image: SourceImage | None,
) -> SourceImage | None:
    # With several candidates of one kind, the last discovered wins.
    hero = _last_tagged(sources, HERO_KEYWORD)
    if hero is None:
        hero = folder_image
    if hero is None:
        hero = _last_tagged(sources, "front")
    return hero


def _order_grid(
    candidates: list[SourceImage], grid_order,
) -> list[SourceImage]:
    """First file of each preferred keyword, then the rest in discovery order."""
    ordered = []
    for keyword in grid_order:
        for source in candidates:
            if source.keyword.lower() == keyword.lower() and source not in ordered:
                ordered.append(source)
                break
    ordered.extend(s for s in candidates if s not in ordered)
    return ordered


def plan_layout(
    sources: list[SourceImage],
    folder_image: SourceImage | None = None,
    canvas_size=DEFAULT_CANVAS_SIZE,
    grid_order=DEFAULT_GRID_ORDER,
) -> LayoutPlan:
    """Assign matched images to the hero slot and the four grid cells.

    Args:
        sources: Matched images in discovery order.
        folder_image: The '<folder>.png' hero fallback, if present.
        canvas_size: (width, height) of the model sheet.
        grid_order: Keyword preference for the grid cells.

    Returns:
        LayoutPlan with the chosen hero, the placements (hero first)
        and any matched images that did not fit.
    """
    hero = _resolve_hero(sources, folder_image)
    plan = LayoutPlan(hero=hero)

    if hero is not None:
        plan.placements.append(
            Placement(source=hero, slot=hero_slot(canvas_size, keyword=hero.keyword))
        )

    candidates = [
        s for s in sources
        if s.keyword.lower() != HERO_KEYWORD
        and (hero is None or s.path != hero.path)
    ]
    ordered = _order_grid(candidates, grid_order)

    cells = grid_slots(canvas_size)
    for source, (cx, cy, cw, ch, label) in zip(ordered, cells):
        slot = LayoutSlot(
            keyword=source.keyword,
            center_x=cx,
            center_y=cy,
            target_width=cw,
            target_height=ch,
            label=label,
        )
        plan.placements.append(Placement(source=source, slot=slot))

    plan.dropped = ordered[len(cells):]
    # Extra hero-tagged files never reach the grid.
    plan.dropped.extend(
        s for s in sources
        if s.keyword.lower() == HERO_KEYWORD and s is not hero
    )
    return plan
