"""Compositor interface — the document/layer primitives a model sheet needs.

The builder never touches pixels itself. It issues a short sequence of
commands against a Compositor (create a document, place a file as a
layer, resize and move it, add a background, save, export) so the same
planning code can drive the bundled Pillow backend or a recording stub
in tests.

Layer handles are opaque to the builder: whatever place_image returns
is passed back into the other layer methods unchanged.

Bounds are (left, top, right, bottom) in canvas pixels and may be
fractional.
"""

from abc import ABC, abstractmethod
from pathlib import Path


# ── Scale-to-fit policy ──────────────────────────────────────────

FIT_PADDING = 0.95
MIN_SCALE = 0.05
MAX_SCALE = 2.0


def fit_scale(
    current_size: tuple[float, float],
    target_size: tuple[float, float],
    padding: float = FIT_PADDING,
    min_scale: float = MIN_SCALE,
    max_scale: float = MAX_SCALE,
) -> float:
    """Uniform scale that fits current_size inside target_size.

    The aspect ratio is kept, the result is shrunk by padding so the
    image does not touch the slot edges, then clamped to
    [min_scale, max_scale].

    Args:
        current_size: (width, height) of the layer as placed.
        target_size: (width, height) of the destination slot.
        padding: Fraction of the slot to fill.
        min_scale: Lower clamp (0.05 = 5%).
        max_scale: Upper clamp (2.0 = 200%).

    Returns:
        Scale factor as a fraction (1.0 = unchanged).

    Raises:
        ValueError: current_size has a zero or negative side.
    """
    cw, ch = current_size
    tw, th = target_size
    if cw <= 0 or ch <= 0:
        raise ValueError(f"Cannot fit a layer with empty bounds {cw}x{ch}")
    scale = min(tw / cw, th / ch) * padding
    return max(min_scale, min(max_scale, scale))


def bounds_size(bounds: tuple[float, float, float, float]) -> tuple[float, float]:
    left, top, right, bottom = bounds
    return right - left, bottom - top


def bounds_center(bounds: tuple[float, float, float, float]) -> tuple[float, float]:
    left, top, right, bottom = bounds
    return (left + right) / 2, (top + bottom) / 2


# ── Interface ─────────────────────────────────────────────────────


class Compositor(ABC):
    """One open document at a time, manipulated through layer handles."""

    @abstractmethod
    def create_document(self, width: int, height: int, name: str) -> None:
        """Open a new document with a default background layer."""

    @abstractmethod
    def create_group(self, name: str):
        """Create a layer group and return its handle."""

    @abstractmethod
    def place_image(self, path: Path, linked: bool = True):
        """Place an image file as a new layer centred on the canvas.

        With linked=True the layer references the file instead of
        copying its pixels. Backends that cannot link raise
        RuntimeError so the caller can retry with linked=False.
        """

    @abstractmethod
    def rename_layer(self, layer, name: str) -> None: ...

    @abstractmethod
    def move_to_group(self, layer, group) -> None: ...

    @abstractmethod
    def layer_bounds(self, layer) -> tuple[float, float, float, float]: ...

    @abstractmethod
    def resize_layer(self, layer, percent: float) -> None:
        """Scale a layer uniformly about its centre."""

    @abstractmethod
    def translate_layer(self, layer, dx: float, dy: float) -> None: ...

    @abstractmethod
    def add_background(self, color: tuple[int, int, int]) -> None:
        """Replace the default background with a solid fill layer."""

    @abstractmethod
    def save_document(self, path: Path) -> None:
        """Write the layered document (PSD)."""

    @abstractmethod
    def export_jpeg(self, path: Path, quality: int) -> None:
        """Write a flattened JPEG preview."""

    @abstractmethod
    def close_document(self) -> None:
        """Discard the open document without saving."""
