"""Pillow-backed compositor.

Keeps an in-memory document (background fill + layers + groups) and
renders it on demand:
  - background: solid numpy fill at canvas size.
  - layers: each source resized with Lanczos to its current bounds and
    alpha-composited bottom to top. Bounds stay fractional until render
    time so repeated resizes do not accumulate rounding error.

Linked layers re-read their source file on every render, so edits to
the renders show up in the next export. Embedded layers keep the
pixels read at placement time.

Saving writes a layered PSD with psd-tools: the background as a pixel
layer, then each group with its layers. psd-tools cannot author smart
objects, so placed views are stored as pixel layers named after their
keyword. Layer pixels are clipped to the canvas.
"""

from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
from PIL import Image
from psd_tools import PSDImage
from psd_tools.api.layers import Group, PixelLayer

from .common import load_image
from .compositor import Compositor


DEFAULT_BACKGROUND_NAME = "Background"
FILL_BACKGROUND_NAME = "Background Fill"
DEFAULT_BACKGROUND_COLOR = (255, 255, 255)


@dataclass(eq=False)
class PlacedLayer:
    name: str
    source: Path
    linked: bool
    left: float
    top: float
    width: float
    height: float
    pixels: Image.Image | None = None  # embedded copy; None when linked

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        return (self.left, self.top, self.left + self.width, self.top + self.height)


@dataclass(eq=False)
class LayerGroup:
    name: str
    layers: list[PlacedLayer] = field(default_factory=list)


@dataclass
class Document:
    width: int
    height: int
    name: str
    background: tuple[int, int, int] = DEFAULT_BACKGROUND_COLOR
    background_name: str = DEFAULT_BACKGROUND_NAME
    # Bottom to top. Entries are PlacedLayer or LayerGroup.
    items: list = field(default_factory=list)

    def iter_layers(self):
        """All placed layers, bottom to top."""
        for item in self.items:
            if isinstance(item, LayerGroup):
                yield from item.layers
            else:
                yield item


class PillowCompositor(Compositor):
    """Compositor that renders with Pillow and saves PSDs with psd-tools."""

    def __init__(self, resample=Image.Resampling.LANCZOS):
        self.resample = resample
        self.document: Document | None = None

    def _doc(self) -> Document:
        if self.document is None:
            raise RuntimeError("No open document")
        return self.document

    # ── Document ─────────────────────────────────────────────────

    def create_document(self, width: int, height: int, name: str) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid canvas size {width}x{height}")
        self.document = Document(width=width, height=height, name=name)

    def close_document(self) -> None:
        self.document = None

    def create_group(self, name: str) -> LayerGroup:
        group = LayerGroup(name=name)
        self._doc().items.append(group)
        return group

    def add_background(self, color: tuple[int, int, int]) -> None:
        doc = self._doc()
        if len(color) != 3 or not all(0 <= c <= 255 for c in color):
            raise ValueError(f"Invalid background color: {color!r}")
        doc.background = tuple(color)
        doc.background_name = FILL_BACKGROUND_NAME

    # ── Layers ───────────────────────────────────────────────────

    def place_image(self, path: Path, linked: bool = True) -> PlacedLayer:
        doc = self._doc()
        path = Path(path)
        pixels = load_image(path)
        w, h = pixels.size
        layer = PlacedLayer(
            name=path.stem,
            source=path,
            linked=linked,
            left=(doc.width - w) / 2,
            top=(doc.height - h) / 2,
            width=w,
            height=h,
            pixels=None if linked else pixels,
        )
        doc.items.append(layer)
        return layer

    def rename_layer(self, layer: PlacedLayer, name: str) -> None:
        layer.name = name

    def move_to_group(self, layer: PlacedLayer, group: LayerGroup) -> None:
        doc = self._doc()
        if layer in doc.items:
            doc.items.remove(layer)
        else:
            for item in doc.items:
                if isinstance(item, LayerGroup) and layer in item.layers:
                    item.layers.remove(layer)
        group.layers.append(layer)

    def layer_bounds(self, layer: PlacedLayer) -> tuple[float, float, float, float]:
        return layer.bounds

    def resize_layer(self, layer: PlacedLayer, percent: float) -> None:
        if percent <= 0:
            raise ValueError(f"Resize percent must be positive, got {percent}")
        factor = percent / 100
        cx = layer.left + layer.width / 2
        cy = layer.top + layer.height / 2
        layer.width *= factor
        layer.height *= factor
        layer.left = cx - layer.width / 2
        layer.top = cy - layer.height / 2

    def translate_layer(self, layer: PlacedLayer, dx: float, dy: float) -> None:
        layer.left += dx
        layer.top += dy

    # ── Rendering ────────────────────────────────────────────────

    def _layer_pixels(self, layer: PlacedLayer) -> Image.Image:
        """Layer pixels resized to the layer's current (rounded) size."""
        src = load_image(layer.source) if layer.linked else layer.pixels
        size = (max(1, round(layer.width)), max(1, round(layer.height)))
        if src.size != size:
            src = src.resize(size, self.resample)
        return src

    def _clipped_pixels(self, layer: PlacedLayer):
        """Return (pixels, left, top) clipped to the canvas, or None if off-canvas."""
        doc = self._doc()
        pixels = self._layer_pixels(layer)
        left, top = round(layer.left), round(layer.top)
        box = (
            max(0, -left),
            max(0, -top),
            min(pixels.width, doc.width - left),
            min(pixels.height, doc.height - top),
        )
        if box[0] >= box[2] or box[1] >= box[3]:
            return None
        return pixels.crop(box), max(0, left), max(0, top)

    def render(self) -> Image.Image:
        """Flatten the document to an RGBA image."""
        doc = self._doc()
        fill = np.full((doc.height, doc.width, 4), (*doc.background, 255), dtype=np.uint8)
        canvas = Image.fromarray(fill)
        for layer in doc.iter_layers():
            clipped = self._clipped_pixels(layer)
            if clipped is None:
                continue
            pixels, left, top = clipped
            canvas.alpha_composite(pixels, dest=(left, top))
        return canvas

    # ── Output ───────────────────────────────────────────────────

    def save_document(self, path: Path) -> None:
        doc = self._doc()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        psd = PSDImage.new("RGB", (doc.width, doc.height))
        background = Image.new("RGB", (doc.width, doc.height), doc.background)
        psd.append(PixelLayer.frompil(background, psd, doc.background_name))

        for item in doc.items:
            layers = item.layers if isinstance(item, LayerGroup) else [item]
            psd_layers = []
            for layer in layers:
                clipped = self._clipped_pixels(layer)
                if clipped is None:
                    continue
                pixels, left, top = clipped
                psd_layer = PixelLayer.frompil(pixels, psd, layer.name, top, left)
                psd.append(psd_layer)
                psd_layers.append(psd_layer)
            if isinstance(item, LayerGroup) and psd_layers:
                Group.group_layers(psd, psd_layers, name=item.name)

        psd.save(str(path))

    def export_jpeg(self, path: Path, quality: int) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.render().convert("RGB").save(path, format="JPEG", quality=quality)
