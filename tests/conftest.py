"""Shared test fixtures for modelsheet tests."""

from pathlib import Path

import pytest
from PIL import Image

from modelsheet.compositor import Compositor


def write_png(path: Path, size=(40, 80), color=(200, 60, 60, 255)) -> Path:
    """Write a solid RGBA PNG and return its path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGBA", size, color).save(path, format="PNG")
    return path


@pytest.fixture
def render_folder(tmp_path):
    """A character folder 'eric/' with the four orthographic views.

    Views are 100x200 so they fit grid cells with a clean scale factor.
    """
    folder = tmp_path / "eric"
    write_png(folder / "eric_front.png", (100, 200), (200, 60, 60, 255))
    write_png(folder / "eric_back.png", (100, 200), (60, 60, 200, 255))
    write_png(folder / "eric_left.png", (100, 200), (60, 160, 60, 255))
    write_png(folder / "eric_right.png", (100, 200), (200, 130, 40, 255))
    return folder


class RecordingCompositor(Compositor):
    """Compositor stub that records calls and tracks layer bounds.

    Placed layers start centred on the canvas at the source image's
    pixel size, the way a real host places a file.
    """

    def __init__(self, fail_linked=False, fail_files=(), fail_background=False):
        self.calls = []
        self.layers = {}
        self.groups = {}
        self.document = None
        self.fail_linked = fail_linked
        self.fail_files = set(fail_files)
        self.fail_background = fail_background
        self._next_id = 0

    def _record(self, name, *args):
        self.calls.append((name, *args))

    def call_names(self):
        return [c[0] for c in self.calls]

    def create_document(self, width, height, name):
        self._record("create_document", width, height, name)
        self.document = {"width": width, "height": height, "name": name}

    def create_group(self, name):
        self._record("create_group", name)
        self.groups[name] = []
        return name

    def place_image(self, path, linked=True):
        self._record("place_image", Path(path).name, linked)
        if linked and self.fail_linked:
            raise RuntimeError("linked placement unsupported")
        if Path(path).name in self.fail_files:
            raise OSError("cannot read file")
        with Image.open(path) as img:
            w, h = img.size
        self._next_id += 1
        layer_id = self._next_id
        cw, ch = self.document["width"], self.document["height"]
        self.layers[layer_id] = {
            "name": Path(path).stem,
            "linked": linked,
            "bounds": ((cw - w) / 2, (ch - h) / 2, (cw + w) / 2, (ch + h) / 2),
        }
        return layer_id

    def rename_layer(self, layer, name):
        self._record("rename_layer", layer, name)
        self.layers[layer]["name"] = name

    def move_to_group(self, layer, group):
        self._record("move_to_group", layer, group)
        self.groups[group].append(layer)

    def layer_bounds(self, layer):
        return self.layers[layer]["bounds"]

    def resize_layer(self, layer, percent):
        self._record("resize_layer", layer, percent)
        left, top, right, bottom = self.layers[layer]["bounds"]
        cx, cy = (left + right) / 2, (top + bottom) / 2
        w = (right - left) * percent / 100
        h = (bottom - top) * percent / 100
        self.layers[layer]["bounds"] = (cx - w / 2, cy - h / 2, cx + w / 2, cy + h / 2)

    def translate_layer(self, layer, dx, dy):
        self._record("translate_layer", layer, dx, dy)
        left, top, right, bottom = self.layers[layer]["bounds"]
        self.layers[layer]["bounds"] = (left + dx, top + dy, right + dx, bottom + dy)

    def add_background(self, color):
        self._record("add_background", color)
        if self.fail_background:
            raise RuntimeError("fill layer failed")

    def save_document(self, path):
        self._record("save_document", Path(path))

    def export_jpeg(self, path, quality):
        self._record("export_jpeg", Path(path), quality)

    def close_document(self):
        self._record("close_document")
        self.document = None

    def layer_named(self, name):
        for layer in self.layers.values():
            if layer["name"] == name:
                return layer
        raise KeyError(name)


@pytest.fixture
def recorder():
    return RecordingCompositor()


@pytest.fixture
def make_recorder():
    """Factory for stubs configured to fail in specific ways."""
    return RecordingCompositor


@pytest.fixture
def png():
    """The write_png helper, for tests that lay out their own folders."""
    return write_png
