"""modelsheet.common — shared utilities.

Contains: color parsing and image loading.
"""

from pathlib import Path

from PIL import Image


# ── Color utilities ────────────────────────────────────────────────

def parse_hex_color(hex_str: str) -> tuple[int, int, int]:
    """Convert '#RRGGBB' or 'RRGGBB' string to (R, G, B) tuple.

    Raises:
        ValueError: If the string is not six hex digits.
    """
    hex_str = hex_str.lstrip("#")
    if len(hex_str) != 6 or not all(
        c in "0123456789abcdefABCDEF" for c in hex_str
    ):
        raise ValueError(f"Invalid hex color: '#{hex_str}'")
    return (int(hex_str[0:2], 16), int(hex_str[2:4], 16), int(hex_str[4:6], 16))


# ── Image loading ──────────────────────────────────────────────────

def load_image(path: str | Path) -> Image.Image:
    """Load an image file fully into memory as RGBA.

    The file handle is closed before returning, so linked layers can
    re-read their source on every render without leaking descriptors.
    """
    with Image.open(path) as img:
        img.load()
        return img.convert("RGBA")
