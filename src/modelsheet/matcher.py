"""Keyword matcher — find the character views in a render folder.

A view is any PNG whose file name contains one of the keywords. Names
are lower-cased before matching and keywords are tried in list order,
so "Hero_front_v2.png" is a "front" view under the default list (front
comes before hero). Files that match nothing are ignored.
"""

from dataclasses import dataclass
from pathlib import Path


DEFAULT_KEYWORDS = ("front", "back", "left", "right", "hero")

IMAGE_EXTENSION = ".png"


@dataclass(frozen=True)
class SourceImage:
    """One matched render: where it lives and which view it is."""

    path: Path
    keyword: str
    file_name: str


def match_keyword(file_name: str, keywords=DEFAULT_KEYWORDS) -> str | None:
    """Return the first keyword contained in file_name, or None."""
    lowered = file_name.lower()
    for keyword in keywords:
        if keyword.lower() in lowered:
            return keyword
    return None


def _list_pngs(folder: Path) -> list[Path]:
    if not folder.exists():
        raise FileNotFoundError(f"Folder not found: {folder}")
    if not folder.is_dir():
        raise NotADirectoryError(f"Not a folder: {folder}")
    return sorted(
        (p for p in folder.iterdir()
         if p.is_file() and p.suffix.lower() == IMAGE_EXTENSION),
        key=lambda p: p.name,
    )


def find_matching_files(
    folder: str | Path, keywords=DEFAULT_KEYWORDS,
) -> list[SourceImage]:
    """Scan folder for PNG files tagged with one of the keywords.

    Args:
        folder: Directory to scan (not recursive).
        keywords: Keywords in priority order.

    Returns:
        Matched images in discovery (sorted file name) order. Empty if
        nothing matched; the caller decides how to report that.

    Raises:
        FileNotFoundError: folder does not exist.
        NotADirectoryError: folder is a file.
    """
    matched = []
    for path in _list_pngs(Path(folder)):
        keyword = match_keyword(path.name, keywords)
        if keyword is not None:
            matched.append(SourceImage(path=path, keyword=keyword, file_name=path.name))
    return matched


def find_folder_image(folder: str | Path) -> SourceImage | None:
    """Return '<folder name>.png' inside folder as a hero candidate.

    The name must match exactly (the usual convention is a character
    folder "eric/" holding a beauty shot "eric.png").
    """
    folder = Path(folder)
    candidate = folder / f"{folder.name}{IMAGE_EXTENSION}"
    if not candidate.is_file():
        return None
    return SourceImage(path=candidate, keyword="hero", file_name=candidate.name)
