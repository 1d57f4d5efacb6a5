"""Output naming for model sheets.

The PSD is versioned and never overwritten: each run takes the first
free '<folder>_modelsheet_v.NNN.psd'. The JPEG preview has a fixed name
and is replaced on every run.

Version probing is a plain linear scan with no locking; two runs on the
same folder at the same moment can pick the same number.
"""

from datetime import datetime
from pathlib import Path


SHEET_SUFFIX = "_modelsheet"

VERSION_DIGITS = 3


def versioned_name(base_name: str, version: int, digits: int = VERSION_DIGITS) -> str:
    """'eric_modelsheet', 2 -> 'eric_modelsheet_v.002'."""
    return f"{base_name}_v.{version:0{digits}d}"


def next_versioned_path(
    directory: str | Path,
    base_name: str,
    extension: str = ".psd",
    digits: int = VERSION_DIGITS,
) -> Path:
    """Return the first '<base>_v.NNN<ext>' in directory that does not exist.

    Raises:
        FileExistsError: Every version number for the digit width is taken.
    """
    directory = Path(directory)
    for version in range(10 ** digits):
        candidate = directory / f"{versioned_name(base_name, version, digits)}{extension}"
        if not candidate.exists():
            return candidate
    raise FileExistsError(
        f"No free version left for '{base_name}{extension}' in {directory}"
    )


def output_paths(folder: str | Path) -> tuple[Path, Path]:
    """Return (psd_path, jpg_path) for a model sheet of folder."""
    folder = Path(folder)
    base = f"{folder.name}{SHEET_SUFFIX}"
    psd_path = next_versioned_path(folder, base, ".psd")
    jpg_path = folder / f"{base}.jpg"
    return psd_path, jpg_path


def timestamp(now: datetime | None = None) -> str:
    """Format now (default: the current local time) as YYYYMMDD_HHMMSS."""
    if now is None:
        now = datetime.now()
    return now.strftime("%Y%m%d_%H%M%S")
