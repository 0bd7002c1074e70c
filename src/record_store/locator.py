"""Map a logical dataset name to a file in the uploads directory."""

import os
from pathlib import Path
from typing import List, Union


def _candidate_files(directory: Path) -> List[str]:
    """Regular, non-hidden files in the directory, sorted by name."""
    try:
        entries = os.listdir(directory)
    except OSError:
        return []
    return sorted(entry for entry in entries if not entry.startswith(".") and (directory / entry).is_file())


def resolve(name: str, directory: Union[str, Path]) -> Path:
    """Resolve a dataset name to a file path.

    Returns the first file whose name contains ``name`` case-insensitively, otherwise
    ``directory / name``. Never raises; callers check whether the path exists.
    """
    directory = Path(directory)
    needle = name.lower()
    for entry in _candidate_files(directory):
        if needle in entry.lower():
            return directory / entry
    return directory / name
