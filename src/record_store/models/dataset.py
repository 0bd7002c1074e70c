"""Dataset model."""

from pathlib import Path

from pydantic import BaseModel


class Dataset(BaseModel):
    """A named collection of records backed by one spreadsheet file."""

    name: str
    path: Path

    @property
    def exists(self) -> bool:
        return self.path.is_file()
