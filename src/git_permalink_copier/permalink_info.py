from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class Remote:
    name: str
    fetch_url: str

    def __str__(self) -> str:
        return f"{self.name}: {self.fetch_url}"


@dataclass(frozen=True)
class RepositoryCoordinates:
    owner: str
    repo: str


@dataclass(frozen=True)
class LineRange:
    """1-based, inclusive range of lines."""
    start: int
    end: int

    def __post_init__(self):
        if self.start < 1:
            raise ValueError(f"Line numbers are 1-based, got start={self.start}")
        if self.end < self.start:
            raise ValueError(f"Line range end ({self.end}) is before its start ({self.start})")

    def __str__(self) -> str:
        if self.start == self.end:
            return f"L{self.start}"
        return f"L{self.start}-L{self.end}"


@dataclass(frozen=True)
class Selection:
    """What the user selected in the working copy.

    `line_range` is None when there is no selection, only a file.
    `text` is the exact selected text; when None it is read from the file.
    """
    file_path: Path
    line_range: Optional[LineRange] = None
    text: Optional[str] = None


@dataclass(frozen=True)
class ResolvedLink:
    coordinates: RepositoryCoordinates
    commit: str
    path: str
    line_range: Optional[LineRange]
    # False when the snippet couldn't be found at `commit` and the live line numbers were kept
    verified: bool = True


@dataclass(frozen=True)
class LinkResult:
    url: str
    link: ResolvedLink
    remote: Remote
    branch: str
