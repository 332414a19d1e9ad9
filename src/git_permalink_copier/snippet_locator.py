import logging
from pathlib import Path
from typing import List, Optional, Tuple

from . import git_utils
from .errors import RevisionFileUnavailable
from .permalink_info import LineRange, RepositoryCoordinates
from .web_utils import fetch_raw_github_content

logger = logging.getLogger(__name__)


def normalize_snippet(text: str) -> str:
    """Trims the edges of a selection; whitespace inside it is kept."""
    return text.strip()


def count_blank_edges(text: str) -> Tuple[int, int]:
    """How many blank lines `normalize_snippet` drops from the top and the bottom of `text`."""
    lines = text.splitlines()
    leading = 0
    for line in lines:
        if line.strip():
            break
        leading += 1
    if leading == len(lines):
        return leading, 0
    trailing = 0
    for line in reversed(lines):
        if line.strip():
            break
        trailing += 1
    return leading, trailing


def find_snippet_ranges(content_lines: List[str], snippet: str) -> List[LineRange]:
    """
    Finds every window of `content_lines` whose text contains `snippet`.

    The window is as tall as the snippet, and a window matches when its
    newline-joined text contains the joined snippet. Containment rather than
    equality lets the trimmed selection match lines that carry indentation
    or trailing whitespace.

    Returns 1-based ranges in file order.
    """
    snippet_lines = snippet.splitlines()
    window = len(snippet_lines)
    if window == 0:
        return []

    joined_snippet = "\n".join(snippet_lines)
    candidates = []
    for start_idx in range(0, len(content_lines) - window + 1):
        joined_window = "\n".join(content_lines[start_idx : start_idx + window])
        if joined_snippet in joined_window:
            candidates.append(LineRange(start_idx + 1, start_idx + window))
    return candidates


class SnippetLocator:
    """
    Finds where a snippet lives in a file as of a given commit.

    The file is read from the local object store. If the commit isn't there
    and `coordinates` are given, GitHub's raw content is tried too.
    """

    def __init__(
        self,
        repo_root: Path,
        coordinates: Optional[RepositoryCoordinates] = None,
        fetch_remote_content: bool = True,
    ):
        self.repo_root = repo_root
        self.coordinates = coordinates
        self.fetch_remote_content = fetch_remote_content

    def file_lines_at(self, commit: str, path: str) -> List[str]:
        lines = git_utils.get_file_content_at_commit(self.repo_root, commit, path)
        if lines is None and self.fetch_remote_content and self.coordinates is not None:
            logger.debug(f"'{path}' not available locally at {commit[:8]}; trying GitHub")
            lines = fetch_raw_github_content(self.coordinates, commit, path)
        if lines is None:
            raise RevisionFileUnavailable(commit, path)
        return lines

    def locate(self, commit: str, path: str, snippet: str) -> List[LineRange]:
        candidates = find_snippet_ranges(self.file_lines_at(commit, path), normalize_snippet(snippet))
        logger.debug(f"Found {len(candidates)} candidate(s) at {commit[:8]}: {', '.join(map(str, candidates))}")
        return candidates
