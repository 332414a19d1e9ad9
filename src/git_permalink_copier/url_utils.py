from typing import Optional
from urllib.parse import quote

from .constants import (
    GITHUB_HOST,
    GITHUB_HTTPS_REMOTE_RE,
    GITHUB_REMOTE_RE,
    GITHUB_SSH_REMOTE_RE,
)
from .errors import UnrecognizedRemoteFormat
from .permalink_info import LineRange, RepositoryCoordinates, ResolvedLink


def is_github_remote_url(remote_url: str) -> bool:
    return bool(GITHUB_REMOTE_RE.match(remote_url))


def get_github_info_from_url(remote_url: str, remote_name: Optional[str] = None) -> RepositoryCoordinates:
    """
    Extracts owner/repo from a GitHub remote URL.

    Accepts exactly two forms:
        git@github.com:owner/repo.git
        https://github.com/owner/repo.git
    """
    for pattern in (GITHUB_SSH_REMOTE_RE, GITHUB_HTTPS_REMOTE_RE):
        match = pattern.match(remote_url.strip())
        if match:
            owner, repo = match.groups()
            if owner and repo:
                return RepositoryCoordinates(owner=owner, repo=repo)
    raise UnrecognizedRemoteFormat(remote_url, remote_name)


def line_fragment(line_range: Optional[LineRange]) -> str:
    """`#L5` for a single line, `#L5-L8` for a range, empty when there's no range."""
    if line_range is None:
        return ""
    if line_range.end != line_range.start:
        return f"#L{line_range.start}-L{line_range.end}"
    return f"#L{line_range.start}"


def build_github_blob_url(link: ResolvedLink, host: str = GITHUB_HOST) -> str:
    """Serializes a resolved link into a GitHub blob permalink."""
    owner, repo = link.coordinates.owner, link.coordinates.repo
    url_path = quote(link.path.lstrip("/"), safe="/")
    return f"https://{host}/{owner}/{repo}/blob/{link.commit}/{url_path}{line_fragment(link.line_range)}"


def build_raw_content_url(coordinates: RepositoryCoordinates, ref: str, path: str) -> str:
    url_path = quote(path.lstrip("/"), safe="/")
    return f"https://raw.githubusercontent.com/{coordinates.owner}/{coordinates.repo}/{ref}/{url_path}"
