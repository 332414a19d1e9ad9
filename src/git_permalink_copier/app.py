import logging
from pathlib import Path
from typing import Optional, Tuple

from .errors import EmptySelection, NoActiveSelection
from .global_prefs import GlobalPreferences
from .permalink_info import LineRange, LinkResult, ResolvedLink, Selection
from .range_disambiguator import pick_range
from .remotes import RemoteCatalog
from .repo_catalog import RepositoryCatalog
from .revision_resolver import CanonicalRevisionResolver
from .session_prefs import SessionPreferences
from .snippet_locator import SnippetLocator, count_blank_edges, normalize_snippet
from .url_utils import build_github_blob_url, get_github_info_from_url
from .web_utils import copy_to_clipboard, open_url_in_browser

logger = logging.getLogger(__name__)


def read_selected_text(file_path: Path, line_range: LineRange) -> str:
    """The text of the selected lines as they are in the working copy."""
    lines = file_path.read_text(encoding="utf-8", errors="replace").splitlines()
    return "\n".join(lines[line_range.start - 1 : line_range.end])


class PermalinkCopierApp:
    """
    Turns a selection in a working copy into a GitHub permalink.

    remote -> canonical revision -> snippet location -> range -> URL

    One instance can serve many requests; the repository catalog is the only
    state shared between them.
    """

    def __init__(self, global_prefs: GlobalPreferences, catalog: Optional[RepositoryCatalog] = None):
        self.global_prefs = global_prefs
        self.catalog = catalog if catalog is not None else RepositoryCatalog(global_prefs.repo_roots)

    @staticmethod
    def _snippet_for(file_path: Path, line_range: LineRange, text: Optional[str]) -> Tuple[str, int, int]:
        """Returns the trimmed snippet and the number of blank lines trimmed off its top and bottom."""
        if text is None:
            text = read_selected_text(file_path, line_range)
        snippet = normalize_snippet(text)
        if not snippet:
            raise EmptySelection(file_path, line_range.start, line_range.end)
        leading, trailing = count_blank_edges(text)
        return snippet, leading, trailing

    def produce_link(self, selection: Selection, session_prefs: Optional[SessionPreferences] = None) -> LinkResult:
        file_path = Path(selection.file_path).expanduser()
        if not file_path.is_file():
            raise NoActiveSelection(file_path)
        file_path = file_path.resolve()

        # With explicit roots, a file outside all of them is an error rather than a lookup
        repo_root = self.catalog.repository_for(file_path, discover=not self.global_prefs.repo_roots)
        relative_path = file_path.relative_to(repo_root).as_posix()

        line_range = selection.line_range
        snippet = None
        leading = trailing = 0
        if line_range:
            snippet, leading, trailing = self._snippet_for(file_path, line_range, selection.text)

        remote = RemoteCatalog(repo_root).select_remote(self.global_prefs.remote)
        logger.debug(f"remote: {remote}")
        coordinates = get_github_info_from_url(remote.fetch_url, remote.name)

        resolver = CanonicalRevisionResolver(repo_root, offline=self.global_prefs.offline)
        revision = resolver.resolve(remote)

        verified = True
        if snippet is not None:
            logger.debug(f"lines' content:\n{snippet}")
            locator = SnippetLocator(
                repo_root,
                coordinates=coordinates,
                fetch_remote_content=self.global_prefs.fetch_remote_content,
            )
            candidates = locator.locate(revision.commit, relative_path, snippet)
            # Candidates cover the trimmed snippet, which starts `leading` lines into the selection
            trimmed_live = LineRange(min(line_range.start + leading, line_range.end), line_range.end)
            picked, verified = pick_range(candidates, trimmed_live)
            if verified:
                line_range = LineRange(max(1, picked.start - leading), picked.end + trailing)

        link = ResolvedLink(
            coordinates=coordinates,
            commit=revision.commit,
            path=relative_path,
            line_range=line_range,
            verified=verified,
        )
        url = build_github_blob_url(link)
        logger.debug(f"github link: {url}")

        if session_prefs is not None:
            if session_prefs.copy_to_clipboard:
                copy_to_clipboard(url)
            if session_prefs.open_in_browser:
                open_url_in_browser(url)

        return LinkResult(url=url, link=link, remote=remote, branch=revision.branch)
