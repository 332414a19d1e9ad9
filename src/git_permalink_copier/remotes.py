import logging
from pathlib import Path
from typing import List, Optional

from . import git_utils
from .constants import PREFERRED_REMOTES
from .errors import NoRemotesConfigured
from .permalink_info import Remote
from .url_utils import is_github_remote_url

logger = logging.getLogger(__name__)


def rank_remotes(remotes: List[Remote]) -> List[Remote]:
    """
    Orders remotes from most to least authoritative: `upstream`, then `origin`,
    then the rest in their original order.

    This is only a heuristic for "the canonical copy" (forks usually name the
    parent `upstream`), not a guarantee.
    """
    def preference(remote: Remote) -> int:
        try:
            return PREFERRED_REMOTES.index(remote.name)
        except ValueError:
            return len(PREFERRED_REMOTES)

    return sorted(remotes, key=preference)  # sorted() is stable


class RemoteCatalog:
    """The remotes configured in one repository, read fresh on each call."""

    def __init__(self, repo_root: Path):
        self.repo_root = repo_root

    def list_remotes(self) -> List[Remote]:
        remotes = []
        for name, fetch_url in git_utils.list_remotes(self.repo_root):
            # We sometimes use the `insteadOf` directive to map to domains
            # that .ssh/config can recognize.  In those cases, we want the
            # URL as it was written in the config.
            if not is_github_remote_url(fetch_url):
                configured_url = git_utils.get_remote_config_url(self.repo_root, name)
                if configured_url and is_github_remote_url(configured_url):
                    logger.debug(f"Using configured URL for '{name}': {configured_url} (instead of {fetch_url})")
                    fetch_url = configured_url
            remotes.append(Remote(name=name, fetch_url=fetch_url))
        return remotes

    def ranked_remotes(self) -> List[Remote]:
        remotes = rank_remotes(self.list_remotes())
        if not remotes:
            raise NoRemotesConfigured(self.repo_root)
        logger.debug(f"remotes: {', '.join(str(r) for r in remotes)}")
        return remotes

    def select_remote(self, name: Optional[str] = None) -> Remote:
        """The most authoritative remote, or the one called `name` if given."""
        remotes = self.ranked_remotes()
        if name is None:
            return remotes[0]
        for remote in remotes:
            if remote.name == name:
                return remote
        raise NoRemotesConfigured(self.repo_root, name)
