import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from . import git_utils
from .constants import CONVENTIONAL_BRANCH_NAMES, FALLBACK_BRANCH_NAME
from .errors import RevisionResolutionFailed
from .permalink_info import Remote

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CanonicalRevision:
    branch: str
    commit: str
    # Which tier picked the branch, e.g. "remote-head"
    source: str


@dataclass
class CanonicalRevisionResolver:
    """
    Picks the branch a remote considers canonical and resolves it to the
    commit that remote has published.

    Branch tiers, each consulted only when the previous one has no answer:

    1. the remote's advertised default branch
    2. the first conventional branch name that exists locally
    3. the currently checked-out branch (unless HEAD is detached)
    4. `main`

    The commit always comes from the remote-tracking ref, so unpushed local
    commits never end up in a link.
    """
    repo_root: Path
    # Skip asking the remote host for its default branch
    offline: bool = False
    diagnostics: List[str] = field(default_factory=list)

    def _note(self, message: str) -> None:
        self.diagnostics.append(message)
        logger.debug(message)

    def _remote_default_branch(self, remote: Remote) -> Optional[str]:
        branch = git_utils.get_cached_remote_head_branch(self.repo_root, remote.name)
        if branch:
            return branch
        self._note(f"No cached default branch for remote '{remote.name}'")
        if self.offline:
            return None
        branch = git_utils.query_remote_head_branch(self.repo_root, remote.name)
        if not branch:
            self._note(f"Remote '{remote.name}' did not advertise a default branch")
        return branch

    def _conventional_local_branch(self, remote: Remote) -> Optional[str]:
        for branch in CONVENTIONAL_BRANCH_NAMES:
            if git_utils.local_branch_exists(self.repo_root, branch):
                self._note(f"Found local branch: {branch}")
                return branch
        self._note(f"None of {', '.join(CONVENTIONAL_BRANCH_NAMES)} exist locally")
        return None

    def _current_branch(self, remote: Remote) -> Optional[str]:
        branch = git_utils.get_current_branch(self.repo_root)
        if not branch:
            self._note("HEAD is detached; no current branch")
        return branch

    def _tiers(self) -> List[Tuple[str, Callable[[Remote], Optional[str]]]]:
        return [
            ("remote-head", self._remote_default_branch),
            ("conventional-name", self._conventional_local_branch),
            ("current-branch", self._current_branch),
        ]

    def detect_branch(self, remote: Remote) -> Tuple[str, str]:
        """Returns `(branch, source)` where `source` names the tier that decided."""
        for source, tier in self._tiers():
            branch = tier(remote)
            if branch:
                return branch, source
        self._note(f"Falling back to '{FALLBACK_BRANCH_NAME}'")
        return FALLBACK_BRANCH_NAME, "default"

    def resolve(self, remote: Remote) -> CanonicalRevision:
        branch, source = self.detect_branch(remote)
        logger.debug(f"Using main branch: {branch} (from {source})")

        commit = git_utils.resolve_commit(self.repo_root, f"refs/remotes/{remote.name}/{branch}")
        if not commit:
            raise RevisionResolutionFailed(remote.name, branch)
        logger.debug(f"Using HEAD commit: {commit}")
        return CanonicalRevision(branch=branch, commit=commit, source=source)
