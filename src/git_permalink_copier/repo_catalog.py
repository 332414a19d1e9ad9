import logging
from pathlib import Path
from typing import Iterable, List, Optional

from . import git_utils
from .errors import NoRepositoryForFile

logger = logging.getLogger(__name__)


class RepositoryCatalog:
    """
    Maps repository roots to the files they govern.

    Built once per process and handed to each request. Roots can be added
    lazily by discovery, but nothing else about a root is cached: remotes and
    refs are always read fresh.
    """

    def __init__(self, roots: Iterable[Path] = ()):
        self._roots: List[Path] = []
        for root in roots:
            self.add_root(root)

    @property
    def roots(self):
        return list(self._roots)

    def add_root(self, root: Path) -> Path:
        resolved = Path(root).expanduser().resolve()
        if resolved not in self._roots:
            self._roots.append(resolved)
        return resolved

    def root_for(self, file_path: Path) -> Optional[Path]:
        """The root that is the longest prefix of `file_path`, compared by path components."""
        file_path = Path(file_path).expanduser().resolve()
        best: Optional[Path] = None
        for root in self._roots:
            if file_path == root or root in file_path.parents:
                if best is None or len(root.parts) > len(best.parts):
                    best = root
        return best

    def repository_for(self, file_path: Path, discover: bool = True) -> Path:
        """
        Returns the root governing `file_path`.

        With `discover`, a file outside every known root is looked up with git
        and its root added to the catalog. A known root that turns out not to
        be inside a git repository governs nothing.
        """
        root = self.root_for(file_path)
        if root is not None:
            toplevel = git_utils.get_repo_root(root)
            if toplevel is None:
                logger.debug(f"{root} is not inside a git repository")
                raise NoRepositoryForFile(Path(file_path))
            # Paths inside commits are relative to the top level, which may sit above `root`
            return toplevel
        if discover:
            discovered = git_utils.get_repo_root(Path(file_path).expanduser().resolve().parent)
            if discovered is not None:
                logger.debug(f"Discovered repository root {discovered} for {file_path}")
                return self.add_root(discovered)
        raise NoRepositoryForFile(Path(file_path))
