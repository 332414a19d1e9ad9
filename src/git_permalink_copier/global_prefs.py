import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class GlobalPreferences:
    """Preferences that hold for the whole process."""
    verbose: bool = False
    # Known repository roots; empty means "discover from the file's location"
    repo_roots: List[Path] = field(default_factory=list)
    # Use this remote instead of ranking upstream/origin/others
    remote: Optional[str] = None
    # Don't ask the remote host for its default branch
    offline: bool = False
    # Fall back to raw.githubusercontent.com when a commit isn't available locally
    fetch_remote_content: bool = True

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> 'GlobalPreferences':
        return cls(
            verbose=args.verbose,
            repo_roots=[Path(root) for root in args.repo_roots],
            remote=args.remote,
            offline=args.offline,
            fetch_remote_content=args.fetch_remote_content and not args.offline,
        )
