"""Errors that stop a permalink from being produced.

All of them are `RuntimeError`s so the CLI reports them as a single line.
Fallbacks that are expected to fail now and then (remote HEAD introspection,
branch name probing) never raise these; they are logged instead.
"""
from pathlib import Path
from typing import Optional


class PermalinkError(RuntimeError):
    pass


class NoActiveSelection(PermalinkError):
    def __init__(self, file_path: Optional[Path] = None):
        self.file_path = file_path
        if file_path is None:
            super().__init__("No file given to link to")
        else:
            super().__init__(f"No such file to link to: {file_path}")


class NoRepositoryForFile(PermalinkError):
    def __init__(self, file_path: Path):
        self.file_path = file_path
        super().__init__(f"No git repository found for {file_path}")


class EmptySelection(PermalinkError):
    def __init__(self, file_path: Path, line_start: int, line_end: int):
        self.file_path = file_path
        self.line_start = line_start
        self.line_end = line_end
        super().__init__(f"No content found at lines {line_start}-{line_end} of {file_path}")


class NoRemotesConfigured(PermalinkError):
    def __init__(self, repo_root: Path, remote_name: Optional[str] = None):
        self.repo_root = repo_root
        self.remote_name = remote_name
        if remote_name:
            super().__init__(f"Remote '{remote_name}' is not configured in {repo_root}")
        else:
            super().__init__(f"No git remotes configured in {repo_root}")


class UnrecognizedRemoteFormat(PermalinkError):
    def __init__(self, fetch_url: str, remote_name: Optional[str] = None):
        self.fetch_url = fetch_url
        self.remote_name = remote_name
        label = f"remote '{remote_name}'" if remote_name else "remote"
        super().__init__(f"Could not determine GitHub owner/repo from {label} URL: {fetch_url}")


class RevisionResolutionFailed(PermalinkError):
    def __init__(self, remote_name: str, branch: str):
        self.remote_name = remote_name
        self.branch = branch
        super().__init__(
            f"Could not resolve '{remote_name}/{branch}' to a commit. "
            f"Try `git fetch {remote_name}` first."
        )


class RevisionFileUnavailable(PermalinkError):
    def __init__(self, revision: str, path: str):
        self.revision = revision
        self.path = path
        super().__init__(f"'{path}' is not available at commit {revision[:8]}")
