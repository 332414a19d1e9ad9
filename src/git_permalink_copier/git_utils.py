import logging
import os
import subprocess
from pathlib import Path
from typing import List, Optional, Tuple

from .constants import REMOTE_HEAD_BRANCH_RE, REMOTE_QUERY_TIMEOUT

logger = logging.getLogger(__name__)


def _run_git(repo_root: Path, *args: str, timeout: Optional[float] = None, env=None) -> str:
    """Runs a git command in `repo_root` and returns its stdout.

    Raises subprocess.CalledProcessError, subprocess.TimeoutExpired, or
    FileNotFoundError (git missing); callers decide whether that's fatal.
    """
    result = subprocess.run(
        ["git", "-C", str(repo_root), *args],
        capture_output=True,
        text=True,
        check=True,
        encoding="utf-8",
        errors="replace",
        stdin=subprocess.DEVNULL,
        timeout=timeout,
        env=env,
    )
    return result.stdout


def _describe_failure(e: Exception) -> str:
    if isinstance(e, subprocess.CalledProcessError):
        stderr_output = e.stderr.strip() if e.stderr else "N/A"
        return f"Command '{subprocess.list2cmdline(e.cmd)}' failed (rc={e.returncode}). Stderr: '{stderr_output}'"
    if isinstance(e, subprocess.TimeoutExpired):
        return f"Command '{subprocess.list2cmdline(e.cmd)}' timed out after {e.timeout}s"
    return str(e)


def get_repo_root(start_dir: Path) -> Optional[Path]:
    """Returns the root of the repository containing `start_dir`, if any."""
    try:
        return Path(_run_git(start_dir, "rev-parse", "--show-toplevel").strip()).resolve()
    except (subprocess.CalledProcessError, FileNotFoundError, NotADirectoryError) as e:
        logger.debug(f"No repository root for {start_dir}: {_describe_failure(e)}")
        return None


def list_remotes(repo_root: Path) -> List[Tuple[str, str]]:
    """Lists `(name, fetch_url)` for every configured remote, in git's order."""
    try:
        output = _run_git(repo_root, "remote", "-v")
    except subprocess.CalledProcessError as e:
        raise RuntimeError(f"Failed to list remotes. {_describe_failure(e)}")

    remotes: List[Tuple[str, str]] = []
    seen = set()
    for line in output.splitlines():
        # "origin\tgit@github.com:owner/repo.git (fetch)"
        parts = line.split()
        if len(parts) < 3 or parts[2] != "(fetch)" or parts[0] in seen:
            continue
        seen.add(parts[0])
        remotes.append((parts[0], parts[1]))
    return remotes


def get_remote_config_url(repo_root: Path, remote_name: str) -> Optional[str]:
    """The URL as configured, before any `insteadOf` rewriting."""
    try:
        url = _run_git(repo_root, "config", "--get", f"remote.{remote_name}.url").strip()
        return url or None
    except subprocess.CalledProcessError as e:
        logger.debug(f"No configured URL for remote '{remote_name}': {_describe_failure(e)}")
        return None


def get_cached_remote_head_branch(repo_root: Path, remote_name: str) -> Optional[str]:
    """Reads the default branch recorded locally in `refs/remotes/<remote>/HEAD`."""
    try:
        ref = _run_git(repo_root, "symbolic-ref", "--quiet", f"refs/remotes/{remote_name}/HEAD").strip()
    except subprocess.CalledProcessError as e:
        logger.debug(f"No cached HEAD for remote '{remote_name}': {_describe_failure(e)}")
        return None
    prefix = f"refs/remotes/{remote_name}/"
    if not ref.startswith(prefix):
        return None
    return ref[len(prefix):] or None


def query_remote_head_branch(
    repo_root: Path, remote_name: str, timeout: float = REMOTE_QUERY_TIMEOUT
) -> Optional[str]:
    """Asks the remote host which branch it considers its default."""
    # English output for the regex below, and no prompts for credentials or passphrases
    env = dict(os.environ, GIT_TERMINAL_PROMPT="0", LC_ALL="C")
    env.setdefault("GIT_SSH_COMMAND", "ssh -o BatchMode=yes")
    try:
        output = _run_git(repo_root, "remote", "show", remote_name, timeout=timeout, env=env)
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired) as e:
        logger.debug(f"Error getting remote info for '{remote_name}': {_describe_failure(e)}")
        return None

    match = REMOTE_HEAD_BRANCH_RE.search(output)
    if not match:
        return None
    branch = match.group(1).strip()
    # Reported when the remote has several candidate HEADs or none
    if not branch or branch == "(unknown)":
        return None
    return branch


def local_branch_exists(repo_root: Path, branch: str) -> bool:
    try:
        _run_git(repo_root, "rev-parse", "--verify", "--quiet", f"refs/heads/{branch}")
        return True
    except subprocess.CalledProcessError:
        return False


def get_current_branch(repo_root: Path) -> Optional[str]:
    """The checked-out branch, or None when HEAD is detached or unborn."""
    try:
        branch = _run_git(repo_root, "rev-parse", "--abbrev-ref", "HEAD").strip()
    except subprocess.CalledProcessError as e:
        logger.debug(f"Could not get the current branch: {_describe_failure(e)}")
        return None
    if not branch or branch == "HEAD":
        return None
    return branch


def resolve_commit(repo_root: Path, ref: str) -> Optional[str]:
    """Resolves a reference (remote-tracking ref, branch, `HEAD`...) to a full commit hash."""
    try:
        commit = _run_git(repo_root, "rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}").strip()
        return commit or None
    except subprocess.CalledProcessError as e:
        logger.debug(f"Could not resolve '{ref}': {_describe_failure(e)}")
        return None


def get_file_content_at_commit(repo_root: Path, commit_hash: str, url_path: str) -> Optional[List[str]]:
    """Get file content at a specific commit."""
    try:
        return _run_git(repo_root, "show", f"{commit_hash}:{url_path}").splitlines()
    except subprocess.CalledProcessError as e:
        logger.debug(f"Failed to get content of '{url_path}' at commit '{commit_hash}'. {_describe_failure(e)}")
        return None
