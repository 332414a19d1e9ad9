import re

GITHUB_HOST = "github.com"

# Remotes that are considered most authoritative, in order of preference.
# Every other remote keeps its enumeration order after these.
PREFERRED_REMOTES = ("upstream", "origin")

# Probed against local branches when the remote doesn't advertise a default branch
CONVENTIONAL_BRANCH_NAMES = ("main", "master", "develop", "dev", "trunk")

FALLBACK_BRANCH_NAME = "main"

GITHUB_REMOTE_RE = re.compile(r"^(?:git@|https?://)github\.com[:/]")
GITHUB_SSH_REMOTE_RE = re.compile(r"^git@github\.com:([^/]+)/([^/]+?)\.git$")
GITHUB_HTTPS_REMOTE_RE = re.compile(r"^https://github\.com/([^/]+)/([^/]+?)\.git$")

# `git remote show <name>` output, e.g. "  HEAD branch: main"
REMOTE_HEAD_BRANCH_RE = re.compile(r"HEAD branch: (.+)")

# `-L 10`, `-L 10-12`, `-L 10,12`, `-L L10-L12`
LINE_RANGE_ARG_RE = re.compile(r"^L?(\d+)(?:[-,:]L?(\d+))?$", re.IGNORECASE)

# Seconds to wait for commands that talk to the remote host
REMOTE_QUERY_TIMEOUT = 15
RAW_CONTENT_TIMEOUT = 10
