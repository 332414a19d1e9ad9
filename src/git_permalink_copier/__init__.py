#!/usr/bin/env python3
"""
GitHub Permalink Copier
=======================

Copies a permanent GitHub link to the lines you're looking at.

The link points at the commit your canonical remote has published (the tip of
its default branch), not at your local HEAD, so it keeps working for everyone
else. Because your working copy may have drifted from that commit (local
edits, a rebase, being behind), the selected text is searched for in the
published file and the line numbers are adjusted to where it actually is.


Usage
-----

git-permalink-copier FILE -L START[-END] [OPTIONS]

Help: to see all flags, run with `-h`


Supported
---------

Remotes of the form:

- `git@github.com:owner/repo.git`
- `https://github.com/owner/repo.git`

Links of the form:

- `https://github.com/owner/repo/blob/commit_hash/url_path#Lline_start-Lline_end`

Requires
--------
Python v3.9+
"""

import argparse
import logging
import sys
from pathlib import Path

from .app import PermalinkCopierApp
from .constants import LINE_RANGE_ARG_RE
from .errors import NoActiveSelection
from .global_prefs import GlobalPreferences
from .permalink_info import LineRange, Selection
from .session_prefs import SessionPreferences


def parse_line_range(value: str) -> LineRange:
    """Parses `10`, `10-12`, `10,12` or `L10-L12`."""
    match = LINE_RANGE_ARG_RE.match(value.strip())
    if not match:
        raise argparse.ArgumentTypeError(f"Invalid line range '{value}'. Expected START or START-END.")
    start = int(match.group(1))
    end = int(match.group(2)) if match.group(2) else start
    try:
        return LineRange(start, end)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-permalink-copier",
        description="Builds a GitHub permalink to lines of a local file, pointing at the commit the canonical remote has published.",
        formatter_class=argparse.RawTextHelpFormatter,  # Allows for better formatting of help
    )
    parser.add_argument(
        "file",
        nargs="?",
        type=Path,
        help="File to link to.",
    )
    parser.add_argument(
        "-L",
        "--lines",
        type=parse_line_range,
        default=None,
        help="Selected lines in the working copy, 1-based: START or START-END.\n"
        "Without it, the link points at the whole file.",
    )
    text_group = parser.add_mutually_exclusive_group()
    text_group.add_argument(
        "--text",
        default=None,
        help="The exact selected text (requires -L). Defaults to the selected lines as they\n"
        "are on disk.",
    )
    text_group.add_argument(
        "--stdin",
        action="store_true",
        help="Read the exact selected text from standard input (requires -L).",
    )
    parser.add_argument(
        "-c",
        "--copy",
        action="store_true",
        help="Copy the link to the clipboard.",
    )
    parser.add_argument(
        "-o",
        "--open",
        action="store_true",
        help="Open the link in the default browser.",
    )
    parser.add_argument(
        "--remote",
        default=None,
        help="Remote to link to. By default 'upstream' is preferred, then 'origin',\n"
        "then the first other remote.",
    )
    parser.add_argument(
        "--repo-root",
        dest="repo_roots",
        default=[],
        action="append",
        help="A repository root the file may belong to. Can be given multiple times;\n"
        "the deepest root containing the file wins. By default the root is\n"
        "discovered from the file's location.",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Don't contact the remote host: its default branch is only read from\n"
        "local refs, and file contents only from local commits.",
    )
    parser.add_argument(
        "--no-remote-content",
        action="store_false",
        dest="fetch_remote_content",  # By default, fetch_remote_content will be True
        help="Don't fetch the file from raw.githubusercontent.com when the commit\n"
        "isn't available locally.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output for more detailed logging.",
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.lines is None and (args.text is not None or args.stdin):
        parser.error("--text and --stdin describe a selection; give its lines with -L")

    global_prefs = GlobalPreferences.from_args(args)
    session_prefs = SessionPreferences.from_args(args)

    logging.basicConfig(
        level=logging.DEBUG if global_prefs.verbose else logging.WARNING,
        format="%(message)s",
        stream=sys.stderr,
    )

    try:
        if args.file is None:
            raise NoActiveSelection()

        text = sys.stdin.read() if args.stdin else args.text
        selection = Selection(file_path=args.file, line_range=args.lines, text=text)

        app = PermalinkCopierApp(global_prefs)
        result = app.produce_link(selection, session_prefs)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        sys.exit(1)
    except RuntimeError as e:  # Catch specific custom errors
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:  # Catch other unexpected errors
        print(f"An unexpected error occurred: {e}", file=sys.stderr)
        import traceback

        traceback.print_exc(file=sys.stderr)
        sys.exit(1)

    if not result.link.verified:
        print(
            f"⚠️ Could not find the selected text in {result.link.path} at {result.remote.name}/{result.branch}"
            f" ({result.link.commit[:8]}); the line numbers may be off.",
            file=sys.stderr,
        )
    print(result.url)
    return 0


if __name__ == "__main__":
    main()
