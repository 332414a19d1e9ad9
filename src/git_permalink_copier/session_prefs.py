import argparse
from dataclasses import dataclass


@dataclass
class SessionPreferences:
    """What to do with a link once it's built. Can differ per request."""
    copy_to_clipboard: bool = False
    open_in_browser: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> 'SessionPreferences':
        return cls(
            copy_to_clipboard=args.copy,
            open_in_browser=args.open,
        )
