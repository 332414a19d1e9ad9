import logging
import sys
import webbrowser
from typing import List, Optional

import pyperclip
import requests

from .constants import RAW_CONTENT_TIMEOUT
from .permalink_info import RepositoryCoordinates
from .url_utils import build_raw_content_url

logger = logging.getLogger(__name__)


def fetch_raw_github_content(coordinates: RepositoryCoordinates, ref: str, path: str) -> Optional[List[str]]:
    """Fetches a file's lines at `ref` straight from GitHub."""
    raw_url = build_raw_content_url(coordinates, ref, path)
    try:
        response = requests.get(raw_url, timeout=RAW_CONTENT_TIMEOUT)
        response.raise_for_status()  # Raises an HTTPError for bad responses (4XX or 5XX)
        return response.text.splitlines()
    except requests.exceptions.RequestException as e:
        logger.debug(f"Error fetching raw content from {raw_url}: {e}")
        return None


def copy_to_clipboard(url: str) -> bool:
    try:
        pyperclip.copy(url)
    except pyperclip.PyperclipException as e:
        print(f"⚠️ Could not copy to the clipboard: {e}", file=sys.stderr)
        return False
    print(f"📋 Copied to clipboard: {url}", file=sys.stderr)
    return True


def open_url_in_browser(url: str) -> bool:
    print(f"🌐 Attempting to open: {url}", file=sys.stderr)
    try:
        opened = webbrowser.open(url)
    except webbrowser.Error as e:  # webbrowser.Error is the base class for errors from this module
        print(f"⚠️ Could not open URL '{url}' in browser: {e}. Please open manually.", file=sys.stderr)
        return False
    if not opened:
        print(f"⚠️ No browser available to open '{url}'. Please open manually.", file=sys.stderr)
    return opened
