from unittest.mock import MagicMock, patch

import pytest
import requests

from conftest import SAMPLE_SOURCE
from git_permalink_copier.errors import RevisionFileUnavailable
from git_permalink_copier.permalink_info import LineRange, RepositoryCoordinates
from git_permalink_copier.snippet_locator import (
    SnippetLocator,
    count_blank_edges,
    find_snippet_ranges,
    normalize_snippet,
)
from git_permalink_copier.web_utils import fetch_raw_github_content

LINES = SAMPLE_SOURCE.splitlines()


def _selected(start, end):
    return normalize_snippet("\n".join(LINES[start - 1 : end]))


class TestFindSnippetRanges:

    @pytest.mark.parametrize("start,end", [(1, 1), (4, 6), (9, 11), (5, 5)])
    def test_unchanged_file_gives_the_selection(self, start, end):
        assert find_snippet_ranges(LINES, _selected(start, end)) == [LineRange(start, end)]

    def test_trimmed_indentation_still_matches(self):
        snippet = "with open(path) as f:\n        return f.read()"
        assert find_snippet_ranges(LINES, snippet) == [LineRange(5, 6)]

    def test_every_occurrence_in_file_order(self):
        content = ["a", "x = 1", "y = 2", "b"] + ["filler"] * 10 + ["x = 1", "y = 2"]
        assert find_snippet_ranges(content, "x = 1\ny = 2") == [LineRange(2, 3), LineRange(15, 16)]

    def test_single_line_substring(self):
        assert find_snippet_ranges(LINES, "read_config") == [LineRange(4, 4), LineRange(10, 10)]

    def test_not_found(self):
        assert find_snippet_ranges(LINES, "def write_config(path):") == []

    def test_internal_whitespace_matters(self):
        assert find_snippet_ranges(LINES, "def  main():") == []

    def test_snippet_taller_than_file(self):
        assert find_snippet_ranges(["only line"], "only line\nsecond") == []

    def test_empty_snippet(self):
        assert find_snippet_ranges(LINES, "") == []


def test_normalize_snippet():
    assert normalize_snippet("\n    if x:\n        y()  \n\n") == "if x:\n        y()"


@pytest.mark.parametrize(
    "text,expected",
    [
        ("def main():", (0, 0)),
        ("\ndef main():\n    pass\n\n", (1, 1)),
        ("\n   \n\tx = 1\n\n\n", (2, 2)),
        ("x = 1\n", (0, 0)),
        ("\n\n", (2, 0)),
    ],
)
def test_count_blank_edges(text, expected):
    assert count_blank_edges(text) == expected


class TestSnippetLocator:

    def test_locates_in_commit(self, git_repo, published_commit):
        locator = SnippetLocator(git_repo, fetch_remote_content=False)
        assert locator.locate(published_commit, "src/app.py", "def main():") == [LineRange(9, 9)]

    def test_uses_commit_not_working_copy(self, git_repo, published_commit):
        (git_repo / "src" / "app.py").write_text("# header\n\n" + SAMPLE_SOURCE)
        locator = SnippetLocator(git_repo, fetch_remote_content=False)
        assert locator.locate(published_commit, "src/app.py", "def main():") == [LineRange(9, 9)]

    def test_missing_path(self, git_repo, published_commit):
        locator = SnippetLocator(git_repo, fetch_remote_content=False)
        with pytest.raises(RevisionFileUnavailable) as excinfo:
            locator.locate(published_commit, "src/missing.py", "x")
        assert excinfo.value.path == "src/missing.py"
        assert excinfo.value.revision == published_commit

    def test_unknown_commit_falls_back_to_github(self, git_repo):
        coordinates = RepositoryCoordinates("acme", "widgets")
        locator = SnippetLocator(git_repo, coordinates=coordinates)
        unknown = "f" * 40
        with patch(
            "git_permalink_copier.snippet_locator.fetch_raw_github_content", return_value=["a", "b", "c"]
        ) as fetch:
            assert locator.locate(unknown, "src/app.py", "b\nc") == [LineRange(2, 3)]
        fetch.assert_called_once_with(coordinates, unknown, "src/app.py")

    def test_no_github_fallback_when_disabled(self, git_repo):
        locator = SnippetLocator(git_repo, coordinates=RepositoryCoordinates("acme", "widgets"), fetch_remote_content=False)
        with patch("git_permalink_copier.snippet_locator.fetch_raw_github_content") as fetch:
            with pytest.raises(RevisionFileUnavailable):
                locator.locate("f" * 40, "src/app.py", "b")
        fetch.assert_not_called()

    def test_github_fallback_also_missing(self, git_repo):
        locator = SnippetLocator(git_repo, coordinates=RepositoryCoordinates("acme", "widgets"))
        with patch("git_permalink_copier.snippet_locator.fetch_raw_github_content", return_value=None):
            with pytest.raises(RevisionFileUnavailable):
                locator.locate("f" * 40, "src/app.py", "b")


class TestFetchRawGithubContent:

    def test_success(self):
        response = MagicMock()
        response.text = "one\ntwo\n"
        with patch("git_permalink_copier.web_utils.requests.get", return_value=response) as get:
            lines = fetch_raw_github_content(RepositoryCoordinates("acme", "widgets"), "abc123", "src/app.py")
        assert lines == ["one", "two"]
        get.assert_called_once()
        assert get.call_args[0][0] == "https://raw.githubusercontent.com/acme/widgets/abc123/src/app.py"

    def test_http_error(self):
        response = MagicMock()
        response.raise_for_status.side_effect = requests.exceptions.HTTPError("404 Client Error")
        with patch("git_permalink_copier.web_utils.requests.get", return_value=response):
            assert fetch_raw_github_content(RepositoryCoordinates("acme", "widgets"), "abc123", "nope.py") is None

    def test_connection_error(self):
        with patch(
            "git_permalink_copier.web_utils.requests.get",
            side_effect=requests.exceptions.ConnectionError("offline"),
        ):
            assert fetch_raw_github_content(RepositoryCoordinates("acme", "widgets"), "abc123", "a.py") is None
