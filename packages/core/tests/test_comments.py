"""Tests for the marker comment upsert."""

from unittest.mock import MagicMock

import pytest
from github import GithubException

from prnote_core.gh.comments import find_comment, upsert_comment
from prnote_core.inputs import Inputs, Mode

PREFIX = "<!-- prnote -->"


def _comment(comment_id, body):
    c = MagicMock()
    c.id = comment_id
    c.body = body
    return c


class LazyPages:
    """Iterates comments page by page, recording which pages were fetched."""

    def __init__(self, pages):
        self._pages = pages
        self.fetched = []

    def __iter__(self):
        for number, page in enumerate(self._pages, 1):
            self.fetched.append(number)
            yield from page


def _pages(match_id=None, page_count=3, per_page=30):
    pages = []
    comment_id = 1
    for _ in range(page_count):
        page = []
        for _ in range(per_page):
            body = f"{PREFIX}\nold body" if comment_id == match_id else f"comment {comment_id}"
            page.append(_comment(comment_id, body))
            comment_id += 1
        pages.append(page)
    return LazyPages(pages)


def _inputs(prefix=PREFIX, body=f"{PREFIX}\nnew body"):
    return Inputs(
        mode=Mode.COMMENT,
        token="tok",
        body=body,
        owner="octo",
        repo="hello",
        prefix=prefix,
        issue_number=42,
    )


def _repo_with(comments):
    repo = MagicMock()
    issue = repo.get_issue.return_value
    issue.get_comments.return_value = comments
    return repo, issue


class TestFindComment:
    def test_first_match_wins(self):
        comments = [_comment(1, "nope"), _comment(2, f"{PREFIX} a"), _comment(3, f"{PREFIX} b")]
        assert find_comment(comments, PREFIX).id == 2

    def test_none_body_skipped(self):
        assert find_comment([_comment(1, None)], PREFIX) is None

    def test_prefix_must_be_at_start(self):
        assert find_comment([_comment(1, f"text {PREFIX}")], PREFIX) is None

    def test_stops_at_page_holding_match(self):
        pages = _pages(match_id=37, page_count=4)
        assert find_comment(pages, PREFIX).id == 37
        assert pages.fetched == [1, 2]


class TestUpsertComment:
    def test_updates_match_on_second_page(self):
        pages = _pages(match_id=37)
        repo, issue = _repo_with(pages)

        upsert_comment(_inputs(), repo_obj=repo)

        repo.get_issue.assert_called_once_with(42)
        matched = pages._pages[1][6]
        assert matched.id == 37
        matched.edit.assert_called_once_with(body=f"{PREFIX}\nnew body")
        issue.create_comment.assert_not_called()
        assert pages.fetched == [1, 2]
        edited = [c for page in pages._pages for c in page if c.edit.called]
        assert edited == [matched]

    def test_creates_when_nothing_matches(self):
        pages = _pages(match_id=None)
        repo, issue = _repo_with(pages)

        upsert_comment(_inputs(), repo_obj=repo)

        issue.create_comment.assert_called_once_with(f"{PREFIX}\nnew body")
        assert pages.fetched == [1, 2, 3]
        assert not any(c.edit.called for page in pages._pages for c in page)

    def test_creates_without_listing_when_no_prefix(self):
        repo, issue = _repo_with([])

        upsert_comment(_inputs(prefix=None, body="plain"), repo_obj=repo)

        issue.get_comments.assert_not_called()
        issue.create_comment.assert_called_once_with("plain")

    def test_creates_on_empty_thread(self):
        repo, issue = _repo_with([])
        upsert_comment(_inputs(), repo_obj=repo)
        issue.create_comment.assert_called_once()

    def test_api_error_propagates(self):
        repo, issue = _repo_with([])
        issue.create_comment.side_effect = GithubException(403, "forbidden", None)

        with pytest.raises(GithubException):
            upsert_comment(_inputs(), repo_obj=repo)

    def test_builds_repo_from_inputs_when_not_given(self, mocker):
        mock_get_repo = mocker.patch("prnote_core.gh.comments.get_repo")
        mock_get_repo.return_value.get_issue.return_value.get_comments.return_value = []

        upsert_comment(_inputs())

        mock_get_repo.assert_called_once_with("octo", "hello", token="tok")
