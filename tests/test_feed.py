"""Tests for feed retrieval: fetcher, parser, normalizer, dedup and load_feed_items."""

import time
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from news_teasers.core import load_feed_items
from news_teasers.dedup import deduplicate
from news_teasers.exceptions import PreconditionError, RSSFetchError
from news_teasers.fetcher import fetch_feed_entries
from news_teasers.models import FeedItem
from news_teasers.normalizer import to_feed_item
from news_teasers.parser import DEFAULT_SECTION, parse_entry

FEED_URL = "https://example.com/feed"


def _entry(i: int, **extra) -> dict:
    entry = {
        "title": f"Story {i}",
        "link": f"https://example.com/story-{i}",
        "summary": f"<p>Summary <b>{i}</b></p>",
        "id": f"guid-{i}",
    }
    entry.update(extra)
    return entry


class TestFetchFeedEntries:
    @patch("news_teasers.fetcher.feedparser.parse")
    def test_returns_entries(self, mock_parse) -> None:
        mock_parse.return_value = SimpleNamespace(bozo=0, entries=[_entry(1), _entry(2)])
        assert len(fetch_feed_entries(FEED_URL)) == 2
        mock_parse.assert_called_once_with(FEED_URL)

    @patch("news_teasers.fetcher.feedparser.parse")
    def test_bozo_without_entries_raises(self, mock_parse) -> None:
        mock_parse.return_value = SimpleNamespace(bozo=1, bozo_exception=Exception("bad xml"), entries=[])
        with pytest.raises(RSSFetchError, match="bad xml"):
            fetch_feed_entries(FEED_URL)

    @patch("news_teasers.fetcher.feedparser.parse")
    def test_bozo_with_entries_is_accepted(self, mock_parse) -> None:
        mock_parse.return_value = SimpleNamespace(bozo=1, bozo_exception=Exception("charset"), entries=[_entry(1)])
        assert len(fetch_feed_entries(FEED_URL)) == 1

    @patch("news_teasers.fetcher.feedparser.parse")
    def test_well_formed_empty_feed_is_empty(self, mock_parse) -> None:
        mock_parse.return_value = SimpleNamespace(bozo=0, entries=[])
        assert fetch_feed_entries(FEED_URL) == []

    @patch("news_teasers.fetcher.feedparser.parse")
    def test_unreachable_feed_is_a_precondition_failure(self, mock_parse) -> None:
        mock_parse.return_value = SimpleNamespace(bozo=1, bozo_exception=OSError("unreachable"), entries=[])
        with pytest.raises(PreconditionError):
            fetch_feed_entries(FEED_URL)


class TestParseEntry:
    def test_basic_fields(self) -> None:
        parsed = parse_entry(
            _entry(
                1,
                author="Jane Doe",
                tags=[{"term": "Sports"}],
                published_parsed=time.strptime("2024-05-01 12:00:00", "%Y-%m-%d %H:%M:%S"),
            )
        )
        assert parsed["title"] == "Story 1"
        assert parsed["excerpt"] == "Summary 1"
        assert parsed["section"] == "Sports"
        assert parsed["author"] == "Jane Doe"
        assert parsed["published"] == "2024-05-01T12:00:00+00:00"
        assert parsed["guid"] == "guid-1"

    def test_defaults(self) -> None:
        parsed = parse_entry({"title": "Bare", "link": "https://example.com/bare"})
        assert parsed["section"] == DEFAULT_SECTION
        assert parsed["author"] == ""
        assert parsed["published"] == ""
        assert parsed["guid"] is None

    def test_raw_published_string_kept(self) -> None:
        parsed = parse_entry(_entry(1, published="Wed, 01 May 2024 12:00:00 EST"))
        assert parsed["published"] == "Wed, 01 May 2024 12:00:00 EST"

    def test_dc_creator_author(self) -> None:
        assert parse_entry(_entry(1, dc_creator="Staff")).get("author") == "Staff"


class TestToFeedItem:
    def test_requires_link(self) -> None:
        with pytest.raises(ValueError):
            to_feed_item({"title": "No link"})

    def test_builds_item(self) -> None:
        item = to_feed_item(parse_entry(_entry(3)))
        assert item == FeedItem(
            title="Story 3",
            link="https://example.com/story-3",
            excerpt="Summary 3",
            section="Top",
            guid="guid-3",
        )


class TestDeduplicate:
    def test_query_string_ignored(self) -> None:
        items = [
            FeedItem(title="A", link="https://example.com/a?utm_source=x"),
            FeedItem(title="A again", link="https://example.com/a?utm_source=y"),
            FeedItem(title="B", link="https://example.com/b"),
        ]
        assert [it.title for it in deduplicate(items)] == ["A", "B"]

    def test_keeps_first_and_order(self) -> None:
        items = [FeedItem(title=t, link=f"https://example.com/{t}") for t in "cab"]
        assert [it.title for it in deduplicate(items + items)] == ["c", "a", "b"]


class TestLoadFeedItems:
    @patch("news_teasers.core.fetch_feed_entries")
    def test_pipeline(self, mock_fetch) -> None:
        mock_fetch.return_value = [
            _entry(1),
            {"title": "No link"},
            _entry(1, link="https://example.com/story-1?ref=rss"),
            _entry(2),
            _entry(3),
        ]
        items = load_feed_items(FEED_URL, limit=2)
        assert [it.link for it in items] == ["https://example.com/story-1", "https://example.com/story-2"]

    @patch("news_teasers.core.fetch_feed_entries")
    def test_fetch_error_propagates(self, mock_fetch) -> None:
        mock_fetch.side_effect = RSSFetchError("down")
        with pytest.raises(RSSFetchError):
            load_feed_items(FEED_URL)
