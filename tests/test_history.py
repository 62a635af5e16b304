"""Tests for news_teasers.history and news_teasers.storage modules."""

import json

from news_teasers.history import HistoryState, first_word, opener, seed_openers
from news_teasers.models import Result
from news_teasers.storage import read_artifact, write_artifact


def _record(i: int) -> dict:
    return {
        "title": f"Story {i}",
        "url": f"https://example.com/{i}",
        "author": "",
        "section": "Top",
        "published": "",
        "image": None,
        "bullets": ["Fact one.", "Fact two.", f"Opener{i} word{i} rest of teaser."],
    }


class TestOpener:
    def test_first_two_words_lowercased(self) -> None:
        assert opener("  The Quick   brown fox") == "the quick"

    def test_single_word(self) -> None:
        assert opener("Done.") == "done."

    def test_empty(self) -> None:
        assert opener("") == ""

    def test_first_word_strips_punctuation(self) -> None:
        assert first_word("“Quoted” text") == "quoted"
        assert first_word("") == ""


class TestSeedOpeners:
    def test_limit_keeps_first_entries(self) -> None:
        records = [_record(i) for i in range(50)]
        assert seed_openers(records, limit=20) == [f"opener{i} word{i}" for i in range(20)]

    def test_skips_malformed_records(self) -> None:
        records = ["junk", {"bullets": ["only", "two"]}, {"bullets": None}, _record(1)]
        assert seed_openers(records) == ["opener1 word1"]


class TestHistoryState:
    def test_from_missing_artifact_is_empty(self, tmp_path) -> None:
        history = HistoryState.from_artifact(tmp_path / "missing.json")
        assert history.recent_openers == []
        assert not history.used_openers
        assert not history.first_word_counts

    def test_from_artifact_applies_limit(self, tmp_path) -> None:
        path = tmp_path / "summaries.json"
        path.write_text(json.dumps([_record(i) for i in range(50)]), encoding="utf-8")

        history = HistoryState.from_artifact(path, limit=20)

        assert len(history.recent_openers) == 20
        assert history.has_opener("opener0 word0")
        assert not history.has_opener("opener20 word20")

    def test_first_word_counts_start_empty_each_run(self, tmp_path) -> None:
        path = tmp_path / "summaries.json"
        path.write_text(json.dumps([_record(i) for i in range(5)]), encoding="utf-8")
        assert HistoryState.from_artifact(path).first_word_count("opener0") == 0

    def test_record(self) -> None:
        history = HistoryState(recent_openers=["seeded one"])
        op = history.record("Money sits at the center of the debate.")

        assert op == "money sits"
        assert history.recent_openers == ["seeded one", "money sits"]
        assert history.has_opener("money sits")
        assert history.first_word_count("money") == 1


class TestArtifact:
    def test_read_invalid_json_is_empty(self, tmp_path) -> None:
        path = tmp_path / "summaries.json"
        path.write_text("{not json", encoding="utf-8")
        assert read_artifact(path) == []

    def test_read_non_list_is_empty(self, tmp_path) -> None:
        path = tmp_path / "summaries.json"
        path.write_text('{"articles": []}', encoding="utf-8")
        assert read_artifact(path) == []

    def test_write_overwrites_and_creates_dirs(self, tmp_path) -> None:
        path = tmp_path / "data" / "summaries.json"
        first = Result("T1", "https://a", "", "Top", "", None, ["a.", "b.", "c."])
        second = Result("T2", "https://b", "Jane", "Sports", "2024-05-01", "https://img", ["d.", "e.", "f."])

        write_artifact(path, [first])
        write_artifact(path, [second])

        data = read_artifact(path)
        assert data == [second.to_dict()]
        assert set(data[0]) == {"title", "url", "author", "section", "published", "image", "bullets"}
        assert not (tmp_path / "data" / "summaries.json.tmp").exists()
