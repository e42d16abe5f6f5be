# Area: Answers Tests
"""Tests for answer sources."""

import random

import pytest

from wordleoff import ConfigError, FixedAnswerSource, WordListAnswerSource
from wordleoff.answers import DEFAULT_WORDS_PATH, default_answer_source, parse_word_list


class TestParseWordList:
    def test_uppercases_and_skips_noise(self):
        lines = ["crane", "", "  slate  ", "# comment", "CRANE", "train"]
        assert parse_word_list(lines) == ["CRANE", "SLATE", "TRAIN"]


class TestWordListAnswerSource:
    """Tests for the file-backed source."""

    def test_bundled_list_exists_and_is_large_enough(self):
        source = WordListAnswerSource()
        assert DEFAULT_WORDS_PATH.exists()
        # Must exceed the default past-answer history bound (50)
        assert len(source) > 50
        assert all(len(word) == 5 for word in source.words)

    def test_draws_from_file(self, tmp_path):
        path = tmp_path / "words.txt"
        path.write_text("crane\nslate\n", encoding="utf-8")
        source = WordListAnswerSource(str(path), rng=random.Random(7))

        draws = {source.next_random_answer() for _ in range(50)}

        assert draws <= {"CRANE", "SLATE"}

    def test_seeded_rng_is_reproducible(self):
        a = WordListAnswerSource(rng=random.Random(42))
        b = WordListAnswerSource(rng=random.Random(42))
        assert [a.next_random_answer() for _ in range(10)] == \
               [b.next_random_answer() for _ in range(10)]

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ConfigError):
            WordListAnswerSource(str(tmp_path / "nope.txt"))

    def test_empty_file_raises(self, tmp_path):
        path = tmp_path / "words.txt"
        path.write_text("# nothing here\n\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            WordListAnswerSource(str(path))

    def test_default_source_is_shared(self):
        assert default_answer_source() is default_answer_source()


class TestFixedAnswerSource:
    def test_cycles(self):
        source = FixedAnswerSource(["crane", "slate"])
        assert [source.next_random_answer() for _ in range(3)] == ["CRANE", "SLATE", "CRANE"]

    def test_empty_raises(self):
        with pytest.raises(ConfigError):
            FixedAnswerSource([])
