"""
wordleoff.answers — Answer sources
===================================

A session draws its secret word through an ``AnswerSource``. Sources know
nothing about sessions; ``GameSession`` re-draws until the word is not in
its recent history.

Usage:
    from wordleoff import WordListAnswerSource

    source = WordListAnswerSource()            # bundled list
    source = WordListAnswerSource("words.txt") # one word per line
"""

from __future__ import annotations

import functools
import itertools
import logging
import random
from pathlib import Path
from typing import Iterable, List, Optional, Protocol

from .errors import ConfigError

logger = logging.getLogger("wordleoff.answers")

# Bundled answer list (relative to package)
DEFAULT_WORDS_PATH = Path(__file__).parent / "words" / "answers.txt"


class AnswerSource(Protocol):
    """Anything that can draw a random answer word."""

    def next_random_answer(self) -> str:
        ...


def parse_word_list(lines: Iterable[str]) -> List[str]:
    """Upper-case words, skipping blanks, ``#`` comments and duplicates."""
    words: List[str] = []
    seen = set()
    for line in lines:
        word = line.strip().upper()
        if not word or word.startswith("#") or word in seen:
            continue
        seen.add(word)
        words.append(word)
    return words


class WordListAnswerSource:
    """
    Draws answers uniformly from a word-list file.

    Args:
        words_path: Path to a text file with one word per line.
            Defaults to the bundled list.
        rng: Random generator; pass a seeded ``random.Random`` for
            reproducible draws.
    """

    def __init__(self, words_path: Optional[str] = None,
                 rng: Optional[random.Random] = None):
        path = Path(words_path) if words_path else DEFAULT_WORDS_PATH
        if not path.exists():
            raise ConfigError(f"Word list not found: {path}", ["words_path"])
        self._words = parse_word_list(
            path.read_text(encoding="utf-8").splitlines()
        )
        if not self._words:
            raise ConfigError(f"Word list is empty: {path}", ["words_path"])
        self._rng = rng or random.Random()
        logger.debug(f"Loaded {len(self._words)} answers from {path}")

    @property
    def words(self) -> List[str]:
        return list(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def next_random_answer(self) -> str:
        return self._rng.choice(self._words)


class FixedAnswerSource:
    """Cycles through a fixed sequence of answers (demos and tests)."""

    def __init__(self, answers: Iterable[str]):
        answers = [a.upper() for a in answers]
        if not answers:
            raise ConfigError("FixedAnswerSource needs at least one answer")
        self._cycle = itertools.cycle(answers)

    def next_random_answer(self) -> str:
        return next(self._cycle)


@functools.lru_cache(maxsize=None)
def default_answer_source() -> WordListAnswerSource:
    """Shared source over the bundled list, loaded on first use."""
    return WordListAnswerSource()
