from __future__ import annotations

import logging
import random
import re
from pathlib import Path
from typing import Iterable

import requests

from word_store import WordStore

logger = logging.getLogger(__name__)

USER_AGENT = "trie-typing-test/0.1 (python requests)"

DEFAULT_WORDS = [
    "the", "be", "to", "of", "and", "a", "in", "that", "have", "it",
    "for", "not", "on", "with", "he", "as", "you", "do", "at", "this",
    "but", "his", "by", "from", "they", "we", "say", "her", "she", "or",
    "an", "will", "my", "one", "all", "would", "there", "their", "what", "so",
    "up", "out", "if", "about", "who", "get", "which", "go", "me", "when",
    "make", "can", "like", "time", "no", "just", "him", "know", "take", "people",
    "into", "year", "your", "good", "some", "could", "them", "see", "other", "than",
    "then", "now", "look", "only", "come", "its", "over", "think", "also", "back",
    "after", "use", "two", "how", "our", "work", "first", "well", "way", "even",
    "new", "want", "because", "any", "these", "give", "day", "most", "us", "great",
    "between", "need", "feel", "high", "really", "something", "school", "still", "system", "every",
    "right", "program", "next", "question", "during", "play", "small", "number", "again", "world",
    "area", "course", "company", "under", "problem", "hand", "place", "case", "week", "point",
    "group", "different", "home", "country", "away", "moment", "child", "part", "believe", "each",
    "life", "always", "those", "before", "never", "through", "study", "must", "old", "public",
    "market", "level", "night", "state", "another", "turn", "follow", "social", "whether", "possible",
    "house", "water", "family", "story", "change", "light", "young", "city", "learn", "word",
    "keyboard", "practice", "quick", "brown", "fox", "jumps", "lazy", "dog", "speed", "accuracy",
]

_WORD_RE = re.compile(r"^[a-z]+(?:['-][a-z]+)*$")


def clean_words(lines: Iterable[str]) -> list[str]:
    words = []
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        for token in line.lower().split():
            if _WORD_RE.match(token):
                words.append(token)
    return words


def load_word_file(path: str | Path) -> list[str]:
    text = Path(path).read_text(encoding="utf-8")
    words = clean_words(text.splitlines())
    logger.info("Loaded %d words from %s", len(words), path)
    return words


def fetch_word_list(url: str, timeout: float = 8) -> list[str]:
    response = requests.get(
        url,
        timeout=timeout,
        allow_redirects=True,
        headers={
            "User-Agent": USER_AGENT,
            "Accept": "text/plain",
        },
    )
    response.raise_for_status()
    words = clean_words(response.text.splitlines())
    logger.info("Fetched %d words from %s", len(words), url)
    return words


def build_word_store(words: Iterable[str], rng: random.Random | None = None) -> WordStore:
    return WordStore(words, rng=rng)


def load_vocabulary(settings, rng: random.Random | None = None) -> WordStore:
    """Build the store from the configured file, URL, or the built-in list.

    A missing file is the caller's mistake and raises. Download problems and
    sources with no usable words fall back to the built-in words.
    """
    if settings.words_file:
        words = load_word_file(settings.words_file)
        if words:
            return build_word_store(words, rng=rng)
        logger.warning("Word file %s has no usable words", settings.words_file)
    elif settings.words_url:
        try:
            words = fetch_word_list(settings.words_url)
        except requests.RequestException as exc:
            logger.warning("Could not fetch word list from %s: %s", settings.words_url, exc)
        else:
            if words:
                return build_word_store(words, rng=rng)
            logger.warning("Word list at %s was empty", settings.words_url)

    return build_word_store(DEFAULT_WORDS, rng=rng)
