import random

import pytest
import requests

from config import Settings
from vocabulary import (
    DEFAULT_WORDS,
    clean_words,
    fetch_word_list,
    load_vocabulary,
    load_word_file,
)


class FakeResponse:
    def __init__(self, text: str, status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def test_clean_words():
    lines = ["# header", "  Apple ", "", "banana cherry", "don't", "x1", "well-known"]
    assert clean_words(lines) == ["apple", "banana", "cherry", "don't", "well-known"]


def test_default_words_are_clean():
    assert clean_words(DEFAULT_WORDS) == DEFAULT_WORDS


def test_load_word_file(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("alpha\nbeta\nalpha\n", encoding="utf-8")
    assert load_word_file(path) == ["alpha", "beta", "alpha"]


def test_load_word_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_word_file(tmp_path / "missing.txt")


def test_fetch_word_list(monkeypatch):
    calls = []

    def fake_get(url, **kwargs):
        calls.append((url, kwargs))
        return FakeResponse("one\ntwo\n")

    monkeypatch.setattr(requests, "get", fake_get)
    assert fetch_word_list("https://example.com/words.txt") == ["one", "two"]
    assert calls[0][0] == "https://example.com/words.txt"
    assert calls[0][1]["timeout"] == 8


def test_fetch_word_list_http_error(monkeypatch):
    monkeypatch.setattr(requests, "get", lambda url, **kwargs: FakeResponse("", 500))
    with pytest.raises(requests.HTTPError):
        fetch_word_list("https://example.com/words.txt")


def test_load_vocabulary_defaults():
    store = load_vocabulary(Settings(), rng=random.Random(1))
    assert store.size() == len(DEFAULT_WORDS)
    assert store.contains("keyboard")


def test_load_vocabulary_from_file(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("zebra\nyak\n", encoding="utf-8")
    store = load_vocabulary(Settings(words_file=str(path)))
    assert store.size() == 2
    assert store.words_with_prefix("z") == ["zebra"]


def test_load_vocabulary_falls_back_when_download_fails(monkeypatch):
    def fail(url, **kwargs):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(requests, "get", fail)
    store = load_vocabulary(Settings(words_url="https://example.com/words.txt"))
    assert store.size() == len(DEFAULT_WORDS)


def test_load_vocabulary_falls_back_on_empty_download(monkeypatch):
    monkeypatch.setattr(requests, "get", lambda url, **kwargs: FakeResponse("# nothing\n"))
    store = load_vocabulary(Settings(words_url="https://example.com/words.txt"))
    assert store.size() == len(DEFAULT_WORDS)


def test_load_vocabulary_from_url(monkeypatch):
    monkeypatch.setattr(requests, "get", lambda url, **kwargs: FakeResponse("red\ngreen\n"))
    store = load_vocabulary(Settings(words_url="https://example.com/words.txt"))
    assert store.size() == 2
    assert store.contains("Green")


def test_load_vocabulary_falls_back_on_file_without_words(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("# only comments\n123\n", encoding="utf-8")
    store = load_vocabulary(Settings(words_file=str(path)), rng=random.Random(3))
    assert store.size() == len(DEFAULT_WORDS)
    passage = " ".join(store.random_words(10))
    assert passage.strip()
    assert all(store.contains(w) for w in passage.split())
