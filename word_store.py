from __future__ import annotations

import random
from dataclasses import dataclass, field


@dataclass
class TrieNode:
    children: dict[str, TrieNode] = field(default_factory=dict)
    is_end_of_word: bool = False
    word: str | None = None


class WordStore:
    """Vocabulary held in a prefix tree plus a flat pool for random sampling.

    Matching is case-insensitive; the originally inserted spelling is what
    queries and samples return. Duplicates are kept in the sampling pool.
    """

    def __init__(self, words=None, rng: random.Random | None = None) -> None:
        self._root = TrieNode()
        self._words: list[str] = []
        self._rng = rng or random.Random()
        for word in words or ():
            self.insert(word)

    def insert(self, word: str) -> None:
        current = self._root
        for ch in word.lower():
            current = current.children.setdefault(ch, TrieNode())
        current.is_end_of_word = True
        current.word = word
        self._words.append(word)

    def _walk(self, text: str) -> TrieNode | None:
        current = self._root
        for ch in text.lower():
            current = current.children.get(ch)
            if current is None:
                return None
        return current

    def contains(self, word: str) -> bool:
        node = self._walk(word)
        return node is not None and node.is_end_of_word

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def words_with_prefix(self, prefix: str) -> list[str]:
        """All stored words under ``prefix``, children visited in key order."""
        node = self._walk(prefix)
        if node is None:
            return []
        results: list[str] = []
        stack = [node]
        while stack:
            current = stack.pop()
            if current.is_end_of_word and current.word is not None:
                results.append(current.word)
            # reversed so the smallest key is popped first
            for key in sorted(current.children, reverse=True):
                stack.append(current.children[key])
        return results

    def random_word(self) -> str:
        """Uniform pick over the pool, ``""`` when the store is empty."""
        if not self._words:
            return ""
        return self._rng.choice(self._words)

    def random_words(self, count: int) -> list[str]:
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        return [self.random_word() for _ in range(count)]

    def size(self) -> int:
        return len(self._words)

    def __len__(self) -> int:
        return self.size()
