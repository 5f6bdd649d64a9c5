from __future__ import annotations

import enum
import time
from dataclasses import dataclass
from typing import Callable

from metrics import (
    compute_accuracy,
    compute_correct_chars,
    compute_elapsed_seconds,
    compute_wpm,
)

Clock = Callable[[], float]


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class ClockState(enum.Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    ENDED = "ended"


@dataclass(frozen=True)
class Mistake:
    position: int
    expected: str | None
    typed: str


@dataclass(frozen=True)
class SessionStats:
    wpm: int = 0
    accuracy: int = 100
    mistakes: int = 0
    correct_chars: int = 0
    total_chars: int = 0
    time_elapsed: int = 0


@dataclass(frozen=True)
class SessionResult:
    stats: SessionStats
    words: tuple[str, ...]
    user_input: str
    mistakes: tuple[Mistake, ...]


def find_mistakes(user_input: str, target_text: str) -> list[Mistake]:
    mistakes = []
    for i, ch in enumerate(user_input):
        if i >= len(target_text):
            mistakes.append(Mistake(position=i, expected=None, typed=ch))
        elif ch != target_text[i]:
            mistakes.append(Mistake(position=i, expected=target_text[i], typed=ch))
    return mistakes


class TypingSession:
    """Timing and accuracy for one pass over a fixed passage.

    Stats are recomputed from the latest input on every call; the mistake
    list is a snapshot of that input, not a history. The session never ends
    itself, callers decide when to call :meth:`end`. Not safe for concurrent
    use; give each session a single owner.
    """

    def __init__(self, words, clock: Clock | None = None) -> None:
        self.words: tuple[str, ...] = tuple(words)
        self._target_text = " ".join(self.words)
        self._clock = clock or monotonic_ms
        self.started_at: float | None = None
        self.ended_at: float | None = None
        self._mistakes: list[Mistake] = []

    @property
    def state(self) -> ClockState:
        if self.started_at is None:
            return ClockState.NOT_STARTED
        if self.ended_at is None:
            return ClockState.RUNNING
        return ClockState.ENDED

    def start(self) -> None:
        # restarting opens a fresh timing window
        self.started_at = self._clock()
        self.ended_at = None
        self._mistakes = []

    def end(self) -> None:
        if self.state is ClockState.RUNNING:
            self.ended_at = self._clock()

    def get_target_text(self) -> str:
        return self._target_text

    def track_mistakes(self, user_input: str) -> list[Mistake]:
        self._mistakes = find_mistakes(user_input, self._target_text)
        return list(self._mistakes)

    def get_mistakes(self) -> list[Mistake]:
        return list(self._mistakes)

    def elapsed_ms(self) -> float:
        if self.started_at is None:
            return 0.0
        stop = self.ended_at if self.ended_at is not None else self._clock()
        return stop - self.started_at

    def get_stats(self, user_input: str) -> SessionStats:
        self.track_mistakes(user_input)
        total_chars = len(user_input)
        mistakes = len(self._mistakes)
        correct_chars = compute_correct_chars(total_chars, mistakes)

        if self.started_at is None:
            wpm = 0
            time_elapsed = 0
        else:
            elapsed = self.elapsed_ms()
            wpm = compute_wpm(total_chars, elapsed)
            time_elapsed = compute_elapsed_seconds(elapsed)

        return SessionStats(
            wpm=wpm,
            accuracy=compute_accuracy(correct_chars, total_chars),
            mistakes=mistakes,
            correct_chars=correct_chars,
            total_chars=total_chars,
            time_elapsed=time_elapsed,
        )

    def get_result(self, user_input: str) -> SessionResult:
        stats = self.get_stats(user_input)
        return SessionResult(
            stats=stats,
            words=self.words,
            user_input=user_input,
            mistakes=tuple(self._mistakes),
        )
