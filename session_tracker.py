from __future__ import annotations

import logging

from typing_session import (
    Clock,
    ClockState,
    SessionResult,
    SessionStats,
    TypingSession,
)

logger = logging.getLogger(__name__)

STREAK_MILESTONE = 10


def streak_milestone(streak: int) -> bool:
    return streak > 0 and streak % STREAK_MILESTONE == 0


def achievements(stats: SessionStats, max_streak: int = 0) -> list[str]:
    badges = []
    if stats.wpm > 40:
        badges.append("Good Speed")
    if stats.wpm > 60:
        badges.append("Fast Typer")
    if stats.accuracy > 95:
        badges.append("High Accuracy")
    if stats.mistakes == 0:
        badges.append("Perfect")
    if max_streak > 20:
        badges.append("Streak Master")
    return badges


class SessionTracker:
    """Drives a TypingSession from successive input snapshots.

    Starts the clock on the first typed character, ends it once the input
    covers the whole passage, and keeps the keystroke streak and the index of
    the word being typed.
    """

    def __init__(self, words, clock: Clock | None = None) -> None:
        self._clock = clock
        self.session = TypingSession(words, clock=clock)
        self.user_input = ""
        self.streak = 0
        self.max_streak = 0
        self.current_word_index = 0
        self.completed = False

    @property
    def target_text(self) -> str:
        return self.session.get_target_text()

    @property
    def current_word(self) -> str:
        words = self.session.words
        if not words:
            return ""
        return words[self.current_word_index]

    def restart(self) -> None:
        """Same passage again; the clock waits for the first keystroke."""
        self.session = TypingSession(self.session.words, clock=self._clock)
        self.user_input = ""
        self.streak = 0
        self.max_streak = 0
        self.current_word_index = 0
        self.completed = False

    def update(self, user_input: str) -> SessionStats:
        if self.completed:
            return self.poll()

        if self.session.state is ClockState.NOT_STARTED and user_input:
            self.session.start()

        if len(user_input) > len(self.user_input):
            self._record_keystroke(user_input)

        self.user_input = user_input
        spaces = user_input.count(" ")
        self.current_word_index = max(0, min(spaces, len(self.session.words) - 1))

        target = self.target_text
        if len(user_input) >= len(target) and self.session.state is ClockState.RUNNING:
            self.session.end()
            self.completed = True
            logger.debug("Session completed after %d characters", len(user_input))

        return self.poll()

    def _record_keystroke(self, user_input: str) -> None:
        index = len(user_input) - 1
        target = self.target_text
        if index < len(target) and user_input[index] == target[index]:
            self.streak += 1
            self.max_streak = max(self.max_streak, self.streak)
        else:
            self.streak = 0

    def poll(self) -> SessionStats:
        return self.session.get_stats(self.user_input)

    def finish(self) -> SessionResult:
        self.session.end()
        self.completed = self.session.state is ClockState.ENDED
        return self.session.get_result(self.user_input)

    def progress(self) -> float:
        target_len = len(self.target_text)
        if target_len == 0:
            return 0.0
        return min(100.0, len(self.user_input) / target_len * 100.0)
