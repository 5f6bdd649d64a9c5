from __future__ import annotations

import logging
import random
import sys
from pathlib import Path
from typing import Sequence

from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, ProgressBar, Static, TextArea
from rich.markup import escape

from config import LOG_FORMAT, LOG_PATH, Settings, parse_settings
from session_tracker import SessionTracker, achievements, streak_milestone
from typing_session import ClockState, SessionResult
from vocabulary import load_vocabulary
from word_store import WordStore

logger = logging.getLogger(__name__)


def render_passage(target_text: str, typed_text: str, mistake_positions) -> str:
    """Rich markup for the passage: typed characters green or red, cursor highlighted."""
    rendered = []
    for i, ch in enumerate(target_text):
        if i < len(typed_text):
            if i in mistake_positions:
                rendered.append(f"[on #4f2f2f]{escape(ch)}[/]")
            else:
                rendered.append(f"[#6fcf6f]{escape(ch)}[/]")
        elif i == len(typed_text):
            rendered.append(f"[reverse]{escape(ch)}[/]")
        else:
            rendered.append(f"[dim]{escape(ch)}[/]")
    return "".join(rendered)


def current_word_label(tracker: SessionTracker) -> str:
    if tracker.session.state is not ClockState.RUNNING:
        return ""
    return f"Current word: [b]{escape(tracker.current_word)}[/b]"


class HomeScreen(Screen):
    BINDINGS = [("q", "quit", "Quit")]

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="home"):
            yield Static("Typing Speed Test", id="title")
            yield Static(
                f"{self.app.settings.word_count} random words from "
                f"{self.app.word_store.size()} in the vocabulary.",
                id="subtitle",
            )
            with Horizontal(id="home-buttons"):
                yield Button("Start Session", id="start", variant="success")
                yield Button("Quit", id="quit", variant="error")
        yield Footer()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "start":
            self.app.push_screen(SessionScreen())
        elif event.button.id == "quit":
            self.app.exit()


class SessionScreen(Screen):
    BINDINGS = [
        ("escape", "back", "Back"),
        ("ctrl+r", "new_passage", "New passage"),
        ("ctrl+t", "retry", "Retry"),
    ]

    def __init__(self) -> None:
        super().__init__()
        self.tracker: SessionTracker | None = None
        self._poll_timer = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="session"):
            yield Static("", id="lesson-text")
            yield Static("", id="current-word")
            yield ProgressBar(total=100, show_eta=False, id="progress")
            with Horizontal(id="metrics"):
                yield Static("WPM: 0", id="wpm")
                yield Static("Accuracy: 100%", id="accuracy")
                yield Static("Mistakes: 0", id="mistakes")
                yield Static("Streak: 0", id="streak")
                yield Static("Time: 0s", id="time")
            yield TextArea("", id="typing-area")
            with Horizontal(id="session-buttons"):
                yield Button("Finish", id="finish", variant="primary")
                yield Button("Retry", id="retry")
                yield Button("New Passage", id="new")
                yield Button("Back", id="back")
        yield Footer()

    def on_mount(self) -> None:
        self._load_passage()
        self._poll_timer = self.set_interval(self.app.settings.poll_interval, self._poll)

    def _load_passage(self) -> None:
        words = self.app.word_store.random_words(self.app.settings.word_count)
        self.tracker = SessionTracker(words)
        logger.info("New passage with %d words", len(words))
        self.query_one("#typing-area", TextArea).text = ""
        self._render()

    def _poll(self) -> None:
        if self.tracker is None or self.tracker.completed:
            return
        self._render()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if self.tracker is None or self.tracker.completed:
            return
        typed_text = event.text_area.text
        previous_streak = self.tracker.streak
        self.tracker.update(typed_text)
        if self.tracker.streak != previous_streak and streak_milestone(self.tracker.streak):
            self.notify(f"{self.tracker.streak} in a row!")
        self._render()
        if self.tracker.completed:
            self._show_summary(self.tracker.finish())

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "back":
            self.action_back()
        elif event.button.id == "new":
            self.action_new_passage()
        elif event.button.id == "retry":
            self.action_retry()
        elif event.button.id == "finish":
            if self.tracker is None or not self.tracker.user_input:
                self.action_back()
                return
            self._show_summary(self.tracker.finish())

    def action_back(self) -> None:
        self.app.pop_screen()

    def action_new_passage(self) -> None:
        self._load_passage()

    def action_retry(self) -> None:
        if self.tracker is None:
            return
        self.tracker.restart()
        self.query_one("#typing-area", TextArea).text = ""
        self._render()

    def _render(self) -> None:
        tracker = self.tracker
        stats = tracker.poll()
        positions = {m.position for m in tracker.session.get_mistakes()}
        self.query_one("#lesson-text", Static).update(
            render_passage(tracker.target_text, tracker.user_input, positions)
        )
        self.query_one("#current-word", Static).update(current_word_label(tracker))
        self.query_one("#progress", ProgressBar).update(progress=tracker.progress())
        self.query_one("#wpm", Static).update(f"WPM: {stats.wpm}")
        self.query_one("#accuracy", Static).update(f"Accuracy: {stats.accuracy}%")
        self.query_one("#mistakes", Static).update(f"Mistakes: {stats.mistakes}")
        self.query_one("#streak", Static).update(f"Streak: {tracker.streak}")
        self.query_one("#time", Static).update(f"Time: {stats.time_elapsed}s")

    def _show_summary(self, result: SessionResult) -> None:
        logger.info(
            "Session finished: %d wpm, %d%% accuracy, %d mistakes",
            result.stats.wpm,
            result.stats.accuracy,
            result.stats.mistakes,
        )
        self.app.push_screen(SummaryScreen(result, self.tracker.max_streak))


class SummaryScreen(Screen):
    BINDINGS = [("enter", "home", "Home"), ("escape", "home", "Home")]

    def __init__(self, result: SessionResult, max_streak: int) -> None:
        super().__init__()
        self.result = result
        self.max_streak = max_streak

    def compose(self) -> ComposeResult:
        stats = self.result.stats
        badges = achievements(stats, self.max_streak)
        yield Header()
        with Vertical(id="summary"):
            yield Static("Session Summary", id="summary-title")
            yield Static(f"WPM: {stats.wpm}", id="summary-wpm")
            yield Static(f"Accuracy: {stats.accuracy}%", id="summary-accuracy")
            yield Static(f"Mistakes: {stats.mistakes}", id="summary-mistakes")
            yield Static(f"Time: {stats.time_elapsed}s", id="summary-time")
            yield Static(f"Max streak: {self.max_streak}", id="summary-streak")
            yield Static(" ".join(f"[b]{escape(b)}[/b]" for b in badges), id="summary-badges")
            yield Button("Back to Home", id="home", variant="success")
        yield Footer()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "home":
            self.action_home()

    def action_home(self) -> None:
        self.app.pop_screen()
        self.app.pop_screen()


class TypingTestApp(App):
    CSS = """
    #home, #session, #summary {
        padding: 1 2;
    }

    #title {
        content-align: center middle;
        text-style: bold;
    }

    #subtitle {
        content-align: center middle;
        color: $text-muted;
        margin-bottom: 1;
    }

    #home-buttons, #session-buttons {
        height: auto;
        margin-top: 1;
    }

    #lesson-text {
        height: 12;
        border: solid $primary;
        padding: 1;
        overflow: auto;
    }

    #typing-area {
        height: 8;
        border: solid $secondary;
        padding: 1;
    }

    #metrics {
        height: auto;
        margin: 1 0;
    }

    #metrics Static {
        width: 1fr;
    }

    #summary-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    TITLE = "Typing Speed Test"

    def __init__(self, settings: Settings, word_store: WordStore) -> None:
        super().__init__()
        self.settings = settings
        self.word_store = word_store

    def on_mount(self) -> None:
        self.push_screen(HomeScreen())


def setup_logging(level: str = "INFO", path: Path = LOG_PATH) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    # the terminal belongs to the UI, so logs only go to a file
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.FileHandler(path, encoding="utf-8")],
    )


def main(argv: Sequence[str] | None = None) -> int:
    settings = parse_settings(argv)
    setup_logging(settings.log_level)
    rng = random.Random(settings.seed)
    word_store = load_vocabulary(settings, rng=rng)
    logger.info("Vocabulary ready with %d words", word_store.size())
    TypingTestApp(settings, word_store).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
