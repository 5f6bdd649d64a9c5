import pytest

from typing_session import ClockState, Mistake, SessionStats, TypingSession, find_mistakes


def test_target_text_joins_words_with_single_spaces():
    session = TypingSession(["cat", "dog", "emu"])
    assert session.get_target_text() == "cat dog emu"


def test_empty_input_before_start(clock):
    session = TypingSession(["cat", "dog"], clock=clock)
    stats = session.get_stats("")
    assert stats == SessionStats(
        wpm=0, accuracy=100, mistakes=0, correct_chars=0, total_chars=0, time_elapsed=0
    )


def test_mistake_detection(clock):
    session = TypingSession(["cat"], clock=clock)
    session.start()
    stats = session.get_stats("cap")
    assert session.get_mistakes() == [Mistake(position=2, expected="t", typed="p")]
    assert stats.correct_chars == 2
    assert stats.mistakes == 1
    assert stats.accuracy == 67


def test_input_beyond_passage_counts_as_mistakes(clock):
    session = TypingSession(["cat"], clock=clock)
    session.start()
    stats = session.get_stats("catdog")
    assert session.get_mistakes() == [
        Mistake(position=3, expected=None, typed="d"),
        Mistake(position=4, expected=None, typed="o"),
        Mistake(position=5, expected=None, typed="g"),
    ]
    assert stats.total_chars == 6
    assert stats.correct_chars == 3
    assert stats.correct_chars + stats.mistakes == stats.total_chars


def test_mistakes_are_a_snapshot_of_the_latest_input(clock):
    session = TypingSession(["cat"], clock=clock)
    session.start()
    session.get_stats("cx")
    assert len(session.get_mistakes()) == 1
    session.get_stats("ca")
    assert session.get_mistakes() == []


def test_wpm_after_one_minute(clock):
    session = TypingSession(["word"] * 60, clock=clock)
    session.start()
    clock.advance(60000)
    stats = session.get_stats("x" * 250)
    assert stats.wpm == 50
    assert stats.time_elapsed == 60


def test_wpm_is_zero_without_elapsed_time(clock):
    session = TypingSession(["cat"], clock=clock)
    session.start()
    assert session.get_stats("cat").wpm == 0


def test_not_started_reports_no_time_or_speed(clock):
    session = TypingSession(["cat"], clock=clock)
    clock.advance(5000)
    stats = session.get_stats("ca")
    assert stats.wpm == 0
    assert stats.time_elapsed == 0
    assert stats.accuracy == 100


def test_elapsed_time_advances_while_running(clock):
    session = TypingSession(["cat"], clock=clock)
    session.start()
    clock.advance(3000)
    assert session.get_stats("c").time_elapsed == 3
    clock.advance(2000)
    assert session.get_stats("c").time_elapsed == 5


def test_elapsed_time_is_frozen_after_end(clock):
    session = TypingSession(["cat"], clock=clock)
    session.start()
    clock.advance(12000)
    session.end()
    clock.advance(30000)
    stats = session.get_stats("cat")
    assert session.state is ClockState.ENDED
    assert stats.time_elapsed == 12
    assert stats.wpm == 3


def test_end_before_start_is_ignored(clock):
    session = TypingSession(["cat"], clock=clock)
    session.end()
    assert session.state is ClockState.NOT_STARTED
    assert session.started_at is None
    assert session.ended_at is None


def test_start_again_restarts_the_timing_window(clock):
    session = TypingSession(["cat"], clock=clock)
    session.start()
    session.get_stats("cx")
    clock.advance(10000)
    session.end()
    clock.advance(5000)
    session.start()
    assert session.state is ClockState.RUNNING
    assert session.get_mistakes() == []
    assert session.started_at == clock.now
    assert session.get_stats("").time_elapsed == 0


def test_get_stats_is_idempotent(clock):
    session = TypingSession(["cat", "dog"], clock=clock)
    session.start()
    clock.advance(4200)
    first = session.get_stats("cat dig")
    second = session.get_stats("cat dig")
    assert first == second
    assert session.get_mistakes() == [Mistake(position=5, expected="o", typed="i")]


def test_empty_passage_does_not_divide_by_zero(clock):
    session = TypingSession([], clock=clock)
    assert session.get_target_text() == ""
    session.start()
    stats = session.get_stats("a")
    assert stats.accuracy == 0
    assert stats.mistakes == 1


def test_get_result(clock):
    session = TypingSession(["cat"], clock=clock)
    session.start()
    clock.advance(1000)
    session.end()
    result = session.get_result("cap")
    assert result.words == ("cat",)
    assert result.user_input == "cap"
    assert result.mistakes == (Mistake(position=2, expected="t", typed="p"),)
    assert result.stats.correct_chars == 2


def test_stats_are_immutable(clock):
    stats = TypingSession(["cat"], clock=clock).get_stats("c")
    with pytest.raises(AttributeError):
        stats.wpm = 10


def test_find_mistakes_is_pure():
    assert find_mistakes("", "cat") == []
    assert find_mistakes("ab", "") == [
        Mistake(position=0, expected=None, typed="a"),
        Mistake(position=1, expected=None, typed="b"),
    ]
