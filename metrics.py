from __future__ import annotations

import math

CHARS_PER_WORD = 5


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_correct_chars(total_typed: int, mistakes: int) -> int:
    return max(0, total_typed - mistakes)


def compute_accuracy(correct_chars: int, total_typed: int) -> int:
    """Whole-number percentage; an empty input counts as 100% accurate."""
    if total_typed == 0:
        return 100
    return round_half_up(correct_chars / total_typed * 100.0)


def compute_wpm(total_typed: int, elapsed_ms: float) -> int:
    # five characters count as one word regardless of spacing
    minutes = elapsed_ms / 60000.0
    if minutes <= 0:
        return 0
    return round_half_up((total_typed / CHARS_PER_WORD) / minutes)


def compute_elapsed_seconds(elapsed_ms: float) -> int:
    return round_half_up(max(elapsed_ms, 0.0) / 1000.0)
