from __future__ import annotations

import argparse
import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Sequence

logger = logging.getLogger(__name__)

CONFIG_PATH = Path.home() / ".trie-typing-test" / "config.json"
LOG_PATH = CONFIG_PATH.parent / "typing-test.log"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

MIN_WORD_COUNT = 10
MAX_WORD_COUNT = 100
WORD_COUNT_STEP = 10
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def clamp_word_count(value: int) -> int:
    value = max(MIN_WORD_COUNT, min(MAX_WORD_COUNT, int(value)))
    return value - value % WORD_COUNT_STEP


@dataclass
class Settings:
    word_count: int = 50
    poll_interval: float = 0.1
    words_file: str | None = None
    words_url: str | None = None
    seed: int | None = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        self.word_count = clamp_word_count(self.word_count)
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {self.poll_interval}")
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            )


_SETTINGS_FIELDS = {f.name for f in fields(Settings)}


def load_settings(path: Path = CONFIG_PATH) -> Settings:
    if not path.exists():
        return Settings()
    try:
        data: dict[str, Any] = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return Settings()
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a JSON object", path)
        return Settings()
    # unknown keys are dropped so older configs keep loading
    known = {k: v for k, v in data.items() if k in _SETTINGS_FIELDS}
    try:
        return Settings(**known)
    except (TypeError, ValueError) as exc:
        logger.warning("Ignoring invalid config %s: %s", path, exc)
        return Settings()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Terminal typing speed test with random words.",
        epilog=(
            "Examples:\n"
            "  typing-test --words 30\n"
            "  typing-test --words-file path/to/words.txt --seed 7\n"
            "\n"
            "Results:\n"
            "  WPM: (typed characters / 5) per minute\n"
            "  Accuracy: share of typed characters that match the passage\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", type=Path, default=CONFIG_PATH, help="JSON config file.")
    parser.add_argument("--words", type=int, default=None, help="Words per session (10-100).")
    parser.add_argument("--words-file", type=str, default=None, help="Word list to sample from.")
    parser.add_argument("--words-url", type=str, default=None, help="URL of a plain-text word list.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible passages.")
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Log level for typing-test.log.",
    )
    return parser


def parse_settings(argv: Sequence[str] | None = None) -> Settings:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.words is not None and args.words <= 0:
        parser.error("--words must be a positive integer")
    if args.words_file and args.words_url:
        parser.error("Use only one of --words-file or --words-url")

    settings = load_settings(args.config)
    overrides = {
        "word_count": args.words,
        "words_file": args.words_file,
        "words_url": args.words_url,
        "seed": args.seed,
        "log_level": args.log_level,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if "words_file" in overrides:
        overrides["words_url"] = None
    elif "words_url" in overrides:
        overrides["words_file"] = None
    return replace(settings, **overrides)
