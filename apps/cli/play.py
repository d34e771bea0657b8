# apps/cli/play.py
"""
Play today's puzzle in the terminal.

This script:
  1) Loads the word lists and the saved state (config, stats, today's guesses).
  2) Redraws the board from the restored session.
  3) Reads guesses until the game is over (or EOF / Ctrl-C), printing tile
     feedback and letter hints after each one.
  4) Shows the answer, the stats and the share text at the end.

Usage:
    python -m apps.cli.play --answers data/answers.txt --allowed data/allowed.txt
    python -m apps.cli.play --date 2024-02-29 --emoji
"""

from __future__ import annotations

import argparse
import datetime as dt
import logging
import sys
from pathlib import Path
from typing import Dict, Iterable

from packages.datasets import FileWordSource
from packages.engine import LetterResult, LetterStatus
from packages.session.manager import SessionManager, SessionSnapshot
from packages.session.summary import tile_row
from packages.storage import JsonFilePersistence

DEFAULT_STATE_DIR = Path.home() / ".daily_word"
KEYBOARD_ROWS = ["QWERTYUIOP", "ASDFGHJKL", "ZXCVBNM"]


class Ansi:
    RESET = "\033[0m"
    WHITE = "\033[37m"
    BG_GREEN = "\033[42m"
    BG_YELLOW = "\033[43m"
    BG_GREY = "\033[100m"


_BACKGROUND = {
    LetterStatus.CORRECT: Ansi.BG_GREEN,
    LetterStatus.PRESENT: Ansi.BG_YELLOW,
    LetterStatus.ABSENT: Ansi.BG_GREY,
}


_PLAIN_KEY = {
    LetterStatus.CORRECT: lambda ch: ch + "*",
    LetterStatus.PRESENT: str.lower,
    LetterStatus.ABSENT: lambda ch: ".",
}


def _tile(letter: str, status: LetterStatus) -> str:
    return f"{_BACKGROUND[status]}{Ansi.WHITE} {letter} {Ansi.RESET}"


def render_row(results: Iterable[LetterResult], emoji: bool) -> str:
    results = list(results)
    if emoji:
        return tile_row(results) + "  " + "".join(r.letter for r in results)
    return " ".join(_tile(r.letter, r.status) for r in results)


def render_board(snap: SessionSnapshot, emoji: bool) -> str:
    lines = [render_row(results, emoji) for _, results in snap.rows]
    # Empty rows show the given first letter, like the real grid.
    blank = snap.first_letter + " ." * (snap.word_length - 1)
    lines += [blank] * (snap.attempt_limit - snap.attempts)
    return "\n".join(lines)


def render_keyboard(hints: Dict[str, LetterStatus], emoji: bool) -> str:
    rows = []
    for row in KEYBOARD_ROWS:
        keys = []
        for ch in row:
            status = hints.get(ch)
            if status is None:
                keys.append(ch)
            elif emoji:
                keys.append(_PLAIN_KEY[status](ch))
            else:
                keys.append(f"{_BACKGROUND[status]}{Ansi.WHITE}{ch}{Ansi.RESET}")
        rows.append(" ".join(keys))
    return "\n".join(rows)


def _parse_date(s: str) -> dt.date:
    try:
        return dt.date.fromisoformat(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {s}") from e


def main(argv=None):
    ap = argparse.ArgumentParser(description="Daily word puzzle, in your terminal")
    ap.add_argument("--answers", default="data/answers.txt",
                    help="secret word schedule (one word per line)")
    ap.add_argument("--allowed", default="data/allowed.txt",
                    help="dictionary of accepted guesses")
    ap.add_argument("--state-dir", default=str(DEFAULT_STATE_DIR),
                    help="where session/stats/config JSON files live")
    ap.add_argument("--date", type=_parse_date, default=None,
                    help="play another day's puzzle (default: today)")
    ap.add_argument("--emoji", action="store_true", help="emoji tiles instead of ANSI colors")
    ap.add_argument("--log-level", default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s")

    allowed = args.allowed if Path(args.allowed).exists() else None
    source = FileWordSource.from_files(args.answers, allowed)
    manager = SessionManager(source, JsonFilePersistence(args.state_dir),
                             today=args.date or dt.date.today())
    emoji = args.emoji or manager.config.emoji_tiles

    snap = manager.snapshot()
    print(f"Puzzle of {snap.date}: {snap.word_length} letters, starts with {snap.first_letter}")
    print(render_board(snap, emoji))

    while not manager.snapshot().terminal:
        try:
            raw = input(f"guess {manager.snapshot().attempts + 1}/{snap.attempt_limit} > ")
        except (EOFError, KeyboardInterrupt):
            print("\nProgress saved, come back later.")
            return 0

        outcome = manager.submit(raw)
        if not outcome.accepted:
            print(f"  {outcome.message}")
            continue
        if not outcome.persisted:
            print("  (warning: progress could not be saved)", file=sys.stderr)

        print(render_board(manager.snapshot(), emoji))
        if manager.config.show_keyboard and not outcome.terminal:
            print()
            print(render_keyboard(manager.letter_hints(), emoji))

    snap = manager.snapshot()
    print()
    print("Well done!" if snap.won else f"Out of guesses. The word was {snap.answer}.")
    stats = manager.stats
    print(f"Played {stats.games_played} | won {stats.games_won} "
          f"| win rate {100.0 * stats.win_rate:.0f}%")
    print()
    print(manager.share_text())
    return 0


if __name__ == "__main__":
    sys.exit(main())
