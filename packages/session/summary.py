"""
Shareable end-of-game summary.

    Daily Word #652 3/6

    🟩⬛🟨⬛⬛
    🟩🟩⬛🟨⬛
    🟩🟩🟩🟩🟩

Letters are never shown, only the tiles. A lost game shows "-" as the score.
"""

from __future__ import annotations

import datetime as dt
from typing import Iterable, Optional

from packages.engine import LetterResult, LetterStatus

TILES = {
    LetterStatus.CORRECT: "🟩",
    LetterStatus.PRESENT: "🟨",
    LetterStatus.ABSENT: "⬛",
}


def puzzle_number(date: dt.date, epoch: dt.date) -> int:
    """1 on the epoch day, then +1 per calendar day."""
    return (date - epoch).days + 1


def tile_row(results: Iterable[LetterResult]) -> str:
    return "".join(TILES[r.status] for r in results)


def share_text(snapshot, title: str, *, number: Optional[int] = None) -> str:
    """
    Render the summary for a finished SessionSnapshot.

    Raises ValueError while the session is still in progress.
    """
    if not snapshot.terminal:
        raise ValueError("share text is only available once the game is over")
    score = str(snapshot.attempts) if snapshot.won else "-"
    header = f"{title} #{number}" if number is not None else title
    lines = [f"{header} {score}/{snapshot.attempt_limit}", ""]
    lines += [tile_row(results) for _, results in snapshot.rows]
    return "\n".join(lines)
