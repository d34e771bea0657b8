"""
In-progress game for one calendar date.

SessionState is a plain container with derived queries: it does not score,
validate or persist anything. The only rules it enforces itself are the two
guards on `record_guess` (closed session, full history).
"""

from __future__ import annotations

import datetime as dt
from typing import Dict, List, Sequence, Tuple

from packages.engine import LetterResult, LetterStatus, SecretWord, is_all_correct

from .errors import CapacityExceeded, SessionClosed

DEFAULT_ATTEMPT_LIMIT = 6

# Keyboard precedence: a letter keeps the best status it has ever shown.
_STATUS_RANK = {LetterStatus.ABSENT: 0, LetterStatus.PRESENT: 1, LetterStatus.CORRECT: 2}

Row = Tuple[str, List[LetterResult]]


class SessionState:
    def __init__(self, date: dt.date, secret: SecretWord,
                 attempt_limit: int = DEFAULT_ATTEMPT_LIMIT, *, stats_recorded: bool = False):
        if attempt_limit < 1:
            raise ValueError(f"attempt_limit must be >= 1; got {attempt_limit}")
        self.date = date
        self.secret = secret
        self.attempt_limit = int(attempt_limit)
        # Set once this session's terminal transition has been counted in Stats.
        self.stats_recorded = stats_recorded
        self._guesses: List[str] = []
        self._results: List[List[LetterResult]] = []

    # ---- mutation ----

    def record_guess(self, guess: str, results: Sequence[LetterResult]) -> None:
        """
        Append one scored guess.

        Raises:
          SessionClosed    : the session is already won or exhausted
          CapacityExceeded : the history already has `attempt_limit` rows
        """
        if self.is_terminal():
            raise SessionClosed(f"session for {self.date} is closed")
        if len(self._guesses) >= self.attempt_limit:
            raise CapacityExceeded(
                f"session for {self.date} already has {self.attempt_limit} guesses")
        self._guesses.append(guess)
        self._results.append(list(results))

    # ---- queries ----

    @property
    def guesses(self) -> List[str]:
        return list(self._guesses)

    @property
    def attempts(self) -> int:
        return len(self._guesses)

    @property
    def remaining(self) -> int:
        return self.attempt_limit - len(self._guesses)

    def rows(self) -> List[Row]:
        return [(g, list(r)) for g, r in zip(self._guesses, self._results)]

    def is_won(self) -> bool:
        return bool(self._results) and is_all_correct(self._results[-1])

    def is_exhausted(self) -> bool:
        return len(self._guesses) == self.attempt_limit and not self.is_won()

    def is_terminal(self) -> bool:
        return self.is_won() or self.is_exhausted()

    def letter_hints(self) -> Dict[str, LetterStatus]:
        """Best status seen so far for every guessed letter (for keyboard display)."""
        best: Dict[str, LetterStatus] = {}
        for row in self._results:
            for r in row:
                seen = best.get(r.letter)
                if seen is None or _STATUS_RANK[r.status] > _STATUS_RANK[seen]:
                    best[r.letter] = r.status
        return best

    def __repr__(self) -> str:
        return (f"SessionState(date={self.date}, attempts={self.attempts}/{self.attempt_limit}, "
                f"won={self.is_won()}, terminal={self.is_terminal()})")
