"""
Session manager: the one entry point a host talks to.

submit(raw) runs the whole turn:
  normalize -> validate (length, first letter, dictionary, closed)
            -> evaluate -> record -> [terminal: stats once] -> persist

Rejected candidates have NO side effects: they are not evaluated, recorded,
counted or persisted. Errors are returned as a RejectReason on the outcome,
never raised to the host.

Start-up rebuilds today's session from the persisted guess list by replaying
every guess through the evaluator; stored results are never trusted.

Stats are counted once per session. The persisted session carries a
`stats_recorded` marker, and a session also counts as recorded when its date
is already in stats.recorded_dates. A crash between the stats write and the
session write, or replaying a finished day after another day overwrote the
session slot, cannot count the same game twice.
"""

from __future__ import annotations

import dataclasses
import datetime as dt
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from packages.datasets.wordsource import WordSource
from packages.engine import (LetterResult, LetterStatus, RejectReason, SecretWord, evaluate,
                             pattern_of, validate_guess)
from packages.storage import DEFAULT_CONFIGURATION, Configuration, PersistenceGateway, SessionRecord

from .errors import SessionError
from .state import SessionState
from .stats import Stats, StatsAggregator
from .summary import puzzle_number, share_text

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmitOutcome:
    candidate: str
    results: Tuple[LetterResult, ...] = ()
    terminal: bool = False
    won: bool = False
    rejection: Optional[RejectReason] = None
    persisted: bool = False

    @property
    def accepted(self) -> bool:
        return self.rejection is None

    @property
    def message(self) -> str:
        return self.rejection.message if self.rejection else ""

    @property
    def pattern(self) -> str:
        return pattern_of(self.results)


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything a host needs to redraw the game, e.g. after a restart."""
    date: dt.date
    attempt_limit: int
    word_length: int
    first_letter: str
    rows: Tuple[Tuple[str, Tuple[LetterResult, ...]], ...]
    terminal: bool
    won: bool
    answer: Optional[str]  # revealed only once the session is over

    @property
    def attempts(self) -> int:
        return len(self.rows)


class SessionManager:
    def __init__(self, word_source: WordSource, persistence: PersistenceGateway,
                 *, today: dt.date):
        self.word_source = word_source
        self.persistence = persistence
        self.config: Configuration = persistence.load_configuration() or DEFAULT_CONFIGURATION
        self._stats: Stats = persistence.load_stats() or Stats()
        self._aggregator = StatsAggregator(self._stats)
        self.session: Optional[SessionState] = None
        self.start_day(today)

    # ---- lifecycle ----

    def start_day(self, date: dt.date) -> SessionState:
        """
        Make `date` the current puzzle. A persisted session for the same date
        is replayed; one for another date is superseded.
        """
        if self.session is not None and self.session.date == date:
            return self.session

        raw = self.word_source.select_secret_word(date)
        secret = SecretWord.of(self.word_source.normalize(raw))
        self.session = SessionState(
            date, secret, self.config.attempt_limit,
            stats_recorded=self._stats.has_recorded(date),
        )

        record = self.persistence.load_in_progress_session()
        if record is None:
            log.info("new session for %s (%d letters)", date, secret.length)
        elif record.date != date:
            log.info("superseding session from %s with a new one for %s", record.date, date)
        else:
            self._rehydrate(record)
        return self.session

    def _rehydrate(self, record: SessionRecord) -> None:
        session = self.session
        session.stats_recorded = session.stats_recorded or record.stats_recorded
        secret = session.secret

        for raw in record.guesses:
            guess = self.word_source.normalize(raw)
            if session.is_terminal():
                log.warning("dropping stored guess %r: session for %s already finished",
                            guess, session.date)
                continue
            if len(guess) != secret.length or session.remaining == 0:
                log.warning("dropping stored guess %r: does not fit session for %s",
                            guess, session.date)
                continue
            session.record_guess(guess, evaluate(secret, guess))

        log.info("restored session for %s with %d/%d guesses",
                 session.date, session.attempts, session.attempt_limit)

        if session.is_terminal() and not session.stats_recorded:
            log.warning("restored finished session for %s was never counted; counting it now",
                        session.date)
            self._finish()

    # ---- turns ----

    def submit(self, raw_candidate: str) -> SubmitOutcome:
        session = self.session
        candidate = self.word_source.normalize(raw_candidate)

        reason = validate_guess(candidate, session.secret,
                                self.word_source.is_valid_dictionary_word)
        if reason is None and session.is_terminal():
            reason = RejectReason.SESSION_CLOSED
        if reason is not None:
            log.debug("rejected %r: %s", candidate, reason.value)
            return SubmitOutcome(candidate, rejection=reason)

        results = evaluate(session.secret, candidate)
        try:
            session.record_guess(candidate, results)
        except SessionError as e:
            log.error("refusing guess %r: %s", candidate, e)
            return SubmitOutcome(candidate, rejection=RejectReason.SESSION_CLOSED)

        log.info("guess %d/%d for %s: %s %s", session.attempts, session.attempt_limit,
                 session.date, candidate, pattern_of(results))

        if session.is_terminal():
            persisted = self._finish()
        else:
            persisted = self._persist(with_stats=False)

        return SubmitOutcome(
            candidate,
            results=tuple(results),
            terminal=session.is_terminal(),
            won=session.is_won(),
            persisted=persisted,
        )

    def _finish(self) -> bool:
        session = self.session
        won = session.is_won()
        log.info("session for %s over: %s in %d", session.date,
                 "won" if won else "lost", session.attempts)
        if not session.stats_recorded:
            self._aggregator.update(won, session.date)
            session.stats_recorded = True
        return self._persist(with_stats=True)

    def _persist(self, *, with_stats: bool) -> bool:
        """
        Save the session (and stats). A failing gateway is logged; the
        in-memory session stays authoritative for the rest of the process.
        """
        session = self.session
        try:
            if with_stats:
                self.persistence.save_stats(self._stats)
            self.persistence.save_in_progress_session(
                session.date, session.guesses, stats_recorded=session.stats_recorded)
        except Exception:
            log.exception("could not persist session for %s", session.date)
            return False
        return True

    # ---- host queries ----

    @property
    def stats(self) -> Stats:
        return dataclasses.replace(self._stats, recorded_dates=set(self._stats.recorded_dates))

    def snapshot(self) -> SessionSnapshot:
        session = self.session
        terminal = session.is_terminal()
        return SessionSnapshot(
            date=session.date,
            attempt_limit=session.attempt_limit,
            word_length=session.secret.length,
            first_letter=session.secret.first_letter,
            rows=tuple((g, tuple(r)) for g, r in session.rows()),
            terminal=terminal,
            won=session.is_won(),
            answer=session.secret.letters if terminal else None,
        )

    def letter_hints(self) -> Dict[str, LetterStatus]:
        return self.session.letter_hints()

    def share_text(self, title: str = "Daily Word") -> str:
        epoch = getattr(self.word_source, "epoch", None)
        number = puzzle_number(self.session.date, epoch) if epoch else None
        return share_text(self.snapshot(), title, number=number)
