import datetime as dt

import pytest

from packages.datasets import FileWordSource
from packages.engine import LetterStatus, RejectReason, pattern_of
from packages.session import Stats
from packages.session.manager import SessionManager
from packages.storage import Configuration, InMemoryPersistence, SessionRecord

TODAY = dt.date(2024, 3, 1)
ALLOWED = ["CRATE", "CHAIR", "CLOTH", "CIDER", "CABLE", "CANDY", "CRANE", "TRACE"]


class CountingPersistence(InMemoryPersistence):
    """InMemoryPersistence that also logs every call in order."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.calls = []

    def save_in_progress_session(self, date, guesses, *, stats_recorded=False):
        self.calls.append(("session", list(guesses), stats_recorded))
        super().save_in_progress_session(date, guesses, stats_recorded=stats_recorded)

    def save_stats(self, stats):
        self.calls.append(("stats", stats.games_played, stats.games_won))
        super().save_stats(stats)


class BrokenPersistence(InMemoryPersistence):
    def save_in_progress_session(self, date, guesses, *, stats_recorded=False):
        raise OSError("disk full")

    def save_stats(self, stats):
        raise OSError("disk full")


@pytest.fixture
def source():
    return FileWordSource(["crane"], ALLOWED)


def _manager(source, persistence=None, today=TODAY):
    return SessionManager(source, persistence or CountingPersistence(), today=today)


def test_submit_returns_results_and_saves_in_progress(source):
    store = CountingPersistence()
    m = _manager(source, store)
    out = m.submit("chair")
    assert out.accepted and not out.terminal and out.persisted
    assert out.candidate == "CHAIR"
    assert out.pattern == "G-G-Y"
    assert store.calls == [("session", ["CHAIR"], False)]
    assert m.stats.games_played == 0


def test_input_is_normalized_before_validation(source):
    m = _manager(source)
    out = m.submit("  Crâté ")
    assert out.accepted and out.candidate == "CRATE"


@pytest.mark.parametrize("raw,reason", [
    ("CRANES", RejectReason.WRONG_LENGTH),
    ("", RejectReason.WRONG_LENGTH),
    ("TRACE", RejectReason.WRONG_FIRST_LETTER),
    ("CXXXX", RejectReason.NOT_IN_DICTIONARY),
])
def test_rejections_have_no_side_effects(source, raw, reason):
    store = CountingPersistence()
    m = _manager(source, store)
    m.submit("CHAIR")
    store.calls.clear()

    out = m.submit(raw)
    assert out.rejection is reason and not out.accepted
    assert out.results == () and out.message
    assert m.snapshot().attempts == 1
    assert store.calls == []
    assert m.stats == Stats()


def test_win_updates_stats_once_and_persists_both(source):
    store = CountingPersistence()
    m = _manager(source, store)
    m.submit("CLOTH")
    m.submit("TRACE")   # rejected, first letter
    m.submit("CZZZZ")   # rejected, dictionary
    out = m.submit("crane")
    assert out.terminal and out.won and out.persisted
    assert [r.status for r in out.results] == [LetterStatus.CORRECT] * 5
    assert m.stats.games_played == 1 and m.stats.games_won == 1
    assert m.stats.last_played_date == TODAY
    assert store.stats_writes == 1
    assert store.calls[-2:] == [("stats", 1, 1), ("session", ["CLOTH", "CRANE"], True)]


def test_submit_after_win_is_session_closed(source):
    store = CountingPersistence()
    m = _manager(source, store)
    m.submit("CRANE")
    writes = list(store.calls)
    out = m.submit("CRATE")
    assert out.rejection is RejectReason.SESSION_CLOSED
    assert store.calls == writes
    assert m.stats.games_played == 1


def test_loss_after_attempt_limit(source):
    store = CountingPersistence(config=Configuration(attempt_limit=3))
    m = _manager(source, store)
    outs = [m.submit(g) for g in ("CRATE", "CHAIR", "CLOTH")]
    assert [o.terminal for o in outs] == [False, False, True]
    assert not outs[-1].won
    assert m.session.is_exhausted()
    assert m.stats.games_played == 1 and m.stats.games_won == 0
    assert m.submit("CRANE").rejection is RejectReason.SESSION_CLOSED
    assert store.stats_writes == 1


def test_default_attempt_limit_is_six(source):
    m = _manager(source)
    assert m.snapshot().attempt_limit == 6
    for g in ("CRATE", "CHAIR", "CLOTH", "CIDER", "CABLE"):
        assert not m.submit(g).terminal
    assert m.submit("CANDY").terminal


def test_restore_replays_guesses(source):
    live = _manager(source)
    live_rows = [pattern_of(live.submit(g).results) for g in ("CHAIR", "CRATE")]

    store = CountingPersistence(session=SessionRecord(TODAY, ["CHAIR", "CRATE"]))
    m = _manager(source, store)
    snap = m.snapshot()
    assert [g for g, _ in snap.rows] == ["CHAIR", "CRATE"]
    assert [pattern_of(r) for _, r in snap.rows] == live_rows
    assert not snap.terminal and snap.answer is None
    assert store.calls == []


def test_restore_does_not_recheck_the_dictionary():
    src = FileWordSource(["crane"], ["CRANE"])
    store = CountingPersistence(session=SessionRecord(TODAY, ["CXXXX"]))
    m = _manager(src, store)
    assert m.snapshot().attempts == 1


def test_restore_drops_rows_that_do_not_fit(source):
    store = CountingPersistence(session=SessionRecord(TODAY, ["CHAIRS", "CRANE", "CRATE"]))
    m = _manager(source, store)
    assert [g for g, _ in m.snapshot().rows] == ["CRANE"]


def test_session_from_another_day_is_superseded(source):
    yesterday = TODAY - dt.timedelta(days=1)
    store = CountingPersistence(session=SessionRecord(yesterday, ["CRATE", "CHAIR"]))
    m = _manager(source, store)
    assert m.snapshot().date == TODAY and m.snapshot().attempts == 0


def test_restored_recorded_session_is_not_counted_again(source):
    stats = Stats(games_played=4, games_won=3, last_played_date=TODAY - dt.timedelta(days=1))
    store = CountingPersistence(session=SessionRecord(TODAY, ["CRANE"], stats_recorded=True),
                                stats=stats)
    m = _manager(source, store)
    assert m.snapshot().won
    assert m.stats.games_played == 4
    assert store.calls == []


def test_restored_finished_session_never_counted_is_counted_once(source):
    store = CountingPersistence(session=SessionRecord(TODAY, ["CHAIR", "CRANE"]))
    m = _manager(source, store)
    assert m.stats.games_played == 1 and m.stats.games_won == 1
    assert store.calls == [("stats", 1, 1), ("session", ["CHAIR", "CRANE"], True)]

    again = _manager(source, store)
    assert again.stats.games_played == 1


def test_stats_dated_today_count_as_recorded(source):
    # stats were saved, but the crash lost the last session write
    stats = Stats(games_played=1, games_won=1, last_played_date=TODAY)
    store = CountingPersistence(session=SessionRecord(TODAY, ["CHAIR"]), stats=stats)
    m = _manager(source, store)
    out = m.submit("CRANE")
    assert out.won
    assert m.stats.games_played == 1


def test_returning_to_a_finished_day_does_not_count_it_again():
    source = FileWordSource(["crane", "slate"], ALLOWED, epoch=TODAY)
    yesterday = TODAY - dt.timedelta(days=1)
    store = CountingPersistence()
    m = _manager(source, store)
    assert m.submit("CRANE").won

    m.start_day(yesterday)
    assert m.submit("SLATE").won
    assert m.stats.games_played == 2

    # the session slot now holds yesterday, so today starts from scratch
    again = m.start_day(TODAY)
    assert again.attempts == 0 and again.stats_recorded
    assert m.submit("CRANE").won
    assert m.stats.games_played == 2 and m.stats.games_won == 2

    fresh = _manager(source, store)
    assert fresh.session.is_won() and fresh.session.stats_recorded
    assert fresh.submit("CRANE").rejection is RejectReason.SESSION_CLOSED
    assert fresh.stats.games_played == 2

    # recorded dates come back from the store too
    back = _manager(source, store, today=yesterday)
    assert back.session.attempts == 0 and back.session.stats_recorded
    assert back.submit("SLATE").won
    assert back.stats.games_played == 2


def test_persistence_failure_keeps_memory_state(source):
    m = _manager(source, BrokenPersistence())
    out = m.submit("CHAIR")
    assert out.accepted and not out.persisted
    out = m.submit("CRANE")
    assert out.won and not out.persisted
    assert m.snapshot().attempts == 2
    assert m.stats.games_played == 1


def test_snapshot_reveals_answer_only_when_over(source):
    m = _manager(source)
    m.submit("CHAIR")
    snap = m.snapshot()
    assert snap.answer is None
    assert snap.word_length == 5 and snap.first_letter == "C"
    m.submit("CRANE")
    assert m.snapshot().answer == "CRANE"


def test_start_day_moves_to_a_new_puzzle(source):
    store = CountingPersistence()
    m = _manager(source, store)
    m.submit("CRANE")
    same = m.start_day(TODAY)
    assert same.attempts == 1
    tomorrow = m.start_day(TODAY + dt.timedelta(days=1))
    assert tomorrow.attempts == 0 and not tomorrow.stats_recorded
    assert m.submit("CRATE").accepted


def test_stats_property_is_a_copy(source):
    m = _manager(source)
    m.stats.games_played = 99
    assert m.stats.games_played == 0


def test_letter_hints_and_share_text(source):
    m = _manager(source)
    m.submit("CHAIR")
    assert m.letter_hints()["R"] is LetterStatus.PRESENT
    with pytest.raises(ValueError):
        m.share_text()
    m.submit("CRANE")
    text = m.share_text("Daily Word")
    number = (TODAY - source.epoch).days + 1
    assert text.splitlines()[0] == f"Daily Word #{number} 2/6"
    assert text.splitlines()[-1] == "🟩🟩🟩🟩🟩"


def test_secret_is_scored_in_normalized_form():
    src = FileWordSource(["élève"], ["ELITE"])
    m = _manager(src)
    assert m.snapshot().word_length == 5
    out = m.submit("eleve")
    assert out.won
    assert m.submit("ELITE").rejection is RejectReason.SESSION_CLOSED
