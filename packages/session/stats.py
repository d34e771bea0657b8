"""
Cumulative play statistics.

Stats are process-wide but owned explicitly by the SessionManager; they are
mutated exactly once per terminal session through StatsAggregator.update.
Every counted date is kept in `recorded_dates`, so a puzzle replayed after
another day was opened is never counted a second time.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Set

log = logging.getLogger(__name__)


@dataclass
class Stats:
    games_played: int = 0
    games_won: int = 0
    last_played_date: Optional[dt.date] = None
    recorded_dates: Set[dt.date] = field(default_factory=set)

    @property
    def win_rate(self) -> float:
        if self.games_played == 0:
            return 0.0
        return self.games_won / self.games_played

    def has_recorded(self, date: dt.date) -> bool:
        return date in self.recorded_dates or self.last_played_date == date

    def to_dict(self) -> Dict:
        return {
            "games_played": self.games_played,
            "games_won": self.games_won,
            "last_played_date": self.last_played_date.isoformat() if self.last_played_date else None,
            "recorded_dates": sorted(d.isoformat() for d in self.recorded_dates),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Stats":
        last = data.get("last_played_date")
        recorded = data.get("recorded_dates", [])
        if not isinstance(recorded, list):
            raise TypeError(f"recorded_dates must be a list; got {type(recorded).__name__}")
        return cls(
            games_played=int(data.get("games_played", 0)),
            games_won=int(data.get("games_won", 0)),
            last_played_date=dt.date.fromisoformat(last) if last else None,
            recorded_dates={dt.date.fromisoformat(d) for d in recorded},
        )


class StatsAggregator:
    """
    Applies one finished session to a Stats record.

    Idempotency is the caller's job: update() counts every call.
    """

    def __init__(self, stats: Stats):
        self.stats = stats

    def update(self, won: bool, date: dt.date) -> Stats:
        self.stats.games_played += 1
        if won:
            self.stats.games_won += 1
        self.stats.last_played_date = date
        self.stats.recorded_dates.add(date)
        log.info("stats updated for %s (won=%s): played=%d won=%d",
                 date, won, self.stats.games_played, self.stats.games_won)
        return self.stats
