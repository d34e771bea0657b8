"""
Persistence contract used by the session manager.

Session and stats records are opaque to the engine: the only promise a
gateway makes is round-trip fidelity through each load/save pair. A session
record stores the GUESSES only; results are always rebuilt by replaying them
through the evaluator.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol

from packages.session.stats import Stats

from .config import Configuration


@dataclass
class SessionRecord:
    date: dt.date
    guesses: List[str] = field(default_factory=list)
    stats_recorded: bool = False

    def to_dict(self) -> Dict:
        return {
            "date": self.date.isoformat(),
            "guesses": list(self.guesses),
            "stats_recorded": self.stats_recorded,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "SessionRecord":
        guesses = data.get("guesses", [])
        if not isinstance(guesses, list):
            raise TypeError(f"guesses must be a list; got {type(guesses).__name__}")
        return cls(
            date=dt.date.fromisoformat(data["date"]),
            guesses=[str(g) for g in guesses],
            stats_recorded=bool(data.get("stats_recorded", False)),
        )


class PersistenceGateway(Protocol):
    def load_in_progress_session(self) -> Optional[SessionRecord]: ...

    def save_in_progress_session(self, date: dt.date, guesses: List[str], *,
                                 stats_recorded: bool = False) -> None: ...

    def load_stats(self) -> Optional[Stats]: ...

    def save_stats(self, stats: Stats) -> None: ...

    def load_configuration(self) -> Optional[Configuration]: ...


class InMemoryPersistence:
    """
    Dict-backed gateway. Records are copied on the way in and out, so callers
    never share mutable state with the store.
    """

    def __init__(self, *, session: Optional[SessionRecord] = None,
                 stats: Optional[Stats] = None, config: Optional[Configuration] = None):
        self._session = session.to_dict() if session else None
        self._stats = stats.to_dict() if stats else None
        self._config = config
        self.session_writes = 0
        self.stats_writes = 0

    def load_in_progress_session(self) -> Optional[SessionRecord]:
        return SessionRecord.from_dict(self._session) if self._session else None

    def save_in_progress_session(self, date: dt.date, guesses: List[str], *,
                                 stats_recorded: bool = False) -> None:
        self._session = SessionRecord(date, list(guesses), stats_recorded).to_dict()
        self.session_writes += 1

    def load_stats(self) -> Optional[Stats]:
        return Stats.from_dict(self._stats) if self._stats else None

    def save_stats(self, stats: Stats) -> None:
        self._stats = stats.to_dict()
        self.stats_writes += 1

    def load_configuration(self) -> Optional[Configuration]:
        return self._config
