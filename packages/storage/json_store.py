"""
File-backed persistence gateway.

Layout inside `directory`:
  session.json : {"date": "YYYY-MM-DD", "guesses": [...], "stats_recorded": bool}
  stats.json   : {"games_played": int, "games_won": int, "last_played_date": "YYYY-MM-DD" | null,
                  "recorded_dates": ["YYYY-MM-DD", ...]}
  config.json  : {"attempt_limit": int, "emoji_tiles": bool, "show_keyboard": bool}

A missing file loads as "absent". A file that cannot be read or parsed is
logged and also loads as absent; the next save overwrites it.
"""

from __future__ import annotations

import datetime as dt
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from packages.session.stats import Stats

from .config import Configuration
from .gateway import SessionRecord

log = logging.getLogger(__name__)

SESSION_FILE = "session.json"
STATS_FILE = "stats.json"
CONFIG_FILE = "config.json"


def write_json(data: Dict, path: Path | str) -> str:
    """
    Write `data` as indented JSON, creating parent directories.
    Returns the string path written.
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_suffix(p.suffix + ".tmp")
    with tmp.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    tmp.replace(p)
    return str(p)


def read_json(path: Path | str) -> Optional[Dict]:
    """Load a JSON object, or None if the file is missing or unreadable."""
    p = Path(path)
    if not p.exists():
        return None
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        log.warning("ignoring unreadable state file %s: %s", p, e)
        return None
    if not isinstance(data, dict):
        log.warning("ignoring state file %s: expected a JSON object", p)
        return None
    return data


class JsonFilePersistence:
    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def _path(self, name: str) -> Path:
        return self.directory / name

    def _load(self, name: str, parse):
        data = read_json(self._path(name))
        if data is None:
            return None
        try:
            return parse(data)
        except (KeyError, TypeError, ValueError) as e:
            log.warning("ignoring malformed %s: %s", self._path(name), e)
            return None

    def load_in_progress_session(self) -> Optional[SessionRecord]:
        return self._load(SESSION_FILE, SessionRecord.from_dict)

    def save_in_progress_session(self, date: dt.date, guesses: List[str], *,
                                 stats_recorded: bool = False) -> None:
        write_json(SessionRecord(date, list(guesses), stats_recorded).to_dict(),
                   self._path(SESSION_FILE))

    def load_stats(self) -> Optional[Stats]:
        return self._load(STATS_FILE, Stats.from_dict)

    def save_stats(self, stats: Stats) -> None:
        write_json(stats.to_dict(), self._path(STATS_FILE))

    def load_configuration(self) -> Optional[Configuration]:
        return self._load(CONFIG_FILE, Configuration.from_dict)

    def save_configuration(self, config: Configuration) -> None:
        write_json(config.to_dict(), self._path(CONFIG_FILE))
