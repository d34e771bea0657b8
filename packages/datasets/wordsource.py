"""
Word source: secret word of the day, normalization, dictionary lookups.

The game only relies on three promises:
  - select_secret_word(date) is deterministic per date (same date -> same
    word, across restarts)
  - normalize(raw) maps user input and list entries to one canonical form
  - is_valid_dictionary_word(canonical) answers membership for that form

FileWordSource keeps two lists, like the datasets they come from:
  answers : the pool secret words are drawn from, in schedule order
  allowed : every word accepted as a guess (answers are always accepted too)
"""

from __future__ import annotations

import datetime as dt
import unicodedata
from pathlib import Path
from typing import Iterable, List, Protocol

from .io import load_words

# Day 0 of the schedule; puzzle numbers count from here.
DEFAULT_EPOCH = dt.date(2022, 1, 8)

# Separators dropped from list entries and guesses ("porte-clé" -> "PORTECLE").
_SEPARATORS = {"-", " ", "'", "’"}


class WordSource(Protocol):
    def select_secret_word(self, date: dt.date) -> str: ...

    def normalize(self, raw: str) -> str: ...

    def is_valid_dictionary_word(self, canonical: str) -> bool: ...


def normalize_word(raw: str) -> str:
    """
    Canonical form: trimmed, diacritics removed, separators removed, uppercase.

    Examples:
      normalize_word(" élève ")  -> "ELEVE"
      normalize_word("porte-clé") -> "PORTECLE"
    """
    decomposed = unicodedata.normalize("NFD", raw.strip())
    kept = [
        ch for ch in decomposed
        if not unicodedata.combining(ch) and ch not in _SEPARATORS
    ]
    return "".join(kept).upper()


class FileWordSource:
    def __init__(self, answers: Iterable[str], allowed: Iterable[str] = (),
                 *, epoch: dt.date = DEFAULT_EPOCH):
        self.answers: List[str] = [w for w in (normalize_word(a) for a in answers) if w]
        if not self.answers:
            raise ValueError("answers list must contain at least one word")
        self.epoch = epoch
        self._dictionary = {normalize_word(w) for w in allowed} | set(self.answers)
        self._dictionary.discard("")

    @classmethod
    def from_files(cls, answers_path: Path | str, allowed_path: Path | str | None = None,
                   *, epoch: dt.date = DEFAULT_EPOCH) -> "FileWordSource":
        allowed = load_words(allowed_path) if allowed_path else []
        return cls(load_words(answers_path), allowed, epoch=epoch)

    def day_index(self, date: dt.date) -> int:
        """Days since the epoch (negative before it)."""
        return (date - self.epoch).days

    def select_secret_word(self, date: dt.date) -> str:
        return self.answers[self.day_index(date) % len(self.answers)]

    def normalize(self, raw: str) -> str:
        return normalize_word(raw)

    def is_valid_dictionary_word(self, canonical: str) -> bool:
        return canonical in self._dictionary

    def __len__(self) -> int:
        return len(self._dictionary)
