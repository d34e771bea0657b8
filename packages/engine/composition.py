"""
Letter composition of the secret word.

The composition is the multiset (letter -> count) of the secret word. It is
computed once per session and then only ever COPIED by the evaluator, which
consumes the copy while it hands out green/yellow claims.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Mapping


def decompose(word: str) -> Counter:
    """
    Return the letter multiset of `word`.

    Example:
      decompose("ALLEY") -> Counter({'L': 2, 'A': 1, 'E': 1, 'Y': 1})
    """
    return Counter(word)


@dataclass(frozen=True)
class SecretWord:
    """The word to find for one calendar date, plus its precomputed composition."""
    letters: str
    composition: Mapping[str, int] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        if not self.letters:
            raise ValueError("secret word must be non-empty")
        if not self.composition:
            object.__setattr__(self, "composition", decompose(self.letters))

    @classmethod
    def of(cls, word: str) -> "SecretWord":
        return cls(letters=word, composition=decompose(word))

    @property
    def length(self) -> int:
        return len(self.letters)

    @property
    def first_letter(self) -> str:
        return self.letters[0]

    def scratch(self) -> Counter:
        """Fresh copy of the composition; the stored one is never mutated."""
        return Counter(self.composition)

    def __contains__(self, letter: object) -> bool:
        return letter in self.composition

    def __str__(self) -> str:
        return self.letters
