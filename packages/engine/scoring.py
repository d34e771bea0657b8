"""
Per-letter feedback for a single (secret, guess) pair.

Conventions (pattern symbols):
  - 'G'  : CORRECT  = right letter in the right position
  - 'Y'  : PRESENT  = letter is in the secret, elsewhere
  - '-'  : ABSENT   = letter not present (or present fewer times than guessed)

Algorithm (two-pass, required for duplicate letters):
  1) Copy the secret's composition into a scratch counter.
  2) Pass 1 consumes one claim per exact match, WITHOUT assigning statuses.
     Exact matches must win their letter before any partial match is looked at.
  3) Pass 2 walks left to right: exact match -> CORRECT; otherwise PRESENT
     while the scratch counter still has that letter (and consume it);
     otherwise ABSENT.

Example:
  secret ALLEY, guess LLAMA -> "YGY--"
  (the L in position 2 is exact and claims one L first; the leading L takes
  the remaining one; only one A exists, so the second A is absent)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List

from .composition import SecretWord


class LetterStatus(Enum):
    CORRECT = "G"
    PRESENT = "Y"
    ABSENT = "-"

    @property
    def symbol(self) -> str:
        return self.value


@dataclass(frozen=True)
class LetterResult:
    letter: str
    status: LetterStatus


def evaluate(secret: SecretWord, guess: str) -> List[LetterResult]:
    """
    Score `guess` against `secret`.

    Preconditions:
      - len(guess) == secret.length (the caller validates shape)

    Returns:
      One LetterResult per position of `guess`, in guess order.
    """
    word = secret.letters
    if len(guess) != len(word):
        raise ValueError(f"guess length {len(guess)} != secret length {len(word)}")

    remaining = secret.scratch()

    # Pass 1: exact matches claim their letter first.
    for g, s in zip(guess, word):
        if g == s:
            remaining[g] -= 1

    # Pass 2: statuses, earlier occurrences favored for PRESENT.
    results: List[LetterResult] = []
    for g, s in zip(guess, word):
        if g == s:
            status = LetterStatus.CORRECT
        elif g in secret and remaining[g] > 0:
            status = LetterStatus.PRESENT
            remaining[g] -= 1
        else:
            status = LetterStatus.ABSENT
        results.append(LetterResult(g, status))

    return results


def is_all_correct(results: Iterable[LetterResult]) -> bool:
    results = list(results)
    return bool(results) and all(r.status is LetterStatus.CORRECT for r in results)


def pattern_of(results: Iterable[LetterResult]) -> str:
    """Compact form of a result row, e.g. "YGY--"."""
    return "".join(r.status.symbol for r in results)


def score(guess: str, answer: str) -> str:
    """
    Pattern string for `guess` against `answer`.

    Examples:
      score("BELLE", "LEVEL") -> "-GYYY"
      score("LEMON", "LEVEL") -> "GG---"
    """
    return pattern_of(evaluate(SecretWord.of(answer), guess))
