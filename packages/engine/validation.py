"""
Guess acceptance rules.

This module answers the question: "May this (already normalized) candidate be
scored right now?" Checks run in a fixed order and stop at the first failure:
  - it has exactly the secret's length
  - it starts with the secret's first letter (a game rule: the first letter
    is given to the player, who must retype it; scoring does not care)
  - it is a dictionary word (delegated to the word source)

Whether the session is still open is the session manager's business; it is
checked after these and reported with the same RejectReason vocabulary.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional

from .composition import SecretWord


class RejectReason(Enum):
    WRONG_LENGTH = "wrong_length"
    WRONG_FIRST_LETTER = "wrong_first_letter"
    NOT_IN_DICTIONARY = "not_in_dictionary"
    SESSION_CLOSED = "session_closed"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    RejectReason.WRONG_LENGTH: "The word does not have the right number of letters",
    RejectReason.WRONG_FIRST_LETTER: "The word must start with the same letter as the word to find",
    RejectReason.NOT_IN_DICTIONARY: "This word is not in our dictionary",
    RejectReason.SESSION_CLOSED: "Today's game is over",
}


def check_shape(candidate: str, secret: SecretWord) -> Optional[RejectReason]:
    """Length, then first letter. Returns None if both hold."""
    if len(candidate) != secret.length:
        return RejectReason.WRONG_LENGTH
    if candidate[0] != secret.first_letter:
        return RejectReason.WRONG_FIRST_LETTER
    return None


def validate_guess(
        candidate: str,
        secret: SecretWord,
        is_valid_word: Callable[[str], bool],
) -> Optional[RejectReason]:
    """
    Return the first rule `candidate` breaks, or None if it is acceptable.

    Args:
      candidate     : normalized guess
      secret        : today's secret word
      is_valid_word : dictionary lookup, e.g. WordSource.is_valid_dictionary_word
    """
    reason = check_shape(candidate, secret)
    if reason is not None:
        return reason
    if not is_valid_word(candidate):
        return RejectReason.NOT_IN_DICTIONARY
    return None
