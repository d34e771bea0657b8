from .composition import SecretWord, decompose
from .scoring import LetterResult, LetterStatus, evaluate, is_all_correct, pattern_of, score
from .validation import RejectReason, check_shape, validate_guess

__all__ = [
    "SecretWord", "decompose",
    "LetterResult", "LetterStatus", "evaluate", "is_all_correct", "pattern_of", "score",
    "RejectReason", "check_shape", "validate_guess",
]
