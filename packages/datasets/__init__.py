from .validator import validate_wordlists, pretty_summary
from .io import read_lines, write_lines, load_words, unique_preserve_order
from .wordsource import DEFAULT_EPOCH, FileWordSource, WordSource, normalize_word

__all__ = [
    "validate_wordlists", "pretty_summary",
    "read_lines", "write_lines", "load_words", "unique_preserve_order",
    "DEFAULT_EPOCH", "FileWordSource", "WordSource", "normalize_word",
]
