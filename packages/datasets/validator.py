"""
Word list validator.

What this module does:
- Validate a pair of word lists: answers.txt (secret word schedule) and
  allowed.txt (guess dictionary).
- Every entry is checked in its NORMALIZED form (see wordsource.normalize_word):
  it must be A–Z only and its length must fall in [min_length, max_length].
- Detect duplicates (after normalization) and invalid lines; compute SHA-256
  of the raw files.
- Check that answers ⊆ allowed, so the secret word is always guessable.
- Return a machine-readable dict and provide a pretty one-line summary.

Typical use:
    from packages.datasets import validate_wordlists, pretty_summary
    rep = validate_wordlists("data/answers.txt", "data/allowed.txt")
    print(pretty_summary(rep))
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .wordsource import normalize_word

_CANONICAL_RE = re.compile(r"^[A-Z]+$")


@dataclass
class FileReport:
    """Per-file diagnostics and metadata."""
    path: str            # file path (as given)
    exists: bool         # did the file exist on disk?
    count: int           # number of VALID words after normalization
    sha256: str          # SHA-256 of raw file bytes (empty string if missing)
    unique_count: int    # unique valid words
    invalid_lines: int   # lines that are blank, non-alphabetic or out of length bounds
    lengths: Dict[int, int]  # word length -> number of valid words


@dataclass
class ValidationReport:
    """Top-level validation result for the (answers, allowed) pair."""
    min_length: int
    max_length: Optional[int]
    answers: FileReport
    allowed: FileReport
    answers_subset_allowed: bool
    passed: bool
    issues: List[str]


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def _load_and_check(path: Path, min_length: int,
                    max_length: Optional[int]) -> Tuple[List[str], int]:
    """
    Load words from a text file, normalize and check them.

    Rules:
      - one word per line; '#' lines are comments and skipped
      - normalized form must be A–Z only
      - min_length <= len(normalized) <= max_length (if given)
      - empty/whitespace-only lines are INVALID

    Returns:
      (valid_normalized_words, invalid_count)
    """
    valid: List[str] = []
    invalid = 0

    with path.open("r", encoding="utf-8") as f:
        for raw in f:
            if raw.lstrip().startswith("#"):
                continue
            w = normalize_word(raw)
            too_long = max_length is not None and len(w) > max_length
            if _CANONICAL_RE.match(w) and len(w) >= min_length and not too_long:
                valid.append(w)
            else:
                invalid += 1

    return valid, invalid


def _file_report(path: Path, words: List[str], invalid: int) -> FileReport:
    lengths: Dict[int, int] = {}
    for w in words:
        lengths[len(w)] = lengths.get(len(w), 0) + 1
    return FileReport(
        path=str(path),
        exists=True,
        count=len(words),
        sha256=_sha256_file(path),
        unique_count=len(set(words)),
        invalid_lines=invalid,
        lengths=dict(sorted(lengths.items())),
    )


def _missing_report(path: str) -> FileReport:
    return FileReport(path, Path(path).exists(), 0, "", 0, 0, {})


def validate_wordlists(answers_path: str, allowed_path: str, *,
                       min_length: int = 2, max_length: Optional[int] = None) -> Dict:
    """
    Validate the answers/allowed word lists.

    Returns
    -------
    Dict
        A JSON-serializable dictionary (see ValidationReport schema);
        `passed` is strict: non-empty lists, no invalid lines, answers ⊆ allowed.
        Duplicates are reported in `issues` but do not fail validation.
    """
    issues: List[str] = []

    ans_p = Path(answers_path)
    all_p = Path(allowed_path)

    if not ans_p.exists() or not all_p.exists():
        if not ans_p.exists():
            issues.append(f"answers file not found: {answers_path}")
        if not all_p.exists():
            issues.append(f"allowed file not found: {allowed_path}")
        rep = ValidationReport(min_length, max_length,
                               _missing_report(answers_path), _missing_report(allowed_path),
                               answers_subset_allowed=False, passed=False, issues=issues)
        return asdict(rep)

    answers, ans_invalid = _load_and_check(ans_p, min_length, max_length)
    allowed, all_invalid = _load_and_check(all_p, min_length, max_length)
    ans_report = _file_report(ans_p, answers, ans_invalid)
    all_report = _file_report(all_p, allowed, all_invalid)

    answers_set = set(answers)
    subset_ok = answers_set.issubset(set(allowed))
    if not subset_ok:
        missing = sorted(answers_set - set(allowed))[:5]
        issues.append(f"answers not subset of allowed (e.g., {missing})")

    if ans_report.count == 0:
        issues.append("answers file contains 0 valid words")
    if all_report.count == 0:
        issues.append("allowed file contains 0 valid words")
    if ans_invalid:
        issues.append(f"answers has {ans_invalid} invalid line(s)")
    if all_invalid:
        issues.append(f"allowed has {all_invalid} invalid line(s)")
    if ans_report.count != ans_report.unique_count:
        issues.append("answers contains duplicate words")
    if all_report.count != all_report.unique_count:
        issues.append("allowed contains duplicate words")

    passed = (
            subset_ok
            and ans_invalid == 0
            and all_invalid == 0
            and ans_report.count > 0
            and all_report.count > 0
    )

    rep = ValidationReport(
        min_length=min_length,
        max_length=max_length,
        answers=ans_report,
        allowed=all_report,
        answers_subset_allowed=subset_ok,
        passed=passed,
        issues=issues,
    )
    return asdict(rep)


def pretty_summary(report: Dict) -> str:
    """
    Compact one-liner for the console.

    Example:
        answers=365 (uniq=365, sha=abc123...) | allowed=21000 (uniq=21000, sha=def456...) | answers⊆allowed=True | OK
    """
    a = report["answers"]
    b = report["allowed"]
    status = "OK" if report["passed"] else "FAIL"
    a_sha = (a.get("sha256") or "")[:12]
    b_sha = (b.get("sha256") or "")[:12]
    return (
        f"answers={a['count']} (uniq={a['unique_count']}, sha={a_sha}) "
        f"| allowed={b['count']} (uniq={b['unique_count']}, sha={b_sha}) "
        f"| answers⊆allowed={report['answers_subset_allowed']} | {status}"
    )
