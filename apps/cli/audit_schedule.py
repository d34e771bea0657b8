# apps/cli/audit_schedule.py
"""
Audit the secret word schedule before shipping a word list.

This script:
  1) Validates the word lists (prints counts + SHA, ensures answers ⊆ allowed).
  2) Walks a date range and, for each day, resolves the secret word exactly
     the way the game does (select -> normalize) and checks that it can be
     played: listed in the allowed file, at least 2 letters, not repeated
     within the `--repeat-window` previous days.
  3) Writes:
       - CSV:  one row per day (date, puzzle number, word, length, flags)
       - JSON: manifest with config, wordlist report and issue count
"""

from __future__ import annotations

import argparse
import csv
import datetime as dt
import logging
import sys
import time
from pathlib import Path
from typing import Dict, List, Set

from tqdm import tqdm

from packages.datasets import (FileWordSource, load_words, normalize_word, pretty_summary,
                               validate_wordlists)
from packages.engine import SecretWord
from packages.session.summary import puzzle_number
from packages.storage import write_json

log = logging.getLogger(__name__)

FIELDS = ["date", "puzzle", "word", "length", "in_allowed", "repeat_of", "ok"]


def timestamp_id() -> str:
    """Compact UTC timestamp for filenames, e.g. 20250820T024121Z."""
    return dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def audit_day(source: FileWordSource, date: dt.date, allowed: Set[str],
              last_seen: Dict[str, dt.date], repeat_window: int) -> Dict:
    """
    Check one day of the schedule. `last_seen` (word -> last date) is updated.
    """
    word = source.normalize(source.select_secret_word(date))
    secret = SecretWord.of(word)
    in_allowed = word in allowed

    prev = last_seen.get(word)
    repeat_of = prev.isoformat() if prev and (date - prev).days <= repeat_window else ""
    last_seen[word] = date

    return {
        "date": date.isoformat(),
        "puzzle": puzzle_number(date, source.epoch),
        "word": word,
        "length": secret.length,
        "in_allowed": in_allowed,
        "repeat_of": repeat_of,
        "ok": in_allowed and secret.length >= 2 and not repeat_of,
    }


def write_schedule_csv(rows: List[Dict], path: Path | str) -> str:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=FIELDS)
        w.writeheader()
        w.writerows(rows)
    return str(p)


def main(argv=None):
    ap = argparse.ArgumentParser(description="Audit the secret word schedule")
    ap.add_argument("--answers", default="data/answers.txt")
    ap.add_argument("--allowed", default="data/allowed.txt")
    ap.add_argument("--start", type=dt.date.fromisoformat, default=dt.date.today(),
                    help="first day to audit (YYYY-MM-DD, default: today)")
    ap.add_argument("--days", type=int, default=365, help="number of days to audit")
    ap.add_argument("--repeat-window", type=int, default=180,
                    help="flag a word seen again within this many days")
    ap.add_argument("--outdir", default="reports", help="directory for output files")
    ap.add_argument("--progress", choices=["auto", "bar", "plain", "off"], default="auto",
                    help="auto=bar on a terminal, plain text otherwise")
    ap.add_argument("--log-level", default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s")

    # 1) Wordlist validation summary
    rep = validate_wordlists(args.answers, args.allowed)
    print(pretty_summary(rep))

    source = FileWordSource.from_files(args.answers, args.allowed)
    allowed = {normalize_word(w) for w in load_words(args.allowed)}
    days = [args.start + dt.timedelta(days=i) for i in range(args.days)]

    mode = args.progress
    if mode == "auto":
        mode = "bar" if sys.stderr.isatty() else "plain"
    iterator = tqdm(days, ncols=80, desc="Auditing", unit="day") if mode == "bar" else days

    # 2) Walk the schedule
    rows: List[Dict] = []
    last_seen: Dict[str, dt.date] = {}
    start = time.time()
    last_print = 0.0
    for idx, day in enumerate(iterator, 1):
        row = audit_day(source, day, allowed, last_seen, args.repeat_window)
        if not row["ok"]:
            log.warning("schedule issue on %s: %s", day, row)
        rows.append(row)

        if mode == "plain":
            now = time.time()
            if (now - last_print >= 1.0) or (idx == len(days)):
                pct = 100.0 * idx / max(1, len(days))
                sys.stderr.write(f"\r[{idx}/{len(days)}] {pct:5.1f}% | elapsed {now - start:6.1f}s")
                sys.stderr.flush()
                last_print = now

    if mode == "plain":
        sys.stderr.write("\n")
        sys.stderr.flush()

    # 3) Outputs
    run_id = timestamp_id()
    outdir = Path(args.outdir)
    csv_path = write_schedule_csv(rows, outdir / f"schedule_{run_id}.csv")
    issues = sum(1 for r in rows if not r["ok"])
    manifest_path = write_json({
        "run_id": run_id,
        "config": {k: str(v) for k, v in vars(args).items()},
        "wordlists": rep,
        "num_days": len(rows),
        "num_issues": issues,
    }, outdir / f"schedule_{run_id}_manifest.json")

    print(f"{issues} problem day(s) out of {len(rows)}")
    print(f"Wrote: {csv_path}")
    print(f"Wrote: {manifest_path}")
    return 1 if issues else 0


if __name__ == "__main__":
    sys.exit(main())
