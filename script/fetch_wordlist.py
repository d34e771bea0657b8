"""
Download a word list page and write a clean, normalized list.

What it does:
- Downloads the page (plain text or HTML).
- Takes the visible text, splits it into tokens.
- Normalizes every token the way the game does (no diacritics, uppercase)
  and keeps the ones that are A–Z only and within the length bounds.
- De-duplicates while preserving page order, and writes one word per line.

Usage:
    python -m script.fetch_wordlist --url https://example.org/words.txt --out data/allowed.txt
    python -m script.fetch_wordlist --url https://example.org/list.html --min 6 --max 9 --sort
"""

import argparse
import re
from typing import List, Optional

import requests
from bs4 import BeautifulSoup

from packages.datasets import normalize_word, unique_preserve_order, write_lines

TOKEN_RE = re.compile(r"[^\s,;]+")
CANONICAL_RE = re.compile(r"^[A-Z]+$")


def extract_words(text: str, min_length: int = 2, max_length: Optional[int] = None) -> List[str]:
    words = []
    for tok in TOKEN_RE.findall(text):
        w = normalize_word(tok)
        if not CANONICAL_RE.match(w) or len(w) < min_length:
            continue
        if max_length is not None and len(w) > max_length:
            continue
        words.append(w)
    return unique_preserve_order(words)


def fetch_words(url: str, min_length: int = 2, max_length: Optional[int] = None) -> List[str]:
    r = requests.get(url, timeout=30)
    r.raise_for_status()
    text = r.text
    if "html" in r.headers.get("Content-Type", ""):
        text = BeautifulSoup(text, "html.parser").get_text("\n", strip=True)
    return extract_words(text, min_length, max_length)


def main():
    ap = argparse.ArgumentParser(description="Fetch and normalize a word list")
    ap.add_argument("--url", required=True)
    ap.add_argument("--out", default="data/allowed.txt")
    ap.add_argument("--min", dest="min_length", type=int, default=2, help="shortest word kept")
    ap.add_argument("--max", dest="max_length", type=int, help="longest word kept")
    ap.add_argument("--sort", action="store_true", help="sort alphabetically instead of keeping "
                                                        "page order")
    args = ap.parse_args()

    words = fetch_words(args.url, args.min_length, args.max_length)
    if args.sort:
        words = sorted(words)

    write_lines(words, args.out)
    print(f"Wrote {len(words)} unique words -> {args.out}")


if __name__ == "__main__":
    main()
