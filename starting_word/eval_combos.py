"""
starting_word/eval_combos.py

Search pairs or triples of opening guesses played together (non-adaptive:
all results are read at once) and report the best combination under each
metric.

Candidates are ranked by single-guess entropy first; --limit keeps only the
top K of them, which is what makes triples affordable.

Usage:
  python -m starting_word.eval_combos --size 2 --limit 200
  python -m starting_word.eval_combos --words word_list.csv --size 3 --limit 60 --out triples.csv
"""

from __future__ import annotations

import argparse
import logging
import time
from typing import List, Optional

import pandas as pd

from wordsieve.config import EngineConfig
from wordsieve.engine import WordleEngine


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Find the best pair/triple of opening guesses.")
    ap.add_argument("--words", default="word_list.csv", help="Word list (.csv with a 'word' column, or plain text)")
    ap.add_argument("--length", type=int, default=5, help="Word length")
    ap.add_argument("--answers-only", action="store_true", help="CSV only: keep rows with a 'day' value")
    ap.add_argument("--size", type=int, default=2, choices=(2, 3), help="Guesses per combination")
    ap.add_argument("--limit", type=int, default=100, help="Keep only the top K single guesses by entropy")
    ap.add_argument("--out", default="combo_results.csv", help="Output CSV filename")
    ap.add_argument(
        "--progress",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Show progress bars (use --no-progress to disable)",
    )
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    config = EngineConfig(word_length=args.length)
    extra = {"answers_only": True} if args.answers_only else {}
    engine = WordleEngine.from_file(args.words, config, **extra)

    t0 = time.perf_counter()
    engine.preprocess(progress=args.progress)
    result = engine.best_combination(args.size, scope="all", limit=args.limit, progress=args.progress)
    dt = time.perf_counter() - t0
    print(f"Evaluated {result.evaluated:,} combinations in {dt:.2f}s", flush=True)

    table = pd.DataFrame(result.rows())
    print(table.to_string(index=False))
    table.to_csv(args.out, index=False)
    print(f"Wrote results to {args.out}")


if __name__ == "__main__":
    main()
