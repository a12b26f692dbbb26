"""
starting_word/eval.py

Score candidate first guesses by how well they split the word list.

Metrics per guess:
- avg_group: expected remaining candidates after the first result
- max_group: size of the largest bucket (lower is better)
- entropy_bits: information gain (higher is better)
- solve_probability: chance the result pins the answer down
- partitions: number of distinct results induced

Usage:
  python -m starting_word.eval
  python -m starting_word.eval --words word_list.csv --answers-only --sort info --top 30
"""

from __future__ import annotations

import argparse
import logging
import time
from typing import List, Optional

import pandas as pd

from wordsieve.config import EngineConfig
from wordsieve.engine import WordleEngine
from wordsieve.scoring import SORT_ORDERS


def evaluate_first_guesses(
    engine: WordleEngine,
    order: str = "ave",
    *,
    progress: bool = False,
) -> pd.DataFrame:
    """
    Evaluate every dictionary word as a first guess against the full word list.

    Returns
    -------
    pandas.DataFrame
        One row per guess, best first under `order`, with columns
        'guess', 'avg_group', 'max_group', 'entropy_bits',
        'solve_probability', 'partitions'.
    """
    engine.preprocess(progress=progress)
    return engine.stats_table(scope="all", guesses="all", order=order)


def _print_top(results: pd.DataFrame, k: int = 20) -> None:
    print(f"\nTop {k} starting words:")
    print(f"{'rank':>4}  {'guess':<8}  {'exp_rem':>8}  {'worst':>5}  {'entropy':>8}  {'solve':>6}  {'parts':>6}")
    for idx, r in enumerate(results.head(k).itertuples(index=False), start=1):
        print(
            f"{idx:>4}  {r.guess:<8}  {r.avg_group:>8.2f}  {int(r.max_group):>5}  "
            f"{r.entropy_bits:>8.3f}  {r.solve_probability:>6.3f}  {int(r.partitions):>6}"
        )


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Score every word as a first guess.")
    ap.add_argument("--words", default="word_list.csv", help="Word list (.csv with a 'word' column, or plain text)")
    ap.add_argument("--length", type=int, default=5, help="Word length")
    ap.add_argument("--answers-only", action="store_true", help="CSV only: keep rows with a 'day' value")
    ap.add_argument("--sort", default="ave", choices=SORT_ORDERS, help="Ranking order")
    ap.add_argument("--out", default="starting_word_results.csv", help="Output CSV filename")
    ap.add_argument("--top", type=int, default=20, help="How many top rows to print")
    ap.add_argument(
        "--progress",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Show progress during evaluation (use --no-progress to disable)",
    )
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    config = EngineConfig(word_length=args.length)
    extra = {"answers_only": True} if args.answers_only else {}
    engine = WordleEngine.from_file(args.words, config, **extra)

    print(f"Scoring {len(engine)} guesses against {len(engine)} answers...", flush=True)
    t0 = time.perf_counter()
    results = evaluate_first_guesses(engine, args.sort, progress=args.progress)
    dt = time.perf_counter() - t0
    print(f"Done in {dt:.2f}s", flush=True)

    _print_top(results, k=args.top)
    results.to_csv(args.out, index=False)
    print(f"Wrote results to {args.out}")


if __name__ == "__main__":
    main()
