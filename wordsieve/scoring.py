"""
scoring.py

How well a guess (or a set of guesses played together) splits a pool of
candidate answers.

Metrics per guess:
- max_group: size of the largest bucket, the worst case (lower is better)
- avg_group: expected remaining candidates, sum(size^2) / pool (lower is better)
- entropy_bits: information gain, -sum(p log2 p) (higher is better)
- solve_probability: share of answers left alone in their bucket (higher is better)
- partitions: number of non-empty buckets
"""

from __future__ import annotations

import itertools
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np
from tqdm import tqdm

from wordsieve.idset import CandidateSet
from wordsieve.partition import OutcomePartition


@dataclass(frozen=True)
class GuessStats:
    max_group: int = 0
    avg_group: float = 0.0
    entropy_bits: float = 0.0
    solve_probability: float = 0.0
    partitions: int = 0

    def as_dict(self) -> Dict[str, float]:
        return {
            "avg_group": float(self.avg_group),
            "max_group": int(self.max_group),
            "entropy_bits": float(self.entropy_bits),
            "solve_probability": float(self.solve_probability),
            "partitions": int(self.partitions),
        }


def stats_from_sizes(sizes: np.ndarray, total: int) -> GuessStats:
    """
    Reduce bucket sizes (empty buckets already dropped) over a pool of
    `total` answers. An empty pool scores all zeros.
    """
    if total <= 0 or sizes.size == 0:
        return GuessStats()
    sizes = sizes.astype(np.float64)
    p = sizes / total
    entropy = float(-(p * np.log2(p)).sum())
    return GuessStats(
        max_group=int(sizes.max()),
        avg_group=float((sizes * sizes).sum() / total),
        entropy_bits=max(0.0, entropy),
        solve_probability=float(np.count_nonzero(sizes == 1) / total),
        partitions=int(sizes.size),
    )


def score(partition: OutcomePartition, filter_set: CandidateSet) -> GuessStats:
    """
    Score one guess against the answers still in `filter_set`.

    Each partition group is intersected with the pool; only the non-empty
    intersections count as buckets.
    """
    total = len(filter_set)
    if total == 0:
        return GuessStats()
    # group-by on the per-word code is the same as intersecting every group
    codes = partition.word_codes[filter_set.ids]
    sizes = np.bincount(codes)
    return stats_from_sizes(sizes[sizes > 0], total)


def score_joint(partitions: Sequence[OutcomePartition], filter_set: CandidateSet) -> GuessStats:
    """
    Score several guesses played together.

    Two answers share a bucket iff they earn the same code against every
    guess, so the bucket key is the tuple of per-guess codes.
    """
    total = len(filter_set)
    if total == 0:
        return GuessStats()
    if not partitions:
        return stats_from_sizes(np.array([total]), total)
    keys = np.stack([p.word_codes[filter_set.ids] for p in partitions], axis=1)
    _, sizes = np.unique(keys, axis=0, return_counts=True)
    return stats_from_sizes(sizes, total)


# ---------------------------
# Ranking
# ---------------------------

_SORT_KEYS: Dict[str, Callable[[str, GuessStats], tuple]] = {
    "alpha": lambda w, s: (w,),
    "max": lambda w, s: (s.max_group, s.avg_group, w),
    "ave": lambda w, s: (s.avg_group, s.max_group, w),
    "info": lambda w, s: (-s.entropy_bits, s.avg_group, w),
    "solve": lambda w, s: (-s.solve_probability, s.avg_group, w),
}
SORT_ORDERS: Tuple[str, ...] = tuple(_SORT_KEYS) + tuple(f"r-{k}" for k in _SORT_KEYS)


def rank(
    ids: Sequence[int],
    words: Sequence[str],
    stats: Mapping[int, GuessStats],
    order: str = "alpha",
) -> List[int]:
    """
    Return `ids` sorted by `order`, best first. The word table is untouched.

    Orders: alpha, max, ave, info, solve and their reverses r-alpha, r-max,
    r-ave, r-info, r-solve. `info` and `solve` put the highest value first,
    the others the lowest. Ties fall back to the other size metric, then
    the word itself.
    """
    reverse = order.startswith("r-")
    base = order[2:] if reverse else order
    try:
        key = _SORT_KEYS[base]
    except KeyError:
        raise ValueError(f"unknown sort order '{order}' (choose from {', '.join(SORT_ORDERS)})") from None
    if base == "alpha":
        return sorted(ids, key=lambda i: words[i], reverse=reverse)
    return sorted(ids, key=lambda i: key(words[i], stats[i]), reverse=reverse)


# ---------------------------
# Pair / triple search
# ---------------------------

@dataclass
class ComboSearchResult:
    """Running best combination for each metric, tracked independently."""

    size: int
    evaluated: int = 0
    best: Dict[str, Tuple[Tuple[str, ...], GuessStats]] = field(default_factory=dict)

    def offer(self, combo: Tuple[str, ...], stats: GuessStats) -> None:
        self.evaluated += 1
        for metric, better in _BETTER.items():
            current = self.best.get(metric)
            if current is None or better(stats, current[1]):
                self.best[metric] = (combo, stats)

    def rows(self) -> List[Dict[str, object]]:
        out = []
        for metric in _BETTER:
            if metric in self.best:
                combo, stats = self.best[metric]
                out.append({"metric": metric, "guesses": " ".join(combo), **stats.as_dict()})
        return out


_BETTER: Dict[str, Callable[[GuessStats, GuessStats], bool]] = {
    "max_group": lambda a, b: a.max_group < b.max_group,
    "avg_group": lambda a, b: a.avg_group < b.avg_group,
    "entropy_bits": lambda a, b: a.entropy_bits > b.entropy_bits,
    "solve_probability": lambda a, b: a.solve_probability > b.solve_probability,
}


def search_combinations(
    words: Sequence[str],
    get_partition: Callable[[int], OutcomePartition],
    filter_set: CandidateSet,
    size: int,
    guesses: Optional[Sequence[int]] = None,
    limit: Optional[int] = None,
    progress: bool = False,
) -> ComboSearchResult:
    """
    Try every `size`-combination of candidate guesses against `filter_set`.

    Candidates (default: every word) are pre-sorted by single-guess entropy,
    highest first, and optionally cut to the top `limit`. The ordering is a
    heuristic only; every combination of the kept candidates is scored.
    """
    if size < 1:
        raise ValueError("size must be positive")
    pool = list(range(len(words))) if guesses is None else list(guesses)
    single = {i: score(get_partition(i), filter_set) for i in pool}
    pool.sort(key=lambda i: (-single[i].entropy_bits, words[i]))
    if limit is not None:
        pool = pool[:limit]

    result = ComboSearchResult(size=size)
    total = math.comb(len(pool), size)
    combos = itertools.combinations(pool, size)
    for combo in tqdm(combos, total=total, disable=not progress, desc=f"{size}-guess search"):
        stats = score_joint([get_partition(i) for i in combo], filter_set)
        result.offer(tuple(words[i] for i in combo), stats)
    return result
