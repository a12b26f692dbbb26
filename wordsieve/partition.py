"""
partition.py

Turning (guess, outcome) pairs into surviving word sets.

- narrow():           one clue applied to a candidate set via the ClueIndex
                      masks (narrow_mask() works on the masks directly)
- OutcomePartition:   the whole dictionary split by the code one guess earns
- PartitionCache:     lazily built partitions, one per guess, with a
                      resumable chunked build for progress reporting
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from wordsieve.clues import ClueIndex, letter_id
from wordsieve.feedback import Outcome, ResultCodec, is_valid_for, num_codes
from wordsieve.idset import CandidateSet

log = logging.getLogger(__name__)


def narrow(index: ClueIndex, current: CandidateSet, guess: str, outcomes: Sequence[int]) -> CandidateSet:
    """
    Keep the words of `current` that would give `outcomes` when `guess` is played.

    Clauses
    -------
    - HERE at pos:              word has the letter at pos
    - ELSEWHERE/NOWHERE at pos: word is in the complement of the letter at pos
    - letter seen c > 0 times as HERE/ELSEWHERE: at least c copies
    - letter with any NOWHERE:  exactly c copies (c may be 0)

    Every clause is needed; dropping one over-approximates the result.
    Outcome sequences that `guess` can never produce give an empty set.
    """
    if len(outcomes) != len(guess):
        raise ValueError("outcomes and guess differ in length")
    mask = narrow_mask(index, current.to_mask(index.num_words), guess, outcomes)
    return CandidateSet.from_mask(mask)


def narrow_mask(index: ClueIndex, current: np.ndarray, guess: str, outcomes: Sequence[int]) -> np.ndarray:
    """`narrow` on a boolean mask over word ids; `current` is not modified."""
    if not is_valid_for(outcomes, guess):
        return np.zeros(index.num_words, dtype=bool)

    include: List[np.ndarray] = []
    exclude: List[np.ndarray] = []
    seen_counts: Dict[int, int] = {}
    failed = set()

    for pos, (ch, p) in enumerate(zip(guess, outcomes)):
        li = letter_id(ch)
        here = index.position_mask(pos, li)
        if p == Outcome.HERE:
            include.append(here)
            seen_counts[li] = seen_counts.get(li, 0) + 1
        elif p == Outcome.ELSEWHERE:
            exclude.append(here)
            seen_counts[li] = seen_counts.get(li, 0) + 1
        else:
            exclude.append(here)
            seen_counts.setdefault(li, 0)
            failed.add(li)

    for li, count in seen_counts.items():
        exact = li in failed
        if count > index.max_letter_repeat:
            include.append(index.count_mask(li, count, exact=exact))
        elif exact:
            include.append(index.exactly_mask(li, count))
        elif count:
            include.append(index.at_least_mask(li, count))

    # Intersect smallest first; an empty result ends the work early.
    result = current.copy()
    for m in sorted(include, key=np.count_nonzero):
        result &= m
        if not result.any():
            return result
    for m in exclude:
        result &= ~m
    return result


class OutcomePartition:
    """
    The dictionary split by the code `guess` earns against each word.

    Groups for codes the guess cannot produce are empty; the non-empty
    groups are disjoint and together cover every word id.
    """

    def __init__(self, guess: str, groups: Dict[int, CandidateSet], word_codes: np.ndarray, n_codes: int) -> None:
        self.guess = guess
        self.n_codes = n_codes
        self._groups = groups
        word_codes.setflags(write=False)
        self.word_codes = word_codes

    @classmethod
    def build(cls, index: ClueIndex, codec: ResultCodec, guess: str) -> "OutcomePartition":
        length = len(guess)
        table = codec.table(length)
        full = index.full_mask()
        groups: Dict[int, CandidateSet] = {}
        word_codes = np.full(index.num_words, -1, dtype=np.int64)

        for code in range(num_codes(length)):
            outcomes = table[code].tolist()
            if not is_valid_for(outcomes, guess):
                continue
            mask = narrow_mask(index, full, guess, outcomes)
            if mask.any():
                groups[code] = CandidateSet.from_mask(mask)
                word_codes[mask] = code

        if index.num_words and int(word_codes.min()) < 0:
            raise AssertionError(f"partition for '{guess}' does not cover the dictionary")
        return cls(guess, groups, word_codes, num_codes(length))

    def group(self, code: int) -> CandidateSet:
        if not 0 <= code < self.n_codes:
            raise ValueError(f"result code {code} out of range")
        return self._groups.get(code, CandidateSet.empty())

    def groups(self) -> Iterator[Tuple[int, CandidateSet]]:
        """Non-empty (code, group) pairs in code order."""
        for code in sorted(self._groups):
            yield code, self._groups[code]

    def __len__(self) -> int:
        return len(self._groups)


@dataclass(frozen=True)
class PreprocessProgress:
    done: int
    total: int

    @property
    def complete(self) -> bool:
        return self.done >= self.total

    @property
    def fraction(self) -> float:
        return 1.0 if self.total == 0 else self.done / self.total


class PartitionCache:
    """
    Per-guess partitions, built on first request and kept for the life of
    the owning engine (the dictionary never changes under it).

    `step()` builds the next chunk of not-yet-built guesses in id order and
    reports progress; calling it until `complete` preprocesses everything.
    Stopping between steps loses nothing.
    """

    def __init__(self, index: ClueIndex, codec: ResultCodec, words: Sequence[str]) -> None:
        self._index = index
        self._codec = codec
        self._words = words
        self._parts: List[Optional[OutcomePartition]] = [None] * len(words)
        self._next = 0
        self._built = 0

    def get(self, word_id: int) -> OutcomePartition:
        part = self._parts[word_id]
        if part is None:
            part = OutcomePartition.build(self._index, self._codec, self._words[word_id])
            self._parts[word_id] = part
            self._built += 1
        return part

    def __contains__(self, word_id: int) -> bool:
        return self._parts[word_id] is not None

    def step(self, chunk_size: int = 100) -> PreprocessProgress:
        if chunk_size < 1:
            raise ValueError("chunk_size must be positive")
        if self._next == 0 and self._built == 0:
            log.info("building outcome partitions for %d words", len(self._words))
        processed = 0
        while self._next < len(self._words) and processed < chunk_size:
            if self._parts[self._next] is None:
                self.get(self._next)
                processed += 1
            self._next += 1
        return self.progress()

    def progress(self) -> PreprocessProgress:
        return PreprocessProgress(self._built, len(self._words))

    @property
    def is_complete(self) -> bool:
        return self._built == len(self._words)
