"""
clues.py

Dictionary-wide clue indexes, built once per dictionary and read-only
afterwards. Each index is a stack of boolean masks over word ids:

- here[pos, letter]:   words with `letter` at `pos`
- at_least[letter, k]: words with `letter` at least k times
- exactly[letter, k]:  words with `letter` exactly k times

for k in 0..max_letter_repeat. The `*_mask` readers hand back the masks
for bitwise narrowing; the `*_set` readers wrap them as CandidateSets.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from wordsieve.idset import CandidateSet

log = logging.getLogger(__name__)

ALPHABET_SIZE = 26


def letter_id(c: str) -> int:
    """Map a lowercase letter to 0..25."""
    li = ord(c) - 97
    if not 0 <= li < ALPHABET_SIZE:
        raise ValueError(f"character is not a lowercase letter: {c!r}")
    return li


def _li(letter: str | int) -> int:
    return letter if isinstance(letter, int) else letter_id(letter)


class ClueIndex:
    """
    Per-position and per-letter-count word masks.

    Letter-count bound
    ------------------
    Only counts 0..max_letter_repeat get their own masks. A word holding a
    letter more often than the bound is filed under at_least[letter][bound]
    and under no `exactly` mask, so:

    - `at_least(letter, k)` clamps k to the bound (it answers "at least
      bound" for any larger k);
    - `exactly(letter, k)` with k above the bound is a precondition
      violation and raises ValueError.

    `count_mask` / `count_set` answer either question exactly for any k,
    straight from the per-word letter counts, for callers that must not be
    clamped.
    """

    def __init__(
        self,
        word_length: int,
        here: np.ndarray,
        at_least: np.ndarray,
        exactly: np.ndarray,
        counts: np.ndarray,
    ) -> None:
        self.word_length = word_length
        self.max_letter_repeat = at_least.shape[1] - 1
        self.num_words = int(counts.shape[0])
        for arr in (here, at_least, exactly, counts):
            arr.setflags(write=False)
        self._here = here
        self._at_least = at_least
        self._exactly = exactly
        self._counts = counts

    @classmethod
    def build(cls, words: Sequence[str], word_length: int, max_letter_repeat: int = 4) -> "ClueIndex":
        if max_letter_repeat < 1:
            raise ValueError("max_letter_repeat must be positive")
        n = len(words)
        letters = np.empty((n, word_length), dtype=np.int8)
        for word_id, word in enumerate(words):
            if len(word) != word_length:
                raise ValueError(f"word '{word}' does not have length {word_length}")
            letters[word_id] = [letter_id(c) for c in word]

        counts = np.zeros((n, ALPHABET_SIZE), dtype=np.int16)
        rows = np.repeat(np.arange(n), word_length)
        np.add.at(counts, (rows, letters.ravel()), 1)

        alphabet = np.arange(ALPHABET_SIZE, dtype=np.int16)
        ks = np.arange(max_letter_repeat + 1, dtype=np.int16)
        # (L, 26, N), (26, K, N), (26, K, N)
        here = letters.T[:, None, :] == alphabet[None, :, None]
        at_least = counts.T[:, None, :] >= ks[None, :, None]
        exactly = counts.T[:, None, :] == ks[None, :, None]

        over = int(np.count_nonzero(counts.max(axis=1) > max_letter_repeat)) if n else 0
        if over:
            log.info(
                "%d words repeat a letter more than %d times; at-least sets clamp them",
                over,
                max_letter_repeat,
            )
        log.info("clue index built for %d words of length %d", n, word_length)
        return cls(word_length, here, at_least, exactly, counts)

    # ---------- Masks ----------

    def position_mask(self, pos: int, letter: str | int) -> np.ndarray:
        return self._here[pos, _li(letter)]

    def at_least_mask(self, letter: str | int, k: int) -> np.ndarray:
        if k < 0:
            raise ValueError("count must be non-negative")
        return self._at_least[_li(letter), min(k, self.max_letter_repeat)]

    def exactly_mask(self, letter: str | int, k: int) -> np.ndarray:
        if k < 0 or k > self.max_letter_repeat:
            raise ValueError(
                f"exactly({k}) is outside the indexed range 0..{self.max_letter_repeat}"
            )
        return self._exactly[_li(letter), k]

    def count_mask(self, letter: str | int, k: int, exact: bool) -> np.ndarray:
        column = self._counts[:, _li(letter)]
        return column == k if exact else column >= k

    def full_mask(self) -> np.ndarray:
        return np.ones(self.num_words, dtype=bool)

    # ---------- Sets ----------

    def position_set(self, pos: int, letter: str | int) -> CandidateSet:
        return CandidateSet.from_mask(self.position_mask(pos, letter))

    def at_least(self, letter: str | int, k: int) -> CandidateSet:
        return CandidateSet.from_mask(self.at_least_mask(letter, k))

    def exactly(self, letter: str | int, k: int) -> CandidateSet:
        return CandidateSet.from_mask(self.exactly_mask(letter, k))

    def count_set(self, letter: str | int, k: int, exact: bool) -> CandidateSet:
        return CandidateSet.from_mask(self.count_mask(letter, k, exact))

    def full(self) -> CandidateSet:
        return CandidateSet.full(self.num_words)
