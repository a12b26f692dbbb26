"""
session.py

The clue stack: which clues have been applied, and the candidate set they
leave. Committing narrows the candidates in place; popping cannot undo an
intersection, so it rebuilds from the full dictionary by replaying what is
left on the stack.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

import numpy as np

from wordsieve.clues import ClueIndex
from wordsieve.errors import EmptyStackError, LengthMismatchError, MalformedClueError, UnknownWordError
from wordsieve.feedback import Outcome, ResultCodec, parse_hen, to_hen
from wordsieve.idset import CandidateSet
from wordsieve.partition import narrow
from wordsieve.pattern import PatternFilter
from wordsieve.vocab import WordVocab

log = logging.getLogger(__name__)

ResultLike = Union[str, int, Sequence[int]]


@dataclass(frozen=True)
class GuessClue:
    guess: str
    code: int
    outcomes: Tuple[Outcome, ...]

    def apply(self, index: ClueIndex, current: CandidateSet) -> CandidateSet:
        return narrow(index, current, self.guess, self.outcomes)

    def describe(self) -> str:
        return f"{self.guess} {to_hen(self.outcomes)}"


@dataclass(frozen=True)
class PatternClue:
    filter: PatternFilter

    def apply(self, index: ClueIndex, current: CandidateSet) -> CandidateSet:
        return self.filter.apply(index, current)

    def describe(self) -> str:
        return f"pattern {self.filter.describe()}"


Clue = Union[GuessClue, PatternClue]


class ClueStack:
    """
    Session state over one dictionary.

    Initial: no clues, every word is a candidate.
    Narrowed: one or more clues applied.

    commit / commit_pattern / pop / reset are the only ways the candidate
    set changes. A call that raises leaves the stack and candidates as
    they were.
    """

    def __init__(self, vocab: WordVocab, index: ClueIndex, codec: ResultCodec) -> None:
        self._vocab = vocab
        self._index = index
        self._codec = codec
        self._stack: List[Clue] = []
        self._candidates = index.full()

    # -------------------------
    # Transitions
    # -------------------------
    def commit(self, guess: str, result: ResultLike) -> GuessClue:
        """Apply a guess and the result it earned; returns the pushed clue."""
        clue = self.make_clue(guess, result)
        self._push(clue)
        return clue

    def commit_pattern(self, pattern: str, include: str = "", exclude: str = "") -> PatternClue:
        clue = PatternClue(PatternFilter.parse(pattern, include, exclude, self._index.word_length))
        self._push(clue)
        return clue

    def pop(self) -> Clue:
        """Remove the most recent clue and replay the rest from scratch."""
        if not self._stack:
            raise EmptyStackError("no clues to pop")
        clue = self._stack.pop()
        self._candidates = self._replay(self._stack)
        log.debug("popped '%s'; %d candidates remain", clue.describe(), len(self._candidates))
        return clue

    def reset(self) -> None:
        self._stack.clear()
        self._candidates = self._index.full()

    # -------------------------
    # Helpers
    # -------------------------
    def make_clue(self, guess: str, result: ResultLike) -> GuessClue:
        """Validate a (guess, result) pair without applying it."""
        length = self._index.word_length
        guess = guess.strip().lower()
        if len(guess) != length:
            raise LengthMismatchError(f"guess '{guess}' has length {len(guess)}; expected {length}")
        if guess not in self._vocab:
            raise UnknownWordError(f"'{guess}' is not in the dictionary")

        if isinstance(result, str):
            outcomes = parse_hen(result, length)
        elif isinstance(result, (int, np.integer)):
            outcomes = self._codec.decode(int(result), length)
        else:
            try:
                outcomes = tuple(Outcome(int(p)) for p in result)
            except (TypeError, ValueError):
                raise MalformedClueError(f"outcome values must be 0, 1 or 2 (got {result!r})") from None
            if len(outcomes) != length:
                raise LengthMismatchError(f"result has length {len(outcomes)}; expected {length}")
        return GuessClue(guess, self._codec.encode(outcomes), outcomes)

    def _push(self, clue: Clue) -> None:
        before = len(self._candidates)
        self._candidates = clue.apply(self._index, self._candidates)
        self._stack.append(clue)
        log.debug("applied '%s': %d -> %d candidates", clue.describe(), before, len(self._candidates))

    def _replay(self, clues: Sequence[Clue]) -> CandidateSet:
        current = self._index.full()
        for clue in clues:
            current = clue.apply(self._index, current)
        return current

    # -------------------------
    # Introspection
    # -------------------------
    @property
    def candidates(self) -> CandidateSet:
        return self._candidates

    @property
    def history(self) -> List[Clue]:
        return list(self._stack)

    @property
    def is_initial(self) -> bool:
        return not self._stack

    def __len__(self) -> int:
        return len(self._stack)

    def describe(self) -> List[str]:
        """One status line per clue, oldest first."""
        return [f"[{i}] {clue.describe()}" for i, clue in enumerate(self._stack)]
