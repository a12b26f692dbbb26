"""
engine.py

WordleEngine ties the pieces together for one dictionary:

  vocab       -> the words and their ids
  index       -> ClueIndex, built once at construction
  partitions  -> PartitionCache, per-guess outcome partitions built lazily
  session     -> ClueStack, the committed clues and surviving candidates

Front ends talk to the engine only; nothing here prints.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd
from tqdm import tqdm

from wordsieve.clues import ClueIndex
from wordsieve.config import EngineConfig
from wordsieve.errors import LengthMismatchError, UnknownWordError
from wordsieve.feedback import ResultCodec, compare
from wordsieve.idset import CandidateSet
from wordsieve.partition import OutcomePartition, PartitionCache, PreprocessProgress, narrow
from wordsieve.scoring import (
    ComboSearchResult,
    GuessStats,
    rank,
    score,
    score_joint,
    search_combinations,
)
from wordsieve.session import Clue, ClueStack, GuessClue, PatternClue, ResultLike
from wordsieve.vocab import WordVocab

log = logging.getLogger(__name__)

SCOPES = ("current", "all")
STATS_COLUMNS = ["guess", "avg_group", "max_group", "entropy_bits", "solve_probability", "partitions"]


class WordleEngine:
    def __init__(self, words: Iterable[str] | WordVocab, config: Optional[EngineConfig] = None) -> None:
        self.config = config if config is not None else EngineConfig()
        if isinstance(words, WordVocab):
            vocab = words
        else:
            vocab = WordVocab.from_words(words, self.config.word_length)
        if vocab.word_length != self.config.word_length:
            raise LengthMismatchError(
                f"dictionary words have length {vocab.word_length}; engine is configured for {self.config.word_length}"
            )

        self.vocab = vocab
        self.codec = ResultCodec(self.config.max_word_length)
        self.codec.table(self.config.word_length)  # fail fast on unsupported lengths
        self.index = ClueIndex.build(vocab.words(), self.config.word_length, self.config.max_letter_repeat)
        self.partitions = PartitionCache(self.index, self.codec, vocab.words())
        self.session = ClueStack(vocab, self.index, self.codec)
        self._full = self.index.full()
        self._full_stats: Dict[int, GuessStats] = {}

    @classmethod
    def from_vocab(cls, vocab: WordVocab, config: Optional[EngineConfig] = None) -> "WordleEngine":
        """Engine over an already loaded vocabulary; the length comes from the words."""
        if config is None:
            config = EngineConfig(word_length=vocab.word_length)
        return cls(vocab, config)

    @classmethod
    def from_file(cls, path: str, config: Optional[EngineConfig] = None, **kwargs) -> "WordleEngine":
        config = config if config is not None else EngineConfig()
        return cls(WordVocab.from_file(path, config.word_length, **kwargs), config)

    @property
    def word_length(self) -> int:
        return self.config.word_length

    def __len__(self) -> int:
        return len(self.vocab)

    # -------------------------
    # Lookups
    # -------------------------
    def word_id(self, word: str) -> int:
        word = word.strip().lower()
        if len(word) != self.word_length:
            raise LengthMismatchError(f"'{word}' has length {len(word)}; expected {self.word_length}")
        if word not in self.vocab:
            raise UnknownWordError(f"'{word}' is not in the dictionary")
        return self.vocab.index_of(word)

    def _guess_id(self, guess: str | int) -> int:
        if isinstance(guess, str):
            return self.word_id(guess)
        self.vocab.word_at(guess)
        return int(guess)

    def words_of(self, ids: Iterable[int]) -> List[str]:
        return self.vocab.to_words(ids)

    def compare(self, guess: str, answer: str) -> int:
        return compare(guess, answer)

    def partition(self, guess: str | int) -> OutcomePartition:
        word_id = self._guess_id(guess)
        return self.partitions.get(word_id)

    def narrow(self, current: CandidateSet, guess: str, result: ResultLike) -> CandidateSet:
        clue = self.session.make_clue(guess, result)
        return narrow(self.index, current, clue.guess, clue.outcomes)

    # -------------------------
    # Clue stack
    # -------------------------
    def commit(self, guess: str, result: ResultLike) -> GuessClue:
        return self.session.commit(guess, result)

    def commit_pattern(self, pattern: str, include: str = "", exclude: str = "") -> PatternClue:
        return self.session.commit_pattern(pattern, include, exclude)

    def pop(self) -> Clue:
        return self.session.pop()

    def reset(self) -> None:
        self.session.reset()

    @property
    def candidates(self) -> CandidateSet:
        return self.session.candidates

    @property
    def history(self) -> List[Clue]:
        return self.session.history

    # -------------------------
    # Preprocessing
    # -------------------------
    def preprocess_step(self, chunk_size: Optional[int] = None) -> PreprocessProgress:
        """Build the next chunk of partitions; call until `.complete`."""
        return self.partitions.step(chunk_size or self.config.chunk_size)

    def preprocess(self, progress: bool = False) -> PreprocessProgress:
        """Build every partition, optionally behind a progress bar."""
        state = self.partitions.progress()
        with tqdm(total=state.total, initial=state.done, disable=not progress, desc="Preprocessing") as bar:
            while not state.complete:
                nxt = self.preprocess_step()
                bar.update(nxt.done - state.done)
                state = nxt
        log.info("%d words are analyzed; %d results each", len(self.vocab), self.codec.table(self.word_length).shape[0])
        return state

    # -------------------------
    # Scoring
    # -------------------------
    def _scope_set(self, scope: str) -> CandidateSet:
        if scope == "current":
            return self.candidates
        if scope == "all":
            return self._full
        raise ValueError(f"unknown scope '{scope}' (choose from {', '.join(SCOPES)})")

    def score(self, guess: str | int, scope: str = "current") -> GuessStats:
        word_id = self._guess_id(guess)
        if scope == "all":
            cached = self._full_stats.get(word_id)
            if cached is None:
                cached = score(self.partitions.get(word_id), self._full)
                self._full_stats[word_id] = cached
            return cached
        return score(self.partitions.get(word_id), self._scope_set(scope))

    def score_joint(self, guesses: Sequence[str], scope: str = "current") -> GuessStats:
        parts = [self.partition(g) for g in guesses]
        return score_joint(parts, self._scope_set(scope))

    def stats_for(self, ids: Iterable[int], scope: str = "current") -> Dict[int, GuessStats]:
        return {i: self.score(i, scope) for i in ids}

    def listing(
        self,
        order: str = "alpha",
        scope: str = "current",
        guesses: str = "current",
        limit: Optional[int] = None,
    ) -> List[str]:
        """
        Words sorted by `order` (see scoring.rank).

        `guesses` picks which words are listed ('current' candidates or
        'all' words); `scope` picks the answer pool their stats are
        computed against.
        """
        ids = self._scope_set(guesses).to_list()
        stats = {} if order in ("alpha", "r-alpha") else self.stats_for(ids, scope)
        ranked = rank(ids, self.vocab.words(), stats, order)
        if limit is not None:
            ranked = ranked[:limit]
        return self.words_of(ranked)

    def stats_table(self, scope: str = "current", guesses: str = "all", order: str = "ave") -> pd.DataFrame:
        """One row of stats per guess word, sorted by `order`."""
        ids = self._scope_set(guesses).to_list()
        stats = self.stats_for(ids, scope)
        ranked = rank(ids, self.vocab.words(), stats, order)
        rows = [{"guess": self.vocab.word_at(i), **stats[i].as_dict()} for i in ranked]
        return pd.DataFrame(rows, columns=STATS_COLUMNS)

    # -------------------------
    # Pair / triple search
    # -------------------------
    def best_combination(
        self,
        size: int,
        scope: str = "current",
        guesses: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
        progress: bool = False,
    ) -> ComboSearchResult:
        ids = None if guesses is None else [self.word_id(g) for g in guesses]
        return search_combinations(
            self.vocab.words(),
            self.partitions.get,
            self._scope_set(scope),
            size,
            guesses=ids,
            limit=limit,
            progress=progress,
        )

    def best_pair(self, **kwargs) -> ComboSearchResult:
        return self.best_combination(2, **kwargs)

    def best_triple(self, **kwargs) -> ComboSearchResult:
        return self.best_combination(3, **kwargs)
