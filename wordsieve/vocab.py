from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Tuple

import pandas as pd

log = logging.getLogger(__name__)

_ALPHABET = frozenset("abcdefghijklmnopqrstuvwxyz")


@dataclass
class LoadReport:
    """What the loader kept and why it dropped the rest."""

    loaded: int = 0
    wrong_length: int = 0
    invalid_chars: int = 0
    duplicate: int = 0

    def log_warnings(self, word_len: int) -> None:
        if self.wrong_length:
            log.warning("eliminated %d words of the wrong size (expected %d)", self.wrong_length, word_len)
        if self.invalid_chars:
            log.warning("eliminated %d words with invalid characters", self.invalid_chars)
        if self.duplicate:
            log.warning("eliminated %d words that were duplicates", self.duplicate)
        log.info("loaded %d valid words", self.loaded)


def clean_words(
    raw: Iterable[object],
    word_len: int,
    *,
    lowercase: bool = True,
) -> Tuple[List[str], LoadReport]:
    """
    Keep words of length `word_len` made of a..z, first occurrence wins.

    Returns the kept words and a LoadReport with the drop counters.
    """
    report = LoadReport()
    clean: List[str] = []
    seen = set()
    for val in raw:
        if not isinstance(val, str):
            val = str(val) if val is not None else ""
        w = val.strip()
        if lowercase:
            w = w.lower()
        if len(w) != word_len:
            report.wrong_length += 1
            continue
        if not set(w) <= _ALPHABET:
            report.invalid_chars += 1
            continue
        if w in seen:
            report.duplicate += 1
            continue
        seen.add(w)
        clean.append(w)
    report.loaded = len(clean)
    return clean, report


class WordVocab:
    """
    The dictionary: a fixed list of equal-length lowercase words, each with a
    dense id in [0, N). The list is never reordered after construction;
    rankings work on id lists instead.
    """

    def __init__(self, words: List[str], report: LoadReport | None = None) -> None:
        if not isinstance(words, list):
            raise TypeError("`words` must be a list of strings")
        if not words:
            raise ValueError("no words provided")
        if not all(isinstance(w, str) for w in words):
            raise TypeError("all items in `words` must be str")

        # Enforce uniqueness (first occurrence policy is handled by clean_words)
        if len(set(words)) != len(words):
            raise ValueError("duplicate words detected; input to WordVocab must be deduplicated")
        lengths = {len(w) for w in words}
        if len(lengths) != 1:
            raise ValueError(f"words must share one length (got lengths {sorted(lengths)})")
        for w in words:
            if not set(w) <= _ALPHABET:
                raise ValueError(f"word '{w}' is not lowercase a..z")

        self._words: Tuple[str, ...] = tuple(words)
        self._index = {w: i for i, w in enumerate(self._words)}
        self.word_length: int = lengths.pop()
        self.report = report if report is not None else LoadReport(loaded=len(words))

    # ---------- Construction helpers ----------

    @classmethod
    def from_words(cls, raw: Iterable[object], word_len: int = 5) -> "WordVocab":
        """Validate, dedupe and load an arbitrary iterable of candidate words."""
        clean, report = clean_words(raw, word_len)
        report.log_warnings(word_len)
        if not clean:
            raise ValueError("no valid words after filtering")
        return cls(clean, report)

    @classmethod
    def from_text(cls, path: str | Path, word_len: int = 5) -> "WordVocab":
        """Load whitespace-separated words from a plain text file."""
        text = Path(path).read_text(encoding="utf-8")
        log.info("reading words from %s", path)
        return cls.from_words(text.split(), word_len)

    @classmethod
    def from_csv(
        cls,
        path: str | Path,
        column: str = "word",
        *,
        word_len: int = 5,
        answers_only: bool = False,
    ) -> "WordVocab":
        """
        Load words from a CSV and build a WordVocab.

        Parameters
        ----------
        path : str
            Path to CSV file.
        column : str
            Column name containing words.
        word_len : int, default=5
            Required word length.
        answers_only : bool, default=False
            If True, keep only rows whose 'day' column is set (the official
            answer list in word_list.csv).

        Raises
        ------
        FileNotFoundError, KeyError, ValueError
        """
        df = pd.read_csv(path)
        if column not in df.columns:
            raise KeyError(f"column '{column}' not found in {path}")
        if answers_only:
            if "day" not in df.columns:
                raise KeyError(f"column 'day' not found in {path}")
            df = df[df["day"].notna()]
        log.info("reading words from %s", path)
        return cls.from_words(df[column].tolist(), word_len)

    @classmethod
    def from_file(cls, path: str | Path, word_len: int = 5, **kwargs) -> "WordVocab":
        """Pick the CSV or plain-text loader by file suffix."""
        if str(path).lower().endswith(".csv"):
            return cls.from_csv(path, word_len=word_len, **kwargs)
        return cls.from_text(path, word_len)

    # ---------- Basic protocol ----------

    def __len__(self) -> int:
        """Number of words in the vocabulary."""
        return len(self._words)

    def __contains__(self, word: object) -> bool:
        return word in self._index

    def __iter__(self):
        return iter(self._words)

    def words(self) -> List[str]:
        """Return a copy of the word list."""
        return list(self._words)

    def index_of(self, word: str) -> int:
        """Return the index for `word`; raise KeyError if unknown."""
        try:
            return self._index[word]
        except KeyError:
            raise KeyError(f"unknown word: {word}") from None

    def word_at(self, idx: int) -> str:
        """Return the word at position `idx`; raise IndexError if out of bounds."""
        if idx < 0 or idx >= len(self._words):
            raise IndexError(f"index out of range: {idx}")
        return self._words[idx]

    def to_indices(self, words: Iterable[str]) -> List[int]:
        """Convert words to indices; raise KeyError on the first missing."""
        return [self.index_of(w) for w in words]

    def to_words(self, indices: Iterable[int]) -> List[str]:
        """Convert indices to words; raise IndexError on the first invalid index."""
        return [self.word_at(int(i)) for i in indices]
