"""
Feedback utilities for Wordle.

Outcomes per position are NOWHERE (0), ELSEWHERE (1) and HERE (2). A full
outcome sequence packs into a ResultCode, an int in [0, 3**L), with
position 0 as the least significant base-3 digit.
"""

from __future__ import annotations

import re
from collections import Counter
from enum import IntEnum
from typing import Dict, Iterable, Optional, Sequence, Tuple

import numpy as np

from wordsieve.errors import InvalidLengthError, LengthMismatchError, MalformedClueError


class Outcome(IntEnum):
    NOWHERE = 0
    ELSEWHERE = 1
    HERE = 2


# Accepted spellings for each outcome. H/E/N is the canonical form; the
# colour letters and digits are what the old helper CLI took.
_CHAR_TO_OUTCOME = {
    "n": Outcome.NOWHERE, "b": Outcome.NOWHERE, "0": Outcome.NOWHERE,
    "e": Outcome.ELSEWHERE, "y": Outcome.ELSEWHERE, "1": Outcome.ELSEWHERE,
    "h": Outcome.HERE, "g": Outcome.HERE, "2": Outcome.HERE,
}
_OUTCOME_TO_CHAR = {Outcome.NOWHERE: "N", Outcome.ELSEWHERE: "E", Outcome.HERE: "H"}


def score_pattern(guess: str, answer: str) -> list[Outcome]:
    """
    Compute the per-position outcome of `guess` against `answer`.

    Duplicate handling (two-pass rule)
    ----------------------------------
    1) HERE pass: exact matches are marked and their answer letters consumed.
    2) ELSEWHERE pass: left to right, a remaining guess letter is ELSEWHERE
       if the answer still has an unconsumed copy of it (which is consumed),
       otherwise NOWHERE.

    Raises
    ------
    LengthMismatchError
        If the two words differ in length.
    """
    if not isinstance(guess, str) or not isinstance(answer, str):
        raise TypeError("guess and answer must be strings")
    if len(guess) != len(answer):
        raise LengthMismatchError(
            f"guess '{guess}' and answer '{answer}' differ in length ({len(guess)} vs {len(answer)})"
        )

    pattern = [Outcome.NOWHERE] * len(guess)
    remaining = Counter()

    # Pass 1: mark HERE and count the unmatched answer letters
    for i, (g, a) in enumerate(zip(guess, answer)):
        if g == a:
            pattern[i] = Outcome.HERE
        else:
            remaining[a] += 1

    # Pass 2: mark ELSEWHERE where unconsumed copies remain
    for i, g in enumerate(guess):
        if pattern[i] != Outcome.HERE and remaining[g] > 0:
            pattern[i] = Outcome.ELSEWHERE
            remaining[g] -= 1

    return pattern


def encode(outcomes: Iterable[int]) -> int:
    """Pack an outcome sequence into its ResultCode: sum(outcomes[i] * 3**i)."""
    code = 0
    base = 1
    for p in outcomes:
        if p not in (0, 1, 2):
            raise MalformedClueError(f"outcome values must be 0, 1 or 2 (got {p!r})")
        code += int(p) * base
        base *= 3
    return code


def compare(guess: str, answer: str) -> int:
    """ResultCode that `guess` earns against `answer`."""
    return encode(score_pattern(guess, answer))


def is_valid_for(outcomes: Sequence[int], word: str) -> bool:
    """
    Return False when `outcomes` can never be produced by guessing `word`.

    A letter marked NOWHERE means the answer has no further copies of it, so
    the same letter cannot be marked ELSEWHERE at a later position. (The
    reverse order is fine: ELSEWHERE consumes first, then NOWHERE.)
    """
    if len(outcomes) != len(word):
        return False
    for pos, p in enumerate(outcomes):
        if p != Outcome.NOWHERE:
            continue
        for pos2 in range(pos + 1, len(word)):
            if outcomes[pos2] == Outcome.ELSEWHERE and word[pos2] == word[pos]:
                return False
    return True


def parse_hen(text: str, length: Optional[int] = None) -> Tuple[Outcome, ...]:
    """
    Parse a result string such as 'NEHNN' into outcomes.

    Letters are case-insensitive. H/E/N is the documented form; g/y/b and
    2/1/0 are also accepted, as is a list form like '[0, 1, 2, 2, 0]'.
    Any other character is an error rather than being guessed at.
    """
    if not isinstance(text, str):
        raise TypeError("result must be a string")
    s = text.strip().lower()
    if s.startswith("[") and s.endswith("]"):
        parts = [p for p in re.split(r"[\s,]+", s[1:-1]) if p]
        if any(len(p) != 1 for p in parts):
            raise MalformedClueError(f"cannot parse result list '{text}'")
        s = "".join(parts)
    if not s:
        raise MalformedClueError("result string is empty")

    out = []
    for ch in s:
        try:
            out.append(_CHAR_TO_OUTCOME[ch])
        except KeyError:
            raise MalformedClueError(
                f"invalid result character '{ch}' in '{text}' (use H, E or N)"
            ) from None
    if length is not None and len(out) != length:
        raise LengthMismatchError(f"result '{text}' has length {len(out)}; expected {length}")
    return tuple(out)


def to_hen(outcomes: Iterable[int]) -> str:
    """Render outcomes as an H/E/N string."""
    return "".join(_OUTCOME_TO_CHAR[Outcome(p)] for p in outcomes)


def num_codes(length: int) -> int:
    return 3 ** length


class ResultCodec:
    """
    Decodes ResultCodes for a given word length.

    Decoding every code of a length once is far cheaper than decoding per
    call, so each length gets one `(3**L, L)` table, built on first use and
    kept on this instance. Lengths above `max_length` are refused.
    """

    def __init__(self, max_length: int = 15) -> None:
        self.max_length = int(max_length)
        self._tables: Dict[int, np.ndarray] = {}

    def _check_length(self, length: int) -> None:
        if length < 1 or length > self.max_length:
            raise InvalidLengthError(
                f"word length {length} outside supported range 1..{self.max_length}"
            )

    def table(self, length: int) -> np.ndarray:
        """Read-only array whose row `code` holds the outcomes of that code."""
        self._check_length(length)
        tbl = self._tables.get(length)
        if tbl is None:
            codes = np.arange(num_codes(length), dtype=np.int64)
            weights = 3 ** np.arange(length, dtype=np.int64)
            tbl = ((codes[:, None] // weights[None, :]) % 3).astype(np.uint8)
            tbl.setflags(write=False)
            self._tables[length] = tbl
        return tbl

    def decode(self, code: int, length: int) -> Tuple[Outcome, ...]:
        tbl = self.table(length)
        if not 0 <= code < tbl.shape[0]:
            raise MalformedClueError(f"result code {code} out of range for length {length}")
        return tuple(Outcome(int(p)) for p in tbl[code])

    def encode(self, outcomes: Sequence[int]) -> int:
        self._check_length(len(outcomes))
        return encode(outcomes)

    def is_valid(self, code: int, word: str) -> bool:
        return is_valid_for(self.table(len(word))[code], word)


if __name__ == "__main__":
    # Quick sanity checks
    assert to_hen(score_pattern("crane", "crane")) == "HHHHH"
    assert to_hen(score_pattern("allot", "total")) == "EENEE"
    assert to_hen(score_pattern("crane", "slate")) == "NNHNH"
    assert compare("crane", "slate") == 2 * 9 + 2 * 81
    codec = ResultCodec()
    assert codec.decode(compare("abbey", "cabin"), 5) == parse_hen("ENHNN")
    print("feedback.py sanity checks passed.")
