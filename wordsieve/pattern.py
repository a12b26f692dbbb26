"""
pattern.py

Ad hoc filtering by a positional pattern plus letters to include/exclude,
independent of guess outcomes.

Pattern syntax, one slot per position:
  .        any letter
  a        exactly this letter
  [abc]    one of these letters
  [^abc]   none of these letters

include: letters the word must contain, with multiplicity ('ee' = at least two e's)
exclude: letters the word may not contain beyond what `include` asks for
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Tuple

from wordsieve.clues import ClueIndex, letter_id
from wordsieve.errors import LengthMismatchError, MalformedPatternError
from wordsieve.idset import CandidateSet

_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyz")


@dataclass(frozen=True)
class Slot:
    letters: FrozenSet[str]  # empty means "any"
    negate: bool = False

    def render(self) -> str:
        if not self.letters:
            return "."
        if len(self.letters) == 1 and not self.negate:
            return next(iter(self.letters))
        return "[" + ("^" if self.negate else "") + "".join(sorted(self.letters)) + "]"


def parse_slots(pattern: str) -> List[Slot]:
    s = pattern.strip().lower()
    if not s:
        raise MalformedPatternError("pattern is empty")
    slots: List[Slot] = []
    i = 0
    while i < len(s):
        ch = s[i]
        if ch == ".":
            slots.append(Slot(frozenset()))
            i += 1
        elif ch in _LETTERS:
            slots.append(Slot(frozenset(ch)))
            i += 1
        elif ch == "[":
            end = s.find("]", i + 1)
            if end < 0:
                raise MalformedPatternError(f"unclosed '[' in pattern '{pattern}'")
            body = s[i + 1:end]
            negate = body.startswith("^")
            if negate:
                body = body[1:]
            if not body:
                raise MalformedPatternError(f"empty letter set in pattern '{pattern}'")
            bad = set(body) - _LETTERS
            if bad:
                raise MalformedPatternError(
                    f"invalid character(s) {''.join(sorted(bad))!r} in letter set of '{pattern}'"
                )
            slots.append(Slot(frozenset(body), negate))
            i = end + 1
        else:
            raise MalformedPatternError(f"invalid character {ch!r} in pattern '{pattern}'")
    return slots


def _letter_counts(letters: str, what: str) -> Counter:
    s = letters.strip().lower()
    bad = set(s) - _LETTERS
    if bad:
        raise MalformedPatternError(f"{what} letters must be a..z (got {''.join(sorted(bad))!r})")
    return Counter(s)


@dataclass(frozen=True)
class PatternFilter:
    slots: Tuple[Slot, ...]
    include: Tuple[Tuple[str, int], ...] = ()
    exclude: FrozenSet[str] = frozenset()

    @classmethod
    def parse(
        cls,
        pattern: str,
        include: str = "",
        exclude: str = "",
        word_length: Optional[int] = None,
    ) -> "PatternFilter":
        """Validate and parse; raises MalformedPatternError or LengthMismatchError."""
        slots = parse_slots(pattern)
        if word_length is not None and len(slots) != word_length:
            raise LengthMismatchError(
                f"pattern '{pattern}' has {len(slots)} positions; expected {word_length}"
            )
        inc = _letter_counts(include, "include")
        exc = _letter_counts(exclude, "exclude")
        return cls(tuple(slots), tuple(sorted(inc.items())), frozenset(exc))

    def apply(self, index: ClueIndex, current: CandidateSet) -> CandidateSet:
        """Keep the words of `current` that match the pattern and letter rules."""
        if len(self.slots) != index.word_length:
            raise LengthMismatchError(
                f"pattern has {len(self.slots)} positions; words have {index.word_length}"
            )
        result = current
        for pos, slot in enumerate(self.slots):
            if not slot.letters:
                continue
            allowed = CandidateSet.empty()
            for ch in slot.letters:
                allowed = allowed | index.position_set(pos, ch)
            if slot.negate:
                allowed = allowed.complement(index.num_words)
            result = result & allowed
            if not result:
                return result

        need = dict(self.include)
        for ch, count in need.items():
            result = result & self._count_set(index, ch, count, exact=False)
        for ch in self.exclude:
            result = result & self._count_set(index, ch, need.get(ch, 0), exact=True)
        return result

    @staticmethod
    def _count_set(index: ClueIndex, ch: str, count: int, exact: bool) -> CandidateSet:
        li = letter_id(ch)
        if count > index.max_letter_repeat:
            return index.count_set(li, count, exact=exact)
        return index.exactly(li, count) if exact else index.at_least(li, count)

    def describe(self) -> str:
        parts = ["".join(slot.render() for slot in self.slots)]
        if self.include:
            parts.append("+" + "".join(ch * n for ch, n in self.include))
        if self.exclude:
            parts.append("-" + "".join(sorted(self.exclude)))
        return " ".join(parts)
