"""
idset.py

CandidateSet: an immutable, sorted, de-duplicated set of word ids backed by
a numpy array. Set algebra returns new sets, so a set handed out by the
ClueIndex can be shared freely.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List

import numpy as np

ID_DTYPE = np.int32


class CandidateSet:
    __slots__ = ("_ids",)

    def __init__(self, ids: np.ndarray | None = None, *, _trusted: bool = False) -> None:
        if ids is None:
            arr = np.empty(0, dtype=ID_DTYPE)
        elif _trusted:
            arr = ids
        else:
            arr = np.unique(np.asarray(ids, dtype=ID_DTYPE))
        arr.setflags(write=False)
        self._ids = arr

    # ---------- Construction helpers ----------

    @classmethod
    def full(cls, n: int) -> "CandidateSet":
        """All ids in [0, n)."""
        return cls(np.arange(n, dtype=ID_DTYPE), _trusted=True)

    @classmethod
    def empty(cls) -> "CandidateSet":
        return cls()

    @classmethod
    def from_ids(cls, ids: Iterable[int]) -> "CandidateSet":
        return cls(np.fromiter((int(i) for i in ids), dtype=ID_DTYPE))

    @classmethod
    def from_mask(cls, mask: np.ndarray) -> "CandidateSet":
        """Ids where a boolean mask over the dictionary is True."""
        return cls(np.flatnonzero(mask).astype(ID_DTYPE, copy=False), _trusted=True)

    # ---------- Set algebra ----------

    def __and__(self, other: "CandidateSet") -> "CandidateSet":
        return CandidateSet(np.intersect1d(self._ids, other._ids, assume_unique=True), _trusted=True)

    def __or__(self, other: "CandidateSet") -> "CandidateSet":
        return CandidateSet(np.union1d(self._ids, other._ids).astype(ID_DTYPE, copy=False), _trusted=True)

    def __sub__(self, other: "CandidateSet") -> "CandidateSet":
        return CandidateSet(np.setdiff1d(self._ids, other._ids, assume_unique=True), _trusted=True)

    def complement(self, n: int) -> "CandidateSet":
        """Ids in [0, n) not in this set."""
        return CandidateSet.from_mask(~self.to_mask(n))

    def to_mask(self, n: int) -> np.ndarray:
        """Boolean mask over [0, n), True at this set's ids."""
        mask = np.zeros(n, dtype=bool)
        mask[self._ids] = True
        return mask

    # ---------- Basic protocol ----------

    @property
    def ids(self) -> np.ndarray:
        """Read-only sorted id array."""
        return self._ids

    def __len__(self) -> int:
        return int(self._ids.size)

    def __bool__(self) -> bool:
        return self._ids.size > 0

    def __iter__(self) -> Iterator[int]:
        return (int(i) for i in self._ids)

    def __contains__(self, word_id: object) -> bool:
        if not isinstance(word_id, (int, np.integer)):
            return False
        pos = int(np.searchsorted(self._ids, word_id))
        return pos < self._ids.size and int(self._ids[pos]) == int(word_id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CandidateSet):
            return NotImplemented
        return np.array_equal(self._ids, other._ids)

    def __hash__(self) -> int:
        return hash(self._ids.tobytes())

    def __repr__(self) -> str:
        head = ", ".join(str(i) for i in self._ids[:8])
        more = ", ..." if self._ids.size > 8 else ""
        return f"CandidateSet([{head}{more}], size={self._ids.size})"

    def to_list(self) -> List[int]:
        return self._ids.tolist()
