import numpy as np

from wordsieve.idset import CandidateSet


def test_construction_sorts_and_dedupes():
    s = CandidateSet.from_ids([5, 1, 5, 3])
    assert s.to_list() == [1, 3, 5]
    assert len(CandidateSet.empty()) == 0
    assert CandidateSet.full(3).to_list() == [0, 1, 2]


def test_set_algebra():
    a = CandidateSet.from_ids([0, 1, 2, 5])
    b = CandidateSet.from_ids([1, 5, 6])
    assert (a & b).to_list() == [1, 5]
    assert (a | b).to_list() == [0, 1, 2, 5, 6]
    assert (a - b).to_list() == [0, 2]


def test_complement_and_mask():
    a = CandidateSet.from_ids([0, 2, 3])
    assert a.to_mask(5).tolist() == [True, False, True, True, False]
    assert a.complement(5).to_list() == [1, 4]
    assert a.complement(5).complement(5) == a
    assert CandidateSet.from_mask(np.array([False, True, True])).to_list() == [1, 2]


def test_membership_and_ids_are_read_only():
    a = CandidateSet.from_ids([2, 4])
    assert 4 in a
    assert np.int64(2) in a
    assert 3 not in a
    assert "4" not in a
    assert not a.ids.flags.writeable
