import numpy as np
import pytest

from wordsieve.engine import WordleEngine
from wordsieve.errors import (
    EmptyStackError,
    LengthMismatchError,
    MalformedClueError,
    MalformedPatternError,
    UnknownWordError,
    WordsieveError,
)
from wordsieve.feedback import compare
from wordsieve.session import GuessClue, PatternClue

TOY = ["alert", "crane", "slate", "plate", "grate"]


@pytest.fixture
def engine():
    return WordleEngine(TOY)


def test_starts_initial(engine):
    assert engine.session.is_initial
    assert len(engine.candidates) == len(TOY)


def test_commit_narrows(engine):
    clue = engine.commit("crane", "NNHNH")
    assert isinstance(clue, GuessClue)
    assert clue.code == compare("crane", "slate")
    assert engine.words_of(engine.candidates) == ["slate", "plate"]
    assert not engine.session.is_initial


def test_commit_accepts_codes_and_outcome_lists(engine):
    engine.commit("crane", compare("crane", "slate"))
    by_code = engine.candidates
    engine.reset()
    engine.commit("crane", [0, 0, 2, 0, 2])
    assert engine.candidates == by_code


def test_commit_pop_commit_matches_single_commit(engine):
    engine.commit("crane", "NNHNH")
    once = engine.candidates
    engine.pop()
    assert len(engine.candidates) == len(TOY)
    engine.commit("crane", "NNHNH")
    assert engine.candidates == once


def test_pop_replays_remaining_clues(engine):
    engine.commit("crane", "NNHNH")
    after_first = engine.candidates
    engine.commit("slate", "NHHHH")
    assert engine.words_of(engine.candidates) == ["plate"]
    popped = engine.pop()
    assert popped.guess == "slate"
    assert engine.candidates == after_first
    assert [c.guess for c in engine.history] == ["crane"]


def test_pop_empty_stack(engine):
    with pytest.raises(EmptyStackError):
        engine.pop()


def test_reset(engine):
    engine.commit("crane", "NNHNH")
    engine.commit_pattern("p....")
    engine.reset()
    assert engine.session.is_initial
    assert len(engine.candidates) == len(TOY)


@pytest.mark.parametrize(
    "guess,result,error",
    [
        ("zzzzz", "NNNNN", UnknownWordError),
        ("cran", "NNNN", LengthMismatchError),
        ("crane", "NNH", LengthMismatchError),
        ("crane", "NNXNH", MalformedClueError),
        ("crane", 243, MalformedClueError),
        ("crane", [0, 0, 5, 0, 0], MalformedClueError),
    ],
)
def test_rejected_commit_leaves_state_unchanged(engine, guess, result, error):
    engine.commit("crane", "NNHNH")
    before = engine.candidates
    with pytest.raises(error):
        engine.commit(guess, result)
    assert engine.candidates == before
    assert len(engine.history) == 1


def test_errors_share_a_base_class(engine):
    with pytest.raises(WordsieveError):
        engine.commit("zzzzz", "NNNNN")
    with pytest.raises(KeyError):
        engine.commit("zzzzz", "NNNNN")


def test_commit_pattern_and_pop(engine):
    clue = engine.commit_pattern("..ate", exclude="g")
    assert isinstance(clue, PatternClue)
    assert engine.words_of(engine.candidates) == ["slate", "plate"]
    engine.commit("plate", "NHHHH")
    assert engine.words_of(engine.candidates) == ["slate"]
    engine.pop()
    assert engine.words_of(engine.candidates) == ["slate", "plate"]
    with pytest.raises(MalformedPatternError):
        engine.commit_pattern("..at!")
    assert len(engine.history) == 1


def test_describe(engine):
    engine.commit("crane", "nnhnh")
    engine.commit_pattern("[sp]late", include="l")
    assert engine.session.describe() == ["[0] crane NNHNH", "[1] pattern [ps]late +l"]


def test_engine_checks_word_length():
    from wordsieve.config import EngineConfig
    from wordsieve.vocab import WordVocab

    with pytest.raises(LengthMismatchError):
        WordleEngine(WordVocab(["ab", "cd"]), EngineConfig(word_length=5))


def test_commit_accepts_numpy_codes(engine):
    part = engine.partition("crane")
    slate = engine.word_id("slate")
    engine.commit("crane", part.word_codes[slate])
    assert engine.words_of(engine.candidates) == ["slate", "plate"]
    engine.reset()
    engine.commit("crane", np.int64(compare("crane", "slate")))
    assert engine.words_of(engine.candidates) == ["slate", "plate"]


def test_commit_rejects_non_sequence_results(engine):
    with pytest.raises(MalformedClueError):
        engine.commit("crane", 1.5)
    assert engine.session.is_initial
