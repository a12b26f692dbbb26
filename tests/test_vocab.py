import logging

import pandas as pd
import pytest

from wordsieve.vocab import WordVocab, clean_words


def test_clean_words_counts_drops():
    raw = ["crane", "Slate", "cr4ne", "toolong", "crane", "abc", None, "plate"]
    words, report = clean_words(raw, 5)
    assert words == ["crane", "slate", "plate"]
    assert report.loaded == 3
    assert report.wrong_length == 3  # toolong, abc, None
    assert report.invalid_chars == 1
    assert report.duplicate == 1


def test_from_words_logs_warnings(caplog):
    with caplog.at_level(logging.WARNING, logger="wordsieve.vocab"):
        v = WordVocab.from_words(["crane", "crane", "abc"], 5)
    assert len(v) == 1
    assert "duplicates" in caplog.text
    assert "wrong size" in caplog.text
    assert v.report.duplicate == 1


def test_from_words_nothing_left():
    with pytest.raises(ValueError):
        WordVocab.from_words(["abc", "toolong"], 5)


def test_vocab_protocol():
    v = WordVocab(["crane", "slate", "plate"])
    assert v.word_length == 5
    assert v.index_of("slate") == 1
    assert v.word_at(2) == "plate"
    assert "crane" in v
    assert "grate" not in v
    assert v.to_words([2, 0]) == ["plate", "crane"]
    assert v.to_indices(["plate", "crane"]) == [2, 0]
    with pytest.raises(KeyError):
        v.index_of("grate")
    with pytest.raises(IndexError):
        v.word_at(3)


def test_vocab_rejects_bad_input():
    with pytest.raises(ValueError):
        WordVocab(["crane", "crane"])
    with pytest.raises(ValueError):
        WordVocab(["crane", "slates"])
    with pytest.raises(ValueError):
        WordVocab(["Crane"])
    with pytest.raises(TypeError):
        WordVocab(("crane",))


def test_from_csv(tmp_path):
    path = tmp_path / "word_list.csv"
    pd.DataFrame(
        {"word": ["crane", "slate", "PLATE", "crane", "xx"], "day": [1, None, 3, None, None]}
    ).to_csv(path, index=False)
    assert WordVocab.from_csv(path).words() == ["crane", "slate", "plate"]
    assert WordVocab.from_csv(path, answers_only=True).words() == ["crane", "plate"]
    with pytest.raises(KeyError):
        WordVocab.from_csv(path, column="words")


def test_from_text_and_from_file(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("crane\nslate plate\n\ngrate\n", encoding="utf-8")
    assert WordVocab.from_text(path).words() == ["crane", "slate", "plate", "grate"]
    assert WordVocab.from_file(path).words() == ["crane", "slate", "plate", "grate"]
