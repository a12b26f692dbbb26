import pytest

from wordsieve.errors import InvalidLengthError, LengthMismatchError, MalformedClueError
from wordsieve.feedback import (
    Outcome,
    ResultCodec,
    compare,
    encode,
    is_valid_for,
    parse_hen,
    score_pattern,
    to_hen,
)


def test_score_pattern_duplicate_letters():
    assert to_hen(score_pattern("crane", "crane")) == "HHHHH"
    assert to_hen(score_pattern("allot", "total")) == "EENEE"
    assert to_hen(score_pattern("abbey", "cabin")) == "ENHNN"
    assert to_hen(score_pattern("press", "spree")) == "EEEEN"


def test_crane_against_slate():
    assert to_hen(score_pattern("crane", "slate")) == "NNHNH"
    # position 0 is the least significant digit
    assert compare("crane", "slate") == 2 * 3**2 + 2 * 3**4 == 180


def test_compare_length_mismatch():
    with pytest.raises(LengthMismatchError):
        compare("crane", "slates")


@pytest.mark.parametrize("length", [1, 2, 3, 5, 6])
def test_decode_encode_round_trip(length):
    codec = ResultCodec()
    for code in range(3**length):
        assert codec.encode(codec.decode(code, length)) == code


def test_decode_table_is_cached_per_instance():
    a, b = ResultCodec(), ResultCodec()
    assert a.table(5) is a.table(5)
    assert a.table(5) is not b.table(5)
    assert a.table(5).shape == (243, 5)


def test_codec_rejects_unsupported_lengths():
    codec = ResultCodec(max_length=15)
    with pytest.raises(InvalidLengthError):
        codec.table(16)
    with pytest.raises(InvalidLengthError):
        codec.decode(0, 0)
    with pytest.raises(MalformedClueError):
        codec.decode(243, 5)


def test_parse_hen_round_trip():
    codec = ResultCodec()
    for text in ["NNHNH", "hheen", "EEEEN", "nnnnn"]:
        parsed = parse_hen(text)
        assert codec.decode(encode(parsed), len(parsed)) == parsed
        assert to_hen(parsed) == text.upper()


def test_parse_hen_accepts_colour_and_digit_forms():
    expected = (Outcome.HERE, Outcome.ELSEWHERE, Outcome.NOWHERE, Outcome.NOWHERE, Outcome.HERE)
    assert parse_hen("HENNH") == expected
    assert parse_hen("gybbg") == expected
    assert parse_hen("21002") == expected
    assert parse_hen("[2, 1, 0, 0, 2]") == expected


def test_parse_hen_rejects_unknown_characters():
    # no silent fallback to a placeholder outcome
    with pytest.raises(MalformedClueError):
        parse_hen("NNXNH")
    with pytest.raises(MalformedClueError):
        parse_hen("")
    with pytest.raises(LengthMismatchError):
        parse_hen("NNH", length=5)


def test_encode_rejects_bad_values():
    with pytest.raises(MalformedClueError):
        encode([0, 1, 3])


def test_validity_nowhere_before_elsewhere():
    # 'e' marked NOWHERE at 0 cannot be ELSEWHERE at 1
    assert not is_valid_for(parse_hen("NENNN"), "eerie")
    # the other order is what compare produces
    assert is_valid_for(parse_hen("ENNNN"), "eerie")
    # different letters do not interact
    assert is_valid_for(parse_hen("NENNN"), "crane")
    assert not is_valid_for(parse_hen("NNNN"), "crane")


def test_compare_always_valid():
    words = ["eerie", "geese", "sense", "allot", "total", "llama", "abbey", "cabin"]
    for g in words:
        for w in words:
            assert is_valid_for(score_pattern(g, w), g)
