from wordsieve.engine import WordleEngine
from wordsieve.feedback import score_pattern, to_hen


def test_pruning_after_allot_pattern():
    # Small controlled pool so the test doesn't depend on a CSV
    words = ["total", "stoal", "allot", "tally", "alloy", "atoll"]
    engine = WordleEngine(words)
    patt = score_pattern("allot", "total")
    assert to_hen(patt) == "EENEE"

    engine.commit("allot", patt)
    remaining = engine.words_of(engine.candidates)

    # "total" and "stoal" are consistent; others are not.
    assert "total" in remaining
    assert "stoal" in remaining
    assert "allot" not in remaining  # yellows forbid those slots
    assert "tally" not in remaining
    assert "alloy" not in remaining
    assert "atoll" not in remaining


def test_pruning_is_monotonic_with_more_feedback():
    words = ["total", "stoal", "bleed", "blend", "allot"]
    engine = WordleEngine(words)
    sizes = [len(engine.candidates)]
    engine.commit("allot", score_pattern("allot", "total"))
    rem1 = set(engine.candidates)
    sizes.append(len(rem1))
    engine.commit("stoal", score_pattern("stoal", "total"))
    rem2 = set(engine.candidates)
    sizes.append(len(rem2))
    # Candidate set should not grow as we add constraints
    assert rem2.issubset(rem1)
    assert sizes == sorted(sizes, reverse=True)
    assert engine.words_of(engine.candidates) == ["total"]
