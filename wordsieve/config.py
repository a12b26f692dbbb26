from __future__ import annotations

from dataclasses import dataclass

from wordsieve.errors import InvalidLengthError


@dataclass(frozen=True)
class EngineConfig:
    """
    Knobs for a WordleEngine.

    word_length : int, default=5
        Length of every dictionary word.
    max_word_length : int, default=15
        Ceiling on `word_length`; 3**L decode tables grow fast past this.
    max_letter_repeat : int, default=4
        Highest letter count the ClueIndex keeps at-least/exactly sets for.
        Counts above it are clamped in `at_least` (see ClueIndex).
    chunk_size : int, default=100
        Guesses per preprocessing step.
    """

    word_length: int = 5
    max_word_length: int = 15
    max_letter_repeat: int = 4
    chunk_size: int = 100

    def __post_init__(self) -> None:
        if not isinstance(self.word_length, int) or not isinstance(self.max_word_length, int):
            raise TypeError("word_length and max_word_length must be integers")
        if self.word_length < 1 or self.word_length > self.max_word_length:
            raise InvalidLengthError(
                f"word length {self.word_length} outside supported range 1..{self.max_word_length}"
            )
        if self.max_letter_repeat < 1:
            raise ValueError("max_letter_repeat must be positive")
        if self.chunk_size < 1:
            raise ValueError("chunk_size must be positive")
