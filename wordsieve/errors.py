"""
errors.py

Exceptions raised by the engine. Each one also derives from the builtin
that callers of the old helpers already caught (ValueError / KeyError /
IndexError), so `except ValueError` keeps working.
"""


class WordsieveError(Exception):
    """Base class for every error the engine raises on bad input."""


class LengthMismatchError(WordsieveError, ValueError):
    """Guess, result or pattern length differs from the configured word length."""


class UnknownWordError(WordsieveError, KeyError):
    """Guess is not in the loaded dictionary."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep messages readable
        return str(self.args[0]) if self.args else ""


class MalformedPatternError(WordsieveError, ValueError):
    """Bad positional-pattern or include/exclude syntax."""


class MalformedClueError(WordsieveError, ValueError):
    """Result string or outcome sequence that cannot be parsed."""


class EmptyStackError(WordsieveError, IndexError):
    """Pop with no clues on the stack."""


class InvalidLengthError(WordsieveError, ValueError):
    """Word length outside the supported ResultCode domain."""
