"""
solver/solver_cli.py

Interactive Wordle analyzer (human-in-the-loop):
- Load a word list, then type commands. Guess partitions are built as
  they are needed, or all up front with --preprocess.
- Give each guess you played with its result: N=Nowhere, E=Elsewhere, H=Here
  (g/y/b and 2/1/0 work too). The candidate list narrows as clues stack up.

Run:
  python -m solver.solver_cli --words word_list.csv
  python -m solver.solver_cli --words sgb-words.txt --length 5

Commands (all but pattern can be shortened to their first letter):
  clue WORD RESULT              add a clue, e.g. 'clue start EHNNN'
  pattern PATTERN [+inc] [-exc] filter by pattern ('f' for short), e.g. 'pattern .r[ae].. +e -st'
  pop                           remove the most recent clue
  reset                         erase all clues
  status                        show the clue stack
  words [sort=alpha] [count=10] [output=screen] [scope=current]
                                list remaining words
  info WORD [WORD ...]          stats for one guess, or for guesses played together
  best pair|triple [limit=50]   search the best pair/triple of guesses
  help                          this text
  quit                          exit
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Dict, List, Optional

from wordsieve.config import EngineConfig
from wordsieve.engine import SCOPES, WordleEngine
from wordsieve.errors import WordsieveError
from wordsieve.scoring import SORT_ORDERS, GuessStats

HELP = __doc__.split("Commands", 1)[1]


def _fmt_stats(s: GuessStats) -> str:
    return (
        f"exp_rem={s.avg_group:.2f}, worst={s.max_group}, H={s.entropy_bits:.3f}, "
        f"solve={s.solve_probability:.3f}, parts={s.partitions}"
    )


def parse_options(args: List[str], defaults: Dict[str, str]) -> Dict[str, str]:
    """Parse 'key=value' words (or bare values in default order) into a dict."""
    opts = dict(defaults)
    keys = list(defaults)
    for pos, arg in enumerate(args):
        if "=" in arg:
            key, value = arg.split("=", 1)
            if key not in defaults:
                raise ValueError(f"unknown option '{key}' (options: {', '.join(keys)})")
            opts[key] = value
        elif pos < len(keys):
            opts[keys[pos]] = arg
        else:
            raise ValueError(f"unexpected argument '{arg}'")
    return opts


class WordleShell:
    def __init__(self, engine: WordleEngine, out=None) -> None:
        self.engine = engine
        self.out = out if out is not None else sys.stdout

    def say(self, *parts) -> None:
        print(*parts, file=self.out)

    # ----- commands -----
    def cmd_clue(self, args: List[str]) -> None:
        if len(args) != 2:
            raise ValueError("'clue' requires exactly two arguments: clue WORD RESULT")
        self.engine.commit(args[0], args[1])
        self.cmd_status([])

    def cmd_pattern(self, args: List[str]) -> None:
        if not args:
            raise ValueError("'pattern' requires a pattern, e.g. 'pattern .r[ae]..'")
        include = "".join(a[1:] for a in args[1:] if a.startswith("+"))
        exclude = "".join(a[1:] for a in args[1:] if a.startswith("-"))
        stray = [a for a in args[1:] if not a.startswith(("+", "-"))]
        if stray:
            raise ValueError(f"include/exclude letters must start with + or - (got {' '.join(stray)})")
        self.engine.commit_pattern(args[0], include, exclude)
        self.cmd_status([])

    def cmd_pop(self, args: List[str]) -> None:
        clue = self.engine.pop()
        self.say(f"Removed clue: {clue.describe()}")
        self.cmd_status([])

    def cmd_reset(self, args: List[str]) -> None:
        self.say("Clearing all current clues.")
        self.engine.reset()

    def cmd_status(self, args: List[str]) -> None:
        lines = self.engine.session.describe()
        if not lines:
            self.say("No clues currently enforced.")
        for line in lines:
            self.say("  " + line)
        self.say(f"Remaining candidates: {len(self.engine.candidates)}")

    def cmd_words(self, args: List[str]) -> None:
        opts = parse_options(args, {"sort": "alpha", "count": "10", "output": "screen", "scope": "current"})
        if opts["sort"] not in SORT_ORDERS:
            raise ValueError(f"unknown sort '{opts['sort']}' (choose from {', '.join(SORT_ORDERS)})")
        if opts["scope"] not in SCOPES:
            raise ValueError(f"unknown scope '{opts['scope']}' (choose from {', '.join(SCOPES)})")
        count = int(opts["count"])
        if count < 1:
            raise ValueError(f"count must be at least 1 (got {count})")

        if opts["output"] != "screen":
            table = self.engine.stats_table(scope="current", guesses=opts["scope"], order=opts["sort"])
            table.head(count).to_csv(opts["output"], index=False)
            self.say(f"Wrote {min(count, len(table))} rows to {opts['output']}")
            return

        words = self.engine.listing(opts["sort"], scope="current", guesses=opts["scope"])
        with_stats = opts["sort"] not in ("alpha", "r-alpha")
        for word in words[:count]:
            if with_stats:
                self.say(f"  {word}  ({_fmt_stats(self.engine.score(word))})")
            else:
                self.say(f"  {word}")
        if count < len(words):
            self.say(f"...plus {len(words) - count} more.")

    def cmd_info(self, args: List[str]) -> None:
        if not args:
            raise ValueError("'info' requires at least one word")
        if len(args) == 1:
            stats = self.engine.score(args[0])
        else:
            stats = self.engine.score_joint(args)
        self.say(f"{' + '.join(args)}: {_fmt_stats(stats)}")

    def cmd_best(self, args: List[str]) -> None:
        opts = parse_options(args, {"size": "pair", "limit": "50"})
        sizes = {"pair": 2, "triple": 3, "2": 2, "3": 3}
        if opts["size"] not in sizes:
            raise ValueError("'best' takes 'pair' or 'triple'")
        result = self.engine.best_combination(sizes[opts["size"]], limit=int(opts["limit"]), progress=True)
        self.say(f"Evaluated {result.evaluated} combinations.")
        for row in result.rows():
            self.say(
                f"  best {row['metric']:<17} {row['guesses']:<20} "
                f"(exp_rem={row['avg_group']:.2f}, worst={row['max_group']}, "
                f"H={row['entropy_bits']:.3f}, solve={row['solve_probability']:.3f})"
            )

    def cmd_help(self, args: List[str]) -> None:
        self.say("Commands" + HELP)

    COMMANDS = {
        "clue": cmd_clue,
        "pattern": cmd_pattern,
        "pop": cmd_pop,
        "reset": cmd_reset,
        "status": cmd_status,
        "words": cmd_words,
        "info": cmd_info,
        "best": cmd_best,
        "help": cmd_help,
    }
    # 'p' is pop; 'f' (filter) is the short form of pattern
    ALIASES = {
        "c": "clue", "f": "pattern", "filter": "pattern", "p": "pop", "r": "reset",
        "s": "status", "w": "words", "i": "info", "b": "best", "h": "help",
    }

    def execute(self, line: str) -> bool:
        """Run one command line. Returns False when the user asks to quit."""
        args = line.split()
        if not args:
            return True
        name = args[0].lower()
        if name in {"q", "quit", "exit"}:
            return False
        name = self.ALIASES.get(name, name)
        if name not in self.COMMANDS:
            self.say(f"Error: Unknown command '{args[0]}'.")
            return True
        try:
            self.COMMANDS[name](self, args[1:])
        except (WordsieveError, ValueError) as e:
            self.say(f"Error: {e}")
        return True


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Interactive Wordle analyzer (manual clues)")
    ap.add_argument("--words", default="word_list.csv", help="Word list (.csv with a 'word' column, or plain text)")
    ap.add_argument("--length", type=int, default=5, help="Word length")
    ap.add_argument("--answers-only", action="store_true", help="CSV only: keep rows with a 'day' value")
    ap.add_argument("--max-repeat", type=int, default=4, help="Letter-count bound for the clue index")
    ap.add_argument(
        "--preprocess",
        action="store_true",
        help="Build every guess partition before the prompt (default: build on demand)",
    )
    ap.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s: %(message)s")

    config = EngineConfig(word_length=args.length, max_letter_repeat=args.max_repeat)
    extra = {"answers_only": True} if args.answers_only else {}
    engine = WordleEngine.from_file(args.words, config, **extra)
    shell = WordleShell(engine)

    shell.say("Wordle Analyzer! Type 'help' for commands.")
    if args.preprocess:
        engine.preprocess(progress=True)

    while True:
        try:
            line = input("> ")
        except EOFError:
            shell.say("bye!")
            return
        if not shell.execute(line):
            shell.say("bye!")
            return


if __name__ == "__main__":
    main()
