# pegcore/__init__.py
"""pegcore: a Parsing Expression Grammar engine.

This package provides:
- Rule constructors (literal, char_range, any_char, optional, zero_or_more,
  one_or_more, and_, not_, sequence, choice) that compose into a recursive
  descent recognizer
- `alias` / `grammar` for named, mutually recursive rule sets
- parse / parse_all / match / match_all on every rule and grammar
- A PEG text notation front end (`parse_peg_grammar`, `load_grammar`)

No memoization is done; evaluation is plain backtracking recursive descent.
Every nesting level of the input costs a handful of Python frames per rule
on the path (about a dozen for a JSON array), so JSON-like input nested much
past a hundred levels deep hits the interpreter recursion limit and raises
RecursionError. Raise the limit with sys.setrecursionlimit when deeper input
is expected.
"""

from .ast import ST, AST, Rule
from .errors import PegError, NoMatch, ConfigurationError
from .rules import (
    literal, char_range, any_char, optional, zero_or_more, one_or_more,
    and_, not_, sequence, choice, alias,
)
from .grammar import Grammar, grammar
from .parser import parse_peg_grammar
from .loader import load_grammar

__all__ = [
    "ST", "AST", "Rule",
    "PegError", "NoMatch", "ConfigurationError",
    "literal", "char_range", "any_char", "optional", "zero_or_more",
    "one_or_more", "and_", "not_", "sequence", "choice", "alias",
    "Grammar", "grammar",
    "parse_peg_grammar", "load_grammar",
]
