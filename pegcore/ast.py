# pegcore/ast.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple, TYPE_CHECKING

from .errors import ConfigurationError, NoMatch

if TYPE_CHECKING:
    from .grammar import Grammar

# ---- Parse results ----

@dataclass(frozen=True)
class ST:
    """Concrete syntax tree node. Mirrors the rules traversed on success."""
    start: int
    end: int
    children: Tuple["ST", ...] = ()

@dataclass(frozen=True)
class AST:
    """Materialized root result: value == text[start:end]."""
    start: int
    end: int
    value: str


# ---- Invocation facade ----

class Rule:
    """Base of every rule node.

    All public operations are derived from `evaluate`, which returns an `ST`
    on success and None on failure.
    """
    __slots__ = ()

    def evaluate(self, text: str, pos: int = 0) -> Optional[ST]:
        from .engine import evaluate
        if not 0 <= pos <= len(text):
            raise ConfigurationError(f"position {pos} outside of input (0..{len(text)})")
        return evaluate(self, text, pos, None)

    def parse(self, text: str) -> AST:
        st = self.evaluate(text, 0)
        if st is None:
            raise NoMatch()
        return AST(st.start, st.end, text[st.start:st.end])

    def parse_all(self, text: str) -> AST:
        st = self.evaluate(text, 0)
        if st is None or st.end != len(text):
            raise NoMatch()
        return AST(st.start, st.end, text[st.start:st.end])

    def match(self, text: str) -> bool:
        return self.evaluate(text, 0) is not None

    def match_all(self, text: str) -> bool:
        st = self.evaluate(text, 0)
        return st is not None and st.end == len(text)


# ---- Rule node definitions ----

@dataclass(frozen=True)
class Literal(Rule):
    text: str

@dataclass(frozen=True)
class CharRange(Rule):
    # inclusive (lo, hi) pairs of single characters; a single 'c' is stored as ('c', 'c')
    ranges: Tuple[Tuple[str, str], ...]

@dataclass(frozen=True)
class AnyChar(Rule):
    pass

@dataclass(frozen=True)
class Repeat(Rule):
    node: Rule
    kind: str  # '?', '*', '+'

@dataclass(frozen=True)
class And(Rule):
    node: Rule  # positive lookahead (&)

@dataclass(frozen=True)
class Not(Rule):
    node: Rule  # negative lookahead (!)

@dataclass(frozen=True)
class Seq(Rule):
    items: Tuple[Rule, ...]

@dataclass(frozen=True)
class Choice(Rule):
    alts: Tuple[Rule, ...]

@dataclass(frozen=True)
class Alias(Rule):
    name: str
    index: Optional[int] = None  # arena slot, set when linked into a grammar

@dataclass(frozen=True)
class Bound(Rule):
    """A grammar's rule as seen from outside: evaluates arena[index] with
    the grammar as the alias environment."""
    grammar: "Grammar"
    index: int

    def __repr__(self) -> str:
        return f"Bound({self.grammar.name_of(self.index)!r})"
