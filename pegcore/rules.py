# pegcore/rules.py
"""Rule constructors.

Every constructor returns an immutable rule value; composing them builds the
expression tree directly, there is no separate compile step.

    >>> word = one_or_more(char_range(("a", "z")))
    >>> sequence([word, "=", word]).match("key=value")
    True

Bad static arguments are reported here, as `ConfigurationError`, rather than
at parse time.
"""

from __future__ import annotations
from typing import Iterable, List, Tuple, Union
from .ast import (
    Rule, Literal, CharRange, AnyChar, Repeat, And, Not, Seq, Choice, Alias,
)
from .errors import ConfigurationError

RuleLike = Union[Rule, str]
RangeItem = Union[str, Tuple[str, str]]


def as_rule(value: RuleLike) -> Rule:
    """Accept a rule as is and promote a plain string to `literal`."""
    if isinstance(value, Rule):
        return value
    if isinstance(value, str):
        return Literal(value)
    raise ConfigurationError(f"expected a rule or a string, got {type(value).__name__}")


def _one_char(ch: object, what: str) -> str:
    if not isinstance(ch, str) or len(ch) != 1:
        raise ConfigurationError(f"{what} must be a single character, got {ch!r}")
    return ch


# ---- primitives ----

def literal(text: str) -> Rule:
    if not isinstance(text, str):
        raise ConfigurationError(f"literal text must be a string, got {type(text).__name__}")
    return Literal(text)


def char_range(*items: RangeItem) -> Rule:
    """Match one character from the union of `items`.

    Each item is either a single character or an inclusive (low, high) pair:
    ``char_range(("a", "z"), ("A", "Z"), "_")``.
    """
    if not items:
        raise ConfigurationError("char_range needs at least one range or character")
    ranges: List[Tuple[str, str]] = []
    for it in items:
        if isinstance(it, tuple):
            if len(it) != 2:
                raise ConfigurationError(f"range must be a (low, high) pair, got {it!r}")
            lo = _one_char(it[0], "range start")
            hi = _one_char(it[1], "range end")
            if lo > hi:
                raise ConfigurationError(f"empty range {lo!r}-{hi!r}")
            ranges.append((lo, hi))
        else:
            ch = _one_char(it, "character")
            ranges.append((ch, ch))
    return CharRange(tuple(ranges))


def any_char() -> Rule:
    return AnyChar()


# ---- unary ----

def optional(rule: RuleLike) -> Rule:
    return Repeat(as_rule(rule), "?")


def zero_or_more(rule: RuleLike) -> Rule:
    return Repeat(as_rule(rule), "*")


def one_or_more(rule: RuleLike) -> Rule:
    return Repeat(as_rule(rule), "+")


def and_(rule: RuleLike) -> Rule:
    """Positive lookahead: succeeds without consuming iff `rule` matches."""
    return And(as_rule(rule))


def not_(rule: RuleLike) -> Rule:
    """Negative lookahead: succeeds without consuming iff `rule` fails."""
    return Not(as_rule(rule))


# ---- n-ary ----

def sequence(rules: Iterable[RuleLike]) -> Rule:
    return Seq(tuple(as_rule(r) for r in rules))


def choice(rules: Iterable[RuleLike]) -> Rule:
    """Ordered choice. The first alternative that matches wins."""
    return Choice(tuple(as_rule(r) for r in rules))


# ---- grammar reference ----

def alias(name: str) -> Rule:
    """Late-bound reference to the rule called `name` in the enclosing grammar."""
    if not isinstance(name, str) or not name:
        raise ConfigurationError(f"alias name must be a non-empty string, got {name!r}")
    return Alias(name)
