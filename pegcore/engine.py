# pegcore/engine.py
from __future__ import annotations
from typing import List, Optional, TYPE_CHECKING
from .ast import (
    ST, Rule, Literal, CharRange, AnyChar, Repeat, And, Not, Seq, Choice,
    Alias, Bound,
)
from .errors import ConfigurationError

if TYPE_CHECKING:
    from .grammar import Grammar

# Plain recursive descent:
# - No memoization; re-evaluating a rule at a position repeats the work.
# - Left recursion is not supported (typical PEG restriction).
# - `env` is the grammar aliases resolve against. It is passed down
#   explicitly and only replaced when entering a Bound rule.

def _range_match(cr: CharRange, ch: str) -> bool:
    for (lo, hi) in cr.ranges:
        if lo <= ch <= hi:
            return True
    return False


def _repeat(node: Rule, text: str, pos: int, env: Optional["Grammar"],
            children: List[ST]) -> int:
    cur = pos
    while True:
        st = evaluate(node, text, cur, env)
        # stop on failure or on a match that does not advance
        if st is None or st.end == cur:
            return cur
        children.append(st)
        cur = st.end


def evaluate(node: Rule, text: str, pos: int, env: Optional["Grammar"]) -> Optional[ST]:
    """Evaluate `node` at `pos`. Returns the parse tree or None on failure."""
    if isinstance(node, Literal):
        if text.startswith(node.text, pos):
            return ST(pos, pos + len(node.text))
        return None

    if isinstance(node, AnyChar):
        if pos < len(text):
            return ST(pos, pos + 1)
        return None

    if isinstance(node, CharRange):
        if pos < len(text) and _range_match(node, text[pos]):
            return ST(pos, pos + 1)
        return None

    if isinstance(node, Alias):
        if node.index is None or env is None:
            raise ConfigurationError(f"alias '{node.name}' evaluated outside of a grammar")
        return evaluate(env.arena[node.index], text, pos, env)

    if isinstance(node, Bound):
        g = node.grammar
        return evaluate(g.arena[node.index], text, pos, g)

    if isinstance(node, And):
        st = evaluate(node.node, text, pos, env)
        if st is None:
            return None
        return ST(pos, pos, (st,))

    if isinstance(node, Not):
        if evaluate(node.node, text, pos, env) is None:
            return ST(pos, pos)
        return None

    if isinstance(node, Repeat):
        if node.kind == "?":
            st = evaluate(node.node, text, pos, env)
            return st if st is not None else ST(pos, pos)
        elif node.kind == "*":
            children: List[ST] = []
            end = _repeat(node.node, text, pos, env, children)
            return ST(pos, end, tuple(children))
        elif node.kind == "+":
            first = evaluate(node.node, text, pos, env)
            if first is None:
                return None
            children = [first]
            end = _repeat(node.node, text, first.end, env, children)
            return ST(pos, end, tuple(children))
        else:
            raise AssertionError(f"unknown repeat kind {node.kind!r}")

    if isinstance(node, Seq):
        cur = pos
        children = []
        for it in node.items:
            st = evaluate(it, text, cur, env)
            if st is None:
                return None
            children.append(st)
            cur = st.end
        return ST(pos, cur, tuple(children))

    if isinstance(node, Choice):
        for it in node.alts:
            st = evaluate(it, text, pos, env)
            if st is not None:
                return st
        return None

    raise AssertionError(f"unknown node: {node!r}")
