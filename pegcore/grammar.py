# pegcore/grammar.py
"""Named rule sets.

A grammar owns an arena: a list holding one rule per name, in table order,
plus a name -> slot index. Building a grammar links every alias found inside
its rules to the slot of the rule it names, so a reference may point forward,
at the rule containing it, or at a rule that refers back to it.

The grammar itself is the environment aliases are resolved against. It is
handed down explicitly through evaluation (see engine.evaluate); entering a
rule taken from `Grammar.rules` switches the environment to that rule's own
grammar and leaving it restores the caller's. Rules of one grammar can
therefore be embedded in another without their aliases leaking.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Dict, Iterator, List, Mapping, Optional
from .ast import AST, Rule, Repeat, And, Not, Seq, Choice, Alias, Bound
from .errors import ConfigurationError
from .rules import RuleLike, as_rule


def _link(node: Rule, index: Mapping[str, int]) -> Rule:
    if isinstance(node, Alias):
        try:
            return Alias(node.name, index[node.name])
        except KeyError:
            raise ConfigurationError(f"alias to undefined rule '{node.name}'") from None
    if isinstance(node, (Repeat, And, Not)):
        return replace(node, node=_link(node.node, index))
    if isinstance(node, Seq):
        return Seq(tuple(_link(it, index) for it in node.items))
    if isinstance(node, Choice):
        return Choice(tuple(_link(it, index) for it in node.alts))
    # Literal, CharRange, AnyChar and rules bound to another grammar
    return node


class Grammar:
    """Closed set of named rules. Use `grammar(...)` to build one."""

    def __init__(self, table: Mapping[str, RuleLike], start: Optional[str] = None):
        if not table:
            raise ConfigurationError("grammar needs at least one rule")
        names = list(table)
        for name in names:
            if not isinstance(name, str) or not name:
                raise ConfigurationError(f"rule name must be a non-empty string, got {name!r}")
        if start is None:
            start = names[0]
        elif start not in table:
            raise ConfigurationError(f"start rule '{start}' is not defined")

        self._names: List[str] = names
        self._index: Dict[str, int] = {n: i for i, n in enumerate(names)}
        self.arena: List[Rule] = []
        for name in names:
            self.arena.append(_link(as_rule(table[name]), self._index))
        self.rules: Dict[str, Rule] = {n: Bound(self, i) for n, i in self._index.items()}
        self.start = start

    # ---- lookup ----

    def require_rule(self, name: str) -> Rule:
        try:
            return self.rules[name]
        except KeyError:
            raise ConfigurationError(f"undefined rule '{name}'") from None

    def name_of(self, index: int) -> str:
        return self._names[index]

    def __getitem__(self, name: str) -> Rule:
        return self.require_rule(name)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"Grammar(start={self.start!r}, rules={self._names!r})"

    # ---- invocation on the start rule ----

    def parse(self, text: str) -> AST:
        return self.rules[self.start].parse(text)

    def parse_all(self, text: str) -> AST:
        return self.rules[self.start].parse_all(text)

    def match(self, text: str) -> bool:
        return self.rules[self.start].match(text)

    def match_all(self, text: str) -> bool:
        return self.rules[self.start].match_all(text)


def grammar(table: Mapping[str, RuleLike], start: Optional[str] = None) -> Grammar:
    """Bind `table` into a grammar whose aliases resolve against itself."""
    return Grammar(table, start)
