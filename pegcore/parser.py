# pegcore/parser.py
"""PEG text notation -> Grammar.

    grammar  := rule+
    rule     := IDENT ("<-" | ":=") expr
    expr     := seq ("/" seq)*
    seq      := prefix*
    prefix   := ("&" | "!")? suffix
    suffix   := primary ("?" | "*" | "+")?
    primary  := IDENT | LITERAL | CLASS | "." | "(" expr ")"

The text is first cut into tokens by one `regex` pattern (layout and
comments are dropped there), then the token list is read by recursive
descent. Literal and class bodies keep their escapes until they are decoded
into rule values.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

import regex

from .ast import Rule, Literal, CharRange, AnyChar, Repeat, And, Not, Seq, Choice, Alias
from .grammar import Grammar, grammar

_TOKEN = regex.compile("|".join([
    r"(?P<skip>[ \t\r\n]+|#[^\n]*|/\*.*?\*/)",
    r"(?P<open_comment>/\*)",
    r"(?P<arrow><-|:=)",
    r"(?P<ident>[\p{XID_Start}_]\p{XID_Continue}*)",
    r"(?P<literal>'(?:\\.|[^'\\])*'|\"(?:\\.|[^\"\\])*\")",
    r"(?P<cls>\[(?:\\.|[^\]\\])*\])",
    r"(?P<op>[/&!?*+().])",
]), regex.DOTALL)

# one possibly escaped character of a literal or class body
_CHAR = regex.compile(
    r"\\(?:(?P<oct>[0-7]{1,3})|x(?P<x>[0-9a-fA-F]{2})|u(?P<u>[0-9a-fA-F]{4})"
    r"|(?P<badhex>[xu])|(?P<esc>.))|(?P<raw>.)",
    regex.DOTALL,
)
_NAMED_ESCAPES = {"n": "\n", "r": "\r", "t": "\t"}

# what an unmatched opening character means
_UNTERMINATED = {"'": "unterminated string", '"': "unterminated string", "[": "unterminated char class"}


@dataclass(frozen=True)
class Token:
    kind: str   # 'ident', 'arrow', 'literal', 'cls', 'op' or 'eof'
    text: str
    pos: int    # offset in the grammar source


def _error(pos: int, msg: str) -> SyntaxError:
    return SyntaxError(f"PEG parse error at {pos}: {msg}")


def tokenize(src: str) -> List[Token]:
    toks: List[Token] = []
    pos = 0
    while pos < len(src):
        m = _TOKEN.match(src, pos)
        if m is None:
            ch = src[pos]
            raise _error(pos, _UNTERMINATED.get(ch, f"unexpected character {ch!r}"))
        if m.lastgroup == "open_comment":
            raise _error(pos, "unclosed block comment")
        if m.lastgroup != "skip":
            toks.append(Token(m.lastgroup, m.group(), pos))
        pos = m.end()
    toks.append(Token("eof", "", len(src)))
    return toks


def _chars(body: str, offset: int) -> Iterator[Tuple[str, bool]]:
    """Decode a literal/class body into (char, was_escaped) pairs."""
    for m in _CHAR.finditer(body):
        if m.group("raw") is not None:
            yield m.group("raw"), False
        elif m.group("badhex") is not None:
            raise _error(offset + m.start(), f"invalid \\{m.group('badhex')} escape")
        elif m.group("esc") is not None:
            c = m.group("esc")
            yield _NAMED_ESCAPES.get(c, c), True
        else:
            digits, base = next((m.group(g), b) for g, b in (("oct", 8), ("x", 16), ("u", 16))
                                if m.group(g) is not None)
            yield chr(int(digits, base)), True


def _literal(tok: Token) -> Rule:
    return Literal("".join(c for c, _ in _chars(tok.text[1:-1], tok.pos + 1)))


def _char_class(tok: Token) -> Rule:
    body = tok.text[1:-1]
    negated = body.startswith("^")
    if negated:
        body = body[1:]
    items = list(_chars(body, tok.pos + 1 + negated))

    ranges: List[Tuple[str, str]] = []
    i = 0
    while i < len(items):
        lo = items[i][0]
        # 'a-z' is a range; a '-' at either end is itself a member
        if i + 2 < len(items) and items[i + 1] == ("-", False):
            hi = items[i + 2][0]
            ranges.append((min(lo, hi), max(lo, hi)))
            i += 3
        else:
            ranges.append((lo, lo))
            i += 1

    cls: Rule = CharRange(tuple(ranges))
    if negated:
        return Seq((Not(cls), AnyChar()))
    return cls if ranges else Choice(())


class _Reader:
    """Recursive descent over the token list."""

    def __init__(self, toks: List[Token]):
        self.toks = toks
        self.k = 0

    @property
    def tok(self) -> Token:
        return self.toks[self.k]

    def _take(self) -> Token:
        tok = self.toks[self.k]
        self.k += 1
        return tok

    def _is_op(self, *ops: str) -> bool:
        return self.tok.kind == "op" and self.tok.text in ops

    def _expect(self, kind: str, what: str) -> Token:
        if self.tok.kind != kind:
            raise _error(self.tok.pos, f"expected {what}")
        return self._take()

    def _rule_head(self) -> bool:
        return self.tok.kind == "ident" and self.toks[self.k + 1].kind == "arrow"

    def rules(self) -> Dict[str, Rule]:
        table: Dict[str, Rule] = {}
        while self.tok.kind != "eof":
            head = self._expect("ident", "rule name")
            self._expect("arrow", "'<-' or ':='")
            body = self.expr()
            if head.text in table:
                raise _error(head.pos, f"duplicate rule '{head.text}'")
            table[head.text] = body
        if not table:
            raise _error(self.tok.pos, "empty PEG grammar")
        return table

    def expr(self) -> Rule:
        alts = [self.seq()]
        while self._is_op("/"):
            self._take()
            alts.append(self.seq())
        return alts[0] if len(alts) == 1 else Choice(tuple(alts))

    def seq(self) -> Rule:
        items: List[Rule] = []
        while not (self.tok.kind == "eof" or self._is_op(")", "/") or self._rule_head()):
            items.append(self.prefix())
        return items[0] if len(items) == 1 else Seq(tuple(items))

    def prefix(self) -> Rule:
        if self._is_op("&", "!"):
            pred = And if self._take().text == "&" else Not
            return pred(self.suffix())
        return self.suffix()

    def suffix(self) -> Rule:
        node = self.primary()
        if self._is_op("?", "*", "+"):
            return Repeat(node, self._take().text)
        return node

    def primary(self) -> Rule:
        tok = self.tok
        if tok.kind == "ident":
            self._take()
            return Alias(tok.text)
        if tok.kind == "literal":
            self._take()
            return _literal(tok)
        if tok.kind == "cls":
            self._take()
            return _char_class(tok)
        if self._is_op("."):
            self._take()
            return AnyChar()
        if self._is_op("("):
            self._take()
            inner = self.expr()
            self._expect_close()
            return inner
        raise _error(tok.pos, f"unexpected {tok.text or 'end of grammar'!r}")

    def _expect_close(self) -> None:
        if not self._is_op(")"):
            raise _error(self.tok.pos, "expected ')'")
        self._take()


def parse_peg_grammar(src: str, start: Optional[str] = None) -> Grammar:
    """Parse PEG notation into a linked `Grammar`.

    The first rule is the start rule unless `start` names another one.
    Undefined references surface as ConfigurationError from `grammar()`.
    """
    return grammar(_Reader(tokenize(src)).rules(), start)
