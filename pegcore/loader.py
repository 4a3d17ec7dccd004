"""Grammar file loader."""

from __future__ import annotations
from pathlib    import Path
from typing     import Optional

from .grammar import Grammar
from .parser  import parse_peg_grammar


def load_grammar_text(path: str) -> str:
    """
    Load Grammar Text (UTF-8, newlines normalised to '\\n')
    """
    text = Path(path).read_text(encoding="utf-8")
    return text.replace("\r\n", "\n").replace("\r", "\n")


def load_grammar(path: str, start: Optional[str] = None) -> Grammar:
    return parse_peg_grammar(load_grammar_text(path), start)
