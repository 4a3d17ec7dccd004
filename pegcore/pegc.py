# pegcore/pegc.py
"""pegc – pegcore CLI

Examples
    $ python -m pegcore.pegc check grammars/json.peg -D
    $ python -m pegcore.pegc match grammars/json.peg --text '{"a": 1}' --all
    $ python -m pegcore.pegc match grammars/json.peg --rule number --input data.txt

Commands
--------
- check : load a grammar file, link its aliases and print a summary
- match : run one rule of the grammar over a text and print the matched span

With -D/--debug every pipeline step is reported on stderr.
"""

from __future__ import annotations
import argparse
import sys
from typing import Optional

from .errors import ConfigurationError, NoMatch

# ------------------------------
# helpers
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def _load(grammar_path: str, debug: bool, start: Optional[str] = None):
    from .loader import load_grammar_text
    from .parser import parse_peg_grammar

    src = load_grammar_text(grammar_path)
    if debug: _eprint("[DEBUG] grammar text loaded | chars=%d" % len(src))

    g = parse_peg_grammar(src, start)
    if debug: _eprint("[DEBUG] grammar linked | rules=%d start=%s" % (len(g), g.start))
    return g


def _report_load_error(e: Exception) -> int:
    if isinstance(e, SyntaxError):
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
    elif isinstance(e, ConfigurationError):
        _eprint("[CONFIG ERROR]", str(e))
    else:
        _eprint("[ERROR]", type(e).__name__, str(e))
    return 2

# ------------------------------
# commands
# ------------------------------

def cmd_check(args) -> int:
    try:
        g = _load(args.file, debug=args.debug)
    except (SyntaxError, ConfigurationError, OSError, UnicodeDecodeError) as e:
        return _report_load_error(e)

    if args.debug:
        _eprint("\n[RULES]")
        for name in g:
            _eprint(f"  {name}")

    print(f"[CHECK OK] rules={len(g)} start={g.start}")
    return 0


def cmd_match(args) -> int:
    try:
        g = _load(args.file, debug=args.debug, start=args.rule)
        if args.text is not None:
            text = args.text
        else:
            with open(args.input, "r", encoding="utf-8") as f:
                text = f.read()
    except (SyntaxError, ConfigurationError, OSError, UnicodeDecodeError) as e:
        return _report_load_error(e)

    rule = g.require_rule(g.start)
    if args.debug:
        _eprint(f"[DEBUG] rule={g.start} all={args.all} chars={len(text)}")

    try:
        ast = rule.parse_all(text) if args.all else rule.parse(text)
    except NoMatch:
        print(f"[NO MATCH] rule={g.start}")
        return 1
    except RecursionError:
        _eprint("[ERROR] RecursionError input nests too deeply for this grammar")
        return 2

    print(f"[MATCH] {ast.start}..{ast.end}")
    print(ast.value)
    return 0

# ------------------------------
# entrypoint
# ------------------------------

def main(argv: Optional[list] = None) -> int:
    ap = argparse.ArgumentParser(prog="pegc", description="pegcore PEG grammar CLI")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="load a grammar file and link its rules")
    p_check.add_argument("file", help="PEG grammar file")
    p_check.add_argument("-D", "--debug", action="store_true", help="print pipeline details")
    p_check.set_defaults(func=cmd_check)

    p_match = sub.add_parser("match", help="match a text against a grammar rule")
    p_match.add_argument("file", help="PEG grammar file")
    p_match.add_argument("--rule", help="rule to run (default: first rule of the file)")
    p_match.add_argument("--all", action="store_true", help="require the whole input to match")
    src_group = p_match.add_mutually_exclusive_group(required=True)
    src_group.add_argument("--text", help="input text")
    src_group.add_argument("--input", help="input text file path")
    p_match.add_argument("-D", "--debug", action="store_true", help="print pipeline details")
    p_match.set_defaults(func=cmd_match)

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
