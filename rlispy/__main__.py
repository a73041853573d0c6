"""CLI: python -m rlispy [source.lisp]

Dumps the token sequence and then every top-level form of a source file
(stdin when no path or `-` is given).
"""

import logging
import sys
from pathlib import Path

from .lexer import LexError, tokenize
from .reader import ParseError, read_forms


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) > 1 or (args and args[0] in ("-h", "--help")):
        print("Usage: python -m rlispy [source.lisp]", file=sys.stderr)
        return 2

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    if not args or args[0] == "-":
        source = sys.stdin.read()
    else:
        path = Path(args[0])
        if not path.is_file():
            print(f"error: no such file: {path}", file=sys.stderr)
            return 2
        try:
            source = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            print(f"error: {path} is not valid UTF-8: {e}", file=sys.stderr)
            return 1

    try:
        tokens = tokenize(source)
        for tok in tokens:
            print(repr(tok))
        print()
        for form in read_forms(tokens):
            print(repr(form))
    except (LexError, ParseError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
