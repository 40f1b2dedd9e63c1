"""
Command line interface for the grammars bundled with knit.

Usage::

    python -m knit eval "2*3+4"
    python -m knit ast "SUM(1,2)"
    python -m knit json '{"a": [1, 2]}'
    python -m knit rle-encode WWWaaBBBBBc
    python -m knit rle-decode 3W2a5B1c
"""

import sys
import argparse
import logging

from typing import Any, Callable, List, Mapping, Optional

from knit.parser import ParseError
from knit.expression import parse_expression
from knit.transformer import evaluate
from knit.json_grammar import decode_json
from knit.rle import encode, decode


COMMANDS: Mapping[str, Callable[[str], Any]] = {
    "eval": evaluate,
    "ast": parse_expression,
    "json": decode_json,
    "rle-encode": encode,
    "rle-decode": decode,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="knit", description="Parse text using one of knit's grammars."
    )
    parser.add_argument(
        "--debug", action="store_true", help="Log every parser invocation."
    )
    parser.add_argument("command", choices=sorted(COMMANDS))
    parser.add_argument("text", help="The text to parse.")
    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    try:
        result = COMMANDS[args.command](args.text)
    except ParseError as e:
        print("error: {}".format(e), file=sys.stderr)
        return 1

    if isinstance(result, str):
        print(result)
    else:
        print(repr(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
