"""
Run-length encoding, e.g. ``"WWWaaBBBBBc"`` <-> ``"3W2a5B1c"``.

Each run of identical characters is encoded as its decimal length followed by
the character. Strings containing digits cannot be round-tripped.
"""

from typing import Any, Generator, List

from knit.parser import Parser, parse

from knit.combinators import (
    do,
    many0,
    concat,
)

from knit.primitives import (
    success,
    consume,
    char,
    nat,
)

__all__ = [
    "rle_encode",
    "rle_decode",
    "encode",
    "decode",
]


@do
def _encode_run() -> Generator[Parser[Any], Any, Parser[str]]:
    first = yield consume(1)
    same: List[str] = yield many0(char(first))
    return success("{}{}".format(len(same) + 1, first))


@do
def _decode_run() -> Generator[Parser[Any], Any, Parser[str]]:
    length = yield nat
    character = yield consume(1)
    return success(character * length)


rle_encode: Parser[str] = concat(many0(_encode_run)).named("rle_encode")
"""Encodes its whole input. Never fails."""

rle_decode: Parser[str] = concat(many0(_decode_run)).named("rle_decode")
"""
Decodes runs for as long as possible, leaving any input which is not a valid
run unconsumed.
"""


def encode(string: str) -> str:
    """Run-length encode a string."""
    return parse(rle_encode, string)


def decode(string: str) -> str:
    """Decode a run-length encoded string, ignoring any trailing junk."""
    return parse(rle_decode, string)
