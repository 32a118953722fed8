"""Paragraph segmentation and canonicalization."""

import re

from towelie.core.document import Block

_WHITESPACE = re.compile(r"\s+")
BLOCK_SEPARATOR = "\n\n"


def minify(text: str) -> str:
    """Strip all whitespace, including newlines, from a whole document."""
    return _WHITESPACE.sub("", text)


def normalize(text: str) -> str:
    """Strip whitespace from a single block."""
    return _WHITESPACE.sub("", text)


def segment(content: str) -> list[Block]:
    """Split content into blank-line-delimited blocks.

    Blocks keep their original text; empty pieces are dropped.
    """
    return [
        Block(text=piece, key=normalize(piece))
        for piece in content.split(BLOCK_SEPARATOR)
        if piece != ""
    ]


def qualifies(text: str, min_lines: int, min_chars: int) -> bool:
    """Check whether a raw block is big enough to be matched.

    Requires at least ``min_lines`` newline characters and more than
    ``min_chars`` characters.
    """
    return text.count("\n") >= min_lines and len(text) > min_chars
