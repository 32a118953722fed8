"""Document model for towelie.

A Document is one loaded input file. Blocks are the blank-line-delimited
paragraphs derived from it during classification.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Document:
    """A single input file, fully materialized.

    Attributes:
        content: The file contents.
        path: Identifier reported in findings (usually a relative path).
        index: Position of the document in the input order.
    """

    content: str
    path: str
    index: int = 0

    @property
    def line_count(self) -> int:
        """Number of newline characters in the content."""
        return self.content.count("\n")


@dataclass(frozen=True)
class Block:
    """A paragraph of a document.

    Attributes:
        text: Original paragraph text, kept verbatim for reporting.
        key: Canonical form used for fingerprinting (whitespace stripped).
    """

    text: str
    key: str

    @property
    def line_count(self) -> int:
        return self.text.count("\n")
