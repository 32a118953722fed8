"""Duplicate findings produced by the classifier."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DuplicateKind(Enum):
    """Granularity of a duplicate finding."""

    WHOLE_FILE = "whole_file"  # Files identical after whitespace removal
    CROSS_FILE_BLOCK = "cross_file_block"  # Block shared by distinct files
    SAME_FILE_BLOCK = "same_file_block"  # Block repeated inside one file

    @property
    def report_rank(self) -> int:
        """Sort position in reports; whole-file duplicates come last."""
        return _REPORT_RANK[self]


_REPORT_RANK = {
    DuplicateKind.SAME_FILE_BLOCK: 0,
    DuplicateKind.CROSS_FILE_BLOCK: 1,
    DuplicateKind.WHOLE_FILE: 2,
}


@dataclass
class DuplicateRecord:
    """One duplication group.

    Attributes:
        kind: Granularity of the finding.
        paths: Participating files, in order of discovery, without repeats.
        contents: Original text of each contributing block.
        fingerprints: Fingerprints of the contributing blocks (the document
            fingerprint for whole-file duplicates).
    """

    kind: DuplicateKind
    paths: list[str] = field(default_factory=list)
    contents: list[str] = field(default_factory=list)
    fingerprints: list[str] = field(default_factory=list)

    def add_path(self, path: str) -> bool:
        """Add a participant. Returns False if it was already present."""
        if path in self.paths:
            return False
        self.paths.append(path)
        return True

    def add_block(self, fingerprint: str, content: str) -> bool:
        """Attach a contributing block. Returns False if already tracked."""
        if fingerprint in self.fingerprints:
            return False
        self.fingerprints.append(fingerprint)
        self.contents.append(content)
        return True

    @property
    def content(self) -> str:
        """Representative content: the first contributing block."""
        return self.contents[0] if self.contents else ""

    def describe(self) -> str:
        """Render the finding as plain English."""
        listing = "\n".join(f"  {p}" for p in self.paths)
        if self.kind == DuplicateKind.WHOLE_FILE:
            return f"The following files are duplicates of each other:\n{listing}"
        if self.kind == DuplicateKind.SAME_FILE_BLOCK:
            header = f"The file {self.paths[0]} repeats the following"
            noun = "block" if len(self.contents) == 1 else f"{len(self.contents)} blocks"
            return f"{header} {noun}:\n\n" + "\n\n".join(self.contents)
        noun = "a block" if len(self.contents) == 1 else f"{len(self.contents)} blocks"
        return (
            f"The following files share {noun}:\n{listing}\n\n"
            + "\n\n".join(self.contents)
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "kind": self.kind.value,
            "paths": list(self.paths),
            "contents": list(self.contents),
            "fingerprints": list(self.fingerprints),
        }
