"""Per-run counters collected during classification."""

from dataclasses import asdict, dataclass
from typing import Any, Iterable

from towelie.core.document import Document


@dataclass
class RunState:
    """Counters for one scan run.

    A fresh instance is created for every classification; the scorer reads it
    once the pass is complete.
    """

    total_files: int = 0
    total_lines: int = 0
    duped_lines: int = 0
    num_file_dupes: int = 0
    num_block_dupes: int = 0
    num_block_dupes_in_same_file: int = 0

    def tally(self, documents: Iterable[Document]) -> None:
        """Count files and lines of the loaded corpus."""
        for doc in documents:
            self.total_files += 1
            self.total_lines += doc.line_count

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return asdict(self)
