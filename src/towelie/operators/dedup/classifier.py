"""Whole-file and block-level duplicate classification.

Documents are processed in input order and blocks in document order. The first
occurrence of any content is the canonical source for every later match.
"""

import itertools
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from towelie.core.document import Block, Document
from towelie.core.run_state import RunState
from towelie.operators.dedup.records import DuplicateKind, DuplicateRecord
from towelie.operators.fingerprint import fingerprint
from towelie.operators.segment import minify, qualifies, segment

logger = logging.getLogger(__name__)


@dataclass
class _IndexedDocument:
    """First document seen with a given fingerprint."""

    document: Document
    record: DuplicateRecord | None = None  # Whole-file record, once one exists


@dataclass
class ClassificationResult:
    """Findings and counters of one classification run."""

    records: list[DuplicateRecord] = field(default_factory=list)
    state: RunState = field(default_factory=RunState)

    def ordered_records(self) -> list[DuplicateRecord]:
        """Records in report order, whole-file duplicates last."""
        return sorted(self.records, key=lambda r: r.kind.report_rank)

    def by_kind(self, kind: DuplicateKind) -> list[DuplicateRecord]:
        """Records of one kind, in discovery order."""
        return [r for r in self.records if r.kind == kind]


class DuplicateClassifier:
    """Find whole-file and paragraph-level duplicates in a document set.

    Blocks must have at least ``min_lines`` newline characters and more than
    ``min_chars`` characters to be matched.
    """

    def __init__(self, min_lines: int = 2, min_chars: int = 20):
        self.min_lines = min_lines
        self.min_chars = min_chars
        self.reset()

    def reset(self) -> None:
        """Start over with empty tables and counters."""
        self._state = RunState()
        self._records: list[DuplicateRecord] = []
        self._documents: dict[str, _IndexedDocument] = {}  # doc fp -> first doc
        self._block_origin: dict[str, str] = {}  # block fp -> doc fp
        self._by_fingerprint: dict[str, DuplicateRecord] = {}
        self._by_pair: dict[frozenset[str], DuplicateRecord] = {}
        self._same_file: dict[str, DuplicateRecord] = {}

    def classify(self, documents: Sequence[Document]) -> ClassificationResult:
        """Classify a fully loaded document set.

        Every call starts from fresh state, so repeated calls on the same input
        produce identical results.
        """
        self.reset()
        self._state.tally(documents)

        for doc in documents:
            self._classify_document(doc)

        logger.info(
            "Classified %d documents: %d file dupes, %d block dupes (%d within files)",
            self._state.total_files,
            self._state.num_file_dupes,
            self._state.num_block_dupes,
            self._state.num_block_dupes_in_same_file,
        )
        return ClassificationResult(records=list(self._records), state=self._state)

    def _classify_document(self, doc: Document) -> None:
        doc_fp = fingerprint(minify(doc.content))

        indexed = self._documents.get(doc_fp)
        if indexed is not None:
            # Blocks of a whole-file duplicate are not matched again
            self._add_file_duplicate(indexed, doc, doc_fp)
            return

        self._documents[doc_fp] = _IndexedDocument(document=doc)

        for block in segment(doc.content):
            if not qualifies(block.text, self.min_lines, self.min_chars):
                continue

            block_fp = fingerprint(block.key)
            origin_fp = self._block_origin.get(block_fp)
            if origin_fp is None:
                self._block_origin[block_fp] = doc_fp
                continue

            if origin_fp == doc_fp:
                self._add_same_file_duplicate(doc, block_fp, block)
            else:
                origin = self._documents[origin_fp].document
                self._add_cross_file_duplicate(origin, doc, block_fp, block)

            self._state.num_block_dupes += 1
            self._state.duped_lines += block.line_count

    def _add_file_duplicate(self, indexed: _IndexedDocument, doc: Document, doc_fp: str) -> None:
        if indexed.record is None:
            indexed.record = DuplicateRecord(
                kind=DuplicateKind.WHOLE_FILE,
                paths=[indexed.document.path],
                fingerprints=[doc_fp],
            )
            self._records.append(indexed.record)
        indexed.record.add_path(doc.path)

        logger.debug("%s duplicates %s", doc.path, indexed.document.path)
        self._state.num_file_dupes += 1
        self._state.duped_lines += doc.line_count

    def _add_same_file_duplicate(self, doc: Document, block_fp: str, block: Block) -> None:
        record = self._same_file.get(doc.path)
        if record is None:
            record = DuplicateRecord(kind=DuplicateKind.SAME_FILE_BLOCK, paths=[doc.path])
            self._same_file[doc.path] = record
            self._records.append(record)
        record.add_block(block_fp, block.text)

        logger.debug("%s repeats block %s", doc.path, block_fp)
        self._state.num_block_dupes_in_same_file += 1

    def _add_cross_file_duplicate(
        self, origin: Document, doc: Document, block_fp: str, block: Block
    ) -> None:
        # Same block already reported: the current file joins that group
        record = self._by_fingerprint.get(block_fp)
        if record is not None:
            if record.add_path(doc.path):
                self._index_pairs(record)
            return

        # Files already share another block: one record per file pair
        record = self._by_pair.get(frozenset((origin.path, doc.path)))
        if record is None:
            record = DuplicateRecord(kind=DuplicateKind.CROSS_FILE_BLOCK)
            record.add_path(origin.path)
            record.add_path(doc.path)
            self._records.append(record)
            self._index_pairs(record)

        record.add_block(block_fp, block.text)
        self._by_fingerprint[block_fp] = record
        logger.debug("%s shares block %s with %s", doc.path, block_fp, origin.path)

    def _index_pairs(self, record: DuplicateRecord) -> None:
        # The earliest record joining a pair owns it
        for a, b in itertools.combinations(record.paths, 2):
            self._by_pair.setdefault(frozenset((a, b)), record)
