"""Unit tests for duplicate classification."""

import pytest
from towelie.core.document import Document
from towelie.operators.dedup import DuplicateClassifier, DuplicateKind, DuplicateRecord
from towelie.operators.fingerprint import fingerprint
from towelie.operators.segment import normalize

SHARED = "def shared():\n    value = compute()\n    return value"
OTHER = "def other():\n    items = load()\n    return items"
UNIQUE_A = "class Alpha:\n    first = 1\n    second = 2"
UNIQUE_B = "class Beta:\n    third = 3\n    fourth = 4"
UNIQUE_C = "class Gamma:\n    fifth = 5\n    sixth = 6"


def make_docs(*files: tuple[str, list[str]]) -> list[Document]:
    return [
        Document(content="\n\n".join(paragraphs), path=path, index=i)
        for i, (path, paragraphs) in enumerate(files)
    ]


@pytest.fixture
def classifier():
    return DuplicateClassifier(min_lines=2, min_chars=20)


class TestWholeFileDuplicates:
    def test_identical_files_produce_one_record(self, classifier):
        docs = make_docs(("a.py", [SHARED, UNIQUE_A]), ("b.py", [SHARED, UNIQUE_A]))
        result = classifier.classify(docs)

        assert len(result.records) == 1
        record = result.records[0]
        assert record.kind == DuplicateKind.WHOLE_FILE
        assert record.paths == ["a.py", "b.py"]
        assert result.state.num_file_dupes == 1
        assert result.state.duped_lines == docs[1].line_count

    def test_whitespace_only_differences_are_duplicates(self, classifier):
        a = Document(content="x = 1\ny = 2\n", path="a.py")
        b = Document(content="x=1\n\n\n   y =  2", path="b.py", index=1)
        result = classifier.classify([a, b])

        assert [r.kind for r in result.records] == [DuplicateKind.WHOLE_FILE]
        assert result.state.duped_lines == 3

    def test_additional_duplicates_extend_existing_record(self, classifier):
        docs = make_docs(
            ("a.py", [UNIQUE_A]),
            ("b.py", [UNIQUE_A]),
            ("c.py", [UNIQUE_B]),
            ("d.py", [UNIQUE_A]),
        )
        result = classifier.classify(docs)

        whole = result.by_kind(DuplicateKind.WHOLE_FILE)
        assert len(whole) == 1
        assert whole[0].paths == ["a.py", "b.py", "d.py"]
        assert result.state.num_file_dupes == 2
        assert result.state.duped_lines == 4

    def test_repeated_path_is_not_listed_twice(self, classifier):
        docs = [
            Document(content=UNIQUE_A, path="a.py", index=0),
            Document(content=UNIQUE_A, path="b.py", index=1),
            Document(content=UNIQUE_A, path="b.py", index=2),
        ]
        result = classifier.classify(docs)
        assert result.records[0].paths == ["a.py", "b.py"]
        assert result.state.num_file_dupes == 2


class TestCrossFileBlockDuplicates:
    def test_shared_block_between_two_files(self, classifier):
        docs = make_docs(("a.py", [SHARED, UNIQUE_A]), ("b.py", [UNIQUE_B, SHARED]))
        result = classifier.classify(docs)

        assert len(result.records) == 1
        record = result.records[0]
        assert record.kind == DuplicateKind.CROSS_FILE_BLOCK
        assert record.paths == ["a.py", "b.py"]
        assert record.contents == [SHARED]
        assert record.fingerprints == [fingerprint(normalize(SHARED))]
        assert result.state.num_block_dupes == 1
        assert result.state.num_block_dupes_in_same_file == 0
        assert result.state.duped_lines == 2

    def test_third_file_joins_existing_record(self, classifier):
        docs = make_docs(
            ("a.py", [SHARED, UNIQUE_A]),
            ("b.py", [UNIQUE_B, SHARED]),
            ("c.py", [SHARED, UNIQUE_C]),
        )
        result = classifier.classify(docs)

        assert len(result.records) == 1
        assert result.records[0].paths == ["a.py", "b.py", "c.py"]
        assert result.state.num_block_dupes == 2

    def test_blocks_shared_by_one_pair_consolidate(self, classifier):
        docs = make_docs(
            ("a.py", [SHARED, UNIQUE_A, OTHER]),
            ("b.py", [OTHER, UNIQUE_B, SHARED]),
        )
        result = classifier.classify(docs)

        assert len(result.records) == 1
        record = result.records[0]
        assert record.paths == ["a.py", "b.py"]
        assert record.contents == [OTHER, SHARED]
        assert result.state.num_block_dupes == 2
        assert result.state.duped_lines == 4

    def test_pair_joined_through_shared_record_consolidates(self, classifier):
        docs = make_docs(
            ("a.py", [SHARED, UNIQUE_A]),
            ("b.py", [SHARED, UNIQUE_B, OTHER]),
            ("c.py", [SHARED, OTHER]),
        )
        result = classifier.classify(docs)

        assert len(result.records) == 1
        record = result.records[0]
        assert record.paths == ["a.py", "b.py", "c.py"]
        assert record.contents == [SHARED, OTHER]

    def test_distinct_pairs_get_distinct_records(self, classifier):
        docs = make_docs(
            ("a.py", [SHARED, UNIQUE_A]),
            ("b.py", [SHARED, UNIQUE_B]),
            ("c.py", [UNIQUE_A, UNIQUE_C]),
        )
        result = classifier.classify(docs)

        assert [r.paths for r in result.records] == [["a.py", "b.py"], ["a.py", "c.py"]]
        assert [r.contents for r in result.records] == [[SHARED], [UNIQUE_A]]

    def test_formatting_differences_still_match(self, classifier):
        reformatted = SHARED.replace("    ", "\t")
        docs = make_docs(("a.py", [SHARED, UNIQUE_A]), ("b.py", [reformatted, UNIQUE_B]))
        result = classifier.classify(docs)

        assert len(result.records) == 1
        assert result.records[0].contents == [reformatted]

    def test_repeat_in_later_file_is_matched_against_origin(self, classifier):
        docs = make_docs(("a.py", [SHARED, UNIQUE_A]), ("b.py", [SHARED, UNIQUE_B, SHARED]))
        result = classifier.classify(docs)

        assert [r.kind for r in result.records] == [DuplicateKind.CROSS_FILE_BLOCK]
        assert result.records[0].paths == ["a.py", "b.py"]
        assert result.state.num_block_dupes == 2
        assert result.state.num_block_dupes_in_same_file == 0


class TestSameFileBlockDuplicates:
    def test_repeated_block_in_one_file(self, classifier):
        docs = make_docs(("a.py", [SHARED, UNIQUE_A, SHARED]))
        result = classifier.classify(docs)

        assert len(result.records) == 1
        record = result.records[0]
        assert record.kind == DuplicateKind.SAME_FILE_BLOCK
        assert record.paths == ["a.py"]
        assert record.contents == [SHARED]
        assert result.state.num_block_dupes_in_same_file == 1
        assert result.state.num_block_dupes == 1
        assert result.state.duped_lines == 2

    def test_one_record_per_file(self, classifier):
        docs = make_docs(("a.py", [SHARED, UNIQUE_A, SHARED, UNIQUE_A, SHARED]))
        result = classifier.classify(docs)

        assert len(result.records) == 1
        assert result.records[0].contents == [SHARED, UNIQUE_A]
        assert result.state.num_block_dupes_in_same_file == 3


class TestSizeFilter:
    def test_short_blocks_never_match(self, classifier):
        docs = make_docs(
            ("a.py", ["import os", UNIQUE_A]),
            ("b.py", ["import os", UNIQUE_B]),
        )
        result = classifier.classify(docs)
        assert result.records == []
        assert result.state.num_block_dupes == 0
        assert result.state.duped_lines == 0

    def test_few_characters_never_match(self, classifier):
        tiny = "a\nb\nc"
        docs = make_docs(("a.py", [tiny, UNIQUE_A]), ("b.py", [tiny, UNIQUE_B]))
        assert classifier.classify(docs).records == []

    def test_thresholds_are_configurable(self):
        docs = make_docs(("a.py", ["x = 1", UNIQUE_A]), ("b.py", ["x = 1", UNIQUE_B]))
        result = DuplicateClassifier(min_lines=0, min_chars=0).classify(docs)
        assert [r.contents for r in result.records] == [["x = 1"]]


class TestMixedScenarios:
    def test_whole_file_duplicate_blocks_are_not_rematched(self, classifier):
        docs = make_docs(
            ("a.py", [SHARED, UNIQUE_A]),
            ("b.py", [SHARED, UNIQUE_A]),
            ("c.py", [UNIQUE_C, SHARED]),
        )
        result = classifier.classify(docs)

        assert [(r.kind, r.paths) for r in result.records] == [
            (DuplicateKind.WHOLE_FILE, ["a.py", "b.py"]),
            (DuplicateKind.CROSS_FILE_BLOCK, ["a.py", "c.py"]),
        ]
        assert result.state.num_file_dupes == 1
        assert result.state.num_block_dupes == 1

    def test_ordered_records_put_whole_file_last(self, classifier):
        docs = make_docs(
            ("a.py", [UNIQUE_A]),
            ("b.py", [UNIQUE_A]),
            ("c.py", [SHARED, UNIQUE_B]),
            ("d.py", [SHARED, UNIQUE_C, UNIQUE_C]),
        )
        result = classifier.classify(docs)

        assert [r.kind for r in result.records] == [
            DuplicateKind.WHOLE_FILE,
            DuplicateKind.CROSS_FILE_BLOCK,
            DuplicateKind.SAME_FILE_BLOCK,
        ]
        assert [r.kind for r in result.ordered_records()] == [
            DuplicateKind.SAME_FILE_BLOCK,
            DuplicateKind.CROSS_FILE_BLOCK,
            DuplicateKind.WHOLE_FILE,
        ]

    def test_totals_counted_for_every_document(self, classifier):
        docs = make_docs(("a.py", [UNIQUE_A]), ("b.py", [UNIQUE_A]), ("c.py", [UNIQUE_B]))
        result = classifier.classify(docs)
        assert result.state.total_files == 3
        assert result.state.total_lines == 6

    def test_empty_input(self, classifier):
        result = classifier.classify([])
        assert result.records == []
        assert result.state.total_files == 0
        assert result.state.total_lines == 0

    def test_classification_is_deterministic(self, classifier):
        docs = make_docs(
            ("a.py", [SHARED, UNIQUE_A, OTHER]),
            ("b.py", [SHARED, UNIQUE_A, OTHER]),
            ("c.py", [OTHER, UNIQUE_B, OTHER]),
            ("d.py", [SHARED, UNIQUE_C]),
        )
        first = classifier.classify(docs)
        second = classifier.classify(docs)

        assert [r.to_dict() for r in first.records] == [r.to_dict() for r in second.records]
        assert first.state == second.state
        assert first.state is not second.state


class TestDuplicateRecord:
    def test_add_path_rejects_repeats(self):
        record = DuplicateRecord(kind=DuplicateKind.CROSS_FILE_BLOCK, paths=["a"])
        assert record.add_path("b")
        assert not record.add_path("a")
        assert record.paths == ["a", "b"]

    def test_add_block_rejects_repeats(self):
        record = DuplicateRecord(kind=DuplicateKind.SAME_FILE_BLOCK, paths=["a"])
        assert record.add_block("fp1", "text")
        assert not record.add_block("fp1", "text")
        assert record.contents == ["text"]
        assert record.content == "text"

    def test_describe_whole_file(self):
        record = DuplicateRecord(kind=DuplicateKind.WHOLE_FILE, paths=["a", "b"])
        assert record.describe() == "The following files are duplicates of each other:\n  a\n  b"

    def test_describe_cross_file(self):
        record = DuplicateRecord(kind=DuplicateKind.CROSS_FILE_BLOCK, paths=["a", "b"])
        record.add_block("fp", "shared text")
        assert record.describe() == "The following files share a block:\n  a\n  b\n\nshared text"

    def test_describe_same_file_multiple_blocks(self):
        record = DuplicateRecord(kind=DuplicateKind.SAME_FILE_BLOCK, paths=["a"])
        record.add_block("fp1", "one")
        record.add_block("fp2", "two")
        assert record.describe() == "The file a repeats the following 2 blocks:\n\none\n\ntwo"

    def test_to_dict(self):
        record = DuplicateRecord(kind=DuplicateKind.WHOLE_FILE, paths=["a", "b"], fingerprints=["f"])
        assert record.to_dict() == {
            "kind": "whole_file",
            "paths": ["a", "b"],
            "contents": [],
            "fingerprints": ["f"],
        }
