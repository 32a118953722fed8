"""Duplicate classification for towelie."""

from towelie.operators.dedup.classifier import ClassificationResult, DuplicateClassifier
from towelie.operators.dedup.records import DuplicateKind, DuplicateRecord

__all__ = [
    "ClassificationResult", "DuplicateClassifier",
    "DuplicateKind", "DuplicateRecord",
]
