"""Scan execution: load, classify, score."""

import logging
from dataclasses import dataclass
from pathlib import Path

from towelie.config import ScanConfig
from towelie.core.document import Document
from towelie.io.file_reader import FileReader
from towelie.logging.run_logger import RunLogger
from towelie.operators.dedup.classifier import ClassificationResult, DuplicateClassifier
from towelie.scoring import ScoreResult, evaluate

logger = logging.getLogger(__name__)


@dataclass
class ScanOutcome:
    """Everything a caller needs to report on a scan."""

    documents: list[Document]
    classification: ClassificationResult
    score: ScoreResult

    @property
    def passed(self) -> bool:
        return self.score.passed


def classify_documents(documents: list[Document], config: ScanConfig) -> tuple[ClassificationResult, ScoreResult]:
    """Classify an already loaded document set and score it."""
    classifier = DuplicateClassifier(min_lines=config.min_lines, min_chars=config.min_chars)
    classification = classifier.classify(documents)
    return classification, evaluate(classification.state, config.failure_threshold)


def run_scan(
    config: ScanConfig,
    root: str | Path = ".",
    run_logger: RunLogger | None = None,
) -> ScanOutcome:
    """Execute a scan over files below ``root``.

    Args:
        config: Scan configuration
        root: Directory the glob pattern is resolved against
        run_logger: Optional structured event log

    Returns:
        ScanOutcome with the loaded documents, findings and score

    Raises:
        InputReadError: if any matched file cannot be read
    """
    if run_logger:
        run_logger.log_config(config.to_dict())

    reader = FileReader(root=root, pattern=config.pattern, ignore=config.ignore, workers=config.workers)
    documents = reader.read()

    classification, score = classify_documents(documents, config)
    state = classification.state

    if run_logger:
        run_logger.log_documents(state.total_files, state.total_lines)
        run_logger.log_classification(state.to_dict(), len(classification.records))
        run_logger.log_score(score.score, score.threshold, score.passed)

    logger.info("Uniqueness score %.2f%% (threshold %g%%)", score.score, score.threshold)
    return ScanOutcome(documents=documents, classification=classification, score=score)
