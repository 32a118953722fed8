"""Uniqueness score and pass/fail gate."""

from dataclasses import dataclass
from typing import Any

from towelie.core.run_state import RunState


@dataclass
class ScoreResult:
    """Outcome of scoring a run against a failure threshold."""

    score: float
    threshold: float
    passed: bool

    def to_dict(self) -> dict[str, Any]:
        return {"score": self.score, "threshold": self.threshold, "passed": self.passed}


def uniqueness_score(duped_lines: int, total_lines: int) -> float:
    """Percentage of analyzed lines not flagged as duplicated.

    Rounded to two decimals. An empty corpus scores 100.
    """
    if total_lines <= 0:
        return 100.0
    score = 100 - (duped_lines / total_lines * 100)
    return round(min(100.0, max(0.0, score)), 2)


def evaluate(state: RunState, failure_threshold: float) -> ScoreResult:
    """Score a run; it fails when the score is below the threshold."""
    score = uniqueness_score(state.duped_lines, state.total_lines)
    return ScoreResult(score=score, threshold=failure_threshold, passed=score >= failure_threshold)
