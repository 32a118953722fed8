"""Scan report rendering: terminal output, JSON and markdown."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

import click

from towelie.core.run_state import RunState
from towelie.operators.dedup.classifier import ClassificationResult
from towelie.operators.dedup.records import DuplicateKind, DuplicateRecord
from towelie.scoring import ScoreResult

SUMMARY_COLUMNS = [
    ("Files Analyzed", "total_files"),
    ("Lines Analyzed", "total_lines"),
    ("Duplicate Files", "num_file_dupes"),
    ("Duplicate Blocks", "num_block_dupes"),
    ("Duplicate Blocks Within Files", "num_block_dupes_in_same_file"),
]

_KIND_COLORS = {
    DuplicateKind.WHOLE_FILE: "red",
    DuplicateKind.CROSS_FILE_BLOCK: "yellow",
    DuplicateKind.SAME_FILE_BLOCK: "cyan",
}


def render_record(record: DuplicateRecord, color: bool = True) -> str:
    """Render one finding, colorized by kind."""
    text = record.describe()
    if not color:
        return text
    header, _, rest = text.partition("\n")
    styled = click.style(header, fg=_KIND_COLORS[record.kind], bold=True)
    return f"{styled}\n{rest}" if rest else styled


def render_records(records: list[DuplicateRecord], color: bool = True) -> str:
    """Render findings separated by blank lines."""
    return "\n\n".join(render_record(r, color=color) for r in records)


def render_summary(state: RunState) -> str:
    """Render run counters as a plain-text table."""
    headers = [name for name, _ in SUMMARY_COLUMNS]
    values = [str(getattr(state, attr)) for _, attr in SUMMARY_COLUMNS]
    widths = [max(len(h), len(v)) for h, v in zip(headers, values)]

    def row(cells: list[str]) -> str:
        return "  ".join(c.ljust(w) for c, w in zip(cells, widths)).rstrip()

    return "\n".join([row(headers), row(["-" * w for w in widths]), row(values)])


def render_verdict(result: ScoreResult, color: bool = True) -> str:
    """Render the pass/fail line."""
    verb = "passed" if result.passed else "failed"
    text = (
        f"You {verb} your threshold of {result.threshold:g}% "
        f"with a score of {result.score:.2f}%"
    )
    if not color:
        return text
    return click.style(text, bg="green" if result.passed else "red")


def build_report(classification: ClassificationResult, score: ScoreResult) -> dict[str, Any]:
    """Assemble a serializable report."""
    return {
        "summary": classification.state.to_dict(),
        "score": score.to_dict(),
        "records_by_kind": {
            kind.value: len(classification.by_kind(kind)) for kind in DuplicateKind
        },
        "records": [r.to_dict() for r in classification.ordered_records()],
    }


def save_json_report(
    classification: ClassificationResult, score: ScoreResult, path: str | Path
) -> Path:
    """Save report to JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(build_report(classification, score), indent=2))
    return path


def save_markdown_report(
    classification: ClassificationResult, score: ScoreResult, path: str | Path
) -> Path:
    """Save markdown report."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(generate_markdown_report(classification, score))
    return path


def generate_markdown_report(classification: ClassificationResult, score: ScoreResult) -> str:
    """Generate a markdown scan report.

    Args:
        classification: Findings and counters of the run
        score: Scored outcome

    Returns:
        Markdown report string
    """
    lines = []

    lines.append("# Duplication Report")
    lines.append("")
    lines.append(f"Generated: {datetime.now().isoformat()}")
    lines.append("")

    lines.append("## Summary")
    lines.append("")
    lines.append("| Metric | Value |")
    lines.append("|--------|-------|")
    for name, attr in SUMMARY_COLUMNS:
        lines.append(f"| {name} | {getattr(classification.state, attr)} |")
    lines.append(f"| Uniqueness Score | {score.score:.2f}% |")
    lines.append(f"| Threshold | {score.threshold:g}% |")
    lines.append(f"| Result | {'PASS' if score.passed else 'FAIL'} |")
    lines.append("")

    records = classification.ordered_records()
    lines.append("## Findings")
    lines.append("")
    if not records:
        lines.append("No duplicates found.")
        lines.append("")
    for record in records:
        header, _, _ = record.describe().partition("\n")
        lines.append(f"### {header.rstrip(':')}")
        lines.append("")
        for p in record.paths:
            lines.append(f"- `{p}`")
        lines.append("")
        for content in record.contents:
            lines.append("```")
            lines.append(content)
            lines.append("```")
            lines.append("")

    return "\n".join(lines)
