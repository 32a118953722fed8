"""Report module for scan output."""

from towelie.report.scan_report import (
    build_report,
    generate_markdown_report,
    render_record,
    render_records,
    render_summary,
    render_verdict,
    save_json_report,
    save_markdown_report,
)

__all__ = [
    "build_report",
    "generate_markdown_report",
    "render_record",
    "render_records",
    "render_summary",
    "render_verdict",
    "save_json_report",
    "save_markdown_report",
]
