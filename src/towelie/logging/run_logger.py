"""Structured run logging for towelie scans."""

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


class RunLogger:
    """JSONL-based structured logger for scan runs."""

    def __init__(self, log_dir: Path | str, run_id: str | None = None):
        self.run_id = run_id or datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S_") + uuid.uuid4().hex[:8]
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self._log_file = self.log_dir / f"towelie_{self.run_id}.jsonl"

    @property
    def path(self) -> Path:
        return self._log_file

    def log(self, event_type: str, data: dict[str, Any] | None = None) -> None:
        """Log a structured event."""
        record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "run_id": self.run_id,
            "event": event_type,
            **(data or {}),
        }
        with open(self._log_file, "a") as f:
            f.write(json.dumps(record) + "\n")

    def log_config(self, config: dict[str, Any]) -> None:
        """Log run configuration."""
        self.log("config", {"config": config})

    def log_documents(self, count: int, total_lines: int) -> None:
        self.log("documents_loaded", {"count": count, "total_lines": total_lines})

    def log_classification(self, counters: dict[str, Any], num_records: int) -> None:
        """Log classifier counters and number of findings."""
        self.log("classification", {"counters": counters, "records": num_records})

    def log_score(self, score: float, threshold: float, passed: bool) -> None:
        self.log("score", {"score": score, "threshold": threshold, "passed": passed})


def read_events(path: Path | str) -> list[dict[str, Any]]:
    """Read back the events of a run log."""
    lines = Path(path).read_text().splitlines()
    return [json.loads(line) for line in lines if line.strip()]
