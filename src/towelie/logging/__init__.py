"""Run logging for towelie."""

from towelie.logging.run_logger import RunLogger, read_events

__all__ = ["RunLogger", "read_events"]
