"""Core data models for towelie."""

from towelie.core.document import Block, Document
from towelie.core.run_state import RunState

__all__ = ["Block", "Document", "RunState"]
