"""Exceptions raised by towelie."""


class TowelieError(Exception):
    """Base class for towelie errors."""


class ConfigurationError(TowelieError, ValueError):
    """Configuration values or files are malformed."""


class InputReadError(TowelieError, OSError):
    """An input file could not be loaded; the run is aborted."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to read {path}: {reason}")
        self.path = path
        self.reason = reason
