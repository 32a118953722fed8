"""Input readers for towelie."""

from towelie.io.file_reader import FileReader

__all__ = ["FileReader"]
