"""towelie: whole-file and paragraph-level duplication checks for text files."""

__version__ = "0.3.0"
