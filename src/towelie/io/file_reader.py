"""Discover and load input files as Documents."""

import fnmatch
import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from pathlib import Path

from towelie.core.document import Document
from towelie.errors import InputReadError

logger = logging.getLogger(__name__)


class FileReader:
    """Load every file matching a glob pattern below a root directory.

    Loading is all-or-nothing: one unreadable file aborts the whole read.
    """

    def __init__(
        self,
        root: str | Path = ".",
        pattern: str = "**/*.*",
        ignore: list[str] | None = None,
        workers: int = 8,
    ):
        self.root = Path(root)
        self.pattern = pattern
        self.ignore = ignore or []
        self.workers = workers

    def _is_ignored(self, relative: Path) -> bool:
        rel = relative.as_posix()
        for pat in self.ignore:
            if pat in relative.parts or fnmatch.fnmatch(rel, pat):
                return True
        return False

    def discover(self) -> list[Path]:
        """Return matching file paths relative to the root, sorted."""
        found = []
        for path in self.root.glob(self.pattern):
            if not path.is_file():
                continue
            relative = path.relative_to(self.root)
            if self._is_ignored(relative):
                continue
            found.append(relative)
        found.sort(key=lambda p: p.as_posix())
        logger.debug("Discovered %d files under %s", len(found), self.root)
        return found

    def _load(self, relative: Path, index: int) -> Document:
        try:
            content = (self.root / relative).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise InputReadError(relative.as_posix(), e.strerror or str(e)) from e
        return Document(content=content, path=relative.as_posix(), index=index)

    def read(self, paths: list[Path] | None = None) -> list[Document]:
        """Load files concurrently, keeping discovery order.

        Raises:
            InputReadError: if any file fails to load.
        """
        if paths is None:
            paths = self.discover()
        if not paths:
            return []

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = [executor.submit(self._load, p, i) for i, p in enumerate(paths)]
            done, pending = wait(futures, return_when=FIRST_EXCEPTION)
            for future in done:
                error = future.exception()
                if error is not None:
                    for other in pending:
                        other.cancel()
                    raise error

        documents = [f.result() for f in futures]
        logger.info("Loaded %d documents", len(documents))
        return documents
