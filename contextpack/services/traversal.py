"""
Deterministic directory traversal.

Walks a root with os.walk, sorting directory and file names so the
candidate order is stable across platforms and runs. Symlinks are never
followed. Directories can be pruned up front through a callback (the
FilterPipeline's directory check), which keeps large ignored trees like
node_modules/ out of the walk entirely.
"""

import logging
import os
import posixpath
import stat
from collections.abc import Callable, Iterator
from pathlib import Path

from contextpack.services.types import Candidate, ClassificationWarning

logger = logging.getLogger(__name__)


class DirectoryWalker:
    """Yield Candidates under a root in sorted traversal order."""

    def __init__(
        self,
        root: str | Path,
        should_prune: Callable[[str], bool] | None = None,
    ) -> None:
        self.root = Path(root)
        self.should_prune = should_prune
        self.warnings: list[ClassificationWarning] = []
        self.pruned_dirs = 0

    def _on_error(self, error: OSError) -> None:
        rel = self._relative(error.filename) if error.filename else "."
        logger.warning(f"Cannot list directory {rel}: {error.strerror or error}")
        self.warnings.append(ClassificationWarning(rel, "list", str(error)))

    def _relative(self, path: str | os.PathLike) -> str:
        rel = os.path.relpath(path, self.root)
        return rel.replace(os.sep, "/")

    def walk(self) -> Iterator[Candidate]:
        for dirpath, dirnames, filenames in os.walk(self.root, onerror=self._on_error):
            rel_dir = self._relative(dirpath)
            if rel_dir == ".":
                rel_dir = ""

            kept: list[str] = []
            for name in sorted(dirnames):
                full = os.path.join(dirpath, name)
                if os.path.islink(full):
                    continue
                rel = posixpath.join(rel_dir, name) if rel_dir else name
                if self.should_prune is not None and self.should_prune(rel):
                    self.pruned_dirs += 1
                    logger.debug(f"Pruned directory {rel}/")
                    continue
                kept.append(name)
            # os.walk descends into whatever is left in dirnames, in order
            dirnames[:] = kept

            for name in sorted(filenames):
                full = os.path.join(dirpath, name)
                rel = posixpath.join(rel_dir, name) if rel_dir else name
                try:
                    st = os.lstat(full)
                except OSError as e:
                    logger.warning(f"Cannot stat {rel}: {e}")
                    self.warnings.append(ClassificationWarning(rel, "stat", str(e)))
                    continue
                # Symlinks, sockets, fifos
                if not stat.S_ISREG(st.st_mode):
                    continue

                yield Candidate(
                    path=Path(full),
                    relative_path=rel,
                    size_bytes=st.st_size,
                    extension=posixpath.splitext(name)[1],
                )
