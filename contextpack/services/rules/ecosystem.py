"""
Ecosystem-aware lock-file detection.

The registry is built from one manifest scan of the extraction root and is
read-only afterward. The detector only excludes lock files that belong to an
ecosystem whose manifest was actually found, so a stray `package-lock.json`
in a Go project is left alone.
"""

import fnmatch
import logging
import os
import posixpath
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import ClassVar

from contextpack.services.rules.constants import (
    DEFAULT_IGNORE_DIRS,
    LOCK_FILES_BY_ECOSYSTEM,
    MANIFEST_INDICATORS,
)
from contextpack.services.rules.types import Rule, RuleAction, RuleKind

logger = logging.getLogger(__name__)

_PRUNED_DIR_NAMES = frozenset(d.rstrip("/") for d in DEFAULT_IGNORE_DIRS)


def detect_ecosystem(basename: str) -> str | None:
    """Map a manifest basename to its ecosystem, if it is one."""
    for manifest, ecosystem in MANIFEST_INDICATORS.items():
        if fnmatch.fnmatchcase(basename, manifest):
            return ecosystem
    return None


@dataclass(frozen=True)
class EcosystemRegistry:
    """Ecosystems detected under a root and the lock files each produces."""

    detected_ecosystems: frozenset[str] = frozenset()
    lock_files_by_ecosystem: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType(dict(LOCK_FILES_BY_ECOSYSTEM)),
        compare=False,
    )
    # ecosystem -> first manifest (relative path) that revealed it
    evidence: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({}), compare=False
    )

    @classmethod
    def scan(cls, root: str | Path) -> "EcosystemRegistry":
        """
        Walk the root once and record every ecosystem with a manifest.

        Dependency and VCS directories (node_modules/, .git/, ...) are not
        descended into. A walk error yields whatever was found so far.
        """
        evidence: dict[str, str] = {}
        root_path = Path(root)

        def _on_error(e: OSError) -> None:
            logger.warning(f"Ecosystem scan could not read {e.filename}: {e.strerror}")

        for dirpath, dirnames, filenames in os.walk(root_path, onerror=_on_error):
            dirnames[:] = sorted(d for d in dirnames if d not in _PRUNED_DIR_NAMES)
            for filename in sorted(filenames):
                ecosystem = detect_ecosystem(filename)
                if ecosystem and ecosystem not in evidence:
                    rel = Path(dirpath, filename).relative_to(root_path).as_posix()
                    evidence[ecosystem] = rel
                    logger.debug(f"Detected {ecosystem} ecosystem via {rel}")

        if evidence:
            logger.info(f"Active ecosystems: {', '.join(sorted(evidence))}")

        return cls(
            detected_ecosystems=frozenset(evidence),
            evidence=MappingProxyType(evidence),
        )

    def lock_globs(self) -> tuple[str, ...]:
        """Lock-file globs for every detected ecosystem, in stable order."""
        globs: list[str] = []
        for ecosystem in sorted(self.detected_ecosystems):
            globs.extend(self.lock_files_by_ecosystem.get(ecosystem, ()))
        return tuple(globs)

    def ecosystem_for_lock_file(self, basename: str) -> str | None:
        """Return the detected ecosystem owning a lock-file basename, if any."""
        for ecosystem in sorted(self.detected_ecosystems):
            for lock_glob in self.lock_files_by_ecosystem.get(ecosystem, ()):
                if fnmatch.fnmatchcase(basename, lock_glob):
                    return ecosystem
        return None


@dataclass(frozen=True)
class EcosystemLockDetector(Rule):
    """Exclude lock files belonging to ecosystems detected in the project."""

    kind: ClassVar[RuleKind] = RuleKind.ECOSYSTEM_LOCK
    confidence: ClassVar[float] = 0.95

    registry: EcosystemRegistry
    action: RuleAction = RuleAction.EXCLUDE

    def match(self, path: str) -> bool:
        basename = posixpath.basename(path.replace("\\", "/"))
        ecosystem = self.registry.ecosystem_for_lock_file(basename)
        if ecosystem:
            logger.debug(f"Excluding {ecosystem} lock file (ecosystem-aware): {path}")
            return True
        return False

    def describe(self) -> str:
        return f"ecosystem_lock({', '.join(sorted(self.registry.detected_ecosystems))})"
