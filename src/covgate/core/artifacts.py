"""On-disk lifecycle of raw profile fragments and the merged profile."""

from __future__ import annotations

import shutil
from typing import TYPE_CHECKING

from covgate import logger
from covgate.core.config import FRAGMENT_PREFIX, FRAGMENT_SUFFIX
from covgate.errors import ArtifactError

if TYPE_CHECKING:  # pragma: no cover
    from pathlib import Path

    from covgate.core.config import RunConfiguration


def is_fragment_name(name: str) -> bool:
    """Return ``True`` if *name* follows the ``default*.profraw`` convention."""
    return name.startswith(FRAGMENT_PREFIX) and name.endswith(FRAGMENT_SUFFIX)


class ArtifactStore:
    """Owns the artifact directory and the raw fragments in the project root.

    Fragments are only looked for in the immediate listing of the project root;
    sub-directories are never searched.
    """

    def __init__(self, project_root: Path, artifact_dir: Path) -> None:
        self.project_root = project_root
        self.artifact_dir = artifact_dir

    @classmethod
    def from_config(cls, config: RunConfiguration) -> ArtifactStore:
        return cls(config.project_root, config.artifact_dir)

    def reset(self) -> None:
        """Leave the artifact directory existing and empty."""
        try:
            if self.artifact_dir.exists():
                shutil.rmtree(self.artifact_dir)
            self.artifact_dir.mkdir(parents=True)
        except OSError as exc:
            msg = f"failed to clean artifact directory {self.artifact_dir}: {exc}"
            raise ArtifactError(msg) from exc
        logger.debug("reset artifact directory %s", self.artifact_dir)

    def fragments(self) -> list[Path]:
        """Return the raw fragments currently present, sorted by name."""
        try:
            entries = list(self.project_root.iterdir())
        except OSError as exc:
            msg = f"unable to list files in {self.project_root}: {exc}"
            raise ArtifactError(msg) from exc

        found = [
            entry
            for entry in entries
            if is_fragment_name(entry.name) and entry.is_file() and not entry.is_symlink()
        ]
        return sorted(found)

    def purge_fragments(self) -> int:
        """Delete every raw fragment in the project root and return how many were removed.

        Only call this once the fragments have been merged: deletion is irreversible.
        """
        removed = 0
        for fragment in self.fragments():
            try:
                fragment.unlink()
            except OSError as exc:
                msg = f"failed to delete raw profile {fragment}: {exc}"
                raise ArtifactError(msg) from exc
            removed += 1
        logger.debug("removed %d raw profile fragment(s)", removed)
        return removed


__all__ = ["ArtifactStore", "is_fragment_name"]
