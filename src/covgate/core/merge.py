"""Merge raw profile fragments into the single profile the reporter reads."""

from __future__ import annotations

from typing import TYPE_CHECKING

from covgate import logger
from covgate.core.config import FRAGMENT_PATTERN
from covgate.core.process import ensure_success
from covgate.errors import ArtifactError

if TYPE_CHECKING:  # pragma: no cover
    from pathlib import Path

    from covgate.core.artifacts import ArtifactStore
    from covgate.core.config import RunConfiguration
    from covgate.core.process import ProcessRunner


def merge_profiles(config: RunConfiguration, store: ArtifactStore, runner: ProcessRunner) -> Path:
    """Reset the artifact directory, merge every fragment, then delete the fragments.

    Returns the path of the merged profile. The merge itself is delegated to the
    profdata tool; nothing is combined locally.
    """
    store.reset()

    fragments = store.fragments()
    if not fragments:
        msg = f"no raw profile fragments ({FRAGMENT_PATTERN}) found in {config.project_root}"
        raise ArtifactError(msg)

    profile = config.profile_path
    logger.info("merging %d raw profile fragment(s) into %s", len(fragments), profile)
    result = runner.run(
        [
            config.tools.profdata,
            "merge",
            "-sparse",
            *(str(fragment) for fragment in fragments),
            "-o",
            str(profile),
        ],
        cwd=config.project_root,
    )
    ensure_success(f"{config.tools.profdata} failed", result)

    store.purge_fragments()
    return profile


__all__ = ["merge_profiles"]
