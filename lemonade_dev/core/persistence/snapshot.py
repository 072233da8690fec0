"""
Snapshot channel — carries the previous manifest between dev runs.

The dev loop runs once per process start.  To know whether the project
changed since the last start it keeps the manifest it saw in a
process-scoped key/value store.  By default that store is the process
environment, which survives an in-place restart of the host process but
nothing else — it is never written to disk.

Tests (and embedding hosts) pass any ``MutableMapping[str, str]`` instead.
"""

from __future__ import annotations

import logging
import os
from typing import MutableMapping

from lemonade_dev.core.models.manifest import Manifest, SnapshotError

logger = logging.getLogger(__name__)

PREVIOUS_MANIFEST_KEY = "LEMON_DEV_PREVIOUS_MANIFEST"
DEV_FLAG_KEY = "LEMON_DEV"


class SnapshotChannel:
    """Read and write the previous-manifest slot and the dev-mode flag."""

    def __init__(self, store: MutableMapping[str, str] | None = None) -> None:
        self._store = os.environ if store is None else store

    def load_previous(self) -> Manifest:
        """Return the manifest stored by the previous run.

        An absent slot means this is the first run; a corrupt one is
        treated the same way.  Both yield an empty manifest, which
        forces regeneration.
        """
        raw = self._store.get(PREVIOUS_MANIFEST_KEY)
        if not raw:
            logger.debug("No previous manifest — first run")
            return Manifest.empty()

        try:
            return Manifest.from_snapshot(raw)
        except SnapshotError as e:
            logger.warning("Ignoring corrupt manifest snapshot: %s", e)
            return Manifest.empty()

    def store(self, manifest: Manifest) -> None:
        """Save ``manifest`` as the snapshot for the next run."""
        self._store[PREVIOUS_MANIFEST_KEY] = manifest.to_snapshot()

    def mark_dev_mode(self) -> None:
        """Signal downstream code that the dev loop is active."""
        self._store[DEV_FLAG_KEY] = "1"

    def is_dev_mode(self) -> bool:
        return self._store.get(DEV_FLAG_KEY) == "1"
