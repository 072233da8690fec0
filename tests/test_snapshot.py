"""
Tests for the snapshot channel — previous manifest and dev flag.
"""

import logging
import os

from lemonade_dev.core.models.manifest import Manifest
from lemonade_dev.core.persistence.snapshot import (
    DEV_FLAG_KEY,
    PREVIOUS_MANIFEST_KEY,
    SnapshotChannel,
)


class TestSnapshotChannel:
    def test_absent_is_empty(self):
        assert SnapshotChannel({}).load_previous() == Manifest.empty()

    def test_empty_string_is_empty(self):
        store = {PREVIOUS_MANIFEST_KEY: ""}
        assert SnapshotChannel(store).load_previous() == Manifest.empty()

    def test_store_then_load(self):
        store: dict[str, str] = {}
        m = Manifest(routes=("/+page.tsx",), islands=("/A.island.tsx",))
        SnapshotChannel(store).store(m)
        assert PREVIOUS_MANIFEST_KEY in store
        assert SnapshotChannel(store).load_previous() == m

    def test_corrupt_snapshot_is_empty(self, caplog):
        caplog.set_level(logging.WARNING)
        store = {PREVIOUS_MANIFEST_KEY: "not json"}
        assert SnapshotChannel(store).load_previous() == Manifest.empty()
        assert "corrupt" in caplog.text

    def test_dev_flag(self):
        store: dict[str, str] = {}
        channel = SnapshotChannel(store)
        assert channel.is_dev_mode() is False
        channel.mark_dev_mode()
        assert store[DEV_FLAG_KEY] == "1"
        assert channel.is_dev_mode() is True

    def test_defaults_to_environment(self, monkeypatch):
        monkeypatch.setenv(PREVIOUS_MANIFEST_KEY, "")
        channel = SnapshotChannel()
        channel.store(Manifest(routes=("/+page.tsx",)))
        assert os.environ[PREVIOUS_MANIFEST_KEY] == '{"routes":["/+page.tsx"],"islands":[]}'
